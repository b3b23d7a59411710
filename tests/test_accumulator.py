"""
Tests for accumulator state: value updates, witnesses, duplicates and locking.
"""

import threading

import pytest

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from ec_accumulator.accumulator import Accumulator
from ec_accumulator.curve import Generators, get_curve
from ec_accumulator.errors import ConfigurationError, DuplicateMember, MemberNotFound


@pytest.fixture(scope="module")
def acc():
    """Accumulator holding "hello world" and "foo"."""
    a = Accumulator(curve_type="bn254")
    a.add_member(b"hello world")
    a.add_member(b"foo")
    return a


def product(values, r):
    p = 1
    for v in values:
        p = (p * v) % r
    return p


def test_new_accumulator_starts_at_g1():
    a = Accumulator(curve_type="bn254")
    assert a.curve.eq(a.current_value(), a.g1)
    assert len(a) == 0
    assert a.members == ()


def test_add_member_returns_hashed_scalar():
    a = Accumulator(curve_type="bn254")
    x = a.add_member(b"hello world")
    assert x == a.hash_to_scalar(b"hello world")
    assert a.members == (x,)
    assert x in a


def test_value_is_g1_to_product(acc):
    curve = acc.curve
    x1 = acc.hash_to_scalar(b"hello world")
    x2 = acc.hash_to_scalar(b"foo")
    expected = curve.multiply(acc.g1, x1 * x2 % curve.curve_order)
    assert curve.eq(acc.current_value(), expected)


def test_witness_is_g1_to_other_members(acc):
    curve = acc.curve
    x1 = acc.hash_to_scalar(b"hello world")
    x2 = acc.hash_to_scalar(b"foo")
    assert curve.eq(acc.membership_witness(x1), curve.multiply(acc.g1, x2))
    assert curve.eq(acc.membership_witness(x2), curve.multiply(acc.g1, x1))


def test_witness_raised_to_member_gives_value():
    a = Accumulator(curve_type="bn254")
    scalars = [a.add_member(f"member{i}".encode()) for i in range(6)]
    for x in scalars:
        assert a.curve.eq(a.curve.multiply(a.membership_witness(x), x), a.current_value())


def test_value_independent_of_insertion_order():
    members = [b"alice", b"bob", b"charlie", b"dave"]
    a = Accumulator(curve_type="bn254")
    b = Accumulator(curve_type="bn254")
    for m in members:
        a.add_member(m)
    for m in reversed(members):
        b.add_member(m)

    assert a.curve.eq(a.current_value(), b.current_value())
    assert a.members == tuple(reversed(b.members))


def test_witness_for_non_member_fails(acc):
    fake = acc.hash_to_scalar(b"mallory")
    with pytest.raises(MemberNotFound):
        acc.membership_witness(fake)


def test_witness_on_empty_accumulator_fails():
    a = Accumulator(curve_type="bn254")
    with pytest.raises(MemberNotFound) as excinfo:
        a.membership_witness(12345)
    assert excinfo.value.scalar == 12345
    # MemberNotFound is also a KeyError
    assert isinstance(excinfo.value, KeyError)


def test_duplicate_excludes_one_occurrence():
    a = Accumulator(curve_type="bn254", allow_duplicates=True)
    curve = a.curve
    x = a.add_member(b"alice")
    y = a.add_member(b"bob")
    assert a.add_member(b"alice") == x

    assert a.members == (x, y, x)
    r = curve.curve_order
    assert curve.eq(a.current_value(), curve.multiply(a.g1, product([x, y, x], r)))
    assert curve.eq(a.membership_witness(x), curve.multiply(a.g1, x * y % r))
    assert curve.eq(curve.multiply(a.membership_witness(x), x), a.current_value())


def test_duplicate_rejected_when_disallowed():
    a = Accumulator(curve_type="bn254", allow_duplicates=False)
    x = a.add_member(b"alice")
    before = a.snapshot()

    with pytest.raises(DuplicateMember):
        a.add_member(b"alice")
    with pytest.raises(DuplicateMember):
        a.add_scalar(x)

    value, members = a.snapshot()
    assert members == before[1] == (x,)
    assert a.curve.eq(value, before[0])


@pytest.mark.parametrize("bad", [0, -1, True, "1", 1.0])
def test_add_scalar_rejects_invalid(bad):
    a = Accumulator(curve_type="bn254")
    with pytest.raises(ValueError):
        a.add_scalar(bad)
    assert len(a) == 0


def test_add_scalar_rejects_field_order():
    a = Accumulator(curve_type="bn254")
    with pytest.raises(ValueError):
        a.add_scalar(a.curve.curve_order)


def test_add_scalar():
    a = Accumulator(curve_type="bn254")
    assert a.add_scalar(7) == 7
    assert a.curve.eq(a.current_value(), a.curve.multiply(a.g1, 7))


def test_custom_generators():
    curve = get_curve("bn254")
    g1 = curve.multiply(curve.G1, 5)
    b = Accumulator(curve_type="bn254", generators=Generators(g1, curve.G2))
    x = b.add_member(b"alice")
    assert curve.eq(b.current_value(), curve.multiply(curve.G1, 5 * x % curve.curve_order))


def test_identity_generator_rejected():
    curve = get_curve("bn254")
    with pytest.raises(ConfigurationError):
        Accumulator(curve_type="bn254", generators=Generators(curve.Z1, curve.G2))


def test_off_curve_generator_rejected():
    curve = get_curve("bn254")
    FQ = curve.FQ
    with pytest.raises(ConfigurationError):
        Accumulator(curve_type="bn254", generators=Generators((FQ(1), FQ(3), FQ(1)), curve.G2))


def test_unknown_curve_rejected():
    with pytest.raises(ConfigurationError):
        Accumulator(curve_type="secp256k1")


def test_concurrent_adds_are_serialized():
    a = Accumulator(curve_type="bn254")
    curve = a.curve
    members = [f"member-{i}".encode() for i in range(16)]

    threads = [threading.Thread(target=a.add_member, args=(m,)) for m in members]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    value, scalars = a.snapshot()
    assert sorted(scalars) == sorted(a.hash_to_scalar(m) for m in members)
    assert curve.eq(value, curve.multiply(a.g1, product(scalars, curve.curve_order)))

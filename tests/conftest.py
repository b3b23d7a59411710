"""
Shared fixtures: curve points that satisfy the curve equation but lie
outside the prime-order subgroup.
"""

import pytest

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from ec_accumulator.curve import get_curve


def fq2_sqrt(curve, a):
    """
    Square root in FQ2 for p = 3 mod 4 (Adj, Rodriguez-Henriquez, Alg. 9).

    Returns None when a is not a square.
    """
    p = curve.field_modulus
    FQ2 = curve.FQ2
    a1 = a ** ((p - 3) // 4)
    alpha = a1 * a1 * a
    x0 = a1 * a
    if alpha == FQ2([-1, 0]):
        root = FQ2([0, 1]) * x0
    else:
        root = (FQ2.one() + alpha) ** ((p - 1) // 2) * x0
    return root if root * root == a else None


@pytest.fixture(scope="session")
def bn254_g2_outside_subgroup():
    """Point on the bn254 twist with x = x0 + i, not of order r."""
    curve = get_curve("bn254")
    FQ2 = curve.FQ2
    for x0 in range(1, 256):
        x = FQ2([x0, 1])
        y = fq2_sqrt(curve, x ** 3 + curve.b2)
        if y is None:
            continue
        point = (x, y, FQ2.one())
        if not curve.is_inf(curve.multiply(point, curve.curve_order)):
            return point
    raise AssertionError("no twist point found")


@pytest.fixture(scope="session")
def bls12_381_g1_outside_subgroup():
    """Point on the bls12_381 curve with small x, not of order r."""
    curve = get_curve("bls12_381")
    FQ = curve.FQ
    p = curve.field_modulus
    for x in range(1, 256):
        rhs = FQ(x) ** 3 + curve.b
        y = rhs ** ((p + 1) // 4)
        if y * y != rhs:
            continue
        point = (FQ(x), y, FQ.one())
        if not curve.is_inf(curve.multiply(point, curve.curve_order)):
            return point
    raise AssertionError("no curve point found")

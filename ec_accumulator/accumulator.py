"""
Pairing-based accumulator over a pairing-friendly curve.

The accumulator value summarises a set of scalars x_1..x_n as a single G1
element

    A = g1^(x_1 * x_2 * ... * x_n)

and the witness for a member x_i is g1 raised to the product of every other
member. Membership is checked with the pairing equation

    e(W^x_i, g2) = e(A, g2)

which holds exactly when W^x_i == A.
"""

import logging
import threading

from ec_accumulator.config import config
from ec_accumulator.curve import get_curve
from ec_accumulator.errors import DuplicateMember, MemberNotFound
from ec_accumulator.hashing import ScalarHasher
from ec_accumulator.verifier import Verifier

logger = logging.getLogger(__name__)


class Accumulator:
    """
    Accumulator holding the running value A and the ordered member scalars.

    The accumulator starts at g1, which is g1 raised to the empty product.
    Every add exponentiates the current value by the new scalar, so A only
    grows and is independent of insertion order. One lock guards A and the
    member list for the whole of every operation, so readers always see a
    consistent pair.
    """

    def __init__(self, curve_type=None, generators=None, hasher=None, allow_duplicates=None):
        """
        Initialize an empty accumulator.

        Args:
            curve_type: Type of curve to use ('bn254' or 'bls12_381'), defaults to configuration
            generators: Generators(g1, g2) from a trusted setup, defaults to the curve generators
            hasher: ScalarHasher used by add_member, defaults to one built from configuration
            allow_duplicates: Accept a scalar that is already a member (defaults to configuration)

        Raises:
            ConfigurationError: for an unknown curve or an invalid generator
        """
        self.curve = get_curve(curve_type or config.curve)
        if generators is None:
            generators = self.curve.default_generators()
        self.generators = self.curve.check_generators(generators)
        self.hasher = hasher or ScalarHasher(self.curve.curve_order)
        self.allow_duplicates = config.allow_duplicates if allow_duplicates is None else allow_duplicates

        self._verifier = Verifier(curve_type=self.curve.name, generators=self.generators)
        self._lock = threading.Lock()
        self._value = self.generators.g1
        self._members = []

    @property
    def g1(self):
        return self.generators.g1

    @property
    def g2(self):
        return self.generators.g2

    @property
    def members(self):
        with self._lock:
            return tuple(self._members)

    def __len__(self):
        with self._lock:
            return len(self._members)

    def __contains__(self, x):
        with self._lock:
            return x in self._members

    def __repr__(self):
        return f"Accumulator(curve={self.curve.name!r}, members={len(self)})"

    def hash_to_scalar(self, data):
        return self.hasher.hash_to_scalar(data)

    def add_member(self, data):
        """
        Hash a member into the scalar field and fold it into the accumulator.

        Args:
            data: The member as bytes

        Returns:
            int: The member scalar x, the caller's token for requesting a witness
        """
        return self.add_scalar(self.hasher.hash_to_scalar(data))

    def add_scalar(self, x):
        """
        Fold an already hashed scalar into the accumulator: A <- A^x.

        Args:
            x: Scalar in [1, r-1]

        Returns:
            int: x

        Raises:
            ValueError: if x is not a nonzero scalar
            DuplicateMember: if x is already a member and duplicates are disabled
        """
        if not self.curve.is_valid_scalar(x):
            raise ValueError(f"member scalar must be an int in [1, r-1], got {x!r}")

        with self._lock:
            if not self.allow_duplicates and x in self._members:
                raise DuplicateMember(x)
            self._value = self.curve.exp(self._value, x)
            self._members.append(x)
            count = len(self._members)

        logger.debug("added member %s... (%d members)", hex(x)[:12], count)
        return x

    def membership_witness(self, x):
        """
        Compute the witness W = g1^(prod of all members except x).

        When x was added more than once only its first occurrence is left
        out, so W^x still equals A.

        Args:
            x: Member scalar returned by add_member

        Returns:
            G1 point: The witness

        Raises:
            MemberNotFound: if x is not a member (always, for an empty accumulator)
        """
        r = self.curve.curve_order
        with self._lock:
            product = 1
            found = False
            for xi in self._members:
                if not found and xi == x:
                    found = True
                    continue
                product = (product * xi) % r

        if not found:
            raise MemberNotFound(x)

        logger.debug("computed witness for %s...", hex(x)[:12])
        return self.curve.exp(self.generators.g1, product)

    def current_value(self):
        """Return the accumulator value A."""
        with self._lock:
            return self._value

    def snapshot(self):
        """
        Return (A, members) read under a single lock acquisition.
        """
        with self._lock:
            return self._value, tuple(self._members)

    def verify_membership(self, x, witness):
        """
        Verify a witness against the current accumulator value.

        Args:
            x: Member scalar
            witness: G1 witness from membership_witness

        Returns:
            bool: True if the pairing check passes
        """
        return self._verifier.verify_membership(x, witness, self.current_value())

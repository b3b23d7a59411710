from collections import namedtuple

from ec_accumulator.errors import ConfigurationError


Generators = namedtuple("Generators", ["g1", "g2"])
Generators.__doc__ = """Trusted generator pair (g1 in G1, g2 in G2)."""


class Curve:
    """
    Pairing-friendly curve backend built on py_ecc's optimized modules.

    Points are py_ecc Jacobian triples (x, y, z) over FQ for G1 and over FQ2
    for G2. Scalars are plain Python ints reduced modulo curve_order.
    """

    def __init__(self, curve_type="bn254"):
        """
        Load the group operations of a pairing-friendly curve.

        Args:
            curve_type: Type of curve to use ('bn254' or 'bls12_381')
        """
        if curve_type == "bn254":
            from py_ecc.optimized_bn128 import (
                G1, G2, Z1, Z2, FQ, FQ2, FQ12, b, b2,
                add, multiply, neg, eq, normalize, is_inf, is_on_curve,
                pairing, final_exponentiate, curve_order, field_modulus,
            )
            # G1 of bn254 has cofactor 1: every curve point is in the subgroup
            self.g1_cofactor_one = True
        elif curve_type == "bls12_381":
            from py_ecc.optimized_bls12_381 import (
                G1, G2, Z1, Z2, FQ, FQ2, FQ12, b, b2,
                add, multiply, neg, eq, normalize, is_inf, is_on_curve,
                pairing, final_exponentiate, curve_order, field_modulus,
            )
            self.g1_cofactor_one = False
        else:
            raise ConfigurationError(f"Unsupported curve type: {curve_type}")

        self.name = curve_type

        # Store curve operations
        self.G1 = G1
        self.G2 = G2
        self.Z1 = Z1  # Point at infinity in G1
        self.Z2 = Z2  # Point at infinity in G2
        self.FQ = FQ
        self.FQ2 = FQ2
        self.FQ12 = FQ12
        self.b = b
        self.b2 = b2
        self.add = add
        self.multiply = multiply
        self.neg = neg
        self.eq = eq
        self.normalize = normalize
        self.is_inf = is_inf
        self.is_on_curve = is_on_curve
        self.pairing = pairing
        self.final_exponentiate = final_exponentiate
        self.curve_order = curve_order
        self.field_modulus = field_modulus

        # Big-endian widths used by the wire encoding
        self.coordinate_size = (field_modulus.bit_length() + 7) // 8
        self.scalar_size = (curve_order.bit_length() + 7) // 8

    def __repr__(self):
        return f"Curve({self.name!r})"

    def default_generators(self):
        return Generators(self.G1, self.G2)

    def exp(self, point, scalar):
        """Group exponentiation point^scalar (scalar multiplication in additive notation)."""
        return self.multiply(point, int(scalar) % self.curve_order)

    def is_valid_scalar(self, x):
        return isinstance(x, int) and not isinstance(x, bool) and 0 < x < self.curve_order

    def is_valid_g1(self, point):
        """
        Check that a G1 point lies on the curve and in the order-r subgroup.

        Args:
            point: Jacobian G1 point

        Returns:
            bool: True for a point of G1 (the point at infinity included)
        """
        if not self._is_triple(point, self.FQ):
            return False
        if self.is_inf(point):
            return True
        if not self.is_on_curve(point, self.b):
            return False
        if self.g1_cofactor_one:
            return True
        return self.is_inf(self.multiply(point, self.curve_order))

    def is_valid_g2(self, point):
        """
        Check that a G2 point lies on the twist and in the order-r subgroup.

        The twist has a large cofactor on both curves, so the subgroup check
        (point^r == infinity) is always performed.
        """
        if not self._is_triple(point, self.FQ2):
            return False
        if self.is_inf(point):
            return True
        if not self.is_on_curve(point, self.b2):
            return False
        return self.is_inf(self.multiply(point, self.curve_order))

    def check_generators(self, generators):
        """
        Reject generators that are the identity or outside their group.

        Raises:
            ConfigurationError: if either generator is unusable
        """
        g1, g2 = generators
        if not self.is_valid_g1(g1) or self.is_inf(g1):
            raise ConfigurationError(f"g1 is not a generator of G1 on {self.name}")
        if not self.is_valid_g2(g2) or self.is_inf(g2):
            raise ConfigurationError(f"g2 is not a generator of G2 on {self.name}")
        return Generators(g1, g2)

    @staticmethod
    def _is_triple(point, field):
        return (
            isinstance(point, tuple)
            and len(point) == 3
            and all(isinstance(c, field) for c in point)
        )


_curves = {}


def get_curve(curve_type="bn254"):
    """Return the shared backend for a curve type, loading it on first use."""
    curve = _curves.get(curve_type)
    if curve is None:
        curve = _curves[curve_type] = Curve(curve_type)
    return curve

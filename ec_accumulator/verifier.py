import logging

from ec_accumulator import encoding
from ec_accumulator.config import config
from ec_accumulator.curve import get_curve
from ec_accumulator.errors import InvalidPoint

logger = logging.getLogger(__name__)


class Verifier:
    """
    Pairing verifier for accumulator membership witnesses.

    The verifier needs only the public generator g2, the accumulator value A,
    the member scalar x and the witness W. It accepts iff

        e(W^x, g2) * e(-A, g2) = 1

    which is the same product check an EVM contract performs with the
    ecPairing precompile. Verification is a total function: malformed,
    off-curve or out-of-subgroup inputs make it return False, never raise.
    """

    def __init__(self, curve_type=None, generators=None):
        """
        Initialize the verifier.

        Args:
            curve_type: Type of curve to use ('bn254' or 'bls12_381'), defaults to configuration
            generators: Generators(g1, g2), defaults to the curve generators
        """
        self.curve = get_curve(curve_type or config.curve)
        if generators is None:
            generators = self.curve.default_generators()
        self.generators = self.curve.check_generators(generators)

    def verify_membership(self, x, witness, accumulator_value, g2=None):
        """
        Verify that the witness proves membership of x in the accumulator.

        Args:
            x: Member scalar
            witness: G1 witness point
            accumulator_value: G1 accumulator value A
            g2: G2 generator (defaults to the verifier's own)

        Returns:
            bool: True if the pairing check passes, False otherwise
        """
        curve = self.curve
        if g2 is None:
            g2 = self.generators.g2

        # Subgroup membership must be established before pairing
        if not curve.is_valid_scalar(x):
            logger.warning("rejecting verification: scalar out of range")
            return False
        if not curve.is_valid_g1(witness):
            logger.warning("rejecting verification: witness is not a G1 element")
            return False
        if not curve.is_valid_g1(accumulator_value):
            logger.warning("rejecting verification: accumulator value is not a G1 element")
            return False
        if not curve.is_valid_g2(g2) or curve.is_inf(g2):
            logger.warning("rejecting verification: g2 is not a G2 generator")
            return False

        # e(W^x, g2) * e(-A, g2) with a single final exponentiation
        w_x = curve.multiply(witness, x)
        lhs = curve.pairing(g2, w_x, final_exponentiate=False)
        rhs = curve.pairing(g2, curve.neg(accumulator_value), final_exponentiate=False)
        result = curve.final_exponentiate(lhs * rhs)

        return result == curve.FQ12.one()

    def verify_encoded(self, x_bytes, witness_bytes, accumulator_bytes, g2_bytes=None):
        """
        Verify a membership witness given in the wire encoding.

        Args:
            x_bytes: Big-endian scalar
            witness_bytes: Encoded G1 witness
            accumulator_bytes: Encoded G1 accumulator value
            g2_bytes: Encoded G2 generator (defaults to the verifier's own)

        Returns:
            bool: True if every input decodes and the pairing check passes
        """
        curve = self.curve
        try:
            x = encoding.decode_scalar(x_bytes, curve)
            witness = encoding.decode_g1(witness_bytes, curve)
            accumulator_value = encoding.decode_g1(accumulator_bytes, curve)
            g2 = None if g2_bytes is None else encoding.decode_g2(g2_bytes, curve)
        except (InvalidPoint, TypeError) as e:
            logger.warning("rejecting verification: %s", e)
            return False

        return self.verify_membership(x, witness, accumulator_value, g2)

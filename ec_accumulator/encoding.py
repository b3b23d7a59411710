"""
Fixed-width big-endian encoding of scalars and group elements.

For bn254 the layout is the one used by the EVM precompiles (EIP-196/197):

    G1      x || y                          64 bytes
    G2      x.c1 || x.c0 || y.c1 || y.c0    128 bytes
    scalar  x mod r                         32 bytes

Coordinates are affine; the point at infinity is all zeros. The same layout
is used for bls12_381 with 48-byte coordinates.
"""

from ec_accumulator.curve import get_curve
from ec_accumulator.errors import InvalidPoint


def _int_to_bytes(value, size):
    return int(value).to_bytes(size, byteorder="big")


def _check_length(data, expected, what):
    if not isinstance(data, (bytes, bytearray, memoryview)):
        raise TypeError(f"expected bytes for {what}, got {type(data).__name__}")
    if len(data) != expected:
        raise InvalidPoint(f"{what} must be {expected} bytes, got {len(data)}")
    return bytes(data)


def _split(data, size):
    return [int.from_bytes(data[i:i + size], byteorder="big") for i in range(0, len(data), size)]


def encode_scalar(x, curve=None):
    curve = curve or get_curve()
    return _int_to_bytes(int(x) % curve.curve_order, curve.scalar_size)


def decode_scalar(data, curve=None):
    """
    Decode a big-endian scalar.

    Raises:
        InvalidPoint: on a wrong length or a non-canonical value (>= r)
    """
    curve = curve or get_curve()
    data = _check_length(data, curve.scalar_size, "scalar")
    x = int.from_bytes(data, byteorder="big")
    if x >= curve.curve_order:
        raise InvalidPoint("scalar is not reduced modulo the curve order")
    return x


def encode_g1(point, curve=None):
    """
    Encode a G1 point as affine (x, y).

    Args:
        point: Jacobian G1 point
        curve: Curve backend (defaults to bn254)

    Returns:
        bytes: 2 * coordinate_size bytes, all zeros for the point at infinity
    """
    curve = curve or get_curve()
    size = curve.coordinate_size
    if curve.is_inf(point):
        return bytes(2 * size)
    x, y = curve.normalize(point)
    return _int_to_bytes(x, size) + _int_to_bytes(y, size)


def decode_g1(data, curve=None):
    """
    Decode and validate a G1 point.

    Args:
        data: Encoded point
        curve: Curve backend (defaults to bn254)

    Returns:
        Jacobian G1 point

    Raises:
        InvalidPoint: on a wrong length, coordinates outside the base field,
            or a point that is not on the curve or not in the subgroup
    """
    curve = curve or get_curve()
    size = curve.coordinate_size
    data = _check_length(data, 2 * size, "G1 point")
    if not any(data):
        return curve.Z1

    x, y = _split(data, size)
    if x >= curve.field_modulus or y >= curve.field_modulus:
        raise InvalidPoint("G1 coordinate is not a base field element")

    FQ = curve.FQ
    point = (FQ(x), FQ(y), FQ.one())
    if not curve.is_valid_g1(point):
        raise InvalidPoint("G1 point is not on the curve or not in the prime-order subgroup")
    return point


def encode_g2(point, curve=None):
    """Encode a G2 point, imaginary coefficient first."""
    curve = curve or get_curve()
    size = curve.coordinate_size
    if curve.is_inf(point):
        return bytes(4 * size)
    x, y = curve.normalize(point)
    x0, x1 = x.coeffs
    y0, y1 = y.coeffs
    return b"".join(_int_to_bytes(c, size) for c in (x1, x0, y1, y0))


def decode_g2(data, curve=None):
    """
    Decode and validate a G2 point.

    Raises:
        InvalidPoint: on a wrong length, coefficients outside the base field,
            or a point that is not on the twist or not in the subgroup
    """
    curve = curve or get_curve()
    size = curve.coordinate_size
    data = _check_length(data, 4 * size, "G2 point")
    if not any(data):
        return curve.Z2

    x1, x0, y1, y0 = _split(data, size)
    if any(c >= curve.field_modulus for c in (x1, x0, y1, y0)):
        raise InvalidPoint("G2 coefficient is not a base field element")

    FQ2 = curve.FQ2
    point = (FQ2([x0, x1]), FQ2([y0, y1]), FQ2.one())
    if not curve.is_valid_g2(point):
        raise InvalidPoint("G2 point is not on the twist or not in the prime-order subgroup")
    return point


def pairing_calldata(x, witness, accumulator_value, g2, curve=None):
    """
    Build the ecPairing precompile input for a membership check.

    The precompile returns 1 iff the product of the pairings of its input
    pairs is the identity, here

        e(W^x, g2) * e(-A, g2) = 1

    Args:
        x: Member scalar
        witness: G1 witness
        accumulator_value: G1 accumulator value A
        g2: G2 generator

    Returns:
        bytes: G1(W^x) || G2(g2) || G1(-A) || G2(g2)
    """
    curve = curve or get_curve()
    w_x = curve.exp(witness, x)
    g2_bytes = encode_g2(g2, curve)
    return (
        encode_g1(w_x, curve) + g2_bytes
        + encode_g1(curve.neg(accumulator_value), curve) + g2_bytes
    )


def to_hex(data):
    return "0x" + bytes(data).hex()

import hashlib
import logging
import struct

from Crypto.Hash import keccak

from ec_accumulator.config import config
from ec_accumulator.errors import ConfigurationError, HashToScalarError

logger = logging.getLogger(__name__)

MAX_HASH_ATTEMPTS = 256


def _keccak256(data):
    return keccak.new(data=data, digest_bits=256).digest()


def _sha256(data):
    return hashlib.sha256(data).digest()


def _sha3_256(data):
    return hashlib.sha3_256(data).digest()


HASH_FUNCTIONS = {
    "keccak256": _keccak256,
    "sha256": _sha256,
    "sha3_256": _sha3_256,
}


class ScalarHasher:
    """
    Deterministic mapping from byte strings to nonzero scalars.

    The digest is widened to twice the hash output before reduction modulo
    the scalar field order, so the result is statistically close to uniform.
    A zero result is resampled by bumping a counter that is part of the
    hashed message.
    """

    def __init__(self, curve_order, hash_name=None, label=None):
        """
        Initialize a hasher for a scalar field.

        Args:
            curve_order: Order r of the scalar field
            hash_name: 'keccak256', 'sha256' or 'sha3_256' (defaults to configuration)
            label: Domain separation label as bytes (defaults to configuration)
        """
        if hash_name is None:
            hash_name = config.hash_name
        if label is None:
            label = config.hash_label_bytes
        if hash_name not in HASH_FUNCTIONS:
            raise ConfigurationError(f"Unsupported hash function: {hash_name}")
        if isinstance(label, str):
            label = label.encode("utf-8")

        self.curve_order = curve_order
        self.hash_name = hash_name
        self.label = bytes(label)
        self._hash = HASH_FUNCTIONS[hash_name]

    def __repr__(self):
        return f"ScalarHasher(hash_name={self.hash_name!r}, label={self.label!r})"

    def hash_to_scalar(self, data):
        """
        Hash arbitrary bytes to a scalar in [1, r-1].

        Args:
            data: The bytes to hash

        Returns:
            int: The scalar

        Raises:
            TypeError: if data is not bytes-like
            HashToScalarError: if MAX_HASH_ATTEMPTS digests all reduce to zero
        """
        if not isinstance(data, (bytes, bytearray, memoryview)):
            raise TypeError(f"expected bytes, got {type(data).__name__}")
        data = bytes(data)

        for counter in range(MAX_HASH_ATTEMPTS):
            x = int.from_bytes(self._wide_digest(data, counter), byteorder="big") % self.curve_order
            if x != 0:
                return x
            logger.warning("hash of %d-byte input reduced to zero, resampling (attempt %d)",
                           len(data), counter + 1)

        raise HashToScalarError(
            f"no nonzero scalar after {MAX_HASH_ATTEMPTS} attempts; hash configuration is broken"
        )

    def _wide_digest(self, data, counter):
        # H(label || data || counter || 0x00) || H(label || data || counter || 0x01)
        prefix = self.label + data + struct.pack(">I", counter)
        return self._hash(prefix + b"\x00") + self._hash(prefix + b"\x01")

"""
Accumulator configuration.

Defaults are read from the environment once, at import time. Constructor
arguments of Accumulator, Verifier and ScalarHasher take precedence.
"""

import os

DEFAULT_CURVE = os.getenv('ACC_CURVE', 'bn254')
DEFAULT_HASH = os.getenv('ACC_HASH', 'keccak256')
DEFAULT_HASH_LABEL = os.getenv('ACC_HASH_LABEL', 'ec-accumulator')

# Duplicate policy: when true a repeated scalar is accumulated again and its
# witness excludes a single occurrence; when false the add is rejected.
ALLOW_DUPLICATES = os.getenv('ACC_ALLOW_DUPLICATES', 'true').lower() == 'true'

LOG_LEVEL = os.getenv('ACC_LOG_LEVEL', 'INFO').upper()


class Config:
    """Runtime configuration."""

    def __init__(self):
        self.curve = DEFAULT_CURVE
        self.hash_name = DEFAULT_HASH
        self.hash_label = DEFAULT_HASH_LABEL
        self.allow_duplicates = ALLOW_DUPLICATES
        self.log_level = LOG_LEVEL

    @property
    def hash_label_bytes(self):
        return self.hash_label.encode('utf-8')

    def __repr__(self):
        return (f"Config(curve={self.curve!r}, hash_name={self.hash_name!r}, "
                f"hash_label={self.hash_label!r}, allow_duplicates={self.allow_duplicates}, "
                f"log_level={self.log_level!r})")


config = Config()

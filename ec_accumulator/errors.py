"""
Exception hierarchy for the accumulator.

Construction-time failures (bad curve, bad hash, malformed generator) and
hash resample exhaustion indicate a broken setup and are not meant to be
recovered from. MemberNotFound and DuplicateMember are ordinary, recoverable
caller errors. InvalidPoint is raised by the decoders and never escapes the
verifier, which reports it as a failed verification.
"""


class AccumulatorError(Exception):
    """Base accumulator error."""
    pass


class ConfigurationError(AccumulatorError):
    """Unsupported curve or hash, or a generator outside its group."""
    pass


class HashToScalarError(AccumulatorError):
    """Hashing kept producing the zero scalar."""
    pass


class MemberNotFound(AccumulatorError, KeyError):
    """A witness was requested for a scalar that was never accumulated."""

    def __init__(self, scalar):
        self.scalar = scalar
        super().__init__(scalar)

    def __str__(self):
        label = hex(self.scalar) if isinstance(self.scalar, int) else repr(self.scalar)
        return f"scalar {label} is not a member of the accumulator"


class DuplicateMember(AccumulatorError):
    """The scalar is already accumulated and duplicates are disabled."""

    def __init__(self, scalar):
        self.scalar = scalar
        super().__init__(f"scalar {scalar:#x} is already a member of the accumulator")


class InvalidPoint(AccumulatorError, ValueError):
    """Encoded data is not a valid group element or canonical scalar."""
    pass

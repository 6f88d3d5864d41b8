"""
Errors raised by shamir255.

Both concrete errors subclass ValueError, so callers that already catch
ValueError around split/combine keep working.
"""


class Shamir255Error(Exception):
    """Base class for all shamir255 errors."""


class InvalidParameter(Shamir255Error, ValueError):
    """A call-time argument is malformed. Raised before any cryptographic work."""


class RecoveryFailure(Shamir255Error, ValueError):
    """
    The interpolated value does not carry the marker byte.

    Usually means too few shares, shares mixed from different splits,
    or a corrupted payload. The check is a 1-in-256 filter, not a MAC:
    the absence of this error does not prove the result is correct.
    """

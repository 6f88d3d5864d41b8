"""
shamir255: Shamir's Secret Sharing for secrets up to 255 bytes.

Splits a secret into N shares over the 2048-bit MODP prime field
(RFC 3526) so that any K of them rebuild it and K-1 reveal nothing.

Wire format:
    Share payload = 256 bytes, big-endian, left-padded with zeros
    Field element = b"S" (marker) + secret, read big-endian

Shares made here can be combined by any implementation using the same
prime, marker and padding, and vice versa.

Usage:
    from shamir255 import share, recover
    shares = share(b"Hello, world!", needed=2, total=3)
    assert recover({1: shares[1], 2: shares[2]}) == b"Hello, world!"
"""

from shamir255.errors import Shamir255Error, InvalidParameter, RecoveryFailure
from shamir255.field import (
    PRIME,
    MARKER,
    SHARE_SIZE,
    MAX_SECRET_SIZE,
    encode_secret,
    decode_secret,
    pad_to_share,
    unpad_from_share,
)
from shamir255.shamir import (
    share,
    recover,
    verify_shares,
    Share,
    shares_to_hex,
    shares_from_hex,
)

__version__ = "0.1.0"
__all__ = [
    "share",
    "recover",
    "verify_shares",
    "Share",
    "shares_to_hex",
    "shares_from_hex",
    "encode_secret",
    "decode_secret",
    "pad_to_share",
    "unpad_from_share",
    "PRIME",
    "MARKER",
    "SHARE_SIZE",
    "MAX_SECRET_SIZE",
    "Shamir255Error",
    "InvalidParameter",
    "RecoveryFailure",
]

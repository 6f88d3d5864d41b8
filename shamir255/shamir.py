"""
Shamir's Secret Sharing
Split a secret into N shares where any K can reconstruct it.

Works over the 2048-bit MODP prime field, so a single polynomial carries
the whole secret (up to 255 bytes). Shares are 256-byte big-endian values
keyed by their x-coordinate, and interoperate with any implementation
that uses the same prime, marker byte and padding.

Usage:
    shares = share(b"Hello, world!", needed=2, total=3)
    recovered = recover({1: shares[1], 3: shares[3]})
    assert recovered == b"Hello, world!"
"""

import logging
import secrets
from dataclasses import dataclass
from typing import Callable, Mapping

from cryptography.hazmat.primitives import constant_time

from shamir255.errors import InvalidParameter, RecoveryFailure
from shamir255.field import (
    MAX_SECRET_SIZE,
    PRIME,
    SHARE_SIZE,
    decode_secret,
    encode_secret,
    pad_to_share,
    unpad_from_share,
)

logger = logging.getLogger(__name__)

RandomBytes = Callable[[int], bytes]


@dataclass(frozen=True)
class Share:
    """A single share of a split secret."""
    index: int      # The x-coordinate (1-indexed, never 0)
    data: bytes     # The y-coordinate, SHARE_SIZE bytes big-endian

    def to_hex(self) -> str:
        """Serialize to a portable hex string."""
        return f"{self.index}:{self.data.hex()}"

    @classmethod
    def from_hex(cls, hex_str: str) -> "Share":
        """Deserialize from hex string."""
        index, sep, payload = hex_str.strip().partition(":")
        if not sep:
            raise InvalidParameter("Share hex must look like '<index>:<payload>'")
        try:
            share_index = int(index)
            data = bytes.fromhex(payload)
        except ValueError as e:
            raise InvalidParameter(f"Malformed share hex: {e}") from e
        _check_share(share_index, data)
        return cls(index=share_index, data=data)


def shares_to_hex(shares: Mapping[int, bytes]) -> dict[int, str]:
    """Hex-encode every payload of a share set."""
    return {index: bytes(data).hex() for index, data in shares.items()}


def shares_from_hex(shares: Mapping[int, str]) -> dict[int, bytes]:
    """Decode a share set whose payloads are hex strings."""
    decoded = {}
    for index, payload in shares.items():
        try:
            data = bytes.fromhex(payload)
        except ValueError as e:
            raise InvalidParameter(f"Share {index} is not valid hex: {e}") from e
        _check_share(index, data)
        decoded[index] = data
    return decoded


def _check_share(index, data) -> None:
    if isinstance(index, bool) or not isinstance(index, int) or not 1 <= index < PRIME:
        raise InvalidParameter(f"Share index must be in [1, PRIME), got {index!r}")
    if not isinstance(data, (bytes, bytearray, memoryview)):
        raise InvalidParameter(f"Share {index} must be bytes, got {type(data).__name__}")
    if memoryview(data).nbytes != SHARE_SIZE:
        raise InvalidParameter(f"Share {index} must be exactly {SHARE_SIZE} bytes")


def _generate_coefficient(random_bytes: RandomBytes) -> int:
    """
    Draw a uniform field element by rejection sampling.

    Values >= PRIME are thrown away and redrawn. Reducing them mod PRIME
    would skew the distribution.
    """
    while True:
        candidate = int.from_bytes(random_bytes(SHARE_SIZE), "big")
        if candidate < PRIME:
            return candidate
        logger.debug("Coefficient candidate outside the field, redrawing")


def _eval_polynomial(coefficients: list[int], x: int) -> int:
    """Evaluate a polynomial at x in the prime field (Horner's method)."""
    result = 0
    for coeff in reversed(coefficients):
        result = (result * x + coeff) % PRIME
    return result


def _mod_inverse(a: int) -> int:
    """Modular multiplicative inverse. PRIME is prime, so every nonzero a has one."""
    return pow(a, -1, PRIME)


def share(
    secret: bytes,
    needed: int,
    total: int,
    *,
    random_bytes: RandomBytes = secrets.token_bytes,
) -> dict[int, bytes]:
    """
    Split a secret into shares using Shamir's Secret Sharing.

    Args:
        secret: The secret bytes to split (max 255 bytes, may be empty).
        needed: Minimum shares needed to reconstruct (K).
        total: Total shares to generate (N).
        random_bytes: Source of secure randomness, called as random_bytes(n).
            Defaults to secrets.token_bytes. Tests may pass a seeded source.

    Returns:
        Mapping of index (1..total) to a 256-byte share payload.
        Any ``needed`` of them reconstruct the secret.

    Raises:
        InvalidParameter: If parameters are invalid. Nothing is generated.
    """
    if secret is None:
        raise InvalidParameter("Secret cannot be null")
    if not isinstance(secret, (bytes, bytearray, memoryview)):
        raise InvalidParameter(f"Secret must be bytes, got {type(secret).__name__}")
    # len() of a memoryview counts items, not bytes
    secret = bytes(secret)
    if len(secret) > MAX_SECRET_SIZE:
        raise InvalidParameter(f"Secret must be up to {MAX_SECRET_SIZE} bytes")
    if needed < 2:
        raise InvalidParameter("Needed must be at least 2")
    if needed > total:
        raise InvalidParameter("Needed cannot be greater than total")

    logger.debug(
        "Splitting %d-byte secret into %d shares (threshold %d)",
        len(secret), total, needed,
    )

    # f(x) = secret + a1*x + ... + a(k-1)*x^(k-1), so f(0) is the secret
    coefficients = [encode_secret(secret)]
    for _ in range(needed - 1):
        coefficients.append(_generate_coefficient(random_bytes))

    return {
        x: pad_to_share(_eval_polynomial(coefficients, x))
        for x in range(1, total + 1)
    }


def recover(shares: Mapping[int, bytes]) -> bytes:
    """
    Reconstruct a secret from shares using Lagrange interpolation at x=0.

    The threshold is not carried with the shares, so it cannot be checked
    here. Too few shares interpolate to an unrelated value, which almost
    always fails the marker check.

    Args:
        shares: Mapping of share index to 256-byte payload. Indices need
            not be contiguous or sorted.

    Returns:
        The reconstructed secret bytes, same length as the original.

    Raises:
        InvalidParameter: If shares is None, empty, or structurally broken.
        RecoveryFailure: If the interpolated value lacks the marker byte.
    """
    if not shares:
        raise InvalidParameter("Shares cannot be null or empty")
    for index, data in shares.items():
        _check_share(index, data)

    points = [(x, unpad_from_share(y)) for x, y in shares.items()]
    logger.debug("Recovering secret from shares %s", sorted(shares))

    secret_int = 0
    for i, (xi, yi) in enumerate(points):
        numerator = 1
        denominator = 1
        for j, (xj, _) in enumerate(points):
            if i == j:
                continue
            numerator = (numerator * -xj) % PRIME
            denominator = (denominator * (xi - xj)) % PRIME

        lagrange = (numerator * _mod_inverse(denominator)) % PRIME
        secret_int = (secret_int + yi * lagrange) % PRIME

    try:
        return decode_secret(secret_int)
    except RecoveryFailure:
        logger.warning(
            "Marker check failed after interpolating %d shares", len(points)
        )
        raise


def verify_shares(shares: Mapping[int, bytes], secret: bytes) -> bool:
    """
    Check that a share set reconstructs the expected secret.

    The comparison runs in constant time. A bad share set returns False;
    a malformed one still raises InvalidParameter.
    """
    try:
        reconstructed = recover(shares)
    except RecoveryFailure:
        return False
    return constant_time.bytes_eq(reconstructed, bytes(secret))

"""
Field & Share Encoding
Map secrets to field elements and field elements to fixed-size share payloads.

Every share payload is exactly SHARE_SIZE bytes, big-endian, left-padded
with zeros. An observer cannot tell a short secret from a long one by
looking at its shares.
"""

from shamir255.errors import RecoveryFailure


# 2048-bit MODP Group (RFC 3526, section 3)
PRIME = int(
    "FFFFFFFFFFFFFFFFC90FDAA22168C234C4C6628B80DC1CD1"
    "29024E088A67CC74020BBEA63B139B22514A08798E3404DD"
    "EF9519B3CD3A431B302B0A6DF25F14374FE1356D6D51C245"
    "E485B576625E7EC6F44C42E9A637ED6B0BFF5CB6F406B7ED"
    "EE386BFB5A899FA5AE9F24117C4B1FE649286651ECE45B3D"
    "C2007CB8A163BF0598DA48361C55D39A69163FA8FD24CF5F"
    "83655D23DCA3AD961C62F356208552BB9ED529077096966D"
    "670C354E4ABC9804F1746C08CA18217C32905E462E36CE3B"
    "E39E772C180E86039B2783A2EC07A28FB5C55DF06F4C52C9"
    "DE2BCBF6955817183995497CEA956AE515D2261898FA0510"
    "15728E5A8AACAA68FFFFFFFFFFFFFFFF",
    16,
)

MARKER = 0x53           # b"S", prepended to every secret
SHARE_SIZE = 256        # bytes per share payload (2048 bits)
MAX_SECRET_SIZE = 255   # marker + secret must fit below PRIME


def encode_secret(secret: bytes) -> int:
    """
    Turn a secret into a field element.

    The marker byte keeps leading zero bytes of the secret alive through
    the integer conversion and lets decode_secret spot garbage.

    Args:
        secret: Up to MAX_SECRET_SIZE bytes. Length is checked by the caller.

    Returns:
        The integer value of ``b"S" + secret``, big-endian.
    """
    return int.from_bytes(bytes([MARKER]) + bytes(secret), "big")


def decode_secret(value: int) -> bytes:
    """
    Turn a recovered field element back into the secret.

    Args:
        value: The interpolated constant term.

    Returns:
        The bytes following the marker. Empty if the secret was empty.

    Raises:
        RecoveryFailure: If the value does not start with the marker byte.
    """
    raw = value.to_bytes((value.bit_length() + 7) // 8, "big")
    if not raw or raw[0] != MARKER:
        raise RecoveryFailure("Failed to recover secret: invalid shares")
    return raw[1:]


def pad_to_share(value: int) -> bytes:
    """Encode a field element as a SHARE_SIZE-byte big-endian payload."""
    return value.to_bytes(SHARE_SIZE, "big")


def unpad_from_share(payload: bytes) -> int:
    """Read a share payload back as a field element."""
    return int.from_bytes(payload, "big")

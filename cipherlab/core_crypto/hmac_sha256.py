"""
HMAC-SHA256 (RFC 2104) on top of the from-scratch SHA-256.

    HMAC(K, m) = SHA256((K' ^ opad) || SHA256((K' ^ ipad) || m))

where K' is the key hashed down when longer than the block size, then
zero-padded to 64 bytes.
"""

import hmac
from typing import Union

from .codec import to_bytes, hex_decode
from .sha256 import SHA256, sha256, BLOCK_SIZE
from ..errors import InvalidEncoding


HMAC_BLOCK_SIZE = BLOCK_SIZE
IPAD_BYTE = 0x36
OPAD_BYTE = 0x5C


def _normalize_key(key: bytes) -> bytes:
    """Hash long keys, then zero-pad to the block size."""
    if len(key) > HMAC_BLOCK_SIZE:
        key = sha256(key)
    return key.ljust(HMAC_BLOCK_SIZE, b'\x00')


def hmac_sha256(key: bytes, message: bytes) -> bytes:
    """
    Compute raw HMAC-SHA256.

    Args:
        key: Secret key, any length
        message: Data to authenticate

    Returns:
        32-byte tag
    """
    key = _normalize_key(bytes(key))
    ipad = bytes(b ^ IPAD_BYTE for b in key)
    opad = bytes(b ^ OPAD_BYTE for b in key)

    inner = SHA256(ipad)
    inner.update(message)

    outer = SHA256(opad)
    outer.update(inner.digest())
    return outer.digest()


def hmac_sign(message: Union[str, bytes], key: Union[str, bytes]) -> str:
    """
    HMAC-SHA256 of a message as lowercase hex.

    Text arguments are UTF-8 encoded.
    """
    return hmac_sha256(to_bytes(key), to_bytes(message)).hex()


def hmac_verify(message: Union[str, bytes], key: Union[str, bytes],
                signature: str) -> bool:
    """
    Check a hex HMAC-SHA256 signature in constant time.

    Malformed hex is treated as a mismatch.
    """
    try:
        expected = hex_decode(signature)
    except InvalidEncoding:
        return False
    computed = hmac_sha256(to_bytes(key), to_bytes(message))
    return hmac.compare_digest(computed, expected)

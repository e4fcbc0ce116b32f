"""
AES Modes of Operation

- CBC: PKCS#7 padded, each block XORed with the previous ciphertext block
- CTR: keystream = E(counter), 128-bit big-endian counter starting at the IV
- OFB: keystream = E(previous keystream), starting from E(IV)

CTR and OFB are stream modes: no padding, and the same routine encrypts and
decrypts. For inputs of at most one block they produce identical output
because both start from E(IV); they diverge from the second block on.

Public operations take bytes and return Base64 (encrypt) or bytes
(decrypt). The *_text variants UTF-8 encode/decode around them.
"""

import logging
from enum import Enum
from typing import Union

from ..errors import (
    InvalidIVLength, InvalidKeyLength, InvalidLength, InvalidPadding, UnsupportedMode
)
from .aes import AES, BLOCK_SIZE, VALID_KEY_SIZES
from .codec import b64_decode, b64_encode, to_bytes, utf8_decode, xor_bytes

logger = logging.getLogger(__name__)


class BlockMode(Enum):
    """Supported modes of operation."""

    CBC = "CBC"
    CTR = "CTR"
    OFB = "OFB"

    @classmethod
    def parse(cls, mode: Union[str, 'BlockMode']) -> 'BlockMode':
        """
        Resolve a mode name (case-insensitive) or member.

        Raises:
            UnsupportedMode: For anything but CBC, CTR or OFB
        """
        if isinstance(mode, cls):
            return mode
        try:
            return cls(str(mode).upper())
        except ValueError:
            raise UnsupportedMode(f"Unsupported AES mode: {mode}") from None


# ============================================================================
# PKCS#7
# ============================================================================

def pkcs7_pad(data: bytes, block_size: int = BLOCK_SIZE) -> bytes:
    """Append N bytes of value N (1..block_size) to reach a block multiple."""
    pad_len = block_size - (len(data) % block_size)
    return data + bytes([pad_len]) * pad_len


def pkcs7_unpad(data: bytes, block_size: int = BLOCK_SIZE) -> bytes:
    """
    Strip and strictly validate PKCS#7 padding.

    Raises:
        InvalidPadding: If the pad length is outside 1..block_size or any of
            the trailing pad bytes differs from it
    """
    if not data or len(data) % block_size:
        raise InvalidPadding()

    pad_len = data[-1]
    if pad_len < 1 or pad_len > block_size:
        raise InvalidPadding()

    # Scan all pad bytes, no early exit
    mismatch = 0
    for b in data[-pad_len:]:
        mismatch |= b ^ pad_len
    if mismatch:
        raise InvalidPadding()

    return data[:-pad_len]


# ============================================================================
# Mode drivers (raw bytes in, raw bytes out)
# ============================================================================

def _blocks(data: bytes):
    for i in range(0, len(data), BLOCK_SIZE):
        yield data[i:i + BLOCK_SIZE]


def increment_counter(counter: bytes) -> bytes:
    """
    Add one to a 16-byte big-endian counter.

    The carry ripples from byte 15 toward byte 0; ff..ff wraps to 00..00.
    """
    value = (int.from_bytes(counter, byteorder='big') + 1) % (1 << (8 * len(counter)))
    return value.to_bytes(len(counter), byteorder='big')


def cbc_encrypt(cipher: AES, plaintext: bytes, iv: bytes) -> bytes:
    out = bytearray()
    prev = iv
    for block in _blocks(pkcs7_pad(plaintext)):
        prev = cipher.encrypt_block(xor_bytes(block, prev))
        out += prev
    return bytes(out)


def cbc_decrypt(cipher: AES, ciphertext: bytes, iv: bytes) -> bytes:
    if not ciphertext or len(ciphertext) % BLOCK_SIZE:
        raise InvalidLength(
            f"CBC ciphertext must be a non-empty multiple of {BLOCK_SIZE} bytes"
        )

    out = bytearray()
    prev = iv
    for block in _blocks(ciphertext):
        out += xor_bytes(cipher.decrypt_block(block), prev)
        prev = block
    return pkcs7_unpad(bytes(out))


def ctr_crypt(cipher: AES, data: bytes, counter: bytes) -> bytes:
    """CTR transform; applying it twice with the same counter is the identity."""
    out = bytearray()
    for chunk in _blocks(data):
        keystream = cipher.encrypt_block(counter)
        out += xor_bytes(chunk, keystream)
        counter = increment_counter(counter)
    return bytes(out)


def ofb_crypt(cipher: AES, data: bytes, iv: bytes) -> bytes:
    """OFB transform; applying it twice with the same IV is the identity."""
    out = bytearray()
    feedback = iv
    for chunk in _blocks(data):
        feedback = cipher.encrypt_block(feedback)
        out += xor_bytes(chunk, feedback)
    return bytes(out)


# ============================================================================
# Public operations
# ============================================================================

def _prepare(key: bytes, iv: bytes, mode: Union[str, BlockMode]):
    """Validate everything up front and build the block cipher."""
    key = bytes(key)
    iv = bytes(iv)
    if len(key) not in VALID_KEY_SIZES:
        raise InvalidKeyLength(
            f"Invalid key length: {len(key)} bytes. Must be 16, 24, or 32."
        )
    if len(iv) != BLOCK_SIZE:
        raise InvalidIVLength(f"Invalid IV length: {len(iv)} bytes. Must be 16.")
    return AES(key), iv, BlockMode.parse(mode)


def _encrypt_with(cipher: AES, plaintext: bytes, iv: bytes, mode: BlockMode) -> bytes:
    logger.debug("AES-%d-%s encrypt of %d bytes", cipher.key_size, mode.value, len(plaintext))

    if mode is BlockMode.CBC:
        return cbc_encrypt(cipher, bytes(plaintext), iv)
    if mode is BlockMode.CTR:
        return ctr_crypt(cipher, bytes(plaintext), iv)
    return ofb_crypt(cipher, bytes(plaintext), iv)


def _decrypt_with(cipher: AES, ciphertext: bytes, iv: bytes, mode: BlockMode) -> bytes:
    logger.debug("AES-%d-%s decrypt of %d bytes", cipher.key_size, mode.value, len(ciphertext))

    if mode is BlockMode.CBC:
        return cbc_decrypt(cipher, bytes(ciphertext), iv)
    if mode is BlockMode.CTR:
        return ctr_crypt(cipher, bytes(ciphertext), iv)
    return ofb_crypt(cipher, bytes(ciphertext), iv)


def encrypt_bytes(plaintext: bytes, key: bytes, iv: bytes,
                  mode: Union[str, BlockMode] = BlockMode.CBC) -> bytes:
    """Encrypt raw bytes, returning raw ciphertext bytes."""
    cipher, iv, mode = _prepare(key, iv, mode)
    return _encrypt_with(cipher, bytes(plaintext), iv, mode)


def decrypt_bytes(ciphertext: bytes, key: bytes, iv: bytes,
                  mode: Union[str, BlockMode] = BlockMode.CBC) -> bytes:
    """Decrypt raw ciphertext bytes."""
    cipher, iv, mode = _prepare(key, iv, mode)
    return _decrypt_with(cipher, bytes(ciphertext), iv, mode)


def encrypt(plaintext: bytes, key: bytes, iv: bytes,
            mode: Union[str, BlockMode] = BlockMode.CBC) -> str:
    """
    Encrypt bytes with AES in the given mode.

    Args:
        plaintext: Data to encrypt
        key: 16, 24 or 32-byte key
        iv: 16-byte IV (CBC, OFB) or initial counter (CTR)
        mode: 'CBC', 'CTR', 'OFB' or a BlockMode

    Returns:
        Base64 ciphertext

    Raises:
        InvalidKeyLength, InvalidIVLength, UnsupportedMode
    """
    return b64_encode(encrypt_bytes(plaintext, key, iv, mode))


def decrypt(ciphertext: str, key: bytes, iv: bytes,
            mode: Union[str, BlockMode] = BlockMode.CBC) -> bytes:
    """
    Decrypt Base64 ciphertext produced by encrypt().

    Raises:
        InvalidKeyLength, InvalidIVLength, UnsupportedMode,
        InvalidEncoding (bad Base64), InvalidLength (CBC size),
        InvalidPadding (CBC padding check)
    """
    # Key/IV/mode are validated before the ciphertext is looked at
    cipher, iv, mode = _prepare(key, iv, mode)
    return _decrypt_with(cipher, b64_decode(ciphertext), iv, mode)


def encrypt_text(plaintext: str, key: Union[str, bytes], iv: Union[str, bytes],
                 mode: Union[str, BlockMode] = BlockMode.CBC) -> str:
    """UTF-8 encode text (and str key/IV) then encrypt() it."""
    return encrypt(to_bytes(plaintext), to_bytes(key), to_bytes(iv), mode)


def decrypt_text(ciphertext: str, key: Union[str, bytes], iv: Union[str, bytes],
                 mode: Union[str, BlockMode] = BlockMode.CBC) -> str:
    """
    decrypt() then UTF-8 decode.

    Raises:
        InvalidUtf8Output: If the recovered bytes are not UTF-8
    """
    return utf8_decode(decrypt(ciphertext, to_bytes(key), to_bytes(iv), mode))

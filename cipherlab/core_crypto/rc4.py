"""
RC4 Stream Cipher (From Scratch)

Components:
- KSA (Key-Scheduling Algorithm): 256 swaps mixing the key into a
  permutation of 0..255
- PRGA (Pseudo-Random Generation Algorithm): two running indices and a
  swap per output byte
- XOR-based encryption/decryption (the same operation both ways)

Security Note:
    RC4 has well-known keystream biases and is prohibited in TLS
    (RFC 7465). It is here for compatibility and teaching only.
"""

import logging
from typing import Generator, List, Union

from ..errors import InvalidKeyLength, UnsupportedOperation
from .codec import b64_decode, b64_encode, to_bytes, utf8_decode

logger = logging.getLogger(__name__)


DIRECTIONS = ('encrypt', 'decrypt')


def key_schedule(key: bytes) -> List[int]:
    """
    Run the KSA and return the initial permutation.

    For i in 0..255:
        j = (j + S[i] + key[i mod len(key)]) mod 256
        swap S[i], S[j]

    Raises:
        InvalidKeyLength: If the key is empty
    """
    if not key:
        raise InvalidKeyLength("RC4 key must not be empty")

    s = list(range(256))
    j = 0
    for i in range(256):
        j = (j + s[i] + key[i % len(key)]) % 256
        s[i], s[j] = s[j], s[i]
    return s


class RC4:
    """
    RC4 keystream generator.

    The (i, j, S) state advances with every byte produced, so one instance
    can process a message in several pieces. Build a fresh instance (or
    call reset()) to decrypt.

    Example:
        >>> cipher = RC4(b"Key")
        >>> cipher.process(b"Plaintext").hex()
        'bbf316e8d940af0ad3'
    """

    def __init__(self, key: Union[str, bytes]):
        """
        Args:
            key: Non-empty key; text is UTF-8 encoded
        """
        self._key = to_bytes(key)
        self.reset()

    def reset(self) -> None:
        """Return to the state right after the KSA."""
        self._s = key_schedule(self._key)
        self._i = 0
        self._j = 0

    def next_byte(self) -> int:
        """Produce one keystream byte (one PRGA step)."""
        s = self._s
        self._i = (self._i + 1) % 256
        self._j = (self._j + s[self._i]) % 256
        s[self._i], s[self._j] = s[self._j], s[self._i]
        return s[(s[self._i] + s[self._j]) % 256]

    def keystream(self, length: int) -> Generator[int, None, None]:
        """Yield `length` keystream bytes."""
        for _ in range(length):
            yield self.next_byte()

    def process(self, data: bytes) -> bytes:
        """XOR data with the next len(data) keystream bytes."""
        return bytes(b ^ k for b, k in zip(data, self.keystream(len(data))))

    def __repr__(self) -> str:
        return f"RC4(key_len={len(self._key)})"


def rc4(key: Union[str, bytes], data: bytes) -> bytes:
    """
    One-shot RC4: encrypts plaintext or decrypts ciphertext.

    Args:
        key: Non-empty key
        data: Input bytes

    Returns:
        data XOR keystream
    """
    return RC4(key).process(bytes(data))


def rc4_crypt(text: str, key: Union[str, bytes], direction: str) -> str:
    """
    Text-level RC4.

    Args:
        text: Plaintext (encrypt) or Base64 ciphertext (decrypt)
        key: Non-empty key; text keys are UTF-8 encoded
        direction: 'encrypt' or 'decrypt'

    Returns:
        Base64 ciphertext (encrypt) or UTF-8 plaintext (decrypt)

    Raises:
        InvalidKeyLength: Empty key
        InvalidEncoding: Ciphertext is not Base64
        InvalidUtf8Output: Decrypted bytes are not UTF-8 (usually a wrong key)
        UnsupportedOperation: Unknown direction
    """
    direction = str(direction).lower()
    if direction not in DIRECTIONS:
        raise UnsupportedOperation(f"Unsupported direction: {direction}")

    key_bytes = to_bytes(key)
    if not key_bytes:
        raise InvalidKeyLength("RC4 key must not be empty")

    if direction == 'encrypt':
        data = to_bytes(text)
        logger.debug("RC4 encrypt of %d bytes", len(data))
        return b64_encode(rc4(key_bytes, data))

    data = b64_decode(text)
    logger.debug("RC4 decrypt of %d bytes", len(data))
    return utf8_decode(rc4(key_bytes, data))

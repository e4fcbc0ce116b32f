"""
SHA-1 Hash Implementation (From Scratch)

FIPS 180-4 SHA-1: five 32-bit registers, an 80-word message schedule
built with a 1-bit left rotation, and four 20-round stages with their own
boolean function and constant.

SHA-1 is broken for collision resistance. It is kept for compatibility
with existing digests only.
"""

from typing import List

from .sha256 import MASK_32, BLOCK_SIZE, md_padding


H_INITIAL = [0x67452301, 0xEFCDAB89, 0x98BADCFE, 0x10325476, 0xC3D2E1F0]

# One constant per 20-round stage
K = [0x5A827999, 0x6ED9EBA1, 0x8F1BBCDC, 0xCA62C1D6]

DIGEST_SIZE = 20


def _left_rotate(value: int, amount: int) -> int:
    """Left rotate a 32-bit integer."""
    return ((value << amount) | (value >> (32 - amount))) & MASK_32


def _compress(state: List[int], chunk: bytes) -> List[int]:
    """Process one 64-byte chunk and return the new state."""
    w = [int.from_bytes(chunk[i:i + 4], byteorder='big') for i in range(0, 64, 4)]
    for i in range(16, 80):
        w.append(_left_rotate(w[i - 3] ^ w[i - 8] ^ w[i - 14] ^ w[i - 16], 1))

    a, b, c, d, e = state

    for i in range(80):
        if i < 20:
            f = (b & c) | (~b & d)
        elif i < 40:
            f = b ^ c ^ d
        elif i < 60:
            f = (b & c) | (b & d) | (c & d)
        else:
            f = b ^ c ^ d

        temp = (_left_rotate(a, 5) + (f & MASK_32) + e + K[i // 20] + w[i]) & MASK_32
        e = d
        d = c
        c = _left_rotate(b, 30)
        b = a
        a = temp

    return [(x + y) & MASK_32 for x, y in zip(state, (a, b, c, d, e))]


class SHA1:
    """Incremental SHA-1, same interface as SHA256."""

    name = 'sha1'
    block_size = BLOCK_SIZE
    digest_size = DIGEST_SIZE

    def __init__(self, data: bytes = b''):
        self._state = H_INITIAL.copy()
        self._buffer = b''
        self._length = 0
        if data:
            self.update(data)

    def update(self, data: bytes) -> None:
        data = bytes(data)
        self._length += len(data)
        buffer = self._buffer + data

        full = len(buffer) - len(buffer) % BLOCK_SIZE
        for i in range(0, full, BLOCK_SIZE):
            self._state = _compress(self._state, buffer[i:i + BLOCK_SIZE])
        self._buffer = buffer[full:]

    def digest(self) -> bytes:
        tail = self._buffer + md_padding(self._length)
        state = self._state
        for i in range(0, len(tail), BLOCK_SIZE):
            state = _compress(state, tail[i:i + BLOCK_SIZE])
        return b''.join(word.to_bytes(4, byteorder='big') for word in state)

    def hexdigest(self) -> str:
        return self.digest().hex()

    def copy(self) -> 'SHA1':
        clone = SHA1()
        clone._state = self._state.copy()
        clone._buffer = self._buffer
        clone._length = self._length
        return clone


def sha1(data: bytes) -> bytes:
    """
    Compute the SHA-1 hash of the input data.

    Example:
        >>> sha1(b"abc").hex()
        'a9993e364706816aba3e25717850c26c9cd0d89d'
    """
    return SHA1(data).digest()


def sha1_hex(data: bytes) -> str:
    """Compute SHA-1 hash and return as hexadecimal string."""
    return sha1(data).hex()

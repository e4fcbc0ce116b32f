"""
SHA-256 Hash Implementation (From Scratch)

Implements the SHA-256 cryptographic hash function as defined in FIPS 180-4
without hashlib.

Components:
- Padding: 0x80, zeros to 56 mod 64, 64-bit big-endian bit length
- Message Schedule: Expands 16 words to 64 words
- Compression: 64 rounds over 8 working variables
- Output: 256-bit (32-byte) digest

The register state lives in a SHA256 builder object. update() feeds whole
64-byte chunks through the compression function; digest() pads a copy of
the tail, so the builder can keep accepting data afterwards.
"""

from typing import List


# Initial hash values: first 32 bits of fractional parts of square roots of first 8 primes
H_INITIAL = [
    0x6a09e667, 0xbb67ae85, 0x3c6ef372, 0xa54ff53a,
    0x510e527f, 0x9b05688c, 0x1f83d9ab, 0x5be0cd19
]

# Round constants: first 32 bits of fractional parts of cube roots of first 64 primes
K = [
    0x428a2f98, 0x71374491, 0xb5c0fbcf, 0xe9b5dba5,
    0x3956c25b, 0x59f111f1, 0x923f82a4, 0xab1c5ed5,
    0xd807aa98, 0x12835b01, 0x243185be, 0x550c7dc3,
    0x72be5d74, 0x80deb1fe, 0x9bdc06a7, 0xc19bf174,
    0xe49b69c1, 0xefbe4786, 0x0fc19dc6, 0x240ca1cc,
    0x2de92c6f, 0x4a7484aa, 0x5cb0a9dc, 0x76f988da,
    0x983e5152, 0xa831c66d, 0xb00327c8, 0xbf597fc7,
    0xc6e00bf3, 0xd5a79147, 0x06ca6351, 0x14292967,
    0x27b70a85, 0x2e1b2138, 0x4d2c6dfc, 0x53380d13,
    0x650a7354, 0x766a0abb, 0x81c2c92e, 0x92722c85,
    0xa2bfe8a1, 0xa81a664b, 0xc24b8b70, 0xc76c51a3,
    0xd192e819, 0xd6990624, 0xf40e3585, 0x106aa070,
    0x19a4c116, 0x1e376c08, 0x2748774c, 0x34b0bcb5,
    0x391c0cb3, 0x4ed8aa4a, 0x5b9cca4f, 0x682e6ff3,
    0x748f82ee, 0x78a5636f, 0x84c87814, 0x8cc70208,
    0x90befffa, 0xa4506ceb, 0xbef9a3f7, 0xc67178f2
]

# Mask for 32-bit arithmetic
MASK_32 = 0xFFFFFFFF

BLOCK_SIZE = 64     # bytes per compression chunk
DIGEST_SIZE = 32    # bytes of output


def _right_rotate(value: int, amount: int) -> int:
    """Right rotate a 32-bit integer by the specified amount."""
    return ((value >> amount) | (value << (32 - amount))) & MASK_32


def _ch(x: int, y: int, z: int) -> int:
    """Choice function: if x then y else z (bitwise)."""
    return (x & y) ^ (~x & z) & MASK_32


def _maj(x: int, y: int, z: int) -> int:
    """Majority function: majority vote of bits."""
    return (x & y) ^ (x & z) ^ (y & z)


def _sigma0(x: int) -> int:
    """Lowercase sigma 0: used in message schedule."""
    return _right_rotate(x, 7) ^ _right_rotate(x, 18) ^ (x >> 3)


def _sigma1(x: int) -> int:
    """Lowercase sigma 1: used in message schedule."""
    return _right_rotate(x, 17) ^ _right_rotate(x, 19) ^ (x >> 10)


def _big_sigma0(x: int) -> int:
    """Uppercase Sigma 0: used in compression."""
    return _right_rotate(x, 2) ^ _right_rotate(x, 13) ^ _right_rotate(x, 22)


def _big_sigma1(x: int) -> int:
    """Uppercase Sigma 1: used in compression."""
    return _right_rotate(x, 6) ^ _right_rotate(x, 11) ^ _right_rotate(x, 25)


def md_padding(message_length: int) -> bytes:
    """
    Merkle-Damgard padding for a message of the given byte length.

    Shared by SHA-1 and SHA-256:
    1. Append bit '1' to message (0x80 byte)
    2. Append zeros until message length ≡ 448 (mod 512)
    3. Append original message length as 64-bit big-endian integer

    Args:
        message_length: Total number of message bytes hashed

    Returns:
        The padding bytes to append after the message
    """
    bit_length = (message_length * 8) & 0xFFFFFFFFFFFFFFFF

    # We need: (message_length + 1 + zeros) % 64 == 56
    zeros = (55 - message_length) % BLOCK_SIZE
    return b'\x80' + b'\x00' * zeros + bit_length.to_bytes(8, byteorder='big')


def _bytes_to_words(chunk: bytes) -> List[int]:
    """Convert a 64-byte chunk into 16 32-bit words (big-endian)."""
    return [int.from_bytes(chunk[i:i + 4], byteorder='big') for i in range(0, 64, 4)]


def _create_message_schedule(words: List[int]) -> List[int]:
    """
    Expand 16 words into 64 words for the message schedule.

    For i from 16 to 63:
        W[i] = σ1(W[i-2]) + W[i-7] + σ0(W[i-15]) + W[i-16]
    """
    w = words.copy()
    for i in range(16, 64):
        s0 = _sigma0(w[i - 15])
        s1 = _sigma1(w[i - 2])
        w.append((w[i - 16] + s0 + w[i - 7] + s1) & MASK_32)
    return w


def _compress(state: List[int], chunk: bytes) -> List[int]:
    """
    Run the 64-round compression of one 64-byte chunk.

    Args:
        state: Current hash state (8 32-bit words)
        chunk: 64 message bytes

    Returns:
        New hash state; the input list is left untouched
    """
    w = _create_message_schedule(_bytes_to_words(chunk))

    a, b, c, d, e, f, g, h = state

    for i in range(64):
        t1 = (h + _big_sigma1(e) + _ch(e, f, g) + K[i] + w[i]) & MASK_32
        t2 = (_big_sigma0(a) + _maj(a, b, c)) & MASK_32

        h = g
        g = f
        f = e
        e = (d + t1) & MASK_32
        d = c
        c = b
        b = a
        a = (t1 + t2) & MASK_32

    return [(x + y) & MASK_32 for x, y in zip(state, (a, b, c, d, e, f, g, h))]


class SHA256:
    """
    Incremental SHA-256.

    Example:
        >>> h = SHA256()
        >>> h.update(b"hel")
        >>> h.update(b"lo")
        >>> h.hexdigest()
        '2cf24dba5fb0a30e26e83b2ac5b9e29e1b161e5c1fa7425e73043362938b9824'
    """

    name = 'sha256'
    block_size = BLOCK_SIZE
    digest_size = DIGEST_SIZE

    def __init__(self, data: bytes = b''):
        self._state = H_INITIAL.copy()
        self._buffer = b''
        self._length = 0
        if data:
            self.update(data)

    def update(self, data: bytes) -> None:
        """Absorb more message bytes."""
        data = bytes(data)
        self._length += len(data)
        buffer = self._buffer + data

        full = len(buffer) - len(buffer) % BLOCK_SIZE
        for i in range(0, full, BLOCK_SIZE):
            self._state = _compress(self._state, buffer[i:i + BLOCK_SIZE])
        self._buffer = buffer[full:]

    def digest(self) -> bytes:
        """Finalize a copy of the state and return the 32-byte digest."""
        tail = self._buffer + md_padding(self._length)
        state = self._state
        for i in range(0, len(tail), BLOCK_SIZE):
            state = _compress(state, tail[i:i + BLOCK_SIZE])
        return b''.join(word.to_bytes(4, byteorder='big') for word in state)

    def hexdigest(self) -> str:
        """Digest as lowercase hex."""
        return self.digest().hex()

    def copy(self) -> 'SHA256':
        """Independent builder with the same absorbed input."""
        clone = SHA256()
        clone._state = self._state.copy()
        clone._buffer = self._buffer
        clone._length = self._length
        return clone


def sha256(data: bytes) -> bytes:
    """
    Compute the SHA-256 hash of the input data.

    Args:
        data: Input bytes to hash

    Returns:
        256-bit (32-byte) digest as bytes

    Example:
        >>> sha256(b"hello").hex()
        '2cf24dba5fb0a30e26e83b2ac5b9e29e1b161e5c1fa7425e73043362938b9824'
    """
    return SHA256(data).digest()


def sha256_hex(data: bytes) -> str:
    """Compute SHA-256 hash and return as hexadecimal string."""
    return sha256(data).hex()

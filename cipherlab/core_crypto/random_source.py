"""
Randomness Providers

Core logic never reaches for a global random source directly. Anything that
needs randomness (OAEP seeds, Miller-Rabin witnesses, prime candidates)
takes a RandomSource argument instead.

- SystemRandomSource: backed by the `secrets` module (default)
- ByteStreamRandomSource: replays a fixed byte sequence, for tests that
  need exact OAEP / DER output
"""

import secrets
from typing import Optional, Protocol

from ..errors import CipherLabError


class RandomnessExhausted(CipherLabError):
    """Raised when a ByteStreamRandomSource runs out of bytes."""
    pass


class RandomSource(Protocol):
    """Capability every randomness provider implements."""

    def token_bytes(self, n: int) -> bytes:
        ...

    def randbits(self, k: int) -> int:
        ...

    def randbelow(self, n: int) -> int:
        ...


class SystemRandomSource:
    """Non-deterministic randomness from the operating system."""

    def token_bytes(self, n: int) -> bytes:
        return secrets.token_bytes(n)

    def randbits(self, k: int) -> int:
        return secrets.randbits(k)

    def randbelow(self, n: int) -> int:
        return secrets.randbelow(n)

    def __repr__(self) -> str:
        return "SystemRandomSource()"


class ByteStreamRandomSource:
    """
    Deterministic randomness that replays a fixed byte sequence.

    Integers are built from the stream big-endian. randbelow() uses
    rejection sampling, so it may consume more bytes than one draw.

    Example:
        >>> rng = ByteStreamRandomSource(bytes(range(32)))
        >>> rng.token_bytes(4)
        b'\\x00\\x01\\x02\\x03'
    """

    def __init__(self, data: bytes, repeat: bool = False):
        """
        Args:
            data: Bytes handed out in order
            repeat: Cycle through the data instead of raising when it runs out
        """
        if repeat and not data:
            raise ValueError("Cannot repeat an empty byte stream")
        self._data = bytes(data)
        self._offset = 0
        self._repeat = repeat

    @property
    def remaining(self) -> Optional[int]:
        """Bytes left before exhaustion (None when repeating)."""
        if self._repeat:
            return None
        return len(self._data) - self._offset

    def token_bytes(self, n: int) -> bytes:
        out = bytearray()
        while len(out) < n:
            if self._offset >= len(self._data):
                if not self._repeat:
                    raise RandomnessExhausted(
                        f"Byte stream exhausted after {len(self._data)} bytes"
                    )
                self._offset = 0
            take = min(n - len(out), len(self._data) - self._offset)
            out += self._data[self._offset:self._offset + take]
            self._offset += take
        return bytes(out)

    def randbits(self, k: int) -> int:
        if k <= 0:
            return 0
        raw = int.from_bytes(self.token_bytes((k + 7) // 8), byteorder='big')
        return raw >> ((8 - k % 8) % 8)

    def randbelow(self, n: int) -> int:
        if n <= 0:
            raise ValueError("Upper bound must be positive")
        k = n.bit_length()
        while True:
            value = self.randbits(k)
            if value < n:
                return value

    def __repr__(self) -> str:
        return f"ByteStreamRandomSource(len={len(self._data)}, repeat={self._repeat})"


# Shared default instance; it holds no state of its own
DEFAULT_RANDOM = SystemRandomSource()

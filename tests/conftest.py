"""Shared fixtures: RSA key generation is slow in pure Python, so keys are made once."""

import random

import pytest

from cipherlab.rsa.keys import generate_key_pair


class SeededRandomSource:
    """Reproducible RandomSource backed by random.Random (tests only)."""

    def __init__(self, seed: int):
        self._rng = random.Random(seed)

    def token_bytes(self, n: int) -> bytes:
        return self._rng.randbytes(n)

    def randbits(self, k: int) -> int:
        return self._rng.getrandbits(k) if k > 0 else 0

    def randbelow(self, n: int) -> int:
        return self._rng.randrange(n)


@pytest.fixture
def seeded_random():
    """Factory for reproducible randomness."""
    return SeededRandomSource


@pytest.fixture(scope="session")
def keypair_1024():
    return generate_key_pair(1024)


@pytest.fixture(scope="session")
def other_keypair_1024():
    return generate_key_pair(1024)


@pytest.fixture(scope="session")
def keypair_2048():
    return generate_key_pair(2048)

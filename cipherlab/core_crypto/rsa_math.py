"""
RSA Mathematical Operations Implementation

Implements the big-integer arithmetic RSA needs:
- Modular exponentiation (square-and-multiply algorithm)
- Extended Euclidean Algorithm for modular inverse
- Miller-Rabin primality testing after trial division
- Prime number generation with a cooperative checkpoint
- Raw RSA primitives and integer <-> octet-string conversion

Note: This implementation avoids using Python's built-in pow(a, b, mod).
      All modular exponentiation uses the square-and-multiply algorithm.
"""

import logging
import threading
import time
from typing import Callable, Optional, Tuple

from ..errors import OperationCancelled, ValidationError
from .random_source import DEFAULT_RANDOM, RandomSource

logger = logging.getLogger(__name__)


# Trial division filter applied before Miller-Rabin
SMALL_PRIMES = (3, 5, 7)

# Default number of Miller-Rabin witnesses
MILLER_RABIN_ROUNDS = 5

# Prime search calls the checkpoint once per this many candidates
YIELD_EVERY = 16


def mod_exp(base: int, exponent: int, modulus: int) -> int:
    """
    Modular exponentiation using square-and-multiply algorithm.

    Algorithm (right-to-left binary method):
    1. Start with result = 1
    2. For each bit of exponent (from LSB to MSB):
       - If bit is 1, multiply result by base (mod modulus)
       - Square the base (mod modulus)

    Time complexity: O(log exponent) multiplications

    Args:
        base: The base number
        exponent: The exponent (must be non-negative)
        modulus: The modulus (must be positive)

    Returns:
        (base^exponent) mod modulus

    Raises:
        ValueError: If exponent < 0 or modulus <= 0
    """
    if exponent < 0:
        raise ValueError("Exponent must be non-negative")
    if modulus <= 0:
        raise ValueError("Modulus must be positive")
    if modulus == 1:
        return 0

    base = base % modulus
    result = 1

    while exponent > 0:
        if exponent & 1:
            result = (result * base) % modulus
        base = (base * base) % modulus
        exponent >>= 1

    return result


def gcd(a: int, b: int) -> int:
    """Greatest common divisor (Euclidean algorithm)."""
    a, b = abs(a), abs(b)
    while b:
        a, b = b, a % b
    return a


def extended_gcd(a: int, b: int) -> Tuple[int, int, int]:
    """
    Extended Euclidean Algorithm.

    Finds integers x, y such that: a*x + b*y = gcd(a, b)

    Iterative, so 2048-bit operands cannot exhaust the recursion limit.

    Returns:
        Tuple (gcd, x, y)
    """
    old_r, r = a, b
    old_x, x = 1, 0
    old_y, y = 0, 1

    while r != 0:
        q = old_r // r
        old_r, r = r, old_r - q * r
        old_x, x = x, old_x - q * x
        old_y, y = y, old_y - q * y

    return old_r, old_x, old_y


def mod_inverse(a: int, m: int) -> int:
    """
    Compute modular multiplicative inverse using Extended Euclidean Algorithm.

    Finds x such that (a * x) mod m = 1

    Raises:
        ValueError: If inverse doesn't exist (gcd(a, m) != 1)
    """
    g, x, _ = extended_gcd(a % m, m)

    if g != 1:
        raise ValueError(f"Modular inverse doesn't exist (gcd = {g})")

    return x % m


def is_probable_prime(n: int, rounds: int = MILLER_RABIN_ROUNDS,
                      random_source: Optional[RandomSource] = None) -> bool:
    """
    Trial division by SMALL_PRIMES followed by Miller-Rabin.

    Probability of a composite passing: at most (1/4)^rounds

    Algorithm:
    1. Write n-1 as 2^r * d (factor out powers of 2)
    2. For each random witness a in [2, n-2]:
       - Compute x = a^d mod n
       - If x = 1 or x = n-1, continue
       - Square x up to r-1 times, looking for n-1
       - If never found, n is composite

    Args:
        n: Number to test for primality
        rounds: Number of witnesses
        random_source: Where witnesses come from (system randomness by default)

    Returns:
        True if n is probably prime, False if definitely composite
    """
    if n < 2:
        return False
    if n in (2, 3):
        return True
    if n % 2 == 0:
        return False

    for p in SMALL_PRIMES:
        if n == p:
            return True
        if n % p == 0:
            return False

    rng = random_source or DEFAULT_RANDOM

    r, d = 0, n - 1
    while d % 2 == 0:
        r += 1
        d //= 2

    for _ in range(rounds):
        a = rng.randbelow(n - 3) + 2

        x = mod_exp(a, d, n)
        if x == 1 or x == n - 1:
            continue

        for _ in range(r - 1):
            x = (x * x) % n
            if x == n - 1:
                break
        else:
            return False

    return True


# ============================================================================
# Cooperative prime search
# ============================================================================

class CancellationToken:
    """
    Thread-safe cancellation flag for long-running key generation.

    Example:
        >>> token = CancellationToken()
        >>> token.cancel()
        >>> token.cancelled
        True
    """

    def __init__(self):
        self._event = threading.Event()

    def cancel(self) -> None:
        """Request cancellation; honoured at the next checkpoint."""
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def raise_if_cancelled(self) -> None:
        """
        Raises:
            OperationCancelled: If cancel() has been called
        """
        if self._event.is_set():
            raise OperationCancelled("Key generation cancelled")


Checkpoint = Callable[[int], None]


def yield_thread(candidates_tried: int) -> None:
    """Default checkpoint: give other threads a chance to run."""
    time.sleep(0)


def random_odd_candidate(bits: int, random_source: RandomSource) -> int:
    """
    Random odd integer of exactly `bits` bits with the top two bits set.

    Two top bits guarantee that the product of two such numbers has
    exactly 2*bits bits.
    """
    candidate = random_source.randbits(bits)
    candidate |= (0b11 << (bits - 2))
    candidate |= 1
    return candidate


def generate_prime(bits: int, rounds: int = MILLER_RABIN_ROUNDS,
                   random_source: Optional[RandomSource] = None,
                   public_exponent: Optional[int] = None,
                   checkpoint: Optional[Checkpoint] = yield_thread,
                   cancel_token: Optional[CancellationToken] = None,
                   yield_every: int = YIELD_EVERY) -> int:
    """
    Generate a random prime number of specified bit length.

    Args:
        bits: Desired bit length of the prime
        rounds: Number of Miller-Rabin rounds
        random_source: Randomness provider (system randomness by default)
        public_exponent: If given, skip primes p with gcd(e, p-1) != 1
        checkpoint: Called with the number of candidates tried every
            `yield_every` candidates; None disables it
        cancel_token: Checked at every checkpoint
        yield_every: Checkpoint interval in candidates

    Returns:
        A prime number of exactly `bits` bits

    Raises:
        ValidationError: If bits < 4
        OperationCancelled: If the token is cancelled during the search
    """
    if bits < 4:
        raise ValidationError("Bit length must be at least 4")

    rng = random_source or DEFAULT_RANDOM
    tried = 0

    while True:
        tried += 1
        if tried % yield_every == 0:
            if cancel_token is not None:
                cancel_token.raise_if_cancelled()
            if checkpoint is not None:
                checkpoint(tried)

        candidate = random_odd_candidate(bits, rng)

        if public_exponent is not None and gcd(public_exponent, candidate - 1) != 1:
            continue

        if is_probable_prime(candidate, rounds, rng):
            logger.debug("Found %d-bit prime after %d candidates", bits, tried)
            return candidate


# ============================================================================
# Raw RSA and conversions
# ============================================================================

def rsa_encrypt(message: int, n: int, e: int) -> int:
    """
    Raw RSA encryption primitive (RSAEP): message^e mod n

    Raises:
        ValueError: If message is outside [0, n)
    """
    if message < 0 or message >= n:
        raise ValueError("Message representative out of range")
    return mod_exp(message, e, n)


def rsa_decrypt(ciphertext: int, n: int, d: int) -> int:
    """
    Raw RSA decryption primitive (RSADP): ciphertext^d mod n

    Raises:
        ValueError: If ciphertext is outside [0, n)
    """
    if ciphertext < 0 or ciphertext >= n:
        raise ValueError("Ciphertext representative out of range")
    return mod_exp(ciphertext, d, n)


def bytes_to_int(data: bytes) -> int:
    """OS2IP: convert bytes to integer (big-endian)."""
    return int.from_bytes(data, byteorder='big')


def int_to_bytes(n: int, length: Optional[int] = None) -> bytes:
    """
    I2OSP: convert integer to big-endian bytes.

    Without a length, the minimal number of bytes (at least one) is used.

    Raises:
        ValueError: If n does not fit in `length` bytes
    """
    if length is None:
        length = max(1, (n.bit_length() + 7) // 8)
    try:
        return n.to_bytes(length, byteorder='big')
    except OverflowError:
        raise ValueError("Integer too large for the requested length") from None


def byte_length(n: int) -> int:
    """Number of bytes needed to hold n (k for a modulus)."""
    return (n.bit_length() + 7) // 8

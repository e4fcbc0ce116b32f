"""
RSA Keys

Key containers, key-pair generation and DER/PEM serialization.

Public key formats:
- PKCS#1 RSAPublicKey        SEQUENCE { n, e }               "RSA PUBLIC KEY"
- X.509 SubjectPublicKeyInfo SEQUENCE { algId, BIT STRING }  "PUBLIC KEY"

Private key formats:
- PKCS#1 RSAPrivateKey SEQUENCE { 0, n, e, d, p, q, dP, dQ, qInv }  "RSA PRIVATE KEY"
- PKCS#8 PrivateKeyInfo SEQUENCE { 0, algId, OCTET STRING }        "PRIVATE KEY"

Generated keys are written as PKCS#1. Loading accepts all four and picks
the structure from the DER content, not from the PEM label.
"""

import asyncio
import logging
import time
from dataclasses import dataclass
from typing import Optional, Tuple

from ..core_crypto.random_source import RandomSource
from ..core_crypto.rsa_math import (
    CancellationToken, Checkpoint, MILLER_RABIN_ROUNDS, YIELD_EVERY,
    byte_length, bytes_to_int, generate_prime, int_to_bytes, mod_inverse,
    rsa_decrypt, rsa_encrypt, yield_thread,
)
from ..errors import DecryptionError, OperationCancelled, ParseError, ValidationError
from . import der
from .oaep import max_message_length, oaep_decode, oaep_encode
from .pem import pem_decode, pem_encode

logger = logging.getLogger(__name__)


DEFAULT_KEY_BITS = 2048
MIN_KEY_BITS = 1024
PUBLIC_EXPONENT = 65537

PKCS1_PUBLIC_LABEL = 'RSA PUBLIC KEY'
SPKI_PUBLIC_LABEL = 'PUBLIC KEY'
PKCS1_PRIVATE_LABEL = 'RSA PRIVATE KEY'
PKCS8_PRIVATE_LABEL = 'PRIVATE KEY'


@dataclass(frozen=True)
class RSAPublicKey:
    """Public half (n, e)."""
    n: int
    e: int

    @property
    def size_in_bits(self) -> int:
        return self.n.bit_length()

    @property
    def size_in_bytes(self) -> int:
        """k, the modulus length in bytes."""
        return byte_length(self.n)

    @property
    def max_message_length(self) -> int:
        """Largest plaintext OAEP-SHA256 can carry with this key."""
        return max_message_length(self.size_in_bytes)

    # ------------------------------------------------------------------
    # OAEP
    # ------------------------------------------------------------------

    def encrypt(self, message: bytes,
                random_source: Optional[RandomSource] = None) -> bytes:
        """
        RSA-OAEP encrypt.

        Returns:
            k-byte ciphertext

        Raises:
            MessageTooLong: If the message exceeds max_message_length
        """
        k = self.size_in_bytes
        encoded = oaep_encode(bytes(message), k, random_source)
        return int_to_bytes(rsa_encrypt(bytes_to_int(encoded), self.n, self.e), k)

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    def to_der(self, spki: bool = False) -> bytes:
        """PKCS#1 RSAPublicKey, or SubjectPublicKeyInfo when spki=True."""
        pkcs1 = der.encode_sequence([der.encode_integer(self.n), der.encode_integer(self.e)])
        if not spki:
            return pkcs1
        return der.encode_sequence([der.rsa_algorithm_identifier(), der.encode_bit_string(pkcs1)])

    def to_pem(self, spki: bool = False) -> str:
        label = SPKI_PUBLIC_LABEL if spki else PKCS1_PUBLIC_LABEL
        return pem_encode(self.to_der(spki), label)

    @classmethod
    def from_der(cls, data: bytes) -> 'RSAPublicKey':
        """
        Parse PKCS#1 or SubjectPublicKeyInfo DER.

        Raises:
            ParseError: For anything else
        """
        items = der.decode_sequence(data)
        if not items:
            raise ParseError("Empty public key SEQUENCE")

        if items[0].tag == der.TAG_SEQUENCE:
            # SubjectPublicKeyInfo { algorithm, subjectPublicKey BIT STRING }
            if len(items) != 2:
                raise ParseError("SubjectPublicKeyInfo must have two elements")
            der.check_rsa_algorithm(items[0])
            items = der.decode_sequence(der.decode_bit_string(items[1]))

        if len(items) != 2:
            raise ParseError("RSAPublicKey must contain exactly n and e")
        n, e = (der.decode_integer(item) for item in items)
        return cls._checked(n, e)

    @classmethod
    def from_pem(cls, text: str) -> 'RSAPublicKey':
        _, data = pem_decode(text)
        return cls.from_der(data)

    @classmethod
    def _checked(cls, n: int, e: int) -> 'RSAPublicKey':
        if n < 3 or e < 3 or e >= n:
            raise ParseError("Public key values out of range")
        return cls(n, e)

    def __repr__(self) -> str:
        return f"RSAPublicKey(bits={self.size_in_bits}, e={self.e})"


@dataclass(frozen=True)
class RSAPrivateKey:
    """Private half with CRT parameters (dp, dq, qinv)."""
    n: int
    e: int
    d: int
    p: int
    q: int
    dp: int
    dq: int
    qinv: int

    @classmethod
    def from_primes(cls, p: int, q: int, e: int = PUBLIC_EXPONENT) -> 'RSAPrivateKey':
        """
        Derive every private value from p, q and e.

        Raises:
            ValidationError: If p == q or e is not invertible mod (p-1)(q-1)
        """
        if p == q:
            raise ValidationError("p and q must be distinct")
        phi = (p - 1) * (q - 1)
        try:
            d = mod_inverse(e, phi)
        except ValueError:
            raise ValidationError("Public exponent is not invertible modulo phi(n)") from None
        return cls(
            n=p * q, e=e, d=d, p=p, q=q,
            dp=d % (p - 1),
            dq=d % (q - 1),
            qinv=mod_inverse(q, p),
        )

    def public_key(self) -> RSAPublicKey:
        return RSAPublicKey(self.n, self.e)

    @property
    def size_in_bits(self) -> int:
        return self.n.bit_length()

    @property
    def size_in_bytes(self) -> int:
        return byte_length(self.n)

    def decrypt(self, ciphertext: bytes) -> bytes:
        """
        RSA-OAEP decrypt a k-byte ciphertext.

        Raises:
            DecryptionError: Wrong length, out-of-range value or bad padding
        """
        k = self.size_in_bytes
        if len(ciphertext) != k:
            raise DecryptionError()
        c = bytes_to_int(ciphertext)
        if c >= self.n:
            raise DecryptionError()
        encoded = int_to_bytes(rsa_decrypt(c, self.n, self.d), k)
        return oaep_decode(encoded, k)

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    def _pkcs1_der(self) -> bytes:
        values = (0, self.n, self.e, self.d, self.p, self.q, self.dp, self.dq, self.qinv)
        return der.encode_sequence([der.encode_integer(v) for v in values])

    def to_der(self, pkcs8: bool = False) -> bytes:
        """PKCS#1 RSAPrivateKey, or PKCS#8 PrivateKeyInfo when pkcs8=True."""
        pkcs1 = self._pkcs1_der()
        if not pkcs8:
            return pkcs1
        return der.encode_sequence([
            der.encode_integer(0),
            der.rsa_algorithm_identifier(),
            der.encode_octet_string(pkcs1),
        ])

    def to_pem(self, pkcs8: bool = False) -> str:
        label = PKCS8_PRIVATE_LABEL if pkcs8 else PKCS1_PRIVATE_LABEL
        return pem_encode(self.to_der(pkcs8), label)

    @classmethod
    def from_der(cls, data: bytes) -> 'RSAPrivateKey':
        """
        Parse PKCS#1 or PKCS#8 DER.

        Raises:
            ParseError: For anything else
        """
        items = der.decode_sequence(data)
        if len(items) >= 2 and items[1].tag == der.TAG_SEQUENCE:
            # PrivateKeyInfo { version, algorithm, privateKey OCTET STRING, [attributes] }
            if len(items) not in (3, 4) or der.decode_integer(items[0]) != 0:
                raise ParseError("Unsupported PrivateKeyInfo layout")
            der.check_rsa_algorithm(items[1])
            items = der.decode_sequence(der.decode_octet_string(items[2]))

        if len(items) != 9:
            raise ParseError("RSAPrivateKey must contain nine INTEGERs")
        version, n, e, d, p, q, dp, dq, qinv = (der.decode_integer(item) for item in items)
        if version != 0:
            raise ParseError("Multi-prime RSA keys are not supported")
        if n < 3 or p * q != n:
            raise ParseError("Private key values are inconsistent")
        return cls(n=n, e=e, d=d, p=p, q=q, dp=dp, dq=dq, qinv=qinv)

    @classmethod
    def from_pem(cls, text: str) -> 'RSAPrivateKey':
        _, data = pem_decode(text)
        return cls.from_der(data)

    def __repr__(self) -> str:
        # Never print private values
        return f"RSAPrivateKey(bits={self.size_in_bits}, e={self.e})"


@dataclass(frozen=True)
class RSAKeyPair:
    """
    RSA key pair container.

    Example:
        >>> keypair = generate_key_pair(bits=1024)
        >>> ciphertext = keypair.public.encrypt(b"hi")
        >>> keypair.private.decrypt(ciphertext)
        b'hi'
    """
    public: RSAPublicKey
    private: RSAPrivateKey

    @property
    def key_size(self) -> int:
        return self.public.size_in_bits

    def public_key_pem(self) -> str:
        return self.public.to_pem()

    def private_key_pem(self) -> str:
        return self.private.to_pem()

    def __repr__(self) -> str:
        return f"RSAKeyPair(bits={self.key_size}, e={self.public.e})"


# ============================================================================
# Key generation
# ============================================================================

def generate_key_pair(bits: int = DEFAULT_KEY_BITS,
                      random_source: Optional[RandomSource] = None,
                      rounds: int = MILLER_RABIN_ROUNDS,
                      checkpoint: Optional[Checkpoint] = yield_thread,
                      cancel_token: Optional[CancellationToken] = None,
                      yield_every: int = YIELD_EVERY) -> RSAKeyPair:
    """
    Generate an RSA key pair with e = 65537.

    Two distinct primes of bits/2 bits are drawn, each with its top two bits
    set, so n has exactly `bits` bits. Primes p with gcd(e, p-1) != 1 are
    skipped so that d always exists.

    Args:
        bits: Modulus size (even, at least 1024)
        random_source: Randomness provider (system randomness by default)
        rounds: Miller-Rabin witnesses per candidate
        checkpoint: Called periodically during the prime search
        cancel_token: Cancels the search at the next checkpoint
        yield_every: Candidates between checkpoints

    Raises:
        ValidationError: Invalid bit size
        OperationCancelled: If cancel_token is cancelled
    """
    if bits < MIN_KEY_BITS or bits % 2:
        raise ValidationError(f"Key size must be an even number of bits >= {MIN_KEY_BITS}")

    if cancel_token is not None:
        cancel_token.raise_if_cancelled()

    logger.info("Generating %d-bit RSA key pair", bits)
    started = time.perf_counter()

    prime_bits = bits // 2
    search = dict(
        rounds=rounds, random_source=random_source, public_exponent=PUBLIC_EXPONENT,
        checkpoint=checkpoint, cancel_token=cancel_token, yield_every=yield_every,
    )

    try:
        p = generate_prime(prime_bits, **search)
        q = generate_prime(prime_bits, **search)
        while p == q:
            q = generate_prime(prime_bits, **search)
    except OperationCancelled:
        logger.warning("RSA key generation cancelled after %.2fs", time.perf_counter() - started)
        raise

    private = RSAPrivateKey.from_primes(p, q, PUBLIC_EXPONENT)
    logger.info("Generated %d-bit RSA key pair in %.2fs",
                private.size_in_bits, time.perf_counter() - started)
    return RSAKeyPair(public=private.public_key(), private=private)


def generate_key_pair_pem(bits: int = DEFAULT_KEY_BITS, **kwargs) -> Tuple[str, str]:
    """
    Generate a key pair and return (public_key_pem, private_key_pem).

    Keyword arguments are passed to generate_key_pair().
    """
    keypair = generate_key_pair(bits, **kwargs)
    return keypair.public_key_pem(), keypair.private_key_pem()


async def agenerate_key_pair(bits: int = DEFAULT_KEY_BITS, **kwargs) -> RSAKeyPair:
    """Run generate_key_pair() in a worker thread so the event loop stays free."""
    return await asyncio.to_thread(generate_key_pair, bits, **kwargs)


def load_public_key(pem: str) -> RSAPublicKey:
    """Parse a public key PEM (PKCS#1 or SubjectPublicKeyInfo)."""
    return RSAPublicKey.from_pem(pem)


def load_private_key(pem: str) -> RSAPrivateKey:
    """Parse a private key PEM (PKCS#1 or PKCS#8)."""
    return RSAPrivateKey.from_pem(pem)

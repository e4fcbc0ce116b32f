"""
RSA-OAEP padding (PKCS#1 v2.2, section 7.1) with SHA-256 and MGF1-SHA256.

Encoded message layout (k = modulus length in bytes, hLen = 32):

    EM = 0x00 || maskedSeed (hLen) || maskedDB (k - hLen - 1)
    DB = lHash || PS (zeros) || 0x01 || M

The label is always empty, so lHash = SHA-256(b"").
"""

from typing import Optional

from ..core_crypto.codec import xor_bytes
from ..core_crypto.random_source import DEFAULT_RANDOM, RandomSource
from ..core_crypto.sha256 import SHA256, sha256, DIGEST_SIZE
from ..errors import DecryptionError, MessageTooLong


HASH_LEN = DIGEST_SIZE
EMPTY_LABEL_HASH = sha256(b'')


def mgf1(seed: bytes, length: int) -> bytes:
    """
    MGF1 mask generation over SHA-256.

    T = SHA256(seed || C(0)) || SHA256(seed || C(1)) || ...
    with C(i) the 4-byte big-endian counter, truncated to `length`.
    """
    output = bytearray()
    counter = 0
    while len(output) < length:
        block = SHA256(seed)
        block.update(counter.to_bytes(4, byteorder='big'))
        output += block.digest()
        counter += 1
    return bytes(output[:length])


def max_message_length(k: int) -> int:
    """Largest message OAEP can carry for a k-byte modulus."""
    return k - 2 * HASH_LEN - 2


def oaep_encode(message: bytes, k: int,
                random_source: Optional[RandomSource] = None) -> bytes:
    """
    Build the k-byte encoded message for `message`.

    Args:
        message: Plaintext bytes
        k: Modulus length in bytes
        random_source: Supplies the hLen-byte seed

    Raises:
        MessageTooLong: If len(message) > k - 2*hLen - 2
    """
    limit = max_message_length(k)
    if len(message) > limit:
        raise MessageTooLong(
            f"Message is {len(message)} bytes; this key can encrypt at most {max(limit, 0)}"
        )

    padding = b'\x00' * (limit - len(message))
    db = EMPTY_LABEL_HASH + padding + b'\x01' + message

    seed = (random_source or DEFAULT_RANDOM).token_bytes(HASH_LEN)
    masked_db = xor_bytes(db, mgf1(seed, k - HASH_LEN - 1))
    masked_seed = xor_bytes(seed, mgf1(masked_db, HASH_LEN))

    return b'\x00' + masked_seed + masked_db


def oaep_decode(encoded: bytes, k: int) -> bytes:
    """
    Recover the message from a k-byte encoded message.

    All checks run before raising, and every failure raises the same
    DecryptionError.
    """
    if len(encoded) != k or k < 2 * HASH_LEN + 2:
        raise DecryptionError()

    leading = encoded[0]
    masked_seed = encoded[1:1 + HASH_LEN]
    masked_db = encoded[1 + HASH_LEN:]

    seed = xor_bytes(masked_seed, mgf1(masked_db, HASH_LEN))
    db = xor_bytes(masked_db, mgf1(seed, k - HASH_LEN - 1))

    label_mismatch = 0
    for a, b in zip(db[:HASH_LEN], EMPTY_LABEL_HASH):
        label_mismatch |= a ^ b

    index = HASH_LEN
    while index < len(db) and db[index] == 0x00:
        index += 1
    bad_separator = index >= len(db) or db[index] != 0x01

    if leading != 0x00 or label_mismatch or bad_separator:
        raise DecryptionError()

    return db[index + 1:]

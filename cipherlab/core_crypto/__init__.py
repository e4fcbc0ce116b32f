# Core Cryptography Module
"""
Core cryptographic implementations including:
- UTF-8 / Base64 / hex codecs - codec.py
- Injectable randomness - random_source.py
- SHA-1 and SHA-256 hashing - sha1.py, sha256.py, digest.py
- HMAC-SHA256 - hmac_sha256.py
- AES-128/192/256 block cipher - aes.py
- CBC, CTR and OFB modes with PKCS#7 - block_modes.py
- RC4 stream cipher - rc4.py
- RSA mathematics - rsa_math.py

All algorithms are built from scratch on integer arithmetic; the only
platform service used is the `secrets` randomness source.
"""

from .codec import (
    utf8_encode,
    utf8_decode,
    b64_encode,
    b64_decode,
    hex_encode,
    hex_decode,
    xor_bytes,
)

from .random_source import (
    RandomSource,
    SystemRandomSource,
    ByteStreamRandomSource,
    RandomnessExhausted,
)

from .sha1 import SHA1, sha1, sha1_hex
from .sha256 import SHA256, sha256, sha256_hex
from .digest import new_hash, hash_text
from .hmac_sha256 import hmac_sha256, hmac_sign, hmac_verify

from .aes import AES, AESKeySchedule
from .block_modes import (
    BlockMode,
    pkcs7_pad,
    pkcs7_unpad,
    encrypt_bytes,
    decrypt_bytes,
    encrypt_text,
    decrypt_text,
)

from .rc4 import RC4, rc4, rc4_crypt

from .rsa_math import (
    CancellationToken,
    mod_exp,
    mod_inverse,
    is_probable_prime,
    generate_prime,
)

__all__ = [
    # Codecs
    'utf8_encode',
    'utf8_decode',
    'b64_encode',
    'b64_decode',
    'hex_encode',
    'hex_decode',
    'xor_bytes',
    # Randomness
    'RandomSource',
    'SystemRandomSource',
    'ByteStreamRandomSource',
    'RandomnessExhausted',
    # Hashing
    'SHA1',
    'sha1',
    'sha1_hex',
    'SHA256',
    'sha256',
    'sha256_hex',
    'new_hash',
    'hash_text',
    'hmac_sha256',
    'hmac_sign',
    'hmac_verify',
    # AES
    'AES',
    'AESKeySchedule',
    'BlockMode',
    'pkcs7_pad',
    'pkcs7_unpad',
    'encrypt_bytes',
    'decrypt_bytes',
    'encrypt_text',
    'decrypt_text',
    # RC4
    'RC4',
    'rc4',
    'rc4_crypt',
    # RSA math
    'CancellationToken',
    'mod_exp',
    'mod_inverse',
    'is_probable_prime',
    'generate_prime',
]

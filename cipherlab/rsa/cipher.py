"""
RSA-OAEP text encryption.

Plaintext is UTF-8 encoded, OAEP-padded with SHA-256 and encrypted under the
public key. Ciphertext travels as Base64 of the k-byte RSA output.
"""

import logging
from typing import Optional, Union

from ..core_crypto.codec import b64_decode, b64_encode, to_bytes, utf8_decode
from ..core_crypto.random_source import RandomSource
from .keys import RSAPrivateKey, RSAPublicKey

logger = logging.getLogger(__name__)


PublicKeyInput = Union[str, RSAPublicKey, RSAPrivateKey]
PrivateKeyInput = Union[str, RSAPrivateKey]


def _public_key(key: PublicKeyInput) -> RSAPublicKey:
    if isinstance(key, RSAPublicKey):
        return key
    if isinstance(key, RSAPrivateKey):
        return key.public_key()
    return RSAPublicKey.from_pem(key)


def _private_key(key: PrivateKeyInput) -> RSAPrivateKey:
    if isinstance(key, RSAPrivateKey):
        return key
    return RSAPrivateKey.from_pem(key)


def rsa_encrypt(plaintext: Union[str, bytes], public_key: PublicKeyInput,
                random_source: Optional[RandomSource] = None) -> str:
    """
    Encrypt text with RSA-OAEP (SHA-256, empty label).

    Args:
        plaintext: Text (UTF-8 encoded) or raw bytes
        public_key: PEM string, RSAPublicKey, or an RSAPrivateKey whose
            public half is used
        random_source: Supplies the OAEP seed

    Returns:
        Base64 ciphertext

    Raises:
        ParseError: If the key PEM cannot be parsed
        MessageTooLong: If the encoded plaintext is too long for the key
    """
    key = _public_key(public_key)
    message = to_bytes(plaintext)
    logger.debug("RSA-OAEP encrypt: %d bytes under a %d-bit key",
                 len(message), key.size_in_bits)
    return b64_encode(key.encrypt(message, random_source))


def rsa_decrypt_bytes(ciphertext_b64: str, private_key: PrivateKeyInput) -> bytes:
    """
    Decrypt Base64 RSA-OAEP ciphertext to raw bytes.

    Raises:
        ParseError: If the key PEM cannot be parsed
        InvalidEncoding: If the ciphertext is not valid Base64
        DecryptionError: Wrong length, out-of-range value or bad padding
    """
    key = _private_key(private_key)
    return key.decrypt(b64_decode(ciphertext_b64))


def rsa_decrypt(ciphertext_b64: str, private_key: PrivateKeyInput) -> str:
    """
    Decrypt Base64 RSA-OAEP ciphertext to text.

    Raises:
        InvalidUtf8Output: If the recovered message is not UTF-8
        (plus everything rsa_decrypt_bytes raises)
    """
    return utf8_decode(rsa_decrypt_bytes(ciphertext_b64, private_key))

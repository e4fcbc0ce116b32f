"""
Error Taxonomy

Every failure raised by cipherlab derives from CipherLabError and falls in
one of five families:

- ValidationError: malformed or mis-sized key, IV, text or ciphertext
- CryptographicFailure: a key or ciphertext that fails a cryptographic check
- UnsupportedOperation: unknown mode, algorithm or direction
- ParseError: malformed PEM/DER key material
- OperationCancelled: key generation stopped through a cancellation token

ValidationError and ParseError also derive from ValueError so callers that
only know the builtin still catch them.

Decryption failures carry a fixed message per type. They never say which
internal check failed.
"""


class CipherLabError(Exception):
    """Base class for every cipherlab failure."""
    pass


# ============================================================================
# Validation
# ============================================================================

class ValidationError(CipherLabError, ValueError):
    """Raised when an input fails eager validation."""
    pass


class InvalidKeyLength(ValidationError):
    """Key has a length the algorithm does not accept."""
    pass


class InvalidIVLength(ValidationError):
    """IV / initial counter is not exactly one block."""
    pass


class InvalidLength(ValidationError):
    """Text or ciphertext length is incompatible with the cipher."""
    pass


class InvalidKeyFormat(ValidationError):
    """Key has the wrong shape (characters, matrix size...)."""
    pass


class InvalidEncoding(ValidationError):
    """Base64 or hex input could not be decoded."""
    pass


class MessageTooLong(ValidationError):
    """Plaintext exceeds the OAEP capacity of the key."""
    pass


# ============================================================================
# Cryptographic failures
# ============================================================================

class CryptographicFailure(CipherLabError):
    """Raised when a key or ciphertext fails a cryptographic check."""
    pass


class NonInvertibleKey(CryptographicFailure):
    """Hill key matrix has no inverse modulo 26."""
    pass


class InvalidPadding(CryptographicFailure):
    """PKCS#7 padding check failed after decryption."""

    def __init__(self, message: str = "Invalid padding"):
        super().__init__(message)


class DecryptionError(CryptographicFailure):
    """RSA-OAEP decoding failed."""

    def __init__(self, message: str = "Decryption error"):
        super().__init__(message)


class InvalidUtf8Output(CryptographicFailure):
    """Decrypted bytes are not valid UTF-8 (usually a wrong key)."""

    def __init__(self, message: str = "Decrypted data is not valid UTF-8"):
        super().__init__(message)


# ============================================================================
# Unsupported operations
# ============================================================================

class UnsupportedOperation(CipherLabError, NotImplementedError):
    """Raised for unknown modes, algorithms or directions."""
    pass


class UnsupportedMode(UnsupportedOperation):
    """Block cipher mode is not CBC, CTR or OFB."""
    pass


class UnsupportedAlgorithm(UnsupportedOperation):
    """Hash algorithm name is not recognised."""
    pass


# ============================================================================
# Parsing / control flow
# ============================================================================

class ParseError(CipherLabError, ValueError):
    """Raised when PEM or DER key material is malformed."""
    pass


class OperationCancelled(CipherLabError):
    """Raised at a checkpoint after the cancellation token was triggered."""
    pass

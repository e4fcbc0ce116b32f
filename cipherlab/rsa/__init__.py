# RSA Module
"""
RSA-OAEP public-key encryption including:
- Key pair generation with cooperative cancellation - keys.py
- PKCS#1 / SubjectPublicKeyInfo / PKCS#8 key encoding - der.py, pem.py
- OAEP padding with SHA-256 and MGF1 - oaep.py
- Text encryption with Base64 ciphertext - cipher.py
"""

# name -> submodule
_EXPORTS = {
    'RSAPublicKey': '.keys',
    'RSAPrivateKey': '.keys',
    'RSAKeyPair': '.keys',
    'generate_key_pair': '.keys',
    'generate_key_pair_pem': '.keys',
    'agenerate_key_pair': '.keys',
    'load_public_key': '.keys',
    'load_private_key': '.keys',
    'DEFAULT_KEY_BITS': '.keys',
    'MIN_KEY_BITS': '.keys',
    'PUBLIC_EXPONENT': '.keys',
    'rsa_encrypt': '.cipher',
    'rsa_decrypt': '.cipher',
    'rsa_decrypt_bytes': '.cipher',
}


# Lazy imports so `import cipherlab.rsa.der` does not pull in key generation
def __getattr__(name):
    """Lazy import of the public API."""
    if name not in _EXPORTS:
        raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
    import importlib
    return getattr(importlib.import_module(_EXPORTS[name], __name__), name)


__all__ = list(_EXPORTS)

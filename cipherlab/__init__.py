# cipherlab
"""
Cryptographic algorithm library built from primitive arithmetic.

Modules:
- core_crypto: codecs, SHA-1/SHA-256, HMAC-SHA256, AES (CBC/CTR/OFB), RC4, RSA math
- classical: monoalphabetic, Hill 3x3, columnar transposition
- rsa: RSA-OAEP with key generation and PEM/DER keys
- errors: the exception hierarchy

Example:
    >>> import cipherlab
    >>> cipherlab.hash_text("abc")
    'ba7816bf8f01cfea414140de5dae2223b00361a396177a9cb410ff61f20015ad'

For educational use; nothing here is hardened against side channels.
"""

__version__ = '0.1.0'

# name -> (module, attribute)
_EXPORTS = {
    'aes_encrypt': ('.core_crypto.block_modes', 'encrypt'),
    'aes_decrypt': ('.core_crypto.block_modes', 'decrypt'),
    'aes_encrypt_text': ('.core_crypto.block_modes', 'encrypt_text'),
    'aes_decrypt_text': ('.core_crypto.block_modes', 'decrypt_text'),
    'BlockMode': ('.core_crypto.block_modes', 'BlockMode'),
    'rc4_crypt': ('.core_crypto.rc4', 'rc4_crypt'),
    'hash_text': ('.core_crypto.digest', 'hash_text'),
    'hmac_sign': ('.core_crypto.hmac_sha256', 'hmac_sign'),
    'hmac_verify': ('.core_crypto.hmac_sha256', 'hmac_verify'),
    'generate_key_pair': ('.rsa.keys', 'generate_key_pair'),
    'generate_key_pair_pem': ('.rsa.keys', 'generate_key_pair_pem'),
    'rsa_encrypt': ('.rsa.cipher', 'rsa_encrypt'),
    'rsa_decrypt': ('.rsa.cipher', 'rsa_decrypt'),
    'hill_encrypt': ('.classical.hill', 'encrypt'),
    'hill_decrypt': ('.classical.hill', 'decrypt'),
    'columnar_encrypt': ('.classical.columnar', 'encrypt'),
    'columnar_decrypt': ('.classical.columnar', 'decrypt'),
    'monoalphabetic_encrypt': ('.classical.monoalphabetic', 'encrypt'),
    'monoalphabetic_decrypt': ('.classical.monoalphabetic', 'decrypt'),
}


# Lazy imports so importing one algorithm does not load them all
def __getattr__(name):
    """Resolve top-level operations on first access."""
    if name not in _EXPORTS:
        raise AttributeError(f"module 'cipherlab' has no attribute {name!r}")
    import importlib
    module_name, attribute = _EXPORTS[name]
    return getattr(importlib.import_module(module_name, __name__), attribute)


__all__ = ['__version__', *_EXPORTS]

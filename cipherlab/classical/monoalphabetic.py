"""
Monoalphabetic Substitution Cipher

The keyword's unique letters, in first-seen order, followed by the rest of
A-Z form the cipher alphabet:

    key "ZEBRA"  ->  ZEBRACDFGHIJKLMNOPQSTUVWXY

Letters keep their case; anything outside A-Z passes through unchanged.
Classical cipher for demonstration only.
"""

import string
from typing import Dict

ALPHABET = string.ascii_uppercase


def cipher_alphabet(key: str) -> str:
    """
    Build the substitution alphabet for a keyword.

    Example:
        >>> cipher_alphabet("zebra")
        'ZEBRACDFGHIJKLMNOPQSTUVWXY'
    """
    seen = []
    for char in key.upper():
        if char in ALPHABET and char not in seen:
            seen.append(char)
    return ''.join(seen) + ''.join(c for c in ALPHABET if c not in seen)


def _substitute(text: str, mapping: Dict[str, str]) -> str:
    output = []
    for char in text:
        mapped = mapping.get(char.upper())
        if mapped is None:
            output.append(char)
        elif char.islower():
            output.append(mapped.lower())
        else:
            output.append(mapped)
    return ''.join(output)


def encrypt(plaintext: str, key: str) -> str:
    """
    Encrypt text with the keyword alphabet.

    Example:
        >>> encrypt("Hello, World", "ZEBRA")
        'Fajjm, Vmpjr'
    """
    return _substitute(plaintext, dict(zip(ALPHABET, cipher_alphabet(key))))


def decrypt(ciphertext: str, key: str) -> str:
    """Invert encrypt() for the same keyword."""
    return _substitute(ciphertext, dict(zip(cipher_alphabet(key), ALPHABET)))

# Classical Ciphers Module
"""
Classical (pre-computer) ciphers including:
- Monoalphabetic keyword substitution - monoalphabetic.py
- 3x3 Hill cipher over Z/26 - hill.py
- Columnar transposition - columnar.py

Each module exposes encrypt(text, key) and decrypt(text, key).
For demonstration only; none of these resist cryptanalysis.
"""

from . import columnar, hill, monoalphabetic

__all__ = [
    'columnar',
    'hill',
    'monoalphabetic',
]

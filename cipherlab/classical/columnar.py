"""
Columnar Transposition Cipher

Plaintext is written row by row under the key, padded with 'x' to fill the
last row, and read out column by column in alphabetical order of the key
letters.

    key "ZEBRA", text "HELLOWORLD"

        Z E B R A
        ---------
        H E L L O
        W O R L D      ->  OD LR EO LL HW  ->  "ODLREOLLHW"
"""

import string
from typing import List

from ..errors import InvalidKeyFormat, InvalidLength

PAD_CHAR = 'x'


def clean_key(key: str) -> str:
    """Uppercase, drop non-letters and repeated letters."""
    seen = []
    for char in key.upper():
        if char in string.ascii_uppercase and char not in seen:
            seen.append(char)
    return ''.join(seen)


def column_order(key: str) -> List[int]:
    """
    Column indices in reading order.

    Raises:
        InvalidKeyFormat: If the key has no letters
    """
    cleaned = clean_key(key)
    if not cleaned:
        raise InvalidKeyFormat("Columnar key must contain at least one letter")
    return sorted(range(len(cleaned)), key=lambda index: cleaned[index])


def encrypt(plaintext: str, key: str) -> str:
    order = column_order(key)
    cols = len(order)
    rows = -(-len(plaintext) // cols)
    padded = plaintext + PAD_CHAR * (rows * cols - len(plaintext))
    return ''.join(padded[col::cols] for col in order)


def decrypt(ciphertext: str, key: str) -> str:
    """
    Reverse encrypt(). Padding characters are kept.

    Raises:
        InvalidKeyFormat: If the key has no letters
        InvalidLength: If the length is not a multiple of the key length
    """
    order = column_order(key)
    cols = len(order)
    if len(ciphertext) % cols:
        raise InvalidLength("Ciphertext length must be a multiple of the key length")

    rows = len(ciphertext) // cols
    columns = [''] * cols
    for position, col in enumerate(order):
        columns[col] = ciphertext[position * rows:(position + 1) * rows]
    return ''.join(''.join(column[row] for column in columns) for row in range(rows))

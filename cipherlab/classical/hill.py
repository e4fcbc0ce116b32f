"""
Hill Cipher (3x3)

A 9-letter key is read row-major into a 3x3 matrix over Z/26 (A=0 ... Z=25).
Each block of three letters is treated as a column vector and multiplied by
the key matrix:

    C = K * P  (mod 26)
    P = K^-1 * C  (mod 26),  K^-1 = det(K)^-1 * adj(K)

The key is only usable when gcd(det(K) mod 26, 26) == 1.

Text is uppercased and stripped to A-Z before processing. Encryption pads
with 'X' to a multiple of three; decryption leaves that padding in place.
"""

import string
from typing import List, Sequence, Union

from ..core_crypto.rsa_math import mod_inverse
from ..errors import InvalidKeyFormat, InvalidLength, NonInvertibleKey

ALPHABET = string.ascii_uppercase
MODULUS = 26
BLOCK_SIZE = 3
PAD_CHAR = 'X'

Matrix = List[List[int]]
KeyInput = Union[str, Sequence[Sequence[int]]]


def clean_text(text: str) -> str:
    """Uppercase and keep only A-Z."""
    return ''.join(c for c in text.upper() if c in ALPHABET)


def key_to_matrix(key: KeyInput) -> Matrix:
    """
    Turn a 9-letter key (or a 3x3 integer matrix) into a key matrix mod 26.

    Raises:
        InvalidKeyFormat: If the key is not 9 letters / not 3x3
    """
    if isinstance(key, str):
        letters = key.upper()
        if len(letters) != BLOCK_SIZE * BLOCK_SIZE or any(c not in ALPHABET for c in letters):
            raise InvalidKeyFormat("Hill key must be exactly 9 letters (A-Z)")
        values = [ALPHABET.index(c) for c in letters]
        return [values[row * BLOCK_SIZE:(row + 1) * BLOCK_SIZE] for row in range(BLOCK_SIZE)]

    try:
        rows = [list(row) for row in key]
    except TypeError:
        raise InvalidKeyFormat("Hill key matrix must be 3x3") from None
    if len(rows) != BLOCK_SIZE or any(len(row) != BLOCK_SIZE for row in rows):
        raise InvalidKeyFormat("Hill key matrix must be 3x3")
    if any(not isinstance(v, int) for row in rows for v in row):
        raise InvalidKeyFormat("Hill key matrix entries must be integers")
    return [[v % MODULUS for v in row] for row in rows]


def determinant3x3(m: Matrix) -> int:
    """Determinant by cofactor expansion along the first row."""
    return (m[0][0] * (m[1][1] * m[2][2] - m[1][2] * m[2][1])
            - m[0][1] * (m[1][0] * m[2][2] - m[1][2] * m[2][0])
            + m[0][2] * (m[1][0] * m[2][1] - m[1][1] * m[2][0]))


def adjugate3x3(m: Matrix) -> Matrix:
    """Transpose of the cofactor matrix."""
    def cofactor(row: int, col: int) -> int:
        minor = [[m[r][c] for c in range(3) if c != col] for r in range(3) if r != row]
        value = minor[0][0] * minor[1][1] - minor[0][1] * minor[1][0]
        return -value if (row + col) % 2 else value

    return [[cofactor(col, row) for col in range(3)] for row in range(3)]


def inverse_matrix(m: Matrix) -> Matrix:
    """
    Inverse of a key matrix modulo 26.

    Raises:
        NonInvertibleKey: If det(m) shares a factor with 26
    """
    det = determinant3x3(m) % MODULUS
    try:
        det_inv = mod_inverse(det, MODULUS)
    except ValueError:
        raise NonInvertibleKey(
            "Key matrix is not invertible modulo 26; choose a different 9-letter key"
        ) from None
    return [[(cell * det_inv) % MODULUS for cell in row] for row in adjugate3x3(m)]


def _apply(matrix: Matrix, text: str) -> str:
    output = []
    for i in range(0, len(text), BLOCK_SIZE):
        vector = [ALPHABET.index(c) for c in text[i:i + BLOCK_SIZE]]
        for row in matrix:
            output.append(ALPHABET[sum(k * v for k, v in zip(row, vector)) % MODULUS])
    return ''.join(output)


def encrypt(plaintext: str, key: KeyInput) -> str:
    """
    Encrypt with a 3x3 Hill key.

    Example:
        >>> encrypt("act", "GYBNQKURP")
        'POH'

    Raises:
        InvalidKeyFormat: Malformed key
        NonInvertibleKey: Key matrix has no inverse mod 26
    """
    matrix = key_to_matrix(key)
    inverse_matrix(matrix)  # reject keys that could never decrypt

    text = clean_text(plaintext)
    if len(text) % BLOCK_SIZE:
        text += PAD_CHAR * (BLOCK_SIZE - len(text) % BLOCK_SIZE)
    return _apply(matrix, text)


def decrypt(ciphertext: str, key: KeyInput) -> str:
    """
    Decrypt with a 3x3 Hill key.

    Raises:
        InvalidKeyFormat: Malformed key
        NonInvertibleKey: Key matrix has no inverse mod 26
        InvalidLength: Cleaned ciphertext is not a multiple of three letters
    """
    inverse = inverse_matrix(key_to_matrix(key))

    text = clean_text(ciphertext)
    if len(text) % BLOCK_SIZE:
        raise InvalidLength("Hill ciphertext must be a multiple of 3 letters")
    return _apply(inverse, text)

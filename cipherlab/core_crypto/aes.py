"""
AES Block Cipher (From Scratch)

Implements the Rijndael key schedule and single-block transform for
AES-128, AES-192 and AES-256 (FIPS 197).

Components:
- S-box / inverse S-box substitution
- Key expansion: RotWord, SubWord, Rcon (extra SubWord for 256-bit keys)
- Round transforms: SubBytes, ShiftRows, MixColumns, AddRoundKey
- Inverse cipher: InvShiftRows, InvSubBytes, InvMixColumns

The state is a flat list of 16 bytes in FIPS column-major order: byte
``r + 4*c`` is row r of column c, which is also the input byte order.
Modes of operation live in block_modes.py.
"""

from typing import List

from ..errors import InvalidKeyLength, InvalidLength


BLOCK_SIZE = 16

# Key length in bytes -> number of rounds
ROUNDS_BY_KEY_SIZE = {16: 10, 24: 12, 32: 14}
VALID_KEY_SIZES = tuple(sorted(ROUNDS_BY_KEY_SIZE))

# Rijndael S-box (Substitution box)
S_BOX = [
    0x63, 0x7c, 0x77, 0x7b, 0xf2, 0x6b, 0x6f, 0xc5, 0x30, 0x01, 0x67, 0x2b, 0xfe, 0xd7, 0xab, 0x76,
    0xca, 0x82, 0xc9, 0x7d, 0xfa, 0x59, 0x47, 0xf0, 0xad, 0xd4, 0xa2, 0xaf, 0x9c, 0xa4, 0x72, 0xc0,
    0xb7, 0xfd, 0x93, 0x26, 0x36, 0x3f, 0xf7, 0xcc, 0x34, 0xa5, 0xe5, 0xf1, 0x71, 0xd8, 0x31, 0x15,
    0x04, 0xc7, 0x23, 0xc3, 0x18, 0x96, 0x05, 0x9a, 0x07, 0x12, 0x80, 0xe2, 0xeb, 0x27, 0xb2, 0x75,
    0x09, 0x83, 0x2c, 0x1a, 0x1b, 0x6e, 0x5a, 0xa0, 0x52, 0x3b, 0xd6, 0xb3, 0x29, 0xe3, 0x2f, 0x84,
    0x53, 0xd1, 0x00, 0xed, 0x20, 0xfc, 0xb1, 0x5b, 0x6a, 0xcb, 0xbe, 0x39, 0x4a, 0x4c, 0x58, 0xcf,
    0xd0, 0xef, 0xaa, 0xfb, 0x43, 0x4d, 0x33, 0x85, 0x45, 0xf9, 0x02, 0x7f, 0x50, 0x3c, 0x9f, 0xa8,
    0x51, 0xa3, 0x40, 0x8f, 0x92, 0x9d, 0x38, 0xf5, 0xbc, 0xb6, 0xda, 0x21, 0x10, 0xff, 0xf3, 0xd2,
    0xcd, 0x0c, 0x13, 0xec, 0x5f, 0x97, 0x44, 0x17, 0xc4, 0xa7, 0x7e, 0x3d, 0x64, 0x5d, 0x19, 0x73,
    0x60, 0x81, 0x4f, 0xdc, 0x22, 0x2a, 0x90, 0x88, 0x46, 0xee, 0xb8, 0x14, 0xde, 0x5e, 0x0b, 0xdb,
    0xe0, 0x32, 0x3a, 0x0a, 0x49, 0x06, 0x24, 0x5c, 0xc2, 0xd3, 0xac, 0x62, 0x91, 0x95, 0xe4, 0x79,
    0xe7, 0xc8, 0x37, 0x6d, 0x8d, 0xd5, 0x4e, 0xa9, 0x6c, 0x56, 0xf4, 0xea, 0x65, 0x7a, 0xae, 0x08,
    0xba, 0x78, 0x25, 0x2e, 0x1c, 0xa6, 0xb4, 0xc6, 0xe8, 0xdd, 0x74, 0x1f, 0x4b, 0xbd, 0x8b, 0x8a,
    0x70, 0x3e, 0xb5, 0x66, 0x48, 0x03, 0xf6, 0x0e, 0x61, 0x35, 0x57, 0xb9, 0x86, 0xc1, 0x1d, 0x9e,
    0xe1, 0xf8, 0x98, 0x11, 0x69, 0xd9, 0x8e, 0x94, 0x9b, 0x1e, 0x87, 0xe9, 0xce, 0x55, 0x28, 0xdf,
    0x8c, 0xa1, 0x89, 0x0d, 0xbf, 0xe6, 0x42, 0x68, 0x41, 0x99, 0x2d, 0x0f, 0xb0, 0x54, 0xbb, 0x16,
]

# Inverse S-box (InvSubBytes)
INV_S_BOX = [
    0x52, 0x09, 0x6a, 0xd5, 0x30, 0x36, 0xa5, 0x38, 0xbf, 0x40, 0xa3, 0x9e, 0x81, 0xf3, 0xd7, 0xfb,
    0x7c, 0xe3, 0x39, 0x82, 0x9b, 0x2f, 0xff, 0x87, 0x34, 0x8e, 0x43, 0x44, 0xc4, 0xde, 0xe9, 0xcb,
    0x54, 0x7b, 0x94, 0x32, 0xa6, 0xc2, 0x23, 0x3d, 0xee, 0x4c, 0x95, 0x0b, 0x42, 0xfa, 0xc3, 0x4e,
    0x08, 0x2e, 0xa1, 0x66, 0x28, 0xd9, 0x24, 0xb2, 0x76, 0x5b, 0xa2, 0x49, 0x6d, 0x8b, 0xd1, 0x25,
    0x72, 0xf8, 0xf6, 0x64, 0x86, 0x68, 0x98, 0x16, 0xd4, 0xa4, 0x5c, 0xcc, 0x5d, 0x65, 0xb6, 0x92,
    0x6c, 0x70, 0x48, 0x50, 0xfd, 0xed, 0xb9, 0xda, 0x5e, 0x15, 0x46, 0x57, 0xa7, 0x8d, 0x9d, 0x84,
    0x90, 0xd8, 0xab, 0x00, 0x8c, 0xbc, 0xd3, 0x0a, 0xf7, 0xe4, 0x58, 0x05, 0xb8, 0xb3, 0x45, 0x06,
    0xd0, 0x2c, 0x1e, 0x8f, 0xca, 0x3f, 0x0f, 0x02, 0xc1, 0xaf, 0xbd, 0x03, 0x01, 0x13, 0x8a, 0x6b,
    0x3a, 0x91, 0x11, 0x41, 0x4f, 0x67, 0xdc, 0xea, 0x97, 0xf2, 0xcf, 0xce, 0xf0, 0xb4, 0xe6, 0x73,
    0x96, 0xac, 0x74, 0x22, 0xe7, 0xad, 0x35, 0x85, 0xe2, 0xf9, 0x37, 0xe8, 0x1c, 0x75, 0xdf, 0x6e,
    0x47, 0xf1, 0x1a, 0x71, 0x1d, 0x29, 0xc5, 0x89, 0x6f, 0xb7, 0x62, 0x0e, 0xaa, 0x18, 0xbe, 0x1b,
    0xfc, 0x56, 0x3e, 0x4b, 0xc6, 0xd2, 0x79, 0x20, 0x9a, 0xdb, 0xc0, 0xfe, 0x78, 0xcd, 0x5a, 0xf4,
    0x1f, 0xdd, 0xa8, 0x33, 0x88, 0x07, 0xc7, 0x31, 0xb1, 0x12, 0x10, 0x59, 0x27, 0x80, 0xec, 0x5f,
    0x60, 0x51, 0x7f, 0xa9, 0x19, 0xb5, 0x4a, 0x0d, 0x2d, 0xe5, 0x7a, 0x9f, 0x93, 0xc9, 0x9c, 0xef,
    0xa0, 0xe0, 0x3b, 0x4d, 0xae, 0x2a, 0xf5, 0xb0, 0xc8, 0xeb, 0xbb, 0x3c, 0x83, 0x53, 0x99, 0x61,
    0x17, 0x2b, 0x04, 0x7e, 0xba, 0x77, 0xd6, 0x26, 0xe1, 0x69, 0x14, 0x63, 0x55, 0x21, 0x0c, 0x7d,
]

# Round constants (Rcon): rc[i] = x^(i-1) in GF(2^8), first byte of the word.
# AES-128 consumes up to Rcon[10], AES-192 up to Rcon[8], AES-256 up to Rcon[7]
RCON = [
    0x00,  # Not used (index 0)
    0x01, 0x02, 0x04, 0x08, 0x10, 0x20, 0x40, 0x80, 0x1b, 0x36,
]

# AES reduction polynomial x^8 + x^4 + x^3 + x + 1 (without the x^8 term)
REDUCTION_POLY = 0x1B


# ============================================================================
# GF(2^8) arithmetic
# ============================================================================

def gmul(a: int, b: int) -> int:
    """
    Multiply two bytes in GF(2^8) modulo the AES polynomial.

    Russian-peasant multiplication: add (XOR) a for every set bit of b,
    doubling a each step and reducing by 0x1B when it overflows.
    """
    p = 0
    for _ in range(8):
        if b & 1:
            p ^= a
        high_bit = a & 0x80
        a = (a << 1) & 0xFF
        if high_bit:
            a ^= REDUCTION_POLY
        b >>= 1
    return p


# Multiplication tables for the MixColumns coefficients
MUL2 = [gmul(x, 2) for x in range(256)]
MUL3 = [gmul(x, 3) for x in range(256)]
MUL9 = [gmul(x, 9) for x in range(256)]
MUL11 = [gmul(x, 11) for x in range(256)]
MUL13 = [gmul(x, 13) for x in range(256)]
MUL14 = [gmul(x, 14) for x in range(256)]


# ============================================================================
# Key schedule
# ============================================================================

def sub_word(word: List[int]) -> List[int]:
    """Apply S-box substitution to each byte in a 4-byte word."""
    return [S_BOX[b] for b in word]


def rot_word(word: List[int]) -> List[int]:
    """
    Rotate a 4-byte word left by one byte.
    [a, b, c, d] -> [b, c, d, a]
    """
    return word[1:] + word[:1]


def xor_words(word1: List[int], word2: List[int]) -> List[int]:
    """XOR two 4-byte words together."""
    return [a ^ b for a, b in zip(word1, word2)]


def key_expansion(key: bytes) -> List[List[int]]:
    """
    Expand a 16/24/32-byte key into 4*(Nr+1) words (Rijndael key schedule).

    For i from Nk to 4*(Nr+1)-1:
        temp = w[i-1]
        if i % Nk == 0:            temp = SubWord(RotWord(temp)) ^ Rcon[i/Nk]
        elif Nk > 6, i % Nk == 4:  temp = SubWord(temp)
        w[i] = w[i-Nk] ^ temp

    Args:
        key: Cipher key

    Returns:
        List of words, each a list of 4 bytes

    Raises:
        InvalidKeyLength: If key is not 16, 24 or 32 bytes

    Example:
        >>> words = key_expansion(bytes(16))
        >>> len(words)
        44
    """
    if len(key) not in ROUNDS_BY_KEY_SIZE:
        raise InvalidKeyLength(
            f"AES key must be 16, 24 or 32 bytes, got {len(key)} bytes"
        )

    nk = len(key) // 4
    nr = ROUNDS_BY_KEY_SIZE[len(key)]
    total_words = 4 * (nr + 1)

    w = [list(key[i:i + 4]) for i in range(0, len(key), 4)]

    for i in range(nk, total_words):
        temp = w[i - 1].copy()

        if i % nk == 0:
            temp = sub_word(rot_word(temp))
            temp[0] ^= RCON[i // nk]
        elif nk > 6 and i % nk == 4:
            temp = sub_word(temp)

        w.append(xor_words(w[i - nk], temp))

    return w


class AESKeySchedule:
    """
    Expanded key for one AES key.

    Example:
        >>> schedule = AESKeySchedule(bytes(range(32)))
        >>> schedule.num_rounds
        14
        >>> len(schedule.round_keys)
        15
    """

    def __init__(self, key: bytes):
        """
        Args:
            key: 16, 24 or 32-byte cipher key
        """
        key = bytes(key)
        self._words = key_expansion(key)
        self._key = key
        self._num_rounds = ROUNDS_BY_KEY_SIZE[len(key)]
        self._round_keys = [
            bytes(sum(self._words[i:i + 4], []))
            for i in range(0, len(self._words), 4)
        ]

    @property
    def key(self) -> bytes:
        """Original cipher key."""
        return self._key

    @property
    def num_rounds(self) -> int:
        """Nr: 10, 12 or 14."""
        return self._num_rounds

    @property
    def words(self) -> List[List[int]]:
        """All 4*(Nr+1) schedule words."""
        return [word.copy() for word in self._words]

    @property
    def round_keys(self) -> List[bytes]:
        """Nr+1 round keys of 16 bytes."""
        return self._round_keys.copy()

    def get_round_key(self, round_num: int) -> bytes:
        """16-byte round key for round 0..Nr."""
        if round_num < 0 or round_num > self._num_rounds:
            raise ValueError(f"Round number must be 0-{self._num_rounds}, got {round_num}")
        return self._round_keys[round_num]

    def __repr__(self) -> str:
        return f"AESKeySchedule(bits={len(self._key) * 8})"


# ============================================================================
# Round transforms (operate in place on a 16-byte state list)
# ============================================================================

def add_round_key(state: List[int], round_key: bytes) -> None:
    for i in range(16):
        state[i] ^= round_key[i]


def sub_bytes(state: List[int]) -> None:
    for i in range(16):
        state[i] = S_BOX[state[i]]


def inv_sub_bytes(state: List[int]) -> None:
    for i in range(16):
        state[i] = INV_S_BOX[state[i]]


def shift_rows(state: List[int]) -> None:
    """Rotate row r left by r positions."""
    old = state.copy()
    for r in range(1, 4):
        for c in range(4):
            state[r + 4 * c] = old[r + 4 * ((c + r) % 4)]


def inv_shift_rows(state: List[int]) -> None:
    """Rotate row r right by r positions."""
    old = state.copy()
    for r in range(1, 4):
        for c in range(4):
            state[r + 4 * ((c + r) % 4)] = old[r + 4 * c]


def mix_columns(state: List[int]) -> None:
    """Multiply each column by the fixed polynomial {03}x^3+{01}x^2+{01}x+{02}."""
    for c in range(0, 16, 4):
        a0, a1, a2, a3 = state[c:c + 4]
        state[c] = MUL2[a0] ^ MUL3[a1] ^ a2 ^ a3
        state[c + 1] = a0 ^ MUL2[a1] ^ MUL3[a2] ^ a3
        state[c + 2] = a0 ^ a1 ^ MUL2[a2] ^ MUL3[a3]
        state[c + 3] = MUL3[a0] ^ a1 ^ a2 ^ MUL2[a3]


def inv_mix_columns(state: List[int]) -> None:
    """Multiply each column by {0b}x^3+{0d}x^2+{09}x+{0e}."""
    for c in range(0, 16, 4):
        a0, a1, a2, a3 = state[c:c + 4]
        state[c] = MUL14[a0] ^ MUL11[a1] ^ MUL13[a2] ^ MUL9[a3]
        state[c + 1] = MUL9[a0] ^ MUL14[a1] ^ MUL11[a2] ^ MUL13[a3]
        state[c + 2] = MUL13[a0] ^ MUL9[a1] ^ MUL14[a2] ^ MUL11[a3]
        state[c + 3] = MUL11[a0] ^ MUL13[a1] ^ MUL9[a2] ^ MUL14[a3]


# ============================================================================
# Block cipher
# ============================================================================

class AES:
    """
    AES single-block cipher.

    Example:
        >>> cipher = AES(bytes.fromhex("000102030405060708090a0b0c0d0e0f"))
        >>> cipher.encrypt_block(bytes.fromhex("00112233445566778899aabbccddeeff")).hex()
        '69c4e0d86a7b0430d8cdb78070b4c55a'
    """

    block_size = BLOCK_SIZE

    def __init__(self, key: bytes):
        """
        Args:
            key: 16, 24 or 32-byte key (AES-128/192/256)

        Raises:
            InvalidKeyLength: For any other key size
        """
        self._schedule = AESKeySchedule(key)
        self._round_keys = self._schedule.round_keys
        self._nr = self._schedule.num_rounds

    @property
    def key_size(self) -> int:
        """Key size in bits."""
        return len(self._schedule.key) * 8

    @property
    def num_rounds(self) -> int:
        return self._nr

    @staticmethod
    def _check_block(block: bytes) -> None:
        if len(block) != BLOCK_SIZE:
            raise InvalidLength(f"AES block must be {BLOCK_SIZE} bytes, got {len(block)}")

    def encrypt_block(self, block: bytes) -> bytes:
        """Encrypt exactly one 16-byte block."""
        self._check_block(block)
        state = list(block)

        add_round_key(state, self._round_keys[0])
        for round_num in range(1, self._nr):
            sub_bytes(state)
            shift_rows(state)
            mix_columns(state)
            add_round_key(state, self._round_keys[round_num])

        # Final round has no MixColumns
        sub_bytes(state)
        shift_rows(state)
        add_round_key(state, self._round_keys[self._nr])

        return bytes(state)

    def decrypt_block(self, block: bytes) -> bytes:
        """Decrypt exactly one 16-byte block (inverse cipher)."""
        self._check_block(block)
        state = list(block)

        add_round_key(state, self._round_keys[self._nr])
        for round_num in range(self._nr - 1, 0, -1):
            inv_shift_rows(state)
            inv_sub_bytes(state)
            add_round_key(state, self._round_keys[round_num])
            inv_mix_columns(state)

        inv_shift_rows(state)
        inv_sub_bytes(state)
        add_round_key(state, self._round_keys[0])

        return bytes(state)

    def __repr__(self) -> str:
        return f"AES(bits={self.key_size})"

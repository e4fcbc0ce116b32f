"""
Unit tests for the classical ciphers.

Tests:
- Monoalphabetic substitution
- Hill 3x3
- Columnar transposition
"""

import pytest

from cipherlab.classical import columnar, hill, monoalphabetic
from cipherlab.errors import (
    CryptographicFailure, InvalidKeyFormat, InvalidLength, NonInvertibleKey
)


class TestMonoalphabetic:
    """Unit tests for the keyword substitution cipher."""

    def test_cipher_alphabet(self):
        """ZEBRA puts the keyword first, then the unused letters."""
        assert monoalphabetic.cipher_alphabet("ZEBRA") == "ZEBRACDFGHIJKLMNOPQSTUVWXY"

    def test_alphabet_ignores_case_and_symbols(self):
        """Non-letters are dropped and repeated letters kept once."""
        assert monoalphabetic.cipher_alphabet("z-e b!ra ZEBRA") == \
            monoalphabetic.cipher_alphabet("ZEBRA")

    def test_empty_key_is_identity(self):
        """An empty key leaves text unchanged."""
        assert monoalphabetic.encrypt("Hello", "") == "Hello"

    def test_encrypt(self):
        """HELLO under ZEBRA."""
        assert monoalphabetic.encrypt("HELLO", "ZEBRA") == "FAJJM"

    def test_round_trip(self):
        """decrypt reverses encrypt."""
        ciphertext = monoalphabetic.encrypt("HELLO", "ZEBRA")
        assert monoalphabetic.decrypt(ciphertext, "ZEBRA") == "HELLO"

    def test_preserves_case_and_punctuation(self):
        """Lowercase stays lowercase; symbols pass through."""
        assert monoalphabetic.encrypt("Hello, World!", "ZEBRA") == "Fajjm, Vmpjr!"
        assert monoalphabetic.decrypt("Fajjm, Vmpjr!", "ZEBRA") == "Hello, World!"


class TestHill:
    """Unit tests for the 3x3 Hill cipher."""

    def test_key_matrix(self):
        """GYBNQKURP reads row-major as A=0..Z=25."""
        assert hill.key_to_matrix("GYBNQKURP") == [[6, 24, 1], [13, 16, 10], [20, 17, 15]]

    def test_key_is_case_insensitive(self):
        """Lowercase keys are accepted."""
        assert hill.key_to_matrix("gybnqkurp") == hill.key_to_matrix("GYBNQKURP")

    def test_encrypt_known_vector(self):
        """ACT -> POH under GYBNQKURP."""
        assert hill.encrypt("act", "GYBNQKURP") == "POH"
        assert hill.encrypt("CAT", "GYBNQKURP") == "FIN"

    def test_decrypt_known_vector(self):
        """POH -> ACT."""
        assert hill.decrypt("POH", "GYBNQKURP") == "ACT"

    def test_round_trip_strips_non_letters(self):
        """Spaces and punctuation are removed, letters uppercased."""
        ciphertext = hill.encrypt("attack at dawn!", "GYBNQKURP")
        assert hill.decrypt(ciphertext, "GYBNQKURP") == "ATTACKATDAWN"

    def test_padding_with_x(self):
        """Text is padded with X to a multiple of three."""
        ciphertext = hill.encrypt("HELLO", "GYBNQKURP")
        assert len(ciphertext) == 6
        assert hill.decrypt(ciphertext, "GYBNQKURP") == "HELLOX"

    def test_matrix_key(self):
        """A 3x3 integer matrix works as the key."""
        matrix = [[6, 24, 1], [13, 16, 10], [20, 17, 15]]
        assert hill.encrypt("ACT", matrix) == "POH"

    def test_inverse_matrix(self):
        """K * K^-1 is the identity mod 26."""
        k = hill.key_to_matrix("GYBNQKURP")
        inv = hill.inverse_matrix(k)
        product = [[sum(k[i][x] * inv[x][j] for x in range(3)) % 26 for j in range(3)]
                   for i in range(3)]
        assert product == [[1, 0, 0], [0, 1, 0], [0, 0, 1]]

    def test_determinant(self):
        """Cofactor expansion determinant."""
        assert hill.determinant3x3([[2, 0, 0], [0, 2, 0], [0, 0, 2]]) == 8
        assert hill.determinant3x3([[6, 24, 1], [13, 16, 10], [20, 17, 15]]) == 441

    def test_non_invertible_matrix(self):
        """det 8 shares a factor with 26."""
        with pytest.raises(NonInvertibleKey):
            hill.encrypt("ABC", [[2, 0, 0], [0, 2, 0], [0, 0, 2]])

    def test_non_invertible_string_key(self):
        """A key of identical letters has det 0."""
        with pytest.raises(NonInvertibleKey):
            hill.decrypt("ABC", "AAAAAAAAA")
        assert issubclass(NonInvertibleKey, CryptographicFailure)

    @pytest.mark.parametrize("key", ["SHORT", "TOOLONGKEYS", "GYBNQKUR1", ""])
    def test_bad_key_format(self, key):
        """Keys must be exactly nine letters."""
        with pytest.raises(InvalidKeyFormat):
            hill.encrypt("ABC", key)

    def test_bad_matrix_shape(self):
        """Matrices must be 3x3."""
        with pytest.raises(InvalidKeyFormat):
            hill.encrypt("ABC", [[1, 0], [0, 1]])

    def test_decrypt_bad_length(self):
        """Ciphertext must be a multiple of three letters."""
        with pytest.raises(InvalidLength):
            hill.decrypt("ABCD", "GYBNQKURP")


class TestColumnar:
    """Unit tests for columnar transposition."""

    def test_clean_key(self):
        """Key is uppercased, stripped and deduplicated."""
        assert columnar.clean_key("ze-bra zebra") == "ZEBRA"

    def test_encrypt_known(self):
        """HELLOWORLD under ZEBRA."""
        assert columnar.encrypt("HELLOWORLD", "ZEBRA") == "ODLREOLLHW"

    def test_padding(self):
        """The last row is filled with 'x'."""
        ciphertext = columnar.encrypt("HELLO", "KEY")
        assert ciphertext == "EOHLLx"
        assert columnar.decrypt(ciphertext, "KEY") == "HELLOx"

    def test_round_trip(self):
        """decrypt reverses encrypt (padding kept)."""
        text = "WEAREDISCOVEREDFLEEATONCE"
        ciphertext = columnar.encrypt(text, "ZEBRAS")
        assert columnar.decrypt(ciphertext, "ZEBRAS").rstrip("x") == text

    def test_empty_text(self):
        """Empty text stays empty."""
        assert columnar.encrypt("", "KEY") == ""
        assert columnar.decrypt("", "KEY") == ""

    def test_bad_length(self):
        """Ciphertext length must be a multiple of the key length."""
        with pytest.raises(InvalidLength):
            columnar.decrypt("ABCDE", "KEY")

    @pytest.mark.parametrize("key", ["", "123", "!!"])
    def test_key_without_letters(self, key):
        """Keys with no letters are rejected."""
        with pytest.raises(InvalidKeyFormat):
            columnar.encrypt("HELLO", key)

"""Unit tests for Spanish number verbalization."""
import pytest
from hypothesis import given
from hypothesis import strategies as st

from asistente.speech import number_to_words


class TestSmallNumbers:
    """Tests for numbers below one thousand."""

    @pytest.mark.parametrize("n, words", [
        (0, "cero"),
        (1, "uno"),
        (10, "diez"),
        (15, "quince"),
        (16, "dieciséis"),
        (19, "diecinueve"),
        (20, "veinte"),
        (21, "veintiuno"),
        (22, "veintidós"),
        (29, "veintinueve"),
    ])
    def test_irregular_words(self, n, words):
        """Test that 0 to 29 use their single-word forms."""
        assert number_to_words(n) == words

    def test_tens_are_joined_with_y(self):
        """Test compound tens from thirty upwards."""
        assert number_to_words(30) == "treinta"
        assert number_to_words(45) == "cuarenta y cinco"
        assert number_to_words(99) == "noventa y nueve"

    def test_exact_hundred_is_cien(self):
        """Test that 100 alone reads 'cien'."""
        assert number_to_words(100) == "cien"

    def test_hundred_with_remainder_is_ciento(self):
        """Test that 101 reads 'ciento uno'."""
        assert number_to_words(101) == "ciento uno"
        assert number_to_words(199) == "ciento noventa y nueve"

    def test_irregular_hundreds(self):
        """Test irregular hundreds."""
        assert number_to_words(500) == "quinientos"
        assert number_to_words(700) == "setecientos"
        assert number_to_words(900) == "novecientos"
        assert number_to_words(345) == "trescientos cuarenta y cinco"


class TestLargeNumbers:
    """Tests for thousands and millions."""

    def test_one_thousand_has_no_count(self):
        """Test that 1000 reads 'mil', never 'un mil'."""
        assert number_to_words(1000) == "mil"
        assert number_to_words(1001) == "mil uno"

    def test_thousands_apocope(self):
        """Test that counts ending in one shorten before 'mil'."""
        assert number_to_words(21000) == "veintiún mil"
        assert number_to_words(31000) == "treinta y un mil"
        assert number_to_words(101000) == "ciento un mil"

    def test_hundred_thousand(self):
        """Test that 100000 reads 'cien mil'."""
        assert number_to_words(100000) == "cien mil"

    def test_thousands_with_remainder(self):
        """Test a grouped amount as it appears in sales answers."""
        assert number_to_words(12345) == "doce mil trescientos cuarenta y cinco"

    def test_one_million(self):
        """Test the singular million."""
        assert number_to_words(1000000) == "un millón"

    def test_millions(self):
        """Test plural millions with a thousands remainder."""
        assert number_to_words(2500000) == "dos millones quinientos mil"
        assert number_to_words(21000000) == "veintiún millones"

    def test_thousand_millions(self):
        """Test that a billion reads 'mil millones'."""
        assert number_to_words(1000000000) == "mil millones"


class TestNumberValidation:
    """Tests for invalid input."""

    def test_negative_raises_value_error(self):
        """Test that negative numbers are rejected."""
        with pytest.raises(ValueError, match="negative"):
            number_to_words(-1)

    @pytest.mark.parametrize("value", [1.5, "12", None, True])
    def test_non_int_raises_type_error(self, value):
        """Test that only true ints are accepted."""
        with pytest.raises(TypeError):
            number_to_words(value)  # type: ignore[arg-type]


class TestNumberProperties:
    """Property tests for number verbalization."""

    @given(st.integers(min_value=0, max_value=10**12))
    def test_output_is_lowercase_words(self, n: int):
        """Property test: output is non-empty lowercase words without double spaces."""
        words = number_to_words(n)
        assert words
        assert words == words.lower()
        assert "  " not in words
        assert words == words.strip()

    @given(st.integers(min_value=1, max_value=10**9))
    def test_zero_only_for_zero(self, n: int):
        """Property test: 'cero' never appears for positive numbers."""
        assert "cero" not in number_to_words(n).split()

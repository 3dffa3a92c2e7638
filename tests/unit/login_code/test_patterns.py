"""Tests for the login code cosmetic filter."""

import pytest

from tictactoe.core.modules.login_code.patterns import is_banned_code, is_code_format


class TestIsBannedCode:
    """Tests for is_banned_code function."""

    @pytest.mark.parametrize("code", ["0666", "6660", "1666", "6669"])
    def test_contains_666(self, code):
        """Test that any code containing 666 is banned."""
        assert is_banned_code(code)

    @pytest.mark.parametrize("start", range(7))
    def test_ascending_runs(self, start):
        """Test that 0123 through 6789 are banned."""
        code = "".join(str(start + k) for k in range(4))
        assert is_banned_code(code)

    @pytest.mark.parametrize("start", range(3, 10))
    def test_descending_runs(self, start):
        """Test that 3210 through 9876 are banned."""
        code = "".join(str(start - k) for k in range(4))
        assert is_banned_code(code)

    @pytest.mark.parametrize("digit", range(10))
    def test_repeated_digits(self, digit):
        """Test that 0000 through 9999 are banned."""
        assert is_banned_code(str(digit) * 4)

    @pytest.mark.parametrize("code", ["1357", "0124", "1233", "6656", "7890", "0987", "2468", "0001", "5665"])
    def test_ordinary_codes_allowed(self, code):
        """Test that codes outside the patterns pass."""
        assert not is_banned_code(code)

    def test_banned_set_size(self):
        """Test the exact number of banned 4-digit strings."""
        banned = [f"{n:04d}" for n in range(10000) if is_banned_code(f"{n:04d}")]
        # 19 strings contain 666, plus 7 ascending, 7 descending and 10 repeated (6666 counted once)
        assert len(banned) == 19 + 7 + 7 + 10 - 1


class TestIsCodeFormat:
    """Tests for is_code_format function."""

    @pytest.mark.parametrize("value", ["1234", "0001", "9999", "0420"])
    def test_valid_formats(self, value):
        assert is_code_format(value)

    @pytest.mark.parametrize("value", ["", "123", "12345", "12a4", " 123", "0000", "١٢٣٤"])
    def test_invalid_formats(self, value):
        assert not is_code_format(value)

"""Tests for currency formatting."""

from decimal import Decimal

from visor.cli.utils import format_currency as cli_format_currency
from visor.engine.currency import currency_symbol, format_amount, format_currency, group_indian


class TestGroupIndian:
    """Tests for group_indian function."""

    def test_short_numbers_untouched(self) -> None:
        assert group_indian("7") == "7"
        assert group_indian("999") == "999"

    def test_thousands(self) -> None:
        assert group_indian("1000") == "1,000"
        assert group_indian("99999") == "99,999"

    def test_lakhs_and_crores(self) -> None:
        """Test groups of two above the last three digits."""
        assert group_indian("100000") == "1,00,000"
        assert group_indian("1234567") == "12,34,567"
        assert group_indian("10000000") == "1,00,00,000"


class TestFormatCurrency:
    """Tests for format_amount and format_currency functions."""

    def test_fraction_kept(self) -> None:
        """Test that the decimal part is printed as given."""
        assert format_amount(Decimal("1234567.50")) == "12,34,567.50"

    def test_rupee_default(self) -> None:
        assert format_currency(1234567) == "₹12,34,567"

    def test_known_symbols(self) -> None:
        assert format_currency(1000, "USD") == "$1,000"
        assert format_currency(1000, "EUR") == "€1,000"
        assert format_currency(1000, "GBP") == "£1,000"

    def test_unknown_code_falls_back_to_pound(self) -> None:
        """Test that unrecognised codes render with the pound sign."""
        assert currency_symbol("JPY") == "£"
        assert format_currency(100, "JPY") == "£100"

    def test_negative_sign_before_symbol(self) -> None:
        assert format_currency(-500) == "-₹500"
        assert format_amount(-123456) == "-1,23,456"

    def test_float_without_noise(self) -> None:
        """Test that floats are converted through their repr."""
        assert format_currency(0.1) == "₹0.1"

    def test_cli_two_decimals(self) -> None:
        """Test that the CLI helper always shows paise."""
        assert cli_format_currency(Decimal("500"), "INR") == "₹500.00"
        assert cli_format_currency(Decimal("1234.567"), "USD") == "$1,234.57"

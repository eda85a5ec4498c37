"""Currency display helpers.

Amounts are grouped the Indian way (12,34,567) and printed with exactly
the precision they carry; nothing is rounded here.
"""

from decimal import Decimal

from visor.core.models import to_decimal

CURRENCY_SYMBOLS = {
    "INR": "₹",
    "USD": "$",
    "EUR": "€",
    "GBP": "£",
}
# Any other code renders with the pound sign.
FALLBACK_SYMBOL = "£"


def currency_symbol(code: str) -> str:
    return CURRENCY_SYMBOLS.get(code, FALLBACK_SYMBOL)


def group_indian(digits: str) -> str:
    """Insert separators: last three digits, then groups of two."""
    if len(digits) <= 3:
        return digits
    head, tail = digits[:-3], digits[-3:]
    groups = []
    while len(head) > 2:
        groups.insert(0, head[-2:])
        head = head[:-2]
    if head:
        groups.insert(0, head)
    return ",".join(groups + [tail])


def format_amount(amount: Decimal | float | int | str) -> str:
    """Format a number with Indian digit grouping and no symbol.

    Examples:
        >>> format_amount(Decimal("1234567.50"))
        '12,34,567.50'
        >>> format_amount(-999)
        '-999'
    """
    value = to_decimal(amount)
    if not value.is_finite():
        return str(value)

    text = format(abs(value), "f")
    integer, _, fraction = text.partition(".")
    grouped = group_indian(integer)
    if fraction:
        grouped = f"{grouped}.{fraction}"
    return f"-{grouped}" if value < 0 else grouped


def format_currency(amount: Decimal | float | int | str, currency: str = "INR") -> str:
    """Format an amount with its currency symbol, e.g. '₹12,34,567'.

    Negative amounts put the sign before the symbol ('-₹500').
    """
    symbol = currency_symbol(currency)
    text = format_amount(amount)
    if text.startswith("-"):
        return f"-{symbol}{text[1:]}"
    return f"{symbol}{text}"

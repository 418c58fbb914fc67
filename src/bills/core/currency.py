#!/usr/bin/env python3
"""
Currency Conversion and Handling Utilities

All bill and transaction amounts are handled as integer pence so that
"exact amount" and "within £1.00" comparisons never see floating-point error.

Currency Systems:
- Exported records carry decimal pounds: 15.99 or "£15.99"
- Internal calculations use pence: 100 pence = £1.00
- Display uses pound strings: "£15.99"

Key Principles:
- Never use floating-point arithmetic for currency calculations
- Convert floats through their decimal string form, never by multiplying
- Compare amounts as integer pence
"""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

CURRENCY_SYMBOL = "£"


def pence_to_pounds_str(pence: int) -> str:
    """
    Convert pence to a pound string using pure integer arithmetic.

    Args:
        pence: Amount in pence

    Returns:
        Formatted pound string without symbol

    Example:
        pence_to_pounds_str(1599) -> "15.99"
        pence_to_pounds_str(-150) -> "-1.50"
    """
    is_negative = pence < 0
    abs_pence = abs(int(pence))

    pounds = abs_pence // 100
    remainder = abs_pence % 100

    if is_negative:
        return f"-{pounds}.{remainder:02d}"
    return f"{pounds}.{remainder:02d}"


def parse_pounds_to_pence(pounds_str: str) -> int:
    """
    Parse a pound string to pence.

    Accepts an optional currency symbol, thousands separators and a leading
    minus sign. Fractions beyond two places are rounded half-up.

    Args:
        pounds_str: String representation of a pound amount

    Returns:
        Amount in pence

    Raises:
        ValueError: If the string is not a number

    Examples:
        parse_pounds_to_pence("15.99") -> 1599
        parse_pounds_to_pence("£1,234.5") -> 123450
        parse_pounds_to_pence("12") -> 1200
    """
    clean = pounds_str.replace(CURRENCY_SYMBOL, "").replace(",", "").strip()

    if not clean:
        return 0

    try:
        value = Decimal(clean)
    except InvalidOperation as e:
        raise ValueError(f"Invalid currency amount: {pounds_str!r}") from e

    if not value.is_finite():
        raise ValueError(f"Invalid currency amount: {pounds_str!r}")

    return int((value * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def amount_to_pence(amount: str | int | float | Decimal) -> int:
    """
    Convert an exported amount (decimal pounds) to pence.

    Floats go through their shortest decimal representation, so 15.99
    becomes 1599 rather than 1598.

    Args:
        amount: Pounds as string, int, float or Decimal

    Returns:
        Amount in pence
    """
    if isinstance(amount, bool):
        raise ValueError(f"Invalid currency amount: {amount!r}")
    if isinstance(amount, int):
        return amount * 100
    if isinstance(amount, float):
        return parse_pounds_to_pence(repr(amount))
    if isinstance(amount, Decimal):
        return parse_pounds_to_pence(str(amount))
    return parse_pounds_to_pence(amount)


def format_pence(pence: int) -> str:
    """Format pence as pound string with £ prefix."""
    if pence < 0:
        return f"-{CURRENCY_SYMBOL}{pence_to_pounds_str(-pence)}"
    return f"{CURRENCY_SYMBOL}{pence_to_pounds_str(pence)}"

"""
Value Formatters Module.

This module turns raw invoice strings into their printed form:
    - Tax rates ("0.06" -> "6%")
    - Issue dates (YYYY年MM月DD日)
    - Currency-prefixed amounts

Author: E-Invoice Tooling Team
"""

import re
from datetime import datetime
from decimal import Decimal

CURRENCY_SYMBOL = "¥"

# Positional notation only; exponent and underscore forms stay as text
DECIMAL_PATTERN = re.compile(r"[+-]?(\d+(\.\d*)?|\.\d+)")


def format_tax_rate(tax_rate: str) -> str:
    """
    Format a tax rate as a percentage.

    The rate is either a decimal string or a placeholder token (for
    example "***" for tax-exempt lines). Decimal rates are scaled by 100
    and trailing fractional zeros are removed; anything that does not
    read as a plain decimal number (digits with an optional sign and
    decimal point) is returned unchanged.

    Args:
        tax_rate: Raw rate from the document.

    Returns:
        Printable rate.

    Example:
        >>> format_tax_rate("0.06")
        "6%"
        >>> format_tax_rate("0.015")
        "1.5%"
        >>> format_tax_rate("1")
        "100%"
        >>> format_tax_rate("***")
        "***"
    """
    if not isinstance(tax_rate, str) or not DECIMAL_PATTERN.fullmatch(tax_rate.strip()):
        return tax_rate

    rate = Decimal(tax_rate.strip())
    percent = f"{rate * 100:f}"
    if '.' in percent:
        percent = percent.rstrip('0').rstrip('.')
    return percent + "%"


def format_issue_date(issue_time: datetime) -> str:
    """
    Format an issue timestamp the way the invoice prints it.

    Example:
        >>> format_issue_date(datetime(2023, 5, 8, 9, 19, 15))
        "2023年05月08日"
    """
    return f"{issue_time.year:04d}年{issue_time.month:02d}月{issue_time.day:02d}日"


def format_currency(amount: str) -> str:
    """Prefix an amount with the currency symbol; empty stays empty."""
    if not amount:
        return ""
    return f"{CURRENCY_SYMBOL}{amount}"

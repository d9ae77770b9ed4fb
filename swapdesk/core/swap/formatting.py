"""Display formatting for token amounts, fiat values and exchange rates.

Every function here is pure and total for numeric input: nothing raises, and
non-finite values collapse to a neutral representation.
"""

from __future__ import annotations

import math
import re
from typing import Optional

from .constants import DEFAULT_MAX_DECIMALS, LARGE_AMOUNT_DECIMALS, MIN_RATE_DISPLAY

_TRAILING_ZEROS = re.compile(r"(?:\.0+|(\.\d*?))0+$")


def trim_trailing_zeros(value: str) -> str:
    """Drop redundant zeros after the decimal point, and a bare trailing point."""
    trimmed = _TRAILING_ZEROS.sub(r"\1", value)
    if trimmed.endswith("."):
        trimmed = trimmed[:-1]
    return trimmed


def format_asset_amount(value: float, max_decimals: int = DEFAULT_MAX_DECIMALS) -> str:
    """Format a token quantity.

    Amounts of at least one unit are capped at four decimals; sub-unit
    amounts keep ``max_decimals`` so they stay meaningful.
    """
    if not math.isfinite(value) or value == 0:
        return "0"

    decimals = min(LARGE_AMOUNT_DECIMALS, max_decimals) if value >= 1 else max_decimals
    return trim_trailing_zeros(f"{value:.{decimals}f}")


def format_balance_display(value: float, symbol: Optional[str] = None) -> str:
    amount = format_asset_amount(value)
    return f"{amount} {symbol}" if symbol else amount


def format_fiat_value(value: Optional[float]) -> Optional[str]:
    """USD currency string (``$1,234.56``), or None when there is nothing to show."""
    if value is None or not math.isfinite(value):
        return None

    sign = "-" if value < 0 else ""
    return f"{sign}${abs(value):,.2f}"


def format_exchange_rate(rate: float) -> str:
    if not math.isfinite(rate) or rate <= 0:
        return "0"

    if rate < MIN_RATE_DISPLAY:
        mantissa, exponent = f"{rate:.2e}".split("e")
        return f"{mantissa}e{int(exponent):+d}"

    decimals = 4 if rate >= 1 else 8
    return trim_trailing_zeros(f"{rate:.{decimals}f}")


def format_rate_label(rate: float, source_symbol: str, destination_symbol: str) -> str:
    """``1 BTC = 50000 USDT``"""
    return f"1 {source_symbol} = {format_exchange_rate(rate)} {destination_symbol}"

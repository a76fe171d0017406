"""Amount parsing/formatting and calendar helpers used by budgets and operations."""

from __future__ import annotations

import calendar
import re
from datetime import date
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Optional

CENTS = Decimal("0.01")
_AMOUNT_RE = re.compile(r"^[+-]?\d+(\.\d+)?$")
_STRIP_CHARS = (" ", "\u00a0", "\u202f", "€")


def quantize(value: Decimal) -> Decimal:
    return value.quantize(CENTS, rounding=ROUND_HALF_UP)


def parse_amount(text: object) -> Optional[Decimal]:
    """Parse user input such as ``"2 500,50 €"`` into a 2-decimal ``Decimal``.

    Both ``,`` and ``.`` are accepted as decimal separator. Returns ``None``
    when the text is empty or not a plain number.
    """
    if text is None:
        return None
    if isinstance(text, Decimal):
        return quantize(text)
    if isinstance(text, (int, float)) and not isinstance(text, bool):
        return quantize(Decimal(str(text)))
    raw = str(text)
    for ch in _STRIP_CHARS:
        raw = raw.replace(ch, "")
    raw = raw.replace(",", ".")
    if not _AMOUNT_RE.match(raw):
        return None
    try:
        return quantize(Decimal(raw))
    except InvalidOperation:
        return None


def format_amount(amount: Decimal) -> str:
    """Editable representation with a decimal comma (``Decimal("2500")`` -> ``"2500,00"``)."""
    return f"{quantize(amount):.2f}".replace(".", ",")


def format_currency(amount: Optional[Decimal | float], symbol: str = "€") -> str:
    """Display representation with grouped thousands: ``"2 500,00 €"``."""
    if amount is None:
        return ""
    if not isinstance(amount, Decimal):
        amount = Decimal(str(amount))
    grouped = f"{quantize(amount):,.2f}"
    text = grouped.replace(",", " ").replace(".", ",")
    return f"{text} {symbol}".rstrip()


def month_key(value: date) -> str:
    """Return the ``YYYY-MM`` bucket key of a date."""
    return f"{value.year:04d}-{value.month:02d}"


def days_in_month(year: int, month: int) -> int:
    if not 1 <= month <= 12:
        raise ValueError(f"Invalid month '{month}'")
    return calendar.monthrange(year, month)[1]


def clamp_day(year: int, month: int, day: int) -> int:
    """Clamp ``day`` into ``1..days_in_month(year, month)``."""
    return min(max(1, int(day)), days_in_month(year, month))


__all__ = [
    "CENTS",
    "clamp_day",
    "days_in_month",
    "format_amount",
    "format_currency",
    "month_key",
    "parse_amount",
    "quantize",
]

"""Shared constants and helpers for bill text parsing."""

import re
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

CENT = Decimal("0.01")

# Rupee-prefixed amount: "₹1,299.00", "₹ 45", "₹12.5"
CURRENCY_AMOUNT = re.compile(r"₹\s?([\d,]+(?:\.\d{1,2})?)")

# Line endings of any convention
LINE_BREAK = re.compile(r"\r\n|\r|\n")
WHITESPACE_RUN = re.compile(r"\s{2,}")
NBSP = "\u00a0"


def normalize_lines(raw_text: str) -> list[str]:
    """
    Split raw bill text into trimmed, whitespace-collapsed, non-empty lines.

    Order is preserved from the source. Empty input yields an empty list.
    """
    lines: list[str] = []
    for line in LINE_BREAK.split(raw_text):
        line = line.replace(NBSP, " ").strip()
        if not line:
            continue
        lines.append(WHITESPACE_RUN.sub(" ", line).strip())
    return lines


def _to_amount(text: str | None) -> Decimal:
    """
    Convert an amount string like "1,234.50" to a Decimal.

    Thousands separators are dropped. Absent or malformed input maps to 0;
    negative values are clamped to 0. Result is quantized to cents.
    """
    if text is None:
        return Decimal("0.00")
    cleaned = str(text).replace(",", "").strip()
    try:
        value = Decimal(cleaned)
    except InvalidOperation:
        return Decimal("0.00")
    if not value.is_finite() or value < 0:
        return Decimal("0.00")
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def _find_amounts(line: str) -> list[Decimal]:
    """Return every currency amount on a line, in order."""
    return [_to_amount(match.group(1)) for match in CURRENCY_AMOUNT.finditer(line)]


def _first_amount(line: str) -> Decimal | None:
    """Return the first currency amount on a line, or None."""
    match = CURRENCY_AMOUNT.search(line)
    if match is None:
        return None
    return _to_amount(match.group(1))


def _last_amount(line: str) -> Decimal | None:
    """Return the last currency amount on a line, or None."""
    amounts = _find_amounts(line)
    return amounts[-1] if amounts else None

"""Merchant/date/summary amount extraction helpers."""

import re
from collections.abc import Callable, Sequence
from decimal import Decimal

from billscan.domain.record import Totals
from billscan.runtime.logging import get_logger

from .common import CURRENCY_AMOUNT, _find_amounts, _first_amount, _last_amount, _to_amount

logger = get_logger(__name__)

UNKNOWN_MERCHANT = "Unknown Merchant"

# Merchants are printed near the top of a bill
MERCHANT_SCAN_LINES = 6
MERCHANT_UPPER_RATIO = 0.2

# Header lines that name a field, not the shop
MERCHANT_REJECT_PATTERN = re.compile(r"GST|INVOICE|TAX|DATE|PHONE|MOB|ADDRESS", re.IGNORECASE)
UPPER_ALNUM_LINE = re.compile(r"^[A-Z0-9 ]+$")

# Retail brand/category words, searched in order when no header line qualifies
DEFAULT_BRAND_KEYWORDS: tuple[str, ...] = (
    "megamart",
    "mart",
    "supermarket",
    "hyperstore",
    "store",
    "shop",
    "bazaar",
    "pharmacy",
    "d-mart",
    "dmart",
    "reliance",
    "bigbazaar",
)

_MONTHS = r"(?:Jan|Feb|Mar|Apr|May|Jun|Jul|Aug|Sep|Oct|Nov|Dec)"

# Highest priority first; an earlier match shadows every later pattern.
DATE_PATTERNS: tuple[re.Pattern[str], ...] = (
    # 12-Jan-2024, 5/Feb/24, 3 March 2024
    re.compile(r"\b([0-3]?\d[-/\s]" + _MONTHS + r"[a-z]*[-/\s]\d{2,4})\b", re.IGNORECASE),
    # 12/01/2024, 5-1-24
    re.compile(r"\b([0-3]?\d[/\-][0-1]?\d[/\-]\d{2,4})\b"),
    # 2024-01-12, 2024/1/5
    re.compile(r"\b(\d{4}[-/]\d{1,2}[-/]\d{1,2})\b"),
    # March 2024
    re.compile(r"\b(" + _MONTHS + r"[a-z]*\s+\d{4})\b", re.IGNORECASE),
)

SUBTOTAL_PATTERN = re.compile(r"\bsubtotal\b", re.IGNORECASE)
GRAND_TOTAL_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"grand\s*total", re.IGNORECASE),
    re.compile(r"\btotal\s*amount\b", re.IGNORECASE),
    re.compile(r"^total[:\s]", re.IGNORECASE),
)
TAX_KEYWORD_PATTERN = re.compile(r"\b(GST|CGST|SGST|VAT|TAX)\b", re.IGNORECASE)
# Label, optional rate ("9%", "18"), then the last rupee amount on the line
TAX_BREAKDOWN_PATTERN = re.compile(
    r"(CGST|SGST|GST|VAT)[^\d%]*(?:(\d{1,2})%?)?.*" + CURRENCY_AMOUNT.pattern,
    re.IGNORECASE,
)


def _merchant_from_header(lines: Sequence[str], _brand_keywords: Sequence[str]) -> str | None:
    """Pick the first upper-case-heavy header line that is not a field label."""
    for line in lines[:MERCHANT_SCAN_LINES]:
        if len(line) <= 3 or not re.search(r"[A-Z]", line):
            continue
        if MERCHANT_REJECT_PATTERN.search(line):
            continue
        upper_count = sum(1 for ch in line if "A" <= ch <= "Z")
        ratio_upper = upper_count / max(1, len(line))
        if ratio_upper > MERCHANT_UPPER_RATIO or UPPER_ALNUM_LINE.match(line):
            return line
    return None


def _merchant_from_brand_keywords(lines: Sequence[str], brand_keywords: Sequence[str]) -> str | None:
    """Return the first known brand keyword found anywhere, upper-cased."""
    text = " ".join(lines).lower()
    for keyword in brand_keywords:
        if keyword.lower() in text:
            return keyword.upper()
    return None


def _merchant_from_first_line(lines: Sequence[str], _brand_keywords: Sequence[str]) -> str | None:
    return lines[0] if lines else None


MerchantStrategy = Callable[[Sequence[str], Sequence[str]], str | None]

MERCHANT_STRATEGIES: tuple[MerchantStrategy, ...] = (
    _merchant_from_header,
    _merchant_from_brand_keywords,
    _merchant_from_first_line,
)


def _extract_merchant(
    lines: Sequence[str],
    brand_keywords: Sequence[str] | None = None,
) -> str:
    """
    Extract merchant name using ordered strategies.

    Strategy order:
    1. First header line (within the top 6) that looks like a shop name
    2. Known brand/category keyword anywhere in the text
    3. First line of the bill

    Args:
        lines: Normalized bill lines
        brand_keywords: Brand keywords to search in step 2; defaults to
            DEFAULT_BRAND_KEYWORDS

    Returns:
        Merchant name, or "Unknown Merchant" for an empty bill
    """
    if brand_keywords is None:
        brand_keywords = DEFAULT_BRAND_KEYWORDS
    for strategy in MERCHANT_STRATEGIES:
        merchant = strategy(lines, brand_keywords)
        if merchant:
            logger.debug("Merchant strategy %s matched: %s", strategy.__name__, merchant)
            return merchant
    return UNKNOWN_MERCHANT


def _extract_date(full_text: str) -> str:
    """Return the first date found by the highest-priority matching pattern, verbatim."""
    for pattern in DATE_PATTERNS:
        match = pattern.search(full_text)
        if match:
            return match.group(1)
    return ""


def _is_grand_total_line(line: str) -> bool:
    return any(pattern.search(line) for pattern in GRAND_TOTAL_PATTERNS)


def _extract_totals(lines: Sequence[str]) -> Totals:
    """
    Extract subtotal, tax breakdown, and grand total.

    Labelled lines win. When labels are missing, the last amount on the bill
    is taken as the grand total and the one before it as the subtotal.
    """
    subtotal = Decimal("0.00")
    tax = Decimal("0.00")
    grand = Decimal("0.00")
    gst: dict[str, Decimal] = {}
    raw: list[Decimal] = []

    for line in lines:
        if SUBTOTAL_PATTERN.search(line):
            amount = _first_amount(line)
            if amount is not None:
                subtotal = amount

        if _is_grand_total_line(line):
            amount = _first_amount(line)
            if amount is not None:
                grand = amount

        if TAX_KEYWORD_PATTERN.search(line):
            breakdown = TAX_BREAKDOWN_PATTERN.search(line)
            if breakdown:
                label = breakdown.group(1).upper()
                amount = _to_amount(breakdown.group(3))
                gst[label] = gst.get(label, Decimal("0.00")) + amount
                tax += amount
            else:
                amount = _last_amount(line)
                if amount is not None:
                    tax += amount

        raw.extend(_find_amounts(line))

    # OCR often drops the labels; the last two figures are subtotal then total
    if not grand and raw:
        grand = raw[-1]
    if not subtotal and len(raw) > 1:
        subtotal = raw[-2]

    return Totals(subtotal=subtotal, tax=tax, gst=gst, grand=grand, raw=tuple(raw))

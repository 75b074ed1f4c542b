"""Parse raw bill text into a structured ParsedRecord."""

from collections.abc import Sequence

from billscan.domain.record import ParsedRecord
from billscan.runtime.logging import get_logger

from .categories import DEFAULT_CATEGORY_RULES, CategoryRule, categorize_text
from .text_parser import (
    _extract_date,
    _extract_invoice_number,
    _extract_items,
    _extract_merchant,
    _extract_payment_mode,
    _extract_reference,
    _extract_totals,
    normalize_lines,
)

logger = get_logger(__name__)


def parse_raw_text(
    raw_text: str,
    *,
    category_rules: Sequence[CategoryRule] | None = None,
    brand_keywords: Sequence[str] | None = None,
) -> ParsedRecord:
    """
    Parse OCR or PDF text of a receipt/invoice into a ParsedRecord.

    Missing fields fall back to in-band defaults (empty strings, zero
    amounts, no items, "General" category) rather than raising. The result
    depends only on the arguments.

    Args:
        raw_text: Text recovered from the bill
        category_rules: Category rules in priority order; defaults to the
            built-in rules
        brand_keywords: Known brand keywords for merchant fallback; defaults
            to the built-in list

    Returns:
        ParsedRecord for the bill

    Raises:
        TypeError: If raw_text is not a str
    """
    if not isinstance(raw_text, str):
        raise TypeError(f"raw_text must be str, not {type(raw_text).__name__}")

    lines = normalize_lines(raw_text)
    joined = "\n".join(lines)

    record = ParsedRecord(
        merchant=_extract_merchant(lines, brand_keywords),
        date=_extract_date(joined),
        items=tuple(_extract_items(lines)),
        totals=_extract_totals(lines),
        payment_mode=_extract_payment_mode(joined),
        ref=_extract_reference(joined),
        invoice_no=_extract_invoice_number(joined),
        category=categorize_text(joined, category_rules if category_rules is not None else DEFAULT_CATEGORY_RULES),
        raw=raw_text,
    )
    logger.debug(
        "Parsed %d lines: merchant=%r, %d items, grand=%s",
        len(lines),
        record.merchant,
        len(record.items),
        record.totals.grand,
    )
    return record

"""Text-line based line item extraction.

Items are recovered by three tiers, tried in order until one yields items:

1. Aligned columns: ``DESCRIPTION  QTY  UNIT  TOTAL`` on every item line.
2. Heuristic: any non-summary line carrying a rupee amount.
3. Last resort: ``description ₹amount`` anywhere, qty 1.
"""

import re
from collections.abc import Callable, Sequence
from decimal import ROUND_HALF_UP, Decimal

from billscan.domain.record import LineItem
from billscan.runtime.logging import get_logger

from .common import CENT, CURRENCY_AMOUNT, _find_amounts, _to_amount

logger = get_logger(__name__)

PLACEHOLDER_DESCRIPTION = "Item"

# "Wireless Keyboard 2 1,299.00 2,598.00"
ITEM_LINE_PATTERN = re.compile(r"^(.+?)\s+(\d+)\s+([\d,]+\.\d{1,2})\s+([\d,]+\.\d{1,2})$")

# Header/footer lines that carry amounts but are not purchases
NON_ITEM_PATTERN = re.compile(
    r"\b(total|subtotal|grand|gst|tax|balance|change|payment|invoice|receipt|thank you|visit again)\b",
    re.IGNORECASE,
)

# Small standalone integer with no 2+ digit number anywhere after it.
# Known weak spot: it also fires on the fraction of a price ("45.50" -> 50).
QUANTITY_PATTERN = re.compile(r"\b(\d{1,2})\b(?!.*\d{2,})")

# Plain or thousands-grouped numbers left in a description
DESCRIPTION_NUMBER_PATTERN = re.compile(r"\b\d{1,3}(?:,\d{3})*(?:\.\d+)?\b")

PRICED_LINE_PATTERN = re.compile(r"(.+?)\s+" + CURRENCY_AMOUNT.pattern)


def _extract_aligned_column_items(lines: Sequence[str]) -> list[LineItem]:
    """Tier 1: lines printed as description, qty, unit price, line total."""
    items: list[LineItem] = []
    for line in lines:
        match = ITEM_LINE_PATTERN.match(line)
        if not match:
            continue
        items.append(
            LineItem(
                description=match.group(1).strip(),
                # A printed 0 (free or cancelled line) still counts as one unit
                qty=int(match.group(2)) or 1,
                unit=_to_amount(match.group(3)),
                total=_to_amount(match.group(4)),
            )
        )
    return items


def _guess_quantity(line: str) -> int:
    """Guess quantity from a small integer on the line; defaults to 1."""
    match = QUANTITY_PATTERN.search(line)
    if not match:
        return 1
    qty = int(match.group(1))
    # "00" from "45.00" is not a quantity
    return qty if qty > 0 else 1


def _clean_description(line: str) -> str:
    """Text before the first rupee sign with stray numbers removed."""
    desc = line.split("₹", 1)[0]
    desc = DESCRIPTION_NUMBER_PATTERN.sub("", desc)
    desc = re.sub(r"\s+", " ", desc).strip()
    return desc or PLACEHOLDER_DESCRIPTION


def _extract_heuristic_items(lines: Sequence[str]) -> list[LineItem]:
    """Tier 2: non-summary lines with a rupee amount; last amount is the line total."""
    items: list[LineItem] = []
    for line in lines:
        if NON_ITEM_PATTERN.search(line):
            continue
        amounts = _find_amounts(line)
        if not amounts:
            continue
        total = amounts[-1]
        qty = _guess_quantity(line)
        unit = (total / qty).quantize(CENT, rounding=ROUND_HALF_UP)
        items.append(
            LineItem(
                description=_clean_description(line),
                qty=qty,
                unit=unit,
                total=total,
            )
        )
    return items


def _extract_priced_line_items(lines: Sequence[str]) -> list[LineItem]:
    """Tier 3: any "description ₹amount" line, one unit each."""
    items: list[LineItem] = []
    for line in lines:
        match = PRICED_LINE_PATTERN.search(line)
        if not match:
            continue
        amount = _to_amount(match.group(2))
        items.append(
            LineItem(
                description=match.group(1).strip() or PLACEHOLDER_DESCRIPTION,
                qty=1,
                unit=amount,
                total=amount,
            )
        )
    return items


ItemTier = Callable[[Sequence[str]], list[LineItem]]

ITEM_TIERS: tuple[ItemTier, ...] = (
    _extract_aligned_column_items,
    _extract_heuristic_items,
    _extract_priced_line_items,
)


def _extract_items(lines: Sequence[str], tiers: Sequence[ItemTier] = ITEM_TIERS) -> list[LineItem]:
    """
    Extract line items from normalized bill lines.

    Each tier is tried in order and the first non-empty result is returned.
    A bill either prints aligned columns throughout or it doesn't, so tiers
    are never mixed. Unparseable lines are skipped.

    Args:
        lines: Normalized bill lines
        tiers: Extraction tiers in priority order

    Returns:
        Extracted items, possibly empty
    """
    for tier in tiers:
        items = tier(lines)
        if items:
            logger.debug("Item tier %s extracted %d items", tier.__name__, len(items))
            return items
    return []

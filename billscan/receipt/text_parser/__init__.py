"""Composable bill text parser components."""

from .common import normalize_lines
from .fields_parser import _extract_date, _extract_merchant, _extract_totals
from .items_text_parser import _extract_items
from .payment_parser import _extract_invoice_number, _extract_payment_mode, _extract_reference

__all__ = [
    "_extract_date",
    "_extract_invoice_number",
    "_extract_items",
    "_extract_merchant",
    "_extract_payment_mode",
    "_extract_reference",
    "_extract_totals",
    "normalize_lines",
]

"""Bill Scan: turn OCR'd receipt and invoice text into structured records."""

from billscan.domain.record import LineItem, ParsedRecord, Totals
from billscan.receipt.text_result_parser import parse_raw_text

__all__ = [
    "LineItem",
    "ParsedRecord",
    "Totals",
    "parse_raw_text",
]

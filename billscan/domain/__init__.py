"""Pure domain types shared across billscan layers."""

from billscan.domain.record import LineItem, ParsedRecord, Totals

__all__ = ["LineItem", "ParsedRecord", "Totals"]

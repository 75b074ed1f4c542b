"""Data models for parsed bills."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from decimal import Decimal
from types import MappingProxyType

ZERO = Decimal("0.00")


@dataclass(frozen=True)
class LineItem:
    """A single purchased line on a bill."""

    description: str
    unit: Decimal
    total: Decimal
    # Quantity is as printed (or guessed); total is not recomputed from it.
    qty: int = 1


@dataclass(frozen=True)
class Totals:
    """Summary amounts detected on a bill."""

    subtotal: Decimal = ZERO
    tax: Decimal = ZERO
    # Tax label ("CGST", "SGST", "GST", "VAT") -> accumulated amount; read-only.
    # Not hashed: mapping proxies are unhashable.
    gst: Mapping[str, Decimal] = field(default_factory=dict, hash=False)
    grand: Decimal = ZERO
    # Every currency amount seen, in reading order
    raw: tuple[Decimal, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "gst", MappingProxyType(dict(self.gst)))


@dataclass(frozen=True)
class ParsedRecord:
    """Structured result of one extraction run."""

    merchant: str
    date: str
    items: tuple[LineItem, ...] = ()
    totals: Totals = field(default_factory=Totals)
    payment_mode: str = ""
    ref: str = ""
    invoice_no: str = ""
    category: str = "General"
    raw: str = ""

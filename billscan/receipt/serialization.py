"""Convert ParsedRecord to and from JSON-friendly dicts."""

import json
from collections.abc import Mapping
from decimal import Decimal, InvalidOperation
from typing import Any

from billscan.domain.record import LineItem, ParsedRecord, Totals


def _amount_to_json(value: Decimal) -> float:
    return float(value)


def _amount_from_json(value: Any) -> Decimal:
    if value is None:
        return Decimal("0.00")
    try:
        amount = Decimal(str(value))
    except InvalidOperation:
        return Decimal("0.00")
    return amount.quantize(Decimal("0.01")) if amount >= 0 else Decimal("0.00")


def record_to_dict(record: ParsedRecord) -> dict[str, Any]:
    """Return a JSON-serializable dict with the record's fields (amounts as numbers)."""
    totals = record.totals
    return {
        "merchant": record.merchant,
        "date": record.date,
        "items": [
            {
                "description": item.description,
                "qty": item.qty,
                "unit": _amount_to_json(item.unit),
                "total": _amount_to_json(item.total),
            }
            for item in record.items
        ],
        "totals": {
            "subtotal": _amount_to_json(totals.subtotal),
            "tax": _amount_to_json(totals.tax),
            "gst": {label: _amount_to_json(amount) for label, amount in totals.gst.items()},
            "grand": _amount_to_json(totals.grand),
            "raw": [_amount_to_json(amount) for amount in totals.raw],
        },
        "paymentMode": record.payment_mode,
        "ref": record.ref,
        "invoiceNo": record.invoice_no,
        "category": record.category,
        "raw": record.raw,
    }


def record_from_dict(data: Mapping[str, Any]) -> ParsedRecord:
    """Rebuild a ParsedRecord from record_to_dict() output; missing fields take defaults."""
    totals_data = data.get("totals") or {}
    totals = Totals(
        subtotal=_amount_from_json(totals_data.get("subtotal")),
        tax=_amount_from_json(totals_data.get("tax")),
        gst={str(k): _amount_from_json(v) for k, v in (totals_data.get("gst") or {}).items()},
        grand=_amount_from_json(totals_data.get("grand")),
        raw=tuple(_amount_from_json(v) for v in totals_data.get("raw") or []),
    )
    items = tuple(
        LineItem(
            description=str(item.get("description") or "Item"),
            qty=max(1, int(item.get("qty") or 1)),
            unit=_amount_from_json(item.get("unit")),
            total=_amount_from_json(item.get("total")),
        )
        for item in data.get("items") or []
    )
    return ParsedRecord(
        merchant=str(data.get("merchant", "")),
        date=str(data.get("date", "")),
        items=items,
        totals=totals,
        payment_mode=str(data.get("paymentMode", "")),
        ref=str(data.get("ref", "")),
        invoice_no=str(data.get("invoiceNo", "")),
        category=str(data.get("category", "General")),
        raw=str(data.get("raw", "")),
    )


def record_to_json(record: ParsedRecord, indent: int | None = 2) -> str:
    return json.dumps(record_to_dict(record), indent=indent, ensure_ascii=False)

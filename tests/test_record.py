from decimal import Decimal

import pytest

from billscan import Totals, parse_raw_text

GST_BILL = "RELIANCE FRESH\nTea 2 10.00 20.00\nCGST 9% ₹1.80\nSGST 9% ₹1.80\nTotal ₹23.60"


def test_gst_breakdown_is_read_only() -> None:
    record = parse_raw_text(GST_BILL)

    with pytest.raises(TypeError):
        record.totals.gst["CGST"] = Decimal("999")  # type: ignore[index]

    assert record.totals.gst == {"CGST": Decimal("1.80"), "SGST": Decimal("1.80")}


def test_totals_copy_the_source_mapping() -> None:
    source = {"GST": Decimal("5.00")}
    totals = Totals(gst=source)

    source["GST"] = Decimal("50.00")

    assert totals.gst == {"GST": Decimal("5.00")}


def test_records_are_hashable() -> None:
    first = parse_raw_text(GST_BILL)
    second = parse_raw_text(GST_BILL)

    assert first == second
    assert hash(first) == hash(second)
    assert len({first, second}) == 1

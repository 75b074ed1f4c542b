from decimal import Decimal

from billscan.receipt.text_parser.items_text_parser import (
    ITEM_TIERS,
    PLACEHOLDER_DESCRIPTION,
    _extract_aligned_column_items,
    _extract_heuristic_items,
    _extract_items,
    _extract_priced_line_items,
)


def test_tier_order() -> None:
    assert ITEM_TIERS == (
        _extract_aligned_column_items,
        _extract_heuristic_items,
        _extract_priced_line_items,
    )


def test_aligned_columns() -> None:
    lines = [
        "Wireless Keyboard 2 1,299.00 2,598.00",
        "USB Mouse 1 499.00 499.00",
        "Total ₹3,097.00",
    ]

    items = _extract_items(lines)

    assert len(items) == 2
    assert items[0].description == "Wireless Keyboard"
    assert items[0].qty == 2
    assert items[0].unit == Decimal("1299.00")
    assert items[0].total == Decimal("2598.00")
    assert items[1].description == "USB Mouse"


def test_aligned_columns_shadow_heuristic_items() -> None:
    lines = ["Wireless Keyboard 2 1,299.00 2,598.00", "Milk ₹45.00"]

    items = _extract_items(lines)

    assert [item.description for item in items] == ["Wireless Keyboard"]


def test_heuristic_single_priced_line() -> None:
    items = _extract_items(["Milk Packet ₹45.00"])

    assert len(items) == 1
    assert items[0].description == "Milk Packet"
    assert items[0].qty == 1
    assert items[0].unit == Decimal("45.00")
    assert items[0].total == Decimal("45.00")


def test_heuristic_skips_summary_lines() -> None:
    items = _extract_items(["Milk Packet ₹45.00", "Total ₹45.00", "Thank you ₹0.00"])

    assert [item.description for item in items] == ["Milk Packet"]


def test_heuristic_quantity_divides_unit_price() -> None:
    items = _extract_heuristic_items(["Pen 3 ₹5"])

    assert items[0].description == "Pen"
    assert items[0].qty == 3
    assert items[0].unit == Decimal("1.67")
    assert items[0].total == Decimal("5.00")


def test_heuristic_quantity_reads_price_fraction() -> None:
    # Price decimals count as a small standalone number.
    items = _extract_heuristic_items(["Bread ₹45.50"])

    assert items[0].qty == 50
    assert items[0].unit == Decimal("0.91")


def test_heuristic_description_drops_numbers() -> None:
    items = _extract_heuristic_items(["Rice 5kg 1,200 ₹1,200.00"])

    assert items[0].description == "Rice 5kg"
    assert items[0].qty == 1
    assert items[0].total == Decimal("1200.00")


def test_heuristic_placeholder_description() -> None:
    items = _extract_heuristic_items(["₹250.00"])

    assert items[0].description == PLACEHOLDER_DESCRIPTION
    assert items[0].unit == Decimal("250.00")


def test_last_resort_tier_accepts_any_priced_line() -> None:
    items = _extract_items(["Grand Total ₹500.00"])

    assert len(items) == 1
    assert items[0].description == "Grand Total"
    assert items[0].qty == 1
    assert items[0].total == Decimal("500.00")


def test_no_items() -> None:
    assert _extract_items(["Hello", "World"]) == []
    assert _extract_items([]) == []


def test_custom_tiers() -> None:
    items = _extract_items(["Milk Packet ₹45.00"], tiers=(_extract_priced_line_items,))

    assert items[0].description == "Milk Packet"


def test_aligned_columns_zero_quantity_counts_as_one() -> None:
    items = _extract_aligned_column_items(["Free Sample 0 10.00 0.00"])

    assert items[0].description == "Free Sample"
    assert items[0].qty == 1
    assert items[0].total == Decimal("0.00")

import json
from datetime import datetime
from decimal import Decimal

import pytest

from billscan import parse_raw_text
from billscan.application.bills import summarize_spending
from billscan.runtime.paths import get_paths
from billscan.runtime.record_storage import (
    RecordNotFound,
    clear_records,
    delete_record,
    export_records,
    list_records,
    load_record,
    save_record,
)


def _record(text: str):
    return parse_raw_text(text)


def test_save_assigns_increasing_ids() -> None:
    first = save_record(_record("City Pharmacy\nTablet ₹30.00"), file_name="a.txt")
    second = save_record(_record("Pizza Corner\nPizza ₹250.00"), file_name="b.txt")

    assert (first.record_id, second.record_id) == (1, 2)
    assert (get_paths().records / "2.json").exists()


def test_load_round_trips_metadata() -> None:
    parsed_at = datetime(2024, 1, 12, 10, 30)
    saved = save_record(_record("Milk Packet ₹45.00"), file_name="milk.txt", parsed_at=parsed_at)

    loaded = load_record(saved.record_id)

    assert loaded == saved
    assert loaded.parsed_at == parsed_at
    assert loaded.file_name == "milk.txt"


def test_list_is_newest_first() -> None:
    save_record(_record("Old ₹1.00"), parsed_at=datetime(2024, 1, 1))
    save_record(_record("New ₹2.00"), parsed_at=datetime(2024, 6, 1))
    save_record(_record("Middle ₹3.00"), parsed_at=datetime(2024, 3, 1))

    assert [stored.record_id for stored in list_records()] == [2, 3, 1]


def test_delete_and_missing_records() -> None:
    saved = save_record(_record("Milk Packet ₹45.00"))

    delete_record(saved.record_id)

    with pytest.raises(RecordNotFound):
        load_record(saved.record_id)
    with pytest.raises(RecordNotFound):
        delete_record(saved.record_id)


def test_ids_are_not_reused_below_highest() -> None:
    for text in ("A ₹1.00", "B ₹2.00", "C ₹3.00"):
        save_record(_record(text))
    delete_record(2)

    assert save_record(_record("D ₹4.00")).record_id == 4


def test_clear_records() -> None:
    save_record(_record("A ₹1.00"))
    save_record(_record("B ₹2.00"))

    assert clear_records() == 2
    assert list_records() == []
    assert clear_records() == 0


def test_export_single_and_all() -> None:
    save_record(_record("A ₹1.00"), file_name="a.txt", parsed_at=datetime(2024, 1, 1))
    save_record(_record("B ₹2.00"), file_name="b.txt", parsed_at=datetime(2024, 2, 1))

    single = json.loads(export_records([1]))
    everything = json.loads(export_records())

    assert single["id"] == 1
    assert single["fileName"] == "a.txt"
    assert single["totals"]["grand"] == 1.0
    assert [entry["id"] for entry in everything] == [2, 1]


def test_unreadable_record_is_skipped() -> None:
    save_record(_record("A ₹1.00"))
    (get_paths().records / "7.json").write_text("{not json", encoding="utf-8")

    assert [stored.record_id for stored in list_records()] == [1]


def test_spending_summary() -> None:
    stored = [
        save_record(_record("City Pharmacy\nTablet ₹30.00")),
        save_record(_record("Pizza Corner\nPizza ₹250.00")),
        save_record(_record("Medical Store\nSyrup ₹70.00")),
    ]

    summary = summarize_spending(stored)

    assert summary.by_category == {"Dining": Decimal("250.00"), "Health": Decimal("100.00")}
    assert list(summary.by_category) == ["Dining", "Health"]
    assert summary.total == Decimal("350.00")
    assert summary.record_count == 3

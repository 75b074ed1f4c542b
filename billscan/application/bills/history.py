"""Saved bill history workflows: listing, export, deletion, spending summary."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from billscan.runtime.record_storage import (
    StoredRecord,
    clear_records,
    delete_record,
    export_records,
    list_records,
    load_record,
)


@dataclass(frozen=True)
class HistoryListing:
    """Saved records for display, newest first."""

    records: list[StoredRecord]


@dataclass(frozen=True)
class SpendingSummary:
    """Grand totals per category across saved records."""

    by_category: dict[str, Decimal]
    record_count: int

    @property
    def total(self) -> Decimal:
        return sum(self.by_category.values(), Decimal("0.00"))


def run_list_history() -> HistoryListing:
    return HistoryListing(records=list_records())


def run_show_record(record_id: int) -> StoredRecord:
    return load_record(record_id)


def run_export(record_id: int | None = None) -> str:
    """Export one record, or all records when record_id is None, as JSON."""
    return export_records(None if record_id is None else [record_id])


def run_delete_record(record_id: int) -> None:
    delete_record(record_id)


def run_clear_history() -> int:
    return clear_records()


def summarize_spending(records: list[StoredRecord]) -> SpendingSummary:
    """Sum grand totals per category, largest category first."""
    by_category: dict[str, Decimal] = {}
    for stored in records:
        category = stored.record.category or "General"
        by_category[category] = by_category.get(category, Decimal("0.00")) + stored.record.totals.grand
    ordered = dict(sorted(by_category.items(), key=lambda kv: (-kv[1], kv[0])))
    return SpendingSummary(by_category=ordered, record_count=len(records))


def run_spending_summary() -> SpendingSummary:
    return summarize_spending(list_records())

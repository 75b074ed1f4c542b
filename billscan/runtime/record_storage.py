"""Storage and retrieval of parsed bill records.

Each saved record is one JSON file under the records directory:

    records/
    ├── 1.json
    ├── 2.json
    └── ...

The file holds the serialized ParsedRecord plus storage metadata
(id, parse timestamp, source file name). Ids auto-increment and are
never reused while higher ids exist.
"""

import json
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Any

from billscan.domain.record import ParsedRecord
from billscan.receipt.serialization import record_from_dict, record_to_dict
from billscan.runtime.logging import get_logger
from billscan.runtime.paths import get_paths

logger = get_logger(__name__)

DEFAULT_FILE_NAME = "uploaded"


class RecordNotFound(LookupError):
    """Raised when a record id has no saved file."""


@dataclass(frozen=True)
class StoredRecord:
    """A parsed record as kept in the store."""

    record_id: int
    parsed_at: datetime
    file_name: str
    record: ParsedRecord


def _records_dir() -> Path:
    records_dir = get_paths().records
    records_dir.mkdir(parents=True, exist_ok=True)
    return records_dir


def _record_path(record_id: int) -> Path:
    return _records_dir() / f"{record_id}.json"


def _existing_ids() -> list[int]:
    ids = []
    for path in _records_dir().glob("*.json"):
        if path.stem.isdigit():
            ids.append(int(path.stem))
    return sorted(ids)


def _stored_to_dict(stored: StoredRecord) -> dict[str, Any]:
    data = record_to_dict(stored.record)
    data["id"] = stored.record_id
    data["parsedAt"] = stored.parsed_at.isoformat()
    data["fileName"] = stored.file_name
    return data


def _stored_from_dict(data: dict[str, Any]) -> StoredRecord:
    return StoredRecord(
        record_id=int(data["id"]),
        parsed_at=datetime.fromisoformat(data["parsedAt"]),
        file_name=str(data.get("fileName") or DEFAULT_FILE_NAME),
        record=record_from_dict(data),
    )


def save_record(
    record: ParsedRecord,
    file_name: str = DEFAULT_FILE_NAME,
    parsed_at: datetime | None = None,
) -> StoredRecord:
    """
    Save a parsed record under the next free id.

    Args:
        record: The parsed record
        file_name: Name of the source document, for display
        parsed_at: Timestamp to store; defaults to now

    Returns:
        The stored record with its assigned id
    """
    existing = _existing_ids()
    record_id = (existing[-1] + 1) if existing else 1
    stored = StoredRecord(
        record_id=record_id,
        parsed_at=parsed_at or datetime.now(),
        file_name=file_name or DEFAULT_FILE_NAME,
        record=record,
    )
    path = _record_path(record_id)
    path.write_text(json.dumps(_stored_to_dict(stored), indent=2, ensure_ascii=False), encoding="utf-8")
    logger.info("Saved record %d to %s", record_id, path)
    return stored


def load_record(record_id: int) -> StoredRecord:
    """Load one record by id."""
    path = _record_path(record_id)
    if not path.exists():
        raise RecordNotFound(f"Record not found: {record_id}")
    return _stored_from_dict(json.loads(path.read_text(encoding="utf-8")))


def list_records() -> list[StoredRecord]:
    """Load all saved records, newest first."""
    records = []
    for record_id in _existing_ids():
        try:
            records.append(load_record(record_id))
        except (ValueError, KeyError) as e:
            logger.warning("Skipping unreadable record %d: %s", record_id, e)
    records.sort(key=lambda stored: (stored.parsed_at, stored.record_id), reverse=True)
    return records


def delete_record(record_id: int) -> None:
    """Delete one record by id."""
    path = _record_path(record_id)
    if not path.exists():
        raise RecordNotFound(f"Record not found: {record_id}")
    path.unlink()
    logger.info("Deleted record %d", record_id)


def clear_records() -> int:
    """Delete every saved record; returns how many were removed."""
    removed = 0
    for record_id in _existing_ids():
        _record_path(record_id).unlink()
        removed += 1
    logger.info("Cleared %d records", removed)
    return removed


def export_records(record_ids: list[int] | None = None) -> str:
    """
    Export records as a JSON document.

    A single id exports one JSON object; None exports every record as a
    JSON array (newest first).
    """
    if record_ids is not None and len(record_ids) == 1:
        return json.dumps(_stored_to_dict(load_record(record_ids[0])), indent=2, ensure_ascii=False)
    if record_ids is None:
        stored_records = list_records()
    else:
        stored_records = [load_record(record_id) for record_id in record_ids]
    return json.dumps([_stored_to_dict(stored) for stored in stored_records], indent=2, ensure_ascii=False)

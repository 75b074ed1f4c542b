"""Bill scan workflow orchestration."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Literal

from billscan.receipt.text_result_parser import parse_raw_text
from billscan.runtime.category_rules import load_brand_keywords, load_category_rules
from billscan.runtime.record_storage import save_record
from billscan.runtime.text_acquisition import OCRServiceUnavailable, TextAcquisitionError, acquire_text

if TYPE_CHECKING:
    from billscan.domain.record import ParsedRecord
    from billscan.runtime.record_storage import StoredRecord

ScanStatus = Literal[
    "file_not_found",
    "ocr_unavailable",
    "acquisition_failed",
    "parsed",
    "saved",
]


@dataclass(frozen=True)
class BillScanRequest:
    """Inputs for running the bill scan workflow."""

    path: Path
    ocr_url: str | None = None
    save: bool = False
    keep_ocr_json: bool = False


@dataclass(frozen=True)
class BillScanResult:
    """Outcome from the bill scan workflow."""

    status: ScanStatus
    record: ParsedRecord | None = None
    stored: StoredRecord | None = None
    error: str | None = None


def parse_with_project_rules(raw_text: str) -> ParsedRecord:
    """Parse text using category and brand rules from the project config."""
    return parse_raw_text(
        raw_text,
        category_rules=load_category_rules(),
        brand_keywords=load_brand_keywords(),
    )


def run_bill_scan(request: BillScanRequest) -> BillScanResult:
    """Run scan flow: acquire text -> parse -> optionally save."""
    if not request.path.exists():
        return BillScanResult(status="file_not_found", error=f"Bill file not found: {request.path}")

    try:
        raw_text = acquire_text(request.path, ocr_url=request.ocr_url, keep_ocr_json=request.keep_ocr_json)
    except OCRServiceUnavailable as exc:
        return BillScanResult(status="ocr_unavailable", error=str(exc))
    except TextAcquisitionError as exc:
        return BillScanResult(status="acquisition_failed", error=str(exc))

    record = parse_with_project_rules(raw_text)
    if not request.save:
        return BillScanResult(status="parsed", record=record)

    stored = save_record(record, file_name=request.path.name)
    return BillScanResult(status="saved", record=record, stored=stored)

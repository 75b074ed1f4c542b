from pathlib import Path

import pytest

from billscan.application.bills import BillScanRequest, run_bill_scan
from billscan.runtime import text_acquisition
from billscan.runtime.category_rules import load_brand_keywords, load_category_rules
from billscan.runtime.paths import get_paths
from billscan.runtime.text_acquisition import OCRServiceUnavailable

PROJECT_RULES = """
[[rules]]
category = "Stationery"
keywords = ["notebook", "pen refill"]

[brands]
keywords = ["Zippy"]
"""


def _write_bill(tmp_path: Path, text: str, name: str = "bill.txt") -> Path:
    path = tmp_path / name
    path.write_text(text, encoding="utf-8")
    return path


def _write_project_rules() -> None:
    rules_path = get_paths().category_rules
    rules_path.parent.mkdir(parents=True, exist_ok=True)
    rules_path.write_text(PROJECT_RULES, encoding="utf-8")


def test_project_rules_are_loaded_in_front() -> None:
    _write_project_rules()

    rules = load_category_rules()
    brands = load_brand_keywords()

    assert rules[0].category == "Stationery"
    assert rules[0].keywords == ("notebook", "pen refill")
    assert brands[0] == "zippy"
    assert "megamart" in brands


def test_missing_project_rules_use_builtins() -> None:
    assert load_category_rules()[0].category == "Groceries"
    assert load_brand_keywords()[0] == "megamart"


def test_explicit_config_paths(tmp_path: Path) -> None:
    config = tmp_path / "extra.toml"
    config.write_text('[[rules]]\ncategory = "Pets"\nkeywords = "kibble"\n', encoding="utf-8")

    assert load_category_rules((str(config),))[0].category == "Pets"


def test_scan_parses_with_project_rules(tmp_path: Path) -> None:
    _write_project_rules()
    bill = _write_bill(tmp_path, "welcome to zippy\nNotebook ₹60.00\n")

    result = run_bill_scan(BillScanRequest(path=bill))

    assert result.status == "parsed"
    assert result.record is not None
    assert result.record.merchant == "ZIPPY"
    assert result.record.category == "Stationery"
    assert result.stored is None


def test_scan_and_save(tmp_path: Path) -> None:
    bill = _write_bill(tmp_path, "Milk Packet ₹45.00\n", name="milk.txt")

    result = run_bill_scan(BillScanRequest(path=bill, save=True))

    assert result.status == "saved"
    assert result.stored is not None
    assert result.stored.record_id == 1
    assert result.stored.file_name == "milk.txt"


def test_scan_missing_file(tmp_path: Path) -> None:
    result = run_bill_scan(BillScanRequest(path=tmp_path / "nope.txt"))

    assert result.status == "file_not_found"
    assert result.record is None
    assert "nope.txt" in (result.error or "")


def test_scan_ocr_unavailable(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    def unavailable(file_name: str, image_bytes: bytes, ocr_url: str):
        raise OCRServiceUnavailable("Failed to connect to OCR service")

    monkeypatch.setattr(text_acquisition, "call_ocr_service", unavailable)
    photo = tmp_path / "bill.jpg"
    photo.write_bytes(b"jpeg")

    result = run_bill_scan(BillScanRequest(path=photo))

    assert result.status == "ocr_unavailable"
    assert result.error == "Failed to connect to OCR service"


def test_scan_unreadable_document(tmp_path: Path) -> None:
    pdf = tmp_path / "bill.pdf"
    pdf.write_bytes(b"not a pdf")

    result = run_bill_scan(BillScanRequest(path=pdf))

    assert result.status == "acquisition_failed"

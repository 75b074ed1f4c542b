import json
from pathlib import Path

import pytest

from billscan.cli.main import main

BILL_TEXT = "CITY PHARMACY\nInvoice: 881\nParacetamol Tablet ₹30.00\nTotal ₹1,30,000.00\n"


@pytest.fixture
def bill_file(tmp_path: Path) -> Path:
    path = tmp_path / "pharmacy.txt"
    path.write_text(BILL_TEXT, encoding="utf-8")
    return path


def test_no_command_prints_help(capsys: pytest.CaptureFixture[str]) -> None:
    assert main([]) == 1
    assert "Commands:" in capsys.readouterr().out


def test_parse_json(bill_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["parse", str(bill_file), "--json"]) == 0

    data = json.loads(capsys.readouterr().out)
    assert data["merchant"] == "CITY PHARMACY"
    assert data["category"] == "Health"


def test_parse_summary(bill_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["parse", str(bill_file)]) == 0

    out = capsys.readouterr().out
    assert "Merchant: CITY PHARMACY" in out
    assert "Grand: ₹1,30,000.00" in out


def test_parse_missing_file(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["parse", str(tmp_path / "missing.txt")]) == 1
    assert "Error:" in capsys.readouterr().out


def test_history_commands(bill_file: Path, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["parse", str(bill_file), "--save"]) == 0
    assert "Saved to history (id: 1)" in capsys.readouterr().out

    assert main(["list"]) == 0
    listing = capsys.readouterr().out
    assert "CITY PHARMACY" in listing
    assert "pharmacy.txt" in listing

    assert main(["show", "1", "--json"]) == 0
    assert json.loads(capsys.readouterr().out)["invoiceNo"] == "881"

    assert main(["export"]) == 0
    exported = json.loads(capsys.readouterr().out)
    assert [entry["id"] for entry in exported] == [1]

    invoice_path = tmp_path / "invoice.html"
    assert main(["render", "1", "-o", str(invoice_path)]) == 0
    assert "CITY PHARMACY" in invoice_path.read_text(encoding="utf-8")
    capsys.readouterr()

    assert main(["summary"]) == 0
    assert "Health" in capsys.readouterr().out

    assert main(["delete", "1"]) == 0
    assert main(["show", "1"]) == 1
    assert main(["delete", "1"]) == 1


def test_clear_requires_confirmation(
    bill_file: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    main(["parse", str(bill_file), "--save"])
    monkeypatch.setattr("builtins.input", lambda prompt: "n")

    assert main(["clear"]) == 1
    assert main(["clear", "--yes"]) == 0
    assert "Removed 1 records" in capsys.readouterr().out


def test_empty_history(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["list"]) == 0
    assert main(["summary"]) == 0
    assert capsys.readouterr().out.count("No saved bills yet.") == 2


def test_verbose_enables_debug_logging() -> None:
    import logging

    from billscan.runtime import set_log_level

    try:
        assert main(["--verbose", "list"]) == 0
        assert logging.getLogger("billscan").level == logging.DEBUG
    finally:
        set_log_level(logging.INFO)


def test_loggers_live_under_package_namespace() -> None:
    from billscan.runtime import get_logger

    assert get_logger("billscan.cli.bills").name == "billscan.cli.bills"
    assert get_logger("plugins.extra").name == "billscan.plugins.extra"

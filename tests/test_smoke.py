"""Public smoke tests for basic module wiring."""

from __future__ import annotations


def test_imports() -> None:
    import billscan
    import billscan.application.bills
    import billscan.cli.main
    import billscan.receipt.text_result_parser
    import billscan.runtime

    assert billscan.parse_raw_text is billscan.receipt.text_result_parser.parse_raw_text
    assert billscan.application.bills is not None
    assert billscan.cli.main is not None
    assert billscan.runtime is not None

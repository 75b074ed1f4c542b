"""Bill workflows."""

from billscan.application.bills.history import (
    HistoryListing,
    SpendingSummary,
    run_clear_history,
    run_delete_record,
    run_export,
    run_list_history,
    run_show_record,
    run_spending_summary,
    summarize_spending,
)
from billscan.application.bills.scan import BillScanRequest, BillScanResult, parse_with_project_rules, run_bill_scan

__all__ = [
    "BillScanRequest",
    "BillScanResult",
    "parse_with_project_rules",
    "run_bill_scan",
    "HistoryListing",
    "SpendingSummary",
    "run_list_history",
    "run_show_record",
    "run_export",
    "run_delete_record",
    "run_clear_history",
    "run_spending_summary",
    "summarize_spending",
]

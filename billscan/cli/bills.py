"""Bill command handlers used by the CLI."""

import argparse
from datetime import date
from pathlib import Path

from billscan.application.bills import (
    BillScanRequest,
    run_bill_scan,
    run_clear_history,
    run_delete_record,
    run_export,
    run_list_history,
    run_show_record,
    run_spending_summary,
)
from billscan.receipt.formatter import format_inr, format_invoice_html, format_record_summary
from billscan.receipt.serialization import record_to_json
from billscan.runtime import get_logger
from billscan.runtime.record_storage import RecordNotFound

logger = get_logger(__name__)


def _write_or_print(content: str, output: str | None) -> None:
    if output is None:
        print(content)
        return
    Path(output).write_text(content, encoding="utf-8")
    print(f"Wrote {output}")


def cmd_parse(args: argparse.Namespace) -> int:
    """Parse a bill file and print the result."""
    result = run_bill_scan(
        BillScanRequest(
            path=Path(args.file),
            ocr_url=args.ocr_url,
            save=args.save,
            keep_ocr_json=args.keep_ocr_json,
        )
    )

    if result.error is not None:
        logger.error("%s", result.error)

    if result.status == "file_not_found":
        print(f"Error: {result.error}")
        return 1
    if result.status == "ocr_unavailable":
        print(f"OCR service unavailable: {result.error}")
        print("Make sure the OCR service is running before parsing images.")
        return 1
    if result.status == "acquisition_failed":
        print(f"Could not read bill: {result.error}")
        return 1

    record = result.record
    if record is None:
        print("Parse failed: missing record output.")
        return 1

    if args.json:
        print(record_to_json(record))
    else:
        print("=" * 60)
        print(format_record_summary(record))
        print("=" * 60)

    if result.stored is not None:
        print(f"Saved to history (id: {result.stored.record_id})")
    return 0


def cmd_list(args: argparse.Namespace) -> int:
    listing = run_list_history()
    if not listing.records:
        print("No saved bills yet.")
        return 0
    for stored in listing.records:
        record = stored.record
        print(
            f"{stored.record_id:>4}  {stored.parsed_at:%Y-%m-%d %H:%M}  "
            f"{record.merchant[:30]:<30}  {record.category:<12}  ₹{format_inr(record.totals.grand):>14}  "
            f"{stored.file_name}"
        )
    return 0


def cmd_show(args: argparse.Namespace) -> int:
    try:
        stored = run_show_record(args.id)
    except RecordNotFound as e:
        print(f"Error: {e}")
        return 1
    if args.json:
        print(record_to_json(stored.record))
    else:
        print(f"Record {stored.record_id} ({stored.file_name}, parsed {stored.parsed_at:%Y-%m-%d %H:%M})")
        print(format_record_summary(stored.record))
    return 0


def cmd_render(args: argparse.Namespace) -> int:
    try:
        stored = run_show_record(args.id)
    except RecordNotFound as e:
        print(f"Error: {e}")
        return 1
    html = format_invoice_html(stored.record, file_name=stored.file_name, generated_on=date.today())
    _write_or_print(html, args.output)
    return 0


def cmd_export(args: argparse.Namespace) -> int:
    try:
        content = run_export(args.id)
    except RecordNotFound as e:
        print(f"Error: {e}")
        return 1
    _write_or_print(content, args.output)
    return 0


def cmd_delete(args: argparse.Namespace) -> int:
    try:
        run_delete_record(args.id)
    except RecordNotFound as e:
        print(f"Error: {e}")
        return 1
    print(f"Deleted record {args.id}")
    return 0


def cmd_clear(args: argparse.Namespace) -> int:
    if not args.yes:
        answer = input("Clear all history? [y/N] ").strip().lower()
        if answer not in ("y", "yes"):
            print("Aborted.")
            return 1
    removed = run_clear_history()
    print(f"Removed {removed} records")
    return 0


def cmd_summary(args: argparse.Namespace) -> int:
    summary = run_spending_summary()
    if not summary.record_count:
        print("No saved bills yet.")
        return 0
    for category, amount in summary.by_category.items():
        print(f"{category:<14} ₹{format_inr(amount):>14}")
    print(f"{'Total':<14} ₹{format_inr(summary.total):>14}  ({summary.record_count} bills)")
    return 0


def cmd_serve(args: argparse.Namespace) -> int:
    """Start the FastAPI server for bill uploads."""
    import uvicorn

    from billscan.runtime import bill_server as server

    print(f"Starting bill server on {args.host}:{args.port}")
    print(f"Endpoints: http://{args.host}:{args.port}/parse | /upload | /records")
    print("Press Ctrl+C to stop")

    uvicorn.run(server.app, host=args.host, port=args.port)
    return 0

#!/usr/bin/env python3

import argparse
import logging
from collections.abc import Sequence

from billscan.runtime import set_log_level
from billscan.runtime.text_acquisition import DEFAULT_OCR_URL


def main(argv: Sequence[str] | None = None) -> int:
    """Main entry point for the CLI."""
    parser = argparse.ArgumentParser(
        description="Parse receipt and invoice text into structured records",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Commands:
  parse <file> [--json] [--save]   Parse a bill (text, PDF, or image via OCR)
  list                             List saved bills
  show <id> [--json]               Show one saved bill
  render <id> [-o FILE]            Render a saved bill as an HTML invoice
  export [id] [-o FILE]            Export one or all saved bills as JSON
  delete <id>                      Delete a saved bill
  clear [--yes]                    Delete all saved bills
  summary                          Spending per category across saved bills
  serve [--host] [--port]          Start the upload/parse HTTP server

Environment:
  BILLSCAN_HOME       data directory (default: ~/.billscan)
  BILLSCAN_OCR_URL    OCR service URL for images
  BILLSCAN_LOG_LEVEL  DEBUG, INFO, WARNING, ERROR
""",
    )

    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    parse_parser = subparsers.add_parser("parse", help="Parse a bill file")
    parse_parser.add_argument("file", help="Path to a .txt, .pdf or image file")
    parse_parser.add_argument("--json", action="store_true", help="Print the record as JSON")
    parse_parser.add_argument("--save", action="store_true", help="Save the record to history")
    parse_parser.add_argument(
        "--ocr-url", default=None, help=f"OCR service URL for images (default: $BILLSCAN_OCR_URL or {DEFAULT_OCR_URL})"
    )
    parse_parser.add_argument("--keep-ocr-json", action="store_true", help="Keep the raw OCR response for debugging")

    subparsers.add_parser("list", help="List saved bills")

    show_parser = subparsers.add_parser("show", help="Show a saved bill")
    show_parser.add_argument("id", type=int, help="Record id")
    show_parser.add_argument("--json", action="store_true", help="Print the record as JSON")

    render_parser = subparsers.add_parser("render", help="Render a saved bill as HTML")
    render_parser.add_argument("id", type=int, help="Record id")
    render_parser.add_argument("-o", "--output", default=None, help="Write HTML to this file instead of stdout")

    export_parser = subparsers.add_parser("export", help="Export saved bills as JSON")
    export_parser.add_argument("id", type=int, nargs="?", default=None, help="Record id (default: all)")
    export_parser.add_argument("-o", "--output", default=None, help="Write JSON to this file instead of stdout")

    delete_parser = subparsers.add_parser("delete", help="Delete a saved bill")
    delete_parser.add_argument("id", type=int, help="Record id")

    clear_parser = subparsers.add_parser("clear", help="Delete all saved bills")
    clear_parser.add_argument("--yes", action="store_true", help="Do not ask for confirmation")

    subparsers.add_parser("summary", help="Spending per category")

    serve_parser = subparsers.add_parser("serve", help="Start the HTTP server")
    serve_parser.add_argument("--host", default="127.0.0.1", help="Host to bind to (default: 127.0.0.1)")
    serve_parser.add_argument("--port", type=int, default=8080, help="Port to bind to (default: 8080)")

    args = parser.parse_args(argv)

    if args.verbose:
        set_log_level(logging.DEBUG)

    if args.command is None:
        parser.print_help()
        return 1

    from billscan.cli import bills

    handlers = {
        "parse": bills.cmd_parse,
        "list": bills.cmd_list,
        "show": bills.cmd_show,
        "render": bills.cmd_render,
        "export": bills.cmd_export,
        "delete": bills.cmd_delete,
        "clear": bills.cmd_clear,
        "summary": bills.cmd_summary,
        "serve": bills.cmd_serve,
    }
    return handlers[args.command](args)


if __name__ == "__main__":
    raise SystemExit(main())

"""Command-line interface for Sheet Records.

WHY: Moving a JSON export into a sheet tab, or pulling a tab back out as
JSON, should not require writing Python. The CLI wires a JSON shape
document, JSON record files and the Sheets client together behind four
subcommands.

HOW: Uses argparse subcommands:
  header  - print the header row a batch of records would get (offline)
  read    - read a tab and print its records as JSON
  write   - replace a tab with the records from a JSON file
  append  - append the records from a JSON file below a tab's rows
Records are a JSON array of objects, read from --input (default stdin)
and written to --output (default stdout). Status messages go to stderr.

RULES:
- --schema is always required (a shape document, see schema_file.py)
- Errors print "Error: ..." to stderr and exit with status 1
- --verbose enables DEBUG logging
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Any, List, Optional

from sheet_records.api.client import SheetsAPIError, SheetsClient
from sheet_records.core.errors import SheetRecordsError
from sheet_records.core.grid import build_grid
from sheet_records.pages import append_records, read_all, write_page
from sheet_records.schema_file import load_shape


def _status(msg: str) -> None:
    """Print a status message to stderr, keeping stdout pipeable."""
    print(msg, file=sys.stderr, flush=True)


def _load_records(path: Optional[str]) -> List[Any]:
    if path is None or path == "-":
        records = json.load(sys.stdin)
    else:
        with open(path, encoding="utf-8") as f:
            records = json.load(f)
    if not isinstance(records, list) or not all(isinstance(r, dict) for r in records):
        raise ValueError("Records input must be a JSON array of objects")
    return records


def _dump_json(data: Any, path: Optional[str]) -> None:
    text = json.dumps(data, indent=2, ensure_ascii=False)
    if path is None or path == "-":
        print(text)
    else:
        with open(path, "w", encoding="utf-8") as f:
            f.write(text + "\n")


def _run(args: argparse.Namespace) -> None:
    shape = load_shape(args.schema)

    if args.command == "header":
        grid = build_grid(_load_records(args.input), shape)
        _dump_json(grid[0], args.output)
        return

    with SheetsClient() as client:
        if args.command == "read":
            records = read_all(client, args.page_id, args.tab_name, shape)
            _dump_json(records, args.output)
            _status("Read {} records from {}".format(len(records), args.tab_name))
        elif args.command == "write":
            records = _load_records(args.input)
            write_page(client, args.page_id, args.tab_name, records, shape)
            _status("Wrote {} records to {}".format(len(records), args.tab_name))
        else:
            records = _load_records(args.input)
            append_records(client, args.page_id, args.tab_name, records, shape)
            _status("Appended {} records to {}".format(len(records), args.tab_name))


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="sheet-records",
        description="Convert JSON records to and from spreadsheet tabs.",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable debug logging.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    header = subparsers.add_parser("header", help="Print the header row for a records file.")
    header.add_argument("--schema", required=True, help="Path to a JSON shape document.")
    header.add_argument("--input", default=None, help="Records JSON file (default: stdin).")
    header.add_argument("--output", default=None, help="Output file (default: stdout).")

    for name, help_text in (
        ("read", "Read a tab as JSON records."),
        ("write", "Replace a tab with JSON records."),
        ("append", "Append JSON records below a tab's existing rows."),
    ):
        sub = subparsers.add_parser(name, help=help_text)
        sub.add_argument("page_id", help="Spreadsheet ID.")
        sub.add_argument("tab_name", help="Name of the tab.")
        sub.add_argument("--schema", required=True, help="Path to a JSON shape document.")
        if name == "read":
            sub.add_argument("--output", default=None, help="Output file (default: stdout).")
        else:
            sub.add_argument("--input", default=None, help="Records JSON file (default: stdin).")

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point for the CLI.

    RULES:
    - argv=None means use sys.argv (normal CLI invocation)
    - Explicit argv is for testing
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        _run(args)
    except (SheetRecordsError, SheetsAPIError, ValueError, OSError) as e:
        print("Error: {}".format(e), file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()

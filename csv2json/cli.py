"""Command-line interface for the CSV to JSON converter.

Usage (examples):
    csv2json path/to/file.csv
    csv2json path/to/file.csv --delimiter ";" --output out.json
    csv2json path/to/file.csv --no-header --keep-empty-lines

The JSON is written next to the input (``file.csv`` -> ``file.json``) unless
``--output`` is given.
"""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import List, Optional

from pydantic import ValidationError

from .convert import csv_to_records
from .errors import ConversionError
from .export import json_filename, records_to_json
from .models import ConversionOptions
from .rules import DEFAULT_DELIMITER
from .upload import decode_csv_bytes


def main(argv: Optional[List[str]] = None) -> None:
    parser = argparse.ArgumentParser(
        description="Convert a CSV file into a JSON array of records."
    )
    parser.add_argument("file", help="Path to input CSV file")
    parser.add_argument(
        "--delimiter",
        default=DEFAULT_DELIMITER,
        help="Field delimiter, a single character (default: ,)",
    )
    parser.add_argument(
        "--no-header",
        action="store_true",
        help="Treat the first line as data and name keys column_1, column_2, ...",
    )
    parser.add_argument(
        "--keep-empty-lines",
        action="store_true",
        help="Convert blank lines into records instead of skipping them.",
    )
    parser.add_argument(
        "--indent",
        type=int,
        default=2,
        help="JSON indentation (default: 2)",
    )
    parser.add_argument(
        "--output",
        help="Optional path for the JSON output (default: input name with .json)",
    )
    args = parser.parse_args(argv)

    path = Path(args.file)
    if not path.exists():
        raise SystemExit(f"File not found: {path}")

    try:
        options = ConversionOptions(
            delimiter=args.delimiter,
            has_header=not args.no_header,
            skip_empty_lines=not args.keep_empty_lines,
        )
    except ValidationError as e:
        raise SystemExit("; ".join(err["msg"] for err in e.errors()))

    text, _ = decode_csv_bytes(path.read_bytes())
    try:
        records = csv_to_records(text, options)
    except ConversionError as e:
        raise SystemExit(f"{path}: {e}")

    out_path = Path(args.output) if args.output else path.with_name(json_filename(path.name))
    out_path.write_text(records_to_json(records, indent=args.indent), encoding="utf-8")

    columns = list(records[0].keys()) if records else []
    print(f"Records: {len(records)}  Columns: {len(columns)}")
    print(f"Saved JSON to {out_path}")


if __name__ == "__main__":  # pragma: no cover
    main()

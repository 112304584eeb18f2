"""
Record construction: header mapping and numeric coercion over tokenized lines.

The conversion is a pure function of (text, options). It performs no I/O and
keeps no state between calls.
"""

from __future__ import annotations

import logging
import math
import re
from typing import List, Optional

from .errors import EmptyDocumentError
from .models import ConversionOptions, Record, Value
from .rules import COLUMN_PREFIX
from .tokenizer import parse_line

logger = logging.getLogger("csv2json.convert")

# Plain ASCII decimal literals only: no hex, no nan/inf, no digit separators.
_INT_RE = re.compile(r"[+-]?[0-9]+")
_FLOAT_RE = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")


def coerce_value(value: str) -> Value:
    """Return ``value`` as an int or float when the whole value is numeric, else the trimmed string."""
    text = value.strip()

    if _INT_RE.fullmatch(text):
        try:
            return int(text)
        except ValueError:
            # beyond sys.get_int_max_str_digits(); fall through to float
            pass

    if _FLOAT_RE.fullmatch(text):
        number = float(text)
        # 1e400 and friends overflow; keep the literal
        if math.isfinite(number):
            return number

    return text


def split_lines(text: str, skip_empty_lines: bool = True) -> List[str]:
    lines = text.split("\n")
    if skip_empty_lines:
        lines = [line for line in lines if line.strip()]
    return lines


def resolve_keys(first_line: str, options: ConversionOptions) -> List[str]:
    """
    Derive the ordered key sequence from the first usable line.

    With a header the line's fields are the keys (duplicates are kept).
    Without one, the line only provides the column count.
    """
    fields = parse_line(first_line, options.delimiter)
    if options.has_header:
        return fields
    return [f"{COLUMN_PREFIX}{index + 1}" for index in range(len(fields))]


def build_record(keys: List[str], fields: List[str]) -> Record:
    record: Record = {}
    for index, key in enumerate(keys):
        # short rows are padded, long rows lose their extra fields
        raw = fields[index] if index < len(fields) else ""
        record[key] = coerce_value(raw)
    return record


def csv_to_records(text: str, options: Optional[ConversionOptions] = None) -> List[Record]:
    """
    Convert a CSV document into an ordered list of records.

    Raises:
        EmptyDocumentError: no lines remain after blank-line filtering.
    """
    if options is None:
        options = ConversionOptions()

    lines = split_lines(text, options.skip_empty_lines)
    if not lines:
        raise EmptyDocumentError()

    keys = resolve_keys(lines[0], options)
    data_lines = lines[1:] if options.has_header else lines

    records = [build_record(keys, parse_line(line, options.delimiter)) for line in data_lines]

    logger.debug(
        "Converted %d lines into %d records with %d keys",
        len(lines),
        len(records),
        len(keys),
    )
    return records

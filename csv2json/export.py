from __future__ import annotations

import json
import re
from typing import List

from .models import Record

_CSV_SUFFIX_RE = re.compile(r"\.csv$", re.IGNORECASE)


def records_to_json(records: List[Record], indent: int = 2) -> str:
    return json.dumps(records, indent=indent, ensure_ascii=False)


def json_filename(filename: str) -> str:
    """people.csv -> people.json; names without a .csv suffix get .json appended."""
    if _CSV_SUFFIX_RE.search(filename):
        return _CSV_SUFFIX_RE.sub(".json", filename)
    return f"{filename}.json"

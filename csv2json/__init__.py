"""CSV to JSON conversion.

Public entry points:
    parse_line(line, delimiter=",")          -> list of trimmed fields
    csv_to_records(text, options=None)       -> list of ordered records

The FastAPI service lives in ``csv2json.main`` and the command line in
``csv2json.cli``.
"""

from .convert import coerce_value, csv_to_records
from .errors import ConversionError, EmptyDocumentError
from .models import ConversionOptions
from .tokenizer import parse_line

__all__ = [
    "ConversionError",
    "ConversionOptions",
    "EmptyDocumentError",
    "coerce_value",
    "csv_to_records",
    "parse_line",
]

"""
Deterministic conversion rules.

Constants shared by the tokenizer, the record builder and the upload layer.
Operational limits can be overridden through environment variables.
"""

import os

DEFAULT_DELIMITER = ","
QUOTE_CHAR = '"'
COLUMN_PREFIX = "column_"

# Form value that asks the upload layer to sniff the delimiter
AUTO_DELIMITER = "auto"
SNIFF_DELIMITERS = [",", ";", "\t", "|"]

# A plausible CSV has one of these on its first line
CONTENT_DELIMITER_HINTS = (",", ";")

ALLOWED_EXTENSIONS = (".csv",)
ALLOWED_MIME_TYPES = (
    "text/csv",
    "application/csv",
    "text/plain",
    "application/vnd.ms-excel",
)

MAX_UPLOAD_BYTES = int(os.getenv("CSV2JSON_MAX_UPLOAD_BYTES", str(10 * 1024 * 1024)))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

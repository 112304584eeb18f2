"""
Upload intake: everything between a raw uploaded file and the converter.

Responsibilities:
- filename / MIME pre-checks
- size limit
- encoding detection + decoding to text
- newline normalization
- content sanity check
- optional delimiter sniffing
"""

from __future__ import annotations

import csv
import logging
from typing import Optional, Tuple

from charset_normalizer import from_bytes

from .errors import InvalidUploadError, UploadTooLargeError
from .models import EncodingReport
from .rules import (
    ALLOWED_EXTENSIONS,
    ALLOWED_MIME_TYPES,
    CONTENT_DELIMITER_HINTS,
    DEFAULT_DELIMITER,
    MAX_UPLOAD_BYTES,
    SNIFF_DELIMITERS,
)

logger = logging.getLogger("csv2json.upload")

_UTF8_BOM = b"\xef\xbb\xbf"


def check_filename(filename: Optional[str], content_type: Optional[str] = None) -> None:
    """Reject files whose extension or declared MIME type is not CSV-like."""
    name = (filename or "").lower()
    if not name.endswith(ALLOWED_EXTENSIONS):
        raise InvalidUploadError("Only CSV files are supported")

    # Browsers sometimes send no type at all; that is accepted
    if content_type and content_type.split(";")[0].strip().lower() not in ALLOWED_MIME_TYPES:
        raise InvalidUploadError(f"Unsupported content type: {content_type}")


def check_size(raw: bytes, limit: int = MAX_UPLOAD_BYTES) -> None:
    if len(raw) > limit:
        raise UploadTooLargeError(f"File exceeds the {limit} byte upload limit")


def decode_csv_bytes(raw: bytes) -> Tuple[str, EncodingReport]:
    """
    Decode uploaded bytes to text with LF newlines.

    Rules:
    - A UTF-8 BOM is honored and stripped.
    - Otherwise detect the encoding best-effort via charset-normalizer.
    - If decoding fails, fall back to UTF-8, then to replacement characters.
    """
    detected = None
    bom = raw.startswith(_UTF8_BOM)

    if bom:
        decode_used = "utf-8-sig"
    else:
        match = from_bytes(raw).best()
        if match is not None:
            detected = match.encoding
        decode_used = detected or "utf-8"

    decode_fallback = False

    try:
        text = raw.decode(decode_used)
    except (UnicodeDecodeError, LookupError):
        logger.warning("Decoding with %s failed, retrying as utf-8", decode_used)
        decode_fallback = True
        try:
            text = raw.decode("utf-8")
            decode_used = "utf-8"
        except UnicodeDecodeError:
            # Last resort: decode with replacement so conversion can continue deterministically
            text = raw.decode("utf-8", errors="replace")
            decode_used = "utf-8"

    logger.info("Decoded upload: detected=%s used=%s", detected, decode_used)

    # CRLF/CR -> LF
    text = text.replace("\r\n", "\n").replace("\r", "\n")

    report = EncodingReport(
        detected=detected,
        decode_used=decode_used,
        decode_fallback=decode_fallback,
        bom=bom,
    )
    return text, report


def check_content(text: str, delimiter: str = DEFAULT_DELIMITER) -> None:
    """Cheap plausibility check before conversion: non-blank, delimited, more than one line."""
    if not text.strip():
        raise InvalidUploadError("CSV document is empty")

    lines = text.split("\n")
    first_line = lines[0]
    hints = set(CONTENT_DELIMITER_HINTS) | {delimiter}
    if not any(hint in first_line for hint in hints):
        raise InvalidUploadError("The file does not look like CSV: no delimiter found on the first line")

    if len(lines) < 2:
        raise InvalidUploadError("The file does not look like CSV: expected at least two lines")


def sniff_delimiter(text: str) -> str:
    """Guess the delimiter from the first lines, defaulting to comma."""
    sample = "\n".join(text.split("\n")[:20])
    try:
        dialect = csv.Sniffer().sniff(sample, delimiters="".join(SNIFF_DELIMITERS))
    except csv.Error:
        logger.debug("Delimiter sniffing failed, using %r", DEFAULT_DELIMITER)
        return DEFAULT_DELIMITER
    return dialect.delimiter

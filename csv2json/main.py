import logging
from contextlib import asynccontextmanager
from urllib.parse import quote

from fastapi import FastAPI, UploadFile, File, Form, HTTPException
from fastapi.responses import Response
from pydantic import ValidationError

from . import rules
from .convert import csv_to_records
from .errors import ConversionError, UploadTooLargeError
from .export import json_filename, records_to_json
from .models import ConversionOptions, ConversionSummary, ConvertResponse, HealthResponse
from .rules import AUTO_DELIMITER
from .upload import check_content, check_filename, check_size, decode_csv_bytes, sniff_delimiter

logger = logging.getLogger("csv2json.api")


@asynccontextmanager
async def lifespan(app: FastAPI):
    logging.basicConfig(level=rules.LOG_LEVEL)
    yield


app = FastAPI(
    title="csv2json",
    description="Convert CSV documents into ordered JSON records",
    version="0.1.0",
    lifespan=lifespan,
)


def _options(delimiter: str, text: str, has_header: bool, skip_empty_lines: bool) -> ConversionOptions:
    if delimiter == AUTO_DELIMITER:
        delimiter = sniff_delimiter(text)
    try:
        return ConversionOptions(
            delimiter=delimiter,
            has_header=has_header,
            skip_empty_lines=skip_empty_lines,
        )
    except ValidationError as e:
        raise HTTPException(status_code=422, detail="; ".join(err["msg"] for err in e.errors()))


async def _convert_upload(
    file: UploadFile, delimiter: str, has_header: bool, skip_empty_lines: bool
) -> ConvertResponse:
    try:
        check_filename(file.filename, file.content_type)
        # one byte past the limit is enough to detect an oversize upload
        limit = rules.MAX_UPLOAD_BYTES
        raw = await file.read(limit + 1)
        check_size(raw, limit)
        text, encoding = decode_csv_bytes(raw)

        options = _options(delimiter, text, has_header, skip_empty_lines)
        check_content(text, options.delimiter)
        records = csv_to_records(text, options)
    except UploadTooLargeError as e:
        raise HTTPException(status_code=413, detail=str(e))
    except ConversionError as e:
        logger.info("Rejected %s: %s", file.filename, e)
        raise HTTPException(status_code=422, detail=str(e))

    logger.info("Converted %s: %d records", file.filename, len(records))

    summary = ConversionSummary(
        records=len(records),
        columns=list(records[0].keys()) if records else [],
        delimiter=options.delimiter,
        has_header=options.has_header,
        encoding=encoding,
    )
    return ConvertResponse(filename=file.filename, records=records, summary=summary)


@app.get("/health", response_model=HealthResponse)
def health():
    return {"ok": True}


@app.post("/convert", response_model=ConvertResponse)
async def convert_csv(
    file: UploadFile = File(...),
    delimiter: str = Form(","),
    has_header: bool = Form(True),
    skip_empty_lines: bool = Form(True),
):
    return await _convert_upload(file, delimiter, has_header, skip_empty_lines)


@app.post("/convert/download")
async def download_json(
    file: UploadFile = File(...),
    delimiter: str = Form(","),
    has_header: bool = Form(True),
    skip_empty_lines: bool = Form(True),
):
    result = await _convert_upload(file, delimiter, has_header, skip_empty_lines)
    out_name = json_filename(result.filename)
    # ASCII fallback plus RFC 5987 form for non-ASCII names
    fallback = out_name.encode("ascii", "replace").decode("ascii").replace('"', "")
    disposition = f"attachment; filename=\"{fallback}\"; filename*=UTF-8''{quote(out_name)}"
    return Response(
        content=records_to_json(result.records),
        media_type="application/json",
        headers={"Content-Disposition": disposition},
    )

from __future__ import annotations

from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, Field, field_validator

from .rules import DEFAULT_DELIMITER, QUOTE_CHAR

Value = Union[int, float, str]
Record = Dict[str, Value]


class ConversionOptions(BaseModel):
    delimiter: str = Field(default=DEFAULT_DELIMITER, examples=[",", ";", "\t"])
    has_header: bool = True
    skip_empty_lines: bool = True

    @field_validator("delimiter")
    @classmethod
    def _single_character(cls, value: str) -> str:
        if len(value) != 1:
            raise ValueError("delimiter must be a single character")
        if value == QUOTE_CHAR or value in ("\n", "\r"):
            raise ValueError(f"delimiter cannot be {value!r}")
        return value


class EncodingReport(BaseModel):
    detected: Optional[str] = None
    decode_used: str
    decode_fallback: bool = False
    bom: bool = False


class ConversionSummary(BaseModel):
    records: int = 0
    columns: List[str] = Field(default_factory=list)
    delimiter: str = DEFAULT_DELIMITER
    has_header: bool = True
    encoding: Optional[EncodingReport] = None


class ConvertResponse(BaseModel):
    filename: str
    records: List[Dict[str, Any]] = Field(default_factory=list)
    summary: ConversionSummary


class HealthResponse(BaseModel):
    ok: bool = True

"""Parsing and resolution of reranker input records."""
from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from .chunking import split_lines
from .errors import InputReadError, RecordParseError


class RerankMetadata(BaseModel):
    """The ``metadata`` block written by the text embedder for each chunk."""

    model_config = ConfigDict(extra="allow")

    file_path: str = Field(strict=True)
    start_line: int = Field(ge=0, strict=True)
    end_line: int = Field(ge=0, strict=True)

    @model_validator(mode="after")
    def _check_span(self) -> "RerankMetadata":
        if self.end_line < self.start_line:
            raise ValueError("end_line must not be smaller than start_line")
        return self


class RerankInput(BaseModel):
    model_config = ConfigDict(extra="allow")

    metadata: RerankMetadata


def _describe(error: ValidationError) -> str:
    parts = []
    for item in error.errors():
        location = ".".join(str(part) for part in item["loc"]) or "record"
        if item["type"] == "missing":
            parts.append(f"Missing {location}")
        else:
            parts.append(f"Invalid {location}: {item['msg']}")
    return "; ".join(parts)


def parse_record(line: str, record_number: int | None = None) -> Dict[str, Any]:
    """Decode one stdin line into a JSON object."""

    where = f" in record {record_number}" if record_number is not None else ""
    try:
        record = json.loads(line)
    except json.JSONDecodeError as error:
        raise RecordParseError(f"Malformed JSON{where}: {error}", cause=error) from error
    if not isinstance(record, dict):
        raise RecordParseError(f"Expected a JSON object{where}, got {type(record).__name__}")
    return record


def validate_record(record: Dict[str, Any]) -> RerankInput:
    try:
        return RerankInput.model_validate(record)
    except ValidationError as error:
        raise RecordParseError(_describe(error), cause=error) from error


def resolve_document(record: Dict[str, Any]) -> str:
    """Re-read the chunk a record points at and return its full text.

    The result is source lines ``[start_line, end_line)`` joined by newlines,
    so the referenced file must still exist at the recorded path.
    """

    metadata = validate_record(record).metadata
    try:
        content = Path(metadata.file_path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as error:
        raise InputReadError(f"Failed to read file: {metadata.file_path}", cause=error) from error

    lines = split_lines(content)
    return "\n".join(lines[metadata.start_line : metadata.end_line])

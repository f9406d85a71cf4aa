"""Newline-delimited input and JSON output helpers."""
from __future__ import annotations

import json
from typing import Any, Iterable, Iterator, Mapping, TextIO

from .errors import InputReadError, OutputWriteError


def iter_input_lines(stream: Iterable[str]) -> Iterator[str]:
    """Yield stripped lines from *stream*; a blank line stops the run."""

    try:
        for number, line in enumerate(stream, start=1):
            stripped = line.strip()
            if not stripped:
                raise InputReadError(f"Empty input on line {number}")
            yield stripped
    except (OSError, UnicodeDecodeError) as error:
        raise InputReadError(f"Failed to read input line: {error}", cause=error) from error


def write_record(out: TextIO, record: Mapping[str, Any]) -> None:
    try:
        out.write(json.dumps(record, ensure_ascii=False))
        out.write("\n")
    except OSError as error:
        raise OutputWriteError(f"Failed to write output: {error}", cause=error) from error

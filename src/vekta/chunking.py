"""Word-count chunking and the approximate mapping back to source lines."""
from __future__ import annotations

import logging
from typing import List, Tuple

from .models import TextChunk

CHUNK_SIZE = 256

LOGGER = logging.getLogger(__name__)


def _check_chunk_size(chunk_size: int) -> None:
    if chunk_size <= 0:
        raise ValueError("chunk_size must be a positive integer")


def split_lines(content: str) -> List[str]:
    """Split *content* on ``\\n`` only, dropping a trailing ``\\r`` from each line.

    Form feeds and other Unicode separators stay inside their line, and a final
    newline does not start an empty last line.
    """

    lines = content.split("\n")
    last = lines.pop()
    lines = [line[:-1] if line.endswith("\r") else line for line in lines]
    if last:
        lines.append(last)
    return lines


def split_into_chunks(text: str, chunk_size: int = CHUNK_SIZE) -> List[str]:
    """Split *text* into windows of ``chunk_size`` words joined by single spaces.

    Original whitespace and line breaks are not preserved, so a chunk is not a
    substring of the source. The last chunk may hold fewer words.
    """

    _check_chunk_size(chunk_size)
    words = text.split()
    return [" ".join(words[start : start + chunk_size]) for start in range(0, len(words), chunk_size)]


def get_line_range(content: str, chunk_index: int, chunk_size: int = CHUNK_SIZE) -> Tuple[int, int]:
    """Return the ``(start_line, end_line)`` span covering a chunk's words.

    ``end_line`` is exclusive. The span is derived from running word counts per
    line and is therefore approximate; for trailing chunks ``end_line`` can
    point one past the last line and callers must clip when slicing.
    """

    _check_chunk_size(chunk_size)
    start_word = chunk_index * chunk_size
    end_word = (chunk_index + 1) * chunk_size

    start_line = 0
    end_line = 0
    word_count = 0
    for line_number, line in enumerate(split_lines(content)):
        if word_count < start_word:
            start_line = line_number
        if word_count < end_word:
            end_line = line_number
        else:
            break
        word_count += len(line.split())

    return start_line, end_line + 1


def chunk_file(content: str, chunk_size: int = CHUNK_SIZE) -> List[TextChunk]:
    """Chunk *content* and attach each chunk's approximate line range."""

    chunks = []
    for index, text in enumerate(split_into_chunks(content, chunk_size)):
        start_line, end_line = get_line_range(content, index, chunk_size)
        LOGGER.debug("Chunk %s lines %s-%s", index, start_line, end_line)
        chunks.append(TextChunk(index=index, text=text, start_line=start_line, end_line=end_line))
    return chunks

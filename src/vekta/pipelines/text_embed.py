"""Text embedding pipeline: file paths in, one vector per word chunk out."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, TextIO

from ..batching import iter_batches
from ..chunking import CHUNK_SIZE, chunk_file
from ..errors import InputReadError
from ..jsonl import iter_input_lines, write_record
from ..metadata import get_file_metadata
from ..models import EmbeddingRecord
from ..providers.base import Embedder

LOGGER = logging.getLogger(__name__)


def read_text_file(path: str) -> str:
    try:
        return Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as error:
        raise InputReadError(f"Failed to read file: {path}", cause=error) from error


def embed_file(
    path: str,
    out: TextIO,
    embedder: Embedder,
    batch_size: int,
    chunk_size: int = CHUNK_SIZE,
) -> int:
    """Chunk and embed a single file, returning the number of chunks written."""

    content = read_text_file(path)
    chunks = chunk_file(content, chunk_size)

    for batch_index, batch in enumerate(iter_batches(chunks, batch_size)):
        LOGGER.info("  Embedding batch %s of file %s", batch_index + 1, path)
        vectors = embedder.embed([chunk.text for chunk in batch])
        for chunk, vector in zip(batch, vectors):
            metadata = get_file_metadata(path, content, chunk)
            write_record(out, EmbeddingRecord(label=metadata.label, vector=vector, metadata=metadata).to_dict())
        out.flush()
    return len(chunks)


def run_text_pipeline(
    lines: Iterable[str],
    out: TextIO,
    embedder: Embedder,
    batch_size: int,
    chunk_size: int = CHUNK_SIZE,
) -> int:
    """Embed each file named on *lines*, one file at a time.

    Returns the number of files processed.
    """

    file_count = 0
    for path in iter_input_lines(lines):
        LOGGER.info("Processing file: %s", path)
        embed_file(path, out, embedder, batch_size, chunk_size)
        file_count += 1

    LOGGER.info("Processed %s files successfully.", file_count)
    return file_count

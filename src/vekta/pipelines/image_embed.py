"""Image embedding pipeline: image paths in, vectors with image metadata out."""
from __future__ import annotations

import logging
from typing import Iterable, TextIO

from ..batching import batch_count, iter_batches
from ..jsonl import iter_input_lines, write_record
from ..metadata import get_image_metadata
from ..models import EmbeddingRecord
from ..providers.base import ImageEmbedder

LOGGER = logging.getLogger(__name__)


def run_image_pipeline(
    lines: Iterable[str],
    out: TextIO,
    embedder: ImageEmbedder,
    batch_size: int,
) -> int:
    """Embed every image path read from *lines* and write one record per image.

    All paths are read before the first batch is embedded. Returns the number
    of images processed.
    """

    image_paths = list(iter_input_lines(lines))
    total_images = len(image_paths)
    total_batches = batch_count(total_images, batch_size)
    LOGGER.info("Processing %s images...", total_images)

    for batch_index, batch in enumerate(iter_batches(image_paths, batch_size)):
        LOGGER.info("Embedding batch %s of %s", batch_index + 1, total_batches)
        vectors = embedder.embed(batch)
        for path, vector in zip(batch, vectors):
            metadata = get_image_metadata(path)
            write_record(out, EmbeddingRecord(label=metadata.label, vector=vector, metadata=metadata).to_dict())
        out.flush()

    LOGGER.info("Processed %s images successfully.", total_images)
    return total_images

"""Data models emitted by the embedding and reranking pipelines."""
from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, List, Tuple, Union


@dataclass(slots=True)
class TextChunk:
    """A window of whitespace-delimited words plus its approximate line span."""

    index: int
    text: str
    start_line: int
    end_line: int


@dataclass(slots=True)
class TextChunkMetadata:
    """Provenance attached to a text chunk embedding."""

    label: str
    file_path: str
    file_name: str
    chunk_index: int
    start_line: int
    end_line: int
    content_preview: str


@dataclass(slots=True)
class ImageMetadata:
    """Provenance attached to an image embedding."""

    label: str
    file_path: str
    file_name: str
    file_size: int
    image_format: str
    dimensions: Tuple[int, int]
    color_space: str


@dataclass(slots=True)
class EmbeddingRecord:
    """One output line of the embedding tools."""

    label: str
    vector: List[float]
    metadata: Union[TextChunkMetadata, ImageMetadata]

    def to_dict(self) -> Dict[str, Any]:
        metadata = asdict(self.metadata)
        if "dimensions" in metadata:
            metadata["dimensions"] = list(metadata["dimensions"])
        return {"label": self.label, "vector": list(self.vector), "metadata": metadata}


@dataclass(slots=True)
class RerankScore:
    """Relevance score for the document at ``index`` in the reranked input."""

    index: int
    score: float

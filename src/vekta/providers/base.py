"""Model capability interfaces injected into the pipelines."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List, Sequence

from ..models import RerankScore

__all__ = ["Embedder", "ImageEmbedder", "Reranker"]


class Embedder(ABC):
    """Turns text chunks into fixed-length vectors."""

    @abstractmethod
    def embed(self, batch: Sequence[str]) -> List[List[float]]:
        """Return one vector per text, in input order."""


class ImageEmbedder(ABC):
    """Turns image files into fixed-length vectors."""

    @abstractmethod
    def embed(self, batch: Sequence[str]) -> List[List[float]]:
        """Return one vector per image path, in input order."""


class Reranker(ABC):
    """Scores candidate documents against a query."""

    @abstractmethod
    def rerank(self, query: str, documents: Sequence[str]) -> List[RerankScore]:
        """Return a score per document, sorted by descending relevance."""

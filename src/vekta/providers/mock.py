"""Deterministic offline providers for tests and development without model downloads."""
from __future__ import annotations

import hashlib
import random
from pathlib import Path
from typing import List, Sequence

from ..errors import InputReadError
from ..models import RerankScore
from .base import Embedder, ImageEmbedder, Reranker


def _seeded_vector(data: bytes, dimension: int) -> List[float]:
    seed = hashlib.sha256(data).hexdigest()
    rng = random.Random(seed)
    return [(rng.random() * 2.0) - 1.0 for _ in range(dimension)]


class MockEmbedder(Embedder):
    """Return deterministic embedding vectors derived from each text."""

    def __init__(self, dimension: int = 8) -> None:
        if dimension <= 0:
            raise ValueError("dimension must be a positive integer")
        self.dimension = dimension
        self.calls: List[List[str]] = []

    def embed(self, batch: Sequence[str]) -> List[List[float]]:
        self.calls.append(list(batch))
        return [_seeded_vector(text.encode("utf-8"), self.dimension) for text in batch]


class MockImageEmbedder(ImageEmbedder):
    """Hash image bytes into deterministic vectors."""

    def __init__(self, dimension: int = 8) -> None:
        if dimension <= 0:
            raise ValueError("dimension must be a positive integer")
        self.dimension = dimension
        self.calls: List[List[str]] = []

    def embed(self, batch: Sequence[str]) -> List[List[float]]:
        self.calls.append(list(batch))
        vectors = []
        for path in batch:
            try:
                data = Path(path).read_bytes()
            except OSError as error:
                raise InputReadError(f"Failed to read image: {path}", cause=error) from error
            vectors.append(_seeded_vector(data, self.dimension))
        return vectors


class MockReranker(Reranker):
    """Score documents by the share of query terms they contain."""

    def rerank(self, query: str, documents: Sequence[str]) -> List[RerankScore]:
        terms = {term.lower() for term in query.split()}
        scores = []
        for index, document in enumerate(documents):
            words = {word.lower() for word in document.split()}
            score = len(terms & words) / len(terms) if terms else 0.0
            scores.append(RerankScore(index=index, score=float(score)))
        scores.sort(key=lambda item: item.score, reverse=True)
        return scores

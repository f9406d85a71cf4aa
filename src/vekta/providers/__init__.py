"""Model providers and the factories that pick one from configuration."""
from __future__ import annotations

from ..config import VektaConfig
from .base import Embedder, ImageEmbedder, Reranker
from .mock import MockEmbedder, MockImageEmbedder, MockReranker

__all__ = [
    "Embedder",
    "ImageEmbedder",
    "Reranker",
    "MockEmbedder",
    "MockImageEmbedder",
    "MockReranker",
    "get_embedder",
    "get_image_embedder",
    "get_reranker",
]


def get_embedder(config: VektaConfig) -> Embedder:
    if config.provider == "mock":
        return MockEmbedder()
    from .huggingface import SentenceTransformerEmbedder

    embedder = SentenceTransformerEmbedder(config.text_model, device=config.device)
    embedder.load()
    return embedder


def get_image_embedder(config: VektaConfig) -> ImageEmbedder:
    if config.provider == "mock":
        return MockImageEmbedder()
    from .huggingface import ClipImageEmbedder

    embedder = ClipImageEmbedder(config.image_model, device=config.device)
    embedder.load()
    return embedder


def get_reranker(config: VektaConfig) -> Reranker:
    if config.provider == "mock":
        return MockReranker()
    from .huggingface import CrossEncoderReranker

    reranker = CrossEncoderReranker(config.rerank_model, device=config.device)
    reranker.load()
    return reranker

"""Embedding and reranking providers backed by sentence-transformers."""
from __future__ import annotations

import logging
import time
from typing import Any, Callable, List, Optional, Sequence

import numpy as np
from PIL import Image

from ..config import DEFAULT_IMAGE_MODEL, DEFAULT_RERANK_MODEL, DEFAULT_TEXT_MODEL
from ..errors import InputReadError, ModelError
from ..models import RerankScore
from ..telemetry import emit_embeddings_event, emit_rerank_event, traced_duration
from .base import Embedder, ImageEmbedder, Reranker

LOGGER = logging.getLogger(__name__)


def _to_vectors(embeddings: Any) -> List[List[float]]:
    return np.asarray(embeddings, dtype=np.float64).tolist()


class _LazyModel:
    """Holds a model object, constructing it on first use unless one was injected."""

    def __init__(self, model_name: str, device: Optional[str], model: Any | None) -> None:
        self.model_name = model_name
        self.device = device
        self._model = model

    def _build(self) -> Any:  # pragma: no cover - overridden
        raise NotImplementedError

    def load(self) -> Any:
        if self._model is None:
            with traced_duration("model.load", logger=LOGGER, model=self.model_name):
                try:
                    self._model = self._build()
                except Exception as error:
                    raise ModelError(
                        f"Failed to initialize model '{self.model_name}': {error}", cause=error
                    ) from error
        return self._model


class _SentenceTransformerModel(_LazyModel):
    def _build(self) -> Any:
        from sentence_transformers import SentenceTransformer

        return SentenceTransformer(self.model_name, device=self.device)


class _CrossEncoderModel(_LazyModel):
    def _build(self) -> Any:
        from sentence_transformers import CrossEncoder

        return CrossEncoder(self.model_name, device=self.device, trust_remote_code=True)


def _timed_encode(model_name: str, count: int, encode: Callable[[], Any], what: str) -> List[List[float]]:
    started = time.perf_counter()
    try:
        vectors = _to_vectors(encode())
    except Exception as error:
        emit_embeddings_event(
            model=model_name,
            count=count,
            duration_ms=(time.perf_counter() - started) * 1000.0,
            errors=[str(error)],
        )
        raise ModelError(f"Failed to embed {what}: {error}", cause=error) from error

    emit_embeddings_event(
        model=model_name,
        count=count,
        duration_ms=(time.perf_counter() - started) * 1000.0,
    )
    return vectors


class SentenceTransformerEmbedder(Embedder):
    """Text embedder wrapping a SentenceTransformer model."""

    def __init__(
        self,
        model_name: str = DEFAULT_TEXT_MODEL,
        *,
        device: str | None = None,
        model: Any | None = None,
    ) -> None:
        self._holder = _SentenceTransformerModel(model_name, device, model)

    @property
    def model_name(self) -> str:
        return self._holder.model_name

    def load(self) -> None:
        self._holder.load()

    def embed(self, batch: Sequence[str]) -> List[List[float]]:
        if not batch:
            return []
        model = self._holder.load()
        return _timed_encode(
            self.model_name,
            len(batch),
            lambda: model.encode(
                list(batch),
                batch_size=len(batch),
                convert_to_numpy=True,
                show_progress_bar=False,
            ),
            "texts",
        )


class ClipImageEmbedder(ImageEmbedder):
    """Image embedder using a CLIP checkpoint loaded through sentence-transformers."""

    def __init__(
        self,
        model_name: str = DEFAULT_IMAGE_MODEL,
        *,
        device: str | None = None,
        model: Any | None = None,
    ) -> None:
        self._holder = _SentenceTransformerModel(model_name, device, model)

    @property
    def model_name(self) -> str:
        return self._holder.model_name

    def load(self) -> None:
        self._holder.load()

    @staticmethod
    def _open_images(paths: Sequence[str]) -> List[Image.Image]:
        images = []
        for path in paths:
            try:
                with Image.open(path) as image:
                    images.append(image.convert("RGB"))
            except OSError as error:
                raise InputReadError(f"Failed to read image: {path}", cause=error) from error
        return images

    def embed(self, batch: Sequence[str]) -> List[List[float]]:
        if not batch:
            return []
        model = self._holder.load()
        images = self._open_images(batch)
        return _timed_encode(
            self.model_name,
            len(images),
            lambda: model.encode(
                images,
                batch_size=len(images),
                convert_to_numpy=True,
                show_progress_bar=False,
            ),
            "images",
        )


class CrossEncoderReranker(Reranker):
    """Cross-encoder reranker; scores every (query, document) pair in one call."""

    def __init__(
        self,
        model_name: str = DEFAULT_RERANK_MODEL,
        *,
        device: str | None = None,
        model: Any | None = None,
    ) -> None:
        self._holder = _CrossEncoderModel(model_name, device, model)

    @property
    def model_name(self) -> str:
        return self._holder.model_name

    def load(self) -> None:
        self._holder.load()

    def rerank(self, query: str, documents: Sequence[str]) -> List[RerankScore]:
        if not documents:
            return []
        model = self._holder.load()
        started = time.perf_counter()
        try:
            ranking = model.rank(query, list(documents), return_documents=False)
        except Exception as error:
            emit_rerank_event(
                model=self.model_name,
                count=len(documents),
                duration_ms=(time.perf_counter() - started) * 1000.0,
                errors=[str(error)],
            )
            raise ModelError(f"Failed to rerank documents: {error}", cause=error) from error

        emit_rerank_event(
            model=self.model_name,
            count=len(documents),
            duration_ms=(time.perf_counter() - started) * 1000.0,
        )
        scores = [RerankScore(index=int(item["corpus_id"]), score=float(item["score"])) for item in ranking]
        scores.sort(key=lambda item: item.score, reverse=True)
        return scores

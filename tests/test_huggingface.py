"""Tests for the sentence-transformers wrappers using injected fake models."""
from __future__ import annotations

from typing import Any, List

import numpy as np
import pytest
from PIL import Image

from vekta.errors import InputReadError, ModelError
from vekta.providers import huggingface
from vekta.providers.huggingface import ClipImageEmbedder, CrossEncoderReranker, SentenceTransformerEmbedder


class _FakeEncoder:
    def __init__(self, fail: bool = False) -> None:
        self.fail = fail
        self.calls: List[dict[str, Any]] = []

    def encode(self, inputs, *, batch_size=None, convert_to_numpy=True, show_progress_bar=True):
        self.calls.append(
            {"inputs": list(inputs), "batch_size": batch_size, "show_progress_bar": show_progress_bar}
        )
        if self.fail:
            raise RuntimeError("out of memory")
        return np.array([[float(index), 0.5] for index, _ in enumerate(inputs)], dtype=np.float32)


class _FakeCrossEncoder:
    def __init__(self, ranking=None, fail: bool = False) -> None:
        self.ranking = ranking or []
        self.fail = fail
        self.calls: List[tuple] = []

    def rank(self, query, documents, return_documents=True):
        self.calls.append((query, list(documents), return_documents))
        if self.fail:
            raise RuntimeError("model crashed")
        return self.ranking


def test_text_embedder_returns_plain_float_lists() -> None:
    model = _FakeEncoder()
    embedder = SentenceTransformerEmbedder(model=model)

    vectors = embedder.embed(["first chunk", "second chunk"])

    assert vectors == [[0.0, 0.5], [1.0, 0.5]]
    assert all(isinstance(value, float) for vector in vectors for value in vector)
    assert model.calls == [
        {"inputs": ["first chunk", "second chunk"], "batch_size": 2, "show_progress_bar": False}
    ]


def test_text_embedder_skips_model_for_empty_batch() -> None:
    model = _FakeEncoder()

    assert SentenceTransformerEmbedder(model=model).embed([]) == []
    assert model.calls == []


def test_text_embedder_wraps_inference_errors() -> None:
    embedder = SentenceTransformerEmbedder(model=_FakeEncoder(fail=True))

    with pytest.raises(ModelError, match="out of memory"):
        embedder.embed(["chunk"])


def test_model_load_failure_raises_model_error(monkeypatch: pytest.MonkeyPatch) -> None:
    def _broken_build(self):
        raise OSError("no such model")

    monkeypatch.setattr(huggingface._SentenceTransformerModel, "_build", _broken_build)
    embedder = SentenceTransformerEmbedder("missing/model")

    with pytest.raises(ModelError, match="missing/model"):
        embedder.load()


def test_model_is_built_once(monkeypatch: pytest.MonkeyPatch) -> None:
    built: List[str] = []

    def _build(self):
        built.append(self.model_name)
        return _FakeEncoder()

    monkeypatch.setattr(huggingface._SentenceTransformerModel, "_build", _build)
    embedder = SentenceTransformerEmbedder("some/model")

    embedder.load()
    embedder.embed(["a"])
    embedder.embed(["b"])

    assert built == ["some/model"]


def test_image_embedder_passes_rgb_images(write_image) -> None:
    grey = write_image("grey.png", mode="L")
    rgba = write_image("alpha.png", mode="RGBA")
    model = _FakeEncoder()

    vectors = ClipImageEmbedder(model=model).embed([str(grey), str(rgba)])

    assert len(vectors) == 2
    images = model.calls[0]["inputs"]
    assert all(isinstance(image, Image.Image) for image in images)
    assert [image.mode for image in images] == ["RGB", "RGB"]


def test_image_embedder_reports_unreadable_images(tmp_path) -> None:
    model = _FakeEncoder()

    with pytest.raises(InputReadError, match="missing.png"):
        ClipImageEmbedder(model=model).embed([str(tmp_path / "missing.png")])
    assert model.calls == []


def test_reranker_returns_scores_best_first() -> None:
    model = _FakeCrossEncoder(
        ranking=[
            {"corpus_id": 0, "score": np.float32(0.25)},
            {"corpus_id": 2, "score": np.float32(0.75)},
            {"corpus_id": 1, "score": np.float32(-1.0)},
        ]
    )

    scores = CrossEncoderReranker(model=model).rerank("query", ["a", "b", "c"])

    assert [(score.index, score.score) for score in scores] == [(2, 0.75), (0, 0.25), (1, -1.0)]
    assert all(type(score.score) is float for score in scores)
    assert model.calls == [("query", ["a", "b", "c"], False)]


def test_reranker_wraps_inference_errors() -> None:
    reranker = CrossEncoderReranker(model=_FakeCrossEncoder(fail=True))

    with pytest.raises(ModelError, match="model crashed"):
        reranker.rerank("query", ["a"])


def test_reranker_skips_model_without_documents() -> None:
    model = _FakeCrossEncoder()

    assert CrossEncoderReranker(model=model).rerank("query", []) == []
    assert model.calls == []

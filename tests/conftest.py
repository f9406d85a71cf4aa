"""Shared fixtures: sample files on disk, mock providers and a clean environment."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable

import pytest
from PIL import Image

from vekta.providers import MockEmbedder, MockImageEmbedder, MockReranker


VEKTA_ENV_KEYS = (
    "VEKTA_QUIET",
    "VEKTA_LOG_LEVEL",
    "VEKTA_LOG_FORMAT",
    "VEKTA_BATCH_SIZE",
    "VEKTA_CHUNK_SIZE",
    "VEKTA_PROVIDER",
    "VEKTA_DEVICE",
    "VEKTA_TEXT_MODEL",
    "VEKTA_IMAGE_MODEL",
    "VEKTA_RERANK_MODEL",
)


def make_words(count: int, prefix: str = "word") -> list[str]:
    return [f"{prefix}{index}" for index in range(count)]


@pytest.fixture(autouse=True)
def _reset_vekta_logger():
    yield
    logger = logging.getLogger("vekta")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
    logger.propagate = True


@pytest.fixture()
def clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Path:
    """Unset every VEKTA_* variable and run from an empty directory (no .env).

    Each key is registered with monkeypatch first so that values loaded from a
    ``.env`` file during the test are removed again afterwards.
    """

    for key in VEKTA_ENV_KEYS:
        monkeypatch.setenv(key, "")
        monkeypatch.delenv(key)
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture()
def write_text(tmp_path: Path) -> Callable[[str, str], Path]:
    def _write(name: str, content: str) -> Path:
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        return path

    return _write


@pytest.fixture()
def write_image(tmp_path: Path) -> Callable[..., Path]:
    def _write(name: str, *, mode: str = "RGB", size: tuple[int, int] = (4, 3), fmt: str = "PNG") -> Path:
        path = tmp_path / name
        Image.new(mode, size).save(path, format=fmt)
        return path

    return _write


@pytest.fixture()
def mock_embedder() -> MockEmbedder:
    return MockEmbedder(dimension=4)


@pytest.fixture()
def mock_image_embedder() -> MockImageEmbedder:
    return MockImageEmbedder(dimension=4)


@pytest.fixture()
def mock_reranker() -> MockReranker:
    return MockReranker()

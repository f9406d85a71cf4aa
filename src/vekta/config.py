"""Runtime configuration shared by the three command-line tools."""
from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from dotenv import find_dotenv, load_dotenv

from .errors import ConfigurationError

DEFAULT_CHUNK_SIZE = 256
DEFAULT_TEXT_MODEL = "sentence-transformers/all-MiniLM-L6-v2"
DEFAULT_IMAGE_MODEL = "clip-ViT-B-32"
DEFAULT_RERANK_MODEL = "jinaai/jina-reranker-v1-turbo-en"

_PROVIDERS = {"local", "mock"}
_LOG_FORMATS = {"text", "json"}
_LOG_LEVELS = {"debug", "info", "warning", "error", "critical"}


@dataclass(slots=True)
class VektaConfig:
    """Settings resolved once at startup and passed to each pipeline."""

    quiet: bool = False
    log_level: str = "INFO"
    log_format: str = "text"
    batch_size: Optional[int] = None
    chunk_size: int = DEFAULT_CHUNK_SIZE
    provider: str = "local"
    device: Optional[str] = None
    text_model: str = DEFAULT_TEXT_MODEL
    image_model: str = DEFAULT_IMAGE_MODEL
    rerank_model: str = DEFAULT_RERANK_MODEL


def _positive_int(environ: Mapping[str, str], key: str) -> Optional[int]:
    raw = environ.get(key, "").strip()
    if not raw:
        return None
    try:
        value = int(raw)
    except ValueError as error:
        raise ConfigurationError(f"{key} must be an integer, got {raw!r}", cause=error) from error
    if value <= 0:
        raise ConfigurationError(f"{key} must be a positive integer, got {value}")
    return value


def _choice(environ: Mapping[str, str], key: str, default: str, allowed: set[str]) -> str:
    value = environ.get(key, default).strip().lower() or default
    if value not in allowed:
        options = ", ".join(sorted(allowed))
        raise ConfigurationError(f"{key} must be one of {options}, got {value!r}")
    return value


def load_config(environ: Optional[Mapping[str, str]] = None) -> VektaConfig:
    """Build a :class:`VektaConfig` from environment variables.

    When *environ* is omitted the process environment is used, after loading a
    ``.env`` file from the working directory if one exists.
    """

    if environ is None:
        load_dotenv(find_dotenv(usecwd=True))
        environ = os.environ

    return VektaConfig(
        quiet=environ.get("VEKTA_QUIET", "").strip() == "1",
        log_level=_choice(environ, "VEKTA_LOG_LEVEL", "info", _LOG_LEVELS).upper(),
        log_format=_choice(environ, "VEKTA_LOG_FORMAT", "text", _LOG_FORMATS),
        batch_size=_positive_int(environ, "VEKTA_BATCH_SIZE"),
        chunk_size=_positive_int(environ, "VEKTA_CHUNK_SIZE") or DEFAULT_CHUNK_SIZE,
        provider=_choice(environ, "VEKTA_PROVIDER", "local", _PROVIDERS),
        device=environ.get("VEKTA_DEVICE") or None,
        text_model=environ.get("VEKTA_TEXT_MODEL") or DEFAULT_TEXT_MODEL,
        image_model=environ.get("VEKTA_IMAGE_MODEL") or DEFAULT_IMAGE_MODEL,
        rerank_model=environ.get("VEKTA_RERANK_MODEL") or DEFAULT_RERANK_MODEL,
    )

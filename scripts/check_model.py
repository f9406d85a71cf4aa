#!/usr/bin/env python3
"""CLI helper that verifies whether the configured models can be loaded."""

from __future__ import annotations

import logging
import sys
from pathlib import Path


def _load_dotenv() -> None:
    from dotenv import load_dotenv

    project_root = Path(__file__).resolve().parents[1]
    env_file = project_root / ".env"
    if env_file.exists():
        load_dotenv(dotenv_path=env_file)
    else:  # pragma: no cover - fallback path
        load_dotenv()


def _configure_logging() -> None:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")


def main() -> int:
    _load_dotenv()
    _configure_logging()

    from vekta.config import load_config
    from vekta.errors import VektaError
    from vekta.providers import get_embedder, get_image_embedder, get_reranker
    from vekta.resources import detect_system_resources

    try:
        config = load_config()
    except VektaError as error:
        logging.error("Invalid configuration: %s", error)
        return 1

    detect_system_resources(config.batch_size)

    failures = 0
    for kind, model_name, factory in (
        ("text", config.text_model, get_embedder),
        ("image", config.image_model, get_image_embedder),
        ("rerank", config.rerank_model, get_reranker),
    ):
        logging.info("Loading %s model '%s'", kind, model_name)
        try:
            factory(config)
        except VektaError as error:
            logging.error("Failed to load %s model: %s", kind, error)
            failures += 1
            continue
        logging.info("%s model '%s' loaded", kind.capitalize(), model_name)

    return 1 if failures else 0


if __name__ == "__main__":
    raise SystemExit(main())

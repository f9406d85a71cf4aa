"""Console entry points: ``vie`` (images), ``vte`` (text) and ``vre`` (rerank)."""
from __future__ import annotations

import argparse
import logging
import sys
from typing import Callable, Optional, Sequence

from .config import VektaConfig, load_config
from .errors import VektaError
from .logging_config import configure_logging
from .pipelines import run_image_pipeline, run_rerank_pipeline, run_text_pipeline
from .providers import get_embedder, get_image_embedder, get_reranker
from .resources import detect_system_resources

LOGGER = logging.getLogger(__name__)

_IMAGE_DESCRIPTION = """\
It reads image file paths from stdin, processes these images,
and outputs JSON-formatted embeddings with metadata to stdout.

The tool processes images in batches for efficiency."""

_IMAGE_EPILOG = """\
Example usage:
  find . -name '*.jpg' -o -name '*.png' | vie > image_embeddings.jsonl"""

_TEXT_DESCRIPTION = """\
It reads file paths from stdin, processes the text in these files,
and outputs JSON-formatted embeddings to stdout.

The tool splits text into chunks and processes them in batches for efficiency."""

_TEXT_EPILOG = """\
Example usage:
  find . -name '*.txt' | vte > text_embeddings.jsonl"""

_RERANK_DESCRIPTION = """\
Reranks JSON-formatted documents based on the given query.
It's designed to work with Vekta text embedding results.
The tool reads JSON documents from stdin, one per line,
and outputs reranked JSON documents to stdout.

Each input JSON document should have a 'metadata' field with 'file_path',
'start_line', and 'end_line' subfields.
The output includes the original document fields plus a 'rerank_score' field."""

_RERANK_EPILOG = """\
Example usage:
  cat top_k_results.jsonl | vre 'my search query' > reranked_results.jsonl"""


def _parser(prog: str, title: str, description: str, epilog: str) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=prog,
        description=f"{prog} - {title}\n\n{description}",
        epilog=epilog,
        formatter_class=argparse.RawDescriptionHelpFormatter,
        add_help=False,
    )
    parser.add_argument("-h", "--help", action="store_true", help="Show this help message and exit")
    return parser


def build_image_parser() -> argparse.ArgumentParser:
    return _parser("vie", "Vekta Image Embedder", _IMAGE_DESCRIPTION, _IMAGE_EPILOG)


def build_text_parser() -> argparse.ArgumentParser:
    return _parser("vte", "Vekta Text Embedder", _TEXT_DESCRIPTION, _TEXT_EPILOG)


def build_rerank_parser() -> argparse.ArgumentParser:
    parser = _parser("vre", "Vekta Reranker", _RERANK_DESCRIPTION, _RERANK_EPILOG)
    parser.add_argument("query", nargs="?", help="Search query the documents are scored against")
    return parser


def _run(action: Callable[[VektaConfig], object]) -> int:
    try:
        config = load_config()
    except VektaError as error:
        print(f"Error: {error}", file=sys.stderr)
        return 1

    configure_logging(config)
    try:
        action(config)
    except (VektaError, OSError) as error:
        # Printed rather than logged so no log level or quiet setting hides it.
        print(f"Error: {error}", file=sys.stderr)
        return 1
    return 0


def _embed_images(config: VektaConfig) -> None:
    resources = detect_system_resources(config.batch_size)
    LOGGER.info("Initializing image embedding model...")
    embedder = get_image_embedder(config)
    LOGGER.info("Model initialized successfully.")
    run_image_pipeline(sys.stdin, sys.stdout, embedder, resources.batch_size)


def _embed_texts(config: VektaConfig) -> None:
    resources = detect_system_resources(config.batch_size)
    LOGGER.info("Initializing text embedding model...")
    embedder = get_embedder(config)
    LOGGER.info("Model initialized successfully.")
    run_text_pipeline(sys.stdin, sys.stdout, embedder, resources.batch_size, config.chunk_size)


def image_main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_image_parser()
    args, _ = parser.parse_known_args(argv)
    if args.help:
        parser.print_help(sys.stderr)
        return 0
    return _run(_embed_images)


def text_main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_text_parser()
    args, _ = parser.parse_known_args(argv)
    if args.help:
        parser.print_help(sys.stderr)
        return 0
    return _run(_embed_texts)


def rerank_main(argv: Optional[Sequence[str]] = None) -> int:
    """Rerank stdin records against the first argument.

    The first argument is taken verbatim as the query, so queries that start
    with ``-`` and the empty string are accepted; only ``-h``/``--help`` there
    asks for usage.
    """

    parser = build_rerank_parser()
    argv = list(sys.argv[1:] if argv is None else argv)
    if not argv or argv[0] in ("-h", "--help"):
        parser.print_help(sys.stderr)
        return 0
    query = argv[0]

    def _rerank(config: VektaConfig) -> None:
        LOGGER.info("Initializing reranker model...")
        reranker = get_reranker(config)
        LOGGER.info("Model initialized successfully.")
        run_rerank_pipeline(query, sys.stdin, sys.stdout, reranker)

    return _run(_rerank)

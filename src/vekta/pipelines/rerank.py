"""Rerank pipeline: chunk records in, the same records ordered by relevance out."""
from __future__ import annotations

import logging
from typing import Iterable, TextIO

from ..jsonl import iter_input_lines, write_record
from ..providers.base import Reranker
from ..rerank_input import parse_record, resolve_document

LOGGER = logging.getLogger(__name__)

SCORE_FIELD = "rerank_score"


def run_rerank_pipeline(query: str, lines: Iterable[str], out: TextIO, reranker: Reranker) -> int:
    """Score every record against *query* and write them best first.

    Every record is parsed and its document re-read before scoring starts, so a
    bad record aborts the run before anything is written.
    """

    records = [parse_record(line, number) for number, line in enumerate(iter_input_lines(lines), start=1)]
    documents = [resolve_document(record) for record in records]

    LOGGER.info("Reranking %s documents...", len(documents))
    scores = reranker.rerank(query, documents)

    for result in scores:
        item = dict(records[result.index])
        item[SCORE_FIELD] = result.score
        write_record(out, item)
    out.flush()

    LOGGER.info("Reranking completed successfully.")
    return len(records)

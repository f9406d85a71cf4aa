"""The three stdin-to-stdout pipelines."""
from __future__ import annotations

from .image_embed import run_image_pipeline
from .rerank import run_rerank_pipeline
from .text_embed import run_text_pipeline

__all__ = ["run_image_pipeline", "run_rerank_pipeline", "run_text_pipeline"]

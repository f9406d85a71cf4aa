"""Vekta: stdin/stdout embedding and reranking tools for retrieval pipelines."""

__version__ = "0.1.0"

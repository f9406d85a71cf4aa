"""Structured debug events for model loading and inference timing."""

from __future__ import annotations

import logging
import time
import traceback
from contextlib import contextmanager
from typing import Any, Iterator, Optional

LOGGER = logging.getLogger("vekta.telemetry")


def _format_exception(error: BaseException) -> str:
    return "".join(traceback.format_exception(error.__class__, error, error.__traceback__))


def log_event(
    logger: Optional[logging.Logger],
    step: str,
    *,
    level: str = "debug",
    duration_ms: float | None = None,
    exc: BaseException | str | None = None,
    details: dict[str, Any] | None = None,
    **payload: Any,
) -> None:
    """Emit a structured log event as a dict message."""

    logger = logger or LOGGER
    event: dict[str, Any] = {"step": step}
    if duration_ms is not None:
        event["duration_ms"] = round(duration_ms, 3)
    if details is not None:
        event["details"] = details
    event.update(payload)

    if exc is not None:
        if isinstance(exc, BaseException):
            event["exc"] = _format_exception(exc)
        else:
            event["exc"] = str(exc)

    log_method = getattr(logger, level.lower(), logger.debug)
    log_method(event)


@contextmanager
def traced_duration(step: str, *, logger: Optional[logging.Logger] = None, **fields: Any) -> Iterator[None]:
    start = time.perf_counter()
    log_event(logger, f"{step}.start", details=fields)
    try:
        yield
    except Exception as error:
        log_event(logger, f"{step}.error", details=fields, exc=error)
        raise
    finally:
        log_event(
            logger,
            f"{step}.complete",
            duration_ms=(time.perf_counter() - start) * 1000.0,
            details=fields,
        )


def emit_embeddings_event(
    *, model: str, count: int, duration_ms: float, errors: list[str] | None = None
) -> None:
    details = {
        "model": model,
        "count": count,
        "errors": errors or [],
        "per_item_ms": round(duration_ms / count, 3) if count else None,
    }
    log_event(LOGGER, "embeddings.compute", duration_ms=duration_ms, details=details)


def emit_rerank_event(
    *, model: str, count: int, duration_ms: float, errors: list[str] | None = None
) -> None:
    details = {
        "model": model,
        "count": count,
        "errors": errors or [],
    }
    log_event(LOGGER, "rerank.compute", duration_ms=duration_ms, details=details)


__all__ = [
    "emit_embeddings_event",
    "emit_rerank_event",
    "log_event",
    "traced_duration",
]

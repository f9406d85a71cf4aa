"""Logging configuration for the command-line tools."""

from __future__ import annotations

import json
import logging
import logging.config
from datetime import datetime, timezone
from typing import Any

from .config import VektaConfig

PACKAGE_LOGGER = "vekta"


class MinimalJSONFormatter(logging.Formatter):
    """Serialize log records to a compact JSON string."""

    _RESERVED_KEYS = {
        "name",
        "msg",
        "args",
        "levelname",
        "levelno",
        "pathname",
        "filename",
        "module",
        "exc_info",
        "exc_text",
        "stack_info",
        "lineno",
        "funcName",
        "created",
        "msecs",
        "relativeCreated",
        "thread",
        "threadName",
        "processName",
        "process",
        "taskName",
        "message",
    }

    def format(self, record: logging.LogRecord) -> str:  # noqa: D401 - inherited
        timestamp = (
            datetime.fromtimestamp(record.created, tz=timezone.utc)
            .isoformat()
            .replace("+00:00", "Z")
        )

        log_record: dict[str, Any] = {
            "ts": timestamp,
            "level": record.levelname,
            "module": record.name,
        }

        if isinstance(record.msg, dict):
            log_record.update(record.msg)
        else:
            message = record.getMessage()
            if message:
                log_record["message"] = message

        if record.exc_info:
            log_record["exc_info"] = self.formatException(record.exc_info)

        for key, value in record.__dict__.items():
            if key in self._RESERVED_KEYS or key.startswith("_"):
                continue
            log_record[key] = value

        return json.dumps(log_record, ensure_ascii=False, default=str)


class ProgressFormatter(logging.Formatter):
    """Render plain progress lines; structured events become ``step key=value``."""

    def format(self, record: logging.LogRecord) -> str:
        if isinstance(record.msg, dict):
            event = dict(record.msg)
            step = event.pop("step", record.name)
            fields = " ".join(f"{key}={value}" for key, value in event.items())
            return f"{step} {fields}".rstrip()
        return super().format(record)


def configure_logging(config: VektaConfig) -> None:
    """Route ``vekta`` log records to stderr according to *config*.

    Quiet mode raises the threshold to ``ERROR`` so that progress lines vanish
    while fatal errors are still reported.
    """

    formatter = "json" if config.log_format == "json" else "progress"
    level = "ERROR" if config.quiet else config.log_level

    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "json": {"()": MinimalJSONFormatter},
                "progress": {"()": ProgressFormatter},
            },
            "handlers": {
                "stderr": {
                    "class": "logging.StreamHandler",
                    "formatter": formatter,
                    "stream": "ext://sys.stderr",
                },
            },
            "loggers": {
                PACKAGE_LOGGER: {
                    "level": level,
                    "handlers": ["stderr"],
                    "propagate": False,
                }
            },
        }
    )

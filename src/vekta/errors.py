"""Common exceptions raised by the Vekta pipelines."""
from __future__ import annotations


class VektaError(RuntimeError):
    """Base class for every fatal pipeline error."""

    def __init__(self, message: str, *, cause: Exception | None = None) -> None:
        super().__init__(message)
        self.__cause__ = cause


class InputReadError(VektaError):
    """Raised when stdin or a referenced file cannot be read."""


class RecordParseError(VektaError):
    """Raised when an input record is malformed or lacks required fields."""


class ModelError(VektaError):
    """Raised when a model cannot be loaded or fails during inference."""


class ConfigurationError(VektaError):
    """Raised when environment configuration holds an invalid value."""


class OutputWriteError(VektaError):
    """Raised when results cannot be written to stdout."""

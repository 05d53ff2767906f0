"""Exceptions raised while configuring or running a conversion."""

from __future__ import annotations

from pathlib import Path


class ConversionError(Exception):
    """Base class for converter failures."""


class ConfigurationError(ConversionError):
    """Raised when the output configuration is unusable for any input."""


class FileConversionError(ConversionError):
    """A failure scoped to a single input file."""

    reason = "conversion failed"

    def __init__(self, path: str | Path, detail: str | None = None) -> None:
        self.path = Path(path)
        self.detail = detail
        message = f"{self.reason}: {self.path}"
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message)


class InputOpenError(FileConversionError):
    reason = "failed to open input file"


class DecodeError(FileConversionError):
    reason = "failed to decode image"


class OutputOpenError(FileConversionError):
    reason = "failed to open output file"


class OutputWriteError(FileConversionError):
    reason = "failed to write output file"

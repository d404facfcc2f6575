"""Exception hierarchy for control_recorder."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

__all__ = [
    "ControlRecorderError",
    "PersistError",
    "ConfigurationError",
    "ValueConversionError",
]


class ControlRecorderError(Exception):
    """Base class for all errors raised by control_recorder."""


class PersistError(ControlRecorderError, OSError):
    """Raised when buffered snapshots cannot be written to the CSV file.

    The in-memory buffer is left untouched when this is raised. Rows that
    reached the file before the failure stay there, so persisting again will
    write them a second time.
    """

    def __init__(self, message: str, file_name: Optional[Path] = None) -> None:
        super().__init__(message)
        self.file_name = file_name

    def __str__(self) -> str:
        base = self.args[0] if self.args else "persist failed"
        if self.file_name is not None:
            return f"{base} (file: {self.file_name})"
        return str(base)


class ConfigurationError(ControlRecorderError, ValueError):
    """Raised for invalid recorder configuration or topology files."""


class ValueConversionError(ControlRecorderError, TypeError):
    """Raised when a Python object has no recordable value variant."""

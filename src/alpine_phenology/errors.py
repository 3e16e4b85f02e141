"""Exception hierarchy.

Field-level problems (sentinels, unparseable numbers) never raise: they become
absent values during normalization. These exceptions cover the cases that must
stop a run instead of producing partial results.
"""

from __future__ import annotations


class PhenologyError(Exception):
    """Base class for all errors raised by this package."""


class InputFileError(PhenologyError):
    """An input file is missing, unreadable, or lacks a required column."""

    def __init__(self, path: object, detail: str, column: str | None = None) -> None:
        self.path = path
        self.column = column
        where = f"{path} [column {column!r}]" if column else f"{path}"
        super().__init__(f"{where}: {detail}")


class DataValidationError(PhenologyError, ValueError):
    """Input data is structurally inconsistent (duplicate dates, impossible counts)."""


class InsufficientDataError(PhenologyError, ValueError):
    """Too few values for the requested statistic."""

from __future__ import annotations

"""Exception hierarchy for the reconciliation tool.

Every failure raised from the core derives from ``ReconError`` so the session
and the CLI can report it without catching unrelated exceptions.
"""

__all__ = [
    "ReconError",
    "CsvParseError",
    "CsvReadError",
    "MissingHeaderError",
]


class ReconError(Exception):
    """Base exception for reconciliation errors."""


class CsvParseError(ReconError):
    """Raised when a CSV file cannot be turned into a usable dataset."""


class CsvReadError(ReconError):
    """Raised when the underlying file read fails (permissions, missing file)."""


class MissingHeaderError(ReconError):
    """Raised when the YMS dataset lacks one or more required columns."""

    def __init__(self, missing: list[str] | tuple[str, ...]) -> None:
        self.missing = tuple(missing)
        super().__init__(f"Missing required headers in YMS data: {', '.join(self.missing)}")

from __future__ import annotations

import logging
from pathlib import Path
from typing import Protocol

"""Clipboard sinks for the 13-line summary.

The reconciliation core only sees a ``ClipboardSink``; which concrete sink is
used (desktop clipboard, file, memory) is decided by the CLI.
"""

__all__ = [
    "ClipboardError",
    "ClipboardSink",
    "FileSink",
    "MemoryClipboard",
    "TkClipboard",
]

logger = logging.getLogger(__name__)


class ClipboardError(Exception):
    """Raised when a sink cannot accept the text."""


class ClipboardSink(Protocol):
    def copy(self, text: str) -> None: ...


class MemoryClipboard:
    """Keeps every copied text in memory (tests / headless runs)."""

    def __init__(self) -> None:
        self.history: list[str] = []

    @property
    def text(self) -> str | None:
        return self.history[-1] if self.history else None

    def copy(self, text: str) -> None:
        self.history.append(text)


class FileSink:
    """Writes the copied text to a file (overwrites)."""

    def __init__(self, path: Path) -> None:
        self.path = path

    def copy(self, text: str) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(text + "\n", encoding="utf-8")
        except OSError as e:
            raise ClipboardError(f"failed to write summary file {self.path}: {e}") from e


class TkClipboard:
    """System clipboard through a hidden Tk root window."""

    def copy(self, text: str) -> None:
        try:
            import tkinter
        except ImportError as e:  # pragma: no cover (platform dependent)
            raise ClipboardError(f"tkinter not available: {e}") from e
        try:
            root = tkinter.Tk()
        except tkinter.TclError as e:
            # DISPLAY 無し (SSH / CI) の場合
            raise ClipboardError(f"no display for clipboard: {e}") from e
        try:
            root.withdraw()
            root.clipboard_clear()
            root.clipboard_append(text)
            root.update()
        finally:
            root.destroy()
        logger.debug("summary copied to system clipboard")

"""Exception hierarchy for dfr-browser."""

from __future__ import annotations

from pathlib import Path


class BrowserError(Exception):
    """Base class for all dfr-browser errors."""


class ParseError(BrowserError):
    """A data file does not match its expected schema."""

    def __init__(self, path: Path | str, message: str) -> None:
        self.path = Path(path)
        super().__init__(f"{self.path.name}: {message}")


class LoadError(BrowserError):
    """A loader stage failed; names the stage and the file it was reading."""

    def __init__(self, stage: str, path: Path | str, reason: str = "") -> None:
        self.stage = stage
        self.path = Path(path)
        message = f"failed to load {stage} from {self.path}"
        if reason:
            message += f": {reason}"
        super().__init__(message)


class ViewError(BrowserError):
    """A view was asked for a topic or document that does not exist."""


class WordcountFormatError(BrowserError):
    """A wordcount CSV is unusable; the file is skipped."""


class ConversionError(BrowserError):
    """An input or output file could not be opened, written or closed."""

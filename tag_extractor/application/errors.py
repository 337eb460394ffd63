"""Errors raised by the tag extractor and its file-access collaborator."""

from __future__ import annotations
from pathlib import Path


class TagExtractorError(Exception):
    """Base class for every error this package raises on purpose."""


# --- usage errors: the driver called things out of order ---

class UsageError(TagExtractorError):
    """Raised when an operation runs before its preconditions are met."""


class NoDocumentSelectedError(UsageError):
    def __init__(self) -> None:
        super().__init__("Pick a text file first.")


class StopWordsNotLoadedError(UsageError):
    def __init__(self) -> None:
        super().__init__("Pick a stop words file before extracting tags.")


class NothingToSaveError(UsageError):
    def __init__(self) -> None:
        super().__init__("Nothing to save. Run extraction first.")


# --- file access ---

class ReadFailure(TagExtractorError):
    """A document or stop-word file could not be read or decoded."""

    def __init__(self, path: Path | str, reason: str):
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"Error reading {self.path}: {reason}")


class WriteFailure(TagExtractorError):
    """A report file could not be written."""

    def __init__(self, path: Path | str, reason: str):
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"Error saving {self.path}: {reason}")


class PathOutsideDataDirError(TagExtractorError):
    """A requested file resolves to somewhere outside the configured data directory."""

    def __init__(self, path: Path | str, data_dir: Path | str):
        self.path = Path(path)
        self.data_dir = Path(data_dir)
        super().__init__(f"{self.path} is outside the data directory {self.data_dir}")


class ReportFormatError(TagExtractorError, ValueError):
    """A saved report line is not of the form ``word : count``."""


__all__ = [
    "TagExtractorError",
    "UsageError",
    "NoDocumentSelectedError",
    "StopWordsNotLoadedError",
    "NothingToSaveError",
    "ReadFailure",
    "WriteFailure",
    "PathOutsideDataDirError",
    "ReportFormatError",
]

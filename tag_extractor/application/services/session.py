from __future__ import annotations
from collections import Counter
from dataclasses import dataclass, field
from pathlib import Path
import threading
from typing import List, Optional

from loguru import logger

from tag_extractor.application.errors import (
    NoDocumentSelectedError,
    NothingToSaveError,
    StopWordsNotLoadedError,
)
from tag_extractor.application.services.file_access import FileAccessService
from tag_extractor.application.services.stopwords import StopWordSet
from tag_extractor.application.services.tag_extractor import (
    FrequencyTable,
    RankedEntry,
    TagExtractorService,
)
from tag_extractor.application.settings import Settings


@dataclass
class ExtractionResult:
    document_name: Optional[str]
    entries: List[RankedEntry]
    report_lines: List[str]

    @property
    def total_distinct(self) -> int:
        return len(self.entries)

    @property
    def can_save(self) -> bool:
        return bool(self.entries)


@dataclass
class ExtractionSession:
    """
    Driver-side state for one user: chosen files, loaded stop words and the
    last frequency table.

    The extraction core never sees this object; the session hands the
    StopWordSet and table to it explicitly and keeps what comes back.
    Every public operation holds ``_lock``, so a web server running handlers
    in a thread pool sees each choose/extract/save/clear as one step.
    """

    extractor: TagExtractorService
    files: FileAccessService

    document_path: Optional[Path] = None
    stop_words_path: Optional[Path] = None
    # None until a list is loaded; an empty StopWordSet is a deliberate "filter nothing"
    stop_words: Optional[StopWordSet] = None
    table: FrequencyTable = field(default_factory=Counter)
    _lock: threading.RLock = field(default_factory=threading.RLock, repr=False, compare=False)

    @classmethod
    def build(cls, settings: Settings) -> "ExtractionSession":
        return cls(
            extractor=TagExtractorService.from_settings(settings),
            files=FileAccessService.from_settings(settings),
        )

    @property
    def can_save(self) -> bool:
        with self._lock:
            return bool(self.table)

    @property
    def document_name(self) -> Optional[str]:
        return self.document_path.name if self.document_path else None

    def choose_document(self, path: Path | str) -> None:
        """Remember the document; the path is checked now, the file is read on extract."""
        resolved = self.files.resolve(path)
        with self._lock:
            self.document_path = resolved
        logger.bind(path=str(resolved)).info("Selected text file")

    def choose_stop_words(self, path: Path | str) -> int:
        """Read and load a stop-word list; on failure the previous list stays in place."""
        resolved = self.files.resolve(path)
        logger.bind(path=str(resolved)).info("Selected stop words file")
        with self._lock:
            lines = self.files.read_lines(resolved)
            self.stop_words = StopWordSet.load(lines)
            self.stop_words_path = resolved
            logger.info("Loaded {} stop words.", len(self.stop_words))
            return len(self.stop_words)

    def extract(self) -> ExtractionResult:
        with self._lock:
            if self.document_path is None:
                raise NoDocumentSelectedError()
            if self.stop_words is None:
                raise StopWordsNotLoadedError()

            self.table = Counter()
            logger.bind(path=str(self.document_path)).info("Scanning file")
            lines = self.files.read_lines(self.document_path)

            self.table = self.extractor.extract(lines, self.stop_words)
            if not self.table:
                logger.info("No tags found (check stop words or file content).")
                return ExtractionResult(document_name=self.document_name, entries=[], report_lines=[])

            entries = self.extractor.rank(self.table)
            logger.info("Extracted {} distinct tag(s) from {}", len(entries), self.document_name)
            return ExtractionResult(
                document_name=self.document_name,
                entries=entries,
                report_lines=self.extractor.format(entries),
            )

    def save(self, path: Path | str) -> Path:
        with self._lock:
            if not self.table:
                raise NothingToSaveError()
            content = self.extractor.serialize(self.extractor.rank(self.table), self.document_name)
            return self.files.write_report(path, content)

    def clear(self) -> None:
        with self._lock:
            self.document_path = None
            self.stop_words_path = None
            self.stop_words = None
            self.table = Counter()
        logger.debug("Session cleared")

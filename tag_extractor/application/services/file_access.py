from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from loguru import logger

from tag_extractor.application.errors import PathOutsideDataDirError, ReadFailure, WriteFailure
from tag_extractor.application.settings import Settings


@dataclass
class FileAccessService:
    # None = no confinement (library use); the app always sets it from Settings.data_dir
    data_dir: Optional[Path] = None
    encoding: str = "utf-8"
    report_extension: str = ".txt"

    @classmethod
    def from_settings(cls, settings: Settings) -> "FileAccessService":
        return cls(
            data_dir=Path(settings.data_dir),
            encoding=settings.file_encoding,
            report_extension=settings.report_extension,
        )

    def resolve(self, path: Path | str) -> Path:
        """
        Map a requested path onto the file system.

        Relative paths are taken relative to ``data_dir``. The result is fully
        resolved (symlinks and ".." included) and must stay inside ``data_dir``.

        Raises:
            PathOutsideDataDirError if it does not
        """
        path = Path(path)
        if self.data_dir is None:
            return path

        root = self.data_dir.resolve()
        target = (root / path).resolve()
        if not target.is_relative_to(root):
            logger.bind(path=str(path)).warning("Refused path outside data dir {}", root)
            raise PathOutsideDataDirError(path, root)
        return target

    def read_lines(self, path: Path | str) -> List[str]:
        """
        Read a whole text file into memory.

        Returns:
            the file's lines without line terminators

        Raises:
            PathOutsideDataDirError if the path escapes ``data_dir``
            ReadFailure if the file is missing, unreadable or not valid text
            in the configured encoding
        """
        path = self.resolve(path)
        log = logger.bind(path=str(path))
        try:
            text = path.read_text(encoding=self.encoding)
        except UnicodeDecodeError as e:
            log.warning("Could not decode as {}: {}", self.encoding, e)
            raise ReadFailure(path, f"not valid {self.encoding} text") from e
        except OSError as e:
            log.warning("Could not read: {}", e)
            raise ReadFailure(path, e.strerror or str(e)) from e

        lines = text.splitlines()
        log.debug("Read {} line(s)", len(lines))
        return lines

    def normalize_report_path(self, path: Path | str) -> Path:
        # "tags" -> "tags.txt", "tags.TXT" stays as is
        path = Path(path)
        if path.name.lower().endswith(self.report_extension.lower()):
            return path
        return path.with_name(path.name + self.report_extension)

    def write_report(self, path: Path | str, content: str) -> Path:
        """Create or truncate the report file and return its absolute path."""
        out = self.resolve(self.normalize_report_path(path))
        log = logger.bind(path=str(out))
        try:
            # newline="" keeps the "\n" terminators exactly as serialized
            with out.open("w", encoding=self.encoding, newline="") as f:
                f.write(content)
        except OSError as e:
            log.error("Could not write report: {}", e)
            raise WriteFailure(out, e.strerror or str(e)) from e

        out = out.absolute()
        log.info("Tags saved")
        return out

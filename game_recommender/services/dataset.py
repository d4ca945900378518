"""File access for game datasets."""

from collections.abc import Iterator
from pathlib import Path
from typing import TextIO

import structlog

from .errors import FileSystemError

log = structlog.stdlib.get_logger()


class DatasetFileService:
    """Opens dataset files and streams their lines."""

    def __init__(self, encoding: str = "utf-8") -> None:
        self.encoding = encoding

    def exists(self, path: Path) -> bool:
        return path.is_file()

    def read_lines(self, path: Path) -> Iterator[str]:
        """Open ``path`` and return an iterator over its lines.

        The file is opened immediately so a missing or unreadable file is
        reported here; decoding and read errors surface while iterating.

        Raises:
            FileSystemError: If the file cannot be opened
        """
        handle = self._open(path)
        log.debug("Dataset opened", path=str(path), encoding=self.encoding)
        return self._iter_lines(handle)

    def _open(self, path: Path) -> TextIO:
        try:
            return open(path, "r", encoding=self.encoding, newline="")
        except FileNotFoundError as e:
            log.error("Dataset file not found", path=str(path))
            raise FileSystemError("The dataset file was not found.", original_error=e, path=str(path), operation="open") from e
        except OSError as e:
            log.error("Failed to open dataset", path=str(path), error=str(e))
            raise FileSystemError(f"Cannot open dataset: {e}", original_error=e, path=str(path), operation="open") from e

    @staticmethod
    def _iter_lines(handle: TextIO) -> Iterator[str]:
        with handle:
            yield from handle

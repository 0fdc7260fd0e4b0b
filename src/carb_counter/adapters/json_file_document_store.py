"""JSON file implementation of the document store."""

import contextlib
import os
import tempfile
from dataclasses import dataclass
from pathlib import Path

from carb_counter.services.persistence import DocumentStore, StorageUnavailableError


@dataclass
class JsonFileDocumentStore(DocumentStore):
    """Stores each document as ``<key>.json`` inside a directory."""

    directory: Path

    def read(self, key: str) -> str | None:
        """Return the file contents for a key, or None if it doesn't exist."""
        path = self._path(key)
        if not path.exists():
            return None
        try:
            return path.read_text(encoding="utf-8")
        except OSError as exc:
            raise StorageUnavailableError(f"Failed to read {path}") from exc

    def write(self, key: str, text: str) -> None:
        """Atomically replace the file for a key."""
        path = self._path(key)
        tmp_name: str | None = None
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self.directory, prefix=f".{key}.", suffix=".tmp"
            )
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(text)
            os.replace(tmp_name, path)
        except OSError as exc:
            if tmp_name is not None:
                with contextlib.suppress(OSError):
                    os.unlink(tmp_name)
            raise StorageUnavailableError(f"Failed to write {path}") from exc

    def _path(self, key: str) -> Path:
        return self.directory / f"{key}.json"

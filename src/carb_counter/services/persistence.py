"""Best-effort persistence of named JSON documents."""

import json
import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Protocol, TypeVar

FAVORITES_KEY = "kh_favorites"
HISTORY_KEY = "kh_history"
FAVORITE_USAGE_KEY = "kh_favorite_usage"

_logger = logging.getLogger(__name__)

T = TypeVar("T")


class StorageUnavailableError(RuntimeError):
    """Raised by document stores when the backing store cannot be reached."""


class DocumentStore(Protocol):
    """Durable key-value storage for serialized documents."""

    def read(self, key: str) -> str | None:
        """Return the stored text for a key, or None if absent."""

    def write(self, key: str, text: str) -> None:
        """Store text under a key, replacing any previous value."""


@dataclass
class PersistenceService:
    """Loads and saves documents without ever raising to the caller."""

    store: DocumentStore

    def load(
        self,
        key: str,
        fallback: T,
        parse: Callable[[object], T] | None = None,
    ) -> T:
        """Return the decoded document, or ``fallback`` if it can't be read."""
        try:
            raw = self.store.read(key)
        except Exception as exc:
            _logger.warning("Storage read failed for %s: %s", key, exc)
            return fallback
        if raw is None:
            return fallback
        try:
            decoded = json.loads(raw)
            if parse is None:
                return decoded
            return parse(decoded)
        except Exception as exc:
            _logger.warning("Discarding unparseable document %s: %s", key, exc)
            return fallback

    def save(self, key: str, data: object) -> None:
        """Write the document; skipped when the store is unavailable."""
        try:
            text = json.dumps(data, ensure_ascii=False)
            self.store.write(key, text)
        except Exception as exc:
            _logger.warning("Storage write skipped for %s: %s", key, exc)

"""Bounded, deduplicated, most-recent-first query history."""
import json
import logging
import os
from typing import Callable, Dict, List, Optional

logger = logging.getLogger(__name__)

DEFAULT_KEY = "bookSearchHistory"
DEFAULT_LIMIT = 10


class MemoryStorage:
    """Key/value storage held in a dict."""

    def __init__(self, data: Optional[Dict[str, str]] = None):
        self.data = dict(data or {})

    def read(self, key: str) -> Optional[str]:
        return self.data.get(key)

    def write(self, key: str, payload: str) -> None:
        self.data[key] = payload

    def close(self):
        pass


class JsonFileStorage:
    """Stores each key as ``<directory>/<key>.json``."""

    def __init__(self, directory: str):
        self.directory = directory

    def _path(self, key: str) -> str:
        return os.path.join(self.directory, f"{key}.json")

    def read(self, key: str) -> Optional[str]:
        try:
            with open(self._path(key), encoding="utf-8") as f:
                return f.read()
        except FileNotFoundError:
            return None

    def write(self, key: str, payload: str) -> None:
        os.makedirs(self.directory, exist_ok=True)
        tmp_path = self._path(key) + ".tmp"
        with open(tmp_path, "w", encoding="utf-8") as f:
            f.write(payload)
        os.replace(tmp_path, self._path(key))

    def close(self):
        pass


class HistoryStore:
    """Recent search queries, persisted on every change."""

    def __init__(
        self,
        storage,
        key: str = DEFAULT_KEY,
        limit: int = DEFAULT_LIMIT,
        on_change: Optional[Callable[[List[str]], None]] = None
    ):
        """
        Initialize and load the persisted history.

        Args:
            storage: Object with ``read(key)`` and ``write(key, payload)``
            key: Name the history is stored under
            limit: Maximum number of entries kept
            on_change: Called with the new list after every mutation
        """
        self.storage = storage
        self.key = key
        self.limit = limit
        self.on_change = on_change
        self._entries = self.load()

    @property
    def entries(self) -> List[str]:
        return list(self._entries)

    def load(self) -> List[str]:
        """
        Read the persisted history.

        Returns:
            Stored queries, or an empty list if nothing usable is stored
        """
        try:
            payload = self.storage.read(self.key)
        except Exception as e:
            logger.warning(f"Could not read search history: {e}")
            return []

        if not payload:
            return []

        try:
            data = json.loads(payload)
        except ValueError:
            logger.warning("Ignoring corrupt search history")
            return []

        if not isinstance(data, list):
            logger.warning("Ignoring search history that is not a list")
            return []

        return [item for item in data if isinstance(item, str)][:self.limit]

    def record(self, query: str) -> List[str]:
        """
        Move ``query`` to the front, dropping older duplicates and overflow.

        Returns:
            The updated history
        """
        if not query:
            return self.entries

        entries = [item for item in self._entries if item != query]
        entries.insert(0, query)
        self._entries = entries[:self.limit]

        try:
            self.storage.write(self.key, json.dumps(self._entries, ensure_ascii=False))
        except Exception as e:
            logger.error(f"Failed to persist search history: {e}")

        if self.on_change:
            try:
                self.on_change(self.entries)
            except Exception as e:
                logger.error(f"Search history listener failed: {e}")

        return self.entries

    def __len__(self):
        return len(self._entries)

    def __getitem__(self, index: int) -> str:
        return self._entries[index]

"""JSON-file search history with case-insensitive dedup and stable ids."""

import json
import logging
import os
import tempfile
import threading
from pathlib import Path

from skycast.errors import NotFoundError, PersistenceError, ValidationError
from skycast.models.history import City, HistoryList

logger = logging.getLogger(__name__)

_locks: dict[Path, threading.Lock] = {}
_locks_guard = threading.Lock()


def _lock_for(path: Path) -> threading.Lock:
    """One lock per resolved file path, shared by every store instance."""
    with _locks_guard:
        return _locks.setdefault(path, threading.Lock())


class HistoryStore:
    """Owns the persisted history list.

    Every call goes back to disk; nothing is cached between calls.
    Mutations run their read-modify-write under a per-path lock so two
    concurrent requests cannot overwrite each other's change.
    """

    def __init__(self, path: str | Path):
        self.path = Path(path)
        self._lock = _lock_for(self.path.resolve())

    def read(self) -> HistoryList:
        """Read the persisted list. Raises PersistenceError if unreadable."""
        try:
            with open(self.path, encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            raise PersistenceError(f"Cannot read history file {self.path}: {e}") from e
        if not isinstance(data, list):
            raise PersistenceError(f"History file {self.path} is not a JSON array")
        try:
            return [City.from_dict(item) for item in data]
        except (KeyError, TypeError) as e:
            raise PersistenceError(f"History file {self.path} has a bad record: {e}") from e

    def write(self, cities: HistoryList) -> None:
        """Replace the persisted list atomically (temp file + rename)."""
        payload = json.dumps([c.to_dict() for c in cities], indent=2)
        tmp_name = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
            )
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(payload)
            os.replace(tmp_name, self.path)
        except OSError as e:
            logger.error("Failed to write history file %s: %s", self.path, e)
            if tmp_name is not None and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise PersistenceError(f"Failed to write history file {self.path}") from e

    def list(self) -> HistoryList:
        """Current history; a missing or corrupt file reads as empty."""
        try:
            return self.read()
        except PersistenceError as e:
            if self.path.exists():
                logger.warning("Treating history as empty: %s", e.message)
            return []

    def add(self, city_name: str) -> HistoryList:
        name = (city_name or "").strip()
        if not name:
            raise ValidationError("City name cannot be blank")

        with self._lock:
            cities = self.list()
            key = name.casefold()
            if any(c.name.casefold() == key for c in cities):
                return cities

            updated = [*cities, City.new(name)]
            self.write(updated)
            logger.info("Added %r to search history", name)
            return updated

    def remove(self, city_id: str) -> HistoryList:
        with self._lock:
            cities = self.list()
            updated = [c for c in cities if c.id != city_id]
            if len(updated) == len(cities):
                raise NotFoundError(f"City not found: {city_id}")

            self.write(updated)
            logger.info("Removed %s from search history", city_id)
            return updated

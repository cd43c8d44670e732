"""
Key-Value Store Module

This module implements the store: a mapping from string keys to
versioned entries, with metrics that are refreshed on every write and
persistence to a JSON snapshot file.

Write operations return a WriteResult describing what happened. Only
faults (empty values or keys, disk and decode failures) raise.

Per-key lifecycle:
    Absent -> Present(v=1) -> Present(v=2) -> ... -> Absent

insert and update move a key forward, delete returns it to Absent.
"""

import logging
import os
from contextlib import suppress
from dataclasses import replace
from typing import Any, Dict, List, Optional

from ..config.settings import settings
from . import snapshot
from .entry import Entry, timestamp
from .errors import InvalidKey, PersistenceError, SnapshotError
from .metrics import Metrics
from .results import WriteResult

logger = logging.getLogger(__name__)


class Store:
    """
    Simple key-value store that persists to disk.

    The store is single-writer and synchronous. Each write operation
    updates the entry map and the metrics together before returning,
    so metrics.size always equals the number of keys after a write.

    Usage:
        store = Store("/tmp/kvs.json")
        store.insert("X-Pro2", "Fujifilm")   # WriteResult.INSERTED
        store.update("X-Pro2", "Fuji")       # WriteResult.UPDATED
        store.get("X-Pro2").version          # 2
        store.flush()

    Attributes:
        path: Snapshot file location ("" disables persistence)
        metrics: Store metadata
        entries: Key to Entry mapping
    """

    def __init__(self, path: str = "", metrics: Optional[Metrics] = None,
                 entries: Optional[Dict[str, Entry]] = None):
        """
        Initialize a store.

        Args:
            path: Snapshot file location; empty to keep the store in memory
            metrics: Initial metrics, copied (default: zero times, size of entries)
            entries: Initial entries (default: empty)
        """
        self.path = path
        self.entries: Dict[str, Entry] = dict(entries) if entries else {}
        if metrics is None:
            metrics = Metrics(size=len(self.entries))
        self.metrics = replace(metrics)

    def __len__(self) -> int:
        return len(self.entries)

    def __contains__(self, key: object) -> bool:
        return key in self.entries

    def __repr__(self) -> str:
        return f"Store(path={self.path!r}, size={len(self)}, metrics={self.metrics!r})"

    def insert(self, key: str, value: str) -> WriteResult:
        """
        Insert a new key. Existing keys are never overwritten.

        Args:
            key: Non-empty key
            value: Non-empty value

        Returns:
            INSERTED if the key was added, ALREADY_EXISTS if it was
            already present (the store is left unchanged)

        Raises:
            InvalidKey: If key is empty
            InvalidValue: If value is empty
        """
        _check_key(key)
        entry = Entry.create(value)

        if key in self.entries:
            logger.debug(f"Insert rejected, key exists: {key}")
            return WriteResult.ALREADY_EXISTS

        self.entries[key] = entry
        self._touch()
        logger.debug(f"Inserted {key} (size={self.metrics.size})")
        return WriteResult.INSERTED

    def update(self, key: str, value: str) -> WriteResult:
        """
        Set the value for a key, inserting it if absent.

        Writing a key's current value leaves its entry untouched but still
        returns UPDATED and refreshes the metrics.

        Returns:
            INSERTED if the key was absent, UPDATED otherwise

        Raises:
            InvalidKey: If key is empty
            InvalidValue: If value is empty
        """
        _check_key(key)
        old = self.entries.get(key)
        if old is None:
            self.entries[key] = Entry.create(value)
            result = WriteResult.INSERTED
        else:
            self.entries[key] = old.update(value)
            result = WriteResult.UPDATED

        self._touch()
        logger.debug(f"Update {key}: {result.name} (version={self.entries[key].version})")
        return result

    def get(self, key: str) -> Optional[Entry]:
        """
        Look up a key.

        Returns:
            The key's Entry (value, version and timestamp), or None
        """
        return self.entries.get(key)

    def delete(self, key: str) -> WriteResult:
        """
        Remove a key.

        Returns:
            UPDATED if the key was removed, DOES_NOT_EXIST otherwise
        """
        if key not in self.entries:
            return WriteResult.DOES_NOT_EXIST

        del self.entries[key]
        self._touch()
        logger.debug(f"Deleted {key} (size={self.metrics.size})")
        return WriteResult.UPDATED

    def keys(self) -> List[str]:
        """Return the stored keys in sorted order."""
        return sorted(self.entries)

    def stats(self) -> Dict[str, Any]:
        """
        Get information about the store.

        Returns:
            Dictionary containing path, size, last_update and last_write
        """
        return {"path": self.path, **self.metrics.to_dict()}

    def flush(self) -> None:
        """
        Write the store to its snapshot file.

        metrics.last_write is set before serialization, so the snapshot
        records the flush that produced it. The document is written to a
        temporary file next to the destination and renamed over it.

        Does nothing if the store has no path.

        Raises:
            PersistenceError: If the snapshot cannot be written; the
                store, including its metrics, is left unchanged
            SnapshotError: If the store holds text that cannot be encoded
        """
        if not self.path:
            logger.debug("No snapshot path set, skipping flush")
            return

        metrics = replace(self.metrics, last_write=timestamp())
        text = snapshot.encode(self.path, metrics, self.entries,
                               indent=settings.SNAPSHOT_INDENT)
        try:
            data = text.encode(settings.SNAPSHOT_ENCODING)
        except UnicodeEncodeError as exc:
            logger.error(f"Failed to encode snapshot for {self.path}: {exc}")
            raise SnapshotError(f"cannot encode snapshot {self.path}: {exc}") from exc

        tmp = self.path + ".tmp"
        try:
            with open(tmp, "wb") as f:
                f.write(data)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp, self.path)
        except OSError as exc:
            with suppress(OSError):
                os.remove(tmp)
            logger.error(f"Failed to flush store to {self.path}: {exc}")
            raise PersistenceError(f"cannot write snapshot {self.path}: {exc}") from exc

        self.metrics = metrics
        logger.info(f"Flushed {len(self)} keys to {self.path}")

    @classmethod
    def load(cls, path: str) -> "Store":
        """
        Read a store from a snapshot file.

        The returned store is bound to path, whatever path the snapshot
        itself records.

        Raises:
            PersistenceError: If the file cannot be read
            SnapshotError: If the file is not a valid snapshot
        """
        try:
            with open(path, "r", encoding=settings.SNAPSHOT_ENCODING) as f:
                text = f.read()
        except (OSError, UnicodeDecodeError) as exc:
            logger.error(f"Failed to read snapshot {path}: {exc}")
            raise PersistenceError(f"cannot read snapshot {path}: {exc}") from exc

        recorded_path, metrics, entries = snapshot.decode(text)
        if recorded_path and recorded_path != path:
            logger.debug(f"Snapshot {path} was written as {recorded_path}")

        logger.info(f"Loaded {len(entries)} keys from {path}")
        return cls(path=path, metrics=metrics, entries=entries)

    @classmethod
    def open(cls, path: str) -> "Store":
        """
        Load the snapshot at path, or start an empty store bound to it.

        An empty path gives an in-memory store.

        Raises:
            PersistenceError: If the file exists but cannot be loaded
        """
        if not path or not os.path.exists(path):
            logger.info(f"Starting empty store (path={path!r})")
            return cls(path=path)
        return cls.load(path)

    def _touch(self) -> None:
        """Refresh metrics after a write."""
        self.metrics.last_update = max(self.metrics.last_update, timestamp())
        self.metrics.size = len(self.entries)


def _check_key(key: str) -> None:
    if not isinstance(key, str) or not key:
        raise InvalidKey("key must be a non-empty string")

"""Store module for SKVS."""

from .entry import Entry
from .errors import (
    InvalidKey,
    InvalidValue,
    PersistenceError,
    SnapshotError,
    StoreError,
)
from .metrics import Metrics
from .results import WriteResult
from .store import Store

__all__ = [
    "Entry",
    "InvalidKey",
    "InvalidValue",
    "Metrics",
    "PersistenceError",
    "SnapshotError",
    "Store",
    "StoreError",
    "WriteResult",
]

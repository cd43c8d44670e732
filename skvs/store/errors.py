"""
Store Exceptions

Faults raised by the store. Outcome tags returned by write operations
(see results.py) are not errors and never appear here.
"""


class StoreError(Exception):
    """Base class for all store errors."""


class InvalidValue(StoreError, ValueError):
    """Raised when a write is attempted with an empty value."""


class InvalidKey(StoreError, ValueError):
    """Raised when a write is attempted with an empty or non-string key."""


class PersistenceError(StoreError, OSError):
    """Raised when a snapshot cannot be written to or read from disk."""


class SnapshotError(PersistenceError):
    """Raised when snapshot content cannot be encoded or decoded."""

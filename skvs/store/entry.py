"""
Versioned Entry Module

An Entry is the value held for one key: the payload plus the timestamp
of its last change and a version counter starting at 1.

Entries are immutable. Every write produces a new Entry, so the rule
"the value changed if and only if the version was incremented" can be
checked by comparing two entries.

Usage:
    old = Entry.create("hello, world")
    new = old.update("goodbye, world")
    assert new.version == old.version + 1
    assert new.timestamp >= old.timestamp
"""

import time
from dataclasses import dataclass
from typing import Any, Dict

from .errors import InvalidValue


def timestamp() -> int:
    """Return the current Unix time in whole seconds."""
    return int(time.time())


@dataclass(frozen=True)
class Entry:
    """
    A versioned value record.

    Attributes:
        timestamp: Unix time of the last write that changed the value
        version: Write counter, 1 on creation
        value: The stored string, never empty
    """
    timestamp: int
    version: int
    value: str

    @classmethod
    def create(cls, value: str) -> "Entry":
        """
        Create the first version of an entry.

        Args:
            value: The value to store

        Returns:
            A new Entry with version 1 and the current timestamp

        Raises:
            InvalidValue: If value is empty or not a string
        """
        _check_value(value)
        return cls(timestamp=timestamp(), version=1, value=value)

    def update(self, value: str) -> "Entry":
        """
        Return the entry that results from writing value over this one.

        Writing the current value again is a no-op: the returned entry
        keeps this entry's timestamp and version.

        Raises:
            InvalidValue: If value is empty or not a string
        """
        _check_value(value)
        if value == self.value:
            return self

        return Entry(timestamp=timestamp(), version=self.version + 1, value=value)

    def to_dict(self) -> Dict[str, Any]:
        """Snapshot representation of the entry."""
        return {"time": self.timestamp, "version": self.version, "value": self.value}


def _check_value(value: str) -> None:
    if not isinstance(value, str) or not value:
        raise InvalidValue("value must be a non-empty string")

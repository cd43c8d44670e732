"""
Write Operation Results

Outcome tags returned by Store.insert, Store.update and Store.delete.
"""

from enum import Enum


class WriteResult(Enum):
    """Enumeration of write outcomes, valued by their display message."""
    ALREADY_EXISTS = "key already exists"
    INSERTED = "new entry inserted"
    UPDATED = "entry was updated"
    DOES_NOT_EXIST = "key doesn't exist"

    def __str__(self) -> str:
        return self.value

    @property
    def changed(self) -> bool:
        """True if the operation was applied to the store."""
        return self in (WriteResult.INSERTED, WriteResult.UPDATED)

"""
Store Metrics

Metadata kept alongside the entries of a Store: when it was last
written to, when it was last flushed to disk, and how many keys it holds.
"""

from dataclasses import dataclass
from typing import Any, Dict


@dataclass
class Metrics:
    """
    Information about a Store.

    Attributes:
        last_update: Time of the last insert, update or delete (0 = never)
        last_write: Time of the last successful flush (0 = never)
        size: Number of keys currently in the store
    """
    last_update: int = 0
    last_write: int = 0
    size: int = 0

    def to_dict(self) -> Dict[str, Any]:
        """Snapshot representation of the metrics."""
        return {
            "last_update": self.last_update,
            "last_write": self.last_write,
            "size": self.size,
        }

"""
SKVS: Simple Key-Value Store

A small embedded key-value store holding versioned string values,
with store-level metrics and persistence to a JSON snapshot file.
"""

from .store import Entry, Metrics, Store, WriteResult

__version__ = "1.0.0"

__all__ = ["Entry", "Metrics", "Store", "WriteResult"]

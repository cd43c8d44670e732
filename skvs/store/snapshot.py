"""
Snapshot Codec Module

Encodes a store's state to the JSON snapshot document and decodes it back.

Snapshot Format:
    {
        "path": "store.json",
        "metrics": {"last_update": 1700000000, "last_write": 1700000005, "size": 1},
        "values": {"key": {"time": 1700000000, "version": 1, "value": "v"}}
    }

Decoding accepts exactly what encoding produces and raises SnapshotError
for anything else.
"""

import json
from typing import Any, Dict, Mapping, Optional, Tuple

from .entry import Entry
from .errors import SnapshotError
from .metrics import Metrics


def encode(path: str, metrics: Metrics, entries: Mapping[str, Entry],
           indent: Optional[int] = None) -> str:
    """
    Serialize store state to a snapshot document.

    Args:
        path: The store's snapshot path, recorded in the document
        metrics: Metrics to record
        entries: Key to Entry mapping
        indent: JSON indent (None = compact)

    Returns:
        The snapshot as a JSON string

    Raises:
        SnapshotError: If the state cannot be represented as JSON
    """
    document = {
        "path": path,
        "metrics": metrics.to_dict(),
        "values": {key: entry.to_dict() for key, entry in entries.items()},
    }
    try:
        return json.dumps(document, indent=indent, ensure_ascii=False)
    except (TypeError, ValueError) as exc:
        raise SnapshotError(f"cannot encode snapshot: {exc}") from exc


def decode(text: str) -> Tuple[str, Metrics, Dict[str, Entry]]:
    """
    Parse a snapshot document.

    Returns:
        Tuple of (recorded path, metrics, entries)

    Raises:
        SnapshotError: If text is not a well-formed snapshot
    """
    try:
        document = json.loads(text)
    except ValueError as exc:
        raise SnapshotError(f"snapshot is not valid JSON: {exc}") from exc
    except RecursionError as exc:
        raise SnapshotError("snapshot is nested too deeply") from exc

    if not isinstance(document, dict):
        raise SnapshotError("snapshot: expected an object at top level")

    path = document.get("path", "")
    if not isinstance(path, str):
        raise SnapshotError("snapshot: field 'path' must be a string")

    if "metrics" not in document:
        raise SnapshotError("snapshot: missing 'metrics'")
    metrics = decode_metrics(document["metrics"])

    values = document.get("values")
    if not isinstance(values, dict):
        raise SnapshotError("snapshot: field 'values' must be an object")

    entries = {}
    for key, data in values.items():
        if not key:
            raise SnapshotError("snapshot: empty key")
        entries[key] = decode_entry(data, key)

    if metrics.size != len(entries):
        raise SnapshotError(
            f"snapshot: metrics size {metrics.size} does not match "
            f"{len(entries)} entries"
        )

    return path, metrics, entries


def decode_entry(data: Any, key: str = "") -> Entry:
    """Rebuild an Entry from its snapshot representation."""
    where = f"entry '{key}'"
    if not isinstance(data, dict):
        raise SnapshotError(f"{where}: expected an object")

    version = _require_int(data, "version", where)
    if version < 1:
        raise SnapshotError(f"{where}: version must be at least 1, got {version}")

    value = data.get("value")
    if not isinstance(value, str) or not value:
        raise SnapshotError(f"{where}: field 'value' must be a non-empty string")

    return Entry(timestamp=_require_int(data, "time", where), version=version, value=value)


def decode_metrics(data: Any) -> Metrics:
    """Rebuild Metrics from their snapshot representation."""
    if not isinstance(data, dict):
        raise SnapshotError("metrics: expected an object")

    metrics = Metrics(
        last_update=_require_int(data, "last_update", "metrics"),
        last_write=_require_int(data, "last_write", "metrics"),
        size=_require_int(data, "size", "metrics"),
    )
    if min(metrics.last_update, metrics.last_write, metrics.size) < 0:
        raise SnapshotError("metrics: fields must not be negative")
    return metrics


def _require_int(data: Dict[str, Any], field: str, where: str) -> int:
    value = data.get(field)
    # bool is an int subclass
    if not isinstance(value, int) or isinstance(value, bool):
        raise SnapshotError(f"{where}: field '{field}' must be an integer")
    return value

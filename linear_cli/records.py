"""
Helpers for reading nested Linear API records.

Linear returns plain nested dicts where any relation may be null and every
collection is wrapped in a connection ({"nodes": [...]}). These helpers make
the missing-value cases explicit instead of chaining .get() calls.
"""

from typing import Any, Dict, List, Optional, Sequence, Union

Path = Union[str, Sequence[str]]


def dig(record: Optional[Dict[str, Any]], path: Path, default: Any = None) -> Any:
    """
    Follow a dotted key path through nested dicts.

    Args:
        record: Source record (may be None)
        path: "team.name" or ["team", "name"]
        default: Returned when any step is missing or None

    Returns:
        The value at path, or default

    Example:
        >>> dig({"team": {"name": "Core"}}, "team.name")
        'Core'
        >>> dig({"team": None}, "team.name", "Unknown")
        'Unknown'
    """
    keys = path.split(".") if isinstance(path, str) else list(path)
    current: Any = record
    for key in keys:
        if not isinstance(current, dict):
            return default
        current = current.get(key)
        if current is None:
            return default
    return current


def nodes(record: Optional[Dict[str, Any]], path: Optional[Path] = None) -> List[Dict[str, Any]]:
    """Return the node list of a connection, or [] when it is absent."""
    connection = dig(record, path) if path else record
    if not isinstance(connection, dict):
        return []
    return list(connection.get("nodes") or [])


def label_names(record: Optional[Dict[str, Any]]) -> List[str]:
    """Names of the labels attached to an issue or project."""
    return [label["name"] for label in nodes(record, "labels") if label.get("name")]

"""Construction of modify and insert operations."""

from datetime import datetime
from typing import Any, Dict

from ..domain.models import Insert, Modify, TimeEntry

CREATED_WITH = "administrative script"

# Fields copied from the source entry into a new entry
INSERT_FIELDS = ("wid", "pid", "uid", "billable", "description", "tags")


def format_hours(seconds: int) -> str:
    """Format seconds as hours with two significant digits (``1.5``, ``0.50``)."""
    text = format(seconds / 3600, "#.2g")
    if "e" not in text:
        return text.rstrip(".")
    # exponent without zero padding: 1.0e+2
    mantissa, exponent = text.split("e")
    return f"{mantissa}e{int(exponent):+d}"


def describe(entry: TimeEntry) -> str:
    """Human readable description of an entry, for display only."""
    tags = ",".join(entry.tags)
    return (
        f"{entry.start.isoformat()} - {entry.end.isoformat()} "
        f"({format_hours(entry.duration)}h)[{tags}]"
    )


def make_modify(entry: TimeEntry, patch: Dict[str, Any]) -> Modify:
    return Modify(target_id=entry.id, patch=dict(patch), description=describe(entry))


def make_insert(entry: TimeEntry, overrides: Dict[str, Any]) -> Insert:
    """Build an insert operation for a new entry derived from ``entry``.

    Args:
        entry: Source entry providing the passthrough fields
        overrides: Computed fields (start, duration, billable)

    Returns:
        Insert operation with the whitelisted fields, provenance marker and
        overrides applied in that order
    """
    template: Dict[str, Any] = {}
    for name in INSERT_FIELDS:
        value = getattr(entry, name)
        if value is None:
            continue
        template[name] = list(value) if name == "tags" else value
    template["created_with"] = CREATED_WITH

    for key, value in overrides.items():
        template[key] = value.isoformat() if isinstance(value, datetime) else value

    return Insert(template=template, description=describe(entry))

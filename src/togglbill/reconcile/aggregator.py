"""Grouping of time entries into calendar days."""

import logging
from datetime import date
from typing import Any, Dict, Iterable, List

from ..domain.models import DayGroup, TimeEntry
from ..errors import DataShapeError

logger = logging.getLogger(__name__)


def parse_entries(raw_entries: Iterable[Dict[str, Any]]) -> List[TimeEntry]:
    """Convert raw Toggl payloads into time entries.

    Malformed entries are rejected one by one and logged, the rest of the
    collection is kept in its original order.

    Args:
        raw_entries: Time entry dicts as returned by the Toggl API

    Returns:
        List of parsed time entries
    """
    entries: List[TimeEntry] = []
    rejected = 0
    for raw in raw_entries:
        try:
            entries.append(TimeEntry.from_api(raw))
        except DataShapeError as e:
            rejected += 1
            logger.warning(f"Skipping time entry {e.entry_id}: {e}")

    if rejected:
        logger.info(f"Rejected {rejected} malformed time entries")
    return entries


def day_key(entry: TimeEntry) -> date:
    """Local calendar day of an entry's start.

    Aware timestamps are converted to local time first, naive timestamps
    are taken as local already.
    """
    start = entry.start
    if start.tzinfo is not None:
        start = start.astimezone()
    return start.date()


def group_by_day(entries: Iterable[TimeEntry]) -> List[DayGroup]:
    """Group entries by the day their start falls on.

    Entries keep their relative fetch order inside a day; days are sorted
    ascending. Days without entries do not appear.

    Args:
        entries: Entries in fetch order

    Returns:
        Ordered list of day groups
    """
    grouped: Dict[date, List[TimeEntry]] = {}
    for entry in entries:
        grouped.setdefault(day_key(entry), []).append(entry)

    return [DayGroup(day=day, entries=tuple(grouped[day])) for day in sorted(grouped)]

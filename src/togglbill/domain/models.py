"""Domain models and value objects for billing reconciliation."""

from dataclasses import dataclass, field
from datetime import date, datetime, time, timedelta
from typing import Any, Dict, List, Optional, Tuple, Union

from ..errors import DataShapeError


def parse_timestamp(value: str) -> datetime:
    """Parse a Toggl ISO-8601 timestamp.

    Args:
        value: Timestamp such as ``2020-03-02T08:00:00+00:00`` or ``...Z``

    Returns:
        Parsed datetime (timezone aware when the input carries an offset)
    """
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    return datetime.fromisoformat(value)


@dataclass(frozen=True)
class TimeEntry:
    """One recorded Toggl time entry."""

    start: datetime
    duration: int
    billable: bool = False
    tags: Tuple[str, ...] = ()
    id: Optional[int] = None
    wid: Optional[int] = None
    pid: Optional[int] = None
    uid: Optional[int] = None
    description: Optional[str] = None
    stop: Optional[datetime] = None

    @property
    def end(self) -> datetime:
        """Recorded stop time, or start plus duration when Toggl omits it."""
        if self.stop is not None:
            return self.stop
        return self.start + timedelta(seconds=self.duration)

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "TimeEntry":
        """Build an entry from a Toggl v8 time entry payload.

        Raises:
            DataShapeError: If start is missing or unparseable, or duration
                is missing or negative (running timers)
        """
        entry_id = data.get("id")

        raw_start = data.get("start")
        if not raw_start:
            raise DataShapeError("time entry has no start", entry_id)
        try:
            start = parse_timestamp(raw_start)
        except (TypeError, ValueError) as e:
            raise DataShapeError(f"unparseable start {raw_start!r}: {e}", entry_id) from e

        duration = data.get("duration")
        if not isinstance(duration, int) or isinstance(duration, bool):
            raise DataShapeError(f"invalid duration {duration!r}", entry_id)
        if duration < 0:
            raise DataShapeError(f"negative duration {duration} (timer still running?)", entry_id)

        stop = None
        if data.get("stop"):
            try:
                stop = parse_timestamp(data["stop"])
            except (TypeError, ValueError):
                stop = None

        return cls(
            id=entry_id,
            start=start,
            duration=duration,
            billable=bool(data.get("billable", False)),
            tags=tuple(data.get("tags") or ()),
            wid=data.get("wid"),
            pid=data.get("pid"),
            uid=data.get("uid"),
            description=data.get("description"),
            stop=stop,
        )


@dataclass(frozen=True)
class Policy:
    """Billing policy loaded once per run."""

    max_break_ratio: float
    break_tag: str
    travel_tag: str


@dataclass(frozen=True)
class DayGroup:
    """Entries whose start falls on one local calendar day, in fetch order."""

    day: date
    entries: Tuple[TimeEntry, ...]

    @property
    def day_start(self) -> datetime:
        """Local midnight opening this day."""
        return datetime.combine(self.day, time.min)


@dataclass(frozen=True)
class Modify:
    """Patch applied to an existing entry."""

    target_id: Optional[int]
    patch: Dict[str, Any]
    description: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": "modify",
            "desc": self.description,
            "id": self.target_id,
            "patch": dict(self.patch),
        }


@dataclass(frozen=True)
class Insert:
    """New entry created from the remainder of a split entry."""

    template: Dict[str, Any]
    description: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": "insert",
            "desc": self.description,
            "time_entry": dict(self.template),
        }


Operation = Union[Modify, Insert]


@dataclass
class DayReport:
    """Reconciliation outcome and summary figures for one day."""

    day: date
    entries: Tuple[TimeEntry, ...]
    billable: int
    non_billable: int
    break_budget: int
    operations: List[Operation] = field(default_factory=list)


@dataclass
class RunResult:
    """Result of a complete reconciliation run."""

    period: Tuple[datetime, datetime]
    reports: List[DayReport]
    operations: List[Operation]
    dry_run: bool
    applied: int = 0

    @property
    def total_entries(self) -> int:
        return sum(len(report.entries) for report in self.reports)

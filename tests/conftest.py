"""
Pytest Configuration and Shared Fixtures
"""

from datetime import datetime
from typing import Any

import pytest

from togglbill.domain.models import Policy, TimeEntry


@pytest.fixture
def policy() -> Policy:
    """Policy with a 10:1 billable-to-break ratio."""
    return Policy(max_break_ratio=10, break_tag="break", travel_tag="travel")


@pytest.fixture
def make_entry():
    """Factory for time entries on 2024-03-04 (local time)."""
    counter = {"id": 0}

    def _make(
        start: str = "08:00",
        duration: int = 3600,
        billable: bool = True,
        tags: tuple = (),
        **extra: Any,
    ) -> TimeEntry:
        counter["id"] += 1
        hour, minute = (int(part) for part in start.split(":"))
        fields = {
            "id": counter["id"],
            "start": datetime(2024, 3, 4, hour, minute),
            "duration": duration,
            "billable": billable,
            "tags": tuple(tags),
            "wid": 1,
            "pid": 100,
            "uid": 7,
            "description": f"entry {counter['id']}",
        }
        fields.update(extra)
        return TimeEntry(**fields)

    return _make

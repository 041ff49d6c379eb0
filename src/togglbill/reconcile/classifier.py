"""Predicates classifying single time entries."""

from typing import Callable, Iterable

from ..domain.models import Policy, TimeEntry


def has_tag(entry: TimeEntry, tag: str) -> bool:
    return bool(entry.tags) and tag in entry.tags


def is_non_billable_by_category(entry: TimeEntry, policy: Policy) -> bool:
    """Check whether an entry is a break or travel entry.

    Args:
        entry: Time entry to classify
        policy: Policy providing the break and travel tags

    Returns:
        True if the entry carries the break tag or the travel tag
    """
    return has_tag(entry, policy.break_tag) or has_tag(entry, policy.travel_tag)


def sum_duration(predicate: Callable[[TimeEntry], bool], entries: Iterable[TimeEntry]) -> int:
    """Sum durations (seconds) of the entries matching predicate."""
    return sum(entry.duration for entry in entries if predicate(entry))

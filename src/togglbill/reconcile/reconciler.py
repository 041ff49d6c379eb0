"""Per-day reconciliation of time entries against the billing policy."""

import logging
import math
from datetime import timedelta
from typing import Iterable, List

from ..domain.models import DayGroup, DayReport, Operation, Policy, TimeEntry
from .classifier import has_tag, is_non_billable_by_category, sum_duration
from .operations import make_insert, make_modify

logger = logging.getLogger(__name__)


class BreakBudgetReconciler:
    """Decides which entries of a day must change to comply with the policy.

    Every entry that is neither a break nor travel is billable. Travel is
    never billable. Breaks are billable up to a daily budget derived from the
    day's billable time and ``max_break_ratio``; a break straddling the budget
    boundary is split into a billable head and a non-billable remainder.

    The budget is computed once per day from the entries as fetched and is
    not revisited as operations are decided.
    """

    def __init__(self, policy: Policy) -> None:
        """Initialize reconciler.

        Args:
            policy: Billing policy (ratio and special tags)
        """
        self.policy = policy

    def _is_non_billable(self, entry: TimeEntry) -> bool:
        return is_non_billable_by_category(entry, self.policy)

    def reconcile_day(self, group: DayGroup) -> DayReport:
        """Produce the ordered operations for one day.

        Args:
            group: Entries of one day in fetch order

        Returns:
            Day report with summary figures and operations
        """
        entries = group.entries
        billable = sum_duration(lambda e: not self._is_non_billable(e), entries)
        non_billable = sum_duration(self._is_non_billable, entries)
        budget = math.floor(billable / self.policy.max_break_ratio)

        operations: List[Operation] = []
        consumed = 0

        for entry in entries:
            # everything that is not a break or travel is billable
            if not self._is_non_billable(entry) and not entry.billable:
                operations.append(make_modify(entry, {"billable": True}))

            if has_tag(entry, self.policy.travel_tag) and entry.billable:
                operations.append(make_modify(entry, {"billable": False}))

            if has_tag(entry, self.policy.break_tag):
                if consumed >= budget and entry.billable:
                    operations.append(make_modify(entry, {"billable": False}))
                elif consumed < budget < consumed + entry.duration:
                    portion = budget - consumed
                    operations.append(
                        make_modify(entry, {"duration": portion, "billable": True})
                    )
                    operations.append(
                        make_insert(
                            entry,
                            {
                                "start": entry.start + timedelta(seconds=portion),
                                "duration": entry.duration - portion,
                                "billable": False,
                            },
                        )
                    )
                elif consumed + entry.duration <= budget and not entry.billable:
                    operations.append(make_modify(entry, {"billable": True}))

                consumed += entry.duration

        logger.debug(
            f"{group.day}: billable={billable}s non_billable={non_billable}s "
            f"break_budget={budget}s break_used={consumed}s operations={len(operations)}"
        )

        return DayReport(
            day=group.day,
            entries=entries,
            billable=billable,
            non_billable=non_billable,
            break_budget=budget,
            operations=operations,
        )

    def reconcile(self, groups: Iterable[DayGroup]) -> List[DayReport]:
        """Reconcile every day, in the order given."""
        return [self.reconcile_day(group) for group in groups]

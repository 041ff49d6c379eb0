"""Flattening and reporting of per-day operations."""

import json
import logging
from typing import TYPE_CHECKING, Iterable, List, Optional

from ..domain.models import DayReport, Operation

if TYPE_CHECKING:
    from ..cli.progress import ModernCLI
    from ..services.executor import OperationExecutor

logger = logging.getLogger(__name__)


def flatten(reports: Iterable[DayReport]) -> List[Operation]:
    """Concatenate operations in day order, then per-day emission order."""
    return [operation for report in reports for operation in report.operations]


def serialize_operations(operations: Iterable[Operation]) -> str:
    """Serialize operations as indented JSON for inspection."""
    return json.dumps([operation.to_dict() for operation in operations], indent=2, default=str)


class BatchReporter:
    """Prints the operation batch (dry run) or hands it to the executor."""

    def __init__(
        self,
        cli: "ModernCLI",
        executor: Optional["OperationExecutor"] = None,
    ) -> None:
        """Initialize reporter.

        Args:
            cli: Console used for output
            executor: Executor applying operations in live mode
        """
        self.cli = cli
        self.executor = executor

    def report(self, operations: List[Operation], dry_run: bool) -> int:
        """Report a batch of operations.

        Args:
            operations: Flattened operations
            dry_run: Only print operations when True

        Returns:
            Number of operations applied (always 0 in dry run)

        Raises:
            RemoteExecutionError: If an operation fails in live mode
        """
        logger.info(f"created {len(operations)} mods")
        self.cli.show_operation_count(len(operations))

        if dry_run:
            self.cli.show_operations(serialize_operations(operations))
            return 0

        if not operations:
            return 0
        if self.executor is None:
            raise ValueError("live mode requires an executor")

        return self.executor.execute(operations)

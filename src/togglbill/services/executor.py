"""Sequential application of operations against Toggl."""

import logging
from collections import deque
from typing import Iterable

import requests

from ..api.toggl_client import TogglClient
from ..domain.models import Insert, Modify, Operation
from ..errors import RemoteExecutionError

logger = logging.getLogger(__name__)


class OperationExecutor:
    """Applies operations one at a time, in emission order.

    A split produces a shrink followed by an insert; both must reach Toggl in
    that order, so only one request is ever in flight. The first failure
    abandons the rest of the queue.
    """

    def __init__(self, client: TogglClient) -> None:
        """Initialize executor.

        Args:
            client: Toggl API client
        """
        self.client = client

    def apply(self, operation: Operation) -> None:
        """Apply a single operation."""
        if isinstance(operation, Modify):
            logger.debug(f"Updating time entry {operation.target_id}: {operation.patch}")
            self.client.update_time_entry(operation.target_id, operation.patch)
        elif isinstance(operation, Insert):
            logger.debug(f"Creating time entry: {operation.template}")
            self.client.create_time_entry(operation.template)
        else:
            raise TypeError(f"Unknown operation: {operation!r}")

    def execute(self, operations: Iterable[Operation]) -> int:
        """Drain the operations queue.

        Args:
            operations: Operations in emission order

        Returns:
            Number of operations applied

        Raises:
            RemoteExecutionError: On the first failing operation
        """
        queue = deque(operations)
        total = len(queue)
        applied = 0

        while queue:
            operation = queue.popleft()
            try:
                self.apply(operation)
            except requests.RequestException as e:
                logger.error(
                    f"Operation {applied + 1}/{total} failed, abandoning {len(queue)} remaining: {e}"
                )
                raise RemoteExecutionError(
                    f"{operation.to_dict()['type']} failed ({operation.description}): {e}",
                    operation=operation,
                    applied=applied,
                ) from e
            applied += 1

        logger.info(f"Applied {applied} operations")
        return applied

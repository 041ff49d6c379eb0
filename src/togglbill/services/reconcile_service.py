"""Core reconciliation service."""

import logging
import time
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple

import requests

from ..api.toggl_client import TogglClient
from ..cli.progress import ModernCLI
from ..domain.models import Policy, RunResult
from ..errors import AuthenticationError, TogglBillError
from ..reconcile.aggregator import group_by_day, parse_entries
from ..reconcile.reconciler import BreakBudgetReconciler
from ..reconcile.reporter import BatchReporter, flatten
from ..utils.date_parser import format_month, month_range
from ..utils.logging import StructuredLogger
from .executor import OperationExecutor

logger = logging.getLogger(__name__)


class ReconcileService:
    """Fetches a month of Toggl entries, reconciles them and applies the result."""

    def __init__(
        self,
        toggl_client: TogglClient,
        policy: Policy,
        client_names: List[str],
        cli: ModernCLI,
        structured_logger: Optional[StructuredLogger] = None,
    ):
        self.toggl_client = toggl_client
        self.policy = policy
        self.client_names = client_names
        self.cli = cli
        self.structured_logger = structured_logger
        self.reconciler = BreakBudgetReconciler(policy)
        self.executor = OperationExecutor(toggl_client)
        self.reporter = BatchReporter(cli, self.executor)

    def fetch_entries(self, period: Tuple[datetime, datetime]) -> List[Dict[str, Any]]:
        """Fetch the entries of the configured clients' projects.

        Args:
            period: Half-open (start, end) range

        Returns:
            Raw time entries in Toggl's order

        Raises:
            AuthenticationError: If the API token is rejected
            TogglBillError: If listing clients, projects or entries fails
        """
        me = self.toggl_client.authenticate()
        workspaces = me.get("workspaces") or []
        if not workspaces:
            raise AuthenticationError("Authenticated user has no workspace")
        workspace_id = workspaces[0].get("id")
        if workspace_id is None:
            raise TogglBillError("Toggl returned a workspace without an id")

        try:
            clients = [
                c for c in self.toggl_client.get_clients() if c.get("name") in self.client_names
            ]
            client_ids = {c["id"] for c in clients if c.get("id") is not None}

            projects = [
                p
                for p in self.toggl_client.get_workspace_projects(workspace_id)
                if p.get("cid") in client_ids
            ]
            project_ids = {p["id"] for p in projects if p.get("id") is not None}

            entries = self.toggl_client.get_time_entries(*period)
        except requests.RequestException as e:
            raise TogglBillError(f"Failed to fetch data from Toggl: {e}") from e

        scoped = [e for e in entries if e.get("pid") in project_ids]
        logger.info(
            f"{len(clients)} clients, {len(projects)} projects, "
            f"{len(scoped)} of {len(entries)} entries in scope"
        )
        return scoped

    def run(self, month_offset: int, dry_run: bool = False) -> RunResult:
        """Reconcile one month.

        Args:
            month_offset: 0 for the current month, 1 for the previous, ...
            dry_run: Only print the operations

        Returns:
            Run result with per-day reports and operations

        Raises:
            TogglBillError: On authentication, fetch or execution failure
        """
        period = month_range(month_offset)
        time_range = {"from": period[0].isoformat(), "to": period[1].isoformat()}
        label = format_month(period[0])
        started = time.time()

        if self.structured_logger:
            self.structured_logger.log_run_start(time_range, dry_run=dry_run)
        self.cli.start_run(label, dry_run=dry_run)

        try:
            with self.cli.progress_spinner("Fetching Toggl entries..."):
                raw_entries = self.fetch_entries(period)

            groups = group_by_day(parse_entries(raw_entries))
            reports = self.reconciler.reconcile(groups)
            if self.structured_logger:
                for report in reports:
                    self.structured_logger.log_day(report)
            self.cli.show_days(reports)

            operations = flatten(reports)
            result = RunResult(
                period=period, reports=reports, operations=operations, dry_run=dry_run
            )
            result.applied = self.reporter.report(operations, dry_run)
        except TogglBillError as e:
            if self.structured_logger:
                self.structured_logger.log_run_complete(
                    int((time.time() - started) * 1000),
                    time_range,
                    {},
                    status="failed",
                    error=str(e),
                )
            raise

        if self.structured_logger:
            self.structured_logger.log_run_complete(
                int((time.time() - started) * 1000),
                time_range,
                {
                    "days": len(result.reports),
                    "entries": result.total_entries,
                    "operations": len(result.operations),
                    "applied": result.applied,
                    "dry_run": dry_run,
                },
            )
        self.cli.complete_run(label, result)
        return result

"""Structured logging setup for machine-readable run logs."""

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional

import structlog

from ..domain.models import DayReport


APP_NAME = "togglbill"


def add_app_name(logger: Any, method_name: str, event_dict: Dict[str, Any]) -> Dict[str, Any]:
    """Tag every run event with the application name."""
    event_dict.setdefault("app", APP_NAME)
    return event_dict


def configure_structlog() -> None:
    """Route run events through stdlib logging as single-line JSON."""
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            add_app_name,
            structlog.processors.TimeStamper(fmt="iso", utc=False),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(sort_keys=True),
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
    )


class StructuredLogger:
    """Handles structured JSON logging for reconciliation runs."""

    def __init__(self, log_dir: str = "./logs"):
        self.log_dir = Path(log_dir)
        self.log_file = self.log_dir / "reconcile.jsonl"

        # Ensure log directory exists
        self.log_dir.mkdir(parents=True, exist_ok=True)

        configure_structlog()

        self.logger = structlog.get_logger("togglbill.run")

    def log_run_start(self, time_range: Dict[str, str], dry_run: bool = False) -> None:
        """Log reconciliation run start."""
        self.logger.info(
            "run_started",
            operation="reconcile",
            time_range=time_range,
            dry_run=dry_run,
        )

    def log_day(self, report: DayReport) -> None:
        """Log the per-day summary figures."""
        self.logger.info(
            "day_reconciled",
            day=report.day.isoformat(),
            entries=len(report.entries),
            billable=report.billable,
            non_billable=report.non_billable,
            break_budget=report.break_budget,
            operations=len(report.operations),
        )

    def log_run_complete(
        self,
        duration_ms: int,
        time_range: Dict[str, str],
        results: Dict[str, Any],
        status: str = "success",
        error: Optional[str] = None,
    ) -> None:
        """Log reconciliation run completion."""
        log_entry = {
            "operation": "reconcile",
            "status": status,
            "duration_ms": duration_ms,
            "time_range": time_range,
            "results": results,
            "timestamp": datetime.now().isoformat(),
        }

        if error:
            log_entry["error"] = error
            self.logger.error("run_failed", **log_entry)
        else:
            self.logger.info("run_completed", **log_entry)

        # Also write to file in JSONL format for easy parsing
        self._write_to_file(log_entry)

    def _write_to_file(self, log_entry: Dict[str, Any]) -> None:
        """Write log entry to JSONL file."""
        try:
            with open(self.log_file, "a", encoding="utf-8") as f:
                f.write(json.dumps(log_entry, ensure_ascii=False) + "\n")
        except OSError as e:
            # A broken log file must not fail the run
            logging.getLogger(__name__).warning(f"Failed to write to log file: {e}")


def setup_console_logging(level: str) -> None:
    """Setup basic console logging."""
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler()],
    )

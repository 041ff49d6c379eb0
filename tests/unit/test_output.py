"""Tests for console output and structured run logs."""

import io
import json
import logging
from datetime import date, datetime

import structlog
from rich.console import Console

from togglbill.cli.progress import ModernCLI
from togglbill.domain.models import DayReport, RunResult
from togglbill.utils.logging import APP_NAME, StructuredLogger, add_app_name


def make_cli():
    buffer = io.StringIO()
    return ModernCLI(Console(file=buffer, width=120)), buffer


class TestModernCLI:
    """Test rendered console output."""

    def test_format_hours(self):
        """Test duration formatting."""
        cli, _ = make_cli()

        assert cli._format_hours(0) == "0m"
        assert cli._format_hours(1800) == "30m"
        assert cli._format_hours(7200) == "2h"
        assert cli._format_hours(9000) == "2h 30m"

    def test_show_days(self):
        """Test per-day table rows."""
        cli, buffer = make_cli()
        report = DayReport(
            day=date(2024, 3, 4), entries=(), billable=36000, non_billable=5400, break_budget=3600
        )

        cli.show_days([report])

        output = buffer.getvalue()
        assert "2024-03-04" in output
        assert "10h" in output
        assert "1h 30m" in output

    def test_show_operations_prints_verbatim(self):
        """Test serialized operations are not interpreted as markup."""
        cli, buffer = make_cli()

        cli.show_operations('[{"desc": "x (1.0h)[break]"}]')

        assert '[{"desc": "x (1.0h)[break]"}]' in buffer.getvalue()

    def test_show_error_escapes_markup(self):
        """Test error messages containing brackets are shown intact."""
        cli, buffer = make_cli()

        cli.show_error("modify failed (1.0h)[break]")

        assert "(1.0h)[break]" in buffer.getvalue()

    def test_complete_run_up_to_date(self):
        """Test the summary of a run without changes."""
        cli, buffer = make_cli()
        result = RunResult(
            period=(datetime(2024, 3, 1), datetime(2024, 4, 1)), reports=[], operations=[], dry_run=True
        )

        cli.complete_run("2024-03", result)

        assert "up-to-date" in buffer.getvalue()


class TestStructuredLogger:
    """Test the JSONL run log."""

    def test_completion_is_appended_to_file(self, tmp_path):
        """Test run completion records land in reconcile.jsonl."""
        structured = StructuredLogger(str(tmp_path / "logs"))

        structured.log_run_complete(12, {"from": "a", "to": "b"}, {"operations": 3})
        structured.log_run_complete(5, {"from": "a", "to": "b"}, {}, status="failed", error="boom")

        lines = (tmp_path / "logs" / "reconcile.jsonl").read_text().splitlines()
        assert len(lines) == 2
        first, second = (json.loads(line) for line in lines)
        assert first["status"] == "success"
        assert first["results"] == {"operations": 3}
        assert second["error"] == "boom"

    def test_run_events_are_json_tagged_with_app(self, tmp_path, caplog):
        """Test run events render as JSON carrying the app name and level."""
        structured = StructuredLogger(str(tmp_path / "logs"))
        report = DayReport(
            day=date(2024, 3, 4),
            entries=(),
            billable=36000,
            non_billable=5400,
            break_budget=3600,
            operations=[],
        )

        with caplog.at_level(logging.INFO, logger="togglbill.run"):
            structured.log_day(report)

        event = json.loads(caplog.records[-1].getMessage())
        assert event["event"] == "day_reconciled"
        assert event["app"] == APP_NAME
        assert event["level"] == "info"
        assert event["break_budget"] == 3600
        assert "timestamp" in event
        assert isinstance(structlog.get_config()["processors"][-1], structlog.processors.JSONRenderer)

    def test_add_app_name_keeps_existing_value(self):
        """Test an explicit app field is not overwritten."""
        assert add_app_name(None, "info", {"event": "x"})["app"] == APP_NAME
        assert add_app_name(None, "info", {"event": "x", "app": "other"})["app"] == "other"

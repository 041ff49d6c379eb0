#!/usr/bin/env python3
"""Command line entrypoint for togglbill."""

import logging
import sys

import click

from togglbill.api.toggl_client import TogglClient
from togglbill.cli.progress import ModernCLI
from togglbill.config import Config
from togglbill.errors import ConfigurationError, TogglBillError
from togglbill.services.reconcile_service import ReconcileService
from togglbill.utils.logging import StructuredLogger, setup_console_logging

logger = logging.getLogger(__name__)


@click.command()
@click.option(
    "--month",
    "-m",
    type=click.IntRange(min=0),
    default=1,
    show_default=True,
    help="Relative month (0=current, 1=previous)",
)
@click.option("--dry", "-d", is_flag=True, help="Dry-run mode: outputs modifications and stops")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(dir_okay=False),
    default="config.json",
    show_default=True,
    help="Path to the JSON policy configuration",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default="INFO",
    show_default=True,
)
def main(month: int, dry: bool, config_path: str, log_level: str) -> None:
    """
    Reconcile Toggl time entries with the billing policy.

    Regular work becomes billable, travel non-billable, and breaks are
    billable up to a daily budget derived from maxBreakRatio.
    """
    setup_console_logging(log_level)
    cli = ModernCLI()
    cli.show_banner()

    # Load configuration
    try:
        config = Config(config_path)
    except ConfigurationError as e:
        cli.validate_config(e.errors)
        sys.exit(1)

    _, errors = config.validate()
    if not cli.validate_config(errors):
        sys.exit(1)

    service = ReconcileService(
        toggl_client=TogglClient(config.api_token, config.api_url),
        policy=config.policy(),
        client_names=config.clients,
        cli=cli,
        structured_logger=StructuredLogger(config.log_dir),
    )

    try:
        service.run(month, dry_run=dry)
    except TogglBillError as e:
        logger.error(f"Reconciliation failed: {e}")
        cli.show_error(str(e))
        sys.exit(1)


if __name__ == "__main__":
    main()

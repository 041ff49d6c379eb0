"""Simple JSON configuration loader for togglbill."""

import json
import os
from pathlib import Path
from typing import Any, Dict, List, Optional

from dotenv import load_dotenv

from .api.toggl_client import DEFAULT_API_URL
from .domain.models import Policy
from .errors import ConfigurationError


class Config:
    """Configuration container loaded from JSON file plus environment."""

    def __init__(self, config_path: str = "config.json", api_token: Optional[str] = None) -> None:
        """Initialize configuration from JSON file.

        Args:
            config_path: Path to config.json file
            api_token: Toggl API token, read from API_TOKEN (or .env) when omitted
        """
        self.path = Path(config_path)
        self.data: Dict[str, Any] = {}

        if not self.path.exists():
            raise ConfigurationError([f"Configuration file not found: {config_path}"])

        try:
            with open(self.path) as f:
                self.data = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigurationError([f"Invalid JSON in {config_path}: {e}"]) from e

        if api_token is None:
            load_dotenv()
            api_token = os.getenv("API_TOKEN")
        self.api_token = api_token or ""

    @property
    def max_break_ratio(self) -> Any:
        """Billable-to-break ratio ceiling."""
        return self.data.get("maxBreakRatio")

    @property
    def tags(self) -> Dict[str, str]:
        """Special tag labels (traveling, break)."""
        return self.data.get("tags") or {}

    @property
    def clients(self) -> List[str]:
        """Names of the Toggl clients whose entries are reconciled."""
        return self.data.get("clients") or []

    @property
    def api_url(self) -> str:
        return self.data.get("apiUrl", DEFAULT_API_URL)

    @property
    def log_dir(self) -> str:
        return self.data.get("logDir", "./logs")

    def validate(self) -> tuple[bool, list[str]]:
        """Validate required configuration fields.

        Returns:
            Tuple of (is_valid, error_messages)
        """
        errors: list[str] = []

        ratio = self.max_break_ratio
        if ratio is None:
            errors.append("maxBreakRatio is required")
        elif isinstance(ratio, bool) or not isinstance(ratio, (int, float)) or ratio <= 0:
            errors.append("maxBreakRatio must be a positive number")

        if not self.tags.get("traveling"):
            errors.append("tags.traveling is required")
        if not self.tags.get("break"):
            errors.append("tags.break is required")

        if not self.clients:
            errors.append("clients must list at least one client name")

        if not self.api_token:
            errors.append("API_TOKEN is required")

        return len(errors) == 0, errors

    def policy(self) -> Policy:
        """Build the billing policy.

        Raises:
            ConfigurationError: If any required field is missing or invalid
        """
        is_valid, errors = self.validate()
        if not is_valid:
            raise ConfigurationError(errors)

        return Policy(
            max_break_ratio=float(self.max_break_ratio),
            break_tag=self.tags["break"],
            travel_tag=self.tags["traveling"],
        )

    def to_dict(self) -> Dict[str, Any]:
        """Return configuration as dictionary."""
        return self.data.copy()

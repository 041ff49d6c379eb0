"""Minimal Toggl v8 API client for time entry management."""

import logging
from datetime import datetime
from typing import Any, Optional

import requests

from ..errors import AuthenticationError

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "https://www.toggl.com/api/v8"


class TogglClient:
    """Simple Toggl API client."""

    def __init__(self, api_token: str, base_url: str = DEFAULT_API_URL) -> None:
        """Initialize Toggl client.

        Args:
            api_token: Toggl API token
            base_url: Toggl API base URL
        """
        self.base_url = base_url.rstrip("/")
        self.api_token = api_token
        # Toggl takes the token as user name and the literal "api_token" as password
        self.auth = (api_token, "api_token")
        self.headers = {"Content-Type": "application/json"}

    def _make_request(self, method: str, endpoint: str, **kwargs: Any) -> requests.Response:
        """Make authenticated request to Toggl API.

        Args:
            method: HTTP method
            endpoint: API endpoint
            **kwargs: Additional request arguments

        Returns:
            Response object
        """
        url = f"{self.base_url}{endpoint}"

        try:
            response = requests.request(
                method, url, auth=self.auth, headers=self.headers, timeout=30, **kwargs
            )
            response.raise_for_status()
            return response
        except requests.RequestException as e:
            logger.error(f"Toggl API request failed: {e}")
            failed: Optional[requests.Response] = e.response
            if failed is not None:
                logger.error(f"  Response: {failed.text}")
            raise

    def authenticate(self) -> dict[str, Any]:
        """Check the API token and return the current user.

        Returns:
            User data including workspaces

        Raises:
            AuthenticationError: If Toggl rejects the token or is unreachable
        """
        try:
            response = self._make_request("GET", "/me")
        except requests.RequestException as e:
            raise AuthenticationError(f"Could not authenticate: {e}") from e

        if response.status_code != 200:
            raise AuthenticationError(f"Could not authenticate (HTTP {response.status_code})")

        return response.json().get("data", {})

    def get_clients(self) -> list[dict[str, Any]]:
        """Get all clients visible to the user."""
        response = self._make_request("GET", "/clients")
        return response.json() or []

    def get_workspace_projects(self, workspace_id: int) -> list[dict[str, Any]]:
        """Get all projects of a workspace.

        Args:
            workspace_id: Toggl workspace ID

        Returns:
            List of projects
        """
        response = self._make_request("GET", f"/workspaces/{workspace_id}/projects")
        return response.json() or []

    def get_time_entries(self, start_date: datetime, end_date: datetime) -> list[dict[str, Any]]:
        """Get time entries for date range.

        Args:
            start_date: Start of range (inclusive)
            end_date: End of range (exclusive)

        Returns:
            List of time entries in the order Toggl returns them
        """
        params = {
            "start_date": start_date.isoformat(),
            "end_date": end_date.isoformat(),
        }
        response = self._make_request("GET", "/time_entries", params=params)
        entries = response.json() or []
        logger.info(f"Retrieved {len(entries)} time entries from Toggl")
        return entries

    def update_time_entry(self, entry_id: Any, patch: dict[str, Any]) -> dict[str, Any]:
        """Update fields of an existing time entry.

        Args:
            entry_id: Toggl time entry ID
            patch: Fields to change

        Returns:
            Updated time entry data
        """
        response = self._make_request(
            "PUT", f"/time_entries/{entry_id}", json={"time_entry": patch}
        )
        return response.json()

    def create_time_entry(self, time_entry: dict[str, Any]) -> dict[str, Any]:
        """Create a time entry.

        Args:
            time_entry: Full time entry payload

        Returns:
            Created time entry data
        """
        response = self._make_request("POST", "/time_entries", json={"time_entry": time_entry})
        return response.json()

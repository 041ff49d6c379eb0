"""Tests for the Toggl API client."""

from datetime import datetime, timezone
from unittest.mock import Mock, patch

import pytest
import requests

from togglbill.api.toggl_client import TogglClient
from togglbill.errors import AuthenticationError


def response(payload, status_code=200):
    resp = Mock()
    resp.status_code = status_code
    resp.json.return_value = payload
    resp.text = str(payload)
    return resp


@pytest.fixture
def mock_request():
    with patch("togglbill.api.toggl_client.requests.request") as mocked:
        yield mocked


class TestTogglClient:
    """Test request construction and error mapping."""

    def test_authenticate_returns_user_data(self, mock_request):
        """Test /me is called with basic auth and data returned."""
        mock_request.return_value = response({"data": {"workspaces": [{"id": 1}]}})
        client = TogglClient("secret", "https://toggl.test/api/v8/")

        me = client.authenticate()

        assert me == {"workspaces": [{"id": 1}]}
        args, kwargs = mock_request.call_args
        assert args == ("GET", "https://toggl.test/api/v8/me")
        assert kwargs["auth"] == ("secret", "api_token")

    def test_authenticate_failure(self, mock_request):
        """Test a rejected token raises AuthenticationError."""
        resp = response({}, status_code=403)
        resp.raise_for_status.side_effect = requests.HTTPError("403 Forbidden", response=resp)
        mock_request.return_value = resp

        with pytest.raises(AuthenticationError):
            TogglClient("bad").authenticate()

    def test_authenticate_connection_error(self, mock_request):
        """Test transport errors raise AuthenticationError."""
        mock_request.side_effect = requests.ConnectionError("unreachable")

        with pytest.raises(AuthenticationError):
            TogglClient("token").authenticate()

    def test_get_time_entries_passes_range(self, mock_request):
        """Test the date range is sent as ISO-8601 parameters."""
        mock_request.return_value = response([{"id": 1}])
        start = datetime(2024, 3, 1, tzinfo=timezone.utc)
        end = datetime(2024, 4, 1, tzinfo=timezone.utc)

        entries = TogglClient("token").get_time_entries(start, end)

        assert entries == [{"id": 1}]
        kwargs = mock_request.call_args.kwargs
        assert kwargs["params"] == {
            "start_date": "2024-03-01T00:00:00+00:00",
            "end_date": "2024-04-01T00:00:00+00:00",
        }

    def test_null_lists_become_empty(self, mock_request):
        """Test Toggl's null body for empty collections."""
        mock_request.return_value = response(None)
        client = TogglClient("token")

        assert client.get_clients() == []
        assert client.get_workspace_projects(1) == []

    def test_update_time_entry(self, mock_request):
        """Test updates PUT the patch wrapped in time_entry."""
        mock_request.return_value = response({"data": {}})

        TogglClient("token", "https://toggl.test").update_time_entry(42, {"billable": False})

        args, kwargs = mock_request.call_args
        assert args == ("PUT", "https://toggl.test/time_entries/42")
        assert kwargs["json"] == {"time_entry": {"billable": False}}

    def test_create_time_entry(self, mock_request):
        """Test creates POST the template wrapped in time_entry."""
        mock_request.return_value = response({"data": {}})

        TogglClient("token", "https://toggl.test").create_time_entry({"duration": 60})

        args, kwargs = mock_request.call_args
        assert args == ("POST", "https://toggl.test/time_entries")
        assert kwargs["json"] == {"time_entry": {"duration": 60}}

    def test_request_errors_propagate(self, mock_request):
        """Test failed writes raise the requests exception."""
        resp = response({}, status_code=500)
        resp.raise_for_status.side_effect = requests.HTTPError("500", response=resp)
        mock_request.return_value = resp

        with pytest.raises(requests.HTTPError):
            TogglClient("token").update_time_entry(1, {})

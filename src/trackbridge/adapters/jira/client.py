"""
Jira API Client - Low-level HTTP client for Jira REST API v2.

This handles the raw HTTP communication with Jira.
The JiraGateway uses this to implement the IssueGatewayPort.
"""

import logging
from typing import Any

import requests

from trackbridge.core.exceptions import (
    AccessDeniedError,
    AuthenticationError,
    NotFoundError,
    TrackerClosedError,
    TrackerError,
)


class JiraApiClient:
    """
    Low-level Jira REST API client.

    Handles authentication, request/response, and error handling. Requests
    are never retried; a failure surfaces immediately as a typed error.
    """

    API_VERSION = "2"

    # Jira caps a single search page server side
    PAGE_SIZE = 100

    def __init__(
        self,
        base_url: str,
        username: str,
        password: str,
        timeout: float = 30.0,
    ):
        """
        Initialize the Jira client.

        Args:
            base_url: Jira instance URL (e.g., https://issues.example.org)
            username: User name for basic authentication
            password: Password or API token
            timeout: Request timeout in seconds
        """
        self.base_url = base_url.rstrip("/")
        self.api_url = f"{self.base_url}/rest/api/{self.API_VERSION}"
        self.timeout = timeout
        self.logger = logging.getLogger("JiraApiClient")

        self.headers = {
            "Accept": "application/json",
            "Content-Type": "application/json",
        }

        self._session = requests.Session()
        self._session.auth = (username, password)
        self._session.headers.update(self.headers)

        self._current_user: dict[str, Any] | None = None
        self._closed = False

    # -------------------------------------------------------------------------
    # Core Request Methods
    # -------------------------------------------------------------------------

    def request(self, method: str, endpoint: str, **kwargs: Any) -> Any:
        """
        Make an authenticated request to Jira API.

        Args:
            method: HTTP method (GET, POST, PUT, DELETE)
            endpoint: API endpoint (e.g., 'issue/PROJ-123') or absolute URL
            **kwargs: Additional arguments for requests

        Returns:
            Decoded JSON response, or {} for empty bodies

        Raises:
            TrackerError: On API errors
        """
        if self._closed:
            raise TrackerClosedError(f"Jira client for {self.base_url} is closed")

        url = endpoint if endpoint.startswith("http") else f"{self.api_url}/{endpoint}"
        kwargs.setdefault("timeout", self.timeout)

        try:
            response = self._session.request(method, url, **kwargs)
        except requests.exceptions.ConnectionError as e:
            raise TrackerError(f"Connection failed: {e}", cause=e)
        except requests.exceptions.Timeout as e:
            raise TrackerError(f"Request timed out: {e}", cause=e)
        except requests.exceptions.RequestException as e:
            raise TrackerError(f"Request failed: {e}", cause=e)

        return self._handle_response(response, endpoint)

    def get(self, endpoint: str, **kwargs: Any) -> Any:
        """GET request."""
        return self.request("GET", endpoint, **kwargs)

    def post(self, endpoint: str, json: dict[str, Any] | None = None, **kwargs: Any) -> Any:
        """POST request."""
        return self.request("POST", endpoint, json=json, **kwargs)

    def put(self, endpoint: str, json: dict[str, Any] | None = None, **kwargs: Any) -> Any:
        """PUT request."""
        return self.request("PUT", endpoint, json=json, **kwargs)

    # -------------------------------------------------------------------------
    # Response Handling
    # -------------------------------------------------------------------------

    def _handle_response(self, response: requests.Response, endpoint: str) -> Any:
        """Handle API response and errors."""
        if response.ok:
            if response.text:
                try:
                    return response.json()
                except ValueError as e:
                    raise TrackerError(
                        f"Invalid JSON response from {endpoint}: {response.text[:200]}",
                        issue_key=endpoint,
                        cause=e,
                    )
            return {}

        status = response.status_code
        error_body = response.text[:500] if response.text else ""

        if status == 401:
            raise AuthenticationError("Authentication failed. Check the tracker username and password.")

        if status == 403:
            raise AccessDeniedError(f"Permission denied for {endpoint}", issue_key=endpoint)

        if status == 404:
            raise NotFoundError(f"Not found: {endpoint}", issue_key=endpoint)

        raise TrackerError(f"API error {status}: {error_body}", issue_key=endpoint)

    # -------------------------------------------------------------------------
    # Issues
    # -------------------------------------------------------------------------

    def get_issue(self, issue_key: str) -> dict[str, Any]:
        """Fetch one issue with all fields."""
        return self.get(f"issue/{issue_key}")

    def update_issue(self, issue_key: str, fields: dict[str, Any]) -> None:
        """Apply a partial field update."""
        self.put(f"issue/{issue_key}", json={"fields": fields})

    def get_transitions(self, issue_key: str) -> list[dict[str, Any]]:
        """Get the transitions available for an issue right now."""
        data = self.get(f"issue/{issue_key}/transitions")
        return data.get("transitions", [])

    def transition_issue(self, issue_key: str, transition_id: str) -> None:
        """Execute a single transition."""
        self.post(f"issue/{issue_key}/transitions", json={"transition": {"id": transition_id}})

    def link_issues(self, inward_key: str, outward_key: str, link_type: str) -> None:
        """Create a link; the inward issue is the one the link points from."""
        self.post(
            "issueLink",
            json={
                "type": {"name": link_type},
                "inwardIssue": {"key": inward_key},
                "outwardIssue": {"key": outward_key},
            },
        )

    def add_comment(self, comments_url: str, body: str) -> dict[str, Any]:
        """Post a comment to an issue's absolute comment URL."""
        return self.post(comments_url, json={"body": body})

    # -------------------------------------------------------------------------
    # Search
    # -------------------------------------------------------------------------

    def search_jql(
        self,
        jql: str,
        max_results: int = 50,
        fields: list[str] | None = None,
    ) -> list[dict[str, Any]]:
        """
        Execute a JQL search, following pages until `max_results` issues
        are collected or the result set is exhausted.
        """
        issues: list[dict[str, Any]] = []
        start_at = 0

        while len(issues) < max_results:
            payload: dict[str, Any] = {
                "jql": jql,
                "startAt": start_at,
                "maxResults": min(self.PAGE_SIZE, max_results - len(issues)),
            }
            if fields:
                payload["fields"] = fields

            data = self.post("search", json=payload)
            page = data.get("issues", [])
            if not page:
                break

            issues.extend(page)
            start_at += len(page)
            if start_at >= data.get("total", 0):
                break

        return issues[:max_results]

    def get_filter(self, filter_url: str) -> dict[str, Any]:
        """
        Fetch a saved filter.

        Accepts the filter's REST URL,
        e.g. https://issues.example.org/rest/api/2/filter/12322199
        """
        return self.get(filter_url)

    # -------------------------------------------------------------------------
    # Convenience Methods
    # -------------------------------------------------------------------------

    def get_myself(self) -> dict[str, Any]:
        """Get current authenticated user."""
        if self._current_user is None:
            self._current_user = self.get("myself")
        return self._current_user

    def test_connection(self) -> bool:
        """Test if connection is valid."""
        try:
            self.get_myself()
            return True
        except TrackerError:
            return False

    @property
    def is_connected(self) -> bool:
        """Check if connected."""
        return self._current_user is not None

    @property
    def is_closed(self) -> bool:
        return self._closed

    def close(self) -> None:
        """Close the HTTP session. Later requests raise TrackerClosedError."""
        if self._closed:
            return
        self._closed = True
        self._session.close()
        self.logger.debug(f"Closed session for {self.base_url}")

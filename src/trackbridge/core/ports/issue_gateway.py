"""
Issue Gateway Port - Abstract interface for raw tracker I/O.

A gateway performs the network calls against one tracker backend and
nothing else: it neither translates issues nor decides what to write.

Implementations:
- JiraGateway: Atlassian Jira REST API v2
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from trackbridge.core.domain import Transition


class IssueGatewayPort(ABC):
    """
    Capability interface over one tracker backend.

    Every method either returns a value or raises a TrackerError subclass.
    Gateways never retry; the caller owns retry policy. A gateway instance
    is not safe for concurrent use by several threads.
    """

    # -------------------------------------------------------------------------
    # Capabilities
    # -------------------------------------------------------------------------

    @property
    @abstractmethod
    def name(self) -> str:
        """Get the tracker name (e.g., 'Jira')."""
        ...

    @property
    def supports_private_comments(self) -> bool:
        """Whether comments can be restricted to a private audience."""
        return False

    # -------------------------------------------------------------------------
    # Read Operations
    # -------------------------------------------------------------------------

    @abstractmethod
    def get_issue(self, issue_key: str) -> dict[str, Any]:
        """
        Fetch the raw issue for a backend key.

        Raises:
            NotFoundError: If the issue does not exist
        """
        ...

    @abstractmethod
    def search(self, query: str, max_results: int) -> list[dict[str, Any]]:
        """
        Run a native query and return at most `max_results` raw issues.

        Paging is handled by the implementation.
        """
        ...

    @abstractmethod
    def get_transitions(self, issue_key: str) -> list[Transition]:
        """Get the transitions currently available for an issue."""
        ...

    @abstractmethod
    def get_filter_query(self, filter_url: str) -> str:
        """Resolve a saved server-side filter to its query text."""
        ...

    # -------------------------------------------------------------------------
    # Write Operations
    # -------------------------------------------------------------------------

    @abstractmethod
    def update_fields(self, issue_key: str, fields: dict[str, Any]) -> None:
        """Apply a partial field update to an issue."""
        ...

    @abstractmethod
    def transition_issue(self, issue_key: str, transition_id: str) -> None:
        """Apply a workflow transition by id."""
        ...

    @abstractmethod
    def create_link(self, source_key: str, target_key: str, kind: str) -> None:
        """Create a link of `kind` from `source_key` to `target_key`."""
        ...

    @abstractmethod
    def add_comment(self, comments_location: str, body: str) -> None:
        """Post a comment to the location returned by the translator."""
        ...

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    @abstractmethod
    def close(self) -> None:
        """Release the connection. No operation may follow."""
        ...

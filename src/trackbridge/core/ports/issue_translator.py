"""
Issue Translator Port - Converts raw backend issues to and from the
canonical model.

Translators are pure: no I/O, no state beyond their configuration.

Implementations:
- JiraIssueTranslator: Jira REST API v2 issue JSON
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from trackbridge.core.domain import Issue, IssueLink, IssueStatus


class IssueTranslatorPort(ABC):
    """Bidirectional mapping between one backend's issue JSON and Issue."""

    @abstractmethod
    def to_canonical(self, raw: dict[str, Any], url: str | None = None) -> Issue:
        """
        Build a canonical Issue from a raw backend issue.

        Args:
            raw: Issue as returned by the gateway
            url: Identity URL to use; derived from the key when omitted
        """
        ...

    @abstractmethod
    def compute_update(self, issue: Issue, raw: dict[str, Any]) -> dict[str, Any]:
        """
        Compute the field payload that makes `raw` match `issue`.

        Only differing fields are included. Fields the backend forbids
        changing after creation are never included.
        """
        ...

    @abstractmethod
    def key_of(self, raw: dict[str, Any]) -> str:
        """Get the backend key of a raw issue."""
        ...

    @abstractmethod
    def status_of(self, raw: dict[str, Any]) -> IssueStatus:
        """Get the canonical status of a raw issue."""
        ...

    @abstractmethod
    def links_of(self, raw: dict[str, Any]) -> list[IssueLink]:
        """Get the links carried by a raw issue."""
        ...

    @abstractmethod
    def comments_location(self, raw: dict[str, Any]) -> str:
        """Get where comments for a raw issue are posted."""
        ...

    def diagnose_update_failure(self, issue: Issue, message: str) -> str | None:
        """
        Explain a failed update from the backend's error text.

        Best effort only; returning None means no explanation is available.
        """
        return None

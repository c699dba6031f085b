"""
Jira Gateway - Implements IssueGatewayPort over the Jira REST client.
"""

import logging
from typing import Any

from trackbridge.core.domain import Transition
from trackbridge.core.exceptions import NotFoundError, TrackerError
from trackbridge.core.ports.config_provider import TrackerConfig
from trackbridge.core.ports.issue_gateway import IssueGatewayPort

from .client import JiraApiClient


class JiraGateway(IssueGatewayPort):
    """
    Jira implementation of the IssueGatewayPort.

    Raw Jira JSON goes in and out unchanged; translation is the
    translator's job.
    """

    def __init__(self, config: TrackerConfig, client: JiraApiClient | None = None):
        """
        Initialize the Jira gateway.

        Args:
            config: Tracker configuration
            client: Optional pre-built client (mainly for tests)
        """
        self.config = config
        self.logger = logging.getLogger("JiraGateway")
        self._client = client or JiraApiClient(
            base_url=config.url,
            username=config.username,
            password=config.password,
            timeout=config.timeout,
        )

    # -------------------------------------------------------------------------
    # IssueGatewayPort Implementation - Capabilities
    # -------------------------------------------------------------------------

    @property
    def name(self) -> str:
        return "Jira"

    @property
    def supports_private_comments(self) -> bool:
        return False

    @property
    def client(self) -> JiraApiClient:
        return self._client

    # -------------------------------------------------------------------------
    # IssueGatewayPort Implementation - Read Operations
    # -------------------------------------------------------------------------

    def get_issue(self, issue_key: str) -> dict[str, Any]:
        raw = self._client.get_issue(issue_key)
        if not isinstance(raw, dict) or "key" not in raw:
            raise TrackerError(f"Malformed issue response for {issue_key}", issue_key=issue_key)
        return raw

    def search(self, query: str, max_results: int) -> list[dict[str, Any]]:
        self.logger.debug(f"Searching (max {max_results}): {query}")
        return self._client.search_jql(query, max_results=max_results)

    def get_transitions(self, issue_key: str) -> list[Transition]:
        return [
            Transition(id=str(t["id"]), name=t.get("name", ""))
            for t in self._client.get_transitions(issue_key)
            if "id" in t
        ]

    def get_filter_query(self, filter_url: str) -> str:
        data = self._client.get_filter(filter_url)
        jql = data.get("jql") if isinstance(data, dict) else None
        if not jql:
            raise NotFoundError(f"Filter has no query: {filter_url}", issue_key=filter_url)
        return jql

    # -------------------------------------------------------------------------
    # IssueGatewayPort Implementation - Write Operations
    # -------------------------------------------------------------------------

    def update_fields(self, issue_key: str, fields: dict[str, Any]) -> None:
        self._client.update_issue(issue_key, fields)
        self.logger.info(f"Updated {issue_key}: {', '.join(sorted(fields))}")

    def transition_issue(self, issue_key: str, transition_id: str) -> None:
        self._client.transition_issue(issue_key, transition_id)
        self.logger.info(f"Transitioned {issue_key} via transition {transition_id}")

    def create_link(self, source_key: str, target_key: str, kind: str) -> None:
        self._client.link_issues(inward_key=source_key, outward_key=target_key, link_type=kind)
        self.logger.info(f"Created link: {source_key} {kind} {target_key}")

    def add_comment(self, comments_location: str, body: str) -> None:
        self._client.add_comment(comments_location, body)
        self.logger.info(f"Added comment at {comments_location}")

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    def close(self) -> None:
        self._client.close()

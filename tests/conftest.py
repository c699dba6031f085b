"""
Shared pytest fixtures for the trackbridge test suite.

Fixture Categories:
- Configuration: TrackerConfig
- Routing: HostRouter with Jira URL conventions
- Domain: Sample issues
- Raw data: Jira issue JSON as returned by the REST API
- Mocks: Gateway mock and a wired engine
"""

from __future__ import annotations

import copy
from typing import Any
from unittest.mock import MagicMock

import pytest

from trackbridge.adapters.jira import (
    JIRA_URL_CONVENTIONS,
    TRANSITIONS,
    JiraIssueTranslator,
    JiraQueryBuilder,
)
from trackbridge.application.sync import IssueSyncEngine
from trackbridge.core.domain import Issue, IssueStatus
from trackbridge.core.links import LinkDiffer
from trackbridge.core.ports.config_provider import TrackerConfig
from trackbridge.core.ports.issue_gateway import IssueGatewayPort
from trackbridge.core.routing import HostRouter
from trackbridge.core.transitions import TransitionResolver


BASE_URL = "https://issues.example.org"


# =============================================================================
# Configuration & Routing
# =============================================================================


@pytest.fixture
def tracker_config() -> TrackerConfig:
    return TrackerConfig(url=BASE_URL, username="bot", password="secret")


@pytest.fixture
def router() -> HostRouter:
    return HostRouter(BASE_URL, JIRA_URL_CONVENTIONS)


@pytest.fixture
def translator(router: HostRouter) -> JiraIssueTranslator:
    return JiraIssueTranslator(router)


# =============================================================================
# Raw Jira Data
# =============================================================================


RAW_ISSUE: dict[str, Any] = {
    "id": "10001",
    "key": "PROJ-2",
    "self": f"{BASE_URL}/rest/api/2/issue/10001",
    "fields": {
        "summary": "Crash on startup",
        "description": "The service crashes when the config is empty.",
        "status": {"name": "New"},
        "issuetype": {"name": "Bug"},
        "project": {"key": "PROJ", "name": "Project"},
        "components": [{"name": "core"}],
        "assignee": {"name": "alice"},
        "reporter": {"name": "bob"},
        "fixVersions": [{"name": "1.2"}],
        "customfield_12311240": {"name": "1.2.GA"},
        "customfield_12311242": {"value": "+"},
        "customfield_12311243": {"value": "?"},
        "customfield_12311244": None,
        "issuelinks": [
            {
                "type": {"name": "Dependency"},
                "inwardIssue": {"key": "PROJ-1"},
            },
            {
                "type": {"name": "Dependency"},
                "outwardIssue": {"key": "PROJ-3"},
            },
            {
                "type": {"name": "Relates"},
                "outwardIssue": {"key": "PROJ-9"},
            },
        ],
        "comment": {
            "comments": [
                {
                    "id": "100",
                    "body": "Reproduced.",
                    "author": {"name": "carol"},
                    "created": "2024-01-15T10:30:00.000+0000",
                },
                {
                    "id": "101",
                    "body": "Internal note",
                    "author": {"name": "dave"},
                    "created": "2024-01-16T08:00:00.000+0000",
                    "visibility": {"type": "group", "value": "staff"},
                },
            ]
        },
        "created": "2024-01-10T09:00:00.000+0000",
        "updated": "2024-01-16T08:00:00.000+0000",
    },
}


@pytest.fixture
def raw_issue() -> dict[str, Any]:
    """A Jira issue as returned by GET /rest/api/2/issue/PROJ-2."""
    return copy.deepcopy(RAW_ISSUE)


@pytest.fixture
def raw_transitions() -> list[dict[str, Any]]:
    return [
        {"id": "11", "name": "Start Progress"},
        {"id": "21", "name": "Resolve Issue"},
        {"id": "31", "name": "Close Issue"},
    ]


# =============================================================================
# Domain
# =============================================================================


@pytest.fixture
def issue_url() -> str:
    return f"{BASE_URL}/browse/PROJ-2"


@pytest.fixture
def issue(issue_url: str) -> Issue:
    """Canonical issue matching raw_issue, with nothing to change."""
    return Issue(url=issue_url, tracker_id="PROJ-2", status=IssueStatus.NEW)


# =============================================================================
# Mocks
# =============================================================================


@pytest.fixture
def mock_gateway(raw_issue: dict[str, Any]) -> MagicMock:
    """Gateway mock returning raw_issue for every key."""
    gateway = MagicMock(spec=IssueGatewayPort)
    gateway.name = "Jira"
    gateway.supports_private_comments = False
    gateway.get_issue.return_value = raw_issue
    gateway.search.return_value = [raw_issue]
    gateway.get_transitions.return_value = []
    return gateway


@pytest.fixture
def engine(
    tracker_config: TrackerConfig,
    mock_gateway: MagicMock,
    router: HostRouter,
    translator: JiraIssueTranslator,
) -> IssueSyncEngine:
    return IssueSyncEngine(
        config=tracker_config,
        gateway=mock_gateway,
        translator=translator,
        query_builder=JiraQueryBuilder(),
        router=router,
        resolver=TransitionResolver(TRANSITIONS),
        differ=LinkDiffer(router.issue_key),
    )

"""
Tests for TrackerRegistry and the engine factory.
"""

from unittest.mock import MagicMock, patch

import pytest

from trackbridge.adapters.jira import JiraGateway, JiraIssueTranslator, JiraQueryBuilder
from trackbridge.application import TrackerRegistry, create_engine, create_registry
from trackbridge.application.sync import CommentBatchResult, CommentOutcome, IssueSyncEngine
from trackbridge.core.domain import Comment, Issue, SearchCriteria
from trackbridge.core.exceptions import ConfigValidationError, HostMismatchError, NotFoundError
from trackbridge.core.ports.config_provider import AppConfig, TrackerConfig
from trackbridge.core.routing import HostRouter


A = "https://a.example.org"
B = "https://b.example.org"


def make_engine(base_url: str) -> MagicMock:
    engine = MagicMock(spec=IssueSyncEngine)
    router = HostRouter(base_url)
    engine.router = router
    engine.name = f"Jira ({base_url})"
    engine.owns.side_effect = router.owns
    return engine


@pytest.fixture
def engine_a() -> MagicMock:
    return make_engine(A)


@pytest.fixture
def engine_b() -> MagicMock:
    return make_engine(B)


@pytest.fixture
def registry(engine_a, engine_b) -> TrackerRegistry:
    return TrackerRegistry([engine_a, engine_b])


# =============================================================================
# Registration
# =============================================================================


class TestRegistration:
    def test_engines_in_order(self, registry, engine_a, engine_b):
        assert registry.engines == [engine_a, engine_b]
        assert len(registry) == 2
        assert list(registry) == [engine_a, engine_b]

    def test_duplicate_tracker(self, registry):
        with pytest.raises(ValueError, match="already registered"):
            registry.register(make_engine(A + "/"))

    def test_engine_for(self, registry, engine_b):
        assert registry.engine_for(f"{B}/browse/X-1") is engine_b
        assert registry.engine_for("https://c.example.org/browse/X-1") is None


# =============================================================================
# Routing
# =============================================================================


class TestRouting:
    def test_get_issue_routes_to_owner(self, registry, engine_a, engine_b):
        registry.get_issue(f"{B}/browse/X-1")

        engine_b.get_issue.assert_called_once_with(f"{B}/browse/X-1")
        engine_a.get_issue.assert_not_called()

    def test_get_issue_without_owner(self, registry):
        with pytest.raises(NotFoundError):
            registry.get_issue("https://c.example.org/browse/X-1")

    def test_get_issues_concatenates(self, registry, engine_a, engine_b):
        issue_a = Issue(url=f"{A}/browse/X-1")
        issue_b = Issue(url=f"{B}/browse/Y-1")
        engine_a.get_issues.return_value = [issue_a]
        engine_b.get_issues.return_value = [issue_b]
        urls = (u for u in [issue_b.url, issue_a.url])

        assert registry.get_issues(urls) == [issue_a, issue_b]
        # Every engine sees the full list, generators included
        assert engine_b.get_issues.call_args.args[0] == [issue_b.url, issue_a.url]

    def test_search_concatenates(self, registry, engine_a, engine_b):
        engine_a.search_issues.return_value = [Issue(url=f"{A}/browse/X-1")]
        engine_b.search_issues.return_value = []
        criteria = SearchCriteria(product="X")

        assert len(registry.search_issues(criteria)) == 1
        engine_b.search_issues.assert_called_once_with(criteria)

    def test_filter_routes_to_owner(self, registry, engine_a):
        registry.search_issues_by_filter(f"{A}/rest/api/2/filter/1")
        engine_a.search_issues_by_filter.assert_called_once()

    def test_update_routes_to_owner(self, registry, engine_a, engine_b):
        issue = Issue(url=f"{A}/browse/X-1")

        registry.update_issue(issue)

        engine_a.update_issue.assert_called_once_with(issue)
        engine_b.update_issue.assert_not_called()

    def test_update_without_owner(self, registry):
        with pytest.raises(HostMismatchError):
            registry.update_issue(Issue(url="https://c.example.org/browse/X-1"))

    def test_batch_comments_merge(self, registry, engine_a, engine_b, caplog):
        issue_a = Issue(url=f"{A}/browse/X-1")
        issue_b = Issue(url=f"{B}/browse/Y-1")
        stray = Issue(url="https://c.example.org/browse/Z-1")
        engine_a.add_comments_to_issues.return_value = CommentBatchResult(
            outcomes=[CommentOutcome(issue=issue_a, posted=True)]
        )
        engine_b.add_comments_to_issues.return_value = CommentBatchResult(
            outcomes=[CommentOutcome(issue=issue_b, posted=False, error="boom")]
        )

        result = registry.add_comment_to_issues([issue_a, issue_b, stray], Comment(body="x"))

        assert result.success is True
        assert [o.issue for o in result.posted] == [issue_a]
        assert [o.issue for o in result.failed] == [issue_b]
        assert "owned by no configured tracker" in caplog.text


# =============================================================================
# Lifecycle
# =============================================================================


class TestLifecycle:
    def test_close_all(self, registry, engine_a, engine_b):
        registry.close()
        engine_a.close.assert_called_once()
        engine_b.close.assert_called_once()

    def test_close_failures_are_logged(self, registry, engine_a, engine_b, caplog):
        engine_a.close.side_effect = RuntimeError("socket gone")

        with registry:
            pass

        engine_b.close.assert_called_once()
        assert "Failed to close" in caplog.text


# =============================================================================
# Factory
# =============================================================================


class TestFactory:
    def test_create_engine(self, tracker_config):
        with patch("trackbridge.adapters.jira.client.requests.Session"):
            engine = create_engine(tracker_config)

        assert isinstance(engine.gateway, JiraGateway)
        assert isinstance(engine.translator, JiraIssueTranslator)
        assert engine.router.authority == "https://issues.example.org"
        assert engine.config is tracker_config

    def test_create_engine_invalid_config(self):
        with pytest.raises(ConfigValidationError):
            create_engine(TrackerConfig(url="https://x.org", username="", password=""))

    def test_create_registry(self):
        config = AppConfig(
            trackers=[
                TrackerConfig(url=A, username="u", password="p"),
                TrackerConfig(url=B, username="u", password="p"),
            ]
        )

        with patch("trackbridge.adapters.jira.client.requests.Session"):
            registry = create_registry(config)

        assert [e.router.authority for e in registry] == [A, B]

    def test_create_registry_rejects_duplicate_trackers(self):
        config = AppConfig(
            trackers=[
                TrackerConfig(url=A, username="u", password="p"),
                TrackerConfig(url=A.upper() + "/", username="u", password="p"),
            ]
        )

        with patch("trackbridge.adapters.jira.client.requests.Session") as session_class:
            with pytest.raises(ConfigValidationError, match="configured more than once"):
                create_registry(config)

        session_class.assert_not_called()

    def test_create_registry_closes_on_failure(self):
        config = AppConfig(
            trackers=[
                TrackerConfig(url=A, username="u", password="p"),
                TrackerConfig(url=B, username="u", password="p"),
            ]
        )

        with patch("trackbridge.adapters.jira.client.requests.Session") as session_class, patch(
            "trackbridge.adapters.jira.JiraQueryBuilder",
            side_effect=[JiraQueryBuilder(), RuntimeError("boom")],
        ):
            with pytest.raises(RuntimeError):
                create_registry(config)

        # Only the first engine opened a session, and it is closed again
        assert session_class.call_count == 1
        session_class.return_value.close.assert_called_once()

    def test_create_registry_without_trackers(self):
        with pytest.raises(ConfigValidationError):
            create_registry(AppConfig())

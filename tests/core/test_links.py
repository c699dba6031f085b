"""
Tests for LinkDiffer.
"""

import pytest

from trackbridge.core.domain import Issue, IssueLink, LinkCreation, LinkDirection
from trackbridge.core.links import LinkDiffer
from trackbridge.core.routing import HostRouter


BASE = "https://tracker"


@pytest.fixture
def differ() -> LinkDiffer:
    return LinkDiffer(HostRouter(BASE).issue_key)


def browse(key: str) -> str:
    return f"{BASE}/browse/{key}"


class TestLinkDiffer:
    def test_blocks_without_backend_links(self, differ):
        issue = Issue(url=browse("ABC-2"), blocks=[browse("ABC-1")])

        assert differ.diff(issue, [], "ABC-2") == [
            LinkCreation(blocker_key="ABC-1", blocked_key="ABC-2")
        ]

    def test_depends_on_without_backend_links(self, differ):
        issue = Issue(url=browse("ABC-2"), depends_on=[browse("ABC-3")])

        assert differ.diff(issue, [], "ABC-2") == [
            LinkCreation(blocker_key="ABC-2", blocked_key="ABC-3")
        ]

    def test_existing_links_are_skipped(self, differ):
        issue = Issue(
            url=browse("ABC-2"),
            blocks=[browse("ABC-1")],
            depends_on=[browse("ABC-3")],
        )
        backend = [
            IssueLink("Dependency", LinkDirection.INBOUND, "ABC-1"),
            IssueLink("Dependency", LinkDirection.OUTBOUND, "ABC-3"),
        ]

        assert differ.diff(issue, backend, "ABC-2") == []

    def test_direction_matters(self, differ):
        issue = Issue(url=browse("ABC-2"), blocks=[browse("ABC-1")])
        backend = [IssueLink("Dependency", LinkDirection.OUTBOUND, "ABC-1")]

        assert differ.diff(issue, backend, "ABC-2") == [
            LinkCreation(blocker_key="ABC-1", blocked_key="ABC-2")
        ]

    def test_other_link_kinds_are_ignored(self, differ):
        issue = Issue(url=browse("ABC-2"), blocks=[browse("ABC-1")])
        backend = [IssueLink("Relates", LinkDirection.INBOUND, "ABC-1")]

        assert len(differ.diff(issue, backend, "ABC-2")) == 1

    def test_never_emits_removals(self, differ):
        issue = Issue(url=browse("ABC-2"))
        backend = [
            IssueLink("Dependency", LinkDirection.INBOUND, "ABC-1"),
            IssueLink("Dependency", LinkDirection.OUTBOUND, "ABC-3"),
        ]

        assert differ.diff(issue, backend, "ABC-2") == []

    def test_unresolvable_urls_are_excluded(self, differ):
        issue = Issue(
            url=browse("ABC-2"),
            blocks=[f"{BASE}/issues/ABC-1", browse("ABC-4")],
        )

        assert differ.diff(issue, [], "ABC-2") == [
            LinkCreation(blocker_key="ABC-4", blocked_key="ABC-2")
        ]

    def test_duplicates_collapse(self, differ):
        issue = Issue(
            url=browse("ABC-2"),
            blocks=[browse("ABC-1"), browse("ABC-1/"), f"{BASE}/rest/api/2/issue/ABC-1"],
        )

        assert differ.diff(issue, [], "ABC-2") == [
            LinkCreation(blocker_key="ABC-1", blocked_key="ABC-2")
        ]

    def test_blocks_emitted_before_depends_on(self, differ):
        issue = Issue(
            url=browse("ABC-2"),
            depends_on=[browse("ABC-3")],
            blocks=[browse("ABC-1")],
        )

        result = differ.diff(issue, [], "ABC-2")

        assert [c.blocker_key for c in result] == ["ABC-1", "ABC-2"]

    def test_custom_kind(self):
        differ = LinkDiffer(HostRouter(BASE).issue_key, kind="Blocks")
        issue = Issue(url=browse("ABC-2"), blocks=[browse("ABC-1")])

        assert differ.diff(issue, [], "ABC-2")[0].kind == "Blocks"

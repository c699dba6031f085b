"""
Tests for the Jira update failure diagnostics.
"""

import pytest

from trackbridge.adapters.jira.diagnostics import update_failure_hint
from trackbridge.core.domain import Issue


URL = "https://issues.example.org/browse/PROJ-2"


class TestUpdateFailureHint:
    @pytest.mark.parametrize(
        "field_id,flag",
        [
            ("customfield_12311242", "PM"),
            ("customfield_12311243", "DEV"),
            ("customfield_12311244", "QE"),
        ],
    )
    def test_flag_fields(self, field_id, flag):
        issue = Issue(url=URL, product="PROJ")
        message = f"Field '{field_id}' does not exist or read-only"

        assert update_failure_hint(issue, message) == (
            f"Flag '{flag}' set in Issue.stage cannot be set for issues in project 'PROJ'"
        )

    def test_target_release(self):
        issue = Issue(url=URL)
        message = "customfield_12311240: does not exist or read-only"

        assert update_failure_hint(issue, message) == (
            f"Release.milestone cannot be set for issue at '{URL}'"
        )

    def test_marker_required(self):
        issue = Issue(url=URL, product="PROJ")
        assert update_failure_hint(issue, "customfield_12311242 is required") is None

    def test_unrecognized_field(self):
        issue = Issue(url=URL, product="PROJ")
        assert update_failure_hint(issue, "summary does not exist or read-only") is None

    @pytest.mark.parametrize("message", [None, ""])
    def test_empty_message(self, message):
        assert update_failure_hint(Issue(url=URL), message) is None

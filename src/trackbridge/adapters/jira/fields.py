"""
Jira field names, URL conventions and workflow tables.

Custom field ids are those of the reference Jira deployment; they are the
only backend schema knowledge the adapter relies on.
"""

from __future__ import annotations

from trackbridge.core.domain import Flag, IssueStatus
from trackbridge.core.routing import UrlConventions


API_ISSUE_PATH = "/rest/api/2/issue/"
BROWSE_ISSUE_PATH = "/browse/"

JIRA_URL_CONVENTIONS = UrlConventions(api_path=API_ISSUE_PATH, browse_path=BROWSE_ISSUE_PATH)


class JiraField:
    """Jira REST field names."""

    FIELDS = "fields"
    KEY = "key"
    NAME = "name"
    VALUE = "value"
    SELF = "self"

    SUMMARY = "summary"
    DESCRIPTION = "description"
    STATUS = "status"
    ISSUETYPE = "issuetype"
    PROJECT = "project"
    COMPONENTS = "components"
    ASSIGNEE = "assignee"
    REPORTER = "reporter"
    FIX_VERSIONS = "fixVersions"
    ISSUELINKS = "issuelinks"
    COMMENT = "comment"
    COMMENTS = "comments"
    CREATED = "created"
    UPDATED = "updated"

    # Fields a caller may never change through an update
    IMMUTABLE = (ISSUETYPE, PROJECT)


# Target release custom field
TARGET_RELEASE = "customfield_12311240"

# Stage flag custom fields
FLAG_MAP: dict[Flag, str] = {
    Flag.PM: "customfield_12311242",
    Flag.DEV: "customfield_12311243",
    Flag.QE: "customfield_12311244",
}

DEPENDENCY_LINK_TYPE = "Dependency"


# Jira status name (lower case) -> canonical status
STATUS_MAP: dict[str, IssueStatus] = {
    "new": IssueStatus.NEW,
    "open": IssueStatus.NEW,
    "reopened": IssueStatus.NEW,
    "to do": IssueStatus.NEW,
    "backlog": IssueStatus.NEW,
    "coding in progress": IssueStatus.ASSIGNED,
    "in progress": IssueStatus.ASSIGNED,
    "pull request sent": IssueStatus.POST,
    "review": IssueStatus.POST,
    "resolved": IssueStatus.MODIFIED,
    "ready for qa": IssueStatus.MODIFIED,
    "qa in progress": IssueStatus.ON_QA,
    "verified": IssueStatus.VERIFIED,
    "closed": IssueStatus.CLOSED,
    "done": IssueStatus.CLOSED,
}


def jira_status_names(status: IssueStatus) -> list[str]:
    """Get every Jira status name that maps to a canonical status."""
    return [name for name, mapped in STATUS_MAP.items() if mapped is status]


START_PROGRESS = "Start Progress"
STOP_PROGRESS = "Stop Progress"
LINK_PULL_REQUEST = "Link Pull Request"
RESOLVE_ISSUE = "Resolve Issue"
START_QA = "QA In Progress"
VERIFY_ISSUE = "Verify Issue"
CLOSE_ISSUE = "Close Issue"
REOPEN_ISSUE = "Reopen Issue"

# (current, desired) -> transition name offered by the Jira workflow
TRANSITIONS: dict[tuple[IssueStatus, IssueStatus], str] = {
    (IssueStatus.NEW, IssueStatus.ASSIGNED): START_PROGRESS,
    (IssueStatus.NEW, IssueStatus.POST): LINK_PULL_REQUEST,
    (IssueStatus.NEW, IssueStatus.MODIFIED): RESOLVE_ISSUE,
    (IssueStatus.NEW, IssueStatus.CLOSED): CLOSE_ISSUE,
    (IssueStatus.ASSIGNED, IssueStatus.NEW): STOP_PROGRESS,
    (IssueStatus.ASSIGNED, IssueStatus.POST): LINK_PULL_REQUEST,
    (IssueStatus.ASSIGNED, IssueStatus.MODIFIED): RESOLVE_ISSUE,
    (IssueStatus.ASSIGNED, IssueStatus.CLOSED): CLOSE_ISSUE,
    (IssueStatus.POST, IssueStatus.ASSIGNED): START_PROGRESS,
    (IssueStatus.POST, IssueStatus.MODIFIED): RESOLVE_ISSUE,
    (IssueStatus.POST, IssueStatus.CLOSED): CLOSE_ISSUE,
    (IssueStatus.MODIFIED, IssueStatus.NEW): REOPEN_ISSUE,
    (IssueStatus.MODIFIED, IssueStatus.ON_QA): START_QA,
    (IssueStatus.MODIFIED, IssueStatus.VERIFIED): VERIFY_ISSUE,
    (IssueStatus.MODIFIED, IssueStatus.CLOSED): CLOSE_ISSUE,
    (IssueStatus.ON_QA, IssueStatus.NEW): REOPEN_ISSUE,
    (IssueStatus.ON_QA, IssueStatus.VERIFIED): VERIFY_ISSUE,
    (IssueStatus.ON_QA, IssueStatus.CLOSED): CLOSE_ISSUE,
    (IssueStatus.VERIFIED, IssueStatus.NEW): REOPEN_ISSUE,
    (IssueStatus.VERIFIED, IssueStatus.CLOSED): CLOSE_ISSUE,
    (IssueStatus.CLOSED, IssueStatus.NEW): REOPEN_ISSUE,
}

"""
Jira Translator - Maps Jira REST v2 issue JSON to and from Issue.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any

from trackbridge.core.domain import (
    Comment,
    Flag,
    FlagStatus,
    Issue,
    IssueLink,
    IssueStatus,
    IssueType,
    LinkDirection,
    Release,
    TrackerType,
)
from trackbridge.core.ports.issue_translator import IssueTranslatorPort
from trackbridge.core.routing import HostRouter

from .diagnostics import update_failure_hint
from .fields import (
    DEPENDENCY_LINK_TYPE,
    FLAG_MAP,
    STATUS_MAP,
    TARGET_RELEASE,
    JiraField,
)


JIRA_DATETIME_FORMAT = "%Y-%m-%dT%H:%M:%S.%f%z"


def _name(value: Any) -> str | None:
    """Get the display value of a Jira named object ({"name": ...}) or string."""
    if isinstance(value, dict):
        return value.get(JiraField.NAME) or value.get(JiraField.VALUE)
    if isinstance(value, str):
        return value
    return None


def _parse_datetime(value: str | None) -> datetime | None:
    if not value:
        return None
    try:
        return datetime.strptime(value, JIRA_DATETIME_FORMAT)
    except ValueError:
        return None


class JiraIssueTranslator(IssueTranslatorPort):
    """
    Translate between Jira issue JSON and the canonical Issue.

    Args:
        router: Router of the owning tracker, used to build issue URLs
    """

    def __init__(self, router: HostRouter):
        self.router = router
        self.logger = logging.getLogger("JiraIssueTranslator")

    # -------------------------------------------------------------------------
    # Jira -> Issue
    # -------------------------------------------------------------------------

    def to_canonical(self, raw: dict[str, Any], url: str | None = None) -> Issue:
        fields = raw.get(JiraField.FIELDS, {})
        key = self.key_of(raw)

        blocks: list[str] = []
        depends_on: list[str] = []
        for link in self.links_of(raw):
            if link.kind != DEPENDENCY_LINK_TYPE:
                continue
            target = self.router.browse_url(link.target_key)
            if link.direction is LinkDirection.INBOUND:
                blocks.append(target)
            else:
                depends_on.append(target)

        return Issue(
            url=url or self.router.browse_url(key),
            tracker_id=key,
            tracker_type=TrackerType.JIRA,
            summary=fields.get(JiraField.SUMMARY),
            description=fields.get(JiraField.DESCRIPTION),
            status=self.status_of(raw),
            type=IssueType.from_string(_name(fields.get(JiraField.ISSUETYPE)) or ""),
            product=(fields.get(JiraField.PROJECT) or {}).get(JiraField.KEY),
            components=[
                name for name in (_name(c) for c in fields.get(JiraField.COMPONENTS) or []) if name
            ],
            assignee=_name(fields.get(JiraField.ASSIGNEE)),
            reporter=_name(fields.get(JiraField.REPORTER)),
            release=self._parse_release(fields),
            stage=self._parse_stage(fields),
            blocks=blocks,
            depends_on=depends_on,
            comments=self._parse_comments(fields),
            created=_parse_datetime(fields.get(JiraField.CREATED)),
            last_updated=_parse_datetime(fields.get(JiraField.UPDATED)),
        )

    def key_of(self, raw: dict[str, Any]) -> str:
        return raw[JiraField.KEY]

    def status_of(self, raw: dict[str, Any]) -> IssueStatus:
        name = _name(raw.get(JiraField.FIELDS, {}).get(JiraField.STATUS))
        if not name:
            return IssueStatus.UNKNOWN
        status = STATUS_MAP.get(name.strip().lower())
        if status is None:
            self.logger.debug(f"Unknown Jira status '{name}' for {raw.get(JiraField.KEY)}")
            return IssueStatus.UNKNOWN
        return status

    def links_of(self, raw: dict[str, Any]) -> list[IssueLink]:
        links = []
        for link in raw.get(JiraField.FIELDS, {}).get(JiraField.ISSUELINKS) or []:
            kind = (link.get("type") or {}).get(JiraField.NAME, "")
            if "inwardIssue" in link:
                direction, target = LinkDirection.INBOUND, link["inwardIssue"]
            elif "outwardIssue" in link:
                direction, target = LinkDirection.OUTBOUND, link["outwardIssue"]
            else:
                continue

            target_key = target.get(JiraField.KEY)
            if target_key:
                links.append(IssueLink(kind=kind, direction=direction, target_key=target_key))
        return links

    def comments_location(self, raw: dict[str, Any]) -> str:
        issue_url = raw.get(JiraField.SELF) or (
            f"{self.router.base_url}{self.router.conventions.api_path}{self.key_of(raw)}"
        )
        return f"{issue_url.rstrip('/')}/comment"

    def _parse_release(self, fields: dict[str, Any]) -> Release | None:
        versions = [_name(v) for v in fields.get(JiraField.FIX_VERSIONS) or []]
        version = next((v for v in versions if v), None)
        milestone = _name(fields.get(TARGET_RELEASE))
        if version is None and milestone is None:
            return None
        return Release(version=version, milestone=milestone)

    def _parse_stage(self, fields: dict[str, Any]) -> dict[Flag, FlagStatus]:
        stage = {}
        for flag, field_id in FLAG_MAP.items():
            status = FlagStatus.from_symbol(_name(fields.get(field_id)))
            if status is not FlagStatus.NO_SET:
                stage[flag] = status
        return stage

    def _parse_comments(self, fields: dict[str, Any]) -> list[Comment]:
        container = fields.get(JiraField.COMMENT) or {}
        return [
            Comment(
                body=c.get("body", ""),
                is_private="visibility" in c,
                id=c.get("id"),
                author=_name(c.get("author")),
                created_at=_parse_datetime(c.get(JiraField.CREATED)),
            )
            for c in container.get(JiraField.COMMENTS, [])
        ]

    # -------------------------------------------------------------------------
    # Issue -> Jira
    # -------------------------------------------------------------------------

    def compute_update(self, issue: Issue, raw: dict[str, Any]) -> dict[str, Any]:
        """
        Build the `fields` payload for a Jira issue update.

        Attributes left as None (or empty, for lists and mappings) on the
        issue are not touched. Issue type and project are never written:
        Jira refuses to change either after creation.
        """
        current = raw.get(JiraField.FIELDS, {})
        update: dict[str, Any] = {}

        if issue.summary is not None and issue.summary != current.get(JiraField.SUMMARY):
            update[JiraField.SUMMARY] = issue.summary

        if issue.description is not None and issue.description != current.get(
            JiraField.DESCRIPTION
        ):
            update[JiraField.DESCRIPTION] = issue.description

        if issue.assignee is not None and issue.assignee != _name(current.get(JiraField.ASSIGNEE)):
            update[JiraField.ASSIGNEE] = {JiraField.NAME: issue.assignee}

        if issue.components:
            current_components = {_name(c) for c in current.get(JiraField.COMPONENTS) or []}
            if set(issue.components) != current_components:
                update[JiraField.COMPONENTS] = [{JiraField.NAME: c} for c in issue.components]

        if issue.release is not None:
            update.update(self._release_update(issue.release, current))

        for flag, status in issue.stage.items():
            field_id = FLAG_MAP[flag]
            if status is not FlagStatus.from_symbol(_name(current.get(field_id))):
                update[field_id] = (
                    None if status is FlagStatus.NO_SET else {JiraField.VALUE: status.value}
                )

        for field_name in JiraField.IMMUTABLE:
            update.pop(field_name, None)

        return update

    def _release_update(self, release: Release, current: dict[str, Any]) -> dict[str, Any]:
        update: dict[str, Any] = {}

        if release.version is not None:
            versions = [_name(v) for v in current.get(JiraField.FIX_VERSIONS) or []]
            if versions != [release.version]:
                update[JiraField.FIX_VERSIONS] = [{JiraField.NAME: release.version}]

        if release.milestone is not None and release.milestone != _name(current.get(TARGET_RELEASE)):
            update[TARGET_RELEASE] = {JiraField.NAME: release.milestone}

        return update

    # -------------------------------------------------------------------------
    # Diagnostics
    # -------------------------------------------------------------------------

    def diagnose_update_failure(self, issue: Issue, message: str) -> str | None:
        return update_failure_hint(issue, message)

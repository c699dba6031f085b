"""
Best-effort explanations for failed Jira updates.

Jira rejects writes to custom fields that are not editable for a project
with an error text containing "does not exist or read-only" and the field
id. The match is on free text and therefore fragile; the result is only
ever attached to an error as a hint and never drives control flow.
"""

from __future__ import annotations

from trackbridge.core.domain import Issue

from .fields import FLAG_MAP, TARGET_RELEASE


READ_ONLY_MARKER = "does not exist or read-only"

FLAG_MESSAGE = "Flag '{flag}' set in Issue.stage cannot be set for {scope}"
RELEASE_MESSAGE = "Release.milestone cannot be set for {scope}"


def _scope(issue: Issue) -> str:
    if issue.product:
        return f"issues in project '{issue.product}'"
    return f"issue at '{issue.url}'"


def update_failure_hint(issue: Issue, message: str | None) -> str | None:
    """
    Name the stage flag or release field a failed update tripped over.

    Args:
        issue: The issue whose update failed
        message: Raw error text from the tracker

    Returns:
        A readable explanation, or None when the text is not recognized
    """
    if not message or READ_ONLY_MARKER not in message:
        return None

    for flag, field_id in FLAG_MAP.items():
        if field_id in message:
            return FLAG_MESSAGE.format(flag=flag.name, scope=_scope(issue))

    if TARGET_RELEASE in message:
        return RELEASE_MESSAGE.format(scope=_scope(issue))

    return None

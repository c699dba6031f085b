"""
Domain Entities - Objects with identity that persist over time.

Entities are mutable and have a unique identifier. For issues the identifier
is the URL; the backend key is attached once known.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from .enums import Flag, FlagStatus, IssueStatus, IssueType, TrackerType
from .value_objects import Release


@dataclass
class Comment:
    """A comment on an issue."""

    body: str = ""
    is_private: bool = False

    # Populated when read back from a tracker
    id: str | None = None
    author: str | None = None
    created_at: datetime | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "id": self.id,
            "body": self.body,
            "is_private": self.is_private,
            "author": self.author,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }


@dataclass(eq=False)
class Issue:
    """
    Backend-agnostic representation of a tracker issue.

    Identity is the `url`. Two Issue objects with the same URL compare equal
    and hash alike, so issues can key the batch comment map.
    """

    # Identity
    url: str
    tracker_id: str | None = None
    tracker_type: TrackerType | None = None

    # Content
    summary: str | None = None
    description: str | None = None
    status: IssueStatus = IssueStatus.UNKNOWN
    type: IssueType = IssueType.UNDEFINED

    # Classification
    product: str | None = None
    components: list[str] = field(default_factory=list)
    assignee: str | None = None
    reporter: str | None = None
    release: Release | None = None
    stage: dict[Flag, FlagStatus] = field(default_factory=dict)

    # Relations (URLs of other issues)
    blocks: list[str] = field(default_factory=list)
    depends_on: list[str] = field(default_factory=list)

    # Chronological
    comments: list[Comment] = field(default_factory=list)

    created: datetime | None = None
    last_updated: datetime | None = None

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Issue):
            return NotImplemented
        return self.url == other.url

    def __hash__(self) -> int:
        return hash(self.url)

    def __str__(self) -> str:
        return self.tracker_id or self.url

    def add_comment(self, comment: Comment) -> None:
        """Append a comment, keeping chronological order."""
        self.comments.append(comment)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "url": self.url,
            "tracker_id": self.tracker_id,
            "tracker_type": self.tracker_type.value if self.tracker_type else None,
            "summary": self.summary,
            "description": self.description,
            "status": self.status.name,
            "type": self.type.name,
            "product": self.product,
            "components": list(self.components),
            "assignee": self.assignee,
            "reporter": self.reporter,
            "release": (
                {"version": self.release.version, "milestone": self.release.milestone}
                if self.release
                else None
            ),
            "stage": {flag.name: status.value for flag, status in self.stage.items()},
            "blocks": list(self.blocks),
            "depends_on": list(self.depends_on),
            "comments": [c.to_dict() for c in self.comments],
            "created": self.created.isoformat() if self.created else None,
            "last_updated": self.last_updated.isoformat() if self.last_updated else None,
        }

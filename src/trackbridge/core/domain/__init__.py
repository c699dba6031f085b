"""
Domain - The canonical issue model shared by every tracker adapter.
"""

from .entities import Comment, Issue
from .enums import Flag, FlagStatus, IssueStatus, IssueType, LinkDirection, TrackerType
from .value_objects import (
    DEPENDENCY_LINK,
    IssueLink,
    LinkCreation,
    Release,
    SearchCriteria,
    Transition,
)


__all__ = [
    "DEPENDENCY_LINK",
    "Comment",
    "Flag",
    "FlagStatus",
    "Issue",
    "IssueLink",
    "IssueStatus",
    "IssueType",
    "LinkCreation",
    "LinkDirection",
    "Release",
    "SearchCriteria",
    "TrackerType",
    "Transition",
]

"""
Domain enums - Status, issue type, stage flags and link direction.
"""

from __future__ import annotations

from enum import Enum, auto


class IssueStatus(Enum):
    """
    Canonical workflow status of an issue.

    Backends map their own workflow state names onto these values. UNKNOWN
    is the fail-closed sentinel for states no translator recognizes.
    """

    NEW = auto()
    ASSIGNED = auto()
    POST = auto()
    MODIFIED = auto()
    ON_QA = auto()
    VERIFIED = auto()
    CLOSED = auto()
    UNKNOWN = auto()

    @classmethod
    def from_string(cls, value: str) -> IssueStatus:
        """Parse a canonical status name, e.g. 'on_qa' or 'ON QA'."""
        normalized = value.strip().upper().replace(" ", "_").replace("-", "_")
        try:
            return cls[normalized]
        except KeyError:
            return cls.UNKNOWN

    @property
    def display_name(self) -> str:
        """Human-readable name."""
        return self.name.replace("_", " ").title()


class IssueType(Enum):
    """Type of issue in the tracker."""

    BUG = auto()
    FEATURE_REQUEST = auto()
    TASK = auto()
    ENHANCEMENT = auto()
    UNDEFINED = auto()

    @classmethod
    def from_string(cls, value: str) -> IssueType:
        """Parse issue type from a backend type name."""
        value = value.strip().lower().replace("-", "").replace(" ", "")

        mapping = {
            "bug": cls.BUG,
            "defect": cls.BUG,
            "featurerequest": cls.FEATURE_REQUEST,
            "feature": cls.FEATURE_REQUEST,
            "task": cls.TASK,
            "subtask": cls.TASK,
            "enhancement": cls.ENHANCEMENT,
            "improvement": cls.ENHANCEMENT,
        }

        return mapping.get(value, cls.UNDEFINED)


class Flag(Enum):
    """Release stage gates an issue must pass (acks from each team)."""

    PM = "pm"
    DEV = "dev"
    QE = "qe"


class FlagStatus(Enum):
    """Value of a single stage flag."""

    ACCEPTED = "+"
    REJECTED = "-"
    SET = "?"
    NO_SET = ""

    @classmethod
    def from_symbol(cls, value: str | None) -> FlagStatus:
        """Parse the +/-/? symbol used by trackers; anything else is NO_SET."""
        if not value:
            return cls.NO_SET
        for status in cls:
            if status.value == value.strip():
                return status
        return cls.NO_SET


class LinkDirection(Enum):
    """Direction of a backend link as seen from the issue that carries it."""

    INBOUND = "inbound"
    OUTBOUND = "outbound"


class TrackerType(Enum):
    """Supported issue tracker backends."""

    JIRA = "jira"

    @classmethod
    def from_string(cls, value: str) -> TrackerType:
        try:
            return cls(value.strip().lower())
        except ValueError:
            raise ValueError(f"Unsupported tracker type: {value}") from None

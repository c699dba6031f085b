"""
Value Objects - Immutable objects defined by their attributes.

Value objects have no identity; two instances with the same attributes are
interchangeable.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from types import MappingProxyType
from typing import Mapping

from .enums import Flag, FlagStatus, IssueStatus, LinkDirection


DEPENDENCY_LINK = "Dependency"


@dataclass(frozen=True)
class Release:
    """Version an issue is fixed in, and the milestone it targets."""

    version: str | None = None
    milestone: str | None = None

    def __str__(self) -> str:
        if self.milestone:
            return f"{self.version or '?'} ({self.milestone})"
        return self.version or ""


@dataclass(frozen=True)
class Transition:
    """A workflow transition offered by a backend for one issue."""

    id: str
    name: str


@dataclass(frozen=True)
class IssueLink:
    """
    A link read from the backend, seen from the issue that carries it.

    Links are never stored on the canonical Issue; they only exist while
    the link differ compares backend state against `blocks`/`depends_on`.
    """

    kind: str
    direction: LinkDirection
    target_key: str


@dataclass(frozen=True)
class LinkCreation:
    """A link the backend must create: `blocker_key` blocks `blocked_key`."""

    blocker_key: str
    blocked_key: str
    kind: str = DEPENDENCY_LINK

    def __str__(self) -> str:
        return f"{self.blocker_key} -[{self.kind}]-> {self.blocked_key}"


@dataclass(frozen=True)
class SearchCriteria:
    """
    Structured search filter.

    Every attribute is optional; unset attributes do not constrain the
    search. `max_results` bounds the result size, falling back to the
    tracker's configured default when None.
    """

    status: IssueStatus | None = None
    assignee: str | None = None
    reporter: str | None = None
    product: str | None = None
    component: str | None = None
    release: Release | None = None
    stage: Mapping[Flag, FlagStatus] = field(default_factory=dict)
    start_date: date | None = None
    end_date: date | None = None
    max_results: int | None = None

    def __post_init__(self) -> None:
        if self.max_results is not None and self.max_results < 1:
            raise ValueError(f"max_results must be positive, got {self.max_results}")
        if self.start_date and self.end_date and self.start_date > self.end_date:
            raise ValueError("start_date must not be after end_date")
        # Freeze the stage mapping as well
        object.__setattr__(self, "stage", MappingProxyType(dict(self.stage)))

    def is_empty(self) -> bool:
        """Check whether no filter attribute is set."""
        return not any(
            (
                self.status,
                self.assignee,
                self.reporter,
                self.product,
                self.component,
                self.release,
                self.stage,
                self.start_date,
                self.end_date,
            )
        )

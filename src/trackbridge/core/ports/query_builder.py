"""
Query Builder Port - Turns structured criteria into a native query string.

The engine never interprets the returned query; it only hands it back to
the gateway of the same backend.

Implementations:
- JiraQueryBuilder: JQL
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence

from trackbridge.core.domain import SearchCriteria


class QueryBuilderPort(ABC):
    """Build backend query strings."""

    @abstractmethod
    def search_query(self, criteria: SearchCriteria) -> str:
        """Build a query selecting the issues matching `criteria`."""
        ...

    @abstractmethod
    def multiple_issue_query(self, keys: Sequence[str]) -> str:
        """Build a query selecting exactly the issues with the given keys."""
        ...

"""
Jira Query Builder - Builds JQL from SearchCriteria.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import date

from trackbridge.core.domain import FlagStatus, SearchCriteria
from trackbridge.core.ports.query_builder import QueryBuilderPort

from .fields import FLAG_MAP, jira_status_names


JQL_DATE_FORMAT = "%Y-%m-%d"


def _quote(value: str) -> str:
    """Quote a JQL string literal."""
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def _date(value: date) -> str:
    return _quote(value.strftime(JQL_DATE_FORMAT))


class JiraQueryBuilder(QueryBuilderPort):
    """Build JQL queries."""

    ORDER_BY = "ORDER BY updated DESC"

    def multiple_issue_query(self, keys: Sequence[str]) -> str:
        """Select exactly the given issue keys."""
        return f"key in ({', '.join(keys)})"

    def search_query(self, criteria: SearchCriteria) -> str:
        """
        Translate criteria into JQL clauses joined with AND.

        A criteria object with nothing set selects every visible issue.
        """
        clauses: list[str] = []

        if criteria.status is not None:
            names = jira_status_names(criteria.status)
            if names:
                clauses.append(f"status in ({', '.join(_quote(n) for n in names)})")

        if criteria.assignee:
            clauses.append(f"assignee = {_quote(criteria.assignee)}")
        if criteria.reporter:
            clauses.append(f"reporter = {_quote(criteria.reporter)}")
        if criteria.product:
            clauses.append(f"project = {_quote(criteria.product)}")
        if criteria.component:
            clauses.append(f"component = {_quote(criteria.component)}")

        if criteria.release is not None and criteria.release.version:
            clauses.append(f"fixVersion = {_quote(criteria.release.version)}")

        for flag, status in criteria.stage.items():
            if status is FlagStatus.NO_SET:
                clauses.append(f"{_quote(FLAG_MAP[flag])} is EMPTY")
            else:
                clauses.append(f"{_quote(FLAG_MAP[flag])} = {_quote(status.value)}")

        if criteria.start_date is not None:
            clauses.append(f"updated >= {_date(criteria.start_date)}")
        if criteria.end_date is not None:
            clauses.append(f"updated <= {_date(criteria.end_date)}")

        query = " AND ".join(clauses)
        return f"{query} {self.ORDER_BY}" if query else self.ORDER_BY

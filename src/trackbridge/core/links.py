"""
Link Differ - Computes the dependency links a backend is missing.

The differ is additive only. Backend links with no counterpart in the
canonical `blocks`/`depends_on` lists are left alone, since they may have
been created by someone else.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable

from trackbridge.core.domain import DEPENDENCY_LINK, Issue, IssueLink, LinkCreation, LinkDirection
from trackbridge.core.exceptions import NotFoundError


KeyResolver = Callable[[str], str]


class LinkDiffer:
    """
    Diff canonical dependency declarations against backend links.

    Args:
        key_resolver: Maps an issue URL to its backend key, raising
            NotFoundError when the URL cannot be resolved.
        kind: Backend link type that carries dependencies.
    """

    def __init__(self, key_resolver: KeyResolver, kind: str = DEPENDENCY_LINK):
        self.key_resolver = key_resolver
        self.kind = kind
        self.logger = logging.getLogger("LinkDiffer")

    def diff(
        self,
        issue: Issue,
        backend_links: Iterable[IssueLink],
        issue_key: str,
    ) -> list[LinkCreation]:
        """
        Compute the link creations that make the backend match `issue`.

        Args:
            issue: Canonical issue with the desired blocks/depends_on
            backend_links: Links currently carried by the backend issue
            issue_key: Backend key of `issue`

        Returns:
            Creations in canonical list order, blocks first
        """
        inbound: set[str] = set()
        outbound: set[str] = set()
        for link in backend_links:
            if link.kind != self.kind:
                continue
            if link.direction is LinkDirection.INBOUND:
                inbound.add(link.target_key)
            else:
                outbound.add(link.target_key)

        creations: list[LinkCreation] = []

        for key in self._resolve_keys(issue.blocks):
            if key not in inbound:
                creations.append(
                    LinkCreation(blocker_key=key, blocked_key=issue_key, kind=self.kind)
                )

        for key in self._resolve_keys(issue.depends_on):
            if key not in outbound:
                creations.append(
                    LinkCreation(blocker_key=issue_key, blocked_key=key, kind=self.kind)
                )

        return creations

    def _resolve_keys(self, urls: Iterable[str]) -> list[str]:
        """Resolve URLs to unique keys, dropping the unresolvable ones."""
        keys: list[str] = []
        seen: set[str] = set()
        for url in urls:
            try:
                key = self.key_resolver(url)
            except NotFoundError:
                self.logger.debug(f"Skipping link to unresolvable URL {url}")
                continue
            if key not in seen:
                seen.add(key)
                keys.append(key)
        return keys

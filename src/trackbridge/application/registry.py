"""
Tracker Registry - Fans operations out over several tracker engines.

Callers may hold issues from many trackers at once. The registry hands
each URL or issue to the engine that owns it, and merges results from
operations that span every tracker.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Mapping

from trackbridge.core.domain import Comment, Issue, SearchCriteria
from trackbridge.core.exceptions import HostMismatchError, NotFoundError

from .sync import CommentBatchResult, IssueSyncEngine


class TrackerRegistry:
    """Ordered collection of sync engines, one per tracker instance."""

    def __init__(self, engines: Iterable[IssueSyncEngine] = ()):
        self.logger = logging.getLogger("TrackerRegistry")
        self._engines: list[IssueSyncEngine] = []
        for engine in engines:
            self.register(engine)

    def register(self, engine: IssueSyncEngine) -> None:
        """Add an engine. Its tracker must not be registered already."""
        authority = engine.router.authority
        if any(e.router.authority == authority for e in self._engines):
            raise ValueError(f"Tracker {authority} is already registered")
        self._engines.append(engine)
        self.logger.debug(f"Registered {engine.name}")

    @property
    def engines(self) -> list[IssueSyncEngine]:
        return list(self._engines)

    def __len__(self) -> int:
        return len(self._engines)

    def __iter__(self) -> Iterator[IssueSyncEngine]:
        return iter(self._engines)

    def engine_for(self, url: str) -> IssueSyncEngine | None:
        """Get the engine owning `url`, if any."""
        for engine in self._engines:
            if engine.owns(url):
                return engine
        return None

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    def get_issue(self, url: str) -> Issue:
        """
        Fetch one issue from the tracker owning its URL.

        Raises:
            NotFoundError: If no registered tracker owns the URL
        """
        engine = self.engine_for(url)
        if engine is None:
            raise NotFoundError(f"No tracker configured for {url}")
        return engine.get_issue(url)

    def get_issues(self, urls: Iterable[str]) -> list[Issue]:
        """Fetch issues from every tracker; each engine keeps its own URLs."""
        urls = list(urls)
        issues: list[Issue] = []
        for engine in self._engines:
            issues.extend(engine.get_issues(urls))
        return issues

    def search_issues(self, criteria: SearchCriteria) -> list[Issue]:
        """Run the same search on every tracker and concatenate results."""
        issues: list[Issue] = []
        for engine in self._engines:
            issues.extend(engine.search_issues(criteria))
        return issues

    def search_issues_by_filter(self, filter_url: str) -> list[Issue]:
        """
        Run a saved filter on the tracker that owns the filter URL.

        Raises:
            NotFoundError: If no registered tracker owns the URL
        """
        engine = self.engine_for(filter_url)
        if engine is None:
            raise NotFoundError(f"No tracker configured for {filter_url}")
        return engine.search_issues_by_filter(filter_url)

    # -------------------------------------------------------------------------
    # Writes
    # -------------------------------------------------------------------------

    def update_issue(self, issue: Issue) -> bool:
        """
        Update an issue on the tracker owning its URL.

        Raises:
            HostMismatchError: If no registered tracker owns the URL
        """
        engine = self.engine_for(issue.url)
        if engine is None:
            raise HostMismatchError(issue.url, ", ".join(e.router.authority for e in self._engines))
        return engine.update_issue(issue)

    def add_comment_to_issue(self, issue: Issue, comment: Comment) -> bool:
        engine = self.engine_for(issue.url)
        if engine is None:
            raise HostMismatchError(issue.url, ", ".join(e.router.authority for e in self._engines))
        return engine.add_comment_to_issue(issue, comment)

    def add_comments_to_issues(self, comment_map: Mapping[Issue, Comment]) -> CommentBatchResult:
        """Post comments on every tracker, best effort. Never raises."""
        result = CommentBatchResult()
        for engine in self._engines:
            result = result.merge(engine.add_comments_to_issues(comment_map))

        unowned = [issue for issue in comment_map if self.engine_for(issue.url) is None]
        if unowned:
            self.logger.warning(
                f"Skipped {len(unowned)} issue(s) owned by no configured tracker"
            )
        return result

    def add_comment_to_issues(self, issues: Iterable[Issue], comment: Comment) -> CommentBatchResult:
        return self.add_comments_to_issues({issue: comment for issue in issues})

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    def close(self) -> None:
        """Close every engine. Close failures are logged, not raised."""
        for engine in self._engines:
            try:
                engine.close()
            except Exception as e:
                self.logger.error(f"Failed to close {engine.name}: {e}")

    def __enter__(self) -> TrackerRegistry:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

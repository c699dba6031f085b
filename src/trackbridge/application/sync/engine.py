"""
Issue Sync Engine - Reads, searches, updates and comments on the issues of
one tracker instance.

The engine is backend-agnostic: the gateway performs the I/O, the
translator and query builder speak the backend's dialect, and the host
router keeps foreign URLs away from the tracker.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

from trackbridge.core.domain import Comment, Issue, IssueStatus, SearchCriteria
from trackbridge.core.exceptions import (
    NotFoundError,
    OperationFailedError,
    TrackBridgeError,
    TrackerClosedError,
    TrackerError,
)
from trackbridge.core.links import LinkDiffer
from trackbridge.core.ports.config_provider import TrackerConfig
from trackbridge.core.ports.issue_gateway import IssueGatewayPort
from trackbridge.core.ports.issue_translator import IssueTranslatorPort
from trackbridge.core.ports.query_builder import QueryBuilderPort
from trackbridge.core.routing import HostRouter
from trackbridge.core.transitions import TransitionResolver


@dataclass
class CommentOutcome:
    """Result of posting one comment within a batch."""

    issue: Issue
    posted: bool
    error: str = ""

    def __str__(self) -> str:
        if self.posted:
            return f"[comment] {self.issue}: posted"
        return f"[comment] {self.issue}: {self.error}"


@dataclass
class CommentBatchResult:
    """
    Per-issue outcome of a best-effort batch comment post.

    Batch posting never raises, so `success` is always True; inspect
    `failed` to see which issues did not receive their comment.
    """

    outcomes: list[CommentOutcome] = field(default_factory=list)
    success: bool = True

    @property
    def posted(self) -> list[CommentOutcome]:
        return [o for o in self.outcomes if o.posted]

    @property
    def failed(self) -> list[CommentOutcome]:
        return [o for o in self.outcomes if not o.posted]

    @property
    def all_posted(self) -> bool:
        return not self.failed

    def merge(self, other: CommentBatchResult) -> CommentBatchResult:
        """Combine with another batch result, keeping order."""
        return CommentBatchResult(outcomes=[*self.outcomes, *other.outcomes])


class IssueSyncEngine:
    """
    Synchronization engine for one tracker instance.

    Every public operation blocks for its network round trips. An engine
    owns its gateway; after `close()` every operation raises
    TrackerClosedError. Use one engine per logical workflow at a time.
    """

    def __init__(
        self,
        config: TrackerConfig,
        gateway: IssueGatewayPort,
        translator: IssueTranslatorPort,
        query_builder: QueryBuilderPort,
        router: HostRouter,
        resolver: TransitionResolver,
        differ: LinkDiffer | None = None,
    ):
        self.config = config
        self.gateway = gateway
        self.translator = translator
        self.query_builder = query_builder
        self.router = router
        self.resolver = resolver
        self.differ = differ or LinkDiffer(router.issue_key)
        self.logger = logging.getLogger("IssueSyncEngine")
        self._closed = False

    @property
    def name(self) -> str:
        return f"{self.gateway.name} ({self.router.authority})"

    def owns(self, url: str) -> bool:
        """Check whether this engine's tracker owns `url`."""
        return self.router.owns(url)

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    def get_issue(self, url: str) -> Issue:
        """
        Fetch one issue by URL.

        Raises:
            HostMismatchError: If the URL belongs to another tracker
            NotFoundError: If the key cannot be extracted or the lookup fails
        """
        self._ensure_open()
        self.router.check_host(url)
        key = self.router.issue_key(url)
        raw = self._fetch(key)
        return self.translator.to_canonical(raw, url=url)

    def get_issues(self, urls: Iterable[str]) -> list[Issue]:
        """
        Fetch the owned issues among `urls` with a single query.

        URLs of other trackers are ignored; owned URLs without a key are
        logged and skipped. A failed query yields an empty list.
        """
        self._ensure_open()
        owned = self.router.filter_urls(urls)
        if not owned:
            return []

        keys: list[str] = []
        for url in owned:
            try:
                keys.append(self.router.issue_key(url))
            except NotFoundError:
                self.logger.warning(f"Unable to extract tracker id from: {url}")

        if not keys:
            return []

        return self._search(self.query_builder.multiple_issue_query(keys), len(keys))

    def search_issues(self, criteria: SearchCriteria) -> list[Issue]:
        """Search by criteria. A failed query yields an empty list."""
        self._ensure_open()
        query = self.query_builder.search_query(criteria)
        max_results = criteria.max_results or self.config.default_issue_limit
        if criteria.is_empty():
            self.logger.info(f"Searching {self.name} without criteria, first {max_results} issues")
        return self._search(query, max_results)

    def search_issues_by_filter(self, filter_url: str) -> list[Issue]:
        """
        Run a saved server-side filter.

        Raises:
            HostMismatchError: Before any remote call, for foreign URLs
            NotFoundError: If the filter cannot be resolved
        """
        self._ensure_open()
        self.router.check_host(filter_url)
        try:
            query = self.gateway.get_filter_query(filter_url)
        except TrackerClosedError:
            raise
        except TrackBridgeError as e:
            raise NotFoundError(f"Unable to retrieve filter with id:={filter_url}", cause=e)
        return self._search(query, self.config.default_issue_limit)

    # -------------------------------------------------------------------------
    # Writes
    # -------------------------------------------------------------------------

    def update_issue(self, issue: Issue) -> bool:
        """
        Push the canonical state of `issue` to the tracker.

        Steps run in order: field update, at most one status transition,
        dependency link creation. Steps already applied are not rolled back
        when a later one fails.

        Raises:
            HostMismatchError: Before any remote call, for foreign URLs
            NotFoundError: If the issue cannot be fetched
            OperationFailedError: If a write fails
        """
        self._ensure_open()
        self.router.check_host(issue.url)

        raw = self._fetch(self._key_for(issue))
        key = self.translator.key_of(raw)

        try:
            fields = self.translator.compute_update(issue, raw)
            if fields:
                self.gateway.update_fields(key, fields)
            else:
                self.logger.debug(f"Skipped field update of {key} - no changes needed")

            current = self.translator.status_of(raw)
            if issue.status is not IssueStatus.UNKNOWN and current != issue.status:
                available = self.gateway.get_transitions(key)
                transition = self.resolver.resolve(current, issue.status, available)
                if transition is not None:
                    self.gateway.transition_issue(key, transition.id)
                else:
                    self.logger.info(
                        f"No transition from {current.name} to {issue.status.name} "
                        f"available for {key}, status left unchanged"
                    )

            for creation in self.differ.diff(issue, self.translator.links_of(raw), key):
                self.gateway.create_link(creation.blocker_key, creation.blocked_key, creation.kind)

        except TrackerClosedError:
            raise
        except TrackerError as e:
            diagnostic = self.translator.diagnose_update_failure(issue, str(e))
            raise OperationFailedError(
                f"Failed to update {key}: {e.message}",
                issue_key=key,
                cause=e,
                diagnostic=diagnostic,
            )

        return True

    def add_comment_to_issue(self, issue: Issue, comment: Comment) -> bool:
        """
        Post one comment.

        Raises:
            HostMismatchError: For foreign URLs
            NotFoundError: If the issue cannot be fetched
            TrackerError: If posting fails
        """
        self._ensure_open()
        self.router.check_host(issue.url)
        self._post_comment(issue, comment)
        return True

    def add_comments_to_issues(self, comment_map: Mapping[Issue, Comment]) -> CommentBatchResult:
        """
        Post a comment per issue, best effort.

        Foreign issues are dropped. A failure on one issue is logged and
        does not stop the others. Never raises.
        """
        result = CommentBatchResult()
        if self._closed:
            self.logger.error(f"Cannot post comments, {self.name} is closed")
            result.outcomes = [
                CommentOutcome(issue=issue, posted=False, error="tracker closed")
                for issue in self.router.filter_issue_map(comment_map)
            ]
            return result

        for issue, comment in self.router.filter_issue_map(comment_map).items():
            try:
                self._post_comment(issue, comment)
                result.outcomes.append(CommentOutcome(issue=issue, posted=True))
            except TrackBridgeError as e:
                self.logger.error(f"Failed to comment on {issue}: {e}")
                result.outcomes.append(CommentOutcome(issue=issue, posted=False, error=str(e)))
            except Exception as e:
                self.logger.exception(f"Unexpected error commenting on {issue}")
                result.outcomes.append(
                    CommentOutcome(issue=issue, posted=False, error=f"Unexpected error: {e}")
                )

        return result

    def add_comment_to_issues(self, issues: Iterable[Issue], comment: Comment) -> CommentBatchResult:
        """Post the same comment to every owned issue, best effort."""
        return self.add_comments_to_issues({issue: comment for issue in issues})

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    def close(self) -> None:
        """Release the gateway. No operation may follow."""
        if self._closed:
            return
        self._closed = True
        self.gateway.close()

    @property
    def is_closed(self) -> bool:
        return self._closed

    def __enter__(self) -> IssueSyncEngine:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    # -------------------------------------------------------------------------
    # Private Methods
    # -------------------------------------------------------------------------

    def _ensure_open(self) -> None:
        if self._closed:
            raise TrackerClosedError(f"{self.name} is closed")

    def _key_for(self, issue: Issue) -> str:
        return issue.tracker_id or self.router.issue_key(issue.url)

    def _fetch(self, key: str) -> dict[str, Any]:
        """Fetch a raw issue, folding every failure into NotFoundError."""
        try:
            return self.gateway.get_issue(key)
        except (NotFoundError, TrackerClosedError):
            raise
        except TrackBridgeError as e:
            raise NotFoundError(f"Unable to retrieve issue {key}", issue_key=key, cause=e)

    def _search(self, query: str, max_results: int) -> list[Issue]:
        try:
            raws = self.gateway.search(query, max_results)
            return [self.translator.to_canonical(raw) for raw in raws]
        except TrackBridgeError as e:
            self.logger.error(f"Problem executing query {query}: {e}")
            return []

    def _post_comment(self, issue: Issue, comment: Comment) -> None:
        if comment.is_private and not self.gateway.supports_private_comments:
            self.logger.warning(
                f"Private comments are not supported by {self.gateway.name}, "
                f"posting to {issue} as a public comment"
            )
        raw = self._fetch(self._key_for(issue))
        self.gateway.add_comment(self.translator.comments_location(raw), comment.body)

"""
Host Router - Restricts operations to URLs owned by one tracker.

Callers hand mixed collections of issues (possibly from several trackers)
to every tracker they know; each tracker keeps only its own slice. The
router also owns the URL conventions that map an issue URL to its
backend key.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import TypeVar
from urllib.parse import urlsplit

from trackbridge.core.domain import Issue
from trackbridge.core.exceptions import HostMismatchError, NotFoundError


V = TypeVar("V")

Authority = tuple[str, str, int | None]


@dataclass(frozen=True)
class UrlConventions:
    """Path prefixes that precede the backend key in issue URLs."""

    api_path: str = "/rest/api/2/issue/"
    browse_path: str = "/browse/"


def authority_of(url: str) -> Authority | None:
    """
    Get the (scheme, host, port) triple of a URL.

    Scheme and host are lower-cased. Returns None for URLs without a host
    or with an unparseable port.
    """
    try:
        parts = urlsplit(url)
        port = parts.port
    except ValueError:
        return None
    if not parts.hostname:
        return None
    return (parts.scheme.lower(), parts.hostname.lower(), port)


def format_authority(authority: Authority) -> str:
    """Render an authority triple as scheme://host[:port]."""
    scheme, host, port = authority
    return f"{scheme}://{host}" if port is None else f"{scheme}://{host}:{port}"


class HostRouter:
    """
    Ownership tests and key extraction for one tracker instance.

    Ownership is an exact authority match: scheme, host and port must all
    be equal. A URL with an explicit default port is not owned by a tracker
    configured without one.
    """

    def __init__(self, base_url: str, conventions: UrlConventions | None = None):
        authority = authority_of(base_url)
        if authority is None:
            raise ValueError(f"Tracker url '{base_url}' has no host")
        self.base_url = base_url.rstrip("/")
        self.conventions = conventions or UrlConventions()
        self._authority = authority

    @property
    def authority(self) -> str:
        return format_authority(self._authority)

    # -------------------------------------------------------------------------
    # Ownership
    # -------------------------------------------------------------------------

    def owns(self, url: str) -> bool:
        """Check whether `url` belongs to this tracker."""
        return authority_of(url) == self._authority

    def check_host(self, url: str) -> None:
        """
        Raise unless `url` belongs to this tracker.

        Raises:
            HostMismatchError: If the authorities differ
        """
        if not self.owns(url):
            raise HostMismatchError(url, self.authority)

    def filter_urls(self, urls: Iterable[str]) -> list[str]:
        """Keep the owned URLs, preserving order and duplicates."""
        return [url for url in urls if self.owns(url)]

    def filter_issues(self, issues: Iterable[Issue]) -> list[Issue]:
        """Keep the issues whose URL is owned, preserving order."""
        return [issue for issue in issues if self.owns(issue.url)]

    def filter_issue_map(self, mapping: Mapping[Issue, V]) -> dict[Issue, V]:
        """Keep the entries whose issue URL is owned, preserving order."""
        return {issue: value for issue, value in mapping.items() if self.owns(issue.url)}

    # -------------------------------------------------------------------------
    # Key Extraction
    # -------------------------------------------------------------------------

    def issue_key(self, url: str) -> str:
        """
        Extract the backend key from an issue URL.

        Accepts `<base><api_path><KEY>` and `<base><browse_path><KEY>`.

        Raises:
            NotFoundError: If the path follows neither convention
        """
        path = urlsplit(url).path
        for prefix in (self.conventions.api_path, self.conventions.browse_path):
            index = path.find(prefix)
            if index < 0:
                continue
            key = path[index + len(prefix) :].rstrip("/")
            if key and "/" not in key:
                return key

        raise NotFoundError(
            f"The URL path must be of the form '{self.conventions.api_path}<KEY>' "
            f"OR '{self.conventions.browse_path}<KEY>': {url}"
        )

    def browse_url(self, issue_key: str) -> str:
        """Build the human-facing URL of an issue."""
        return f"{self.base_url}{self.conventions.browse_path}{issue_key}"

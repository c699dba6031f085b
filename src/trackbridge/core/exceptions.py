"""
Exceptions - Centralized exception hierarchy for trackbridge.

All errors raised by the core and the adapters derive from TrackBridgeError,
so callers can catch a single base class.

Hierarchy:
    TrackBridgeError
    ├── TrackerError
    │   ├── AuthenticationError
    │   ├── AccessDeniedError
    │   ├── NotFoundError
    │   ├── HostMismatchError
    │   ├── TrackerClosedError
    │   └── OperationFailedError
    └── ConfigError
        ├── ConfigFileError
        └── ConfigValidationError
"""

from __future__ import annotations


__all__ = [
    "AccessDeniedError",
    "AuthenticationError",
    "ConfigError",
    "ConfigFileError",
    "ConfigValidationError",
    "HostMismatchError",
    "NotFoundError",
    "OperationFailedError",
    "TrackBridgeError",
    "TrackerClosedError",
    "TrackerError",
]


class TrackBridgeError(Exception):
    """
    Base class for all trackbridge errors.

    Attributes:
        message: Human readable description.
        cause: The underlying exception, if any.
    """

    def __init__(self, message: str, cause: BaseException | None = None):
        super().__init__(message)
        self.message = message
        self.cause = cause

    def __str__(self) -> str:
        if self.cause is not None:
            return f"{self.message} (caused by {type(self.cause).__name__}: {self.cause})"
        return self.message


# =============================================================================
# Tracker Errors
# =============================================================================


class TrackerError(TrackBridgeError):
    """An error talking to, or reported by, an issue tracker."""

    def __init__(
        self,
        message: str,
        issue_key: str | None = None,
        cause: BaseException | None = None,
    ):
        super().__init__(message, cause=cause)
        self.issue_key = issue_key


class AuthenticationError(TrackerError):
    """The tracker rejected the configured credentials."""


class AccessDeniedError(TrackerError):
    """The credentials are valid but lack permission for the operation."""


class NotFoundError(TrackerError):
    """
    An issue, filter or other resource could not be resolved.

    Raised for malformed issue URLs, unknown keys, and (on single-issue
    reads) for any failure of the remote lookup.
    """


class HostMismatchError(TrackerError):
    """A URL does not belong to the tracker asked to operate on it."""

    def __init__(self, url: str, authority: str):
        super().__init__(f"Host of '{url}' does not match tracker authority '{authority}'")
        self.url = url
        self.authority = authority


class TrackerClosedError(TrackerError):
    """An operation was issued after the tracker connection was closed."""


class OperationFailedError(TrackerError):
    """
    A multi-step write on a single issue failed part way through.

    Steps applied before the failure are not rolled back.

    Attributes:
        diagnostic: Best-effort explanation synthesized from the backend
            error text, or None when nothing useful could be derived.
    """

    def __init__(
        self,
        message: str,
        issue_key: str | None = None,
        cause: BaseException | None = None,
        diagnostic: str | None = None,
    ):
        super().__init__(diagnostic or message, issue_key=issue_key, cause=cause)
        self.diagnostic = diagnostic


# =============================================================================
# Configuration Errors
# =============================================================================


class ConfigError(TrackBridgeError):
    """Invalid or missing configuration."""


class ConfigFileError(ConfigError):
    """A configuration file could not be read or parsed."""

    def __init__(self, path: str, message: str, cause: BaseException | None = None):
        super().__init__(f"{path}: {message}", cause=cause)
        self.path = path


class ConfigValidationError(ConfigError):
    """Configuration was loaded but failed validation."""

    def __init__(self, errors: list[str]):
        super().__init__("Invalid configuration: " + "; ".join(errors))
        self.errors = errors

"""
Exit codes of the trackbridge command line tool.
"""

from __future__ import annotations

from enum import IntEnum

from trackbridge.core.exceptions import (
    AccessDeniedError,
    AuthenticationError,
    ConfigError,
    HostMismatchError,
    NotFoundError,
    TrackBridgeError,
)


class ExitCode(IntEnum):
    """Process exit codes."""

    SUCCESS = 0
    ERROR = 1
    CONFIG_ERROR = 2
    NOT_FOUND = 3
    CONNECTION_ERROR = 4
    CANCELLED = 130

    @classmethod
    def from_exception(cls, exc: BaseException) -> ExitCode:
        """Map an exception to the exit code that best describes it."""
        if isinstance(exc, KeyboardInterrupt):
            return cls.CANCELLED
        if isinstance(exc, ConfigError):
            return cls.CONFIG_ERROR
        if _is_connection_failure(exc):
            return cls.CONNECTION_ERROR
        if isinstance(exc, (NotFoundError, HostMismatchError)):
            return cls.NOT_FOUND
        return cls.ERROR


def _is_connection_failure(exc: BaseException) -> bool:
    """Walk the cause chain looking for auth or transport failures."""
    current: BaseException | None = exc
    while current is not None:
        if isinstance(current, (AuthenticationError, AccessDeniedError)):
            return True
        # Transport failures carry the requests exception as cause
        if type(current).__module__.startswith("requests"):
            return True
        current = current.cause if isinstance(current, TrackBridgeError) else None
    return False

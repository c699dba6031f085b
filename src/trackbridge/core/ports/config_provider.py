"""
Configuration Provider Port - Abstract interface for configuration.

Implementations:
- EnvironmentConfigProvider: Load from env vars and .env
- FileConfigProvider: Load from YAML/JSON config files
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any
from urllib.parse import urlsplit

from trackbridge.core.domain import TrackerType
from trackbridge.core.routing import authority_of, format_authority


__all__ = [
    "AppConfig",
    "ConfigProviderPort",
    "TrackerConfig",
    "TrackerType",
]


@dataclass
class TrackerConfig:
    """Configuration for one tracker instance."""

    url: str
    username: str
    password: str
    tracker_type: TrackerType = TrackerType.JIRA

    # Used when a search does not bound its own result size
    default_issue_limit: int = 200
    timeout: float = 30.0

    def __post_init__(self) -> None:
        self.url = self.url.rstrip("/")

    @property
    def authority(self) -> str:
        """scheme://host[:port] of the tracker, normalized like HostRouter does."""
        parsed = authority_of(self.url)
        return format_authority(parsed) if parsed is not None else ""

    def is_valid(self) -> bool:
        """Check if configuration is valid."""
        return bool(self.url and self.username and self.password and self.default_issue_limit > 0)

    def validate(self) -> list[str]:
        """Describe every problem with this configuration."""
        errors = []
        if not self.url:
            errors.append("Missing tracker url")
        elif not urlsplit(self.url).netloc:
            errors.append(f"Tracker url '{self.url}' has no host")
        if not self.username:
            errors.append(f"Missing username for {self.url or 'tracker'}")
        if not self.password:
            errors.append(f"Missing password for {self.url or 'tracker'}")
        if self.default_issue_limit < 1:
            errors.append(f"default_issue_limit must be positive for {self.url}")
        return errors


@dataclass
class AppConfig:
    """Complete application configuration."""

    trackers: list[TrackerConfig] = field(default_factory=list)

    def validate(self) -> list[str]:
        if not self.trackers:
            return ["No trackers configured"]
        errors: list[str] = []
        seen: set[str] = set()
        for tracker in self.trackers:
            errors.extend(tracker.validate())
            authority = tracker.authority
            if not authority:
                continue
            if authority in seen:
                errors.append(f"Tracker {authority} is configured more than once")
            seen.add(authority)
        return errors


class ConfigProviderPort(ABC):
    """Abstract interface for configuration providers."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Get the provider name."""
        ...

    @abstractmethod
    def load(self) -> AppConfig:
        """
        Load the complete configuration.

        Raises:
            ConfigValidationError: If the loaded configuration is invalid
        """
        ...

    @abstractmethod
    def get(self, key: str, default: Any = None) -> Any:
        """Get a single raw configuration value."""
        ...

    @abstractmethod
    def validate(self) -> list[str]:
        """
        Validate the configuration.

        Returns:
            List of validation errors (empty if valid)
        """
        ...

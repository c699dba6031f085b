"""
Environment Config Provider - Load configuration from environment variables.

Supports:
- Environment variables (TRACKBRIDGE_URL, TRACKBRIDGE_USERNAME, ...)
- .env files
- Explicit overrides (e.g. from command line arguments)

The environment describes exactly one tracker; use FileConfigProvider for
several.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from trackbridge.core.domain import TrackerType
from trackbridge.core.exceptions import ConfigError, ConfigFileError, ConfigValidationError
from trackbridge.core.ports.config_provider import AppConfig, ConfigProviderPort, TrackerConfig


class EnvironmentConfigProvider(ConfigProviderPort):
    """
    Configuration provider that loads from environment variables and .env files.

    Precedence, highest first: overrides, environment, .env file.
    """

    ENV_PREFIX = "TRACKBRIDGE_"

    ENV_MAPPING = {
        "TRACKBRIDGE_URL": "url",
        "TRACKBRIDGE_USERNAME": "username",
        "TRACKBRIDGE_PASSWORD": "password",
        "TRACKBRIDGE_TRACKER_TYPE": "tracker_type",
        "TRACKBRIDGE_ISSUE_LIMIT": "default_issue_limit",
        "TRACKBRIDGE_TIMEOUT": "timeout",
    }

    def __init__(
        self,
        env_file: Path | None = None,
        overrides: dict[str, Any] | None = None,
        environ: dict[str, str] | None = None,
    ):
        """
        Initialize the config provider.

        Args:
            env_file: Path to .env file (./.env is used if not specified)
            overrides: Values taking precedence over everything else
            environ: Environment to read instead of os.environ
        """
        self._values: dict[str, Any] = {}
        self._env_file = env_file
        self._environ = os.environ if environ is None else environ
        self._overrides = {
            self._config_key(k): v for k, v in (overrides or {}).items() if v is not None
        }

        self._load_env_file()
        self._load_environment()

    # -------------------------------------------------------------------------
    # ConfigProviderPort Implementation
    # -------------------------------------------------------------------------

    @property
    def name(self) -> str:
        return "Environment"

    def load(self) -> AppConfig:
        """Load complete configuration."""
        errors = self.validate()
        if errors:
            raise ConfigValidationError(errors)

        tracker = TrackerConfig(
            url=self.get("url", ""),
            username=self.get("username", ""),
            password=self.get("password", ""),
            tracker_type=self._tracker_type(),
            default_issue_limit=self._number("default_issue_limit", int, 200),
            timeout=self._number("timeout", float, 30.0),
        )
        return AppConfig(trackers=[tracker])

    def get(self, key: str, default: Any = None) -> Any:
        """Get a configuration value."""
        key = self._config_key(key)
        if key in self._overrides:
            return self._overrides[key]
        return self._values.get(key, default)

    def set(self, key: str, value: Any) -> None:
        """Set a configuration value."""
        self._values[self._config_key(key)] = value

    def validate(self) -> list[str]:
        """Validate configuration."""
        errors = []

        if not self.get("url"):
            errors.append("Missing TRACKBRIDGE_URL - set in environment or .env file")
        if not self.get("username"):
            errors.append("Missing TRACKBRIDGE_USERNAME - set in environment or .env file")
        if not self.get("password"):
            errors.append("Missing TRACKBRIDGE_PASSWORD - set in environment or .env file")

        try:
            self._tracker_type()
            limit = self._number("default_issue_limit", int, 200)
            self._number("timeout", float, 30.0)
        except ConfigError as e:
            errors.append(e.message)
        else:
            if limit < 1:
                errors.append("TRACKBRIDGE_ISSUE_LIMIT must be positive")

        return errors

    # -------------------------------------------------------------------------
    # Private Methods
    # -------------------------------------------------------------------------

    @classmethod
    def _normalize(cls, key: str) -> str:
        key = key.strip().lower().replace("-", "_")
        prefix = cls.ENV_PREFIX.lower()
        return key[len(prefix) :] if key.startswith(prefix) else key

    @classmethod
    def _config_key(cls, key: str) -> str:
        """Map a variable name or config key to its config key."""
        mapped = cls.ENV_MAPPING.get(key.strip().upper().replace("-", "_"))
        return mapped if mapped is not None else cls._normalize(key)

    def _tracker_type(self) -> TrackerType:
        value = self.get("tracker_type", TrackerType.JIRA.value)
        if isinstance(value, TrackerType):
            return value
        try:
            return TrackerType.from_string(str(value))
        except ValueError as e:
            raise ConfigError(str(e), cause=e)

    def _number(self, key: str, kind: type, default: Any) -> Any:
        value = self.get(key, default)
        try:
            return kind(value)
        except (TypeError, ValueError) as e:
            raise ConfigError(f"Invalid value for {key}: {value!r}", cause=e)

    def _load_env_file(self) -> None:
        """Load values from .env file."""
        env_file = self._find_env_file()
        if not env_file:
            return

        try:
            content = env_file.read_text()
        except OSError as e:
            raise ConfigFileError(str(env_file), "cannot be read", cause=e)

        for line in content.splitlines():
            line = line.strip()

            # Skip empty lines and comments
            if not line or line.startswith("#") or "=" not in line:
                continue

            key, value = line.split("=", 1)
            key = key.strip()
            if key.startswith("export "):
                key = key[len("export ") :].strip()
            if key.upper() not in self.ENV_MAPPING:
                continue

            self._values[self.ENV_MAPPING[key.upper()]] = value.strip().strip('"').strip("'")

    def _find_env_file(self) -> Path | None:
        """Find .env file."""
        if self._env_file is not None:
            return self._env_file if self._env_file.exists() else None

        cwd_env = Path.cwd() / ".env"
        if cwd_env.exists():
            return cwd_env

        return None

    def _load_environment(self) -> None:
        """Load values from environment variables."""
        for env_key, config_key in self.ENV_MAPPING.items():
            raw_value = self._environ.get(env_key)
            if raw_value is not None:
                self._values[config_key] = raw_value

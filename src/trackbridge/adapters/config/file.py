"""
File Config Provider - Load configuration from a YAML or JSON file.

Example (YAML):

```yaml
trackers:
  - url: https://issues.example.org
    username: bot
    password: secret
    type: jira
    default_issue_limit: 200
    timeout: 30
```
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import yaml

from trackbridge.core.domain import TrackerType
from trackbridge.core.exceptions import ConfigFileError, ConfigValidationError
from trackbridge.core.ports.config_provider import AppConfig, ConfigProviderPort, TrackerConfig


class FileConfigProvider(ConfigProviderPort):
    """Configuration provider backed by a YAML (.yaml/.yml) or JSON file."""

    SUPPORTED_EXTENSIONS = (".yaml", ".yml", ".json")

    def __init__(self, path: str | Path):
        self.path = Path(path)
        self.logger = logging.getLogger("FileConfigProvider")
        self._data: dict[str, Any] | None = None

    # -------------------------------------------------------------------------
    # ConfigProviderPort Implementation
    # -------------------------------------------------------------------------

    @property
    def name(self) -> str:
        return f"File ({self.path.name})"

    def load(self) -> AppConfig:
        """
        Load complete configuration.

        Raises:
            ConfigFileError: If the file cannot be read or parsed
            ConfigValidationError: If the configuration is invalid
        """
        errors = self.validate()
        if errors:
            raise ConfigValidationError(errors)
        return AppConfig(trackers=[self._tracker(entry) for entry in self._trackers()])

    def get(self, key: str, default: Any = None) -> Any:
        """Get a top-level value; dotted keys descend into mappings."""
        node: Any = self._read()
        for part in key.split("."):
            if not isinstance(node, dict) or part not in node:
                return default
            node = node[part]
        return node

    def validate(self) -> list[str]:
        """Validate configuration."""
        entries = self._trackers()
        if not entries:
            return [f"No trackers configured in {self.path}"]

        errors: list[str] = []
        for index, entry in enumerate(entries):
            if not isinstance(entry, dict):
                errors.append(f"trackers[{index}] must be a mapping")
                continue
            try:
                tracker = self._tracker(entry)
            except (TypeError, ValueError) as e:
                errors.append(f"trackers[{index}]: {e}")
                continue
            errors.extend(f"trackers[{index}]: {error}" for error in tracker.validate())
        return errors

    # -------------------------------------------------------------------------
    # Private Methods
    # -------------------------------------------------------------------------

    def _read(self) -> dict[str, Any]:
        if self._data is not None:
            return self._data

        if self.path.suffix.lower() not in self.SUPPORTED_EXTENSIONS:
            raise ConfigFileError(str(self.path), "unsupported config file type")

        try:
            text = self.path.read_text()
        except OSError as e:
            raise ConfigFileError(str(self.path), "cannot be read", cause=e)

        try:
            if self.path.suffix.lower() == ".json":
                data = json.loads(text) if text.strip() else {}
            else:
                data = yaml.safe_load(text) or {}
        except (yaml.YAMLError, json.JSONDecodeError) as e:
            raise ConfigFileError(str(self.path), "is not valid", cause=e)

        if not isinstance(data, dict):
            raise ConfigFileError(str(self.path), "top level must be a mapping")

        self.logger.debug(f"Loaded configuration from {self.path}")
        self._data = data
        return data

    def _trackers(self) -> list[Any]:
        entries = self._read().get("trackers") or []
        if not isinstance(entries, list):
            raise ConfigFileError(str(self.path), "'trackers' must be a list")
        return entries

    @staticmethod
    def _tracker(entry: dict[str, Any]) -> TrackerConfig:
        return TrackerConfig(
            url=str(entry.get("url") or ""),
            username=str(entry.get("username") or ""),
            password=str(entry.get("password") or ""),
            tracker_type=TrackerType.from_string(str(entry.get("type", "jira"))),
            default_issue_limit=int(entry.get("default_issue_limit", 200)),
            timeout=float(entry.get("timeout", 30.0)),
        )

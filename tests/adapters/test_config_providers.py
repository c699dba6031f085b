"""
Tests for configuration providers.
"""

from pathlib import Path
from textwrap import dedent

import pytest

from trackbridge.adapters.config import EnvironmentConfigProvider, FileConfigProvider
from trackbridge.core.domain import TrackerType
from trackbridge.core.exceptions import ConfigFileError, ConfigValidationError
from trackbridge.core.ports.config_provider import AppConfig, TrackerConfig


# =============================================================================
# Config Dataclasses
# =============================================================================


class TestTrackerConfig:
    def test_trailing_slash_is_stripped(self):
        config = TrackerConfig(url="https://issues.example.org:8443/", username="u", password="p")
        assert config.url == "https://issues.example.org:8443"
        assert config.authority == "https://issues.example.org:8443"
        assert config.is_valid()

    def test_validate(self):
        config = TrackerConfig(url="issues.example.org", username="", password="", default_issue_limit=0)
        errors = config.validate()

        assert len(errors) == 4
        assert not config.is_valid()

    def test_authority_matches_host_routing(self):
        config = TrackerConfig(url="HTTPS://bot@Issues.Example.org/jira", username="u", password="p")
        assert config.authority == "https://issues.example.org"

    def test_app_config_without_trackers(self):
        assert AppConfig().validate() == ["No trackers configured"]

    def test_app_config_rejects_duplicate_authorities(self):
        config = AppConfig(
            trackers=[
                TrackerConfig(url="https://issues.example.org", username="u", password="p"),
                TrackerConfig(url="https://ISSUES.example.org/", username="u", password="p"),
                TrackerConfig(url="https://issues.example.org:8443", username="u", password="p"),
            ]
        )

        assert config.validate() == [
            "Tracker https://issues.example.org is configured more than once"
        ]


# =============================================================================
# File Provider
# =============================================================================


class TestFileConfigProvider:
    """Tests for FileConfigProvider."""

    def test_load_yaml_config(self, tmp_path: Path) -> None:
        config_file = tmp_path / "trackers.yaml"
        config_file.write_text(
            dedent(
                """
            trackers:
              - url: https://issues.example.org/
                username: bot
                password: secret
                type: jira
                default_issue_limit: 50
                timeout: 10
              - url: https://jira.other.org
                username: bot2
                password: secret2
        """
            )
        )

        config = FileConfigProvider(config_file).load()

        assert len(config.trackers) == 2
        first, second = config.trackers
        assert first.url == "https://issues.example.org"
        assert first.tracker_type is TrackerType.JIRA
        assert first.default_issue_limit == 50
        assert first.timeout == 10.0
        assert second.default_issue_limit == 200

    def test_load_json_config(self, tmp_path: Path) -> None:
        config_file = tmp_path / "trackers.json"
        config_file.write_text(
            '{"trackers": [{"url": "https://issues.example.org", '
            '"username": "bot", "password": "secret"}]}'
        )

        config = FileConfigProvider(config_file).load()

        assert config.trackers[0].username == "bot"

    def test_get_dotted_key(self, tmp_path: Path) -> None:
        config_file = tmp_path / "trackers.yaml"
        config_file.write_text("defaults:\n  timeout: 5\ntrackers: []\n")

        provider = FileConfigProvider(config_file)

        assert provider.get("defaults.timeout") == 5
        assert provider.get("defaults.missing", "x") == "x"

    def test_config_file_not_found(self, tmp_path: Path) -> None:
        provider = FileConfigProvider(tmp_path / "missing.yaml")

        with pytest.raises(ConfigFileError):
            provider.load()

    def test_invalid_yaml_syntax(self, tmp_path: Path) -> None:
        config_file = tmp_path / "trackers.yaml"
        config_file.write_text("trackers: [\n  - url: :")

        with pytest.raises(ConfigFileError) as exc_info:
            FileConfigProvider(config_file).load()
        assert exc_info.value.cause is not None

    def test_unsupported_extension(self, tmp_path: Path) -> None:
        config_file = tmp_path / "trackers.ini"
        config_file.write_text("[trackers]")

        with pytest.raises(ConfigFileError):
            FileConfigProvider(config_file).load()

    def test_validation_errors(self, tmp_path: Path) -> None:
        config_file = tmp_path / "trackers.yaml"
        config_file.write_text(
            dedent(
                """
            trackers:
              - url: https://issues.example.org
                username: bot
              - url: https://jira.other.org
                username: bot
                password: x
                type: bugzilla
        """
            )
        )

        provider = FileConfigProvider(config_file)
        errors = provider.validate()

        assert any(e.startswith("trackers[0]: Missing password") for e in errors)
        assert any("trackers[1]" in e and "bugzilla" in e for e in errors)
        with pytest.raises(ConfigValidationError):
            provider.load()

    def test_no_trackers(self, tmp_path: Path) -> None:
        config_file = tmp_path / "trackers.yaml"
        config_file.write_text("")

        assert FileConfigProvider(config_file).validate() == [
            f"No trackers configured in {config_file}"
        ]

    def test_shows_config_file_in_name(self, tmp_path: Path) -> None:
        assert FileConfigProvider(tmp_path / "trackers.yaml").name == "File (trackers.yaml)"


# =============================================================================
# Environment Provider
# =============================================================================


class TestEnvironmentConfigProvider:
    """Tests for EnvironmentConfigProvider."""

    @pytest.fixture(autouse=True)
    def isolated(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.chdir(tmp_path)
        for key in EnvironmentConfigProvider.ENV_MAPPING:
            monkeypatch.delenv(key, raising=False)

    def test_load_from_env_vars(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("TRACKBRIDGE_URL", "https://issues.example.org")
        monkeypatch.setenv("TRACKBRIDGE_USERNAME", "bot")
        monkeypatch.setenv("TRACKBRIDGE_PASSWORD", "secret")
        monkeypatch.setenv("TRACKBRIDGE_ISSUE_LIMIT", "25")
        monkeypatch.setenv("TRACKBRIDGE_TIMEOUT", "7.5")

        config = EnvironmentConfigProvider().load()

        tracker = config.trackers[0]
        assert tracker.url == "https://issues.example.org"
        assert tracker.username == "bot"
        assert tracker.default_issue_limit == 25
        assert tracker.timeout == 7.5
        assert tracker.tracker_type is TrackerType.JIRA

    def test_load_from_env_file(self, tmp_path: Path) -> None:
        (tmp_path / ".env").write_text(
            dedent(
                """
            # tracker credentials
            TRACKBRIDGE_URL=https://issues.example.org
            export TRACKBRIDGE_USERNAME="bot"
            TRACKBRIDGE_PASSWORD='secret'
            UNRELATED=1
        """
            )
        )

        provider = EnvironmentConfigProvider()

        assert provider.validate() == []
        assert provider.get("username") == "bot"
        assert provider.get("unrelated") is None

    def test_env_overrides_env_file(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        env_file = tmp_path / "custom.env"
        env_file.write_text("TRACKBRIDGE_URL=https://file.example.org\n")
        monkeypatch.setenv("TRACKBRIDGE_URL", "https://env.example.org")

        provider = EnvironmentConfigProvider(env_file=env_file)

        assert provider.get("url") == "https://env.example.org"

    def test_overrides_take_precedence(self) -> None:
        provider = EnvironmentConfigProvider(
            environ={"TRACKBRIDGE_URL": "https://env.example.org"},
            overrides={"url": "https://cli.example.org", "username": None},
        )

        assert provider.get("TRACKBRIDGE_URL") == "https://cli.example.org"
        assert provider.get("username") is None

    def test_validation_error_messages_are_actionable(self) -> None:
        provider = EnvironmentConfigProvider(environ={})

        errors = provider.validate()

        assert len(errors) == 3
        assert "TRACKBRIDGE_URL" in errors[0]
        with pytest.raises(ConfigValidationError):
            provider.load()

    def test_invalid_numbers(self) -> None:
        provider = EnvironmentConfigProvider(
            environ={
                "TRACKBRIDGE_URL": "https://issues.example.org",
                "TRACKBRIDGE_USERNAME": "bot",
                "TRACKBRIDGE_PASSWORD": "secret",
                "TRACKBRIDGE_ISSUE_LIMIT": "lots",
            }
        )

        assert provider.validate() == ["Invalid value for default_issue_limit: 'lots'"]

    def test_unsupported_tracker_type(self) -> None:
        provider = EnvironmentConfigProvider(
            environ={
                "TRACKBRIDGE_URL": "https://issues.example.org",
                "TRACKBRIDGE_USERNAME": "bot",
                "TRACKBRIDGE_PASSWORD": "secret",
                "TRACKBRIDGE_TRACKER_TYPE": "bugzilla",
            }
        )

        assert provider.validate() == ["Unsupported tracker type: bugzilla"]

    def test_env_file_issue_limit_and_timeout(self, tmp_path: Path) -> None:
        (tmp_path / ".env").write_text(
            "TRACKBRIDGE_URL=https://issues.example.org\n"
            "TRACKBRIDGE_USERNAME=bot\n"
            "TRACKBRIDGE_PASSWORD=secret\n"
            "TRACKBRIDGE_ISSUE_LIMIT=7\n"
            "TRACKBRIDGE_TIMEOUT=2.5\n"
        )

        tracker = EnvironmentConfigProvider().load().trackers[0]

        assert tracker.default_issue_limit == 7
        assert tracker.timeout == 2.5

    def test_overrides_use_variable_names(self) -> None:
        provider = EnvironmentConfigProvider(
            environ={
                "TRACKBRIDGE_URL": "https://issues.example.org",
                "TRACKBRIDGE_USERNAME": "bot",
                "TRACKBRIDGE_PASSWORD": "secret",
                "TRACKBRIDGE_ISSUE_LIMIT": "50",
            },
            overrides={"TRACKBRIDGE_ISSUE_LIMIT": 9, "tracker-type": "jira"},
        )

        assert provider.get("default_issue_limit") == 9
        assert provider.load().trackers[0].default_issue_limit == 9

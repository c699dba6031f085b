"""
Engine Factory - Wires a sync engine for a configured tracker.

Adapter modules are imported lazily, per tracker type, so a deployment
only loads the backends it actually talks to.
"""

from __future__ import annotations

import logging

from trackbridge.core.domain import TrackerType
from trackbridge.core.exceptions import ConfigValidationError
from trackbridge.core.links import LinkDiffer
from trackbridge.core.ports.config_provider import AppConfig, TrackerConfig
from trackbridge.core.routing import HostRouter
from trackbridge.core.transitions import TransitionResolver

from .registry import TrackerRegistry
from .sync import IssueSyncEngine


logger = logging.getLogger("Factory")


def create_engine(config: TrackerConfig) -> IssueSyncEngine:
    """
    Build a sync engine for one tracker.

    Args:
        config: Tracker configuration

    Returns:
        An open engine owning a fresh gateway session

    Raises:
        ConfigValidationError: If the configuration is invalid
        ValueError: If the tracker type has no adapter
    """
    errors = config.validate()
    if errors:
        raise ConfigValidationError(errors)

    if config.tracker_type is TrackerType.JIRA:
        from trackbridge.adapters.jira import (
            JIRA_URL_CONVENTIONS,
            TRANSITIONS,
            JiraGateway,
            JiraIssueTranslator,
            JiraQueryBuilder,
        )
        from trackbridge.adapters.jira.fields import DEPENDENCY_LINK_TYPE

        router = HostRouter(config.url, JIRA_URL_CONVENTIONS)
        logger.debug(f"Creating Jira engine for {router.authority}")
        translator = JiraIssueTranslator(router)
        query_builder = JiraQueryBuilder()
        # The gateway opens a session, so it is built last
        return IssueSyncEngine(
            config=config,
            gateway=JiraGateway(config),
            translator=translator,
            query_builder=query_builder,
            router=router,
            resolver=TransitionResolver(TRANSITIONS),
            differ=LinkDiffer(router.issue_key, kind=DEPENDENCY_LINK_TYPE),
        )

    raise ValueError(f"Unknown tracker type: {config.tracker_type}")


def create_registry(app_config: AppConfig) -> TrackerRegistry:
    """
    Build a registry with one engine per configured tracker.

    Engines created before a failure are closed again.
    """
    errors = app_config.validate()
    if errors:
        raise ConfigValidationError(errors)

    registry = TrackerRegistry()
    try:
        for tracker in app_config.trackers:
            engine = create_engine(tracker)
            try:
                registry.register(engine)
            except ValueError:
                engine.close()
                raise
    except Exception:
        registry.close()
        raise
    return registry

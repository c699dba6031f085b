"""
Application Layer - Use cases and orchestration.

This layer contains:
- sync/: The per-tracker synchronization engine
- registry: Fan-out over several configured trackers
- factory: Wiring of engines from configuration
"""

from .factory import create_engine, create_registry
from .registry import TrackerRegistry
from .sync import CommentBatchResult, CommentOutcome, IssueSyncEngine


__all__ = [
    "CommentBatchResult",
    "CommentOutcome",
    "IssueSyncEngine",
    "TrackerRegistry",
    "create_engine",
    "create_registry",
]

"""
Sync Module - Orchestration of reads and writes against one tracker.
"""

from .engine import CommentBatchResult, CommentOutcome, IssueSyncEngine


__all__ = [
    "CommentBatchResult",
    "CommentOutcome",
    "IssueSyncEngine",
]

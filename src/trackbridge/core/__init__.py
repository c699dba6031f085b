"""
Core module - Pure domain logic with no external dependencies.

This module contains:
- domain/: The canonical issue model
- ports/: Abstract interfaces that adapters must implement
- routing: Host ownership and issue-key extraction
- transitions: Status transition resolution
- links: Dependency link diffing
- exceptions: Centralized exception hierarchy
"""

from .domain import *  # noqa: F403
from .exceptions import *  # noqa: F403
from .links import LinkDiffer
from .ports import *  # noqa: F403
from .routing import HostRouter, UrlConventions
from .transitions import TransitionResolver

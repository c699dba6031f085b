"""
Config Adapters - Configuration providers.
"""

from .environment import EnvironmentConfigProvider
from .file import FileConfigProvider


__all__ = ["EnvironmentConfigProvider", "FileConfigProvider"]

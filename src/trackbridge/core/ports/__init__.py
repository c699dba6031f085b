"""
Ports - Abstract interfaces for external dependencies.

Ports define the contracts that adapters must implement.
This enables dependency inversion and easy testing.
"""

from .config_provider import AppConfig, ConfigProviderPort, TrackerConfig
from .issue_gateway import IssueGatewayPort
from .issue_translator import IssueTranslatorPort
from .query_builder import QueryBuilderPort


__all__ = [
    "AppConfig",
    "ConfigProviderPort",
    "IssueGatewayPort",
    "IssueTranslatorPort",
    "QueryBuilderPort",
    "TrackerConfig",
]

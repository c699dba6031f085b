"""
Jira Adapter - Implementation of the tracker ports for Atlassian Jira.

Components:
- JiraApiClient: Low-level requests-based REST client
- JiraGateway: IssueGatewayPort over the client
- JiraIssueTranslator: Jira issue JSON <-> Issue
- JiraQueryBuilder: SearchCriteria -> JQL
"""

from .client import JiraApiClient
from .fields import JIRA_URL_CONVENTIONS, TRANSITIONS
from .gateway import JiraGateway
from .query import JiraQueryBuilder
from .translator import JiraIssueTranslator


__all__ = [
    "JIRA_URL_CONVENTIONS",
    "TRANSITIONS",
    "JiraApiClient",
    "JiraGateway",
    "JiraIssueTranslator",
    "JiraQueryBuilder",
]

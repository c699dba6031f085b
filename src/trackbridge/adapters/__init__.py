"""
Adapters - Concrete implementations of the core ports.

- jira/: Atlassian Jira REST API v2
- config/: Environment and file configuration providers
"""

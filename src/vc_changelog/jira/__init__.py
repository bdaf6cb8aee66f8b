"""
Issue tracker integration for vc_changelog.

Commits whose header binds a ``jira_issue_id`` are enriched with the
issue's type, summary, description and labels fetched by
:class:`JiraClient`.
"""

from .jira_client import JiraClient, JiraError, JiraIssueFields  # noqa: F401

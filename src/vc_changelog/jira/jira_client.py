"""
Client for reading issues from a Jira server.

This client wraps HTTP requests to the Jira REST API. It fetches a
single issue via ``/rest/api/2/issue/{id}``. On error conditions (HTTP
errors, timeouts, unexpected payloads), a :class:`JiraError` is raised.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any, Dict, List

import requests


logger = logging.getLogger(__name__)
# Attach a null handler to avoid errors when the root logger is missing a
# stream. Messages will still propagate to the root logger if configured.
if not logger.handlers:
    logger.addHandler(logging.NullHandler())
    logger.propagate = False


class JiraError(Exception):
    """Raised when an issue cannot be fetched from Jira."""

    pass


@dataclass
class JiraIssueFields:
    """The subset of Jira issue fields used to enrich commits."""

    type: str
    summary: str
    description: str
    labels: List[str]


@dataclass
class JiraClient:
    """Client for fetching issues from a Jira server.

    Parameters
    ----------
    url : str
        Base URL of the Jira server, e.g. ``"https://jira.example.com"``.
    username : str
        User name for basic authentication.
    token : str
        API token or password for basic authentication.
    request_timeout : float, optional
        Timeout in seconds for HTTP requests. Defaults to 30 seconds.
    """

    url: str
    username: str = ""
    token: str = ""
    request_timeout: float = 30.0

    def _endpoint(self, issue_id: str) -> str:
        return f"{self.url.rstrip('/')}/rest/api/2/issue/{issue_id}"

    def get_issue(self, issue_id: str) -> JiraIssueFields:
        """Fetch the issue ``issue_id``.

        Raises
        ------
        JiraError
            If the request fails or the response is not a Jira issue.
        """
        url = self._endpoint(issue_id)
        auth = (self.username, self.token) if self.username else None
        logger.debug("Requesting Jira issue %s from %s", issue_id, url)
        try:
            response = requests.get(url, auth=auth, timeout=self.request_timeout)
        except requests.RequestException as exc:
            logger.error("Failed to connect to Jira: %s", exc)
            raise JiraError(str(exc)) from exc
        if response.status_code != 200:
            logger.error(
                "Jira returned non-200 status %s: %s", response.status_code, response.text
            )
            raise JiraError(f"Jira returned status {response.status_code}: {response.text}")
        try:
            data: Dict[str, Any] = response.json()
        except json.JSONDecodeError as exc:
            logger.error("Failed to parse Jira response: %s", exc)
            raise JiraError("Failed to parse Jira response") from exc

        fields = data.get("fields") if isinstance(data, dict) else None
        if not isinstance(fields, dict):
            raise JiraError("Unexpected response structure from Jira")
        issue_type = fields.get("issuetype") or {}
        return JiraIssueFields(
            type=issue_type.get("name", "") if isinstance(issue_type, dict) else "",
            summary=fields.get("summary") or "",
            description=fields.get("description") or "",
            labels=list(fields.get("labels") or []),
        )

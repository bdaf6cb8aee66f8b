"""
Post-processors applied to each parsed commit.

A processor receives a fully parsed :class:`Commit` and returns the
commit to keep (possibly modified) or ``None`` to drop it from the
parse result.
"""

from __future__ import annotations

import re
from typing import Optional, Protocol

from vc_changelog.parsing.commit_model import Commit


class CommitProcessor(Protocol):
    def process_commit(self, commit: Commit) -> Optional[Commit]:
        ...


class GitHubProcessor:
    """Turn mentions and issue numbers into GitHub markdown links.

    ``@octocat`` becomes ``[@octocat](https://github.com/octocat)`` and
    ``#12`` / ``gh-12`` become links to ``<repository_url>/issues/12``.
    When no repository URL is configured the host is used instead.
    """

    _re_mention = re.compile(r"@(\w+)")
    _re_issue = re.compile(r"(#|gh-)(\d+)", re.IGNORECASE)

    def __init__(self, repository_url: str = "", host: str = "") -> None:
        self.host = host.rstrip("/") if host else "https://github.com"
        self.repository_url = repository_url.rstrip("/")

    def add_links(self, text: str) -> str:
        repo_url = self.repository_url or self.host
        text = self._re_mention.sub(lambda m: f"[@{m.group(1)}]({self.host}/{m.group(1)})", text)
        return self._re_issue.sub(
            lambda m: f"[{m.group(1)}{m.group(2)}]({repo_url}/issues/{m.group(2)})", text
        )

    def process_commit(self, commit: Commit) -> Optional[Commit]:
        commit.header = self.add_links(commit.header)
        commit.subject = self.add_links(commit.subject)
        commit.body = self.add_links(commit.body)
        for note in commit.notes:
            note.body = self.add_links(note.body)
        if commit.revert is not None:
            commit.revert.header = self.add_links(commit.revert.header)
        return commit

"""
Data models for parsed commits.

A :class:`Commit` is produced by :class:`~vc_changelog.parsing.commit_parser.CommitParser`
for every record of the git log. Header fields such as ``type``,
``scope`` and ``subject`` are filled from the configured header pattern;
capture groups bound to names the model does not declare end up in
:attr:`Commit.extra`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Dict, List, Optional


EPOCH = datetime.fromtimestamp(0, tz=timezone.utc)


@dataclass
class Hash:
    """Long and abbreviated object name of a commit."""

    long: str
    short: str


@dataclass
class Author:
    name: str
    email: str
    date: datetime = EPOCH


@dataclass
class Committer:
    name: str
    email: str
    date: datetime = EPOCH


@dataclass
class Contact:
    """A person named in a ``Co-authored-by`` or ``Signed-off-by`` trailer."""

    name: str
    email: str


@dataclass
class Ref:
    """Reference to an issue.

    ``action`` and ``source`` are empty for a bare reference such as
    ``#12``; ``Closes owner/repo#12`` sets both.
    """

    action: str = ""
    source: str = ""
    ref: str = ""


@dataclass
class Note:
    """An annotation such as ``BREAKING CHANGE: ...`` found in the body."""

    title: str
    body: str


@dataclass
class Merge:
    ref: str = ""
    source: str = ""
    extra: Dict[str, str] = field(default_factory=dict)


@dataclass
class Revert:
    header: str = ""
    extra: Dict[str, str] = field(default_factory=dict)


@dataclass
class JiraIssue:
    type: str
    summary: str
    description: str
    labels: List[str] = field(default_factory=list)


@dataclass
class Commit:
    """A single parsed commit.

    Attributes
    ----------
    hash : Hash
        Identity of the commit. Sub-commits share the parent's hash.
    header : str
        Raw subject line.
    type, scope, subject, jira_issue_id : str
        Fields bound from the header pattern. Empty when unbound.
    body : str
        Raw body with normalized line endings.
    trimmed_body : str
        Body without reference, mention, trailer and note lines.
    sub_commits : List[Commit]
        Additional headers found in the body when multiline commits are
        enabled (squash merges).
    extra : Dict[str, str]
        Header captures bound to names not declared above.
    """

    hash: Hash
    author: Optional[Author] = None
    committer: Optional[Committer] = None
    merge: Optional[Merge] = None
    revert: Optional[Revert] = None
    header: str = ""
    type: str = ""
    scope: str = ""
    subject: str = ""
    jira_issue_id: str = ""
    jira_issue: Optional[JiraIssue] = None
    body: str = ""
    trimmed_body: str = ""
    refs: List[Ref] = field(default_factory=list)
    notes: List[Note] = field(default_factory=list)
    mentions: List[str] = field(default_factory=list)
    co_authors: List[Contact] = field(default_factory=list)
    signers: List[Contact] = field(default_factory=list)
    changed_files: List[str] = field(default_factory=list)
    sub_commits: List["Commit"] = field(default_factory=list)
    extra: Dict[str, str] = field(default_factory=dict)

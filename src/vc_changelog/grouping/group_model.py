"""
Data models for changelog grouping.

A :class:`CommitGroup` collects the commits sharing one value of the
configured group-by field (for example every ``feat`` commit). A
:class:`NoteGroup` collects the notes sharing one title (for example
every ``BREAKING CHANGE``).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from vc_changelog.parsing.commit_model import Commit, Note


@dataclass
class CommitGroup:
    """Representation of a group of commits.

    Attributes
    ----------
    raw_title : str
        The group-by value exactly as found on the first commit.
    title : str
        Display title, from the configured title map or the capitalized
        raw title.
    commits : List[Commit]
        Commits in the group.
    """

    raw_title: str
    title: str
    commits: List[Commit] = field(default_factory=list)


@dataclass
class NoteGroup:
    """Notes sharing the same title."""

    title: str
    notes: List[Note] = field(default_factory=list)

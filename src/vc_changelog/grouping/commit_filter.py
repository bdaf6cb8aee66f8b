"""
Filtering of commits by configured field values.
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Optional, Sequence

from vc_changelog.fields.accessor import AccessorTable
from vc_changelog.parsing.commit_model import Commit


def expand_commits(commits: Iterable[Commit]) -> List[Commit]:
    """Return ``commits`` with each commit followed by its sub-commits."""
    expanded: List[Commit] = []
    for commit in commits:
        expanded.append(commit)
        expanded.extend(commit.sub_commits)
    return expanded


def _matches(value: str, allowed: Sequence[str], no_case_sensitive: bool) -> bool:
    if no_case_sensitive:
        value = value.lower()
        return any(value == candidate.lower() for candidate in allowed)
    return value in allowed


def commit_filter(
    commits: Iterable[Commit],
    filters: Dict[str, List[str]],
    no_case_sensitive: bool = False,
    accessors: Optional[AccessorTable] = None,
) -> List[Commit]:
    """Keep the commits whose fields match ``filters``.

    Squashed sub-commits are expanded first, so each is tested on its
    own. A commit is kept when, for every field path in ``filters``, the
    path resolves to a string equal to one of the allowed values. Paths
    that do not resolve, or resolve to something other than a string,
    exclude the commit. An empty ``filters`` keeps every commit.

    Parameters
    ----------
    commits : Iterable[Commit]
        Commits as returned by the parser.
    filters : Dict[str, List[str]]
        Field path to allowed values.
    no_case_sensitive : bool
        Compare values case-insensitively.
    accessors : AccessorTable, optional
        Pre-compiled accessors for the filter paths.

    Returns
    -------
    List[Commit]
        Surviving commits in their original order.
    """
    if accessors is None:
        accessors = AccessorTable.from_paths(filters)

    result: List[Commit] = []
    for commit in expand_commits(commits):
        include = True
        for path, allowed in filters.items():
            value, ok = accessors.get(commit, path)
            if not ok or not isinstance(value, str):
                include = False
                break
            if not _matches(value, allowed, no_case_sensitive):
                include = False
                break
        if include:
            result.append(commit)
    return result

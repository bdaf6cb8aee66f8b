"""
Grouping and ordering of parsed commits for a changelog.

:class:`CommitExtractor` splits the parsed commits into merge commits,
revert commits, commit groups keyed by a configurable field and note
groups keyed by note title, then orders the groups and their contents.
"""

from __future__ import annotations

import logging
import re
from functools import cmp_to_key
from typing import Any, Callable, Dict, List, NamedTuple, Optional, Tuple

from vc_changelog.config.options import CUSTOM_SORT, Options
from vc_changelog.fields.accessor import AccessorTable
from vc_changelog.grouping.commit_filter import commit_filter
from vc_changelog.grouping.group_model import CommitGroup, NoteGroup
from vc_changelog.parsing.commit_model import Commit, Note


logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())
    logger.propagate = False


_WORD_START = re.compile(r"(?<!\w)(\w)")


def title_case(text: str) -> str:
    """Upper-case the first letter of every word, leaving the rest as is."""
    return _WORD_START.sub(lambda m: m.group(1).upper(), text)


def _sort_by_less(items: List[Any], less: Callable[[Any, Any], bool]) -> None:
    def cmp(a: Any, b: Any) -> int:
        if less(a, b):
            return -1
        if less(b, a):
            return 1
        return 0

    items.sort(key=cmp_to_key(cmp))


class Extraction(NamedTuple):
    commit_groups: List[CommitGroup]
    merge_commits: List[Commit]
    revert_commits: List[Commit]
    note_groups: List[NoteGroup]


class CommitExtractor:
    """Build the grouped view of a list of commits.

    Parameters
    ----------
    options : Options
        Filter, group-by, title and sort settings.
    """

    def __init__(self, options: Options) -> None:
        self.options = options
        paths = [options.commit_group_by, options.commit_sort_by, *options.commit_filters]
        if options.commit_group_sort_by != CUSTOM_SORT:
            paths.append(options.commit_group_sort_by)
        self._accessors = AccessorTable.from_paths(paths)

    def extract(self, commits: List[Commit]) -> Extraction:
        """Group, classify and order ``commits``.

        Merge and revert commits are collected from the unexpanded input;
        a commit matching both patterns is only listed as a merge. Group
        and note membership is computed on the filtered, sub-commit
        expanded commits, and merge or revert commits never join a
        commit group.
        """
        opts = self.options
        commit_groups: List[CommitGroup] = []
        note_groups: List[NoteGroup] = []
        merge_commits: List[Commit] = []
        revert_commits: List[Commit] = []

        for commit in commits:
            if commit.merge is not None:
                merge_commits.append(commit)
            elif commit.revert is not None:
                revert_commits.append(commit)

        filtered = commit_filter(
            commits,
            opts.commit_filters,
            opts.no_case_sensitive,
            accessors=self._accessors,
        )

        for commit in filtered:
            if commit.merge is None and commit.revert is None:
                self._add_to_commit_groups(commit_groups, commit)
            for note in commit.notes:
                self._add_to_note_groups(note_groups, note)

        self._sort_commit_groups(commit_groups)
        self._sort_note_groups(note_groups)

        logger.debug(
            "Extracted %d commit groups, %d merges, %d reverts, %d note groups",
            len(commit_groups),
            len(merge_commits),
            len(revert_commits),
            len(note_groups),
        )
        return Extraction(commit_groups, merge_commits, revert_commits, note_groups)

    # ------------------------------------------------------------------
    # Grouping
    # ------------------------------------------------------------------
    def _group_title(self, commit: Commit) -> Tuple[str, str]:
        value, ok = self._accessors.get(commit, self.options.commit_group_by)
        if not ok or not isinstance(value, str):
            return "", ""
        title = self.options.commit_group_title_maps.get(value)
        if title is None:
            title = title_case(value)
        return value, title

    def _find_group(self, groups: List[CommitGroup], raw: str) -> Optional[CommitGroup]:
        if self.options.no_case_sensitive:
            raw = raw.lower()
            for group in groups:
                if group.raw_title.lower() == raw:
                    return group
            return None
        for group in groups:
            if group.raw_title == raw:
                return group
        return None

    def _add_to_commit_groups(self, groups: List[CommitGroup], commit: Commit) -> None:
        raw, title = self._group_title(commit)
        if not raw:
            return
        group = self._find_group(groups, raw)
        if group is not None:
            group.commits.append(commit)
        else:
            groups.append(CommitGroup(raw_title=raw, title=title, commits=[commit]))

    @staticmethod
    def _add_to_note_groups(groups: List[NoteGroup], note: Note) -> None:
        for group in groups:
            if group.title == note.title:
                group.notes.append(note)
                return
        groups.append(NoteGroup(title=note.title, notes=[note]))

    # ------------------------------------------------------------------
    # Sorting
    # ------------------------------------------------------------------
    def _sort_commit_groups(self, groups: List[CommitGroup]) -> None:
        opts = self.options

        if opts.commit_group_sort_by == CUSTOM_SORT:
            # Titles missing from the order list rank as index 0.
            order: Dict[str, int] = {t: i for i, t in enumerate(opts.commit_group_title_order)}
            _sort_by_less(
                groups,
                lambda a, b: order.get(a.raw_title, 0) < order.get(b.raw_title, 0),
            )
        else:
            sort_by = opts.commit_group_sort_by
            _sort_by_less(groups, lambda a, b: self._accessors.less(a, b, sort_by))

        for group in groups:
            _sort_by_less(
                group.commits,
                lambda a, b: self._accessors.less(a, b, opts.commit_sort_by),
            )

    @staticmethod
    def _sort_note_groups(groups: List[NoteGroup]) -> None:
        groups.sort(key=lambda g: g.title.lower())
        for group in groups:
            group.notes.sort(key=lambda n: n.title.lower())

"""
Options controlling commit parsing, filtering and grouping.

:class:`Options` is read-only input to the pipeline. Field paths
(``commit_group_by``, ``commit_sort_by``, filter keys, ...) name
attributes of :class:`~vc_changelog.parsing.commit_model.Commit` or
:class:`~vc_changelog.grouping.group_model.CommitGroup`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Dict, List, Optional

if TYPE_CHECKING:
    from vc_changelog.parsing.processors import CommitProcessor


DEFAULT_HEADER_PATTERN = r"^(\w*)(?:\(([\w\$\.\-\*\s]*)\))?\:\s(.*)$"
DEFAULT_MERGE_PATTERN = r"^Merge pull request #(\d+) from (.*)$"
DEFAULT_REVERT_PATTERN = r'^Revert "([\s\S]*)"$'

CUSTOM_SORT = "Custom"


@dataclass
class Options:
    """Configuration surface of the changelog pipeline.

    Attributes
    ----------
    processor : CommitProcessor, optional
        Post-processor applied to every parsed commit.
    paths : List[str]
        Path filters passed to ``git log``.
    commit_filters : Dict[str, List[str]]
        Field path to allowed values. All paths must match; any value of
        a path may match.
    commit_sort_by : str
        Field path used to order commits inside a group.
    commit_group_by : str
        Field path whose value names the group of a commit.
    commit_group_sort_by : str
        ``"Custom"`` to order groups by ``commit_group_title_order``,
        otherwise a field path of the group.
    header_pattern_maps, merge_pattern_maps, revert_pattern_maps : List[str]
        Field names bound to the capture groups of the matching pattern.
    jira_issue_description_pattern : str
        When set, the first capture group replaces the Jira description.
    """

    processor: Optional["CommitProcessor"] = None
    paths: List[str] = field(default_factory=list)
    commit_filters: Dict[str, List[str]] = field(default_factory=dict)
    commit_sort_by: str = "scope"
    commit_group_by: str = "type"
    commit_group_sort_by: str = "title"
    commit_group_title_order: List[str] = field(default_factory=list)
    commit_group_title_maps: Dict[str, str] = field(default_factory=dict)
    header_pattern: str = DEFAULT_HEADER_PATTERN
    header_pattern_maps: List[str] = field(default_factory=lambda: ["type", "scope", "subject"])
    issue_prefix: List[str] = field(default_factory=lambda: ["#"])
    ref_actions: List[str] = field(
        default_factory=lambda: [
            "close", "closes", "closed",
            "fix", "fixes", "fixed",
            "resolve", "resolves", "resolved",
        ]
    )
    merge_pattern: str = DEFAULT_MERGE_PATTERN
    merge_pattern_maps: List[str] = field(default_factory=lambda: ["ref", "source"])
    revert_pattern: str = DEFAULT_REVERT_PATTERN
    revert_pattern_maps: List[str] = field(default_factory=lambda: ["header"])
    note_keywords: List[str] = field(default_factory=lambda: ["BREAKING CHANGE"])
    no_case_sensitive: bool = False
    multiline_commit: bool = False
    jira_url: str = ""
    jira_username: str = ""
    jira_token: str = ""
    jira_type_maps: Dict[str, str] = field(default_factory=dict)
    jira_issue_description_pattern: str = ""

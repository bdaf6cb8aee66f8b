"""
Configuration loader for vc_changelog.

The changelog configuration is a JSON file named ``config.json`` in the
``.chglog/`` directory at the repository root. The ``CHGLOG_CONFIG``
environment variable, or an explicit path, overrides that location.
The loader validates the structure of the file and returns an
:class:`~vc_changelog.config.options.Options` instance.

If the configuration file is malformed, has values of the wrong type or
contains an invalid regular expression, a :class:`ConfigError` is
raised. A missing file at the default location yields the default
options; a missing file that was asked for explicitly is an error.
"""

from __future__ import annotations

import json
import logging
import os
import re
from pathlib import Path
from typing import Any, Dict, Optional

from vc_changelog.config.options import Options
from vc_changelog.parsing.processors import GitHubProcessor


logger = logging.getLogger(__name__)
# Attach a null handler to avoid "No handler" warnings in environments
# where logging is not configured. The CLI configures logging explicitly.
if not logger.handlers:
    logger.addHandler(logging.NullHandler())
    logger.propagate = False


CONFIG_ENV_VAR = "CHGLOG_CONFIG"
CONFIG_DIR_NAME = ".chglog"
CONFIG_FILE_NAME = "config.json"


class ConfigError(Exception):
    """Raised when the changelog configuration file is invalid."""

    pass


def _get_config_path(repo_root: Optional[Path], path: Optional[Path]) -> tuple:
    """Return the configuration path and whether it was requested explicitly."""
    if path is not None:
        return Path(path), True
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path), True
    root = repo_root if repo_root is not None else Path.cwd()
    return root / CONFIG_DIR_NAME / CONFIG_FILE_NAME, False


def _section(data: Dict[str, Any], key: str, where: str) -> Dict[str, Any]:
    value = data.get(key, {})
    if not isinstance(value, dict):
        raise ConfigError(f"'{where}{key}' must be an object")
    return value


def _string(data: Dict[str, Any], key: str, default: str, where: str) -> str:
    value = data.get(key, default)
    if not isinstance(value, str):
        raise ConfigError(f"'{where}{key}' must be a string")
    return value


def _string_list(data: Dict[str, Any], key: str, default: list, where: str) -> list:
    value = data.get(key, default)
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ConfigError(f"'{where}{key}' must be a list of strings")
    return list(value)


def _string_map(data: Dict[str, Any], key: str, where: str) -> Dict[str, str]:
    value = data.get(key, {})
    if not isinstance(value, dict) or not all(isinstance(v, str) for v in value.values()):
        raise ConfigError(f"'{where}{key}' must be an object of strings")
    return dict(value)


def _boolean(data: Dict[str, Any], key: str, where: str) -> bool:
    value = data.get(key, False)
    if not isinstance(value, bool):
        raise ConfigError(f"'{where}{key}' must be a boolean")
    return value


def _pattern(data: Dict[str, Any], key: str, default: str, where: str) -> str:
    value = _string(data, key, default, where)
    try:
        re.compile(value)
    except re.error as exc:
        raise ConfigError(f"'{where}{key}' is not a valid regular expression: {exc}") from exc
    return value


def build_options(data: Dict[str, Any]) -> Options:
    """Build :class:`Options` from the decoded JSON document ``data``.

    Raises
    ------
    ConfigError
        If any value has the wrong type or a pattern does not compile.
    """
    if not isinstance(data, dict):
        raise ConfigError("Configuration root must be an object")

    defaults = Options()
    opts = _section(data, "options", "")
    commits = _section(opts, "commits", "options.")
    groups = _section(opts, "commit_groups", "options.")
    header = _section(opts, "header", "options.")
    merges = _section(opts, "merges", "options.")
    reverts = _section(opts, "reverts", "options.")
    issues = _section(opts, "issues", "options.")
    refs = _section(opts, "refs", "options.")
    notes = _section(opts, "notes", "options.")
    jira = _section(opts, "jira", "options.")

    filters = commits.get("filters", {})
    if not isinstance(filters, dict) or not all(
        isinstance(v, list) and all(isinstance(s, str) for s in v) for v in filters.values()
    ):
        raise ConfigError("'options.commits.filters' must map field paths to lists of strings")

    options = Options(
        paths=_string_list(opts, "paths", defaults.paths, "options."),
        multiline_commit=_boolean(opts, "multiline_commit", "options."),
        no_case_sensitive=_boolean(opts, "no_case_sensitive", "options."),
        commit_filters={k: list(v) for k, v in filters.items()},
        commit_sort_by=_string(commits, "sort_by", defaults.commit_sort_by, "options.commits."),
        commit_group_by=_string(groups, "group_by", defaults.commit_group_by, "options.commit_groups."),
        commit_group_sort_by=_string(groups, "sort_by", defaults.commit_group_sort_by, "options.commit_groups."),
        commit_group_title_order=_string_list(groups, "title_order", [], "options.commit_groups."),
        commit_group_title_maps=_string_map(groups, "title_maps", "options.commit_groups."),
        header_pattern=_pattern(header, "pattern", defaults.header_pattern, "options.header."),
        header_pattern_maps=_string_list(header, "pattern_maps", defaults.header_pattern_maps, "options.header."),
        merge_pattern=_pattern(merges, "pattern", defaults.merge_pattern, "options.merges."),
        merge_pattern_maps=_string_list(merges, "pattern_maps", defaults.merge_pattern_maps, "options.merges."),
        revert_pattern=_pattern(reverts, "pattern", defaults.revert_pattern, "options.reverts."),
        revert_pattern_maps=_string_list(reverts, "pattern_maps", defaults.revert_pattern_maps, "options.reverts."),
        issue_prefix=_string_list(issues, "prefix", defaults.issue_prefix, "options.issues."),
        ref_actions=_string_list(refs, "actions", defaults.ref_actions, "options.refs."),
        note_keywords=_string_list(notes, "keywords", defaults.note_keywords, "options.notes."),
        jira_url=_string(jira, "url", "", "options.jira."),
        jira_username=_string(jira, "username", "", "options.jira."),
        jira_token=_string(jira, "token", "", "options.jira."),
        jira_type_maps=_string_map(jira, "type_maps", "options.jira."),
        jira_issue_description_pattern=_pattern(
            jira, "issue_description_pattern", "", "options.jira."
        ),
    )

    style = _string(data, "style", "none", "")
    info = _section(data, "info", "")
    if style == "github":
        options.processor = GitHubProcessor(
            repository_url=_string(info, "repository_url", "", "info."),
        )
    elif style != "none":
        raise ConfigError(f"Unsupported style '{style}'")

    return options


def load_config(repo_root: Optional[Path] = None, path: Optional[Path] = None) -> Options:
    """Load the changelog configuration and return the resulting options.

    Args:
        repo_root: Repository root used to locate ``.chglog/config.json``.
                   Defaults to the current working directory.
        path: Explicit configuration file. Takes precedence over the
              ``CHGLOG_CONFIG`` environment variable.

    Returns:
        The validated :class:`Options`.

    Raises:
        ConfigError: If the configuration file is missing (when requested
            explicitly), malformed, or invalid.
    """
    config_path, explicit = _get_config_path(repo_root, path)

    if not config_path.exists():
        if explicit:
            logger.error("Configuration file '%s' does not exist", config_path)
            raise ConfigError(f"Missing changelog configuration file: {config_path}")
        logger.debug("No configuration at %s; using defaults", config_path)
        return Options()

    try:
        content = config_path.read_text(encoding="utf-8")
        data: Dict[str, Any] = json.loads(content)
    except (OSError, json.JSONDecodeError) as exc:
        logger.error("Failed to read or parse configuration file: %s", exc)
        raise ConfigError(f"Invalid JSON in {config_path.name}: {exc}") from exc

    options = build_options(data)
    logger.debug("Loaded changelog configuration from: %s", config_path)
    return options

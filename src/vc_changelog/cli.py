"""
Command line interface for the vc_changelog tool.

This module defines the ``main`` function which is used as the entry
point when executing the ``chglog`` command. It locates the repository,
loads the configuration, resolves the tag query, parses and groups the
commits and prints a Markdown summary.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional, Tuple

import click

from vc_changelog import __version__
from vc_changelog.config.loader import ConfigError, load_config
from vc_changelog.errors import ChangelogError
from vc_changelog.grouping.commit_extractor import CommitExtractor, Extraction
from vc_changelog.jira.jira_client import JiraClient
from vc_changelog.parsing.commit_model import Commit
from vc_changelog.parsing.commit_parser import CommitParser
from vc_changelog.vcs.git_client import GitClient, GitError
from vc_changelog.vcs.revision import resolve_revision

# Create a module-level logger. Attach a null handler and disable
# propagation; the command configures logging explicitly.
logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())
    logger.propagate = False


# ---------------------------------------------------------------------------
# Exit codes
# ---------------------------------------------------------------------------
EXIT_SUCCESS = 0
EXIT_GENERIC_ERROR = 1
EXIT_NO_REPO = 3
EXIT_CONFIG_ERROR = 5
EXIT_VCS_FAILURE = 6
EXIT_QUERY_ERROR = 9


def print_info(message: str, indent: int = 0):
    """Print an info message."""
    prefix = "  " * indent
    click.echo(f"{prefix}ℹ {message}", err=True)


def print_error(message: str, indent: int = 0):
    """Print an error message."""
    prefix = "  " * indent
    click.echo(f"{prefix}✗ {message}", err=True)


# ---------------------------------------------------------------------------
# Output
# ---------------------------------------------------------------------------

def _commit_line(commit: Commit) -> str:
    scope = f"**{commit.scope}:** " if commit.scope else ""
    subject = commit.subject or commit.header
    return f"- {scope}{subject} ({commit.hash.short})"


def format_summary(extraction: Extraction) -> str:
    """Render ``extraction`` as a plain Markdown document."""
    lines: List[str] = []
    for group in extraction.commit_groups:
        lines.append(f"### {group.title}")
        lines.extend(_commit_line(c) for c in group.commits)
        lines.append("")
    if extraction.revert_commits:
        lines.append("### Reverts")
        lines.extend(f"- {c.revert.header}" for c in extraction.revert_commits if c.revert)
        lines.append("")
    if extraction.merge_commits:
        lines.append("### Pull Requests")
        lines.extend(f"- {c.header}" for c in extraction.merge_commits)
        lines.append("")
    for note_group in extraction.note_groups:
        lines.append(f"### {note_group.title}")
        lines.extend(f"{note.body}\n" for note in note_group.notes)
    return "\n".join(lines).rstrip() + "\n"


# ---------------------------------------------------------------------------
# Core functionality
# ---------------------------------------------------------------------------

def build_pipeline(repo_root: Path, options) -> Tuple[GitClient, CommitParser, CommitExtractor]:
    """Create the Git client, parser and extractor for ``options``."""
    client = GitClient(repo_root)
    jira_client: Optional[JiraClient] = None
    if options.jira_url:
        jira_client = JiraClient(
            url=options.jira_url,
            username=options.jira_username,
            token=options.jira_token,
        )
    parser = CommitParser(client, options, jira_client=jira_client)
    return client, parser, CommitExtractor(options)


@click.command()
@click.argument("query", required=False, default="")
@click.option("--config", "config_path", type=click.Path(path_type=Path), help="Path to the configuration file.")
@click.option("--path", "paths", multiple=True, help="Restrict the log to commits touching PATH (repeatable).")
@click.option("--verbose", is_flag=True, help="Enable verbose (debug) output.")
@click.version_option(version=__version__, prog_name="chglog")
def main(query: str, config_path: Optional[Path], paths: Tuple[str, ...], verbose: bool) -> None:
    """Print a changelog summary for QUERY.

    QUERY selects tags: ``v1..v2``, ``v1..``, ``..v2`` or a single tag.
    Without QUERY the whole history is used.
    """
    # Use force=True to ensure handlers are reconfigured on subsequent
    # invocations (important for tests).
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(levelname)s: %(message)s",
        force=True,
    )

    repo_root = GitClient.find_repo_root(Path.cwd())
    if repo_root is None:
        print_error("Current directory is not inside a Git repository.")
        raise click.exceptions.Exit(EXIT_NO_REPO)
    logger.debug("Repository root: %s", repo_root)

    try:
        options = load_config(repo_root, config_path)
    except ConfigError as exc:
        print_error(f"Configuration error: {exc}")
        raise click.exceptions.Exit(EXIT_CONFIG_ERROR)
    if paths:
        options.paths = list(paths)

    client, parser, extractor = build_pipeline(repo_root, options)

    try:
        revision = resolve_revision(query, client.tags() if query else [])
        commits = parser.parse(revision)
    except ChangelogError as exc:
        print_error(str(exc))
        raise click.exceptions.Exit(EXIT_QUERY_ERROR)
    except GitError as exc:
        print_error(f"VCS error: {exc}")
        raise click.exceptions.Exit(EXIT_VCS_FAILURE)
    except Exception as exc:
        logger.exception("Unhandled error: %s", exc)
        print_error(f"Unexpected error: {exc}")
        raise click.exceptions.Exit(EXIT_GENERIC_ERROR)

    print_info(f"Parsed {len(commits)} commit{'s' if len(commits) != 1 else ''}")
    click.echo(format_summary(extractor.extract(commits)), nl=False)
    raise click.exceptions.Exit(EXIT_SUCCESS)

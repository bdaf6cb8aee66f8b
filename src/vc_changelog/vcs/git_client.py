"""
Git client implementation for vc_changelog.

This module wraps the Git commands the changelog pipeline needs:
reading the log in a structured format, listing the files touched by a
commit and listing tags. All subprocess calls go through
:meth:`GitClient._run` so that unit tests can mock them easily.
"""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path
from typing import List, Optional, Sequence


logger = logging.getLogger(__name__)
# Attach a null handler to avoid logging errors when the root logger is not
# configured. Logs will propagate to the root when configured by the CLI.
if not logger.handlers:
    logger.addHandler(logging.NullHandler())
    logger.propagate = False


class GitError(Exception):
    """Raised when a Git command fails."""

    pass


class GitClient:
    """Client for reading history from a Git repository."""

    def __init__(self, repo_root: Path) -> None:
        self.repo_root = repo_root

    # ------------------------------------------------------------------
    # Static helpers
    # ------------------------------------------------------------------
    @staticmethod
    def find_repo_root(start: Path) -> Optional[Path]:
        """Find the root of the Git repository starting from ``start``.

        Walk upwards until a ``.git`` directory is found or the filesystem
        root is reached.
        """
        current = start.resolve()
        while True:
            if (current / ".git").exists():
                return current
            if current.parent == current:
                # reached filesystem root
                return None
            current = current.parent

    # ------------------------------------------------------------------
    # Basic Git commands
    # ------------------------------------------------------------------
    def _run(self, args: List[str], check: bool = True) -> subprocess.CompletedProcess:
        """Run a Git command in the repository root.

        Raises
        ------
        GitError
            If the command exits with a non-zero status when ``check`` is True.
        """
        full_cmd = ["git"] + args
        logger.debug("Executing Git command: %s", " ".join(full_cmd))
        try:
            result = subprocess.run(
                full_cmd,
                cwd=self.repo_root,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
                encoding='utf-8',
                errors='replace',  # Replace invalid characters instead of failing
            )
        except UnicodeDecodeError as e:
            logger.error("Unicode decode error in Git output: %s", e)
            raise GitError(f"Failed to decode Git output: {e}") from e
        except OSError as e:
            logger.error("Failed to execute Git: %s", e)
            raise GitError(f"Failed to execute Git: {e}") from e

        if check and result.returncode != 0:
            logger.error(
                "Git command failed: %s\nSTDOUT: %s\nSTDERR: %s",
                " ".join(full_cmd),
                result.stdout,
                result.stderr,
            )
            raise GitError(result.stderr.strip() or result.stdout.strip())
        return result

    # ------------------------------------------------------------------
    # History
    # ------------------------------------------------------------------
    def log(self, revision: str, pretty: str, paths: Sequence[str] = ()) -> str:
        """Return the output of ``git log`` for ``revision``.

        Parameters
        ----------
        revision : str
            Revision range such as ``v1.0..v1.1``. An empty string reads
            the history reachable from HEAD.
        pretty : str
            Format passed via ``--pretty``.
        paths : Sequence[str]
            Optional path filters appended after ``--``.

        Raises
        ------
        GitError
            If the log command fails.
        """
        args = ["log"]
        if revision:
            args.append(revision)
        args += ["--no-decorate", f"--pretty={pretty}"]
        if paths:
            args.append("--")
            args.extend(paths)
        return self._run(args, check=True).stdout

    def changed_files(self, commit_hash: str) -> List[str]:
        """Return the paths touched by ``commit_hash``.

        Raises
        ------
        GitError
            If the diff-tree command fails.
        """
        result = self._run(
            ["diff-tree", "--no-commit-id", "--name-only", "-r", commit_hash],
            check=True,
        )
        output = result.stdout.strip()
        return output.split("\n") if output else []

    def tags(self) -> List[str]:
        """Return tag names ordered from oldest to newest."""
        result = self._run(["tag", "--list", "--sort=creatordate"], check=True)
        return [line.strip() for line in result.stdout.splitlines() if line.strip()]

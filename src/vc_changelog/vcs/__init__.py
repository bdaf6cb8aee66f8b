"""
Version control system (VCS) integrations.

This package contains the Git client used to read the commit log and
the files changed by each commit, and the resolution of tag queries
into revision ranges.
"""

from .git_client import GitClient, GitError  # noqa: F401
from .revision import resolve_revision  # noqa: F401

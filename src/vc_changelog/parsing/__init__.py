"""
Commit log parsing.

:class:`CommitParser` turns the output of ``git log`` into
:class:`Commit` records; see :mod:`vc_changelog.parsing.commit_parser`.
"""

from .commit_model import Commit, Contact, Hash, Note, Ref  # noqa: F401
from .commit_parser import LOG_FORMAT, CommitParser  # noqa: F401
from .processors import CommitProcessor, GitHubProcessor  # noqa: F401

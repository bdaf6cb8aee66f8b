"""
Filtering and grouping of parsed commits.

See :mod:`vc_changelog.grouping.commit_filter` and
:mod:`vc_changelog.grouping.commit_extractor` for details.
"""

from .commit_extractor import CommitExtractor, Extraction  # noqa: F401
from .commit_filter import commit_filter  # noqa: F401
from .group_model import CommitGroup, NoteGroup  # noqa: F401

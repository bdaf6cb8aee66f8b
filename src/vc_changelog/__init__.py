"""
Top-level package for vc_changelog.

This package turns Git history into grouped, classified commit records
for changelogs. The command line entry point lives in
``vc_changelog.cli``.
"""

__all__ = ["__version__"]

__version__ = "0.1.0"

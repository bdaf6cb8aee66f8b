"""
Runtime field access for commit and group records.

Filtering and sorting are configured with dotted field paths such as
``type`` or ``author.name``. See :mod:`vc_changelog.fields.accessor`.
"""

from .accessor import AccessorTable, TypeMismatchError, compare, compile_path, resolve  # noqa: F401

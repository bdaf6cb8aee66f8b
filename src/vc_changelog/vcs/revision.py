"""
Resolution of tag queries into ``git log`` revision ranges.

Supported queries, given tags ``v1 < v2 < v3``:

- ``""``: the whole history
- ``"v1..v3"``: commits after ``v1`` up to ``v3``
- ``"v2.."``: commits after ``v2`` up to ``HEAD``
- ``"..v2"``: the whole history up to ``v2``
- ``"v2"``: commits after the previous tag (``v1``) up to ``v2``
"""

from __future__ import annotations

from typing import Sequence

from vc_changelog.errors import NoGitTagError, NotFoundTagError, QueryParseError


def _check_tag(tag: str, tags: Sequence[str]) -> str:
    if tag not in tags:
        raise NotFoundTagError(tag)
    return tag


def resolve_revision(query: str, tags: Sequence[str]) -> str:
    """Translate ``query`` into a revision range for ``git log``.

    Parameters
    ----------
    query : str
        Tag query; see the module docstring.
    tags : Sequence[str]
        Existing tags ordered from oldest to newest.

    Raises
    ------
    NoGitTagError
        If ``query`` names tags but the repository has none.
    NotFoundTagError
        If a named tag does not exist.
    QueryParseError
        If the query is malformed.
    """
    query = query.strip()
    if not query:
        return ""
    if not tags:
        raise NoGitTagError()

    if ".." in query:
        parts = query.split("..")
        if len(parts) != 2 or not any(parts):
            raise QueryParseError(query)
        old, new = parts
        if not old:
            return _check_tag(new, tags)
        _check_tag(old, tags)
        if not new:
            return f"{old}..HEAD"
        return f"{old}..{_check_tag(new, tags)}"

    _check_tag(query, tags)
    index = list(tags).index(query)
    if index == 0:
        return query
    return f"{tags[index - 1]}..{query}"

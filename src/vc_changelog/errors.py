"""
Named failures surfaced to callers of the changelog pipeline.
"""


class ChangelogError(Exception):
    """Base class for failures resolving what to put in a changelog."""

    pass


class NotFoundTagError(ChangelogError):
    """Raised when a query names a tag that does not exist."""

    def __init__(self, tag: str = "") -> None:
        self.tag = tag
        super().__init__(f"could not find the tag: {tag}" if tag else "could not find the tag")


class QueryParseError(ChangelogError):
    """Raised when a revision query cannot be parsed."""

    def __init__(self, query: str = "") -> None:
        self.query = query
        super().__init__(f"failed to parse the query: {query!r}")


class NoGitTagError(ChangelogError):
    """Raised when a tag query is made against a repository without tags."""

    def __init__(self) -> None:
        super().__init__("git-tag does not exist")

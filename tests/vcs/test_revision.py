import unittest

from vc_changelog.errors import NoGitTagError, NotFoundTagError, QueryParseError
from vc_changelog.vcs.revision import resolve_revision

TAGS = ["v1", "v2", "v3"]


class TestResolveRevision(unittest.TestCase):
    def test_empty_query_is_full_history(self) -> None:
        self.assertEqual(resolve_revision("", []), "")

    def test_ranges(self) -> None:
        self.assertEqual(resolve_revision("v1..v3", TAGS), "v1..v3")
        self.assertEqual(resolve_revision("v2..", TAGS), "v2..HEAD")
        self.assertEqual(resolve_revision("..v2", TAGS), "v2")

    def test_single_tag(self) -> None:
        self.assertEqual(resolve_revision("v2", TAGS), "v1..v2")
        self.assertEqual(resolve_revision("v1", TAGS), "v1")

    def test_errors(self) -> None:
        with self.assertRaises(NoGitTagError):
            resolve_revision("v1", [])
        with self.assertRaises(NotFoundTagError):
            resolve_revision("v9", TAGS)
        with self.assertRaises(NotFoundTagError):
            resolve_revision("v1..v9", TAGS)
        with self.assertRaises(QueryParseError):
            resolve_revision("..", TAGS)
        with self.assertRaises(QueryParseError):
            resolve_revision("v1..v2..v3", TAGS)


if __name__ == "__main__":
    unittest.main()

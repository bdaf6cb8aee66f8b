import unittest
from pathlib import Path
from unittest.mock import patch

from click.testing import CliRunner

import vc_changelog.cli as cli
from vc_changelog.config.options import Options
from vc_changelog.parsing.commit_parser import LOG_DELIMITER, LOG_SEPARATOR
from vc_changelog.vcs.git_client import GitError


def make_record(short: str, subject: str, body: str = "") -> str:
    fields = [
        f"HASH:{short}{short}\t{short}",
        "AUTHOR:Alice\talice@example.com\t1500000000",
        "COMMITTER:Alice\talice@example.com\t1500000000",
        f"SUBJECT:{subject}",
        f"BODY:{body}",
    ]
    return LOG_SEPARATOR + LOG_DELIMITER.join(fields) + "\n"


class DummyGitClient:
    def __init__(self, root):
        self.root = root
        self.output = ""
        self.tag_list = ["v1.0", "v1.1"]
        self.revisions = []
        self.log_error = None

    def log(self, revision, pretty, paths=()):
        if self.log_error is not None:
            raise self.log_error
        self.revisions.append((revision, list(paths)))
        return self.output

    def changed_files(self, commit_hash):
        return []

    def tags(self):
        return self.tag_list

    @staticmethod
    def find_repo_root(start):
        return Path("/repo")


class TestCLI(unittest.TestCase):
    def invoke(self, args, dummy, options=None):
        runner = CliRunner()
        with patch.object(cli, "GitClient") as git_cls:
            git_cls.return_value = dummy
            git_cls.find_repo_root.return_value = Path("/repo")
            with patch.object(cli, "load_config", return_value=options or Options()):
                return runner.invoke(cli.main, args)

    def test_summary_output(self) -> None:
        dummy = DummyGitClient(Path("/repo"))
        dummy.output = (
            make_record("aaa", "feat(core): add parser", "BREAKING CHANGE: new format")
            + make_record("bbb", "fix: handle empty log")
            + make_record("ccc", "Merge pull request #5 from acme/branch")
        )
        result = self.invoke(["v1.1"], dummy)
        self.assertEqual(result.exit_code, cli.EXIT_SUCCESS, result.output)
        self.assertEqual(dummy.revisions, [("v1.0..v1.1", [])])
        self.assertIn("### Feat", result.output)
        self.assertIn("- **core:** add parser (aaa)", result.output)
        self.assertIn("### Fix", result.output)
        self.assertIn("### Pull Requests", result.output)
        self.assertIn("### BREAKING CHANGE", result.output)
        self.assertIn("new format", result.output)

    def test_path_option(self) -> None:
        dummy = DummyGitClient(Path("/repo"))
        result = self.invoke(["--path", "src", "--path", "docs"], dummy)
        self.assertEqual(result.exit_code, cli.EXIT_SUCCESS, result.output)
        self.assertEqual(dummy.revisions, [("", ["src", "docs"])])

    def test_unknown_tag(self) -> None:
        dummy = DummyGitClient(Path("/repo"))
        result = self.invoke(["v9.9"], dummy)
        self.assertEqual(result.exit_code, cli.EXIT_QUERY_ERROR)
        self.assertEqual(dummy.revisions, [])

    def test_git_failure(self) -> None:
        dummy = DummyGitClient(Path("/repo"))
        dummy.log_error = GitError("fatal")
        result = self.invoke([], dummy)
        self.assertEqual(result.exit_code, cli.EXIT_VCS_FAILURE)

    def test_unexpected_failure(self) -> None:
        dummy = DummyGitClient(Path("/repo"))
        dummy.log_error = RuntimeError("boom")
        result = self.invoke([], dummy)
        self.assertEqual(result.exit_code, cli.EXIT_GENERIC_ERROR)
        self.assertIn("Unexpected error: boom", result.output)

    def test_config_error(self) -> None:
        runner = CliRunner()
        with patch.object(cli.GitClient, "find_repo_root", return_value=Path("/repo")):
            with patch.object(cli, "load_config", side_effect=cli.ConfigError("bad")):
                result = runner.invoke(cli.main, [])
        self.assertEqual(result.exit_code, cli.EXIT_CONFIG_ERROR)

    def test_no_repo(self) -> None:
        runner = CliRunner()
        with patch.object(cli.GitClient, "find_repo_root", return_value=None):
            result = runner.invoke(cli.main, [])
        self.assertEqual(result.exit_code, cli.EXIT_NO_REPO)


if __name__ == "__main__":
    unittest.main()

import subprocess
import unittest
from pathlib import Path
from types import SimpleNamespace
from unittest.mock import patch

from vc_changelog.vcs.git_client import GitClient, GitError


class DummyProc(SimpleNamespace):
    returncode: int = 0
    stdout: str = ""
    stderr: str = ""


class TestGitClient(unittest.TestCase):
    def test_log_builds_arguments(self) -> None:
        calls = []

        def fake_run(self, args, check=True):
            calls.append(args)
            return DummyProc(returncode=0, stdout="OUT", stderr="")

        with patch.object(GitClient, "_run", autospec=True) as mock_run:
            mock_run.side_effect = fake_run
            client = GitClient(Path("/repo"))
            self.assertEqual(client.log("v1..v2", "FMT", ["src"]), "OUT")
            client.log("", "FMT")
        self.assertEqual(calls[0], ["log", "v1..v2", "--no-decorate", "--pretty=FMT", "--", "src"])
        self.assertEqual(calls[1], ["log", "--no-decorate", "--pretty=FMT"])

    def test_changed_files(self) -> None:
        def fake_run(self, args, check=True):
            if args[0] == "diff-tree":
                out = "a.py\nsrc/b.py\n" if args[-1] == "abc" else ""
                return DummyProc(returncode=0, stdout=out, stderr="")
            raise AssertionError(f"Unexpected git command: {args}")

        with patch.object(GitClient, "_run", autospec=True) as mock_run:
            mock_run.side_effect = fake_run
            client = GitClient(Path("/repo"))
            self.assertEqual(client.changed_files("abc"), ["a.py", "src/b.py"])
            self.assertEqual(client.changed_files("empty"), [])

    def test_tags(self) -> None:
        with patch.object(GitClient, "_run", return_value=DummyProc(stdout="v1\n\nv2\n")):
            self.assertEqual(GitClient(Path("/repo")).tags(), ["v1", "v2"])

    def test_run_raises_on_failure(self) -> None:
        proc = DummyProc(returncode=128, stdout="", stderr="fatal: bad revision")
        with patch("subprocess.run", return_value=proc):
            with self.assertRaises(GitError) as ctx:
                GitClient(Path("/repo")).log("nope", "FMT")
        self.assertIn("bad revision", str(ctx.exception))

    def test_run_wraps_missing_git(self) -> None:
        with patch("subprocess.run", side_effect=FileNotFoundError("git")):
            with self.assertRaises(GitError):
                GitClient(Path("/repo")).tags()

    def test_run_passes_repo_root(self) -> None:
        with patch("subprocess.run", return_value=DummyProc(returncode=0)) as mock_run:
            GitClient(Path("/repo")).changed_files("abc")
        args, kwargs = mock_run.call_args
        self.assertEqual(args[0][:2], ["git", "diff-tree"])
        self.assertEqual(kwargs["cwd"], Path("/repo"))
        self.assertEqual(kwargs["stdout"], subprocess.PIPE)

    def test_find_repo_root(self) -> None:
        with patch("pathlib.Path.exists", lambda self: str(self) == "/repo/.git"):
            self.assertEqual(GitClient.find_repo_root(Path("/repo/src/pkg")), Path("/repo"))
        with patch("pathlib.Path.exists", lambda self: False):
            self.assertIsNone(GitClient.find_repo_root(Path("/repo/src")))


if __name__ == "__main__":
    unittest.main()

"""
Unit tests for projinit.utils module
"""
import subprocess
import tempfile
import unittest
from unittest.mock import patch

from projinit.utils import (
    git_config,
    git_describe,
    git_origin,
    github_url,
    parse_repo_url,
    run_command,
)


class TestRunCommand(unittest.TestCase):
    """Test the run_command utility function"""

    def test_run_command_capture_output(self):
        """Test run_command with capture_output=True"""
        result = run_command("echo 'test'", capture_output=True)
        self.assertEqual(result, "test")

    def test_run_command_no_capture(self):
        """Test run_command with capture_output=False"""
        result = run_command("echo 'test'", capture_output=False)
        self.assertIsNone(result)

    def test_run_command_failure_unchecked(self):
        """Test run_command with failing command and check=False"""
        result = run_command("false", capture_output=True, check=False, log_stderr=False)
        self.assertIsNone(result)

    def test_run_command_failure_checked(self):
        """Test run_command raises on failure when check=True"""
        with self.assertRaises(subprocess.CalledProcessError):
            run_command("exit 3", capture_output=True, log_stderr=False)

    def test_run_command_with_cwd(self):
        """Test run_command with different working directory"""
        with tempfile.TemporaryDirectory() as temp_dir:
            result = run_command("pwd -P", cwd=temp_dir, capture_output=True)
            self.assertEqual(result, subprocess.run(
                "pwd -P", shell=True, cwd=temp_dir, capture_output=True, text=True
            ).stdout.strip())


class TestGithubUrl(unittest.TestCase):
    """Test GitHub URL generation"""

    def test_supported_forms(self):
        for uri in (
            "git@github.com:owner/repo.git",
            "git://github.com/owner/repo.git",
            "https://github.com/owner/repo",
            "https://github.com/owner/repo/",
            "ssh://git@github.com/owner/repo.git",
        ):
            with self.subTest(uri=uri):
                self.assertEqual(github_url(uri), "https://github.com/owner/repo")

    def test_suffix(self):
        self.assertEqual(
            github_url("git@github.com:owner/repo.git", "/issues"),
            "https://github.com/owner/repo/issues",
        )

    def test_not_github(self):
        self.assertIsNone(github_url("https://gitlab.com/owner/repo.git"))
        self.assertIsNone(github_url(None))
        self.assertIsNone(github_url(""))

    def test_parse_repo_url(self):
        self.assertEqual(parse_repo_url("git@github.com:owner/repo.git"), ("owner", "repo"))
        self.assertEqual(parse_repo_url("https://example.com/x"), (None, None))


class TestGitQueries(unittest.TestCase):
    """Test git helpers with run_command mocked"""

    @patch("projinit.utils.run_command")
    def test_git_origin(self, mock_run_command):
        mock_run_command.return_value = (
            "upstream\thttps://github.com/up/repo.git (fetch)\n"
            "origin\tgit@github.com:me/repo.git (fetch)\n"
            "origin\tgit@github.com:me/repo.git (push)"
        )

        self.assertEqual(git_origin("/work"), "git@github.com:me/repo.git")
        mock_run_command.assert_called_once_with(
            "git remote -v", cwd="/work", capture_output=True, check=False, log_stderr=False
        )

    @patch("projinit.utils.run_command")
    def test_git_origin_missing(self, mock_run_command):
        mock_run_command.return_value = "upstream\thttps://github.com/up/repo.git (fetch)"
        self.assertIsNone(git_origin())

        mock_run_command.return_value = None
        self.assertIsNone(git_origin())

    @patch("projinit.utils.run_command")
    def test_git_config(self, mock_run_command):
        mock_run_command.return_value = "Ada Lovelace"
        self.assertEqual(git_config("user.name"), "Ada Lovelace")
        mock_run_command.assert_called_once_with(
            "git config --get user.name", cwd=".", capture_output=True, check=False, log_stderr=False
        )

    @patch("projinit.utils.run_command")
    def test_git_config_unset(self, mock_run_command):
        mock_run_command.return_value = ""
        self.assertIsNone(git_config("github.user"))

    @patch("projinit.utils.run_command")
    def test_git_describe(self, mock_run_command):
        mock_run_command.return_value = "v1.0.0-2-gdeadbee"
        self.assertEqual(git_describe(), "v1.0.0-2-gdeadbee")


if __name__ == '__main__':
    unittest.main()

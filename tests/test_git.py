"""Tests for the git remote/identity adapter."""

import shutil
import subprocess
from pathlib import Path
from unittest.mock import MagicMock, call, patch

import pytest

from ghswitch.core.errors import CommandFailed
from ghswitch.core.models import AuthMethod
from ghswitch.infrastructure import git

requires_git = pytest.mark.skipif(shutil.which("git") is None, reason="git not installed")


class TestParseRepoFromUrl:
    """URL shapes recognized by parse_repo_from_url."""

    def test_scp_like_ssh(self):
        assert git.parse_repo_from_url("git@github.com:owner/repo.git") == "owner/repo.git"

    def test_ssh_protocol(self):
        assert git.parse_repo_from_url("ssh://git@github.com/owner/repo.git") == "owner/repo.git"

    def test_https(self):
        assert git.parse_repo_from_url("https://github.com/owner/repo") == "owner/repo"

    def test_http(self):
        assert git.parse_repo_from_url("http://example.com/owner/repo.git") == "owner/repo.git"

    def test_scp_like_strips_leading_slash(self):
        assert git.parse_repo_from_url("git@github.com:/owner/repo") == "owner/repo"

    @pytest.mark.parametrize("url", ["file:///tmp/owner/repo", "/srv/git/repo.git", "", None])
    def test_unknown_shapes(self, url):
        assert git.parse_repo_from_url(url) is None


class TestSuffixHelpers:
    def test_with_git_suffix_adds(self):
        assert git.with_git_suffix("owner/repo") == "owner/repo.git"

    def test_with_git_suffix_idempotent(self):
        assert git.with_git_suffix("owner/repo.git") == "owner/repo.git"
        assert git.with_git_suffix(git.with_git_suffix("a/b")) == "a/b.git"

    def test_strip_git_suffix(self):
        assert git.strip_git_suffix("owner/repo.git") == "owner/repo"
        assert git.strip_git_suffix("owner/repo") == "owner/repo"


class TestClassifyRemote:
    def test_ssh_shapes(self):
        assert git.classify_remote("git@github.com:o/r.git") is AuthMethod.SSH
        assert git.classify_remote("ssh://git@github.com/o/r.git") is AuthMethod.SSH

    def test_https(self):
        assert git.classify_remote("https://github.com/o/r") is AuthMethod.TOKEN

    def test_other(self):
        assert git.classify_remote("file:///tmp/r") is None
        assert git.classify_remote(None) is None


class TestGitCommands:
    """Adapters over subprocess.run."""

    @patch("subprocess.run")
    def test_is_git_repo_true(self, mock_run, tmp_path):
        mock_run.return_value = MagicMock(returncode=0, stdout="true\n", stderr="")

        assert git.is_git_repo(tmp_path) is True
        assert mock_run.call_args[0][0] == ["git", "rev-parse", "--is-inside-work-tree"]
        assert mock_run.call_args[1]["cwd"] == str(tmp_path)

    @patch("subprocess.run")
    def test_is_git_repo_nonzero(self, mock_run, tmp_path):
        mock_run.return_value = MagicMock(returncode=128, stdout="", stderr="fatal: not a git repository")

        assert git.is_git_repo(tmp_path) is False

    @patch("subprocess.run", side_effect=FileNotFoundError("git"))
    def test_is_git_repo_git_missing(self, mock_run, tmp_path):
        assert git.is_git_repo(tmp_path) is False

    @patch("subprocess.run")
    def test_get_remote_url_trims(self, mock_run):
        mock_run.return_value = MagicMock(returncode=0, stdout="git@github.com:o/r.git\n", stderr="")

        assert git.get_remote_url("origin", "/repo") == "git@github.com:o/r.git"

    @patch("subprocess.run")
    def test_get_remote_url_missing_remote(self, mock_run):
        mock_run.return_value = MagicMock(returncode=2, stdout="", stderr="error: No such remote 'origin'")

        assert git.get_remote_url("origin", "/repo") is None

    @patch("ghswitch.infrastructure.git.run_command")
    def test_set_local_identity_skips_blanks(self, mock_run):
        git.set_local_git_identity("", "me@example.com", "/repo")

        mock_run.assert_called_once_with(["git", "config", "user.email", "me@example.com"], cwd="/repo")

    @patch("ghswitch.infrastructure.git.run_command")
    def test_set_local_identity_both(self, mock_run):
        git.set_local_git_identity("Me", "me@example.com", "/repo")

        assert mock_run.call_args_list == [
            call(["git", "config", "user.name", "Me"], cwd="/repo"),
            call(["git", "config", "user.email", "me@example.com"], cwd="/repo"),
        ]

    @patch("ghswitch.infrastructure.git.run_command")
    def test_set_local_identity_none(self, mock_run):
        git.set_local_git_identity(None, None, "/repo")

        mock_run.assert_not_called()

    @patch("subprocess.run")
    def test_set_remote_url_failure_raises(self, mock_run):
        mock_run.return_value = MagicMock(returncode=2, stdout="", stderr="error: No such remote 'origin'")

        with pytest.raises(CommandFailed) as exc_info:
            git.set_remote_url("https://github.com/o/r.git", "origin", "/repo")

        assert exc_info.value.code == 2
        assert "No such remote" in str(exc_info.value)

    @patch("ghswitch.infrastructure.git.get_config_value", return_value=None)
    def test_current_git_user_none_when_unset(self, mock_get):
        assert git.get_current_git_user("/repo") is None

    @patch("ghswitch.infrastructure.git.get_remote_url", return_value=None)
    def test_current_remote_info_none_without_origin(self, mock_get):
        assert git.get_current_remote_info("/repo") is None

    @patch("ghswitch.infrastructure.git.get_remote_url", return_value="https://github.com/o/r.git")
    def test_current_remote_info(self, mock_get):
        info = git.get_current_remote_info("/repo")

        assert info.repo_path == "o/r"
        assert info.auth_type is AuthMethod.TOKEN


@requires_git
class TestAgainstRealRepository:
    def test_remote_roundtrip(self, git_repo):
        assert git.is_git_repo(git_repo)
        assert git.get_remote_url("origin", git_repo) == "git@github.com:o/r.git"

        git.set_remote_url("https://github.com/o/r.git", "origin", git_repo)

        assert git.get_remote_url("origin", git_repo) == "https://github.com/o/r.git"

    def test_not_a_repo(self, tmp_path, isolated_git, monkeypatch):
        plain = tmp_path / "plain"
        plain.mkdir()
        monkeypatch.setenv("GIT_CEILING_DIRECTORIES", str(tmp_path))

        assert git.is_git_repo(plain) is False
        assert git.get_remote_url("origin", plain) is None

    def test_identity_written_locally(self, git_repo):
        git.set_local_git_identity("Me", "me@example.com", git_repo)

        out = subprocess.run(
            ["git", "config", "--local", "user.email"], cwd=git_repo, capture_output=True, text=True
        )
        assert out.stdout.strip() == "me@example.com"
        user = git.get_current_git_user(git_repo)
        assert user.user_name == "Me"

    def test_git_root_from_subdirectory(self, git_repo):
        sub = git_repo / "pkg" / "mod"
        sub.mkdir(parents=True)

        assert Path(git.get_git_root(sub)).resolve() == git_repo.resolve()

    def test_git_root_outside_repository(self, tmp_path, isolated_git, monkeypatch):
        plain = tmp_path / "plain"
        plain.mkdir()
        monkeypatch.setenv("GIT_CEILING_DIRECTORIES", str(tmp_path))

        assert git.get_git_root(plain) is None

"""Shared fixtures."""

import subprocess

import pytest

from ghswitch.core.models import Account, AppConfig, SshConfig, TokenConfig
from ghswitch.infrastructure.factory import ServiceFactory


@pytest.fixture
def isolated_git(tmp_path, monkeypatch):
    """Keep the user's global/system git config out of the tests."""
    monkeypatch.setenv("GIT_CONFIG_GLOBAL", str(tmp_path / "global.gitconfig"))
    monkeypatch.setenv("GIT_CONFIG_NOSYSTEM", "1")
    monkeypatch.delenv("GIT_DIR", raising=False)
    monkeypatch.delenv("GIT_WORK_TREE", raising=False)


@pytest.fixture
def git_repo(tmp_path, isolated_git):
    """A fresh repository whose origin is git@github.com:o/r.git."""
    repo = tmp_path / "repo"
    repo.mkdir()
    subprocess.run(["git", "init", "-q"], cwd=repo, check=True)
    subprocess.run(["git", "remote", "add", "origin", "git@github.com:o/r.git"], cwd=repo, check=True)
    return repo


@pytest.fixture
def factory(tmp_path):
    """ServiceFactory writing only under tmp_path."""
    return ServiceFactory(
        config_file=tmp_path / "config" / "config.json",
        ssh_config_file=tmp_path / "ssh" / "config",
        credentials_file=tmp_path / "git-credentials",
    )


@pytest.fixture
def sample_config():
    return AppConfig(
        accounts=[
            Account(
                name="work",
                git_user_name="Work Dev",
                git_email="dev@work.example",
                ssh=SshConfig(key_path="/keys/id_ed25519_work"),
            ),
            Account(
                name="personal",
                git_email="me@example.com",
                token=TokenConfig(username="alice", token="abc"),
            ),
            Account(
                name="both",
                ssh=SshConfig(key_path="/keys/id_both", host_alias="github-both"),
                token=TokenConfig(username="bob", token="xyz"),
            ),
        ]
    )

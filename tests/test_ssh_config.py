"""Tests for Host block reconciliation in the SSH client config."""

import os
import stat

import pytest

from ghswitch.data.ssh_config import SshConfigFile, render_block, upsert_block

OTHER_BLOCKS = (
    "Host gitlab.com\n"
    "  HostName gitlab.com\n"
    "  IdentityFile ~/.ssh/id_gitlab\n"
    "\n"
    "Host *\n"
    "  ServerAliveInterval 60\n"
)


class TestUpsertBlock:
    """Pure text transformation."""

    def test_empty_content(self):
        result = upsert_block("", "github.com", "/k1")

        assert result == "\n".join(render_block("github.com", "/k1")) + "\n"

    def test_append_adds_single_blank_line(self):
        result = upsert_block(OTHER_BLOCKS, "github.com", "/k1")

        assert result.startswith(OTHER_BLOCKS + "\nHost github.com\n")
        assert "\n\n\n" not in result

    def test_append_without_trailing_newline(self):
        result = upsert_block("Host a\n  User x", "github.com", "/k1")

        assert result.startswith("Host a\n  User x\n\nHost github.com\n")

    def test_append_after_trailing_blank_line(self):
        result = upsert_block("Host a\n  User x\n\n", "github.com", "/k1")

        assert result.startswith("Host a\n  User x\n\nHost github.com\n")

    @pytest.mark.parametrize("initial", ["", OTHER_BLOCKS, "Host a\n  User x", "# comment\n"])
    def test_idempotent(self, initial):
        once = upsert_block(initial, "github.com", "/k1")

        assert upsert_block(once, "github.com", "/k1") == once

    def test_replace_changes_only_target_block(self):
        content = upsert_block(OTHER_BLOCKS, "github-work", "/k1")
        content = upsert_block(content, "github.com", "/k1")

        result = upsert_block(content, "github-work", "/k2")

        assert result.count("Host github-work") == 1
        assert "IdentityFile /k2" in result
        assert "IdentityFile /k1" in result  # github.com block untouched
        assert result.startswith(OTHER_BLOCKS)

    def test_replace_keeps_following_block_intact(self):
        content = "Host github.com\n  IdentityFile /old\n  Port 22\n\nHost other\n  User me\n"

        result = upsert_block(content, "github.com", "/new")

        assert result == "\n".join(render_block("github.com", "/new")) + "\n\nHost other\n  User me\n"

    def test_header_match_is_literal(self):
        content = "host github.com\n  IdentityFile /old\n"

        result = upsert_block(content, "github.com", "/new")

        assert result.startswith("host github.com\n  IdentityFile /old\n\nHost github.com\n")

    def test_trimmed_header_matches(self):
        content = "  Host github.com  \n  IdentityFile /old\n"

        result = upsert_block(content, "github.com", "/new")

        assert "/old" not in result
        assert result.count("Host github.com") == 1

    def test_replace_normalizes_crlf(self):
        content = "Host other\r\n  User x\r\n\r\nHost github.com\r\n  IdentityFile /old\r\n"

        result = upsert_block(content, "github.com", "/new")

        assert "\r" not in result
        assert result.startswith("Host other\n  User x\n\nHost github.com\n")

    def test_append_keeps_crlf(self):
        content = "Host other\r\n  User x\r\n"

        result = upsert_block(content, "github.com", "/new")

        assert result.startswith(content)


class TestSshConfigFile:
    """File-level behavior."""

    @pytest.fixture
    def ssh_config(self, tmp_path):
        return SshConfigFile(tmp_path / "dot-ssh" / "config")

    def test_creates_directory_and_file(self, ssh_config):
        ssh_config.ensure_block("github.com", "/k1")

        assert ssh_config.path.exists()
        assert ssh_config.identity_file("github.com") == "/k1"

    def test_ensure_block_twice_is_byte_identical(self, ssh_config):
        ssh_config.path.parent.mkdir()
        ssh_config.path.write_text(OTHER_BLOCKS, encoding="utf-8")

        ssh_config.ensure_block("github.com", "/k1")
        first = ssh_config.path.read_bytes()
        ssh_config.ensure_block("github.com", "/k1")

        assert ssh_config.path.read_bytes() == first

    def test_new_key_replaces_alias_block(self, ssh_config):
        ssh_config.path.parent.mkdir()
        ssh_config.path.write_text(OTHER_BLOCKS, encoding="utf-8")

        ssh_config.ensure_block("github-work", "/k1")
        ssh_config.ensure_block("github-work", "/k2")

        text = ssh_config.read()
        assert text.count("Host github-work") == 1
        assert ssh_config.identity_file("github-work") == "/k2"
        assert text.startswith(OTHER_BLOCKS)

    def test_find_block_and_has_block(self, ssh_config):
        ssh_config.ensure_block("github-work", "/k1")

        assert ssh_config.has_block("github-work")
        assert not ssh_config.has_block("github.com")
        assert ssh_config.find_block("github-work")[0] == "Host github-work"

    def test_read_missing_file(self, ssh_config):
        assert ssh_config.read() == ""
        assert ssh_config.identity_file("github.com") is None

    @pytest.mark.skipif(os.name == "nt", reason="POSIX permissions only")
    def test_permissions(self, ssh_config):
        ssh_config.ensure_block("github.com", "/k1")

        assert stat.S_IMODE(os.stat(ssh_config.path.parent).st_mode) == 0o700
        assert stat.S_IMODE(os.stat(ssh_config.path).st_mode) == 0o600

"""Tests for gitstitch.git.runner module."""

import subprocess
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from gitstitch.git import GitError, _run_git_command, get_repo_root


class TestRunGitCommand:
    """Tests for _run_git_command function."""

    def test_successful_command(self, mocker):
        """Test successful git command execution."""
        mock_result = MagicMock()
        mock_result.stdout = b"output\n"
        mock_result.returncode = 0

        mocker.patch("subprocess.run", return_value=mock_result)

        result = _run_git_command(["status"])
        assert result == "output"

    def test_keeps_whitespace_when_not_stripping(self, mocker):
        """Test that strip=False returns output untouched."""
        mock_result = MagicMock()
        mock_result.stdout = b"100644 blob abc\tname\0"
        mocker.patch("subprocess.run", return_value=mock_result)

        result = _run_git_command(["ls-tree", "-z", "HEAD"], strip=False)
        assert result == "100644 blob abc\tname\0"

    def test_passes_cwd_and_encoded_input(self, mocker):
        """Test that text input is encoded and cwd is forwarded."""
        mock_result = MagicMock()
        mock_result.stdout = b"deadbeef\n"
        mock_run = mocker.patch("subprocess.run", return_value=mock_result)

        _run_git_command(["hash-object", "-w", "--stdin"], cwd=Path("/repo"), input="héllo")

        args, kwargs = mock_run.call_args
        assert args[0] == ["git", "hash-object", "-w", "--stdin"]
        assert kwargs["cwd"] == Path("/repo")
        assert kwargs["input"] == "héllo".encode("utf-8")
        assert kwargs["env"] is None

    def test_layers_env_over_os_environ(self, mocker, monkeypatch):
        """Test that extra env variables are merged into the process env."""
        monkeypatch.setenv("KEEP_ME", "1")
        mock_result = MagicMock()
        mock_result.stdout = b""
        mock_run = mocker.patch("subprocess.run", return_value=mock_result)

        _run_git_command(["commit-tree", "abc"], env={"GIT_AUTHOR_NAME": "git-stitch"})

        env = mock_run.call_args.kwargs["env"]
        assert env["GIT_AUTHOR_NAME"] == "git-stitch"
        assert env["KEEP_ME"] == "1"

    def test_failed_command_raises_error(self, mocker):
        """Test that failed command raises GitError with stderr."""
        mocker.patch(
            "subprocess.run",
            side_effect=subprocess.CalledProcessError(1, "git", stderr=b"fatal: bad object")
        )

        with pytest.raises(GitError) as exc_info:
            _run_git_command(["cat-file", "commit", "nope"])

        assert "Git command failed" in str(exc_info.value)
        assert "bad object" in str(exc_info.value)

    def test_git_not_found_raises_error(self, mocker):
        """Test that missing git raises GitError."""
        mocker.patch("subprocess.run", side_effect=FileNotFoundError())

        with pytest.raises(GitError) as exc_info:
            _run_git_command(["status"])

        assert "not installed" in str(exc_info.value)


class TestGetRepoRoot:
    """Tests for get_repo_root function."""

    def test_returns_path(self, mocker):
        """Test that repo root path is returned."""
        mock_result = MagicMock()
        mock_result.stdout = b"/path/to/repo\n"
        mock_result.returncode = 0

        mocker.patch("subprocess.run", return_value=mock_result)

        result = get_repo_root()
        assert result == Path("/path/to/repo")

    def test_raises_error_if_not_repo(self, mocker):
        """Test error if not in a git repository."""
        mocker.patch(
            "subprocess.run",
            side_effect=subprocess.CalledProcessError(128, "git", stderr=b"not a git repo")
        )

        with pytest.raises(GitError) as exc_info:
            get_repo_root()

        assert "Not in a git repository" in str(exc_info.value)

    def test_real_repository(self, mono_repo):
        """Test against a real repository."""
        assert get_repo_root(cwd=mono_repo).resolve() == mono_repo.resolve()

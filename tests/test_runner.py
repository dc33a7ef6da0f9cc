"""Tests for hookscope.git.runner module."""

import subprocess
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from hookscope.git import (
    GitResult,
    QueryError,
    _run_git_command,
    get_repo_root,
    has_commit,
    run_git,
)


def _completed(stdout="", stderr="", returncode=0):
    result = MagicMock()
    result.stdout = stdout
    result.stderr = stderr
    result.returncode = returncode
    return result


class TestRunGit:
    """Tests for run_git function."""

    def test_passes_argument_vector(self, mock_git_commands):
        """Test that arguments reach git as a list, spaces intact."""
        mock_git_commands.return_value = _completed(stdout="out\n")

        run_git(["ls-files", "--", "some dir/"])

        args, kwargs = mock_git_commands.call_args
        assert args[0] == ["git", "ls-files", "--", "some dir/"]
        assert "shell" not in kwargs

    def test_runs_in_repo_root(self, mock_git_commands, temp_dir):
        """Test that the working directory is the repository passed in."""
        mock_git_commands.return_value = _completed()

        run_git(["status"], repo_root=temp_dir)

        assert mock_git_commands.call_args.kwargs["cwd"] == temp_dir

    def test_returns_failure_without_raising(self, mock_git_commands):
        """Test that a non-zero exit is reported, not raised."""
        mock_git_commands.return_value = _completed(stderr="fatal: bad\n", returncode=128)

        result = run_git(["rev-parse", "nope"])

        assert isinstance(result, GitResult)
        assert result.success is False
        assert result.returncode == 128
        assert result.stderr == "fatal: bad\n"

    def test_git_not_found_raises_error(self, mocker):
        """Test that missing git raises QueryError."""
        mocker.patch("subprocess.run", side_effect=FileNotFoundError())

        with pytest.raises(QueryError) as exc_info:
            run_git(["status"])

        assert "not installed" in str(exc_info.value)

    def test_timeout_raises_error(self, mocker):
        """Test that an expired timeout is a query failure."""
        mocker.patch(
            "subprocess.run",
            side_effect=subprocess.TimeoutExpired(cmd="git", timeout=5),
        )

        with pytest.raises(QueryError) as exc_info:
            run_git(["log"], timeout=5)

        assert "timed out" in str(exc_info.value)

    def test_missing_repo_directory_raises_error(self, tmp_path):
        """Test that a nonexistent repository directory raises QueryError."""
        with pytest.raises(QueryError) as exc_info:
            run_git(["status"], repo_root=tmp_path / "missing")

        assert "does not exist" in str(exc_info.value)


class TestRunGitCommand:
    """Tests for _run_git_command function."""

    def test_successful_command(self, mock_git_commands):
        """Test successful git command execution."""
        mock_git_commands.return_value = _completed(stdout="output\n")

        assert _run_git_command(["status"]) == "output"

    def test_unstripped_output(self, mock_git_commands):
        """Test that NUL-separated output can be kept intact."""
        mock_git_commands.return_value = _completed(stdout="a\0b c\0")

        assert _run_git_command(["ls-files", "-z"], strip=False) == "a\0b c\0"

    def test_failed_command_carries_stderr(self, mock_git_commands):
        """Test that a failed command raises QueryError with verbatim stderr."""
        mock_git_commands.return_value = _completed(
            stderr="fatal: not a git repository\n", returncode=128
        )

        with pytest.raises(QueryError) as exc_info:
            _run_git_command(["ls-files"])

        assert "Git command failed" in str(exc_info.value)
        assert exc_info.value.stderr == "fatal: not a git repository"
        assert exc_info.value.args_list == ["ls-files"]


class TestGetRepoRoot:
    """Tests for get_repo_root function."""

    def test_returns_path(self, mock_git_commands):
        """Test that repo root path is returned."""
        mock_git_commands.return_value = _completed(stdout="/path/to/repo\n")

        assert get_repo_root() == Path("/path/to/repo")

    def test_raises_error_if_not_repo(self, mock_git_commands):
        """Test error if not in a git repository."""
        mock_git_commands.return_value = _completed(stderr="not a git repo", returncode=128)

        with pytest.raises(QueryError) as exc_info:
            get_repo_root()

        assert "Not in a git repository" in str(exc_info.value)
        assert exc_info.value.stderr == "not a git repo"

    def test_real_repository(self, make_repo):
        """Test against a real repository."""
        repo = make_repo()

        assert get_repo_root(repo).resolve() == repo.resolve()


class TestHasCommit:
    """Tests for has_commit function."""

    def test_unborn_branch(self, make_repo):
        """Test that a fresh repository has no HEAD commit."""
        assert has_commit("HEAD", make_repo()) is False

    def test_after_commit(self, make_repo, git):
        """Test that HEAD resolves once something is committed."""
        repo = make_repo()
        git(repo, "commit", "--allow-empty", "-m", "Initial commit")

        assert has_commit("HEAD", repo) is True

    def test_outside_repository_raises(self, tmp_path):
        """Test that a missing repository is an error, not a missing commit."""
        plain = tmp_path / "plain"
        plain.mkdir()

        with pytest.raises(QueryError):
            has_commit("HEAD", plain)

"""Shared test fixtures and configuration."""

import itertools
import subprocess
import tempfile
from pathlib import Path

import pytest


def _git(cwd: Path, *args: str) -> str:
    """Run git in a fixture repository and return its stdout."""
    result = subprocess.run(
        ["git", *args],
        cwd=cwd,
        capture_output=True,
        text=True,
        check=True,
    )
    return result.stdout


@pytest.fixture(autouse=True)
def isolated_git_env(monkeypatch, tmp_path):
    """Keep fixture repositories independent of the user's git config."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("GIT_CONFIG_NOSYSTEM", "1")
    monkeypatch.setenv("GIT_CEILING_DIRECTORIES", str(tmp_path))
    monkeypatch.setenv("GIT_AUTHOR_NAME", "Test User")
    monkeypatch.setenv("GIT_AUTHOR_EMAIL", "test@example.com")
    monkeypatch.setenv("GIT_COMMITTER_NAME", "Test User")
    monkeypatch.setenv("GIT_COMMITTER_EMAIL", "test@example.com")
    # Local submodule clones need the file protocol
    monkeypatch.setenv("GIT_CONFIG_COUNT", "2")
    monkeypatch.setenv("GIT_CONFIG_KEY_0", "protocol.file.allow")
    monkeypatch.setenv("GIT_CONFIG_VALUE_0", "always")
    monkeypatch.setenv("GIT_CONFIG_KEY_1", "init.defaultBranch")
    monkeypatch.setenv("GIT_CONFIG_VALUE_1", "master")


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def git():
    """Run a git command in a given directory."""
    return _git


@pytest.fixture
def make_repo(tmp_path):
    """Create empty git repositories under tmp_path."""
    counter = itertools.count()

    def _make(name: str = None) -> Path:
        repo_dir = tmp_path / (name or f"repo{next(counter)}")
        repo_dir.mkdir()
        _git(repo_dir, "init")
        return repo_dir

    return _make


@pytest.fixture
def make_submodule_source(make_repo):
    """Create a repository with one commit, usable as a submodule URL."""

    def _make(name: str = None) -> Path:
        source = make_repo(name)
        _git(source, "commit", "--allow-empty", "-m", "Submodule commit")
        return source

    return _make


@pytest.fixture
def mock_git_commands(mocker):
    """Mock subprocess.run for git commands."""
    mock_run = mocker.patch("subprocess.run")
    return mock_run

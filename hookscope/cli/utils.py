"""Shared helpers for hookscope CLI commands."""

from pathlib import Path
from typing import NoReturn, Optional

import typer

from hookscope.git import get_repo_root
from hookscope.user_config import get_git_timeout


REPO_OPTION_HELP = "Repository to query (defaults to the one containing the current directory)"


def resolve_repo(repo: Optional[Path]) -> tuple[Path, Optional[float]]:
    """Find the repository root and its configured git timeout.

    Raises:
        QueryError: If the path is not inside a git repository.
        ConfigError: If the repository configuration is invalid.
    """
    repo_root = get_repo_root(repo)
    return repo_root, get_git_timeout(repo_root)


def fail(message: str) -> NoReturn:
    """Print an error to stderr and exit with status 1."""
    typer.echo(f"Error: {message}", err=True)
    raise typer.Exit(1)

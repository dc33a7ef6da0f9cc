"""CLI commands for repository queries."""

from pathlib import Path
from typing import Optional

import typer

from hookscope.cli.utils import REPO_OPTION_HELP, fail, resolve_repo
from hookscope.git import (
    FileScope,
    QueryError,
    branches_containing_commit,
    list_files,
    staged_submodule_removals,
)
from hookscope.user_config import ConfigError


def files_command(
    paths: list[str] = typer.Argument(
        ...,
        help="Files, or directories with a trailing slash (e.g. src/)",
    ),
    untracked: bool = typer.Option(
        False,
        "--untracked",
        "-u",
        help="Include untracked files under directories",
    ),
    ref: Optional[str] = typer.Option(
        None,
        "--ref",
        help="Expand directories from this commit instead of the index",
    ),
    repo: Optional[Path] = typer.Option(None, "--repo", "-C", help=REPO_OPTION_HELP),
) -> None:
    """List the files a hook would run against."""
    try:
        repo_root, timeout = resolve_repo(repo)
        scope = FileScope(paths=paths, include_untracked=untracked, ref=ref)
        for path in sorted(list_files(scope, repo_root, timeout=timeout)):
            typer.echo(str(path))
    except (QueryError, ConfigError) as e:
        fail(str(e))


def removals_command(
    repo: Optional[Path] = typer.Option(None, "--repo", "-C", help=REPO_OPTION_HELP),
) -> None:
    """List submodules whose removal is staged."""
    try:
        repo_root, timeout = resolve_repo(repo)
        removals = staged_submodule_removals(repo_root, timeout=timeout)
    except (QueryError, ConfigError) as e:
        fail(str(e))

    if not removals:
        typer.echo("No submodule removals staged.")
        return

    for sub in removals:
        marker = "" if sub.resolvable else "\t(unresolvable)"
        typer.echo(f"{sub.path}\t{sub.url}{marker}")


def branches_command(
    ref: str = typer.Argument(..., help="Commit, branch, tag or HEAD"),
    repo: Optional[Path] = typer.Option(None, "--repo", "-C", help=REPO_OPTION_HELP),
) -> None:
    """List local branches whose history contains a commit."""
    try:
        repo_root, timeout = resolve_repo(repo)
        branches = branches_containing_commit(ref, repo_root, timeout=timeout)
    except (QueryError, ConfigError) as e:
        fail(str(e))

    for branch in sorted(branches):
        typer.echo(branch)

"""Git command runner and repository utilities.

Contains:
- GitResult: Captured exit status and output of one git invocation
- run_git: Run a git command and return its result without raising on failure
- _run_git_command: Run a git command and return its output
- get_repo_root: Get the root directory of a git repository
- has_commit: Check whether a ref resolves to a commit
"""

import logging
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from hookscope.git.exceptions import QueryError


logger = logging.getLogger(__name__)

GIT_BINARY = "git"


@dataclass(frozen=True)
class GitResult:
    """Captured result of a single git invocation."""

    args: list[str]
    returncode: int
    stdout: str
    stderr: str

    @property
    def success(self) -> bool:
        return self.returncode == 0


def run_git(
    args: list[str],
    repo_root: Optional[Path] = None,
    timeout: Optional[float] = None,
) -> GitResult:
    """Run a git command and capture its result.

    Arguments are passed as a list, never through a shell, so paths and
    ref names containing whitespace reach git unchanged.

    Args:
        args: List of arguments to pass to git.
        repo_root: Directory to run git in (defaults to the current directory).
        timeout: Seconds to wait before giving up (optional).

    Returns:
        The GitResult, whatever the exit status.

    Raises:
        QueryError: If git is missing or the command timed out.
    """
    if repo_root is not None and not Path(repo_root).is_dir():
        raise QueryError(f"Repository directory does not exist: {repo_root}", args_list=args)

    logger.debug("Running git %s in %s", args, repo_root or Path.cwd())
    try:
        result = subprocess.run(
            [GIT_BINARY] + args,
            capture_output=True,
            text=True,
            cwd=repo_root,
            timeout=timeout,
        )
    except FileNotFoundError:
        raise QueryError("Git is not installed or not in PATH.", args_list=args)
    except subprocess.TimeoutExpired:
        raise QueryError(
            f"Git command timed out after {timeout}s: git {' '.join(args)}",
            args_list=args,
        )

    logger.debug("git %s exited with %d", args[0] if args else "", result.returncode)
    return GitResult(
        args=args,
        returncode=result.returncode,
        stdout=result.stdout,
        stderr=result.stderr,
    )


def _run_git_command(
    args: list[str],
    repo_root: Optional[Path] = None,
    timeout: Optional[float] = None,
    strip: bool = True,
) -> str:
    """Run a git command and return its output.

    Args:
        args: List of arguments to pass to git.
        repo_root: Directory to run git in (optional).
        timeout: Seconds to wait before giving up (optional).
        strip: Strip surrounding whitespace from stdout. Disable for
            NUL-separated output where trailing bytes matter.

    Returns:
        The stdout of the git command.

    Raises:
        QueryError: If the command fails.
    """
    result = run_git(args, repo_root=repo_root, timeout=timeout)
    if not result.success:
        stderr = result.stderr.strip()
        raise QueryError(
            f"Git command failed: git {' '.join(args)}\n{stderr}",
            stderr=stderr,
            args_list=args,
        )
    return result.stdout.strip() if strip else result.stdout


def get_repo_root(path: Optional[Path] = None, timeout: Optional[float] = None) -> Path:
    """Get the root directory of the git repository containing a path.

    Args:
        path: Directory inside the repository (defaults to the current directory).
        timeout: Seconds to wait before giving up (optional).

    Returns:
        Path to the repository root.

    Raises:
        QueryError: If not in a git repository.
    """
    try:
        root = _run_git_command(["rev-parse", "--show-toplevel"], repo_root=path, timeout=timeout)
    except QueryError as e:
        raise QueryError(
            "Not in a git repository. Please run this command from within a git repo.",
            stderr=e.stderr,
            args_list=e.args_list,
        )
    return Path(root)


def has_commit(ref: str, repo_root: Optional[Path] = None, timeout: Optional[float] = None) -> bool:
    """Check whether a ref resolves to a commit.

    Returns False for an unknown ref or an unborn branch (no commits yet).

    Raises:
        QueryError: If the repository itself cannot be queried.
    """
    result = run_git(
        ["rev-parse", "--verify", "--quiet", f"{ref}^{{commit}}"],
        repo_root=repo_root,
        timeout=timeout,
    )
    # --quiet exits 1 for a missing ref; anything else is a real failure
    if result.returncode in (0, 1):
        return result.success
    stderr = result.stderr.strip()
    raise QueryError(
        f"Git command failed: git {' '.join(result.args)}\n{stderr}",
        stderr=stderr,
        args_list=result.args,
    )

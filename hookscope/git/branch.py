"""Git branch utilities.

Contains:
- branches_containing_commit: Get the local branches whose history contains a commit
"""

from pathlib import Path
from typing import Optional

from hookscope.git.runner import _run_git_command


def branches_containing_commit(
    ref: str,
    repo_root: Optional[Path] = None,
    timeout: Optional[float] = None,
) -> set[str]:
    """Get the local branches whose history contains a commit.

    Uses git's own --contains filter over refs/heads, so remote-tracking
    branches and a detached HEAD never show up.

    Args:
        ref: Branch name, tag, SHA or HEAD.
        repo_root: The root directory of the git repository (optional).
        timeout: Seconds to wait before giving up (optional).

    Returns:
        Set of short branch names. Empty when no branch contains the commit.

    Raises:
        QueryError: If ref does not name a commit or the query fails.
    """
    output = _run_git_command(
        ["for-each-ref", "--contains", ref, "--format=%(refname:lstrip=2)", "refs/heads/"],
        repo_root=repo_root,
        timeout=timeout,
    )
    if not output:
        return set()
    return set(output.split("\n"))

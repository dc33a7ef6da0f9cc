"""Git file listing utilities.

Contains:
- FileScope: Paths and options describing which files a hook applies to
- list_files: Expand a FileScope into absolute file paths
- submodule_paths: Get the paths occupied by submodules
- modified_files: Get the files changed in the index or working tree
- modified_lines_in_file: Get the line numbers changed in a file
"""

import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from hookscope.git.runner import _run_git_command, get_repo_root
from hookscope.git.submodules import GITLINK_MODE, list_submodules


# Matches the new-file range of a unified diff hunk header
_HUNK_HEADER_RE = re.compile(r"^@@ -\d+(?:,\d+)? \+(?P<start>\d+)(?:,(?P<count>\d+))? @@")


@dataclass(frozen=True)
class FileScope:
    """Which files a hook should look at.

    Attributes:
        paths: File paths and directory markers. A directory is marked with a
            trailing separator ("src/") and expands to the files under it.
        include_untracked: Also expand directories to untracked, non-ignored files.
        ref: Expand directories from the tree of this commit instead of the index.
    """

    paths: tuple[str, ...] = field(default_factory=tuple)
    include_untracked: bool = False
    ref: Optional[str] = None

    def __post_init__(self):
        # A bare string is one path, not a sequence of characters
        paths = (self.paths,) if isinstance(self.paths, str) else tuple(self.paths)
        object.__setattr__(self, "paths", paths)


def _is_directory_marker(path: str) -> bool:
    return path.endswith("/") or path.endswith(os.sep)


def _parse_entries(output: str) -> list[tuple[str, str]]:
    """Parse NUL-separated `ls-files --stage` / `ls-tree` output into (mode, path) pairs."""
    entries = []
    for record in output.split("\0"):
        if not record:
            continue
        meta, _, path = record.partition("\t")
        entries.append((meta.split(" ", 1)[0], path))
    return entries


def _tracked_entries(
    pathspec: Optional[str],
    repo_root: Path,
    ref: Optional[str] = None,
    timeout: Optional[float] = None,
) -> list[tuple[str, str]]:
    """List (mode, path) entries from the index, or from a commit's tree."""
    if ref is None:
        args = ["--literal-pathspecs", "ls-files", "-z", "--stage", "--full-name"]
    else:
        args = ["--literal-pathspecs", "ls-tree", "-r", "-z", "--full-name", ref]
    if pathspec is not None:
        args += ["--", pathspec]
    output = _run_git_command(args, repo_root=repo_root, timeout=timeout, strip=False)
    return _parse_entries(output)


def _untracked_files(pathspec: str, repo_root: Path, timeout: Optional[float] = None) -> list[str]:
    output = _run_git_command(
        ["--literal-pathspecs", "ls-files", "-z", "--others", "--exclude-standard",
         "--full-name", "--", pathspec],
        repo_root=repo_root,
        timeout=timeout,
        strip=False,
    )
    return [path for path in output.split("\0") if path]


def _is_within(path: str, directory: str) -> bool:
    return path == directory or path.startswith(directory.rstrip("/") + "/")


def _absolute(repo_root: Path, path: str) -> Path:
    return Path(os.path.abspath(repo_root / path))


def submodule_paths(
    repo_root: Optional[Path] = None,
    ref: Optional[str] = None,
    timeout: Optional[float] = None,
) -> set[str]:
    """Get the repository-relative paths occupied by submodules.

    Combines gitlink entries (in the index, or in ref's tree) with the
    paths registered in .gitmodules, so a submodule is found even when
    only one of the two still mentions it.

    Args:
        repo_root: The root directory of the git repository (optional).
        ref: Look at this commit instead of the index and working tree.
        timeout: Seconds to wait before giving up (optional).

    Returns:
        Set of submodule paths.
    """
    if repo_root is None:
        repo_root = get_repo_root(timeout=timeout)

    paths = {
        path
        for mode, path in _tracked_entries(None, repo_root, ref=ref, timeout=timeout)
        if mode == GITLINK_MODE
    }
    paths.update(sub.path for sub in list_submodules(ref, repo_root, timeout))
    return paths


def list_files(
    scope: FileScope,
    repo_root: Optional[Path] = None,
    timeout: Optional[float] = None,
) -> set[Path]:
    """Expand a FileScope into the set of files it covers.

    Plain file entries are included as given. Directory entries expand to
    the tracked files beneath them, skipping submodules and everything
    inside them.

    Args:
        scope: The paths and options to expand.
        repo_root: The root directory of the git repository (optional).
            Relative scope paths are resolved against it.
        timeout: Seconds to wait before giving up (optional).

    Returns:
        Set of absolute file paths.

    Raises:
        QueryError: If listing the repository's files fails.
    """
    if repo_root is None:
        repo_root = get_repo_root(timeout=timeout)

    files: set[Path] = set()
    directories = [path for path in scope.paths if _is_directory_marker(path)]
    for path in scope.paths:
        if not _is_directory_marker(path):
            files.add(_absolute(repo_root, path))

    if not directories:
        return files

    excluded = submodule_paths(repo_root, ref=scope.ref, timeout=timeout)
    for directory in directories:
        candidates = [
            path
            for mode, path in _tracked_entries(directory, repo_root, ref=scope.ref, timeout=timeout)
            if mode != GITLINK_MODE
        ]
        if scope.include_untracked and scope.ref is None:
            candidates += _untracked_files(directory, repo_root, timeout)

        for path in candidates:
            if any(_is_within(path, sub) for sub in excluded):
                continue
            files.add(_absolute(repo_root, path))

    return files


def modified_files(
    repo_root: Optional[Path] = None,
    staged: bool = True,
    timeout: Optional[float] = None,
) -> set[Path]:
    """Get the files that were added, copied, modified or renamed.

    Deleted files and submodules are left out, since there is nothing
    on disk for a hook to inspect.

    Args:
        repo_root: The root directory of the git repository (optional).
        staged: Compare the index with HEAD (True) or the working tree
            with the index (False).
        timeout: Seconds to wait before giving up (optional).

    Returns:
        Set of absolute file paths.
    """
    if repo_root is None:
        repo_root = get_repo_root(timeout=timeout)

    args = ["diff", "--name-only", "-z", "--diff-filter=ACMR", "--ignore-submodules=all"]
    if staged:
        args.insert(1, "--cached")
    output = _run_git_command(args, repo_root=repo_root, timeout=timeout, strip=False)
    return {_absolute(repo_root, path) for path in output.split("\0") if path}


def modified_lines_in_file(
    path: str,
    repo_root: Optional[Path] = None,
    staged: bool = True,
    timeout: Optional[float] = None,
) -> set[int]:
    """Get the line numbers that were added or changed in a file.

    Args:
        path: File path, absolute or relative to the repository root.
        repo_root: The root directory of the git repository (optional).
        staged: Look at the staged diff (True) or the unstaged one (False).
        timeout: Seconds to wait before giving up (optional).

    Returns:
        Set of 1-based line numbers in the new version of the file.
    """
    if repo_root is None:
        repo_root = get_repo_root(timeout=timeout)

    args = ["--literal-pathspecs", "diff", "--no-ext-diff", "--no-color", "-U0"]
    if staged:
        args.append("--cached")
    args += ["--", str(path)]
    diff = _run_git_command(args, repo_root=repo_root, timeout=timeout)

    lines: set[int] = set()
    for line in diff.split("\n"):
        match = _HUNK_HEADER_RE.match(line)
        if not match:
            continue
        start = int(match.group("start"))
        count = int(match.group("count") or 1)
        lines.update(range(start, start + count))
    return lines

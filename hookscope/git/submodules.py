"""Git submodule utilities.

Contains:
- Submodule: A registered submodule and where its content can be read
- list_submodules: Get the submodules registered in .gitmodules
- staged_submodule_removals: Get the submodules whose removal is staged
"""

import logging
import warnings
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Optional

from hookscope.git.exceptions import AmbiguousSubmoduleRegistration, QueryError
from hookscope.git.runner import _run_git_command, get_repo_root, has_commit, run_git


logger = logging.getLogger(__name__)

GITLINK_MODE = "160000"

# git config --get-regexp key filter for the two keys we need
_SUBMODULE_KEYS = r"^submodule\..*\.(path|url)$"


@dataclass(frozen=True)
class Submodule:
    """A submodule registration.

    Attributes:
        name: Section name in .gitmodules.
        path: Repository-relative path of the submodule's working tree.
        url: Where the submodule's content can be read. This is the local
            git directory holding its objects, which survives removal of
            the working tree; when that is gone it falls back to the
            registered URL and `resolvable` is False.
        registered_url: URL as registered in .gitmodules.
        resolvable: Whether `url` points at a local copy of the content.
        commit: Gitlink commit recorded by the superproject (removals only).
    """

    name: str
    path: str
    url: str
    registered_url: str = ""
    resolvable: bool = False
    commit: Optional[str] = None


def _parse_submodule_config(output: str) -> list[tuple[str, str, str]]:
    """Parse `git config -z --get-regexp` output into (name, key, value) triples.

    Each record is "submodule.<name>.<key>\\n<value>" terminated by NUL.
    Submodule names may contain dots, so the key is split from the right.
    """
    entries = []
    for record in output.split("\0"):
        if not record:
            continue
        full_key, _, value = record.partition("\n")
        name, _, key = full_key[len("submodule."):].rpartition(".")
        entries.append((name, key, value))
    return entries


def _read_registrations(
    source: list[str],
    repo_root: Path,
    timeout: Optional[float] = None,
) -> list[Submodule]:
    """Read submodule registrations from a .gitmodules source.

    Args:
        source: git config source arguments (--file or --blob).
        repo_root: The root directory of the git repository.
        timeout: Seconds to wait before giving up (optional).

    Returns:
        One Submodule per distinct path. When a path is registered more than
        once the last registration wins.
    """
    result = run_git(
        ["config", "-z"] + source + ["--get-regexp", _SUBMODULE_KEYS],
        repo_root=repo_root,
        timeout=timeout,
    )
    # Exit status 1 means no key matched
    if result.returncode == 1:
        return []
    if not result.success:
        stderr = result.stderr.strip()
        raise QueryError(
            f"Failed to read submodule configuration from {' '.join(source)}\n{stderr}",
            stderr=stderr,
            args_list=result.args,
        )

    fields: dict[str, dict[str, str]] = {}
    for name, key, value in _parse_submodule_config(result.stdout):
        fields.setdefault(name, {})[key] = value

    modules_dir = _modules_dir(repo_root, timeout)
    by_path: dict[str, Submodule] = {}
    for name, values in fields.items():
        path = values.get("path")
        if not path:
            continue
        if path in by_path:
            warnings.warn(
                f"Submodule path '{path}' is registered as both "
                f"'{by_path[path].name}' and '{name}'; using '{name}'",
                AmbiguousSubmoduleRegistration,
                stacklevel=3,
            )
        registered_url = values.get("url", "")
        location = modules_dir / name
        resolvable = location.is_dir()
        by_path[path] = Submodule(
            name=name,
            path=path,
            url=str(location) if resolvable else registered_url,
            registered_url=registered_url,
            resolvable=resolvable,
        )
    return list(by_path.values())


def _modules_dir(repo_root: Path, timeout: Optional[float] = None) -> Path:
    """Get the directory git keeps submodule repositories in."""
    common_dir = Path(
        _run_git_command(["rev-parse", "--git-common-dir"], repo_root=repo_root, timeout=timeout)
    )
    if not common_dir.is_absolute():
        common_dir = repo_root / common_dir
    return common_dir / "modules"


def list_submodules(
    ref: Optional[str] = None,
    repo_root: Optional[Path] = None,
    timeout: Optional[float] = None,
) -> list[Submodule]:
    """Get the submodules registered in .gitmodules.

    Args:
        ref: Read .gitmodules as of this commit instead of the working tree.
        repo_root: The root directory of the git repository (optional).
        timeout: Seconds to wait before giving up (optional).

    Returns:
        List of registered submodules, empty if there are none.

    Raises:
        QueryError: If the repository cannot be queried or ref is unknown.
    """
    if repo_root is None:
        repo_root = get_repo_root(timeout=timeout)

    if ref is None:
        gitmodules = repo_root / ".gitmodules"
        if not gitmodules.is_file():
            return []
        return _read_registrations(["--file", str(gitmodules)], repo_root, timeout)

    if not has_commit(ref, repo_root, timeout):
        raise QueryError(f"Unknown commit: {ref}", args_list=["rev-parse", "--verify", ref])
    blob = f"{ref}:.gitmodules"
    if not run_git(["cat-file", "-e", blob], repo_root=repo_root, timeout=timeout).success:
        return []
    return _read_registrations(["--blob", blob], repo_root, timeout)


def _removed_gitlinks(raw_diff: str) -> list[tuple[str, str]]:
    """Parse `git diff --raw -z` output into (path, old commit) removals.

    A gitlink is removed when the old side has mode 160000 and the new side
    does not (deleted, or replaced by a regular file).
    """
    removed = []
    tokens = raw_diff.split("\0")
    i = 0
    while i < len(tokens):
        meta = tokens[i]
        if not meta.startswith(":"):
            i += 1
            continue
        old_mode, new_mode, old_sha, _new_sha, status = meta[1:].split(" ")
        # Copies and renames carry two paths
        if status[:1] in ("R", "C"):
            path = tokens[i + 2]
            i += 3
        else:
            path = tokens[i + 1]
            i += 2
        if old_mode == GITLINK_MODE and new_mode != GITLINK_MODE:
            removed.append((path, old_sha))
    return removed


def staged_submodule_removals(
    repo_root: Optional[Path] = None,
    timeout: Optional[float] = None,
) -> list[Submodule]:
    """Get the submodules whose removal is staged for the next commit.

    The registered URL is read from .gitmodules at HEAD, because staging the
    removal usually rewrites the working tree copy. The returned url is git's
    per-submodule directory, which survives `git rm` of the working tree;
    when it is gone too the url falls back to the registered one and the
    entry is flagged as not resolvable.

    Args:
        repo_root: The root directory of the git repository (optional).
        timeout: Seconds to wait before giving up (optional).

    Returns:
        One Submodule per removed path, in diff order.

    Raises:
        QueryError: If the repository cannot be queried.
    """
    if repo_root is None:
        repo_root = get_repo_root(timeout=timeout)

    # Nothing committed yet, so nothing can have been removed
    if not has_commit("HEAD", repo_root, timeout):
        return []

    raw_diff = _run_git_command(
        ["diff", "--cached", "--raw", "-z", "--no-renames", "--no-abbrev",
         "--ignore-submodules=none", "HEAD"],
        repo_root=repo_root,
        timeout=timeout,
        strip=False,
    )
    removed = _removed_gitlinks(raw_diff)
    if not removed:
        return []

    registered = {sub.path: sub for sub in list_submodules("HEAD", repo_root, timeout)}

    removals = []
    seen = set()
    for path, commit in removed:
        if path in seen:
            continue
        seen.add(path)
        sub = registered.get(path)
        if sub is None or not sub.registered_url:
            logger.debug("Removed gitlink %s has no registration at HEAD, skipping", path)
            continue
        if not sub.resolvable:
            logger.warning("No local copy of removed submodule %s; its content cannot be read", path)
        removals.append(replace(sub, commit=commit))
    return removals

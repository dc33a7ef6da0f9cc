"""Git query module for hookscope.

This package provides read-only repository queries:
- exceptions: QueryError, AmbiguousSubmoduleRegistration
- runner: GitResult, run_git, _run_git_command, get_repo_root, has_commit
- files: FileScope, list_files, submodule_paths, modified_files, modified_lines_in_file
- submodules: Submodule, list_submodules, staged_submodule_removals
- branch: branches_containing_commit
"""

# Exceptions
from hookscope.git.exceptions import (
    QueryError,
    AmbiguousSubmoduleRegistration,
)

# Runner utilities
from hookscope.git.runner import (
    GitResult,
    run_git,
    _run_git_command,
    get_repo_root,
    has_commit,
)

# Submodule utilities
from hookscope.git.submodules import (
    Submodule,
    list_submodules,
    staged_submodule_removals,
)

# File listing utilities
from hookscope.git.files import (
    FileScope,
    list_files,
    submodule_paths,
    modified_files,
    modified_lines_in_file,
)

# Branch utilities
from hookscope.git.branch import (
    branches_containing_commit,
)


__all__ = [
    # Exceptions
    "QueryError",
    "AmbiguousSubmoduleRegistration",
    # Runner
    "GitResult",
    "run_git",
    "_run_git_command",
    "get_repo_root",
    "has_commit",
    # Submodules
    "Submodule",
    "list_submodules",
    "staged_submodule_removals",
    # Files
    "FileScope",
    "list_files",
    "submodule_paths",
    "modified_files",
    "modified_lines_in_file",
    # Branch
    "branches_containing_commit",
]

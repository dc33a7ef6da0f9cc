"""Git-related exception and warning classes.

Contains:
- QueryError: A git plumbing query failed or the repository is unqueryable
- AmbiguousSubmoduleRegistration: Warning for duplicate submodule registrations
"""

from typing import Optional


class QueryError(Exception):
    """Raised when a git query cannot be answered.

    Attributes:
        stderr: The verbatim standard error of the failed process, if any.
        args_list: The git arguments that were run, if any.
    """

    def __init__(
        self,
        message: str,
        stderr: str = "",
        args_list: Optional[list[str]] = None,
    ):
        super().__init__(message)
        self.stderr = stderr
        self.args_list = args_list or []


class AmbiguousSubmoduleRegistration(UserWarning):
    """Emitted when a submodule path is registered more than once.

    The last registration wins and the query carries on.
    """

    pass

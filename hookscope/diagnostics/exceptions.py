"""Diagnostic parsing exception classes."""

from typing import Optional


class PatternError(ValueError):
    """Raised when a diagnostic pattern is malformed.

    Either the pattern itself is unusable (bad regex, missing required
    groups) or it matched a line but captured an unparseable location.
    """

    def __init__(self, message: str, pattern: str, line: Optional[str] = None):
        super().__init__(message)
        self.pattern = pattern
        self.line = line

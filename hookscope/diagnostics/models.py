"""Data models for hookscope diagnostics.

Contains:
- DiagnosticPattern: Regex with named groups locating a diagnostic in a line
- Diagnostic: A single parsed diagnostic
- ExtractionResult: Diagnostics plus the signals needed to judge a tool run
"""

import re
from dataclasses import dataclass, field
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from hookscope.diagnostics.exceptions import PatternError


REQUIRED_GROUPS = ("file", "line")

# Severity captures treated as non-blocking
WARNING_SEVERITIES = ("warning", "warn", "note", "info")


@dataclass(frozen=True)
class DiagnosticPattern:
    """A regex that locates diagnostics in tool output.

    Must define the named groups `file` and `line`; `column` and
    `severity` are picked up when present.
    """

    pattern: str
    regex: re.Pattern = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        try:
            regex = re.compile(self.pattern)
        except re.error as e:
            raise PatternError(f"Invalid diagnostic pattern {self.pattern!r}: {e}", self.pattern)

        missing = [name for name in REQUIRED_GROUPS if name not in regex.groupindex]
        if missing:
            raise PatternError(
                f"Diagnostic pattern {self.pattern!r} is missing named group(s): {', '.join(missing)}",
                self.pattern,
            )
        object.__setattr__(self, "regex", regex)

    @property
    def has_column(self) -> bool:
        return "column" in self.regex.groupindex

    @property
    def has_severity(self) -> bool:
        return "severity" in self.regex.groupindex


class Diagnostic(BaseModel):
    """A diagnostic reported by a tool.

    Attributes:
        file: File path as printed by the tool.
        line: 1-based line number.
        column: Column number, if the pattern captures one.
        severity: Severity text, if the pattern captures one.
        message: The complete output line the diagnostic came from.
        line_text: Line number exactly as printed (e.g. "007").
        column_text: Column number exactly as printed, if captured.
    """

    model_config = ConfigDict(frozen=True)

    file: str
    line: int = Field(ge=1)
    column: Optional[int] = None
    severity: Optional[str] = None
    message: str
    line_text: Optional[str] = None
    column_text: Optional[str] = None

    @property
    def location(self) -> str:
        """Render the location prefix, e.g. "path/to/file.xml:12:"."""
        line = self.line_text if self.line_text is not None else self.line
        if self.column is None:
            return f"{self.file}:{line}:"
        column = self.column_text if self.column_text is not None else self.column
        return f"{self.file}:{line}:{column}:"

    @property
    def is_warning(self) -> bool:
        return self.severity is not None and self.severity.strip().lower() in WARNING_SEVERITIES


@dataclass(frozen=True)
class ExtractionResult:
    """Diagnostics extracted from one tool run.

    `success` and `matched_count` together tell a clean pass apart from
    a tool that crashed without printing any location.
    """

    diagnostics: list[Diagnostic]
    success: bool
    matched_count: int
    output: str = ""

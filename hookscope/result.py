"""Hook outcome model for hookscope.

Contains:
- HookStatus: The four outcomes a hook can report
- HookOutcome: Status, diagnostics and raw output of one hook run
- build_outcome: Combine a success flag and diagnostics into an outcome
- outcome_from_extraction: Build an outcome from an ExtractionResult
"""

import os
from enum import Enum
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict

from hookscope.diagnostics.models import Diagnostic, ExtractionResult


class HookStatus(Enum):
    """Possible hook outcomes."""

    PASS = "pass"
    WARN = "warn"
    FAIL = "fail"
    ERROR = "error"


class HookOutcome(BaseModel):
    """Result of a hook run, handed to the scheduling layer."""

    model_config = ConfigDict(frozen=True)

    status: HookStatus
    diagnostics: tuple[Diagnostic, ...] = ()
    output: str = ""


def _on_modified_line(
    diagnostic: Diagnostic,
    modified_lines: dict[Path, set[int]],
    repo_root: Optional[Path],
) -> bool:
    base = repo_root if repo_root is not None else Path.cwd()
    path = Path(os.path.abspath(base / diagnostic.file))
    return diagnostic.line in modified_lines.get(path, set())


def build_outcome(
    success: bool,
    diagnostics: list[Diagnostic],
    output: str = "",
    modified_lines: Optional[dict[Path, set[int]]] = None,
    repo_root: Optional[Path] = None,
) -> HookOutcome:
    """Combine a tool's success flag and diagnostics into a HookOutcome.

    Args:
        success: Whether the tool exited with status zero.
        diagnostics: Diagnostics parsed from the tool output.
        output: Raw tool output, kept for auditing.
        modified_lines: Absolute file paths mapped to their changed line
            numbers. When given, diagnostics on untouched lines only warn.
        repo_root: Base for relative diagnostic paths (defaults to the
            current directory).

    Returns:
        PASS or ERROR when there are no diagnostics, depending on success;
        otherwise FAIL if any blocking diagnostic remains, else WARN.
    """
    if not diagnostics:
        status = HookStatus.PASS if success else HookStatus.ERROR
        return HookOutcome(status=status, output=output)

    blocking = [d for d in diagnostics if not d.is_warning]
    if modified_lines is not None:
        blocking = [d for d in blocking if _on_modified_line(d, modified_lines, repo_root)]

    status = HookStatus.FAIL if blocking else HookStatus.WARN
    return HookOutcome(status=status, diagnostics=tuple(diagnostics), output=output)


def outcome_from_extraction(
    result: ExtractionResult,
    modified_lines: Optional[dict[Path, set[int]]] = None,
    repo_root: Optional[Path] = None,
) -> HookOutcome:
    """Build a HookOutcome from an ExtractionResult."""
    return build_outcome(
        result.success,
        result.diagnostics,
        output=result.output,
        modified_lines=modified_lines,
        repo_root=repo_root,
    )

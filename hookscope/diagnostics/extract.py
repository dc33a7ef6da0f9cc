"""Turn raw tool output into Diagnostic records.

Contains:
- XMLLINT_PATTERN: Pattern for "path:line: message" output
- extract: Parse matching lines into diagnostics
- extract_from_output: Parse raw output and keep the process signals
"""

from typing import Iterable, Optional

from hookscope.diagnostics.exceptions import PatternError
from hookscope.diagnostics.models import Diagnostic, DiagnosticPattern, ExtractionResult


# example message:
#   path/to/file.xml:1: parser error : Error message
XMLLINT_PATTERN = DiagnosticPattern(r"^(?P<file>[^:]+):(?P<line>\d+):")


def _parse_number(
    value: Optional[str],
    group: str,
    pattern: DiagnosticPattern,
    line: str,
    minimum: int,
) -> int:
    if value is None or not value.strip().isdecimal():
        raise PatternError(
            f"Pattern {pattern.pattern!r} captured non-numeric {group} "
            f"{value!r} from line: {line}",
            pattern.pattern,
            line,
        )
    number = int(value)
    if number < minimum:
        raise PatternError(
            f"Pattern {pattern.pattern!r} captured {group} {number} "
            f"(must be >= {minimum}) from line: {line}",
            pattern.pattern,
            line,
        )
    return number


def extract(output_lines: Iterable[str], pattern: DiagnosticPattern) -> list[Diagnostic]:
    """Parse the lines that match a pattern into diagnostics.

    Lines that don't match are treated as noise (banners, summaries) and
    dropped. Each diagnostic keeps the entire line as its message.

    Args:
        output_lines: Tool output, one line per item.
        pattern: Pattern locating file and line in a diagnostic line.

    Returns:
        One Diagnostic per matching line, in output order.

    Raises:
        PatternError: If a matching line yields no file, or an unusable
            line or column.
    """
    diagnostics = []
    for line in output_lines:
        match = pattern.regex.search(line)
        if not match:
            continue

        file = match.group("file")
        if not file:
            raise PatternError(
                f"Pattern {pattern.pattern!r} captured no file from line: {line}",
                pattern.pattern,
                line,
            )

        line_text = match.group("line")
        column = column_text = None
        if pattern.has_column and match.group("column") is not None:
            column_text = match.group("column")
            column = _parse_number(column_text, "column", pattern, line, minimum=0)

        severity = match.group("severity") if pattern.has_severity else None

        diagnostics.append(
            Diagnostic(
                file=file,
                line=_parse_number(line_text, "line", pattern, line, minimum=1),
                column=column,
                line_text=line_text,
                column_text=column_text,
                severity=severity,
                message=line,
            )
        )
    return diagnostics


def extract_from_output(output: str, pattern: DiagnosticPattern, success: bool) -> ExtractionResult:
    """Parse a tool's raw output.

    Args:
        output: Captured output of the tool.
        pattern: Pattern locating file and line in a diagnostic line.
        success: Whether the tool exited with status zero.

    Returns:
        ExtractionResult carrying the diagnostics and the process signals.
    """
    # Split on newlines only; tools may print form feeds and other
    # separators that str.splitlines would break lines on
    lines = [line.rstrip("\r") for line in output.split("\n")]
    diagnostics = extract(lines, pattern)
    return ExtractionResult(
        diagnostics=diagnostics,
        success=success,
        matched_count=len(diagnostics),
        output=output,
    )

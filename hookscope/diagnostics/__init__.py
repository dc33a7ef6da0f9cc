"""Diagnostic extraction for hookscope.

- exceptions: PatternError
- models: DiagnosticPattern, Diagnostic, ExtractionResult
- extract: extract, extract_from_output, XMLLINT_PATTERN
"""

from hookscope.diagnostics.exceptions import PatternError
from hookscope.diagnostics.models import (
    Diagnostic,
    DiagnosticPattern,
    ExtractionResult,
)
from hookscope.diagnostics.extract import (
    XMLLINT_PATTERN,
    extract,
    extract_from_output,
)


__all__ = [
    "PatternError",
    "Diagnostic",
    "DiagnosticPattern",
    "ExtractionResult",
    "XMLLINT_PATTERN",
    "extract",
    "extract_from_output",
]

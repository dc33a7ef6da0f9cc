"""CLI command for extracting diagnostics from tool output."""

from pathlib import Path
from typing import Optional

import typer

from hookscope.cli.utils import REPO_OPTION_HELP, fail, resolve_repo
from hookscope.diagnostics import DiagnosticPattern, PatternError, extract_from_output
from hookscope.git import QueryError
from hookscope.result import HookStatus, outcome_from_extraction
from hookscope.user_config import ConfigError, get_pattern


def extract_command(
    pattern: Optional[str] = typer.Option(
        None,
        "--pattern",
        "-p",
        help="Regex with named groups 'file' and 'line'",
    ),
    pattern_name: Optional[str] = typer.Option(
        None,
        "--pattern-name",
        "-n",
        help="Name of a pattern in .hookscope/config.yaml (e.g. xmllint)",
    ),
    exit_code: int = typer.Option(
        0,
        "--exit-code",
        help="Exit status of the tool that produced the output",
    ),
    repo: Optional[Path] = typer.Option(None, "--repo", "-C", help=REPO_OPTION_HELP),
) -> None:
    """Parse tool output from stdin into diagnostics and report the outcome."""
    if (pattern is None) == (pattern_name is None):
        fail("Pass exactly one of --pattern or --pattern-name.")

    try:
        if pattern is not None:
            diagnostic_pattern = DiagnosticPattern(pattern)
        else:
            repo_root, _ = resolve_repo(repo)
            diagnostic_pattern = get_pattern(repo_root, pattern_name)

        output = typer.get_text_stream("stdin").read()
        result = extract_from_output(output, diagnostic_pattern, success=exit_code == 0)
    except (PatternError, ConfigError, QueryError) as e:
        fail(str(e))

    outcome = outcome_from_extraction(result)
    typer.echo(outcome.status.value)
    for diagnostic in outcome.diagnostics:
        typer.echo(f"  {diagnostic.message}")
    if outcome.status is HookStatus.ERROR and outcome.output:
        typer.echo(outcome.output, err=True)

    if outcome.status in (HookStatus.FAIL, HookStatus.ERROR):
        raise typer.Exit(1)

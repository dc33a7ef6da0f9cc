"""CLI entry point for hookscope.

Combines the query and extraction commands into a single application.
"""

import typer

from hookscope.cli.extract import extract_command
from hookscope.cli.main import main_callback
from hookscope.cli.query import branches_command, files_command, removals_command


# Main application
app = typer.Typer(
    name="hookscope",
    help="hookscope: repository introspection for git hooks",
    add_completion=False,
)

app.command("files")(files_command)
app.command("removals")(removals_command)
app.command("branches")(branches_command)
app.command("extract")(extract_command)

# Set the main callback (includes --version and --verbose flags)
app.callback(invoke_without_command=True)(main_callback)


__all__ = [
    "app",
    "files_command",
    "removals_command",
    "branches_command",
    "extract_command",
    "main_callback",
]

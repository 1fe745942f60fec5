"""ReviewForge CLI - Main application entry point.

Registers the top-level commands and the config sub-application.
"""

from __future__ import annotations

from typing import Optional

import typer

from reviewforge.cli.commands import (
    add_command,
    init_command,
    notify_command,
    queue_command,
    review_command,
    schedule_command,
)
from reviewforge.cli.config import config_app
from reviewforge.cli.console import set_verbose_mode

app = typer.Typer(
    name="reviewforge",
    help="Spaced-repetition review scheduling for vocabulary learning",
    add_completion=False,
    no_args_is_help=True,
)

app.command("init", rich_help_panel="Core")(init_command)
app.command("add", rich_help_panel="Core")(add_command)
app.command("review", rich_help_panel="Core")(review_command)
app.command("queue", rich_help_panel="Planning")(queue_command)
app.command("schedule", rich_help_panel="Planning")(schedule_command)
app.command("notify", rich_help_panel="Planning")(notify_command)
app.add_typer(config_app, name="config", rich_help_panel="System")


def version_callback(value: bool) -> None:
    """Show version and exit."""
    if value:
        from reviewforge import __version__

        typer.echo(f"ReviewForge version {__version__}")
        raise typer.Exit()


def verbose_callback(value: bool) -> None:
    """Enable debug logging and full tracebacks for errors."""
    if value:
        set_verbose_mode(True)


@app.callback()
def main(
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-V",
        callback=verbose_callback,
        is_eager=True,
        help="Enable verbose/debug output for all commands",
    ),
) -> None:
    """ReviewForge - spaced-repetition review scheduling.

    Core Commands:
        init     - Create a project in the current directory
        add      - Enroll items for a learner
        review   - Record a review attempt
        queue    - Show what to review now
        schedule - Plan upcoming reviews under a daily cap
        notify   - Show reminder timing and content

    Examples:
        reviewforge init --name arabic-core
        reviewforge add u1 kitab qalam bayt
        reviewforge review u1 kitab --accuracy 1 --response-ms 1800
        reviewforge queue u1 --limit 10
        reviewforge --verbose schedule u1 --max-per-day 20
    """
    pass


def cli_main() -> None:
    """Entry point for console_scripts."""
    app()


if __name__ == "__main__":
    cli_main()

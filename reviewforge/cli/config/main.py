"""Config subcommands."""

from __future__ import annotations

import typer

from reviewforge.cli.config import show, validate

app = typer.Typer(
    name="config",
    help="Configuration management",
    add_completion=False,
)

app.command("show")(show.command)
app.command("validate")(validate.command)


@app.callback()
def main() -> None:
    """Configuration management for ReviewForge.

    Configuration sections:
    - project: Project name
    - scheduling: Interval, quality, mastery, priority and notification thresholds
    - storage: Backend and data directory
    - logging: Level and optional log file

    Examples:
        reviewforge config show
        reviewforge config show --format json
        reviewforge config validate
    """
    pass

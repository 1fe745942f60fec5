"""Validate command - Check the project configuration."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from reviewforge.cli.base import ReviewForgeCommand
from reviewforge.cli.config.show import find_config_file
from reviewforge.core.exceptions import ReviewForgeError


class ValidateCommand(ReviewForgeCommand):
    """Load the configuration and report the first problem found."""

    def execute(self, project: Optional[Path] = None) -> int:
        try:
            self.load_config(project)
        except ReviewForgeError as e:
            return self.handle_error(e, "Configuration is invalid")

        config_file = find_config_file(self.get_project_path(project))
        if config_file is None:
            self.print_warning("No config file found; defaults are valid")
        else:
            self.print_success(f"{config_file.name} is valid")
        return 0


def command(
    project: Optional[Path] = typer.Option(
        None, "--project", "-p", help="Project directory"
    ),
) -> None:
    """Validate the configuration file and environment overrides.

    Examples:
        reviewforge config validate
    """
    exit_code = ValidateCommand().execute(project)
    if exit_code != 0:
        raise typer.Exit(code=exit_code)

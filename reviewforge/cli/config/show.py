"""Show command - Display current configuration."""

from __future__ import annotations

import json
from pathlib import Path
from typing import List, Optional

import typer
from rich.panel import Panel

from reviewforge.cli.base import ReviewForgeCommand
from reviewforge.core.config import Config
from reviewforge.core.config_loaders import CONFIG_FILENAMES
from reviewforge.core.exceptions import InvalidInputError, ReviewForgeError

OUTPUT_FORMATS = ("summary", "json")


def find_config_file(project_path: Path) -> Optional[Path]:
    """Return the config file load_config would read, if any."""
    for filename in CONFIG_FILENAMES:
        candidate = project_path / filename
        if candidate.exists():
            return candidate
    return None


class ShowCommand(ReviewForgeCommand):
    """Display current configuration."""

    def execute(self, project: Optional[Path] = None, format: str = "summary") -> int:
        """Show configuration.

        Args:
            project: Project directory
            format: Output format (summary/json)

        Returns:
            0 on success, 1 on error
        """
        try:
            if format not in OUTPUT_FORMATS:
                raise InvalidInputError(
                    f"Unknown format '{format}'; expected summary or json",
                    field="format",
                    value=format,
                )
            config = self.load_config(project)
        except ReviewForgeError as e:
            return self.handle_error(e, "Failed to show configuration")

        if format == "json":
            self.console.print_json(json.dumps(config.to_dict(), default=str))
            return 0

        lines = self.create_config_summary(config)
        self.console.print(
            Panel("\n".join(lines), border_style="cyan", title="Configuration")
        )

        config_file = find_config_file(self.get_project_path(project))
        if config_file is None:
            self.print_warning("Using default configuration (no file found)")
        else:
            self.print_info(f"Config file: {config_file}")
        return 0

    def create_config_summary(self, config: Config) -> List[str]:
        scheduling = config.scheduling
        notification = scheduling.notification
        return [
            f"[bold]Project:[/bold] {config.project.name}",
            f"[bold]Storage:[/bold] {config.storage.backend} at {config.data_path}",
            f"[bold]Log level:[/bold] {config.logging.level}",
            "",
            f"[bold]Ease factor:[/bold] {scheduling.interval.default_ease} "
            f"({scheduling.interval.min_ease}-{scheduling.interval.max_ease})",
            f"[bold]Max interval:[/bold] {scheduling.interval.max_interval} days",
            f"[bold]Daily cap:[/bold] {scheduling.distribution.max_per_day} reviews",
            f"[bold]Mastery threshold:[/bold] {scheduling.mastery.mastery_threshold:g}",
            f"[bold]Quiet hours:[/bold] {notification.quiet_hours_start:02d}:00"
            f"-{notification.quiet_hours_end:02d}:00",
        ]


def command(
    project: Optional[Path] = typer.Option(
        None, "--project", "-p", help="Project directory"
    ),
    format: str = typer.Option(
        "summary", "--format", "-f", help="Output format (summary/json)"
    ),
) -> None:
    """Show current configuration.

    Environment overrides (REVIEWFORGE_*) are applied before display.

    Examples:
        reviewforge config show
        reviewforge config show --format json
        reviewforge config show -p /path/to/project
    """
    exit_code = ShowCommand().execute(project, format)
    if exit_code != 0:
        raise typer.Exit(code=exit_code)

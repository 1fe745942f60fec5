"""Init command - Initialize a ReviewForge project.

Writes reviewforge.yaml with the default settings and creates the data
directory.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from reviewforge.cli.base import ReviewForgeCommand
from reviewforge.cli.console import tip
from reviewforge.core.config import Config, save_config
from reviewforge.core.config.base import ProjectConfig
from reviewforge.core.config_loaders import CONFIG_FILENAMES
from reviewforge.core.exceptions import ReviewForgeError, StorageError


class InitCommand(ReviewForgeCommand):
    """Initialize a ReviewForge project."""

    def execute(
        self,
        name: Optional[str] = None,
        project: Optional[Path] = None,
        force: bool = False,
    ) -> int:
        """Create the configuration file and data directory.

        Args:
            name: Project name (defaults to the directory name)
            project: Project directory
            force: Overwrite an existing configuration file

        Returns:
            0 on success, 1 on error
        """
        project_path = self.get_project_path(project)
        config_path = project_path / CONFIG_FILENAMES[0]

        if config_path.exists() and not force:
            self.print_warning(f"Already initialized: {config_path}")
            tip("Use --force to overwrite")
            return 0

        try:
            project_path.mkdir(parents=True, exist_ok=True)
            config = Config(project=ProjectConfig(name=name or project_path.name))
            config._base_path = project_path
            config.ensure_directories()
            written = save_config(config, config_path)
        except ReviewForgeError as e:
            return self.handle_error(e, "Project initialization failed")
        except OSError as e:
            error = StorageError(f"Could not write {config_path}: {e}")
            return self.handle_error(error, "Project initialization failed")

        self.print_success(f"Initialized project '{config.project.name}'")
        self.print_info(f"Config file: {written}")
        self.print_info(f"Data directory: {config.data_path}")
        return 0


def command(
    name: Optional[str] = typer.Option(
        None, "--name", "-n", help="Project name (default: directory name)"
    ),
    project: Optional[Path] = typer.Option(
        None, "--project", "-p", help="Project directory"
    ),
    force: bool = typer.Option(
        False, "--force", "-f", help="Overwrite existing configuration"
    ),
) -> None:
    """Initialize a ReviewForge project in the current directory.

    Examples:
        reviewforge init
        reviewforge init --name arabic-core -p ./vocab
    """
    exit_code = InitCommand().execute(name, project, force)
    if exit_code != 0:
        raise typer.Exit(code=exit_code)

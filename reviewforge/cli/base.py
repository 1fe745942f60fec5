"""Base class for CLI commands.

Commands load the project configuration, build a ReviewService over the
configured stores and print results with rich. Errors from the
ReviewForgeError hierarchy become an error panel and exit code 1.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional

from rich.console import Console

from reviewforge.cli.console import ErrorRenderer, get_console, is_verbose_mode
from reviewforge.core.cache import CacheConfig, InMemoryCache
from reviewforge.core.config import Config, load_config
from reviewforge.core.exceptions import ReviewForgeError
from reviewforge.core.logging import configure_logging
from reviewforge.engine.timestamps import parse_timestamp
from reviewforge.service import ReviewService
from reviewforge.storage.factory import get_stores


class ReviewForgeCommand(ABC):
    """Abstract base class for ReviewForge CLI commands.

    Subclasses implement execute() and return an exit code.

    Example:
        class MyCommand(ReviewForgeCommand):
            def execute(self, user_id: str, project: Optional[Path] = None) -> int:
                service = self.build_service(self.load_config(project))
                return 0
    """

    def __init__(self, console: Optional[Console] = None) -> None:
        self.console = console or get_console()

    @abstractmethod
    def execute(self, *args: Any, **kwargs: Any) -> int:
        """Execute the command and return an exit code (0 = success)."""
        pass

    # === Project Management ===

    def get_project_path(self, project: Optional[Path] = None) -> Path:
        """Resolve the project directory (defaults to the working directory)."""
        return (project or Path.cwd()).resolve()

    def load_config(self, project: Optional[Path] = None) -> Config:
        """Load configuration and apply its logging settings."""
        config = load_config(base_path=self.get_project_path(project))
        configure_logging(
            level="DEBUG" if is_verbose_mode() else config.logging.level,
            log_file=config.log_path,
            console=config.logging.console,
        )
        return config

    def build_service(self, config: Config) -> ReviewService:
        """Create a ReviewService over the configured stores."""
        states, history = get_stores(config)
        return ReviewService(
            states,
            history,
            config.scheduling,
            cache=InMemoryCache(CacheConfig(max_size=256)),
        )

    @staticmethod
    def resolve_now(at: Optional[str]) -> datetime:
        """Reference time from --at, or the current UTC time."""
        if at:
            return parse_timestamp(at, "--at")
        return datetime.now(timezone.utc)

    # === Output Methods ===

    def print_success(self, message: str) -> None:
        self.console.print(f"[green]✓[/green] {message}")

    def print_warning(self, message: str) -> None:
        self.console.print(f"[yellow]![/yellow] {message}")

    def print_info(self, message: str) -> None:
        self.console.print(f"[cyan]i[/cyan] {message}")

    # === Error Handling ===

    def handle_error(self, error: ReviewForgeError, context: str = "") -> int:
        """Render a ReviewForgeError and return exit code 1."""
        ErrorRenderer.render(error, context)
        return 1

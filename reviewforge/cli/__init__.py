"""ReviewForge CLI - Command-line interface for the review scheduler.

Main entry point is in main.py which registers all commands.

Usage:
    python -m reviewforge          # Run CLI
    reviewforge --help             # Installed console script
"""


def __getattr__(name: str):
    """Lazy import to avoid RuntimeWarning when running as module."""
    if name == "app":
        from reviewforge.cli.main import app

        return app
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = ["app"]

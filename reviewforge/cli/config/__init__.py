"""Config command group - Configuration inspection.

Provides commands for working with the project configuration:
- show: Display current configuration
- validate: Check the configuration file
"""

from __future__ import annotations

from reviewforge.cli.config.main import app as config_app

__all__ = ["config_app"]

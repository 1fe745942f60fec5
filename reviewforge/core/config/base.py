"""
Base configuration classes for project, storage and logging settings.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass
class ProjectConfig:
    """Project-level configuration."""

    name: str = "my-vocabulary"
    version: str = "1.0.0"


@dataclass
class StorageConfig:
    """Review state storage configuration."""

    backend: str = "jsonl"
    data_dir: str = ".reviewforge"
    states_file: str = "states.jsonl"
    history_file: str = "history.jsonl"


@dataclass
class LoggingConfig:
    """Logging configuration."""

    level: str = "INFO"
    file: Optional[str] = None  # Relative to the project directory
    console: bool = True

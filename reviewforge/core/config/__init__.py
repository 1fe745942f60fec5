"""
Configuration Management for ReviewForge.

This module provides the application's configuration system using a hierarchy
of dataclasses that map to YAML configuration files.

Public API
----------
    from reviewforge.core.config import Config, load_config
    from reviewforge.core.config import SchedulingConfig, DEFAULT_SCHEDULING_CONFIG

Architecture
------------
    config/
    ├── base.py          # ProjectConfig, StorageConfig, LoggingConfig
    ├── scheduling.py    # SchedulingConfig and one dataclass per engine concern
    └── config.py        # Main Config class
"""

# Main Config class
from reviewforge.core.config.config import Config

# Base configs
from reviewforge.core.config.base import LoggingConfig, ProjectConfig, StorageConfig

# Scheduling configs
from reviewforge.core.config.scheduling import (
    DEFAULT_SCHEDULING_CONFIG,
    DistributionConfig,
    IntervalConfig,
    MasteryConfig,
    NotificationConfig,
    PersonalizationConfig,
    PriorityConfig,
    QualityConfig,
    QueueConfig,
    ReviewTypeConfig,
    SchedulingConfig,
)

# Loading functions
from reviewforge.core.config_loaders import expand_env_vars, load_config, save_config

__all__ = [
    "Config",
    "LoggingConfig",
    "ProjectConfig",
    "StorageConfig",
    "DEFAULT_SCHEDULING_CONFIG",
    "DistributionConfig",
    "IntervalConfig",
    "MasteryConfig",
    "NotificationConfig",
    "PersonalizationConfig",
    "PriorityConfig",
    "QualityConfig",
    "QueueConfig",
    "ReviewTypeConfig",
    "SchedulingConfig",
    "expand_env_vars",
    "load_config",
    "save_config",
]

"""
Configuration Loading and Management Functions.

Handles loading, saving, and applying environment overrides to the
ReviewForge configuration.

Configuration precedence: 1. Env vars, 2. YAML file, 3. Defaults

Environment Variables
---------------------
    REVIEWFORGE_MAX_INTERVAL        scheduling.interval.max_interval (1..3650)
    REVIEWFORGE_MAX_DAILY_REVIEWS   scheduling.distribution.max_per_day (1..500)
    REVIEWFORGE_MASTERY_THRESHOLD   scheduling.mastery.mastery_threshold (0..100)
    REVIEWFORGE_QUIET_HOURS_START   scheduling.notification.quiet_hours_start (0..23)
    REVIEWFORGE_QUIET_HOURS_END     scheduling.notification.quiet_hours_end (0..23)
    REVIEWFORGE_LOG_LEVEL           logging.level
    REVIEWFORGE_DATA_DIR            storage.data_dir
"""

import os
import re
from dataclasses import replace
from pathlib import Path
from typing import Any, Optional, TYPE_CHECKING

import yaml

from reviewforge.core.env import LOG_LEVELS, get_env_choice, get_env_float, get_env_int
from reviewforge.core.exceptions import ConfigValidationError
from reviewforge.core.logging import get_logger

if TYPE_CHECKING:
    from reviewforge.core.config import Config

logger = get_logger(__name__)

CONFIG_FILENAMES = ("reviewforge.yaml", "config.yaml")


def expand_env_vars(value: Any) -> Any:
    """Recursively expand environment variables in config values.

    Handles strings with ${VAR_NAME} or ${VAR_NAME:default} syntax inside
    nested dictionaries and lists.

    Args:
        value: Configuration value (string, dict, list, or primitive)

    Returns:
        Value with all environment variables expanded
    """
    if isinstance(value, str):
        pattern = r"\$\{([^}:]+)(?::([^}]*))?\}"

        def replace_env_var(match: re.Match) -> str:
            var_name = match.group(1)
            default_value = match.group(2) if match.group(2) is not None else ""
            return os.environ.get(var_name, default_value)

        return re.sub(pattern, replace_env_var, value)
    elif isinstance(value, dict):
        return {k: expand_env_vars(v) for k, v in value.items()}
    elif isinstance(value, list):
        return [expand_env_vars(item) for item in value]
    return value


def _apply_env_overrides(config: "Config") -> "Config":
    """
    Apply environment variable overrides to configuration.

    Environment variables take precedence over config file values.
    The scheduling configs are frozen, so overrides rebuild them.
    """
    _apply_scheduling_overrides(config)
    _apply_logging_overrides(config)
    _apply_storage_overrides(config)
    config.validate()
    return config


def _apply_scheduling_overrides(config: "Config") -> None:
    """Apply interval, cap, mastery and quiet-hour overrides."""
    scheduling = config.scheduling

    max_interval = get_env_int(
        "REVIEWFORGE_MAX_INTERVAL", min_value=1, max_value=3650
    )
    if max_interval is not None:
        scheduling = replace(
            scheduling,
            interval=replace(scheduling.interval, max_interval=max_interval),
        )

    max_per_day = get_env_int(
        "REVIEWFORGE_MAX_DAILY_REVIEWS", min_value=1, max_value=500
    )
    if max_per_day is not None:
        scheduling = replace(
            scheduling,
            distribution=replace(scheduling.distribution, max_per_day=max_per_day),
        )

    threshold = get_env_float(
        "REVIEWFORGE_MASTERY_THRESHOLD", min_value=0.0, max_value=100.0
    )
    if threshold is not None:
        scheduling = replace(
            scheduling,
            mastery=replace(scheduling.mastery, mastery_threshold=threshold),
        )

    notification = scheduling.notification
    quiet_start = get_env_int(
        "REVIEWFORGE_QUIET_HOURS_START", min_value=0, max_value=23
    )
    if quiet_start is not None:
        notification = replace(notification, quiet_hours_start=quiet_start)
    quiet_end = get_env_int("REVIEWFORGE_QUIET_HOURS_END", min_value=0, max_value=23)
    if quiet_end is not None:
        notification = replace(notification, quiet_hours_end=quiet_end)
    scheduling = replace(scheduling, notification=notification)

    config.scheduling = scheduling


def _apply_logging_overrides(config: "Config") -> None:
    """Apply log level override."""
    level = get_env_choice("REVIEWFORGE_LOG_LEVEL", LOG_LEVELS)
    if level:
        config.logging.level = level


def _apply_storage_overrides(config: "Config") -> None:
    """Apply data directory override."""
    data_dir = os.environ.get("REVIEWFORGE_DATA_DIR")
    if data_dir and data_dir.strip():
        config.storage.data_dir = data_dir.strip()


def load_config(
    config_path: Optional[Path] = None, base_path: Optional[Path] = None
) -> "Config":
    """
    Load configuration from YAML file with environment variable overrides.

    Args:
        config_path: Path to config file. Defaults to reviewforge.yaml
            (or config.yaml) in base_path.
        base_path: Base path for the project. Defaults to current directory.

    Returns:
        Config object with all settings.

    Raises:
        ConfigValidationError: If the file is not valid YAML or a value
            violates a constraint.
    """
    # Lazy import to avoid circular dependency
    from reviewforge.core.config import Config

    base_path = base_path or Path.cwd()

    if config_path is None:
        for filename in CONFIG_FILENAMES:
            candidate = base_path / filename
            if candidate.exists():
                config_path = candidate
                break
        else:
            logger.debug("No config file found, using defaults", base_path=base_path)
            return _create_default_config(base_path)
    if not config_path.exists():
        logger.warning("Config file does not exist", path=config_path)
        return _create_default_config(base_path)

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigValidationError(
            f"Could not parse {config_path.name}: {e}", field=str(config_path)
        ) from e

    if not isinstance(data, dict):
        raise ConfigValidationError(
            f"{config_path.name} must contain a mapping at the top level",
            field=str(config_path),
        )

    try:
        config = Config.from_dict(data, base_path)
    except (TypeError, AttributeError) as e:
        raise ConfigValidationError(
            f"Invalid value in {config_path.name}: {e}", field=str(config_path)
        ) from e

    logger.debug("Loaded configuration", path=config_path)
    return _apply_env_overrides(config)


def _create_default_config(base_path: Path) -> "Config":
    """Create default configuration with environment overrides."""
    # Lazy import to avoid circular dependency
    from reviewforge.core.config import Config

    config = Config()
    config._base_path = base_path
    return _apply_env_overrides(config)


def save_config(config: "Config", config_path: Optional[Path] = None) -> Path:
    """Save configuration to YAML file.

    Returns:
        Path the configuration was written to.
    """
    if config_path is None:
        config_path = config._base_path / CONFIG_FILENAMES[0]

    config_dict = config.to_dict()

    with open(config_path, "w", encoding="utf-8") as f:
        yaml.dump(config_dict, f, default_flow_style=False, sort_keys=False)

    logger.info("Saved configuration", path=config_path)
    return config_path

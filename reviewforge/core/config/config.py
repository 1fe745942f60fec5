"""
Main configuration class for ReviewForge.

This module provides the Config dataclass that aggregates all sub-configs
and handles validation, path management and dictionary round-trips.

Configuration Hierarchy
-----------------------
    Config
    ├── ProjectConfig      # Project name
    ├── SchedulingConfig   # Every engine threshold (frozen)
    │   ├── IntervalConfig
    │   ├── QualityConfig
    │   ├── MasteryConfig
    │   ├── PriorityConfig
    │   ├── ReviewTypeConfig
    │   ├── PersonalizationConfig
    │   ├── QueueConfig
    │   ├── DistributionConfig
    │   └── NotificationConfig
    ├── StorageConfig      # Data directory and file names
    └── LoggingConfig      # Level and optional log file

Usage Example
-------------
    config = load_config()
    cap = config.scheduling.distribution.max_per_day
    update = apply_review(state, event, now=now, config=config.scheduling)
"""

from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, Optional

from reviewforge.core.config.base import LoggingConfig, ProjectConfig, StorageConfig
from reviewforge.core.config.scheduling import (
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
from reviewforge.core.exceptions import ConfigValidationError

STORAGE_BACKENDS = frozenset(["jsonl", "memory"])


@dataclass
class Config:
    """Main ReviewForge configuration."""

    project: ProjectConfig = field(default_factory=ProjectConfig)
    scheduling: SchedulingConfig = field(default_factory=SchedulingConfig)
    storage: StorageConfig = field(default_factory=StorageConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    # Runtime paths (set after loading)
    _base_path: Path = field(default_factory=Path.cwd, repr=False)

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        self.validate()

    def validate(self) -> None:
        """Check cross-field constraints.

        Raises:
            ConfigValidationError: On the first violated constraint
        """
        interval = self.scheduling.interval
        if not interval.min_ease <= interval.default_ease <= interval.max_ease:
            raise ConfigValidationError(
                "scheduling.interval.default_ease must lie within [min_ease, max_ease]",
                field="scheduling.interval.default_ease",
                value=interval.default_ease,
            )
        if interval.min_ease <= 0:
            raise ConfigValidationError(
                "scheduling.interval.min_ease must be positive",
                field="scheduling.interval.min_ease",
                value=interval.min_ease,
            )
        if interval.max_interval < 1:
            raise ConfigValidationError(
                "scheduling.interval.max_interval must be at least 1 day",
                field="scheduling.interval.max_interval",
                value=interval.max_interval,
            )

        quality = self.scheduling.quality
        for name in ("accuracy_weight", "response_time_weight", "difficulty_weight"):
            if getattr(quality, name) < 0:
                raise ConfigValidationError(
                    f"scheduling.quality.{name} must not be negative",
                    field=f"scheduling.quality.{name}",
                    value=getattr(quality, name),
                )
        if quality.optimal_response_ms <= 0:
            raise ConfigValidationError(
                "scheduling.quality.optimal_response_ms must be positive",
                field="scheduling.quality.optimal_response_ms",
                value=quality.optimal_response_ms,
            )

        if self.scheduling.distribution.max_per_day < 1:
            raise ConfigValidationError(
                "scheduling.distribution.max_per_day must be at least 1",
                field="scheduling.distribution.max_per_day",
                value=self.scheduling.distribution.max_per_day,
            )

        notification = self.scheduling.notification
        for name in ("quiet_hours_start", "quiet_hours_end", "default_hour"):
            hour = getattr(notification, name)
            if not 0 <= hour <= 23:
                raise ConfigValidationError(
                    f"scheduling.notification.{name} must be an hour in 0..23",
                    field=f"scheduling.notification.{name}",
                    value=hour,
                )

        if self.storage.backend not in STORAGE_BACKENDS:
            raise ConfigValidationError(
                f"storage.backend must be one of {sorted(STORAGE_BACKENDS)}",
                field="storage.backend",
                value=self.storage.backend,
            )

        if self.storage.data_dir in ("/", "\\", ""):
            raise ConfigValidationError(
                "storage.data_dir must not be root or empty",
                field="storage.data_dir",
                value=self.storage.data_dir,
            )

    @property
    def data_path(self) -> Path:
        """Get absolute path to data directory."""
        data_dir = Path(self.storage.data_dir)
        if data_dir.is_absolute():
            return data_dir
        return self._base_path / data_dir

    @property
    def states_path(self) -> Path:
        """Get path to the review state file."""
        return self.data_path / self.storage.states_file

    @property
    def history_path(self) -> Path:
        """Get path to the session history file."""
        return self.data_path / self.storage.history_file

    @property
    def log_path(self) -> Optional[Path]:
        """Get path to the log file, if file logging is enabled."""
        if not self.logging.file:
            return None
        log_file = Path(self.logging.file)
        if log_file.is_absolute():
            return log_file
        return self._base_path / log_file

    def ensure_directories(self) -> None:
        """Create all required directories."""
        self.data_path.mkdir(parents=True, exist_ok=True)

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        result: dict[str, Any] = {}
        for key, value in asdict(self).items():
            if key.startswith("_"):
                continue
            result[key] = value
        return result

    @staticmethod
    def _filter_fields(cls_type: Any, data: Optional[Dict[str, Any]]) -> Dict[str, Any]:
        """Filter dict to only keys that match dataclass fields, handling None."""
        if not data:
            return {}
        valid_keys = {f.name for f in fields(cls_type)}
        return {k: v for k, v in data.items() if k in valid_keys}

    @classmethod
    def from_dict(
        cls, data: Dict[str, Any], base_path: Optional[Path] = None
    ) -> "Config":
        """Create Config from dictionary."""
        # Import here to avoid circular dependency
        from reviewforge.core.config_loaders import expand_env_vars

        data = expand_env_vars(data or {})

        config = cls(
            project=ProjectConfig(
                **cls._filter_fields(ProjectConfig, data.get("project"))
            ),
            scheduling=cls._parse_scheduling_config(data),
            storage=StorageConfig(
                **cls._filter_fields(StorageConfig, data.get("storage"))
            ),
            logging=LoggingConfig(
                **cls._filter_fields(LoggingConfig, data.get("logging"))
            ),
        )

        if base_path:
            config._base_path = base_path

        return config

    @classmethod
    def _parse_scheduling_config(cls, data: Dict[str, Any]) -> SchedulingConfig:
        """Parse the scheduling section with one nested config per concern."""
        scheduling_data = data.get("scheduling") or {}
        return SchedulingConfig(
            interval=IntervalConfig(
                **cls._filter_fields(IntervalConfig, scheduling_data.get("interval"))
            ),
            quality=QualityConfig(
                **cls._filter_fields(QualityConfig, scheduling_data.get("quality"))
            ),
            mastery=MasteryConfig(
                **cls._filter_fields(MasteryConfig, scheduling_data.get("mastery"))
            ),
            priority=PriorityConfig(
                **cls._filter_fields(PriorityConfig, scheduling_data.get("priority"))
            ),
            review_type=ReviewTypeConfig(
                **cls._filter_fields(
                    ReviewTypeConfig, scheduling_data.get("review_type")
                )
            ),
            personalization=PersonalizationConfig(
                **cls._filter_fields(
                    PersonalizationConfig, scheduling_data.get("personalization")
                )
            ),
            queue=QueueConfig(
                **cls._filter_fields(QueueConfig, scheduling_data.get("queue"))
            ),
            distribution=DistributionConfig(
                **cls._filter_fields(
                    DistributionConfig, scheduling_data.get("distribution")
                )
            ),
            notification=NotificationConfig(
                **cls._filter_fields(
                    NotificationConfig, scheduling_data.get("notification")
                )
            ),
        )

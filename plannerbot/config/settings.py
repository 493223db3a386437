"""Settings management using Pydantic for type validation and configuration."""

import logging
import os
from pathlib import Path
from typing import Any, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import yaml
from pydantic import Field, PrivateAttr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..utils.dates import WEEKDAYS
from ..utils.logging import get_log_level

logger = logging.getLogger(__name__)

ENV_PREFIX = "PLANNERBOT_"

# YAML section -> {yaml key: settings field}
_YAML_SECTIONS: dict[str, dict[str, str]] = {
    "recurrence": {
        "week_starts_on": "week_starts_on",
        "default_timezone": "default_timezone",
        "max_iterations": "max_iterations",
        "fail_on_iteration_ceiling": "fail_on_iteration_ceiling",
    },
    "logging": {
        "level": "log_level",
        "colors": "log_colors",
    },
}


class PlannerBotSettings(BaseSettings):
    """Application settings with environment variable and YAML file support."""

    _explicit_args: set = PrivateAttr(default_factory=set)
    _env_vars_set: set = PrivateAttr(default_factory=set)

    # Recurrence engine
    week_starts_on: str = Field(
        default="sunday", description="First weekday of a calendar week (sunday, monday, ...)"
    )
    default_timezone: str = Field(
        default="UTC", description="IANA zone used to reduce timestamps to calendar days"
    )
    max_iterations: int = Field(
        default=5000, ge=1, description="Hard iteration ceiling for a single expansion walk"
    )
    fail_on_iteration_ceiling: bool = Field(
        default=False, description="Raise instead of logging when the iteration ceiling is hit"
    )

    # Logging
    log_level: str = Field(
        default="INFO", description="Console log level: DEBUG, VERBOSE, INFO, WARNING, ERROR"
    )
    log_colors: bool = Field(default=True, description="Enable colored console output")

    # File paths
    config_dir: Path = Field(default_factory=lambda: Path.home() / ".config" / "plannerbot")
    config_file: Optional[Path] = Field(
        default=None, description="Explicit YAML config file (skips the default lookup)"
    )

    model_config = SettingsConfigDict(
        env_prefix=ENV_PREFIX,
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        validate_assignment=True,
    )

    def __init__(self, **kwargs: Any) -> None:
        env_vars_set = {
            key[len(ENV_PREFIX) :].lower() for key in os.environ if key.startswith(ENV_PREFIX)
        }

        super().__init__(**kwargs)

        self._explicit_args = set(kwargs.keys())
        self._env_vars_set = env_vars_set

        self._load_yaml_config()

    @field_validator("week_starts_on")
    @classmethod
    def _validate_week_start(cls, value: str) -> str:
        name = value.strip().lower()
        if name not in WEEKDAYS:
            raise ValueError(f"week_starts_on must be a weekday name, got {value!r}")
        return name

    @field_validator("default_timezone")
    @classmethod
    def _validate_timezone(cls, value: str) -> str:
        try:
            ZoneInfo(value)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ValueError(f"Unknown timezone: {value!r}") from e
        return value

    @field_validator("log_level")
    @classmethod
    def _validate_log_level(cls, value: str) -> str:
        get_log_level(value)
        return value.upper()

    def _find_config_file(self) -> Optional[Path]:
        """Find the YAML configuration file, if any."""
        if self.config_file is not None:
            return self.config_file if self.config_file.exists() else None

        project_config = Path.cwd() / "config" / "config.yaml"
        if project_config.exists():
            return project_config

        user_config = self.config_dir / "config.yaml"
        if user_config.exists():
            return user_config

        return None

    def _load_section(self, section: str, section_data: dict) -> None:
        for yaml_key, field_name in _YAML_SECTIONS[section].items():
            if (
                yaml_key in section_data
                and field_name not in self._explicit_args
                and field_name not in self._env_vars_set
            ):
                setattr(self, field_name, section_data[yaml_key])

    def _load_yaml_config(self) -> None:
        """Load configuration from YAML file if it exists."""
        config_file = self._find_config_file()
        if not config_file:
            return

        try:
            with config_file.open(encoding="utf-8") as f:
                config_data = yaml.safe_load(f)

            if not config_data:
                return

            for section in _YAML_SECTIONS:
                section_data = config_data.get(section)
                if isinstance(section_data, dict):
                    self._load_section(section, section_data)

            logger.debug("Loaded YAML config from %s", config_file)

        except Exception as e:
            # Don't fail if YAML loading fails, just continue with defaults/env vars
            logger.warning("Could not load YAML config from %s: %s", config_file, e)

    @property
    def week_start_index(self) -> int:
        """Python weekday index of ``week_starts_on``."""
        return WEEKDAYS[self.week_starts_on]

    @property
    def timezone(self) -> ZoneInfo:
        return ZoneInfo(self.default_timezone)


_settings_instance: Optional[PlannerBotSettings] = None


def get_settings() -> PlannerBotSettings:
    """Get the global settings instance, creating it lazily if needed."""
    if globals()["_settings_instance"] is None:
        globals()["_settings_instance"] = PlannerBotSettings()
    return globals()["_settings_instance"]


def reset_settings() -> None:
    """Reset the global settings instance (primarily for testing)."""
    globals()["_settings_instance"] = None

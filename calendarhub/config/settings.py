"""CalendarHub settings: defaults, YAML file, CALENDARHUB_* environment variables."""

import logging
import os
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import BaseModel, Field, PrivateAttr
from pydantic_settings import BaseSettings, SettingsConfigDict

from calendarhub.sources.defaults import DEFAULT_SOURCES
from calendarhub.sources.manager import build_sources
from calendarhub.sources.models import CalendarSource

logger = logging.getLogger(__name__)

ENV_PREFIX = "CALENDARHUB_"


class LoggingSettings(BaseModel):
    """Logging configuration settings."""

    # Console Logging
    console_enabled: bool = Field(default=True, description="Enable console logging")
    console_level: str = Field(
        default="INFO",
        description="Console log level: DEBUG, VERBOSE, INFO, WARNING, ERROR, CRITICAL",
    )
    console_colors: bool = Field(
        default=True, description="Enable colored console output (auto-detected)"
    )

    # File Logging
    file_enabled: bool = Field(default=False, description="Enable file logging")
    file_level: str = Field(default="DEBUG", description="File log level")
    file_directory: Optional[str] = Field(
        default=None, description="Log directory (defaults to data_dir/logs)"
    )
    file_prefix: str = Field(default="calendarhub", description="Log file prefix")
    max_log_files: int = Field(default=5, description="Rotated log files to keep")

    # Third-party Libraries
    third_party_level: str = Field(
        default="WARNING", description="Log level for third-party libraries"
    )


class ServerSettings(BaseModel):
    """HTTP API settings."""

    host: str = Field(default="127.0.0.1", description="Host address for the web server")
    port: int = Field(default=8080, description="Port for the web server")
    max_upload_size_mb: int = Field(default=10, description="Maximum request body size in MB")

    @property
    def max_upload_size_bytes(self) -> int:
        return self.max_upload_size_mb * 1024 * 1024


class CalendarHubSettings(BaseSettings):
    """Application settings.

    Priority: explicit arguments > environment (``CALENDARHUB_*``) > YAML > defaults.
    """

    app_name: str = Field(default="CalendarHub", description="Application name")

    # Calendar sources
    sources: list[CalendarSource] = Field(
        default_factory=lambda: list(DEFAULT_SOURCES), description="Available calendar sources"
    )
    default_source_id: Optional[str] = Field(
        default=None, description="Import target when none is selected"
    )
    load_sample_events: bool = Field(
        default=False, description="Seed the calendar with demo events on startup"
    )

    # File Paths
    config_file: Optional[Path] = Field(default=None, description="Explicit YAML config path")
    config_dir: Path = Field(default_factory=lambda: Path.home() / ".config" / "calendarhub")
    data_dir: Path = Field(default_factory=lambda: Path.home() / ".local" / "share" / "calendarhub")

    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    server: ServerSettings = Field(default_factory=ServerSettings)

    model_config = SettingsConfigDict(
        env_prefix=ENV_PREFIX,
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    _explicit_args: set[str] = PrivateAttr(default_factory=set)
    _env_vars_set: set[str] = PrivateAttr(default_factory=set)
    _loaded_config_file: Optional[Path] = PrivateAttr(default=None)

    def __init__(self, **kwargs: Any) -> None:
        env_vars_set = {
            key[len(ENV_PREFIX) :].lower() for key in os.environ if key.upper().startswith(ENV_PREFIX)
        }

        super().__init__(**kwargs)

        self._explicit_args = set(kwargs.keys())
        self._env_vars_set = env_vars_set

        self._load_yaml_config()

    @property
    def loaded_config_file(self) -> Optional[Path]:
        """YAML file that was applied, if any."""
        return self._loaded_config_file

    def _is_overridden(self, setting: str) -> bool:
        if setting in self._explicit_args:
            return True
        return any(
            env == setting or env.startswith(f"{setting}__") for env in self._env_vars_set
        )

    def _find_config_file(self) -> Optional[Path]:
        """Find config file: explicit path, then project directory, then user config dir."""
        if self.config_file is not None:
            return self.config_file if self.config_file.exists() else None

        project_root = Path(__file__).parent.parent.parent
        project_config = project_root / "config" / "config.yaml"
        if project_config.exists():
            return project_config

        user_config = self.config_dir / "config.yaml"
        if user_config.exists():
            return user_config

        return None

    def _load_sources_config(self, config_data: dict) -> None:
        if "sources" in config_data and not self._is_overridden("sources"):
            self.sources = build_sources(config_data["sources"] or [])

    def _load_basic_settings(self, config_data: dict) -> None:
        for setting in ["app_name", "default_source_id", "load_sample_events"]:
            if setting in config_data and not self._is_overridden(setting):
                setattr(self, setting, config_data[setting])

    def _load_section(self, config_data: dict, section: str) -> None:
        if not isinstance(config_data.get(section), dict) or self._is_overridden(section):
            return

        target = getattr(self, section)
        merged = target.model_validate({**target.model_dump(), **config_data[section]})
        setattr(self, section, merged)

    def _load_yaml_config(self) -> None:
        """Load configuration from YAML file if it exists."""
        config_file = self._find_config_file()
        if not config_file:
            return

        try:
            with config_file.open(encoding="utf-8") as f:
                config_data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            logger.warning("Ignoring unreadable config file %s: %s", config_file, e)
            return

        if not isinstance(config_data, dict):
            return

        self._load_sources_config(config_data)
        self._load_basic_settings(config_data)
        self._load_section(config_data, "logging")
        self._load_section(config_data, "server")
        self._loaded_config_file = config_file

    @property
    def default_source(self) -> Optional[CalendarSource]:
        """Configured default import target, falling back to the first source."""
        for source in self.sources:
            if source.id == self.default_source_id:
                return source
        return self.sources[0] if self.sources else None


# Global settings management
_settings_instance: Optional[CalendarHubSettings] = None


def get_settings() -> CalendarHubSettings:
    """Get the global settings instance, creating it lazily if needed."""
    global _settings_instance
    if _settings_instance is None:
        _settings_instance = CalendarHubSettings()
    return _settings_instance


def reset_settings() -> None:
    """Drop the cached settings so the next get_settings() reloads them."""
    global _settings_instance
    _settings_instance = None

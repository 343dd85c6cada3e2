"""12-factor configuration adapter using environment variables and TOML config."""

import os
import tomllib
from datetime import timedelta
from pathlib import Path
from typing import Any
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from mvg_home.domain.errors import ConfigurationError
from mvg_home.domain.models.walk_plan import WalkPlan

APP_DIR_NAME = "mvg-home"
CONFIG_FILE_NAME = "home.toml"

# TOML key -> AppConfig field, per section
_HOME_KEYS = {
    "station_id": "station_id",
    "station_name": "station_name",
    "walk_minutes": "walk_minutes",
    "buffer_minutes": "buffer_minutes",
    "max_results": "max_results",
    "ignore_lines": "ignore_lines",
    "include_cancelled": "include_cancelled",
    "timezone": "timezone",
}
_API_KEYS = {
    "base_url": "mvg_api_base_url",
    "timeout": "mvg_api_timeout",
    "limit": "mvg_api_limit",
    "proxy_discovery_timeout": "proxy_discovery_timeout",
    "ca_file": "ca_file",
}


def default_config_path() -> Path:
    """Location of the config file below ``$XDG_CONFIG_HOME``."""
    config_home = os.environ.get("XDG_CONFIG_HOME") or str(Path.home() / ".config")
    return Path(config_home) / APP_DIR_NAME / CONFIG_FILE_NAME


class AppConfig(BaseSettings):
    """Application configuration following 12-factor principles."""

    model_config = SettingsConfigDict(
        env_prefix="MVG_HOME_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        validate_assignment=True,
    )

    # Home station and walk plan
    station_id: str | None = Field(
        default=None, description="Global MVG station id to depart from (e.g., de:09162:70)"
    )
    station_name: str | None = Field(default=None, description="Display name of the station")
    walk_minutes: int = Field(default=5, description="Minutes it takes to walk to the platform")
    buffer_minutes: int = Field(default=2, description="Safety buffer on top of the walk")
    max_results: int = Field(default=5, description="Maximum number of departures to show")
    ignore_lines: list[str] = Field(
        default_factory=list,
        description="Line label prefixes to ignore (e.g., 'N' for night lines)",
    )
    include_cancelled: bool = Field(
        default=False, description="Show departures the API reports as cancelled"
    )
    timezone: str = Field(
        default="Europe/Berlin",
        description="Timezone for displaying departure times (IANA timezone name)",
    )

    # MVG API configuration
    mvg_api_base_url: str = Field(
        default="https://www.mvg.de/api/bgw-pt/v3/", description="Base URL of the MVG API"
    )
    mvg_api_timeout: float = Field(
        default=10, description="Timeout for MVG API requests in seconds"
    )
    mvg_api_limit: int = Field(
        default=20, description="Maximum number of departures to fetch per request"
    )
    proxy_discovery_timeout: float = Field(
        default=2.0, description="Seconds to wait for system proxy discovery"
    )
    ca_file: str | None = Field(
        default=None, description="Additional CA bundle for TLS verification"
    )

    # TOML config file path; None means the default location, if it exists
    config_file: str | None = Field(default=None, description="Path to TOML configuration file")

    @field_validator("walk_minutes", "buffer_minutes")
    @classmethod
    def validate_non_negative(cls, v: int) -> int:
        """Validate walking time and buffer are not negative."""
        if v < 0:
            raise ValueError("walk and buffer minutes must not be negative")
        return v

    @field_validator("max_results", "mvg_api_limit")
    @classmethod
    def validate_positive_count(cls, v: int) -> int:
        """Validate counts are at least one."""
        if v < 1:
            raise ValueError("max_results and mvg_api_limit must be at least 1")
        return v

    @field_validator("mvg_api_timeout", "proxy_discovery_timeout")
    @classmethod
    def validate_positive_timeout(cls, v: float) -> float:
        """Validate timeouts are positive."""
        if v <= 0:
            raise ValueError("timeouts must be positive")
        return v

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, v: str) -> str:
        """Validate timezone is a known IANA name."""
        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ValueError(f"unknown timezone: {v}") from e
        return v

    @field_validator("mvg_api_base_url")
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        """Ensure the base URL ends with a slash so endpoints can be appended."""
        return v if v.endswith("/") else f"{v}/"

    @property
    def walk_plan(self) -> WalkPlan:
        return WalkPlan(
            walk_duration=timedelta(minutes=self.walk_minutes),
            buffer=timedelta(minutes=self.buffer_minutes),
        )

    @property
    def tzinfo(self) -> ZoneInfo:
        return ZoneInfo(self.timezone)

    def _resolve_config_path(self) -> Path | None:
        """Return the config file to read, or None if there is none."""
        if self.config_file:
            config_path = Path(self.config_file).expanduser()
            if not config_path.exists():
                raise FileNotFoundError(f"Configuration file not found: {config_path}")
            return config_path

        config_path = default_config_path()
        return config_path if config_path.exists() else None

    def _apply_section(self, section: Any, keys: dict[str, str], name: str) -> None:
        if not isinstance(section, dict):
            raise ValueError(f"TOML config '{name}' must be a table")
        for toml_key, field_name in keys.items():
            if toml_key in section:
                setattr(self, field_name, section[toml_key])

    def load_file(self) -> dict[str, Any]:
        """Load the TOML file and apply its [home] and [api] settings.

        Returns the parsed TOML data, or an empty dict if no file exists at
        the default location.
        """
        config_path = self._resolve_config_path()
        if config_path is None:
            return {}

        with open(config_path, "rb") as f:
            toml_data = tomllib.load(f)

        self._apply_section(toml_data.get("home", {}), _HOME_KEYS, "home")
        self._apply_section(toml_data.get("api", {}), _API_KEYS, "api")
        return toml_data

    def require_station_id(self) -> str:
        """Return the configured station id."""
        if not self.station_id:
            raise ConfigurationError(
                "No home station configured. Set station_id in the [home] section of "
                f"{default_config_path()} or MVG_HOME_STATION_ID."
            )
        return self.station_id


def load_config(config_file: str | None = None, **overrides: Any) -> AppConfig:
    """Load configuration from environment and TOML, then apply overrides.

    Raises:
        ConfigurationError: If the file is missing, unparsable or values are invalid.
    """
    try:
        config = AppConfig(config_file=config_file) if config_file else AppConfig()
        config.load_file()
        for field_name, value in overrides.items():
            if value is not None:
                setattr(config, field_name, value)
    except FileNotFoundError as e:
        raise ConfigurationError(str(e)) from e
    except OSError as e:
        raise ConfigurationError(f"Failed to read configuration: {e}") from e
    except tomllib.TOMLDecodeError as e:
        raise ConfigurationError(f"Failed to parse configuration: {e}") from e
    except (ValidationError, ValueError) as e:
        raise ConfigurationError(f"Invalid configuration: {e}") from e
    return config

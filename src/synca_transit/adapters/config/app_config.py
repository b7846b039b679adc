"""12-factor configuration adapter using environment variables and TOML config."""

import tomllib
from pathlib import Path
from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from synca_transit.application.services.nearby_aggregator import AggregatorSettings

MAX_SEARCH_RADIUS_METERS = 4000


class AppConfig(BaseSettings):
    """Application configuration following 12-factor principles."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Server configuration
    host: str = Field(default="0.0.0.0", description="Host to bind the server to")
    port: int = Field(default=8000, description="Port to bind the server to")
    reload: bool = Field(default=False, description="Enable auto-reload for development")
    log_level: str = Field(default="INFO", description="Root log level")

    # ODPT API configuration
    odpt_api_key: str | None = Field(
        default=None, description="Consumer key for the ODPT API (acl:consumerKey)"
    )
    odpt_api_base_url: str = Field(
        default="https://api.odpt.org/api/v4", description="Base URL of the ODPT API"
    )
    odpt_api_timeout: int = Field(default=10, description="Timeout for ODPT requests in seconds")

    # Overpass API configuration
    overpass_api_url: str = Field(
        default="https://overpass.osm.jp/api/interpreter",
        description="Overpass API interpreter endpoint",
    )
    overpass_timeout: int = Field(
        default=15, description="Timeout for Overpass requests in seconds"
    )
    overpass_min_delay_seconds: float = Field(
        default=1.0, description="Minimum delay between Overpass requests in seconds"
    )

    # JR East train information page
    jreast_train_info_url: str = Field(
        default="https://traininfo.jreast.co.jp/train_info/kanto.aspx",
        description="JR East Kanto area train information page",
    )
    jreast_timeout: int = Field(default=10, description="Timeout for JR East requests in seconds")

    # Nearby aggregation
    search_radius_meters: int = Field(
        default=3000, description="Radius for the nearby station search in meters"
    )
    max_nearby_stations: int = Field(default=3, description="Number of stations to display")
    status_refresh_interval_seconds: int = Field(
        default=180, description="Interval between railway status refreshes in seconds"
    )
    railway_cache_ttl_seconds: int = Field(
        default=24 * 60 * 60, description="Lifetime of the station to railway index in seconds"
    )
    geolocation_timeout_seconds: float = Field(
        default=10.0, description="Timeout for obtaining the device position in seconds"
    )
    station_railway_table_size: int = Field(
        default=64, description="Capacity of the per-session station to railway table"
    )

    # Rate limiting configuration
    rate_limit_per_minute: int = Field(
        default=100,
        description="Maximum number of requests allowed per IP address per minute",
    )

    # Delay alerts
    discord_webhook_url: str | None = Field(
        default=None, description="Discord webhook receiving delay alerts"
    )
    delay_alert_lines: list[str] = Field(
        default_factory=lambda: ["高崎線", "宇都宮線"],
        description="Line names watched for delay alerts",
    )
    delay_alert_interval_seconds: int = Field(
        default=300, description="Interval between delay alert checks in seconds"
    )
    cron_secret: str | None = Field(
        default=None, description="Bearer token required by the cron trigger endpoint"
    )

    # Optional TOML config file overriding the [transit] and [alerts] settings
    config_file: str | None = Field(
        default=None,
        description="Path to TOML configuration file",
    )

    @field_validator("search_radius_meters")
    @classmethod
    def validate_search_radius(cls, v: int) -> int:
        """Validate the search radius is positive and within what the locators accept."""
        if v <= 0 or v > MAX_SEARCH_RADIUS_METERS:
            raise ValueError(
                f"search_radius_meters must be between 1 and {MAX_SEARCH_RADIUS_METERS}"
            )
        return v

    @field_validator("max_nearby_stations")
    @classmethod
    def validate_max_nearby_stations(cls, v: int) -> int:
        """Validate at least one station is displayed."""
        if v < 1:
            raise ValueError("max_nearby_stations must be at least 1")
        return v

    @field_validator(
        "status_refresh_interval_seconds",
        "railway_cache_ttl_seconds",
        "delay_alert_interval_seconds",
    )
    @classmethod
    def validate_positive_interval(cls, v: int) -> int:
        """Validate intervals are positive."""
        if v <= 0:
            raise ValueError("intervals must be positive")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate the log level is one the logging module knows."""
        level = v.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError("log_level must be DEBUG, INFO, WARNING, ERROR or CRITICAL")
        return level

    @classmethod
    def for_testing(cls, **overrides: Any) -> "AppConfig":
        """Build a configuration that ignores the environment's .env file."""
        return cls(_env_file=None, **overrides)

    def load_toml(self) -> dict[str, Any]:
        """Load the TOML file and apply its [transit] and [alerts] tables.

        Returns the parsed TOML data. Does nothing when no config_file is set.
        """
        if not self.config_file:
            return {}

        config_path = Path(self.config_file)
        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        with open(config_path, "rb") as f:
            toml_data = tomllib.load(f)

        transit = toml_data.get("transit", {})
        if not isinstance(transit, dict):
            raise ValueError("TOML config 'transit' must be a table")
        for key in (
            "search_radius_meters",
            "max_nearby_stations",
            "status_refresh_interval_seconds",
            "railway_cache_ttl_seconds",
            "geolocation_timeout_seconds",
            "station_railway_table_size",
        ):
            if key in transit:
                setattr(self, key, transit[key])

        alerts = toml_data.get("alerts", {})
        if not isinstance(alerts, dict):
            raise ValueError("TOML config 'alerts' must be a table")
        if "lines" in alerts:
            if not isinstance(alerts["lines"], list):
                raise ValueError("TOML config 'alerts.lines' must be a list")
            self.delay_alert_lines = [str(line) for line in alerts["lines"]]
        if "interval_seconds" in alerts:
            self.delay_alert_interval_seconds = alerts["interval_seconds"]
        if "discord_webhook_url" in alerts:
            self.discord_webhook_url = alerts["discord_webhook_url"]

        return toml_data

    def aggregator_settings(self) -> AggregatorSettings:
        """Settings for a nearby aggregation session."""
        return AggregatorSettings(
            radius_meters=self.search_radius_meters,
            max_stations=self.max_nearby_stations,
            status_refresh_interval_seconds=float(self.status_refresh_interval_seconds),
            geolocation_timeout_seconds=self.geolocation_timeout_seconds,
            railway_table_size=self.station_railway_table_size,
        )

"""
Unified configuration state for the balance monitor.

A single YAML (or JSON) file describes the sink, the watchlist, the remote
endpoints and the polling cadence. It is loaded once at startup, overlaid with
environment variable overrides, validated, and then treated as read-only.
"""

import logging
import os
import re
from datetime import timedelta
from enum import Enum
from pathlib import Path
from typing import Any

import yaml
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
    model_validator,
)

from balance_monitor.exceptions import ConfigError
from balance_monitor.shared.models.watchlist import WatchedAddress, Watchlist

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = "config/balance_monitor.yaml"
ADDRESS_PLACEHOLDERS = ("%s", "{addresses}")

_DURATION_UNITS = {
    "ns": 1e-9,
    "us": 1e-6,
    "µs": 1e-6,
    "μs": 1e-6,
    "ms": 1e-3,
    "s": 1.0,
    "m": 60.0,
    "h": 3600.0,
}
_DURATION_PART = re.compile(r"(\d+(?:\.\d*)?|\.\d+)(ns|us|µs|μs|ms|s|m|h)")
_DURATION_FULL = re.compile(r"(?:(?:\d+(?:\.\d*)?|\.\d+)(?:ns|us|µs|μs|ms|s|m|h))+")


def parse_duration(value: str) -> timedelta:
    """
    Parse a duration string such as ``"30s"``, ``"1m30s"`` or ``"250ms"``.

    Raises:
        ConfigError: If the string is malformed or not strictly positive.
    """
    text = value.strip() if isinstance(value, str) else value
    if not isinstance(text, str) or not _DURATION_FULL.fullmatch(text):
        raise ConfigError(f"Invalid duration: {value!r}")

    seconds = sum(
        float(number) * _DURATION_UNITS[unit]
        for number, unit in _DURATION_PART.findall(text)
    )
    if seconds <= 0:
        raise ConfigError(f"Duration must be positive: {value!r}")
    return timedelta(seconds=seconds)


def _validate_http_url(v: str) -> str:
    if not v.startswith(("http://", "https://")):
        raise ValueError("must be an HTTP(S) URL")
    return v


# =============================================================================
# PYDANTIC MODELS - Type-Safe Configuration
# =============================================================================


class OverlapPolicy(str, Enum):
    """What the scheduler does when a tick fires while a round is still running."""

    CONCURRENT = "concurrent"
    SKIP = "skip"


class InfluxConfig(BaseModel):
    """InfluxDB connection settings."""

    model_config = ConfigDict(frozen=True)

    address: str
    username: str = ""
    password: str = Field(default="", repr=False)

    @field_validator("address")
    @classmethod
    def validate_address(cls, v: str) -> str:
        return _validate_http_url(v)


class TrackedBalanceConfig(BaseModel):
    """One watchlist entry as written in the config file."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    address: str = Field(min_length=1)
    service: str
    balance: int = 0
    num_transactions: int = Field(alias="numTransactions", ge=0)

    def to_watched_address(self) -> WatchedAddress:
        return WatchedAddress(
            address=self.address,
            service=self.service,
            num_transactions=self.num_transactions,
            balance=self.balance,
        )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    level: str = Field(default="INFO")
    json_logs: bool = Field(default=True, alias="json")


class MonitorConfig(BaseModel):
    """
    Root configuration - single source of truth for the process.

    Field aliases follow the camelCase keys of the config file.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    influx_config: InfluxConfig = Field(alias="influxConfig")
    tracked_balances: tuple[TrackedBalanceConfig, ...] = Field(
        alias="trackedBalances", min_length=1
    )
    balance_address: str = Field(alias="balanceAddress")
    fees_address: str = Field(alias="feesAddress")
    polling_interval: timedelta = Field(alias="pollingInterval")
    port: int = Field(ge=1, le=65535)

    overlap_policy: OverlapPolicy = Field(
        default=OverlapPolicy.CONCURRENT, alias="overlapPolicy"
    )
    request_timeout: float | None = Field(default=None, alias="requestTimeout", gt=0)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @field_validator("polling_interval", mode="before")
    @classmethod
    def validate_polling_interval(cls, v: Any) -> timedelta:
        if not isinstance(v, str):
            raise ValueError("pollingInterval must be a duration string such as '30s'")
        try:
            return parse_duration(v)
        except ConfigError as e:
            raise ValueError(str(e)) from e

    @field_validator("fees_address")
    @classmethod
    def validate_fees_address(cls, v: str) -> str:
        return _validate_http_url(v)

    @field_validator("balance_address")
    @classmethod
    def validate_balance_address(cls, v: str) -> str:
        _validate_http_url(v)
        if not any(placeholder in v for placeholder in ADDRESS_PLACEHOLDERS):
            raise ValueError("balanceAddress needs a '%s' or '{addresses}' placeholder")
        return v

    @model_validator(mode="after")
    def validate_unique_addresses(self) -> "MonitorConfig":
        seen: set[str] = set()
        for tracked in self.tracked_balances:
            if tracked.address in seen:
                raise ValueError(f"Duplicate tracked address: {tracked.address}")
            seen.add(tracked.address)
        return self

    def watchlist(self) -> Watchlist:
        return Watchlist(t.to_watched_address() for t in self.tracked_balances)


# =============================================================================
# CONFIG LOADER - Clean, Validated Loading
# =============================================================================


class ConfigLoader:
    """
    Load and validate configuration from a YAML or JSON file.

    Merges:
      1. The config file
      2. Environment variable overrides
    """

    def __init__(self, path: str | Path, environ: dict[str, str] | None = None):
        self.path = Path(path)
        self._environ = os.environ if environ is None else environ

    def _load_file(self) -> dict[str, Any]:
        if not self.path.exists():
            raise ConfigError(f"Config file not found: {self.path}")

        try:
            with open(self.path, encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            raise ConfigError(f"Failed to read {self.path}: {e}") from e

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ConfigError(f"{self.path} must contain a mapping at the top level")
        return data

    def _apply_env_overrides(self, config: dict[str, Any]) -> dict[str, Any]:
        """Apply environment variable overrides to config."""
        env = self._environ

        influx_overrides = {
            "address": env.get("BALANCE_MONITOR_INFLUX_ADDRESS"),
            "username": env.get("BALANCE_MONITOR_INFLUX_USERNAME"),
            "password": env.get("BALANCE_MONITOR_INFLUX_PASSWORD"),
        }
        for key, value in influx_overrides.items():
            if value:
                influx = config.get("influxConfig")
                if not isinstance(influx, dict):
                    influx = {}
                config["influxConfig"] = {**influx, key: value}

        if port := env.get("BALANCE_MONITOR_PORT"):
            config["port"] = port

        if log_level := env.get("LOG_LEVEL"):
            logging_section = config.get("logging")
            if not isinstance(logging_section, dict):
                logging_section = {}
            config["logging"] = {**logging_section, "level": log_level}

        return config

    def load(self) -> MonitorConfig:
        """
        Load complete configuration state.

        Raises:
            ConfigError: If the file is missing, unreadable or invalid
        """
        logger.info(f"Loading configuration from {self.path}")

        config = self._apply_env_overrides(self._load_file())

        try:
            state = MonitorConfig.model_validate(config)
        except ValidationError as e:
            raise ConfigError(f"Invalid configuration in {self.path}: {e}") from e

        logger.info(
            f"Configuration loaded: tracked={len(state.tracked_balances)} addresses, "
            f"interval={state.polling_interval.total_seconds()}s, port={state.port}"
        )
        return state


def resolve_config_path(explicit: str | None = None, environ: dict[str, str] | None = None) -> Path:
    """Resolve the config path: explicit flag, then environment, then default."""
    env = os.environ if environ is None else environ
    return Path(explicit or env.get("BALANCE_MONITOR_CONFIG") or DEFAULT_CONFIG_PATH)


def load_config(path: str | Path | None = None) -> MonitorConfig:
    """Load and return the process configuration."""
    return ConfigLoader(resolve_config_path(str(path) if path else None)).load()


__all__ = [
    "ConfigLoader",
    "InfluxConfig",
    "LoggingConfig",
    "MonitorConfig",
    "OverlapPolicy",
    "TrackedBalanceConfig",
    "load_config",
    "parse_duration",
    "resolve_config_path",
]

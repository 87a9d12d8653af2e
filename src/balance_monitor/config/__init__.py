"""Configuration package for balance_monitor."""

from .state import (
    ConfigLoader,
    InfluxConfig,
    MonitorConfig,
    OverlapPolicy,
    load_config,
    parse_duration,
)

__all__ = [
    "ConfigLoader",
    "InfluxConfig",
    "MonitorConfig",
    "OverlapPolicy",
    "load_config",
    "parse_duration",
]

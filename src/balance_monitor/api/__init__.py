"""HTTP surface of the monitor: the liveness endpoint."""

from balance_monitor.api.health import HEALTH_PAYLOAD, create_health_app

__all__ = ["HEALTH_PAYLOAD", "create_health_app"]

"""Default implementations of infrastructure abstractions."""

from datetime import UTC, datetime

from balance_monitor.infrastructure.ports.system import IClock


class SystemClock(IClock):
    """Default implementation using system time."""

    def utcnow(self) -> datetime:
        """Get current UTC time."""
        return datetime.now(UTC)


class FixedClock(IClock):
    """Clock frozen at a given instant (tests, one-off backdated rounds)."""

    def __init__(self, instant: datetime):
        if instant.tzinfo is None:
            instant = instant.replace(tzinfo=UTC)
        self._instant = instant

    def utcnow(self) -> datetime:
        return self._instant

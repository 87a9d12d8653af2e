"""
Per-round pipeline records: snapshots fetched from remote sources, the metric
records derived from them and the batch handed to the sink.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime
from typing import Any


@dataclass(frozen=True)
class FeeSnapshot:
    """Fee-per-unit estimates in the source API's units."""

    fastest: int
    half_hour: int
    hour: int


@dataclass(frozen=True)
class BalanceEntry:
    """Balance and activity of one address."""

    final_balance: int
    transaction_count: int
    total_received: int


# address -> entry, in response order
BalanceSnapshot = Mapping[str, BalanceEntry]


@dataclass(frozen=True)
class MetricRecord:
    """One sample for one watched address in one round."""

    address: str
    service: str
    balance: int
    total_received: int
    alert_threshold: int
    timestamp: datetime

    def to_point(self, measurement: str) -> dict[str, Any]:
        """Render as an InfluxDB point with an epoch-seconds timestamp."""
        return {
            "measurement": measurement,
            "tags": {
                "address": self.address,
                "service": self.service,
            },
            "fields": {
                "balance": self.balance,
                "totalReceived": self.total_received,
                "alertThreshold": self.alert_threshold,
            },
            "time": int(self.timestamp.timestamp()),
        }


@dataclass(frozen=True)
class Batch:
    """All metric records of one round, written to the sink atomically."""

    measurement: str
    database: str
    precision: str
    records: tuple[MetricRecord, ...] = ()

    def __len__(self) -> int:
        return len(self.records)

    def to_points(self) -> list[dict[str, Any]]:
        return [record.to_point(self.measurement) for record in self.records]

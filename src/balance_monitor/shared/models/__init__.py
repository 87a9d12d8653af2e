"""Shared domain models."""

from balance_monitor.shared.models.metrics import (
    BalanceEntry,
    BalanceSnapshot,
    Batch,
    FeeSnapshot,
    MetricRecord,
)
from balance_monitor.shared.models.watchlist import (
    ADDRESS_DELIMITER,
    WatchedAddress,
    Watchlist,
    join_addresses,
)

__all__ = [
    # Snapshots
    "FeeSnapshot",
    "BalanceEntry",
    "BalanceSnapshot",
    # Records
    "MetricRecord",
    "Batch",
    # Watchlist
    "ADDRESS_DELIMITER",
    "WatchedAddress",
    "Watchlist",
    "join_addresses",
]

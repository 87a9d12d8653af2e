"""
Metric derivation.

Joins one fee snapshot, one watched address and that address's balance entry
into a single MetricRecord. No I/O and no failure path: inputs have already
been validated by the sources.
"""

from datetime import datetime

from balance_monitor.shared.models.metrics import BalanceEntry, FeeSnapshot, MetricRecord
from balance_monitor.shared.models.watchlist import WatchedAddress


def alert_threshold(fee: FeeSnapshot, watched: WatchedAddress) -> int:
    """Baseline transaction count times the fastest fee, in integer arithmetic."""
    return watched.num_transactions * fee.fastest


def derive_metric(
    fee: FeeSnapshot,
    watched: WatchedAddress,
    entry: BalanceEntry,
    timestamp: datetime,
) -> MetricRecord:
    """Build the metric record for one watched address."""
    return MetricRecord(
        address=watched.address,
        service=watched.service,
        balance=entry.final_balance,
        total_received=entry.total_received,
        alert_threshold=alert_threshold(fee, watched),
        timestamp=timestamp,
    )

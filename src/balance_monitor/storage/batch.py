"""
Batch assembly.

Turns one round's fee and balance snapshots into a single sink batch. The join
is watchlist-driven: the balance snapshot is walked in response order, but only
addresses that are on the watchlist produce a record. Watched addresses the
remote omitted produce nothing; gaps are not filled in.
"""

from balance_monitor.exceptions import AssemblyError
from balance_monitor.infrastructure.impls.system import SystemClock
from balance_monitor.infrastructure.observability import get_storage_logger
from balance_monitor.infrastructure.ports.system import IClock
from balance_monitor.shared.models.metrics import BalanceSnapshot, Batch, FeeSnapshot
from balance_monitor.shared.models.watchlist import Watchlist
from balance_monitor.transformation.metrics import derive_metric

MEASUREMENT = "trackedBTCAddresses"
DATABASE = "telegraf"
PRECISION = "s"

VALID_PRECISIONS = frozenset({"n", "u", "ms", "s", "m", "h"})


class BatchBuilder:
    """Assembles the metric records of one round into a Batch."""

    def __init__(
        self,
        measurement: str = MEASUREMENT,
        database: str = DATABASE,
        precision: str = PRECISION,
        clock: IClock | None = None,
    ):
        if not measurement:
            raise AssemblyError("Measurement name must not be empty")
        if not database:
            raise AssemblyError("Target database must not be empty")
        if precision not in VALID_PRECISIONS:
            raise AssemblyError(
                f"Invalid time precision {precision!r}, expected one of {sorted(VALID_PRECISIONS)}"
            )

        self.measurement = measurement
        self.database = database
        self.precision = precision
        self.clock = clock or SystemClock()
        self._log = get_storage_logger("batch-builder", measurement=measurement)

    def build(
        self,
        fee: FeeSnapshot,
        balances: BalanceSnapshot,
        watchlist: Watchlist,
    ) -> Batch:
        # one timestamp for the whole batch, taken at assembly time
        timestamp = self.clock.utcnow().replace(microsecond=0)

        records = []
        for address, entry in balances.items():
            watched = watchlist.lookup(address)
            if watched.is_unknown:
                self._log.debug("unwatched_address_skipped", address=address)
                continue
            records.append(derive_metric(fee, watched, entry, timestamp))

        return Batch(
            measurement=self.measurement,
            database=self.database,
            precision=self.precision,
            records=tuple(records),
        )

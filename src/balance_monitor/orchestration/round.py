"""
Sampling Round
==============

One fetch -> derive -> batch -> write cycle. Every failure is caught, logged
and swallowed at this boundary so the scheduler never sees it.
"""

import itertools
import time
from dataclasses import dataclass
from enum import Enum
from typing import Any

from balance_monitor.exceptions import BalanceMonitorError
from balance_monitor.infrastructure.observability import get_pipeline_logger
from balance_monitor.ingestion.sources.balances import BalanceSource
from balance_monitor.ingestion.sources.fees import FeeSource
from balance_monitor.shared.models.watchlist import Watchlist
from balance_monitor.storage.batch import BatchBuilder
from balance_monitor.storage.ports import ISink

_round_ids = itertools.count(1)


class RoundStatus(str, Enum):
    """Round execution status."""

    SUCCESS = "success"
    FAILED = "failed"


@dataclass
class RoundResult:
    """Result of one round."""

    round_id: int
    status: RoundStatus
    duration_seconds: float
    records_written: int = 0
    error: str | None = None

    @property
    def succeeded(self) -> bool:
        return self.status is RoundStatus.SUCCESS

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging."""
        return {
            "round_id": self.round_id,
            "status": self.status.value,
            "duration_seconds": self.duration_seconds,
            "records_written": self.records_written,
            "error": self.error,
        }


class SamplingRound:
    """Runs the pipeline once against shared, read-only collaborators."""

    def __init__(
        self,
        fee_source: FeeSource,
        balance_source: BalanceSource,
        watchlist: Watchlist,
        batch_builder: BatchBuilder,
        sink: ISink,
    ):
        self.fee_source = fee_source
        self.balance_source = balance_source
        self.watchlist = watchlist
        self.batch_builder = batch_builder
        self.sink = sink

    async def execute(self) -> RoundResult:
        """
        Execute the round.

        Returns:
            RoundResult; never raises for pipeline failures
        """
        round_id = next(_round_ids)
        log = get_pipeline_logger("round", round_id=round_id)
        started = time.monotonic()
        log.debug("round_started")

        try:
            fee = await self.fee_source.fetch()
            balances = await self.balance_source.fetch(self.watchlist.addresses())
            batch = self.batch_builder.build(fee, balances, self.watchlist)
            await self.sink.write(batch)
        except BalanceMonitorError as e:
            return self._failed(log, round_id, started, e)
        except Exception as e:
            log.exception("round_crashed")
            return self._failed(log, round_id, started, e)

        result = RoundResult(
            round_id=round_id,
            status=RoundStatus.SUCCESS,
            duration_seconds=time.monotonic() - started,
            records_written=len(batch),
        )
        log.info("round_completed", **result.to_dict())
        return result

    def _failed(self, log, round_id: int, started: float, error: Exception) -> RoundResult:
        result = RoundResult(
            round_id=round_id,
            status=RoundStatus.FAILED,
            duration_seconds=time.monotonic() - started,
            error=str(error),
        )
        log.error("round_failed", error_type=type(error).__name__, **result.to_dict())
        return result

"""
BalanceMonitorService: composition root.

Builds every pipeline component from a validated MonitorConfig and runs the
scheduler next to the health server in one event loop.
"""

from __future__ import annotations

import asyncio

import uvicorn

from balance_monitor.api.health import create_health_app
from balance_monitor.config.state import MonitorConfig
from balance_monitor.exceptions import StartupError
from balance_monitor.infrastructure.observability import get_infrastructure_logger
from balance_monitor.infrastructure.ports.system import IClock
from balance_monitor.ingestion.config.value_objects import HttpClientConfig
from balance_monitor.ingestion.connectors.aiohttp_client import AiohttpClient
from balance_monitor.ingestion.ports.http import IHttpClient
from balance_monitor.ingestion.sources.balances import BalanceSource
from balance_monitor.ingestion.sources.fees import FeeSource
from balance_monitor.orchestration.round import RoundResult, SamplingRound
from balance_monitor.orchestration.scheduler import Scheduler
from balance_monitor.storage.batch import BatchBuilder
from balance_monitor.storage.influx import InfluxSink
from balance_monitor.storage.ports import ISink

LISTEN_HOST = "0.0.0.0"
SHUTDOWN_GRACE_SECONDS = 10.0


class BalanceMonitorService:
    """Wires sources, builder, sink, round and scheduler together."""

    def __init__(
        self,
        config: MonitorConfig,
        http_client: IHttpClient | None = None,
        sink: ISink | None = None,
        clock: IClock | None = None,
    ) -> None:
        self.config = config
        self._log = get_infrastructure_logger("service")
        self.watchlist = config.watchlist()
        self.http_client = http_client or AiohttpClient(
            HttpClientConfig(timeout=config.request_timeout)
        )
        self.sink = sink or InfluxSink.from_config(config.influx_config)

        self.fee_source = FeeSource(self.http_client, config.fees_address)
        self.balance_source = BalanceSource(self.http_client, config.balance_address)
        self.batch_builder = BatchBuilder(clock=clock)
        self.sampling_round = SamplingRound(
            fee_source=self.fee_source,
            balance_source=self.balance_source,
            watchlist=self.watchlist,
            batch_builder=self.batch_builder,
            sink=self.sink,
        )
        self.scheduler = Scheduler(
            self.sampling_round.execute,
            interval=config.polling_interval,
            overlap_policy=config.overlap_policy,
        )
        self.health_app = create_health_app()

    async def run_once(self) -> RoundResult:
        """Run a single round immediately, then release resources."""
        try:
            return await self.sampling_round.execute()
        finally:
            await self.close()

    async def serve(self) -> None:
        """
        Run the scheduler and the health server until the server exits.

        Raises:
            StartupError: If the health port cannot be bound
        """
        server = uvicorn.Server(
            uvicorn.Config(
                self.health_app,
                host=LISTEN_HOST,
                port=self.config.port,
                log_config=None,
                access_log=False,
            )
        )
        scheduler_task = asyncio.create_task(self.scheduler.run(), name="scheduler")
        self._log.info(
            "monitor_started",
            port=self.config.port,
            tracked=len(self.watchlist),
            interval_seconds=self.config.polling_interval.total_seconds(),
        )

        try:
            await server.serve()
        except SystemExit as e:
            # uvicorn exits the process when it cannot bind
            raise StartupError(f"Failed to serve on port {self.config.port}") from e
        finally:
            await self.scheduler.shutdown(timeout=SHUTDOWN_GRACE_SECONDS)
            await scheduler_task
            await self.close()
            self._log.info("monitor_stopped", rounds_launched=self.scheduler.launched)

        if not server.started:
            raise StartupError(f"Failed to serve on port {self.config.port}")

    async def close(self) -> None:
        await self.http_client.close()
        await self.sink.close()

"""
InfluxDB sink.

Writes one batch per round through the InfluxDB 1.x HTTP API. The client is
synchronous, so writes run in a worker thread to keep the event loop free for
other rounds and the health endpoint.
"""

import asyncio
from urllib.parse import urlsplit

import requests
from influxdb import InfluxDBClient
from influxdb.exceptions import InfluxDBClientError, InfluxDBServerError

from balance_monitor.config.state import InfluxConfig
from balance_monitor.exceptions import ConfigError, WriteError
from balance_monitor.infrastructure.observability import get_storage_logger
from balance_monitor.shared.models.metrics import Batch

DEFAULT_INFLUX_PORT = 8086


class InfluxSink:
    """ISink implementation backed by ``influxdb.InfluxDBClient``."""

    def __init__(self, client: InfluxDBClient):
        self.client = client
        self._log = get_storage_logger("influx-sink")

    @classmethod
    def from_config(cls, config: InfluxConfig) -> "InfluxSink":
        """
        Build the sink from ``influxConfig``.

        Raises:
            ConfigError: If the address cannot be turned into a client
        """
        try:
            parts = urlsplit(config.address)
            port = parts.port or DEFAULT_INFLUX_PORT
        except ValueError as e:
            raise ConfigError(f"Invalid InfluxDB address {config.address!r}: {e}") from e

        if parts.scheme not in ("http", "https") or not parts.hostname:
            raise ConfigError(f"Invalid InfluxDB address {config.address!r}")

        try:
            client = InfluxDBClient(
                host=parts.hostname,
                port=port,
                username=config.username,
                password=config.password,
                ssl=parts.scheme == "https",
                verify_ssl=parts.scheme == "https",
                path=parts.path.strip("/"),
            )
        except (TypeError, ValueError) as e:
            raise ConfigError(f"Failed to create InfluxDB client: {e}") from e

        return cls(client)

    async def write(self, batch: Batch) -> None:
        """
        Write the batch to its database at its time precision.

        Raises:
            WriteError: If InfluxDB rejects the points or cannot be reached
        """
        if not batch.records:
            self._log.info("empty_batch_skipped", database=batch.database)
            return

        points = batch.to_points()
        try:
            ok = await asyncio.to_thread(
                self.client.write_points,
                points,
                time_precision=batch.precision,
                database=batch.database,
            )
        except (InfluxDBClientError, InfluxDBServerError) as e:
            raise WriteError(f"InfluxDB rejected batch: {e}") from e
        except requests.exceptions.RequestException as e:
            raise WriteError(f"InfluxDB unreachable: {e}") from e

        if not ok:
            raise WriteError("InfluxDB did not acknowledge the batch")

        self._log.info(
            "batch_written",
            database=batch.database,
            measurement=batch.measurement,
            records=len(points),
        )

    async def close(self) -> None:
        self.client.close()

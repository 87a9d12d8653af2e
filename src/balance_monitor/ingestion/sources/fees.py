"""Fee estimate source."""

from balance_monitor.infrastructure.observability import get_ingestion_logger
from balance_monitor.ingestion.ports.http import IHttpClient
from balance_monitor.ingestion.sources.base import HttpSource
from balance_monitor.ingestion.sources.payloads import parse_fee_response
from balance_monitor.shared.models.metrics import FeeSnapshot


class FeeSource(HttpSource):
    """Fetches the current fee estimate snapshot from ``fees_url``."""

    def __init__(self, http_client: IHttpClient, fees_url: str):
        super().__init__(http_client)
        self.fees_url = fees_url
        self._log = get_ingestion_logger("fee-source", endpoint=fees_url)

    async def fetch(self) -> FeeSnapshot:
        """
        Fetch one fee snapshot.

        Raises:
            FetchError: On network failure, non-200 status or malformed body
        """
        data = await self._get_json(self.fees_url)
        snapshot = parse_fee_response(data, self.fees_url)
        self._log.debug(
            "fees_fetched",
            fastest=snapshot.fastest,
            half_hour=snapshot.half_hour,
            hour=snapshot.hour,
        )
        return snapshot

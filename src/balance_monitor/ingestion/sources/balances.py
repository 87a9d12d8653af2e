"""Batch balance source."""

from collections.abc import Sequence

from balance_monitor.infrastructure.observability import get_ingestion_logger
from balance_monitor.ingestion.ports.http import IHttpClient
from balance_monitor.ingestion.sources.base import HttpSource
from balance_monitor.ingestion.sources.payloads import parse_balance_response
from balance_monitor.shared.models.metrics import BalanceSnapshot
from balance_monitor.shared.models.watchlist import join_addresses


def build_balance_url(template: str, addresses: Sequence[str]) -> str:
    """Substitute the pipe-joined address list into the URL template.

    The template carries either a ``%s`` or an ``{addresses}`` placeholder;
    only the first occurrence is replaced.
    """
    joined = join_addresses(addresses)
    if "%s" in template:
        return template.replace("%s", joined, 1)
    return template.replace("{addresses}", joined, 1)


class BalanceSource(HttpSource):
    """Fetches balances for every watched address in a single request.

    The whole round fails if the request fails; there are no partial results.
    Addresses the remote omits are simply absent from the snapshot.
    """

    def __init__(self, http_client: IHttpClient, url_template: str):
        super().__init__(http_client)
        self.url_template = url_template
        self._log = get_ingestion_logger("balance-source")

    async def fetch(self, addresses: Sequence[str]) -> BalanceSnapshot:
        """
        Fetch the balance snapshot for ``addresses``.

        Raises:
            FetchError: On network failure, non-200 status or malformed body
        """
        if not addresses:
            return {}

        url = build_balance_url(self.url_template, addresses)
        data = await self._get_json(url)
        snapshot = parse_balance_response(data, url)

        missing = len(set(addresses) - set(snapshot))
        self._log.debug(
            "balances_fetched",
            requested=len(addresses),
            received=len(snapshot),
            missing=missing,
        )
        return snapshot

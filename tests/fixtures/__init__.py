"""
Test fixtures package for the balance monitor tests.

Provides in-memory doubles for the HTTP client and the sink, plus payload
builders matching the remote API formats.
"""

from datetime import UTC, datetime
from typing import Any

from balance_monitor.ingestion.ports.http import HttpResponse
from balance_monitor.shared.models.metrics import Batch

FEES_URL = "https://fees.example.test/api/v1/fees/recommended"
BALANCE_TEMPLATE = "https://balances.example.test/balance?active=%s"
BALANCE_PREFIX = "https://balances.example.test/"
FROZEN_AT = datetime(2024, 1, 1, 12, 0, 30, 250000, tzinfo=UTC)


class FakeHttpClient:
    """IHttpClient double routing GETs by URL prefix.

    A route maps to an HttpResponse, a JSON-able body (served with 200), or an
    exception instance to raise.
    """

    def __init__(self, routes: dict[str, Any] | None = None):
        self.routes: dict[str, Any] = dict(routes or {})
        self.requests: list[str] = []
        self.closed = False

    async def get(self, url, params=None, headers=None) -> HttpResponse:
        self.requests.append(url)
        for prefix, outcome in self.routes.items():
            if url.startswith(prefix):
                if isinstance(outcome, BaseException):
                    raise outcome
                if isinstance(outcome, HttpResponse):
                    return outcome
                return HttpResponse(status_code=200, body=outcome, headers={}, url=url)
        return HttpResponse(status_code=404, body="not found", headers={}, url=url)

    async def close(self) -> None:
        self.closed = True


class RecordingSink:
    """ISink double keeping every written batch."""

    def __init__(self, fail_with: Exception | None = None):
        self.batches: list[Batch] = []
        self.fail_with = fail_with
        self.closed = False

    async def write(self, batch: Batch) -> None:
        if self.fail_with is not None:
            raise self.fail_with
        self.batches.append(batch)

    async def close(self) -> None:
        self.closed = True


def fee_body(fastest: int = 10, half_hour: int = 8, hour: int = 5) -> dict[str, int]:
    """Fee endpoint body."""
    return {"fastestFee": fastest, "halfHourFee": half_hour, "hourFee": hour}


def balance_body(final_balance: int, n_tx: int, total_received: int) -> dict[str, int]:
    """One address entry of the balance endpoint body."""
    return {"final_balance": final_balance, "n_tx": n_tx, "total_received": total_received}


def text_response(status_code: int, text: str, url: str = "") -> HttpResponse:
    return HttpResponse(status_code=status_code, body=text, headers={}, url=url)


__all__ = [
    "BALANCE_PREFIX",
    "BALANCE_TEMPLATE",
    "FEES_URL",
    "FROZEN_AT",
    "FakeHttpClient",
    "RecordingSink",
    "balance_body",
    "fee_body",
    "text_response",
]

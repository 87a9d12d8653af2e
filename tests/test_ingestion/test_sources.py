"""
Tests for the fee and balance sources.
"""

import asyncio

import aiohttp
import pytest

from balance_monitor.exceptions import FetchError
from balance_monitor.ingestion.sources.balances import BalanceSource, build_balance_url
from balance_monitor.ingestion.sources.fees import FeeSource
from balance_monitor.shared.models.metrics import BalanceEntry, FeeSnapshot
from tests.fixtures import (
    BALANCE_PREFIX,
    BALANCE_TEMPLATE,
    FEES_URL,
    FakeHttpClient,
    balance_body,
    fee_body,
    text_response,
)

# ============================================================================
# FeeSource
# ============================================================================


class TestFeeSource:
    @pytest.mark.asyncio
    async def test_fetch_parses_snapshot(self):
        http = FakeHttpClient({FEES_URL: fee_body(fastest=42, half_hour=30, hour=12)})

        snapshot = await FeeSource(http, FEES_URL).fetch()

        assert snapshot == FeeSnapshot(fastest=42, half_hour=30, hour=12)
        assert http.requests == [FEES_URL]

    @pytest.mark.asyncio
    async def test_extra_fields_ignored(self):
        body = {**fee_body(), "minimumFee": 1, "economyFee": 2}
        http = FakeHttpClient({FEES_URL: body})

        snapshot = await FeeSource(http, FEES_URL).fetch()

        assert snapshot.fastest == 10

    @pytest.mark.asyncio
    async def test_missing_field_raises_fetch_error(self):
        http = FakeHttpClient({FEES_URL: {"fastestFee": 10, "hourFee": 5}})

        with pytest.raises(FetchError, match="Malformed fee response") as exc_info:
            await FeeSource(http, FEES_URL).fetch()

        assert exc_info.value.endpoint == FEES_URL

    @pytest.mark.asyncio
    @pytest.mark.parametrize("bad_value", ["10", 10.5, None])
    async def test_non_integer_fee_raises_fetch_error(self, bad_value):
        http = FakeHttpClient({FEES_URL: {**fee_body(), "fastestFee": bad_value}})

        with pytest.raises(FetchError):
            await FeeSource(http, FEES_URL).fetch()

    @pytest.mark.asyncio
    async def test_non_object_body_raises_fetch_error(self):
        http = FakeHttpClient({FEES_URL: [1, 2, 3]})

        with pytest.raises(FetchError, match="JSON object"):
            await FeeSource(http, FEES_URL).fetch()

    @pytest.mark.asyncio
    async def test_non_json_body_raises_fetch_error(self):
        http = FakeHttpClient({FEES_URL: text_response(200, "<html>oops</html>", FEES_URL)})

        with pytest.raises(FetchError, match="Non-JSON"):
            await FeeSource(http, FEES_URL).fetch()

    @pytest.mark.asyncio
    async def test_http_error_status_raises_fetch_error(self):
        http = FakeHttpClient({FEES_URL: text_response(503, "unavailable", FEES_URL)})

        with pytest.raises(FetchError) as exc_info:
            await FeeSource(http, FEES_URL).fetch()

        assert exc_info.value.status_code == 503

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "error",
        [aiohttp.ClientConnectionError("connection refused"), asyncio.TimeoutError()],
    )
    async def test_transport_failure_raises_fetch_error(self, error):
        http = FakeHttpClient({FEES_URL: error})

        with pytest.raises(FetchError, match="failed"):
            await FeeSource(http, FEES_URL).fetch()


# ============================================================================
# BalanceSource
# ============================================================================


class TestBuildBalanceUrl:
    def test_percent_placeholder(self):
        url = build_balance_url(BALANCE_TEMPLATE, ["a", "b", "c"])
        assert url == "https://balances.example.test/balance?active=a|b|c"

    def test_named_placeholder(self):
        url = build_balance_url("https://x.test/balance?active={addresses}", ["a", "b"])
        assert url == "https://x.test/balance?active=a|b"

    def test_only_first_placeholder_replaced(self):
        url = build_balance_url("https://x.test/%s?tag=%s", ["a"])
        assert url == "https://x.test/a?tag=%s"


class TestBalanceSource:
    @pytest.mark.asyncio
    async def test_single_request_for_all_addresses(self):
        http = FakeHttpClient(
            {
                BALANCE_PREFIX: {
                    "a": balance_body(1, 2, 3),
                    "b": balance_body(4, 5, 6),
                }
            }
        )

        snapshot = await BalanceSource(http, BALANCE_TEMPLATE).fetch(["a", "b", "c"])

        assert http.requests == ["https://balances.example.test/balance?active=a|b|c"]
        assert snapshot == {
            "a": BalanceEntry(final_balance=1, transaction_count=2, total_received=3),
            "b": BalanceEntry(final_balance=4, transaction_count=5, total_received=6),
        }

    @pytest.mark.asyncio
    async def test_missing_addresses_absent_from_snapshot(self):
        http = FakeHttpClient({BALANCE_PREFIX: {"a": balance_body(1, 2, 3)}})

        snapshot = await BalanceSource(http, BALANCE_TEMPLATE).fetch(["a", "b"])

        assert "b" not in snapshot
        assert list(snapshot) == ["a"]

    @pytest.mark.asyncio
    async def test_response_order_preserved(self):
        http = FakeHttpClient(
            {BALANCE_PREFIX: {"z": balance_body(1, 1, 1), "a": balance_body(2, 2, 2)}}
        )

        snapshot = await BalanceSource(http, BALANCE_TEMPLATE).fetch(["a", "z"])

        assert list(snapshot) == ["z", "a"]

    @pytest.mark.asyncio
    async def test_empty_address_list_skips_request(self):
        http = FakeHttpClient()

        snapshot = await BalanceSource(http, BALANCE_TEMPLATE).fetch([])

        assert snapshot == {}
        assert http.requests == []

    @pytest.mark.asyncio
    async def test_malformed_entry_fails_whole_fetch(self):
        http = FakeHttpClient(
            {
                BALANCE_PREFIX: {
                    "a": balance_body(1, 2, 3),
                    "b": {"final_balance": 1, "n_tx": 2},
                }
            }
        )

        with pytest.raises(FetchError, match="Malformed balance response"):
            await BalanceSource(http, BALANCE_TEMPLATE).fetch(["a", "b"])

    @pytest.mark.asyncio
    async def test_non_object_body_raises_fetch_error(self):
        http = FakeHttpClient({BALANCE_PREFIX: "just a string"})

        with pytest.raises(FetchError):
            await BalanceSource(http, BALANCE_TEMPLATE).fetch(["a"])

    @pytest.mark.asyncio
    async def test_http_error_status_raises_fetch_error(self):
        http = FakeHttpClient({BALANCE_PREFIX: text_response(500, "boom")})

        with pytest.raises(FetchError) as exc_info:
            await BalanceSource(http, BALANCE_TEMPLATE).fetch(["a"])

        assert exc_info.value.status_code == 500

    @pytest.mark.asyncio
    async def test_transport_failure_raises_fetch_error(self):
        http = FakeHttpClient({BALANCE_PREFIX: aiohttp.ClientConnectionError("reset")})

        with pytest.raises(FetchError):
            await BalanceSource(http, BALANCE_TEMPLATE).fetch(["a"])

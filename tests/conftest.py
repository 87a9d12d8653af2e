"""
Shared fixtures for the balance monitor test suite.
"""

from pathlib import Path
from typing import Any

import pytest
import yaml

from balance_monitor.exceptions import WriteError
from balance_monitor.infrastructure.impls.system import FixedClock
from balance_monitor.shared.models.metrics import FeeSnapshot
from balance_monitor.shared.models.watchlist import WatchedAddress, Watchlist
from tests.fixtures import (
    BALANCE_PREFIX,
    BALANCE_TEMPLATE,
    FEES_URL,
    FROZEN_AT,
    FakeHttpClient,
    RecordingSink,
    balance_body,
    fee_body,
)


@pytest.fixture
def watchlist():
    return Watchlist(
        [
            WatchedAddress(address="addr1", service="svcA", num_transactions=5),
            WatchedAddress(address="addr2", service="svcB", num_transactions=3),
        ]
    )


@pytest.fixture
def fee_snapshot():
    return FeeSnapshot(fastest=10, half_hour=8, hour=5)


@pytest.fixture
def frozen_clock():
    return FixedClock(FROZEN_AT)


@pytest.fixture
def recording_sink():
    return RecordingSink()


@pytest.fixture
def failing_sink():
    return RecordingSink(fail_with=WriteError("influx down"))


@pytest.fixture
def healthy_http():
    """Both endpoints up; addr1 and addr2 present in the balance response."""
    return FakeHttpClient(
        {
            FEES_URL: fee_body(),
            BALANCE_PREFIX: {
                "addr1": balance_body(100, 7, 500),
                "addr2": balance_body(0, 2, 42),
            },
        }
    )


@pytest.fixture
def raw_config() -> dict[str, Any]:
    return {
        "influxConfig": {
            "address": "http://influx.example.test:8086",
            "username": "monitor",
            "password": "secret",
        },
        "trackedBalances": [
            {"address": "addr1", "service": "svcA", "balance": 0, "numTransactions": 5},
            {"address": "addr2", "service": "svcB", "balance": 0, "numTransactions": 3},
        ],
        "balanceAddress": BALANCE_TEMPLATE,
        "feesAddress": FEES_URL,
        "pollingInterval": "30s",
        "port": 8080,
    }


@pytest.fixture
def write_config(tmp_path):
    """Write a config mapping to a YAML file and return its path."""

    def _write(data: Any, name: str = "balance_monitor.yaml") -> Path:
        path = tmp_path / name
        path.write_text(yaml.safe_dump(data), encoding="utf-8")
        return path

    return _write

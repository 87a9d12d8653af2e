"""
Response payload models for the remote sources.

Each endpoint gets an explicit model with required, strictly-integer fields so
a malformed body surfaces as a FetchError naming the endpoint, instead of
leaking zero values into the derived metrics.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, StrictInt, TypeAdapter, ValidationError

from balance_monitor.exceptions import FetchError
from balance_monitor.shared.models.metrics import BalanceEntry, FeeSnapshot


class FeePayload(BaseModel):
    """Body of the fee estimate endpoint.

    Expected format:
        {"fastestFee": 40, "halfHourFee": 38, "hourFee": 30}
    """

    model_config = ConfigDict(extra="ignore")

    fastest_fee: StrictInt = Field(alias="fastestFee")
    half_hour_fee: StrictInt = Field(alias="halfHourFee")
    hour_fee: StrictInt = Field(alias="hourFee")

    def to_snapshot(self) -> FeeSnapshot:
        return FeeSnapshot(
            fastest=self.fastest_fee,
            half_hour=self.half_hour_fee,
            hour=self.hour_fee,
        )


class BalancePayload(BaseModel):
    """One address entry of the balance endpoint.

    Expected format:
        {"final_balance": 0, "n_tx": 12, "total_received": 150000}
    """

    model_config = ConfigDict(extra="ignore")

    final_balance: StrictInt
    n_tx: StrictInt
    total_received: StrictInt

    def to_entry(self) -> BalanceEntry:
        return BalanceEntry(
            final_balance=self.final_balance,
            transaction_count=self.n_tx,
            total_received=self.total_received,
        )


_balance_response = TypeAdapter(dict[str, BalancePayload])


def parse_fee_response(data: Any, endpoint: str) -> FeeSnapshot:
    """Validate a decoded fee body and convert it to a snapshot."""
    if not isinstance(data, dict):
        raise FetchError(
            f"Fee response must be a JSON object, got {type(data).__name__}",
            endpoint=endpoint,
        )
    try:
        return FeePayload.model_validate(data).to_snapshot()
    except ValidationError as e:
        raise FetchError(f"Malformed fee response: {e}", endpoint=endpoint) from e


def parse_balance_response(data: Any, endpoint: str) -> dict[str, BalanceEntry]:
    """Validate a decoded balance body, preserving response order."""
    if not isinstance(data, dict):
        raise FetchError(
            f"Balance response must be a JSON object, got {type(data).__name__}",
            endpoint=endpoint,
        )
    try:
        payloads = _balance_response.validate_python(data)
    except ValidationError as e:
        raise FetchError(f"Malformed balance response: {e}", endpoint=endpoint) from e
    return {address: payload.to_entry() for address, payload in payloads.items()}

"""
Watchlist of tracked addresses.

The watchlist is built once from configuration at startup and shared read-only
by every sampling round. Addresses are opaque strings.
"""

from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass

from balance_monitor.exceptions import ConfigError

ADDRESS_DELIMITER = "|"


@dataclass(frozen=True)
class WatchedAddress:
    """A tracked address and the metadata used to derive its metrics."""

    address: str
    service: str
    num_transactions: int
    balance: int = 0

    @classmethod
    def unknown(cls) -> "WatchedAddress":
        """Zero-valued record returned for addresses not on the watchlist."""
        return cls(address="", service="", num_transactions=0, balance=0)

    @property
    def is_unknown(self) -> bool:
        return not self.address and not self.service and self.num_transactions == 0


def join_addresses(addresses: Sequence[str], delimiter: str = ADDRESS_DELIMITER) -> str:
    """
    Build the combined query value for a batch balance lookup.

    >>> join_addresses(["a", "b", "c"])
    'a|b|c'
    """
    return delimiter.join(addresses)


class Watchlist:
    """Immutable, ordered set of watched addresses."""

    def __init__(self, entries: Iterable[WatchedAddress]):
        by_address: dict[str, WatchedAddress] = {}
        for entry in entries:
            if entry.address in by_address:
                raise ConfigError(f"Duplicate watched address: {entry.address}")
            by_address[entry.address] = entry
        self._by_address = by_address

    def addresses(self) -> tuple[str, ...]:
        """Addresses in configuration order."""
        return tuple(self._by_address)

    def lookup(self, address: str) -> WatchedAddress:
        """Return the watched entry, or ``WatchedAddress.unknown()`` on a miss."""
        return self._by_address.get(address, WatchedAddress.unknown())

    def __contains__(self, address: object) -> bool:
        return address in self._by_address

    def __iter__(self) -> Iterator[WatchedAddress]:
        return iter(self._by_address.values())

    def __len__(self) -> int:
        return len(self._by_address)

    def __repr__(self) -> str:
        return f"Watchlist({len(self)} addresses)"

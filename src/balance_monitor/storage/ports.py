"""Storage layer protocol definitions."""

from typing import Protocol, runtime_checkable

from balance_monitor.shared.models.metrics import Batch


@runtime_checkable
class ISink(Protocol):
    """
    Abstraction over the durable time-series store.

    A successful ``write`` means the batch is committed.
    """

    async def write(self, batch: Batch) -> None:
        """Write one batch.

        Raises:
            WriteError: If the sink rejects or cannot accept the batch
        """
        ...

    async def close(self) -> None:
        """Release client resources."""
        ...

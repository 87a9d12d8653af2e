"""HTTP communication abstractions for remote sources.

Separates HTTP transport layer from response validation.
Allows easy mocking and swapping of HTTP implementations in tests.
"""

from dataclasses import dataclass
from typing import Any, Protocol


@dataclass
class HttpResponse:
    """HTTP response data container."""

    status_code: int
    body: Any  # JSON-decoded body, or the raw text when it is not JSON
    headers: dict[str, str]
    url: str

    @property
    def is_json(self) -> bool:
        return not isinstance(self.body, str)


class IHttpClient(Protocol):
    """Abstraction for HTTP client.

    Single Responsibility: Execute HTTP requests and return responses.
    Does NOT handle:
    - Response validation
    - Error mapping
    - Retry logic
    """

    async def get(
        self,
        url: str,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> HttpResponse:
        """Execute GET request.

        Raises:
            aiohttp.ClientError: On network or connection errors
            asyncio.TimeoutError: When the configured timeout elapses
        """
        ...

    async def close(self) -> None:
        """Release transport resources."""
        ...

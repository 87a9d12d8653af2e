"""Concrete HTTP client implementation for async requests.

Wraps aiohttp behind IHttpClient abstraction.
"""

import json
from typing import Any

import aiohttp

from balance_monitor.ingestion.config.value_objects import HttpClientConfig
from balance_monitor.ingestion.ports.http import (
    HttpResponse,
    IHttpClient,
)


class AiohttpClient(IHttpClient):
    """HTTP client implementation using aiohttp.

    One session is shared by every round and closed at shutdown.
    """

    def __init__(self, config: HttpClientConfig | None = None):
        """Initialize HTTP client.

        Args:
            config: HTTP client configuration
        """
        self.config = config or HttpClientConfig()
        self._session: aiohttp.ClientSession | None = None

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or create aiohttp session."""
        if self._session is None or self._session.closed:
            if self.config.timeout is not None:
                timeout = aiohttp.ClientTimeout(total=self.config.timeout)
                self._session = aiohttp.ClientSession(timeout=timeout)
            else:
                self._session = aiohttp.ClientSession()
        return self._session

    async def get(
        self,
        url: str,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> HttpResponse:
        """Execute GET request.

        Args:
            url: Full URL
            params: Query parameters
            headers: HTTP headers

        Returns:
            HttpResponse with status, body, headers. The body is decoded JSON
            when the payload parses, otherwise the raw text.

        Raises:
            aiohttp.ClientError: On connection errors
        """
        session = await self._get_session()
        request_kwargs: dict[str, Any] = {"params": params, "headers": headers}
        if not self.config.verify_ssl:
            request_kwargs["ssl"] = False

        async with session.get(url, **request_kwargs) as resp:
            # undecodable bytes must surface as a non-JSON body, not an exception
            text = await resp.text(errors="replace")
            try:
                body: Any = json.loads(text)
            except ValueError:
                body = text
            return HttpResponse(
                status_code=resp.status,
                body=body,
                headers=dict(resp.headers),
                url=str(resp.url),
            )

    async def close(self) -> None:
        """Close HTTP session."""
        if self._session:
            await self._session.close()
            self._session = None

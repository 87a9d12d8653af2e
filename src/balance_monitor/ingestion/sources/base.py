"""Shared request handling for the remote sources."""

import asyncio
from typing import Any

import aiohttp

from balance_monitor.exceptions import FetchError
from balance_monitor.ingestion.ports.http import IHttpClient


class HttpSource:
    """Base class for single-request JSON sources.

    Performs one GET, maps transport failures, non-200 statuses and non-JSON
    bodies to FetchError, and hands the decoded body to the subclass. No retry.
    """

    def __init__(self, http_client: IHttpClient):
        self.http_client = http_client

    async def _get_json(self, url: str) -> Any:
        try:
            response = await self.http_client.get(url)
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise FetchError(f"Request to {url} failed: {e}", endpoint=url) from e

        if response.status_code != 200:
            raise FetchError(
                f"HTTP {response.status_code} from {url}: {_excerpt(response.body)}",
                endpoint=url,
                status_code=response.status_code,
            )
        if not response.is_json:
            raise FetchError(
                f"Non-JSON body from {url}: {_excerpt(response.body)}",
                endpoint=url,
                status_code=response.status_code,
            )
        return response.body


def _excerpt(body: Any, limit: int = 200) -> str:
    text = body if isinstance(body, str) else repr(body)
    return text if len(text) <= limit else text[:limit] + "..."

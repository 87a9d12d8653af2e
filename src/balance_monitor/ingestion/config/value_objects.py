"""Configuration value objects for dependency injection.

Instead of injecting the whole MonitorConfig, inject the specific configuration
dataclasses each component needs.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class HttpClientConfig:
    """Configuration for HTTP client.

    ``timeout=None`` keeps aiohttp's own default.
    """

    timeout: float | None = None
    verify_ssl: bool = True

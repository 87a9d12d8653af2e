from balance_monitor.ingestion.connectors.aiohttp_client import AiohttpClient

__all__ = ["AiohttpClient"]

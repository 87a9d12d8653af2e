from balance_monitor.ingestion.config.value_objects import HttpClientConfig

__all__ = ["HttpClientConfig"]

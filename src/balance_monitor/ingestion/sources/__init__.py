"""Remote sources sampled once per round."""

from balance_monitor.ingestion.sources.balances import BalanceSource, build_balance_url
from balance_monitor.ingestion.sources.fees import FeeSource

__all__ = ["BalanceSource", "FeeSource", "build_balance_url"]

"""
Bitcoin address balance monitor.
Samples address balances and fee estimates on a fixed interval and writes
derived metrics to InfluxDB.

Modules:
- ingestion: Remote fee and balance sources
- transformation: Metric derivation
- storage: Batch assembly and the time-series sink
- orchestration: Sampling rounds and the scheduler
- api: Health endpoint
- shared: Domain models
- infrastructure: Config, clock, logging
"""

__version__ = "0.1.0"

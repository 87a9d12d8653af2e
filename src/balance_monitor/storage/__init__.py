"""Batch assembly and the time-series sink."""

from balance_monitor.storage.batch import DATABASE, MEASUREMENT, PRECISION, BatchBuilder
from balance_monitor.storage.influx import InfluxSink
from balance_monitor.storage.ports import ISink

__all__ = [
    "BatchBuilder",
    "DATABASE",
    "ISink",
    "InfluxSink",
    "MEASUREMENT",
    "PRECISION",
]

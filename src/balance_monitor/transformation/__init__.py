"""Pure transformations from fetched snapshots to metric records."""

from balance_monitor.transformation.metrics import alert_threshold, derive_metric

__all__ = ["alert_threshold", "derive_metric"]

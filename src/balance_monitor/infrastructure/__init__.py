"""Cross-cutting infrastructure: clock and observability."""

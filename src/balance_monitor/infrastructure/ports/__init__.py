from balance_monitor.infrastructure.ports.system import IClock

__all__ = ["IClock"]

from balance_monitor.infrastructure.impls.system import FixedClock, SystemClock

__all__ = ["SystemClock", "FixedClock"]

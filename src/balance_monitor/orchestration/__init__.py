"""Round execution and scheduling."""

from balance_monitor.orchestration.round import RoundResult, RoundStatus, SamplingRound
from balance_monitor.orchestration.scheduler import Scheduler

__all__ = ["RoundResult", "RoundStatus", "SamplingRound", "Scheduler"]

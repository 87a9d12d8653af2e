"""
Balance Monitor Exception Hierarchy

Provides specific exception types for each failure scenario of the sampling
pipeline, so rounds can classify and log failures and the CLI can tell fatal
startup errors apart from round-level ones.
"""


class BalanceMonitorError(Exception):
    """Base exception for all balance monitor errors."""

    pass


class StartupError(BalanceMonitorError):
    """Fatal condition while starting the process."""

    pass


class ConfigError(StartupError):
    """Invalid or missing configuration. Fatal at startup."""

    pass


class FetchError(BalanceMonitorError):
    """Remote source unreachable or returned a malformed response."""

    def __init__(
        self, message: str, endpoint: str | None = None, status_code: int | None = None
    ):
        super().__init__(message)
        self.endpoint = endpoint
        self.status_code = status_code


class AssemblyError(BalanceMonitorError):
    """Sink batch could not be constructed."""

    pass


class WriteError(BalanceMonitorError):
    """Sink rejected the batch or could not be reached."""

    pass

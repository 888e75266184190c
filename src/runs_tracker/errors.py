"""Exceptions raised outside the pure market math."""


class RunsTrackerError(Exception):
    """Base class for runs tracker errors."""


class ConfigurationError(RunsTrackerError):
    """Required configuration (e.g. the Odds API key) is missing."""


class OddsAPIError(RunsTrackerError, RuntimeError):
    """The odds provider could not be reached or returned an error."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code

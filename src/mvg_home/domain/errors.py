"""Errors raised while looking up departures home."""

from mvg_home.domain.models.error_details import ErrorDetails


class MvgHomeError(Exception):
    """Base class for all errors reported to the user."""

    def to_details(self) -> ErrorDetails:
        """Summarize this error for display."""
        return ErrorDetails(reason=str(self))


class ConfigurationError(MvgHomeError):
    """The configuration is missing or invalid."""


class ProxyResolutionError(MvgHomeError):
    """The system proxy mechanism reported a hard error.

    Not fatal: callers fall back to a direct connection.
    """


class ClientBuildError(MvgHomeError):
    """The HTTP client could not be created."""


class FetchError(MvgHomeError):
    """Fetching departures failed."""


class NetworkError(FetchError):
    """Connection failure or timeout."""


class DecodeError(FetchError):
    """The response body is not JSON or lacks required fields."""


class ApiError(FetchError):
    """The departure service answered with a non-success status."""

    def __init__(self, status: int, message: str = "") -> None:
        self.status = status
        self.message = message
        reason = f"MVG API returned status {status}"
        if message:
            reason = f"{reason}: {message}"
        super().__init__(reason)

    def to_details(self) -> ErrorDetails:
        return ErrorDetails(status_code=self.status, reason=str(self))

"""Exception types shared by the dashboard views and the API handlers."""

from __future__ import annotations


class DashboardError(Exception):
    """Base class for dashboard errors"""


class ConfigError(DashboardError):
    """Raised when an environment setting is missing or invalid"""


class UpstreamHttpError(DashboardError):
    """Raised when a reachable endpoint answers with a non-2xx status"""

    def __init__(self, status_code: int, url: str, reason: str = ""):
        self.status_code = status_code
        self.url = url
        self.reason = reason
        detail = f" {reason}" if reason else ""
        super().__init__(f"HTTP error {status_code}{detail} from {url}")


class InvalidResponseShape(DashboardError):
    """Raised when a JSON payload is unparseable or lacks expected fields"""


class NetworkFailure(DashboardError):
    """Raised when every candidate URL failed.

    ``last_error`` is the failure of the final candidate; earlier failures
    are only logged.
    """

    def __init__(self, urls: list[str], last_error: BaseException | None = None):
        self.urls = list(urls)
        self.last_error = last_error
        reason = str(last_error) if last_error is not None else "All API endpoints failed"
        super().__init__(f"Network error: {reason}")


FetchFailure = NetworkFailure


class DatabaseError(DashboardError):
    """Raised when a query or the connection pool fails"""


class ValidationError(DashboardError):
    """Raised when a request body is missing or malformed"""

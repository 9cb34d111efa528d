from __future__ import annotations

from typing import Any, Optional


class ServiceError(RuntimeError):
    """Base class for service-layer errors."""


class RecipeAPIError(ServiceError):
    """A call to the recipe backend did not produce a usable result.

    Attributes:
        status: HTTP status of the response, or None when none arrived
        detail: the backend's ``detail`` message, when it sent one
        payload: raw decoded response body (or text) for diagnostics
    """

    def __init__(
        self,
        message: str,
        status: Optional[int] = None,
        detail: Optional[str] = None,
        payload: Any = None,
    ):
        super().__init__(message)
        self.status = status
        self.detail = detail
        self.payload = payload


class EndpointNotFoundError(RecipeAPIError):
    """The backend answered 404 for the endpoint itself."""


class ServerReportedError(RecipeAPIError):
    """The backend answered with a non-404 HTTP error."""


class TransportError(RecipeAPIError):
    """No HTTP response at all (connection refused, timeout, protocol error)."""


class UnexpectedResponseError(RecipeAPIError):
    """A success status with a body that is not the expected JSON shape."""

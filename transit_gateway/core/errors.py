"""
Gateway Errors

Exception hierarchy shared by the request parser, the router client and
the response assembler. Endpoints map these onto HTTP status codes.
"""


class GatewayError(Exception):
    """Base exception for gateway errors."""


class MalformedRequest(GatewayError):
    """Raised when a query string cannot be decoded or lacks required fields."""


class RouterFailure(GatewayError):
    """Raised when the routing engine cannot produce a usable result."""


class RouterTimeout(RouterFailure):
    """Raised when the routing engine does not answer in time."""


class RouterNetworkError(RouterFailure):
    """Raised when network communication with the routing engine fails."""


class RouterStatusError(RouterFailure):
    """Raised when the routing engine answers with a non-success status."""

    def __init__(self, status_code: int, message: str):
        super().__init__(message)
        self.status_code = status_code


class RouterPayloadError(RouterFailure):
    """Raised when the routing engine's payload cannot be used."""

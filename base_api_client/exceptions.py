"""
API Client Exception Classes
"""

from typing import Any, Dict, Optional


class BaseApiClientError(Exception):
    """Base error class for the client"""

    def __init__(
        self,
        message: str = "",
        status_code: int = 0,
        response: Any = None,
        headers: Optional[Dict[str, str]] = None,
    ):
        self.message = message
        self.status_code = status_code
        self.response = response if response is not None else {}
        self.headers = headers or {}
        super().__init__(self.message)


class ApiError(BaseApiClientError):
    """
    The server answered with status >= 400, or the exchange failed.

    status_code falls back to 500 when no code is known, so the error can be
    rendered directly by an HTTP server integration.
    """

    def __init__(
        self,
        message: str = "",
        status_code: Optional[int] = None,
        response: Any = None,
        headers: Optional[Dict[str, str]] = None,
    ):
        super().__init__(message, status_code or 500, response, headers)

    def to_dict(self) -> Dict[str, Any]:
        """Error body for an HTTP error response."""
        return {"message": self.message, "status_code": self.status_code}


class TransportError(ApiError):
    """The executor could not complete the exchange (network/timeout/TLS)"""
    pass


class InvalidEndpointError(BaseApiClientError, AttributeError):
    """No endpoint registered under the requested name"""
    pass


class InvalidModelError(BaseApiClientError):
    """Model type cannot be resolved"""
    pass


class MalformedInputError(BaseApiClientError, TypeError):
    """Value is neither a raw list/mapping nor a Response"""
    pass


class ConfigurationError(BaseApiClientError, ValueError):
    """Invalid client configuration"""
    pass

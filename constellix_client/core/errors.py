"""
Exceptions raised by the Constellix client.

All errors derive from ConstellixError so callers can catch the whole
family in one place.
"""

from typing import Optional

import requests


class ConstellixError(Exception):
    """Base class for all client errors."""


class ConfigurationError(ConstellixError):
    """Client configuration is invalid (bad proxy URL, missing credentials)."""


class TransportError(ConstellixError):
    """The request could not be sent or no response was received."""


class RequestBuildError(ConstellixError):
    """The request could not be constructed (unsupported method, malformed URL)."""


class EncodingError(ConstellixError):
    """The payload could not be encoded as JSON."""


class APIError(ConstellixError):
    """A backend answered with a non-success status."""

    def __init__(
        self,
        message: str,
        status_code: int,
        body: str = "",
        host: str = "",
        response: Optional[requests.Response] = None,
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.body = body
        self.host = host
        self.response = response

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        return f"APIError(status_code={self.status_code}, host={self.host!r}, message={self.message!r})"

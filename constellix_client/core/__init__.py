"""
Core client functionality.

This package contains the signed request client, its rate limiter
and the exceptions it raises.
"""

from .client import ConstellixClient, get_client, shared_client
from .errors import (
    APIError,
    ConfigurationError,
    ConstellixError,
    EncodingError,
    RequestBuildError,
    TransportError,
)
from .rate_limiter import RateLimitConfig, RateLimiter

__all__ = [
    "ConstellixClient",
    "get_client",
    "shared_client",
    "RateLimitConfig",
    "RateLimiter",
    "APIError",
    "ConfigurationError",
    "ConstellixError",
    "EncodingError",
    "RequestBuildError",
    "TransportError",
]

"""
Constellix Client - Signed request client for the Constellix APIs

A client for the Constellix DNS management API and the Sonar monitoring API
with request signing, server-driven rate limiting and uniform error handling.
"""

__version__ = "1.0.0"
__author__ = "Constellix Client Team"
__description__ = "Signed request client for the Constellix DNS and Sonar APIs"

from .core.client import ConstellixClient, get_client
from .core.errors import (
    APIError,
    ConfigurationError,
    ConstellixError,
    EncodingError,
    RequestBuildError,
    TransportError,
)
from .core.rate_limiter import RateLimitConfig, RateLimiter

__all__ = [
    "ConstellixClient",
    "get_client",
    "RateLimitConfig",
    "RateLimiter",
    "APIError",
    "ConfigurationError",
    "ConstellixError",
    "EncodingError",
    "RequestBuildError",
    "TransportError",
]

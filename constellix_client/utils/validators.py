"""
Validators - Input validation for client configuration and endpoints

This module provides validation functions for proxy URLs, HTTP methods
and endpoints so that bad configuration fails before any request is sent.
"""

import logging
from typing import Optional
from urllib.parse import urlparse

logger = logging.getLogger(__name__)

PROXY_SCHEMES = ("http", "https", "socks4", "socks5", "socks5h")
SUPPORTED_METHODS = ("GET", "POST", "PUT", "DELETE")


def validate_proxy_url(proxy_url: str) -> bool:
    """
    Validate a proxy URL.

    Args:
        proxy_url: The proxy URL to validate

    Returns:
        True if valid, False otherwise
    """
    if not proxy_url or not isinstance(proxy_url, str):
        return False

    try:
        parsed = urlparse(proxy_url.strip())
        # Accessing port raises ValueError for out of range or non-numeric ports
        parsed.port
    except ValueError as e:
        logger.warning(f"Unparseable proxy URL {proxy_url}: {e}")
        return False

    if parsed.scheme.lower() not in PROXY_SCHEMES:
        logger.warning(f"Unsupported proxy scheme '{parsed.scheme}' in {proxy_url}")
        return False

    if not parsed.hostname:
        logger.warning(f"Proxy URL has no host: {proxy_url}")
        return False

    return True


def validate_method(method: str) -> bool:
    """Check that the HTTP method is one the client dispatches."""
    if not method or not isinstance(method, str):
        return False
    return method.upper() in SUPPORTED_METHODS


def endpoint_host(endpoint: str) -> Optional[str]:
    """
    Return the host segment of an absolute endpoint.

    The endpoint is split on ``/`` and the third segment is taken as the
    host, so ``https://api.sonar.constellix.com/rest/api/http`` yields
    ``api.sonar.constellix.com`` and a relative path such as
    ``v1/domains`` yields None.
    """
    if not endpoint:
        return None

    segments = endpoint.split("/")
    if len(segments) > 2:
        return segments[2]
    return None

"""
Endpoint resolution - Pick the backend host for an endpoint

Callers address both backends through one client. An absolute endpoint whose
host is the Sonar API is used as-is; anything else is treated as a path on
the DNS API base URL.
"""

import logging
from typing import Optional, Tuple

import requests

from ..core.errors import APIError
from ..utils.validators import endpoint_host
from .base_host import HostPolicy
from .dns_host import BASE_URL, DNSHostPolicy
from .sonar_host import SONAR_API_HOST, SonarHostPolicy

logger = logging.getLogger(__name__)

DNS_POLICY = DNSHostPolicy()
SONAR_POLICY = SonarHostPolicy()


def is_sonar_endpoint(endpoint: str) -> bool:
    """Check whether an endpoint addresses the Sonar API host."""
    return endpoint_host(endpoint) == SONAR_API_HOST


def resolve_endpoint(endpoint: str, base_url: str = BASE_URL) -> Tuple[str, HostPolicy]:
    """
    Resolve an endpoint to a full URL and the policy of the host serving it.

    Args:
        endpoint: A path relative to the DNS API, or a full Sonar API URL
        base_url: Base URL of the DNS API

    Returns:
        Tuple of (url, host policy)
    """
    if is_sonar_endpoint(endpoint):
        logger.debug(f"Endpoint {endpoint} resolved to the Sonar API")
        return endpoint, SONAR_POLICY

    url = f"{base_url.rstrip('/')}/{endpoint.lstrip('/')}"
    logger.debug(f"Endpoint {endpoint} resolved to {url}")
    return url, DNS_POLICY


def normalize(response: requests.Response, policy: HostPolicy) -> Optional[APIError]:
    """Normalize a response into an APIError using the host's policy."""
    return policy.normalize(response)

"""
Backend host policies.

This package contains the success and error-body conventions of the two
backends reachable through the client: the DNS API and the Sonar API.
"""

from .base_host import HostPolicy
from .dns_host import BASE_URL, DNS_API_HOST, DNSHostPolicy
from .resolver import DNS_POLICY, SONAR_POLICY, is_sonar_endpoint, normalize, resolve_endpoint
from .sonar_host import SONAR_API_HOST, SonarHostPolicy

__all__ = [
    "HostPolicy",
    "DNSHostPolicy",
    "SonarHostPolicy",
    "BASE_URL",
    "DNS_API_HOST",
    "SONAR_API_HOST",
    "DNS_POLICY",
    "SONAR_POLICY",
    "is_sonar_endpoint",
    "normalize",
    "resolve_endpoint",
]

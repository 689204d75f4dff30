"""
HTTP transports.

This package contains the TLS transport used against the live API
and an in-memory mock transport for testing and demonstration.
"""

from .mock_adapter import MockAdapter
from .tls import CIPHER_SUITES, TLSAdapter, TransportConfig, build_ssl_context, build_transport

__all__ = [
    "CIPHER_SUITES",
    "MockAdapter",
    "TLSAdapter",
    "TransportConfig",
    "build_ssl_context",
    "build_transport",
]

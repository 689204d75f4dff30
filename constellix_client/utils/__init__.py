"""
Utility functions and helpers.

This package contains request signing and validation helpers
shared by the client and the CLI.
"""

from .signer import get_token, sign
from .validators import endpoint_host, validate_method, validate_proxy_url

__all__ = ["get_token", "sign", "endpoint_host", "validate_method", "validate_proxy_url"]

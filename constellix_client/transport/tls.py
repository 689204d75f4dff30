"""
Transport builder - TLS and proxy configuration for the HTTP session

The API is only reachable over TLS 1.1 or 1.2 with a fixed set of
ECDHE-RSA cipher suites. The TLS context is mounted on a requests
HTTPAdapter so every connection the session opens uses it, including
connections tunnelled through a proxy.
"""

import logging
import ssl
from dataclasses import dataclass, field
from typing import Dict, Optional
from urllib.parse import urlparse

import requests
from requests.adapters import HTTPAdapter

from ..core.errors import ConfigurationError
from ..utils.validators import validate_proxy_url

logger = logging.getLogger(__name__)

CIPHER_SUITES = [
    "ECDHE-RSA-AES128-SHA",
    "ECDHE-RSA-AES256-SHA",
    "ECDHE-RSA-AES128-SHA256",
    "ECDHE-RSA-AES128-GCM-SHA256",
    "ECDHE-RSA-AES256-GCM-SHA384",
]


class TLSAdapter(HTTPAdapter):
    """HTTPAdapter that opens every connection with a fixed SSL context."""

    def __init__(self, ssl_context: ssl.SSLContext, **kwargs):
        # HTTPAdapter.__init__ builds the pool manager, which needs the context
        self.ssl_context = ssl_context
        super().__init__(**kwargs)

    def init_poolmanager(self, connections, maxsize, block=False, **pool_kwargs):
        pool_kwargs["ssl_context"] = self.ssl_context
        super().init_poolmanager(connections, maxsize, block=block, **pool_kwargs)

    def proxy_manager_for(self, proxy, **proxy_kwargs):
        proxy_kwargs["ssl_context"] = self.ssl_context
        return super().proxy_manager_for(proxy, **proxy_kwargs)


@dataclass
class TransportConfig:
    """A configured adapter plus the session settings that go with it."""

    adapter: HTTPAdapter
    verify: bool = True
    proxies: Dict[str, str] = field(default_factory=dict)

    def apply(self, session: requests.Session) -> requests.Session:
        """Mount the adapter and proxy settings on a session."""
        session.mount("https://", self.adapter)
        session.mount("http://", self.adapter)
        session.verify = self.verify
        if self.proxies:
            session.proxies.update(self.proxies)
        return session


def build_ssl_context(insecure: bool = False) -> ssl.SSLContext:
    """
    Build the TLS context used for all API connections.

    Args:
        insecure: Disable certificate and hostname verification

    Returns:
        Configured SSL context
    """
    context = ssl.create_default_context()
    context.minimum_version = ssl.TLSVersion.TLSv1_1
    context.maximum_version = ssl.TLSVersion.TLSv1_2
    context.options |= ssl.OP_CIPHER_SERVER_PREFERENCE

    try:
        context.set_ciphers(":".join(CIPHER_SUITES))
    except ssl.SSLError as e:
        raise ConfigurationError(f"No supported cipher suites available: {e}") from e

    if insecure:
        # check_hostname must be cleared before verify_mode can be relaxed
        context.check_hostname = False
        context.verify_mode = ssl.CERT_NONE

    return context


def build_transport(insecure: bool = False, proxy_url: Optional[str] = None) -> TransportConfig:
    """
    Build the transport for a client.

    Args:
        insecure: Skip TLS certificate verification
        proxy_url: Optional proxy for both http and https traffic

    Returns:
        TransportConfig ready to apply to a session

    Raises:
        ConfigurationError: If the proxy URL is not a valid URL
    """
    if insecure:
        logger.warning("TLS certificate verification is disabled")

    adapter = TLSAdapter(build_ssl_context(insecure))

    proxies = {}
    if proxy_url:
        if not validate_proxy_url(proxy_url):
            raise ConfigurationError(f"Invalid proxy URL: {proxy_url}")
        proxies = {"http": proxy_url, "https": proxy_url}
        logger.info(f"Routing API traffic through proxy {urlparse(proxy_url).hostname}")

    return TransportConfig(adapter=adapter, verify=not insecure, proxies=proxies)

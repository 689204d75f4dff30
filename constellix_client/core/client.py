"""
Constellix Client - Signed request client for the Constellix APIs

This module provides the client used to create, fetch, update and delete
objects on the Constellix DNS API and the Sonar API. Every request is signed
with the account's API and secret keys, and the client slows down on its own
when the server reports that the rate limit is nearly used up.
"""

import json
import logging
import threading
from typing import Any, Dict, Optional

import requests
from requests.adapters import BaseAdapter

from ..hosts.dns_host import BASE_URL
from ..hosts.resolver import normalize, resolve_endpoint
from ..transport.tls import build_transport
from ..utils.signer import SECURITY_TOKEN_HEADER, get_token
from ..utils.validators import validate_method
from .errors import ConfigurationError, EncodingError, RequestBuildError, TransportError
from .rate_limiter import RateLimitConfig, RateLimiter

logger = logging.getLogger(__name__)

BODY_METHODS = ("POST", "PUT")


class ConstellixClient:
    """Signed HTTP client for the Constellix DNS and Sonar APIs."""

    def __init__(
        self,
        api_key: str,
        secret_key: str,
        insecure: bool = False,
        proxy_url: Optional[str] = None,
        base_url: str = BASE_URL,
        timeout: Optional[float] = None,
        rate_limit: Optional[RateLimitConfig] = None,
        transport: Optional[BaseAdapter] = None,
    ):
        """
        Initialize the client.

        Args:
            api_key: Account API key
            secret_key: Account secret key used to sign requests
            insecure: Skip TLS certificate verification
            proxy_url: Optional proxy for all API traffic
            base_url: Base URL of the DNS API
            timeout: Optional request timeout in seconds
            rate_limit: Rate limit header names and initial state
            transport: Adapter to use instead of the TLS transport

        Raises:
            ConfigurationError: If credentials are missing or the proxy URL is invalid
        """
        if not api_key or not secret_key:
            raise ConfigurationError("Both api_key and secret_key are required")

        self.api_key = api_key
        self.secret_key = secret_key
        self.insecure = insecure
        self.proxy_url = proxy_url
        self.base_url = base_url
        self.timeout = timeout
        self.rate_limiter = RateLimiter(rate_limit)
        self.session = self._build_session(transport)

        logger.info(f"Constellix client initialized for {self.base_url}")

    @classmethod
    def from_config(cls, config: Dict, transport: Optional[BaseAdapter] = None) -> "ConstellixClient":
        """Build a client from a configuration dictionary."""
        settings = config.get("constellix", {}) or {}
        return cls(
            api_key=settings.get("api_key", ""),
            secret_key=settings.get("secret_key", ""),
            insecure=_config_bool(settings, "insecure"),
            proxy_url=settings.get("proxy_url"),
            base_url=settings.get("base_url") or BASE_URL,
            timeout=_config_timeout(settings),
            rate_limit=RateLimitConfig.from_dict(config.get("rate_limit")),
            transport=transport,
        )

    def _build_session(self, transport: Optional[BaseAdapter]) -> requests.Session:
        """Create the HTTP session with the configured transport mounted."""
        session = requests.Session()
        if transport is not None:
            session.mount("https://", transport)
            session.mount("http://", transport)
            return session
        return build_transport(self.insecure, self.proxy_url).apply(session)

    def create(self, obj: Any, endpoint: str) -> requests.Response:
        """Create an object with a POST request."""
        return self.request("POST", endpoint, obj)

    def fetch(self, endpoint: str) -> requests.Response:
        """Fetch an object or collection with a GET request."""
        return self.request("GET", endpoint)

    def update(self, obj: Any, endpoint: str) -> requests.Response:
        """Replace an object with a PUT request."""
        return self.request("PUT", endpoint, obj)

    def delete(self, endpoint: str) -> None:
        """Delete an object. The response body is discarded."""
        response = self.request("DELETE", endpoint)
        response.close()

    def request(self, method: str, endpoint: str, obj: Any = None) -> requests.Response:
        """
        Send a request to either backend and check the response for errors.

        Args:
            method: HTTP method
            endpoint: Path on the DNS API, or a full Sonar API URL
            obj: Object to send as the JSON body of POST and PUT requests

        Returns:
            The raw response for the caller to decode

        Raises:
            EncodingError: If the object cannot be encoded as JSON
            RequestBuildError: If the request cannot be constructed
            TransportError: If the request could not be sent
            APIError: If the backend answered with a non-success status
        """
        method = method.upper() if isinstance(method, str) else method
        payload = self._encode(obj) if method in BODY_METHODS else None

        url, policy = resolve_endpoint(endpoint, self.base_url)
        response = self.dispatch(method, url, payload)

        error = normalize(response, policy)
        if error is not None:
            raise error
        return response

    def dispatch(self, method: str, url: str, payload: Optional[bytes] = None) -> requests.Response:
        """
        Sign and send a single request, recording the rate-limit headers.

        The throttle is checked before the request is built. Rate-limit state
        is only updated when the transport returned a response.
        """
        self.rate_limiter.wait()

        prepared = self._build_request(method, url, payload)

        try:
            response = self.session.send(prepared, timeout=self.timeout)
        except requests.RequestException as e:
            logger.error(f"{method} {url} failed: {e}")
            raise TransportError(f"{method} {url} failed: {e}") from e

        self.rate_limiter.record_response(response.headers)
        logger.debug(f"{method} {url} -> HTTP {response.status_code}")
        return response

    def _build_request(self, method: str, url: str, payload: Optional[bytes]) -> requests.PreparedRequest:
        """Build a signed request, attaching the body only for POST and PUT."""
        if not validate_method(method):
            raise RequestBuildError(f"Unsupported HTTP method: {method}")

        headers = {
            "Content-Type": "application/json",
            SECURITY_TOKEN_HEADER: get_token(self.api_key, self.secret_key),
        }
        data = payload if method in BODY_METHODS else None

        try:
            request = requests.Request(method, url, headers=headers, data=data)
            return self.session.prepare_request(request)
        except (requests.RequestException, ValueError) as e:
            logger.error(f"Could not build {method} request for {url}: {e}")
            raise RequestBuildError(f"Could not build {method} request for {url}: {e}") from e

    def _encode(self, obj: Any) -> bytes:
        """Encode an object as a JSON request body."""
        try:
            return json.dumps(obj, allow_nan=False).encode("utf-8")
        except (TypeError, ValueError) as e:
            logger.error(f"Could not encode payload as JSON: {e}")
            raise EncodingError(f"Could not encode payload as JSON: {e}") from e

    @property
    def total_requests(self) -> int:
        """Number of requests that received a response."""
        return self.rate_limiter.total_requests

    def rate_limit_status(self) -> Dict[str, int]:
        """Return the current rate-limit state."""
        return self.rate_limiter.snapshot()

    def close(self) -> None:
        self.session.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()


def _config_bool(settings: Dict, key: str) -> bool:
    """Read a flag that must be a real YAML boolean."""
    value = settings.get(key)
    if value is None:
        return False
    if not isinstance(value, bool):
        raise ConfigurationError(f"'{key}' must be true or false, got {value!r}")
    return value


def _config_timeout(settings: Dict) -> Optional[float]:
    """Read the request timeout in seconds, None meaning no timeout."""
    value = settings.get("timeout")
    if value is None:
        return None
    if isinstance(value, bool):
        raise ConfigurationError(f"'timeout' must be a number of seconds, got {value!r}")

    try:
        timeout = float(value)
    except (TypeError, ValueError):
        raise ConfigurationError(f"'timeout' must be a number of seconds, got {value!r}")

    if timeout <= 0:
        raise ConfigurationError(f"'timeout' must be positive, got {value!r}")
    return timeout


_client: Optional[ConstellixClient] = None
_client_lock = threading.Lock()


def get_client(api_key: str, secret_key: str, **options) -> ConstellixClient:
    """
    Create the process-wide shared client.

    Every call builds a new client and replaces the shared one, so threads
    still holding the previous instance keep using its rate-limit state.
    """
    global _client
    client = ConstellixClient(api_key, secret_key, **options)
    with _client_lock:
        _client = client
    return client


def shared_client() -> Optional[ConstellixClient]:
    """Return the shared client created by get_client, if any."""
    with _client_lock:
        return _client

"""
Rate Limiter - Reactive throttle driven by server rate-limit headers

The API advertises how many requests remain in the current window and how
long the window lasts. Once the remaining count drops to the threshold, the
next request waits for one full refresh interval before it is sent.

The throttle only reacts to headers from earlier responses; it does not
predict usage, so a burst of concurrent requests can still exceed the
server limit.
"""

import logging
import re
import threading
import time
from dataclasses import dataclass
from typing import Callable, Dict, Mapping, Optional

from .errors import ConfigurationError

logger = logging.getLogger(__name__)

REMAINING_HEADER = "requestsRemainingHeader"
REFRESH_INTERVAL_HEADER = "requestRefreshInterval"

INTEGER_PATTERN = re.compile(r"[+-]?[0-9]+")


@dataclass
class RateLimitConfig:
    """Rate limit configuration."""

    remaining_header: str = REMAINING_HEADER
    refresh_interval_header: str = REFRESH_INTERVAL_HEADER
    initial_remaining: int = 30
    initial_refresh_interval: int = 30
    threshold: int = 2

    @classmethod
    def from_dict(cls, config: Optional[Dict]) -> "RateLimitConfig":
        """Build a configuration from the ``rate_limit`` config section."""
        config = config or {}
        defaults = cls()
        return cls(
            remaining_header=config.get("remaining_header", defaults.remaining_header),
            refresh_interval_header=config.get(
                "refresh_interval_header", defaults.refresh_interval_header
            ),
            initial_remaining=_config_int(config, "initial_remaining", defaults.initial_remaining),
            initial_refresh_interval=_config_int(
                config, "initial_refresh_interval", defaults.initial_refresh_interval
            ),
            threshold=_config_int(config, "threshold", defaults.threshold),
        )


class RateLimiter:
    """
    Thread-safe holder of the client's rate-limit state.

    The remaining count, refresh interval and total request counter share a
    single lock, so a throttle decision never sees a half-applied update.
    A separate gate lock queues callers that have to sleep.
    """

    def __init__(
        self,
        config: Optional[RateLimitConfig] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.config = config or RateLimitConfig()
        self._remaining = self.config.initial_remaining
        self._refresh_interval = self.config.initial_refresh_interval
        self._total_requests = 0
        self._lock = threading.Lock()
        self._gate = threading.Lock()
        self._sleep = sleep

    def should_throttle(self) -> int:
        """
        Decide whether the next request must wait.

        Returns:
            Seconds to wait, 0 when the request may go ahead
        """
        with self._lock:
            if self._remaining <= self.config.threshold:
                return self._refresh_interval
            return 0

    def wait(self) -> float:
        """
        Block the calling thread while the throttle is engaged.

        Returns:
            Seconds slept
        """
        with self._gate:
            delay = self.should_throttle()
            if delay > 0:
                logger.info(
                    f"Rate limit nearly exhausted, sleeping {delay}s before next request"
                )
                self._sleep(delay)
            return delay

    def record_response(self, headers: Mapping[str, str]) -> None:
        """
        Update state from the headers of a completed exchange.

        Unparseable header values are ignored and the prior state is kept.
        The total request counter is incremented for every call.
        """
        remaining = _parse_int_header(headers, self.config.remaining_header)
        refresh_interval = _parse_int_header(headers, self.config.refresh_interval_header)

        with self._lock:
            if remaining is not None:
                self._remaining = remaining
            if refresh_interval is not None:
                self._refresh_interval = refresh_interval
            self._total_requests += 1
            state = (self._remaining, self._refresh_interval, self._total_requests)

        logger.debug(
            f"Rate limit state: remaining={state[0]}, "
            f"refresh_interval={state[1]}, total_requests={state[2]}"
        )

    @property
    def remaining(self) -> int:
        with self._lock:
            return self._remaining

    @property
    def refresh_interval(self) -> int:
        with self._lock:
            return self._refresh_interval

    @property
    def total_requests(self) -> int:
        with self._lock:
            return self._total_requests

    def snapshot(self) -> Dict[str, int]:
        """Return the current state as a plain dictionary."""
        with self._lock:
            return {
                "remaining": self._remaining,
                "refresh_interval": self._refresh_interval,
                "total_requests": self._total_requests,
            }


def _parse_int_header(headers: Mapping[str, str], name: str) -> Optional[int]:
    """Read an integer header, returning None when absent or unparseable."""
    value = headers.get(name)
    if value is None:
        return None

    if not INTEGER_PATTERN.fullmatch(str(value)):
        logger.warning(f"Ignoring non-integer {name} header: {value!r}")
        return None
    return int(value)


def _config_int(config: Dict, key: str, default: int) -> int:
    """Read a whole-number setting, falling back to the default when unset."""
    value = config.get(key)
    if value is None:
        return default
    if isinstance(value, bool) or not INTEGER_PATTERN.fullmatch(str(value).strip()):
        raise ConfigurationError(f"'{key}' must be a whole number, got {value!r}")
    return int(value)

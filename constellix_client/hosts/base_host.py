"""
Base host policy interface.

This module defines the abstract base class that every backend host policy
must implement. A policy decides which status codes count as success and how
an error message is pulled out of a failed response body.
"""

import logging
from abc import ABC, abstractmethod
from typing import Optional, Tuple

import requests

from ..core.errors import APIError

logger = logging.getLogger(__name__)


class HostPolicy(ABC):
    """Abstract base class for backend host policies."""

    name: str = ""
    success_codes: Tuple[int, ...] = (200,)

    def is_success(self, status_code: int) -> bool:
        """Check whether a status code is a success for this host."""
        return status_code in self.success_codes

    @abstractmethod
    def extract_message(self, body: str) -> str:
        """Extract an error message from a failed response body."""
        pass

    def normalize(self, response: requests.Response) -> Optional[APIError]:
        """
        Map a response to an APIError, or None when it succeeded.

        Reading the body consumes it, so callers must not expect to read
        the body of a failed response again.
        """
        if self.is_success(response.status_code):
            return None

        body = response.text
        message = self.extract_message(body) if body else ""
        if not message:
            message = f"HTTP {response.status_code}"

        logger.error(f"{self.name} returned HTTP {response.status_code}: {message}")
        return APIError(
            message,
            status_code=response.status_code,
            body=body,
            host=self.name,
            response=response,
        )

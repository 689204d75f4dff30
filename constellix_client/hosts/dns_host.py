"""
DNS API host policy.

The DNS management API answers 200 on success and reports failures as a
JSON object carrying an ``errors`` array of strings.
"""

import json
import logging

from .base_host import HostPolicy

logger = logging.getLogger(__name__)

DNS_API_HOST = "api.dns.constellix.com"
BASE_URL = f"https://{DNS_API_HOST}/"


class DNSHostPolicy(HostPolicy):
    """Error policy for the primary DNS API host."""

    name = DNS_API_HOST
    success_codes = (200,)

    def extract_message(self, body: str) -> str:
        """Concatenate the ``errors`` array, falling back to the raw body."""
        try:
            data = json.loads(body)
        except ValueError:
            logger.debug("Error body is not JSON, using raw text")
            return body

        errors = data.get("errors") if isinstance(data, dict) else None
        if not isinstance(errors, list) or not errors:
            logger.debug("Error body has no 'errors' array, using raw text")
            return body

        if not all(isinstance(error, str) for error in errors):
            logger.debug("Error body 'errors' array holds non-string entries, using raw text")
            return body

        return "".join(errors)

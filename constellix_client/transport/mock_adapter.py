"""
Mock transport for testing and demonstration.

This module provides a requests adapter that answers both the DNS API and
the Sonar API from memory, following each host's status and error-body
conventions and advertising rate-limit headers, so the client can be
exercised without network access or credentials.
"""

import itertools
import json
import logging
import threading
from http import HTTPStatus
from typing import Dict, List, Optional, Tuple
from urllib.parse import urlparse

import requests
from requests.adapters import BaseAdapter
from requests.structures import CaseInsensitiveDict

from ..core.rate_limiter import REFRESH_INTERVAL_HEADER, REMAINING_HEADER
from ..hosts.sonar_host import SONAR_API_HOST

logger = logging.getLogger(__name__)


class MockAdapter(BaseAdapter):
    """In-memory stand-in for the Constellix backends."""

    def __init__(self, config: Dict = None):
        """Initialize mock transport."""
        super().__init__()
        config = config or {}
        self.limit = int(config.get("limit", 100))
        self.refresh_interval = int(config.get("refresh_interval", 1))
        self.remaining_header = config.get("remaining_header", REMAINING_HEADER)
        self.refresh_interval_header = config.get(
            "refresh_interval_header", REFRESH_INTERVAL_HEADER
        )
        self.records: Dict[str, Dict[int, Dict]] = {}
        self.requests: List[requests.PreparedRequest] = []
        self._remaining = self.limit
        self._ids = itertools.count(1)
        self._lock = threading.Lock()
        logger.info("Mock transport initialized")

    def send(self, request, stream=False, timeout=None, verify=True, cert=None, proxies=None):
        """Answer a prepared request from the in-memory store."""
        with self._lock:
            self.requests.append(request)
            parsed = urlparse(request.url)
            sonar = parsed.hostname == SONAR_API_HOST
            collection, object_id = self._split_path(parsed.path)

            method = request.method.upper()
            if method == "GET":
                status, payload = self._get(collection, object_id)
            elif method == "POST":
                status, payload = self._create(collection, request.body, sonar)
            elif method == "PUT":
                status, payload = self._update(collection, object_id, request.body)
            elif method == "DELETE":
                status, payload = self._delete(collection, object_id)
            else:
                status, payload = 405, {"errors": [f"Method {method} not allowed"]}

            self._remaining = self._remaining - 1 if self._remaining > 0 else self.limit
            return self._build_response(request, status, payload, sonar)

    def close(self):
        pass

    def _split_path(self, path: str) -> Tuple[str, Optional[int]]:
        """Split ``/v1/domains/12`` into (``/v1/domains``, 12)."""
        path = path.rstrip("/")
        head, _, tail = path.rpartition("/")
        if tail.isdigit():
            return head, int(tail)
        return path, None

    def _get(self, collection: str, object_id: Optional[int]):
        objects = self.records.get(collection, {})
        if object_id is None:
            logger.info(f"Mock: Listed {len(objects)} objects from {collection}")
            return 200, list(objects.values())
        if object_id not in objects:
            return self._not_found(collection, object_id)
        return 200, objects[object_id]

    def _create(self, collection: str, body, sonar: bool):
        try:
            obj = json.loads(body) if body else {}
        except ValueError:
            return 400, {"errors": ["Request body is not valid JSON"]}
        if not isinstance(obj, dict):
            return 400, {"errors": ["Request body must be a JSON object"]}

        obj = dict(obj, id=next(self._ids))
        self.records.setdefault(collection, {})[obj["id"]] = obj
        logger.info(f"Mock: Created object {obj['id']} in {collection}")
        return (201 if sonar else 200), obj

    def _update(self, collection: str, object_id: Optional[int], body):
        objects = self.records.get(collection, {})
        if object_id is None or object_id not in objects:
            return self._not_found(collection, object_id)
        try:
            changes = json.loads(body) if body else {}
        except ValueError:
            return 400, {"errors": ["Request body is not valid JSON"]}
        if not isinstance(changes, dict):
            return 400, {"errors": ["Request body must be a JSON object"]}

        objects[object_id] = dict(changes, id=object_id)
        logger.info(f"Mock: Updated object {object_id} in {collection}")
        return 200, objects[object_id]

    def _delete(self, collection: str, object_id: Optional[int]):
        objects = self.records.get(collection, {})
        if object_id is None or object_id not in objects:
            return self._not_found(collection, object_id)
        del objects[object_id]
        logger.info(f"Mock: Deleted object {object_id} from {collection}")
        return 200, {"success": f"Object {object_id} deleted"}

    def _not_found(self, collection: str, object_id: Optional[int]):
        return 404, {"errors": [f"Object {object_id} not found in {collection}"]}

    def _build_response(self, request, status: int, payload, sonar: bool) -> requests.Response:
        response = requests.Response()
        response.status_code = status
        response.request = request
        response.url = request.url
        response.reason = HTTPStatus(status).phrase
        response.encoding = "utf-8"

        if sonar and status >= 400:
            # Sonar reports errors as plain text
            text = "".join(payload.get("errors", []))
            content_type = "text/plain"
        else:
            text = json.dumps(payload)
            content_type = "application/json"

        response._content = text.encode("utf-8")
        response.headers = CaseInsensitiveDict(
            {
                "Content-Type": content_type,
                self.remaining_header: str(self._remaining),
                self.refresh_interval_header: str(self.refresh_interval),
            }
        )
        return response

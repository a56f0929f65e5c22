"""
HTTP client utilities for the metrics grid.

Provides a clean interface for reading the metric list from the metrics
server, including SSL context handling and response validation.
"""

import json
import ssl
from http.client import HTTPException
from typing import Any, Dict, List, Optional
from urllib.error import HTTPError, URLError
from urllib.request import Request, urlopen

from pydantic import BaseModel, ValidationError


class MetricsResponse(BaseModel):
    """Payload of GET /metric; fields other than `metrics` are ignored."""
    metrics: List[str]


class MetricsFetchError(Exception):
    """The metric list could not be retrieved or understood."""

    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.status = status


class MetricGridHttpClient:
    """HTTP client for reading from the metrics server."""

    def __init__(self, server_base: str, timeout: int = 10):
        """
        Initialize HTTP client.

        Args:
            server_base: Base URL of the metrics server (e.g., http://localhost:8080)
            timeout: Request timeout in seconds
        """
        self.server_base = server_base.rstrip("/")
        self.timeout = timeout
        self._ssl_context = self._create_ssl_context()

    def _create_ssl_context(self) -> ssl.SSLContext:
        """Create SSL context for HTTPS that auto-trusts server certificates."""
        ssl_context = ssl.create_default_context()
        ssl_context.check_hostname = False
        ssl_context.verify_mode = ssl.CERT_NONE
        return ssl_context

    def get_json(self, endpoint: str, headers: Optional[Dict[str, str]] = None) -> Dict[str, Any]:
        """
        Make a GET request.

        Args:
            endpoint: API endpoint path
            headers: Optional request headers

        Returns:
            Response data as dictionary

        Raises:
            HTTPError: On HTTP errors
            URLError: On connection errors
        """
        url = f"{self.server_base}{endpoint}"
        req = Request(url, headers=headers or {}, method="GET")

        # Use SSL context for HTTPS URLs
        ssl_context = self._ssl_context if url.startswith("https://") else None

        with urlopen(req, timeout=self.timeout, context=ssl_context) as resp:
            raw = resp.read().decode("utf-8")
            return json.loads(raw) if raw else {}

    def fetch_metric_names(self) -> List[str]:
        """
        Fetch the list of known metric names.

        Returns:
            Metric names in server order

        Raises:
            MetricsFetchError: On non-success status, transport failure or a
                malformed response body
        """
        try:
            data = self.get_json("/metric", {"Accept": "application/json"})
        except HTTPError as e:
            raise MetricsFetchError(f"HTTP {e.code}", status=e.code) from e
        except URLError as e:
            raise MetricsFetchError(f"failed to reach metrics server: {e.reason}") from e
        except (OSError, HTTPException, ValueError) as e:
            raise MetricsFetchError(f"failed to read metric list: {e}") from e

        try:
            return MetricsResponse.model_validate(data).metrics
        except ValidationError as e:
            raise MetricsFetchError(f"invalid metric list payload: {e.error_count()} error(s)") from e

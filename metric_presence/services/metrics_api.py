"""Metrics API client.

Fetches daily/monthly/yearly summaries:
    GET {api_url}/api/{steps|water|sleep}/summary?token=...[&date=YYYY-MM-DD]
"""

import logging
from datetime import date
from http import HTTPStatus

import httpx
from pydantic import ValidationError

from ..errors import MetricFetchError
from ..models import SUMMARY_MODELS, ErrorResponse, MetricKind, MetricSummary

logger = logging.getLogger(__name__)


class MetricsAPIClient:
    """Client for the metrics summary endpoints.

    Holds one shared httpx client so every tick reuses the same connection pool.
    """

    def __init__(self, api_url: str, token: str, http: httpx.AsyncClient | None = None):
        if not api_url or not token:
            raise ValueError("Metrics api_url and token are required")

        self.api_url = api_url.rstrip("/")
        self._token = token
        self._http = http or httpx.AsyncClient()

    async def close(self) -> None:
        """Close the shared HTTP client."""
        await self._http.aclose()

    def summary_url(self, kind: MetricKind) -> str:
        return f"{self.api_url}/api/{kind.value}/summary"

    async def fetch_summary(self, kind: MetricKind, day: date | None = None) -> MetricSummary:
        """Fetch one summary. Raises MetricFetchError on any failure."""
        params = {"token": self._token}
        if day is not None:
            params["date"] = day.isoformat()

        try:
            response = await self._http.get(self.summary_url(kind), params=params)
        except httpx.HTTPError as e:
            raise MetricFetchError(kind.value, f"request failed: {e}") from e

        if not response.is_success:
            raise MetricFetchError(
                kind.value, _error_message(response), status_code=response.status_code
            )

        try:
            return SUMMARY_MODELS[kind].model_validate(response.json())  # type: ignore[return-value]
        except (ValueError, ValidationError) as e:
            raise MetricFetchError(kind.value, f"invalid response body: {e}") from e


def _error_message(response: httpx.Response) -> str:
    """Prefer the API's own error text, fall back to the status line."""
    try:
        return ErrorResponse.model_validate(response.json()).error
    except (ValueError, ValidationError):
        pass
    try:
        reason = HTTPStatus(response.status_code).phrase
    except ValueError:
        reason = response.reason_phrase or "Unknown"
    return f"HTTP {response.status_code} {reason}"

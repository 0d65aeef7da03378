"""WeatherAPI.com forecast and search client with retry and error classification."""

import json
import logging
import os
import time

import httpx

from stargaze.config.schema import WEATHERAPI_BASE_URL
from stargaze.ingest.errors import AuthorizationError, TransientProviderError

logger = logging.getLogger(__name__)

DEFAULT_USER_AGENT = "stargaze/0.1.0"
AUTH_FAILURE_CODES = (401, 403)
RETRYABLE_CODES = (429, 503)


class WeatherApiClient:
    def __init__(
        self,
        api_key: str | None = None,
        base_url: str = WEATHERAPI_BASE_URL,
        user_agent: str = DEFAULT_USER_AGENT,
        timeout: float = 30.0,
        max_retries: int = 3,
        retry_base_delay: float = 2.0,
    ):
        self.api_key = api_key or os.environ.get("WEATHERAPI_KEY", "")
        self.base_url = base_url.rstrip("/")
        self.user_agent = user_agent
        self.timeout = timeout
        self.max_retries = max_retries
        self.retry_base_delay = retry_base_delay

    def get_forecast(self, location: str, days: int = 3) -> dict:
        """Fetch the multi-day hourly forecast with astronomy blocks."""
        payload = self._get_json(
            "forecast.json", {"q": location, "days": str(days), "aqi": "no"}
        )
        if not isinstance(payload, dict) or not payload:
            raise TransientProviderError("Empty or malformed forecast payload")
        return payload

    def search_locations(self, query: str) -> list[dict]:
        """Autocomplete search; returns the provider's ordered match list."""
        payload = self._get_json("search.json", {"q": query})
        if not isinstance(payload, list):
            raise TransientProviderError("Malformed search payload")
        return payload

    def _get_json(self, endpoint: str, params: dict[str, str]) -> dict | list:
        """GET with exponential backoff on 429/503 and network errors.

        401/403 raise AuthorizationError immediately. Any other failure is
        raised as TransientProviderError once retries are exhausted.
        """
        url = f"{self.base_url}/{endpoint}"
        headers = {"User-Agent": self.user_agent, "Accept": "application/json"}
        query = {"key": self.api_key, **params}

        for attempt in range(self.max_retries + 1):
            try:
                resp = httpx.get(url, params=query, headers=headers, timeout=self.timeout)
            except httpx.RequestError as e:
                if attempt < self.max_retries:
                    delay = self.retry_base_delay * (2**attempt)
                    logger.warning(
                        "Weather API request error, retrying in %.1fs: %s", delay, e
                    )
                    time.sleep(delay)
                    continue
                raise TransientProviderError(f"Request to {endpoint} failed: {e}") from e

            if resp.status_code in AUTH_FAILURE_CODES:
                logger.error(
                    "Weather API rejected credentials for %s: %d",
                    endpoint, resp.status_code,
                )
                raise AuthorizationError(
                    f"Authentication failed: {resp.status_code}",
                    status_code=resp.status_code,
                )
            if resp.status_code in RETRYABLE_CODES and attempt < self.max_retries:
                delay = self.retry_base_delay * (2**attempt)
                logger.warning(
                    "Weather API %s returned %d, retrying in %.1fs (attempt %d/%d)",
                    endpoint, resp.status_code, delay, attempt + 1, self.max_retries,
                )
                time.sleep(delay)
                continue
            if not resp.is_success:
                raise TransientProviderError(
                    f"Weather API {endpoint} returned {resp.status_code}",
                    status_code=resp.status_code,
                )
            try:
                return resp.json()
            except json.JSONDecodeError as e:
                raise TransientProviderError(
                    f"Weather API {endpoint} returned a non-JSON body",
                    status_code=resp.status_code,
                ) from e

        raise TransientProviderError(f"Retries exhausted for {endpoint}")

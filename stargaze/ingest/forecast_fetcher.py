"""Forecast fetcher: cache-first retrieval with stale fallback."""

import logging
import threading
import weakref
from datetime import timedelta

from stargaze.cache.forecast_cache import ForecastCache
from stargaze.cache.staleness import entry_age_hours
from stargaze.ingest.errors import AuthorizationError, TransientProviderError
from stargaze.ingest.forecast_parser import ForecastParseError, parse_forecast
from stargaze.ingest.weather_client import WeatherApiClient
from stargaze.models.location import Coordinates
from stargaze.models.weather import WeatherForecast

logger = logging.getLogger(__name__)

DEFAULT_FORECAST_TTL = timedelta(hours=2)


def forecast_cache_key(location: str) -> str:
    return f"forecast_{location.strip().lower().replace(' ', '_')}"


class ForecastFetcher:
    """Serves forecasts from the cache and refreshes them from the provider.

    Fresh hits skip the network. Misses and stale hits trigger a refresh;
    transient failures fall back to the stale value when there is one.
    AuthorizationError always propagates. Concurrent callers for the same
    key wait on a per-key lock so only one of them hits the provider.
    """

    def __init__(
        self,
        client: WeatherApiClient,
        cache: ForecastCache[WeatherForecast],
        ttl: timedelta = DEFAULT_FORECAST_TTL,
        days: int = 3,
    ):
        self.client = client
        self.cache = cache
        self.ttl = ttl
        self.days = days
        # Entries drop out once no caller holds the lock
        self._locks: weakref.WeakValueDictionary[str, threading.Lock] = (
            weakref.WeakValueDictionary()
        )
        self._locks_guard = threading.Lock()

    def fetch(self, location: str) -> WeatherForecast | None:
        if not location or not location.strip():
            raise ValueError("location must not be blank")
        key = forecast_cache_key(location)

        cached = self.cache.get(key)
        if cached.is_fresh:
            return cached.value

        with self._lock_for(key):
            # Another caller may have refreshed while we waited
            cached = self.cache.get(key)
            if cached.is_fresh:
                return cached.value

            try:
                raw = self.client.get_forecast(location, days=self.days)
                forecast = parse_forecast(raw)
            except AuthorizationError:
                raise
            except (TransientProviderError, ForecastParseError) as e:
                if cached.is_hit:
                    logger.warning(
                        "Forecast refresh for %s failed, serving cached copy (%.1fh old): %s",
                        location, entry_age_hours(cached.fetched_at), e,
                    )
                    return cached.value
                logger.warning("Forecast unavailable for %s: %s", location, e)
                return None

            self.cache.set(key, forecast, ttl=self.ttl)
            return forecast

    def fetch_for_coordinates(self, coordinates: Coordinates) -> WeatherForecast | None:
        return self.fetch(coordinates.as_query())

    def invalidate(self, location: str) -> None:
        self.cache.remove(forecast_cache_key(location))

    def _lock_for(self, key: str) -> threading.Lock:
        with self._locks_guard:
            lock = self._locks.get(key)
            if lock is None:
                lock = threading.Lock()
                self._locks[key] = lock
            return lock

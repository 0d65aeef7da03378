"""Light-pollution lookup with long-lived caching."""

import logging
from datetime import timedelta

from stargaze.cache.forecast_cache import ForecastCache
from stargaze.geo.coordinates import are_valid_coordinates
from stargaze.models.weather import LightPollutionReading

logger = logging.getLogger(__name__)

DEFAULT_LIGHT_POLLUTION_TTL = timedelta(hours=24)


def light_pollution_cache_key(latitude: float, longitude: float) -> str:
    return f"lightpollution_{latitude:.4f}_{longitude:.4f}"


class LightPollutionService:
    """Bortle class per location.

    No light-pollution map is wired in yet; ``estimate_bortle_class`` returns
    the configured default, or None to report the data as unavailable.
    Any cached reading, fresh or stale, is reused since sky brightness
    changes on a scale of years.
    """

    def __init__(
        self,
        cache: ForecastCache[LightPollutionReading],
        default_bortle_class: int | None = 5,
        ttl: timedelta = DEFAULT_LIGHT_POLLUTION_TTL,
    ):
        self.cache = cache
        self.default_bortle_class = default_bortle_class
        self.ttl = ttl

    def lookup(self, latitude: float, longitude: float) -> LightPollutionReading | None:
        if not are_valid_coordinates(latitude, longitude):
            return None
        key = light_pollution_cache_key(latitude, longitude)
        cached = self.cache.get(key)
        if cached.is_hit:
            return cached.value

        bortle = self.estimate_bortle_class(latitude, longitude)
        if bortle is None:
            logger.info("No light-pollution data for %.4f,%.4f", latitude, longitude)
            return None

        reading = LightPollutionReading(
            latitude=latitude, longitude=longitude, bortle_class=bortle
        )
        self.cache.set(key, reading, ttl=self.ttl)
        return reading

    def estimate_bortle_class(self, latitude: float, longitude: float) -> int | None:
        return self.default_bortle_class

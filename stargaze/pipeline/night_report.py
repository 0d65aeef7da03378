"""Night report pipeline: forecast -> twilight + recommendations per night."""

import logging
from datetime import timedelta

from stargaze.astro.twilight import calculate_twilight
from stargaze.cache.forecast_cache import ForecastCache
from stargaze.config.schema import StargazeConfig
from stargaze.ingest.forecast_fetcher import ForecastFetcher
from stargaze.ingest.light_pollution import LightPollutionService
from stargaze.ingest.location_search import LocationSearch
from stargaze.ingest.weather_client import WeatherApiClient
from stargaze.models.reporting import ForecastReport, NightReport
from stargaze.models.weather import ForecastDay, LightPollutionReading, WeatherForecast
from stargaze.scoring.night import best_hours, night_overview
from stargaze.storage.database import connect, run_migrations
from stargaze.storage.kv_store import SqliteKeyValueStore

logger = logging.getLogger(__name__)


class NightReportPipeline:
    def __init__(self, config: StargazeConfig, client: WeatherApiClient | None = None):
        self.config = config
        self.client = client or WeatherApiClient(
            api_key=config.provider.api_key,
            base_url=config.provider.base_url,
            timeout=config.provider.timeout,
            max_retries=config.provider.max_retries,
            retry_base_delay=config.provider.retry_base_delay,
        )

    def run(self, location_text: str) -> ForecastReport | None:
        """Build a report for the nights covered by the forecast.

        Returns None when the input is not a usable location or no forecast
        can be obtained. AuthorizationError from the provider propagates.
        """
        search = LocationSearch(self.client)
        query = search.to_query(location_text)
        if query is None:
            logger.warning("Not a usable location: %r", location_text)
            return None

        conn = connect(self.config.storage.db_path, self.config.storage.timeout_seconds)
        try:
            run_migrations(conn)
            store = SqliteKeyValueStore(conn)
            fetcher = ForecastFetcher(
                self.client,
                ForecastCache(
                    store,
                    WeatherForecast,
                    namespace=self.config.cache.namespace,
                    default_ttl=timedelta(hours=self.config.cache.forecast_ttl_hours),
                ),
                ttl=timedelta(hours=self.config.cache.forecast_ttl_hours),
                days=self.config.provider.forecast_days,
            )
            light_pollution = LightPollutionService(
                ForecastCache(
                    store,
                    LightPollutionReading,
                    namespace=self.config.cache.namespace,
                ),
                default_bortle_class=self.config.light_pollution.default_bortle_class,
                ttl=timedelta(hours=self.config.cache.light_pollution_ttl_hours),
            )

            forecast = fetcher.fetch(query)
            if forecast is None:
                return None

            reading = light_pollution.lookup(
                forecast.location.latitude, forecast.location.longitude
            )
        finally:
            conn.close()

        bortle = reading.bortle_class if reading is not None else None
        nights = [self._night(forecast, day, bortle) for day in forecast.days]
        logger.info(
            "Built %d night reports for %s (Bortle %s)",
            len(nights), forecast.location.name, bortle,
        )
        return ForecastReport(location=forecast.location, bortle_class=bortle, nights=nights)

    def _night(
        self, forecast: WeatherForecast, day: ForecastDay, bortle: int | None
    ) -> NightReport:
        twilight = calculate_twilight(
            forecast.location.latitude,
            forecast.location.longitude,
            day.date,
            day.astronomy.sunset,
            day.astronomy.sunrise,
        )
        return NightReport(
            day=day,
            twilight=twilight,
            overview=night_overview(day, bortle),
            best_hours=best_hours(day, bortle, self.config.scoring.best_hours),
        )

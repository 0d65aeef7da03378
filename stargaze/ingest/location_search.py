"""Location search and free-text routing."""

import logging

from stargaze.geo.coordinates import (
    distance_km,
    looks_like_coordinates,
    looks_like_postal_code,
    parse_coordinates,
)
from stargaze.ingest.errors import TransientProviderError
from stargaze.ingest.forecast_parser import parse_search_results
from stargaze.ingest.weather_client import WeatherApiClient
from stargaze.models.location import Coordinates, LocationSearchResult

logger = logging.getLogger(__name__)

MIN_QUERY_LENGTH = 2


class LocationSearch:
    def __init__(self, client: WeatherApiClient):
        self.client = client

    def search(self, query: str | None) -> list[LocationSearchResult]:
        """Autocomplete matches in provider order.

        Queries shorter than two characters return [] without a request.
        Transient provider failures also return []; AuthorizationError
        propagates.
        """
        if query is None or len(query.strip()) < MIN_QUERY_LENGTH:
            return []
        try:
            raw = self.client.search_locations(query.strip())
        except TransientProviderError as e:
            logger.warning("Location search for %r failed: %s", query, e)
            return []
        return parse_search_results(raw)

    def to_query(self, text: str) -> str | None:
        """Normalize user input into a provider query.

        Coordinates are validated and reformatted, and coordinate-shaped
        text outside the valid ranges is rejected. Postal codes and place
        names pass through trimmed. Returns None for unusable input.
        """
        if not text or not text.strip():
            return None
        trimmed = text.strip()
        if looks_like_coordinates(trimmed):
            coordinates = parse_coordinates(trimmed)
            return coordinates.as_query() if coordinates else None
        if looks_like_postal_code(trimmed):
            return trimmed.upper()
        if len(trimmed) < MIN_QUERY_LENGTH:
            return None
        return trimmed

    def resolve(
        self, text: str, near: Coordinates | None = None
    ) -> LocationSearchResult | None:
        """Pick one search match for free text, nearest to ``near`` if given."""
        results = self.search(text)
        if not results:
            return None
        if near is None:
            return results[0]
        return nearest(results, near)


def nearest(
    results: list[LocationSearchResult], origin: Coordinates
) -> LocationSearchResult:
    """Closest result by great-circle distance; first wins on ties."""
    return min(
        results,
        key=lambda r: distance_km(
            origin.latitude, origin.longitude, r.latitude, r.longitude
        ),
    )

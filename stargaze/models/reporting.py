"""Night report models."""

from dataclasses import dataclass, field

from stargaze.models.location import LocationInfo
from stargaze.models.recommendation import Recommendation
from stargaze.models.twilight import TwilightBoundaries
from stargaze.models.weather import ForecastDay, HourlyObservation


@dataclass(frozen=True)
class NightReport:
    day: ForecastDay
    twilight: TwilightBoundaries
    overview: Recommendation
    best_hours: list[tuple[HourlyObservation, Recommendation]]


@dataclass(frozen=True)
class ForecastReport:
    location: LocationInfo
    bortle_class: int | None
    nights: list[NightReport] = field(default_factory=list)

"""Forecast data models mapped from the weather provider."""

from dataclasses import dataclass, field
from datetime import date, datetime, time

from stargaze.models.common import utc_now
from stargaze.models.location import LocationInfo


@dataclass(frozen=True)
class WeatherCondition:
    text: str
    icon_url: str
    code: int


@dataclass(frozen=True)
class HourlyObservation:
    time: datetime
    cloud_cover_percent: int
    humidity_percent: int
    visibility_km: float
    condition: WeatherCondition
    is_day: bool
    time_epoch: int = 0
    temperature_c: float = 0.0
    temperature_f: float = 0.0
    feels_like_c: float = 0.0
    feels_like_f: float = 0.0
    visibility_miles: float = 0.0
    wind_speed_mph: float = 0.0
    wind_speed_kph: float = 0.0
    wind_degree: int = 0
    wind_direction: str = ""
    gust_mph: float = 0.0
    gust_kph: float = 0.0
    pressure_mb: float = 0.0
    pressure_in: float = 0.0
    precip_mm: float = 0.0
    precip_in: float = 0.0
    chance_of_rain_percent: int = 0
    chance_of_snow_percent: int = 0
    dew_point_c: float = 0.0
    dew_point_f: float = 0.0
    uv_index: float = 0.0


@dataclass(frozen=True)
class AstronomicalContext:
    sunrise: time
    sunset: time
    moon_phase: str
    moon_illumination_percent: int
    is_moon_up: bool
    is_sun_up: bool = False
    moonrise: time | None = None
    moonset: time | None = None

    @property
    def moon_description(self) -> str:
        illumination = self.moon_illumination_percent
        if illumination <= 10:
            return "Excellent - New Moon"
        if illumination <= 30:
            return "Very Good - Crescent"
        if illumination <= 50:
            return "Moderate - Quarter"
        if illumination <= 70:
            return "Fair - Gibbous"
        return "Bright - Full Moon"

    @property
    def is_favorable_for_deep_sky(self) -> bool:
        return self.moon_illumination_percent <= 30 or not self.is_moon_up


@dataclass(frozen=True)
class DaySummary:
    max_temp_c: float
    min_temp_c: float
    avg_temp_c: float
    max_wind_kph: float
    total_precip_mm: float
    avg_visibility_km: float
    avg_humidity_percent: int
    chance_of_rain_percent: int
    chance_of_snow_percent: int
    condition: WeatherCondition


@dataclass(frozen=True)
class ForecastDay:
    date: date
    summary: DaySummary
    astronomy: AstronomicalContext
    hours: list[HourlyObservation]

    def night_hours(self) -> list[HourlyObservation]:
        """Hours flagged as night by the provider, in chronological order."""
        return [h for h in self.hours if not h.is_day]


@dataclass(frozen=True)
class WeatherForecast:
    location: LocationInfo
    days: list[ForecastDay]
    retrieved_at: datetime = field(default_factory=utc_now)


@dataclass(frozen=True)
class LightPollutionReading:
    latitude: float
    longitude: float
    bortle_class: int
    retrieved_at: datetime = field(default_factory=utc_now)

    @property
    def description(self) -> str:
        return _BORTLE_DESCRIPTIONS.get(self.bortle_class, "Unknown")

    @property
    def quality_rating(self) -> str:
        if self.bortle_class <= 2:
            return "Excellent"
        return _BORTLE_QUALITY.get(self.bortle_class, "Very Poor")

    @property
    def is_suitable_for_deep_sky(self) -> bool:
        return self.bortle_class <= 5


_BORTLE_DESCRIPTIONS = {
    1: "Excellent dark-sky site",
    2: "Typical dark site",
    3: "Rural sky",
    4: "Rural/suburban transition",
    5: "Suburban sky",
    6: "Bright suburban sky",
    7: "Suburban/urban transition",
    8: "City sky",
    9: "Inner-city sky",
}

_BORTLE_QUALITY = {
    3: "Very Good",
    4: "Good",
    5: "Moderate",
    6: "Fair",
    7: "Poor",
}

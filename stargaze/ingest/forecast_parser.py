"""Map WeatherAPI.com forecast payloads onto domain models."""

import logging
from datetime import date, datetime, time

from stargaze.models.location import LocationInfo, LocationSearchResult
from stargaze.models.weather import (
    AstronomicalContext,
    DaySummary,
    ForecastDay,
    HourlyObservation,
    WeatherCondition,
    WeatherForecast,
)

logger = logging.getLogger(__name__)

CLOCK_FORMAT = "%I:%M %p"  # "07:15 AM"
LOCAL_TIME_FORMAT = "%Y-%m-%d %H:%M"  # "2024-06-21 21:00"
NO_MOON_EVENT = ("No moonrise", "No moonset")


class ForecastParseError(ValueError):
    """Raised when a provider payload is missing required structure."""


def parse_forecast(raw: dict) -> WeatherForecast:
    """Build a WeatherForecast from a ``forecast.json`` response."""
    try:
        location = _parse_location(raw["location"])
        days = [_parse_day(d) for d in raw["forecast"]["forecastday"]]
    except (AttributeError, KeyError, TypeError, ValueError) as e:
        raise ForecastParseError(f"Malformed forecast payload: {e}") from e
    if not days:
        raise ForecastParseError("Forecast payload contains no days")
    return WeatherForecast(location=location, days=days)


def parse_search_results(raw: list[dict]) -> list[LocationSearchResult]:
    results = []
    for item in raw:
        try:
            results.append(
                LocationSearchResult(
                    id=int(item.get("id", 0)),
                    name=item["name"],
                    latitude=float(item["lat"]),
                    longitude=float(item["lon"]),
                    region=item.get("region") or None,
                    country=item.get("country") or None,
                )
            )
        except (AttributeError, KeyError, TypeError, ValueError):
            logger.warning("Skipping malformed search result: %r", item)
    return results


def _parse_location(loc: dict) -> LocationInfo:
    return LocationInfo(
        name=loc["name"],
        latitude=float(loc["lat"]),
        longitude=float(loc["lon"]),
        region=loc.get("region") or None,
        country=loc.get("country") or None,
        timezone_id=loc.get("tz_id") or None,
        local_time=_parse_local_time(loc.get("localtime")),
    )


def _parse_day(day: dict) -> ForecastDay:
    summary = day["day"]
    astro = day["astro"]
    return ForecastDay(
        date=date.fromisoformat(day["date"]),
        summary=DaySummary(
            max_temp_c=float(summary.get("maxtemp_c", 0.0)),
            min_temp_c=float(summary.get("mintemp_c", 0.0)),
            avg_temp_c=float(summary.get("avgtemp_c", 0.0)),
            max_wind_kph=float(summary.get("maxwind_kph", 0.0)),
            total_precip_mm=float(summary.get("totalprecip_mm", 0.0)),
            avg_visibility_km=float(summary.get("avgvis_km", 0.0)),
            avg_humidity_percent=int(summary.get("avghumidity", 0)),
            chance_of_rain_percent=int(summary.get("daily_chance_of_rain", 0)),
            chance_of_snow_percent=int(summary.get("daily_chance_of_snow", 0)),
            condition=_parse_condition(summary.get("condition") or {}),
        ),
        astronomy=AstronomicalContext(
            sunrise=_parse_clock(astro["sunrise"]),
            sunset=_parse_clock(astro["sunset"]),
            moonrise=_parse_optional_clock(astro.get("moonrise")),
            moonset=_parse_optional_clock(astro.get("moonset")),
            moon_phase=astro.get("moon_phase", ""),
            moon_illumination_percent=int(astro.get("moon_illumination", 0)),
            is_moon_up=astro.get("is_moon_up") == 1,
            is_sun_up=astro.get("is_sun_up") == 1,
        ),
        hours=[_parse_hour(h) for h in day.get("hour") or []],
    )


def _parse_hour(hour: dict) -> HourlyObservation:
    return HourlyObservation(
        time=datetime.strptime(hour["time"], LOCAL_TIME_FORMAT),
        time_epoch=int(hour.get("time_epoch", 0)),
        cloud_cover_percent=int(hour["cloud"]),
        humidity_percent=int(hour["humidity"]),
        visibility_km=float(hour["vis_km"]),
        visibility_miles=float(hour.get("vis_miles", 0.0)),
        temperature_c=float(hour.get("temp_c", 0.0)),
        temperature_f=float(hour.get("temp_f", 0.0)),
        feels_like_c=float(hour.get("feelslike_c", 0.0)),
        feels_like_f=float(hour.get("feelslike_f", 0.0)),
        wind_speed_mph=float(hour.get("wind_mph", 0.0)),
        wind_speed_kph=float(hour.get("wind_kph", 0.0)),
        wind_degree=int(hour.get("wind_degree", 0)),
        wind_direction=hour.get("wind_dir", ""),
        gust_mph=float(hour.get("gust_mph", 0.0)),
        gust_kph=float(hour.get("gust_kph", 0.0)),
        pressure_mb=float(hour.get("pressure_mb", 0.0)),
        pressure_in=float(hour.get("pressure_in", 0.0)),
        precip_mm=float(hour.get("precip_mm", 0.0)),
        precip_in=float(hour.get("precip_in", 0.0)),
        chance_of_rain_percent=int(hour.get("chance_of_rain", 0)),
        chance_of_snow_percent=int(hour.get("chance_of_snow", 0)),
        dew_point_c=float(hour.get("dewpoint_c", 0.0)),
        dew_point_f=float(hour.get("dewpoint_f", 0.0)),
        uv_index=float(hour.get("uv", 0.0)),
        condition=_parse_condition(hour.get("condition") or {}),
        is_day=hour.get("is_day") == 1,
    )


def _parse_condition(condition: dict) -> WeatherCondition:
    icon = condition.get("icon") or ""
    if icon.startswith("//"):
        icon = f"https:{icon}"
    return WeatherCondition(
        text=condition.get("text") or "",
        icon_url=icon,
        code=int(condition.get("code") or 0),
    )


def _parse_clock(value: str) -> time:
    return datetime.strptime(value.strip(), CLOCK_FORMAT).time()


def _parse_optional_clock(value: str | None) -> time | None:
    if not value or value.strip() in NO_MOON_EVENT:
        return None
    try:
        return _parse_clock(value)
    except ValueError:
        return None


def _parse_local_time(value: str | None) -> datetime | None:
    if not value:
        return None
    try:
        return datetime.strptime(value, LOCAL_TIME_FORMAT)
    except ValueError:
        return None

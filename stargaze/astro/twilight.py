"""Twilight boundary calculation.

Two independent models live here. ``calculate_twilight`` stretches a fixed
30-minute phase length by a latitude/season multiplier and anchors it on the
provider's sunset and sunrise. ``twilight_duration`` is the textbook
hour-angle formula for a given solar depression, used to sanity-check the
approximation at extreme latitudes. They are not expected to agree.
"""

import math
from datetime import date, datetime, time, timedelta

from stargaze.models.twilight import TwilightBoundaries

CIVIL_DEPRESSION = 6.0
NAUTICAL_DEPRESSION = 12.0
ASTRONOMICAL_DEPRESSION = 18.0

CIVIL_BASE_MINUTES = 30
NAUTICAL_BASE_MINUTES = 30
ASTRONOMICAL_BASE_MINUTES = 30

NORTHERN_SOLSTICE_DAY = 172  # ~June 21
SOUTHERN_SOLSTICE_DAY = 355  # ~December 21


def twilight_multiplier(latitude: float, on_date: date) -> float:
    """Scale factor for twilight length.

    1.0 + |lat|/90 from latitude, times a seasonal factor that is 1.0 at the
    local summer solstice and falls to 0.8 half a year away.
    """
    latitude_factor = 1.0 + abs(latitude) / 90.0

    solstice = NORTHERN_SOLSTICE_DAY if latitude >= 0 else SOUTHERN_SOLSTICE_DAY
    offset = abs(on_date.timetuple().tm_yday - solstice)
    days_from_solstice = min(offset, 365 - offset)
    seasonal_factor = 1.0 - 0.2 * days_from_solstice / 182.0

    return latitude_factor * seasonal_factor


def calculate_twilight(
    latitude: float,
    longitude: float,
    on_date: date,
    sunset: time,
    sunrise: time,
) -> TwilightBoundaries:
    """Compute evening and morning twilight boundaries.

    Evening boundaries are on ``on_date``; morning boundaries count back from
    ``sunrise`` on the following day.
    """
    multiplier = twilight_multiplier(latitude, on_date)
    civil = timedelta(minutes=CIVIL_BASE_MINUTES * multiplier)
    nautical = timedelta(minutes=NAUTICAL_BASE_MINUTES * multiplier)
    astronomical = timedelta(minutes=ASTRONOMICAL_BASE_MINUTES * multiplier)

    sunset_at = datetime.combine(on_date, sunset)
    civil_dusk = sunset_at + civil
    nautical_dusk = civil_dusk + nautical
    astronomical_dusk = nautical_dusk + astronomical

    sunrise_at = datetime.combine(on_date + timedelta(days=1), sunrise)
    civil_dawn = sunrise_at - civil
    nautical_dawn = civil_dawn - nautical
    astronomical_dawn = nautical_dawn - astronomical

    return TwilightBoundaries(
        date=on_date,
        latitude=latitude,
        longitude=longitude,
        sunset=sunset_at,
        civil_dusk=civil_dusk,
        nautical_dusk=nautical_dusk,
        astronomical_dusk=astronomical_dusk,
        astronomical_dawn=astronomical_dawn,
        nautical_dawn=nautical_dawn,
        civil_dawn=civil_dawn,
        sunrise=sunrise_at,
    )


def solar_declination(day_of_year: int) -> float:
    """Approximate solar declination in degrees (no eccentricity/leap-year terms)."""
    angle = math.radians(360.0 / 365.0 * (day_of_year - 81))
    return 23.45 * math.sin(angle)


def twilight_duration(latitude: float, declination: float, angle: float) -> timedelta:
    """Half-day length until the sun reaches ``angle`` degrees below the horizon.

    Saturates to zero when the sun never climbs to that altitude and to 24
    hours when it never sinks to it.
    """
    lat = math.radians(latitude)
    dec = math.radians(declination)
    depression = math.radians(angle)

    denominator = math.cos(lat) * math.cos(dec)
    numerator = math.sin(-depression) - math.sin(lat) * math.sin(dec)
    if abs(denominator) < 1e-12:
        # At the pole the sun's altitude is constant through the day
        cos_h = math.inf if numerator > 0 else -math.inf
    else:
        cos_h = numerator / denominator

    if cos_h > 1:
        return timedelta(0)
    if cos_h < -1:
        return timedelta(hours=24)

    hour_angle = math.degrees(math.acos(cos_h))
    return timedelta(hours=hour_angle / 15.0)

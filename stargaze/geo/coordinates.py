"""Coordinate validation, parsing, formatting and great-circle distance."""

import math
import re

from stargaze.models.location import Coordinates

EARTH_RADIUS_KM = 6371.0

_COORDINATE_RE = re.compile(r"^(?P<lat>-?\d+\.?\d*)[,\s]+(?P<lon>-?\d+\.?\d*)$")
_US_ZIP_RE = re.compile(r"^\d{5}(-\d{4})?$")
_UK_POSTCODE_RE = re.compile(r"^[A-Z]{1,2}\d[A-Z\d]?\s*\d[A-Z]{2}$", re.IGNORECASE)
_CA_POSTAL_RE = re.compile(r"^[A-Z]\d[A-Z]\s*\d[A-Z]\d$", re.IGNORECASE)


def is_valid_latitude(latitude: float) -> bool:
    return -90.0 <= latitude <= 90.0


def is_valid_longitude(longitude: float) -> bool:
    return -180.0 <= longitude <= 180.0


def are_valid_coordinates(latitude: float, longitude: float) -> bool:
    return is_valid_latitude(latitude) and is_valid_longitude(longitude)


def parse_coordinates(text: str | None) -> Coordinates | None:
    """Parse "lat,lon", "lat, lon" or "lat lon".

    Returns None for blank input, non-numeric tokens or out-of-range values.
    """
    if text is None or not text.strip():
        return None
    match = _COORDINATE_RE.match(text.strip())
    if match is None:
        return None
    try:
        latitude = float(match.group("lat"))
        longitude = float(match.group("lon"))
    except ValueError:
        return None
    if not are_valid_coordinates(latitude, longitude):
        return None
    return Coordinates(latitude=latitude, longitude=longitude)


def looks_like_coordinates(text: str | None) -> bool:
    """Pattern check only; no range validation."""
    if text is None or not text.strip():
        return False
    return _COORDINATE_RE.match(text.strip()) is not None


def looks_like_postal_code(text: str | None) -> bool:
    """Recognize US ZIP, UK postcode and Canadian postal code shapes."""
    if text is None or not text.strip():
        return False
    trimmed = text.strip()
    return any(
        pattern.match(trimmed) is not None
        for pattern in (_US_ZIP_RE, _UK_POSTCODE_RE, _CA_POSTAL_RE)
    )


def distance_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Haversine distance in kilometers."""
    d_lat = math.radians(lat2 - lat1)
    d_lon = math.radians(lon2 - lon1)
    a = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(lat1))
        * math.cos(math.radians(lat2))
        * math.sin(d_lon / 2) ** 2
    )
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_KM * c


def format_coordinates(latitude: float, longitude: float, decimals: int = 4) -> str:
    """Format as e.g. ``39.7392°N, 104.9903°W``."""
    lat_dir = "N" if latitude >= 0 else "S"
    lon_dir = "E" if longitude >= 0 else "W"
    return (
        f"{abs(latitude):.{decimals}f}°{lat_dir}, "
        f"{abs(longitude):.{decimals}f}°{lon_dir}"
    )

"""Location and coordinate models."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class Coordinates:
    latitude: float
    longitude: float

    def __post_init__(self) -> None:
        if not -90.0 <= self.latitude <= 90.0:
            raise ValueError(f"latitude out of range: {self.latitude}")
        if not -180.0 <= self.longitude <= 180.0:
            raise ValueError(f"longitude out of range: {self.longitude}")

    def as_query(self) -> str:
        """Provider query string, e.g. ``"39.7392,-104.9903"``."""
        return f"{self.latitude},{self.longitude}"


@dataclass(frozen=True)
class LocationInfo:
    name: str
    latitude: float
    longitude: float
    region: str | None = None
    country: str | None = None
    timezone_id: str | None = None
    local_time: datetime | None = None


@dataclass(frozen=True)
class LocationSearchResult:
    id: int
    name: str
    latitude: float
    longitude: float
    region: str | None = None
    country: str | None = None

    @property
    def display_name(self) -> str:
        return ", ".join(part for part in (self.name, self.region, self.country) if part)

"""Twilight boundary models."""

from dataclasses import dataclass
from datetime import date, datetime, timedelta
from enum import StrEnum


class TwilightPhase(StrEnum):
    DAY = "day"
    CIVIL_EVENING = "civil_evening"
    NAUTICAL_EVENING = "nautical_evening"
    ASTRONOMICAL_EVENING = "astronomical_evening"
    NIGHT = "night"
    ASTRONOMICAL_MORNING = "astronomical_morning"
    NAUTICAL_MORNING = "nautical_morning"
    CIVIL_MORNING = "civil_morning"


@dataclass(frozen=True)
class TwilightBoundaries:
    date: date
    latitude: float
    longitude: float
    # Evening, sun descending
    sunset: datetime
    civil_dusk: datetime
    nautical_dusk: datetime
    astronomical_dusk: datetime
    # Morning of the following day, sun ascending
    astronomical_dawn: datetime
    nautical_dawn: datetime
    civil_dawn: datetime
    sunrise: datetime

    @property
    def optimal_viewing_duration(self) -> timedelta:
        """Length of full astronomical darkness."""
        return self.astronomical_dawn - self.astronomical_dusk

    @property
    def darkness_duration(self) -> timedelta:
        return self.sunrise - self.sunset

    def is_optimal_viewing_time(self, moment: datetime) -> bool:
        return self.astronomical_dusk <= moment <= self.astronomical_dawn

    def phase_at(self, moment: datetime) -> TwilightPhase:
        """Classify a timestamp into a twilight phase.

        Evening buckets are closed on the left, morning buckets closed on
        the right; NIGHT includes both of its edges. When the boundaries
        are out of order (polar summer) unmatched instants fall back to DAY.
        """
        if moment < self.sunset or moment > self.sunrise:
            return TwilightPhase.DAY
        if self.sunset <= moment < self.civil_dusk:
            return TwilightPhase.CIVIL_EVENING
        if self.civil_dusk <= moment < self.nautical_dusk:
            return TwilightPhase.NAUTICAL_EVENING
        if self.nautical_dusk <= moment < self.astronomical_dusk:
            return TwilightPhase.ASTRONOMICAL_EVENING
        if self.astronomical_dusk <= moment <= self.astronomical_dawn:
            return TwilightPhase.NIGHT
        if self.astronomical_dawn < moment <= self.nautical_dawn:
            return TwilightPhase.ASTRONOMICAL_MORNING
        if self.nautical_dawn < moment <= self.civil_dawn:
            return TwilightPhase.NAUTICAL_MORNING
        if self.civil_dawn < moment <= self.sunrise:
            return TwilightPhase.CIVIL_MORNING
        return TwilightPhase.DAY

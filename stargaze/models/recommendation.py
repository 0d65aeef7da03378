"""Observing recommendation models."""

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum


class Rating(StrEnum):
    EXCELLENT = "Excellent"
    GOOD = "Good"
    FAIR = "Fair"
    POOR = "Poor"


@dataclass(frozen=True)
class FactorScore:
    name: str
    raw_value: float
    score: float
    weight: float
    label: str
    unit: str | None = None

    @property
    def weighted_score(self) -> float:
        return self.score * self.weight


@dataclass(frozen=True)
class Recommendation:
    overall_score: float
    rating: Rating
    summary: str
    factor_scores: list[FactorScore]
    deep_sky_score: float
    planetary_score: float
    computed_for: datetime

"""Weighted observing-condition scorer.

Turns one hour of weather, the day's astronomy block and an optional Bortle
class into a Recommendation. Pure and deterministic.
"""

from stargaze.models.recommendation import FactorScore, Rating, Recommendation
from stargaze.models.weather import AstronomicalContext, HourlyObservation
from stargaze.scoring.factors import (
    cloud_label,
    humidity_label,
    light_pollution_label,
    moon_label,
    score_cloud_cover,
    score_humidity,
    score_light_pollution,
    score_moon_illumination,
    score_visibility,
    visibility_label,
)

# Overall weights
CLOUD_COVER_WEIGHT = 0.35
MOON_ILLUMINATION_WEIGHT = 0.25
HUMIDITY_WEIGHT = 0.15
VISIBILITY_WEIGHT = 0.15
LIGHT_POLLUTION_WEIGHT = 0.10

# Deep-sky weights
DEEP_SKY_CLOUD_WEIGHT = 0.40
DEEP_SKY_MOON_WEIGHT = 0.35
DEEP_SKY_LIGHT_POLLUTION_WEIGHT = 0.15
DEEP_SKY_VISIBILITY_WEIGHT = 0.10

# Planetary/lunar weights; moon and light pollution do not apply
PLANETARY_CLOUD_WEIGHT = 0.50
PLANETARY_VISIBILITY_WEIGHT = 0.30
PLANETARY_HUMIDITY_WEIGHT = 0.20

# Used in place of a light-pollution score when no Bortle class is known.
# The factor keeps its weight.
NEUTRAL_LIGHT_POLLUTION_SCORE = 50.0

EXCELLENT_THRESHOLD = 85.0
GOOD_THRESHOLD = 70.0
FAIR_THRESHOLD = 50.0


def get_rating(score: float) -> Rating:
    if score >= EXCELLENT_THRESHOLD:
        return Rating.EXCELLENT
    if score >= GOOD_THRESHOLD:
        return Rating.GOOD
    if score >= FAIR_THRESHOLD:
        return Rating.FAIR
    return Rating.POOR


def calculate_recommendation(
    observation: HourlyObservation,
    astronomy: AstronomicalContext,
    bortle_class: int | None = None,
) -> Recommendation:
    cloud_score = score_cloud_cover(observation.cloud_cover_percent)
    moon_score = score_moon_illumination(
        astronomy.moon_illumination_percent, astronomy.is_moon_up
    )
    humidity_score = score_humidity(observation.humidity_percent)
    visibility_score = score_visibility(observation.visibility_km)
    if bortle_class is not None:
        light_pollution_score = score_light_pollution(bortle_class)
    else:
        light_pollution_score = NEUTRAL_LIGHT_POLLUTION_SCORE

    overall_score = (
        cloud_score * CLOUD_COVER_WEIGHT
        + moon_score * MOON_ILLUMINATION_WEIGHT
        + humidity_score * HUMIDITY_WEIGHT
        + visibility_score * VISIBILITY_WEIGHT
        + light_pollution_score * LIGHT_POLLUTION_WEIGHT
    )
    deep_sky_score = (
        cloud_score * DEEP_SKY_CLOUD_WEIGHT
        + moon_score * DEEP_SKY_MOON_WEIGHT
        + light_pollution_score * DEEP_SKY_LIGHT_POLLUTION_WEIGHT
        + visibility_score * DEEP_SKY_VISIBILITY_WEIGHT
    )
    planetary_score = (
        cloud_score * PLANETARY_CLOUD_WEIGHT
        + visibility_score * PLANETARY_VISIBILITY_WEIGHT
        + humidity_score * PLANETARY_HUMIDITY_WEIGHT
    )

    factor_scores = [
        FactorScore(
            name="Cloud Cover",
            raw_value=observation.cloud_cover_percent,
            score=cloud_score,
            weight=CLOUD_COVER_WEIGHT,
            label=cloud_label(observation.cloud_cover_percent),
            unit="%",
        ),
        FactorScore(
            name="Moon Illumination",
            raw_value=astronomy.moon_illumination_percent,
            score=moon_score,
            weight=MOON_ILLUMINATION_WEIGHT,
            label=moon_label(astronomy.moon_illumination_percent),
            unit="%",
        ),
        FactorScore(
            name="Humidity",
            raw_value=observation.humidity_percent,
            score=humidity_score,
            weight=HUMIDITY_WEIGHT,
            label=humidity_label(observation.humidity_percent),
            unit="%",
        ),
        FactorScore(
            name="Visibility",
            raw_value=observation.visibility_km,
            score=visibility_score,
            weight=VISIBILITY_WEIGHT,
            label=visibility_label(observation.visibility_km),
            unit="km",
        ),
    ]
    if bortle_class is not None:
        factor_scores.append(
            FactorScore(
                name="Light Pollution",
                raw_value=bortle_class,
                score=light_pollution_score,
                weight=LIGHT_POLLUTION_WEIGHT,
                label=light_pollution_label(bortle_class),
                unit="Bortle",
            )
        )

    return Recommendation(
        overall_score=overall_score,
        rating=get_rating(overall_score),
        summary=_summary(cloud_score, moon_score, astronomy.moon_phase, overall_score),
        factor_scores=factor_scores,
        deep_sky_score=deep_sky_score,
        planetary_score=planetary_score,
        computed_for=observation.time,
    )


def _summary(
    cloud_score: float, moon_score: float, moon_phase: str, overall_score: float
) -> str:
    if overall_score >= EXCELLENT_THRESHOLD:
        if moon_score >= 80:
            return f"Excellent for deep sky imaging - {moon_phase}, clear skies"
        return "Excellent conditions for planetary and lunar observation"

    if overall_score >= GOOD_THRESHOLD:
        if moon_score >= 60:
            return f"Good conditions for most targets - {moon_phase}"
        return "Good for planets and brighter deep sky objects"

    if overall_score >= FAIR_THRESHOLD:
        if cloud_score < 50:
            return "Fair conditions - cloud cover may interfere"
        return "Fair conditions - consider brighter targets"

    if cloud_score < 30:
        return "Poor conditions - high cloud cover expected"
    return "Poor conditions - consider postponing observation"

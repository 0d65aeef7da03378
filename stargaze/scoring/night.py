"""Night-level aggregation of hourly recommendations."""

from dataclasses import replace
from datetime import datetime, time

from stargaze.models.recommendation import Rating, Recommendation
from stargaze.models.weather import ForecastDay, HourlyObservation
from stargaze.scoring.scorer import calculate_recommendation

DEFAULT_BEST_HOURS = 5
NO_NIGHT_HOURS_SUMMARY = "No nighttime hours available for this date."


def best_hours(
    day: ForecastDay,
    bortle_class: int | None = None,
    max_hours: int = DEFAULT_BEST_HOURS,
) -> list[tuple[HourlyObservation, Recommendation]]:
    """Top night hours by overall score; ties keep chronological order."""
    scored = [
        (hour, calculate_recommendation(hour, day.astronomy, bortle_class))
        for hour in day.night_hours()
    ]
    scored.sort(key=lambda pair: pair[1].overall_score, reverse=True)
    return scored[:max_hours]


def night_overview(day: ForecastDay, bortle_class: int | None = None) -> Recommendation:
    """Whole-night recommendation.

    Scores the clearest (minimum cloud cover) night hour, then rewrites
    the summary from the night average cloud cover and the moon.
    """
    night = day.night_hours()
    if not night:
        return Recommendation(
            overall_score=0.0,
            rating=Rating.POOR,
            summary=NO_NIGHT_HOURS_SUMMARY,
            factor_scores=[],
            deep_sky_score=0.0,
            planetary_score=0.0,
            computed_for=datetime.combine(day.date, time.min),
        )

    avg_cloud = sum(h.cloud_cover_percent for h in night) / len(night)
    clearest = min(night, key=lambda h: h.cloud_cover_percent)

    recommendation = calculate_recommendation(clearest, day.astronomy, bortle_class)
    summary = night_summary(
        avg_cloud,
        day.astronomy.moon_illumination_percent,
        day.astronomy.moon_phase,
        recommendation.rating,
    )
    return replace(
        recommendation,
        summary=summary,
        computed_for=datetime.combine(day.date, day.astronomy.sunset),
    )


def night_summary(
    avg_cloud: float,
    moon_illumination: int,
    moon_phase: str,
    rating: Rating,
) -> str:
    if avg_cloud <= 20:
        cloud_desc = "Clear skies expected"
    elif avg_cloud <= 40:
        cloud_desc = "Mostly clear skies"
    elif avg_cloud <= 60:
        cloud_desc = "Partly cloudy"
    elif avg_cloud <= 80:
        cloud_desc = "Mostly cloudy"
    else:
        cloud_desc = "Overcast skies"

    if moon_illumination <= 10:
        moon_desc = "excellent dark sky conditions"
    elif moon_illumination <= 30:
        moon_desc = "minimal moonlight"
    elif moon_illumination <= 50:
        moon_desc = "moderate moonlight"
    elif moon_illumination <= 70:
        moon_desc = "significant moonlight"
    else:
        moon_desc = "bright moonlight"

    if rating == Rating.EXCELLENT and moon_illumination <= 30:
        advice = "Ideal for deep sky objects and astrophotography."
    elif rating == Rating.EXCELLENT:
        advice = "Great for planetary and lunar observation."
    elif rating == Rating.GOOD and moon_illumination <= 50:
        advice = "Good conditions for most targets."
    elif rating == Rating.GOOD:
        advice = "Best for planets and the Moon."
    elif rating == Rating.FAIR:
        advice = "Consider bright objects only."
    else:
        advice = "Consider postponing observation."

    return f"{cloud_desc} with {moon_desc} ({moon_phase}). {advice}"

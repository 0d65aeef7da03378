"""Output formatters for night reports and twilight tables."""

import json
from datetime import datetime, timedelta

from stargaze.geo.coordinates import format_coordinates
from stargaze.models.recommendation import Recommendation
from stargaze.models.reporting import ForecastReport, NightReport
from stargaze.models.twilight import TwilightBoundaries


def format_duration(duration: timedelta) -> str:
    """``2h 5m`` for an hour or more, otherwise ``45m``."""
    total_minutes = int(duration.total_seconds() // 60)
    hours, minutes = divmod(total_minutes, 60)
    if hours >= 1:
        return f"{hours}h {minutes}m"
    return f"{minutes}m"


def format_twilight_text(t: TwilightBoundaries) -> str:
    rows = [
        ("Sunset", t.sunset),
        ("Civil dusk", t.civil_dusk),
        ("Nautical dusk", t.nautical_dusk),
        ("Astronomical dusk", t.astronomical_dusk),
        ("Astronomical dawn", t.astronomical_dawn),
        ("Nautical dawn", t.nautical_dawn),
        ("Civil dawn", t.civil_dawn),
        ("Sunrise", t.sunrise),
    ]
    lines = [
        f"Twilight for {t.date.isoformat()} at "
        f"{format_coordinates(t.latitude, t.longitude)}"
    ]
    lines.extend(f"  {label:<18} {_clock(moment)}" for label, moment in rows)
    lines.append(f"  Full darkness: {format_duration(t.optimal_viewing_duration)}")
    return "\n".join(lines)


def format_recommendation_text(r: Recommendation) -> str:
    lines = [
        f"{r.rating.value} ({r.overall_score:.0f}/100): {r.summary}",
        f"  Deep sky: {r.deep_sky_score:.0f} | Planetary: {r.planetary_score:.0f}",
    ]
    for f in r.factor_scores:
        unit = f" {f.unit}" if f.unit else ""
        lines.append(
            f"  - {f.name}: {f.raw_value:g}{unit} ({f.label}) "
            f"score {f.score:.0f} x {f.weight:.2f}"
        )
    return "\n".join(lines)


def format_night_text(n: NightReport) -> str:
    lines = [
        f"=== Night of {n.day.date.isoformat()} | {n.day.astronomy.moon_phase} "
        f"{n.day.astronomy.moon_illumination_percent}% ===",
        format_recommendation_text(n.overview),
        format_twilight_text(n.twilight),
    ]
    if n.best_hours:
        lines.append("Best hours:")
        for hour, rec in n.best_hours:
            lines.append(
                f"  {_clock(hour.time)}  {rec.overall_score:5.1f}  {rec.rating.value:<9} "
                f"cloud {hour.cloud_cover_percent}%  "
                f"phase {n.twilight.phase_at(hour.time).value}"
            )
    return "\n".join(lines)


def format_report_text(report: ForecastReport) -> str:
    loc = report.location
    bortle = f"Bortle {report.bortle_class}" if report.bortle_class else "Bortle n/a"
    header = (
        f"{loc.name}, {loc.country or ''} "
        f"({format_coordinates(loc.latitude, loc.longitude)}) | {bortle}"
    )
    return "\n\n".join([header, *(format_night_text(n) for n in report.nights)])


def format_report_json(report: ForecastReport) -> str:
    data = {
        "location": {
            "name": report.location.name,
            "region": report.location.region,
            "country": report.location.country,
            "latitude": report.location.latitude,
            "longitude": report.location.longitude,
        },
        "bortle_class": report.bortle_class,
        "nights": [
            {
                "date": n.day.date.isoformat(),
                "rating": n.overview.rating.value,
                "overall_score": round(n.overview.overall_score, 1),
                "deep_sky_score": round(n.overview.deep_sky_score, 1),
                "planetary_score": round(n.overview.planetary_score, 1),
                "summary": n.overview.summary,
                "astronomical_dusk": n.twilight.astronomical_dusk.isoformat(),
                "astronomical_dawn": n.twilight.astronomical_dawn.isoformat(),
                "full_darkness_minutes": round(
                    n.twilight.optimal_viewing_duration.total_seconds() / 60
                ),
                "best_hours": [
                    {"time": hour.time.isoformat(), "score": round(rec.overall_score, 1)}
                    for hour, rec in n.best_hours
                ],
            }
            for n in report.nights
        ],
    }
    return json.dumps(data, indent=2)


def _clock(moment: datetime) -> str:
    return moment.strftime("%Y-%m-%d %H:%M")

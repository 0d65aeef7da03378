"""Per-factor step tables for observing-condition scoring.

Each table is an ordered tuple of (breakpoint, value) pairs. ``at_most``
tables match the first breakpoint the reading does not exceed; ``above``
tables match the first breakpoint the reading is strictly greater than.
"""

# Scores
CLOUD_COVER_SCORES: tuple[tuple[float, float], ...] = (
    (10, 100.0),
    (20, 90.0),
    (30, 75.0),
    (40, 60.0),
    (50, 50.0),
    (60, 35.0),
    (70, 20.0),
    (80, 10.0),
)
CLOUD_COVER_FLOOR = 0.0

MOON_ILLUMINATION_SCORES: tuple[tuple[float, float], ...] = (
    (5, 100.0),
    (10, 95.0),
    (20, 85.0),
    (30, 75.0),
    (40, 60.0),
    (50, 50.0),
    (60, 35.0),
    (75, 25.0),
    (85, 15.0),
)
MOON_ILLUMINATION_FLOOR = 10.0
MOON_DOWN_SCORE = 100.0

HUMIDITY_SCORES: tuple[tuple[float, float], ...] = (
    (40, 100.0),
    (50, 90.0),
    (60, 75.0),
    (70, 60.0),
    (75, 50.0),
    (80, 35.0),
    (85, 20.0),
    (90, 10.0),
)
HUMIDITY_FLOOR = 0.0

VISIBILITY_SCORES: tuple[tuple[float, float], ...] = (
    (15, 100.0),
    (12, 90.0),
    (10, 80.0),
    (8, 70.0),
    (6, 55.0),
    (5, 45.0),
    (4, 30.0),
    (3, 15.0),
)
VISIBILITY_FLOOR = 0.0

LIGHT_POLLUTION_SCORES: dict[int, float] = {
    1: 100.0,
    2: 95.0,
    3: 85.0,
    4: 70.0,
    5: 50.0,
    6: 30.0,
    7: 15.0,
    8: 5.0,
}
LIGHT_POLLUTION_FLOOR = 0.0

# Labels
CLOUD_COVER_LABELS: tuple[tuple[float, str], ...] = (
    (10, "Clear"),
    (25, "Mostly Clear"),
    (50, "Partly Cloudy"),
    (75, "Mostly Cloudy"),
)
MOON_LABELS: tuple[tuple[float, str], ...] = (
    (5, "New Moon"),
    (25, "Crescent"),
    (50, "Quarter"),
    (75, "Gibbous"),
)
HUMIDITY_LABELS: tuple[tuple[float, str], ...] = (
    (50, "Low"),
    (70, "Moderate"),
    (85, "High"),
)
VISIBILITY_LABELS: tuple[tuple[float, str], ...] = (
    (10, "Excellent"),
    (6, "Good"),
    (3, "Moderate"),
)
LIGHT_POLLUTION_LABELS: tuple[tuple[float, str], ...] = (
    (2, "Dark Sky"),
    (4, "Rural"),
    (6, "Suburban"),
)


def at_most(value: float, table, fallback):
    for breakpoint, result in table:
        if value <= breakpoint:
            return result
    return fallback


def above(value: float, table, fallback):
    for breakpoint, result in table:
        if value > breakpoint:
            return result
    return fallback


def score_cloud_cover(cloud_percent: float) -> float:
    return at_most(cloud_percent, CLOUD_COVER_SCORES, CLOUD_COVER_FLOOR)


def score_moon_illumination(illumination_percent: float, is_moon_up: bool) -> float:
    """Moonlight penalty; a moon below the horizon never costs anything."""
    if not is_moon_up:
        return MOON_DOWN_SCORE
    return at_most(illumination_percent, MOON_ILLUMINATION_SCORES, MOON_ILLUMINATION_FLOOR)


def score_humidity(humidity_percent: float) -> float:
    return at_most(humidity_percent, HUMIDITY_SCORES, HUMIDITY_FLOOR)


def score_visibility(visibility_km: float) -> float:
    return above(visibility_km, VISIBILITY_SCORES, VISIBILITY_FLOOR)


def score_light_pollution(bortle_class: int) -> float:
    return LIGHT_POLLUTION_SCORES.get(bortle_class, LIGHT_POLLUTION_FLOOR)


def cloud_label(cloud_percent: float) -> str:
    return at_most(cloud_percent, CLOUD_COVER_LABELS, "Overcast")


def moon_label(illumination_percent: float) -> str:
    return at_most(illumination_percent, MOON_LABELS, "Full Moon")


def humidity_label(humidity_percent: float) -> str:
    return at_most(humidity_percent, HUMIDITY_LABELS, "Very High")


def visibility_label(visibility_km: float) -> str:
    return above(visibility_km, VISIBILITY_LABELS, "Poor")


def light_pollution_label(bortle_class: int) -> str:
    return at_most(bortle_class, LIGHT_POLLUTION_LABELS, "Urban")

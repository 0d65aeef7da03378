"""Staleness checks for cached forecast entries."""

from datetime import UTC, date, datetime, tzinfo

from stargaze.models.common import local_date


def is_expired(expires_at: datetime, now: datetime | None = None) -> bool:
    """True once ``now`` is strictly past ``expires_at``."""
    if now is None:
        now = datetime.now(UTC)
    return now > expires_at


def is_previous_day(
    generation_date: date, now: datetime | None = None, tz: tzinfo | None = None
) -> bool:
    """True when the entry was generated on a different local calendar date.

    Forecasts for "today" go stale at local midnight regardless of TTL.
    """
    if now is None:
        now = datetime.now(UTC)
    return generation_date != local_date(now, tz)


def is_entry_stale(
    expires_at: datetime,
    generation_date: date,
    now: datetime | None = None,
    tz: tzinfo | None = None,
) -> bool:
    if now is None:
        now = datetime.now(UTC)
    return is_expired(expires_at, now) or is_previous_day(generation_date, now, tz)


def entry_age_hours(fetched_at: datetime, now: datetime | None = None) -> float:
    """Age of a cache entry in hours."""
    if now is None:
        now = datetime.now(UTC)
    return (now - fetched_at).total_seconds() / 3600


def parse_timestamp(iso_str: str) -> datetime | None:
    """Parse an ISO timestamp, assuming UTC when no offset is given."""
    try:
        dt = datetime.fromisoformat(iso_str)
        if dt.tzinfo is None:
            dt = dt.replace(tzinfo=UTC)
        return dt
    except (ValueError, TypeError):
        return None

"""Common types and helpers shared across models."""

from datetime import UTC, date, datetime, tzinfo
from typing import TypeAlias

CacheKey: TypeAlias = str


def utc_now() -> datetime:
    return datetime.now(UTC)


def local_date(moment: datetime, tz: tzinfo | None = None) -> date:
    """Calendar date of an aware timestamp in ``tz`` (system local zone if None)."""
    return moment.astimezone(tz).date()

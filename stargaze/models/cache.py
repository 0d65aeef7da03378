"""Cache entry and lookup models."""

from dataclasses import dataclass
from datetime import date, datetime
from enum import StrEnum
from typing import Generic, TypeVar

T = TypeVar("T")


class CacheStatus(StrEnum):
    MISS = "miss"
    HIT_FRESH = "hit_fresh"
    HIT_STALE = "hit_stale"


@dataclass(frozen=True)
class CacheEntry(Generic[T]):
    value: T
    fetched_at: datetime
    expires_at: datetime
    generation_date: date


@dataclass(frozen=True)
class CacheLookup(Generic[T]):
    status: CacheStatus
    value: T | None = None
    fetched_at: datetime | None = None

    @property
    def is_hit(self) -> bool:
        return self.status != CacheStatus.MISS

    @property
    def is_fresh(self) -> bool:
        return self.status == CacheStatus.HIT_FRESH

    @classmethod
    def miss(cls) -> "CacheLookup[T]":
        return cls(status=CacheStatus.MISS)

    @classmethod
    def hit(cls, entry: CacheEntry[T], stale: bool) -> "CacheLookup[T]":
        status = CacheStatus.HIT_STALE if stale else CacheStatus.HIT_FRESH
        return cls(status=status, value=entry.value, fetched_at=entry.fetched_at)

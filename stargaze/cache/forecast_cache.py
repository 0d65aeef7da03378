"""TTL and calendar-date aware cache over a persisted key-value store."""

import json
import logging
from datetime import UTC, date, datetime, timedelta, tzinfo
from typing import Generic, Protocol, TypeVar

from pydantic import TypeAdapter, ValidationError

from stargaze.cache.staleness import is_entry_stale, parse_timestamp
from stargaze.models.cache import CacheEntry, CacheLookup
from stargaze.models.common import CacheKey, local_date

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_NAMESPACE = "stargaze_"
DEFAULT_TTL = timedelta(hours=2)


class KeyValueStore(Protocol):
    def get(self, key: CacheKey) -> str | None: ...

    def set(self, key: CacheKey, blob: str) -> None: ...

    def remove(self, key: CacheKey) -> None: ...

    def enumerate_keys(self) -> list[str]: ...


class CorruptEntryError(ValueError):
    """Raised internally when a stored payload cannot be decoded."""


class ForecastCache(Generic[T]):
    """Cache of ``value_type`` values keyed by opaque strings.

    Entries are stale once their TTL has elapsed or once the local calendar
    date has moved past the day they were written. Undecodable payloads are
    evicted and reported as a miss.
    """

    def __init__(
        self,
        store: KeyValueStore,
        value_type: type[T],
        namespace: str = DEFAULT_NAMESPACE,
        default_ttl: timedelta = DEFAULT_TTL,
        tz: tzinfo | None = None,
    ):
        self.store = store
        self.namespace = namespace
        self.default_ttl = default_ttl
        self.tz = tz
        self._adapter = TypeAdapter(value_type)

    def get(self, key: CacheKey, now: datetime | None = None) -> CacheLookup[T]:
        if now is None:
            now = datetime.now(UTC)
        blob = self.store.get(self._full_key(key))
        if not blob:
            return CacheLookup.miss()

        try:
            entry = self._decode(blob)
        except CorruptEntryError as e:
            logger.warning("Evicting corrupt cache entry %s: %s", key, e)
            self.remove(key)
            return CacheLookup.miss()

        stale = is_entry_stale(entry.expires_at, entry.generation_date, now, self.tz)
        return CacheLookup.hit(entry, stale=stale)

    def set(
        self,
        key: CacheKey,
        value: T,
        ttl: timedelta | None = None,
        now: datetime | None = None,
    ) -> CacheEntry[T]:
        if now is None:
            now = datetime.now(UTC)
        entry = CacheEntry(
            value=value,
            fetched_at=now,
            expires_at=now + (ttl if ttl is not None else self.default_ttl),
            generation_date=local_date(now, self.tz),
        )
        self.store.set(self._full_key(key), self._encode(entry))
        return entry

    def remove(self, key: CacheKey) -> None:
        self.store.remove(self._full_key(key))

    def clear(self) -> int:
        """Remove every entry under this cache's namespace. Returns the count."""
        keys = [k for k in self.store.enumerate_keys() if k.startswith(self.namespace)]
        for full_key in keys:
            self.store.remove(full_key)
        return len(keys)

    def _full_key(self, key: CacheKey) -> str:
        return f"{self.namespace}{key}"

    def _encode(self, entry: CacheEntry[T]) -> str:
        data = {
            "value": self._adapter.dump_python(entry.value, mode="json"),
            "fetched_at": entry.fetched_at.isoformat(),
            "expires_at": entry.expires_at.isoformat(),
            "generation_date": entry.generation_date.isoformat(),
        }
        return json.dumps(data)

    def _decode(self, blob: str) -> CacheEntry[T]:
        try:
            data = json.loads(blob)
            value = self._adapter.validate_python(data["value"])
            fetched_at = parse_timestamp(data["fetched_at"])
            expires_at = parse_timestamp(data["expires_at"])
            generation_date = date.fromisoformat(data["generation_date"])
        except (ValueError, KeyError, TypeError, ValidationError) as e:
            raise CorruptEntryError(str(e)) from e
        if fetched_at is None or expires_at is None:
            raise CorruptEntryError("unparseable timestamp")
        return CacheEntry(
            value=value,
            fetched_at=fetched_at,
            expires_at=expires_at,
            generation_date=generation_date,
        )

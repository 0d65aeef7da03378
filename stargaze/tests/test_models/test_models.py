"""Tests for domain model helpers."""

from datetime import UTC, date, datetime, time, timedelta

import pytest

from stargaze.models.cache import CacheEntry, CacheLookup, CacheStatus
from stargaze.models.common import local_date
from stargaze.models.location import Coordinates, LocationSearchResult
from stargaze.models.recommendation import FactorScore
from stargaze.models.weather import AstronomicalContext


def _astro(illumination: int, moon_up: bool = True) -> AstronomicalContext:
    return AstronomicalContext(
        sunrise=time(6, 0),
        sunset=time(19, 0),
        moon_phase="Waxing Crescent",
        moon_illumination_percent=illumination,
        is_moon_up=moon_up,
    )


class TestAstronomicalContext:
    @pytest.mark.parametrize(
        "illumination,expected",
        [
            (5, "Excellent - New Moon"),
            (30, "Very Good - Crescent"),
            (45, "Moderate - Quarter"),
            (70, "Fair - Gibbous"),
            (71, "Bright - Full Moon"),
        ],
    )
    def test_moon_description(self, illumination, expected):
        assert _astro(illumination).moon_description == expected

    def test_deep_sky_favorable(self):
        assert _astro(25).is_favorable_for_deep_sky
        assert _astro(90, moon_up=False).is_favorable_for_deep_sky
        assert not _astro(90).is_favorable_for_deep_sky


class TestLocation:
    def test_as_query(self):
        assert Coordinates(39.7392, -104.9903).as_query() == "39.7392,-104.9903"

    def test_display_name(self):
        r = LocationSearchResult(id=1, name="Denver", latitude=39.74, longitude=-104.98,
                                 region="Colorado", country="USA")
        assert r.display_name == "Denver, Colorado, USA"

    @pytest.mark.parametrize(
        "name, region, country, expected",
        [
            ("Monaco", None, "Monaco", "Monaco, Monaco"),
            ("Denver", "Colorado", None, "Denver, Colorado"),
            ("Denver", None, None, "Denver"),
        ],
    )
    def test_display_name_skips_missing_parts(self, name, region, country, expected):
        r = LocationSearchResult(id=1, name=name, latitude=0.0, longitude=0.0,
                                 region=region, country=country)
        assert r.display_name == expected


class TestFactorScore:
    def test_weighted(self):
        f = FactorScore(name="Cloud Cover", raw_value=10, score=100.0, weight=0.35, label="Clear")
        assert f.weighted_score == pytest.approx(35.0)


class TestCacheLookup:
    def test_miss(self):
        lookup = CacheLookup.miss()
        assert lookup.status == CacheStatus.MISS
        assert not lookup.is_hit
        assert not lookup.is_fresh

    def test_hit(self):
        now = datetime(2024, 6, 21, 12, 0, tzinfo=UTC)
        entry = CacheEntry(value=42, fetched_at=now, expires_at=now + timedelta(hours=1),
                           generation_date=date(2024, 6, 21))
        fresh = CacheLookup.hit(entry, stale=False)
        stale = CacheLookup.hit(entry, stale=True)
        assert fresh.is_fresh and fresh.value == 42
        assert stale.is_hit and not stale.is_fresh
        assert stale.fetched_at == now


class TestLocalDate:
    def test_explicit_zone(self):
        moment = datetime(2024, 6, 22, 2, 0, tzinfo=UTC)
        assert local_date(moment, UTC) == date(2024, 6, 22)

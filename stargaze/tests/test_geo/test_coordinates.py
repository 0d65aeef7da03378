"""Tests for coordinate validation, parsing and distance."""

import pytest

from stargaze.geo.coordinates import (
    are_valid_coordinates,
    distance_km,
    format_coordinates,
    is_valid_latitude,
    is_valid_longitude,
    looks_like_coordinates,
    looks_like_postal_code,
    parse_coordinates,
)
from stargaze.models.location import Coordinates


class TestRangeChecks:
    def test_latitude_bounds_inclusive(self):
        assert is_valid_latitude(90.0)
        assert is_valid_latitude(-90.0)
        assert not is_valid_latitude(90.0001)
        assert not is_valid_latitude(-91)

    def test_longitude_bounds_inclusive(self):
        assert is_valid_longitude(180.0)
        assert is_valid_longitude(-180.0)
        assert not is_valid_longitude(180.5)

    def test_pair(self):
        assert are_valid_coordinates(39.7392, -104.9903)
        assert not are_valid_coordinates(39.7392, -190.0)

    def test_coordinates_model_rejects_out_of_range(self):
        with pytest.raises(ValueError):
            Coordinates(latitude=95.0, longitude=0.0)


class TestParseCoordinates:
    @pytest.mark.parametrize(
        "text", ["39.7392,-104.9903", "39.7392, -104.9903", "39.7392 -104.9903"]
    )
    def test_accepted_separators(self, text: str):
        result = parse_coordinates(text)
        assert result == Coordinates(latitude=39.7392, longitude=-104.9903)

    def test_integers(self):
        assert parse_coordinates("40,-105") == Coordinates(40.0, -105.0)

    def test_surrounding_whitespace(self):
        assert parse_coordinates("  51.5, -0.12  ") is not None

    @pytest.mark.parametrize("text", [None, "", "   ", "Denver", "39.7;-104.9", "abc,def"])
    def test_rejects_non_coordinates(self, text):
        assert parse_coordinates(text) is None

    def test_rejects_out_of_range(self):
        assert parse_coordinates("91.0,10.0") is None
        assert parse_coordinates("10.0,181.0") is None

    def test_looks_like_skips_range_check(self):
        assert looks_like_coordinates("91.0,10.0")
        assert not looks_like_coordinates("Boulder")
        assert not looks_like_coordinates(None)


class TestPostalCodes:
    @pytest.mark.parametrize("text", ["80202", "80202-1234", "SW1A 1AA", "sw1a1aa", "K1A 0B1"])
    def test_recognized(self, text: str):
        assert looks_like_postal_code(text)

    @pytest.mark.parametrize("text", [None, "", "8020", "Denver", "802021"])
    def test_rejected(self, text):
        assert not looks_like_postal_code(text)


class TestDistance:
    def test_zero_for_same_point(self):
        assert distance_km(39.74, -104.98, 39.74, -104.98) == pytest.approx(0.0)

    def test_denver_to_boulder(self):
        # Roughly 39 km apart
        d = distance_km(39.7392, -104.9903, 40.0150, -105.2705)
        assert 35 < d < 42

    def test_denver_to_new_york(self):
        d = distance_km(39.7392, -104.9903, 40.7128, -74.0060)
        assert 2600 <= d <= 2650

    def test_london_to_tokyo(self):
        d = distance_km(51.5074, -0.1278, 35.6762, 139.6503)
        assert 9500 <= d <= 9600

    def test_symmetric(self):
        a = distance_km(51.5, -0.12, 48.85, 2.35)
        b = distance_km(48.85, 2.35, 51.5, -0.12)
        assert a == pytest.approx(b)

    def test_quarter_meridian(self):
        assert distance_km(0, 0, 90, 0) == pytest.approx(6371.0 * 3.141592653589793 / 2)


class TestFormat:
    def test_hemispheres(self):
        assert format_coordinates(39.7392, -104.9903) == "39.7392°N, 104.9903°W"
        assert format_coordinates(-33.8688, 151.2093) == "33.8688°S, 151.2093°E"

    def test_decimals(self):
        assert format_coordinates(1.23456, 2.5, decimals=2) == "1.23°N, 2.50°E"

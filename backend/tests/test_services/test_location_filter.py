"""
Unit tests for location filter resolution and request validation
"""
import pytest

from discovery.core.exceptions import ValidationError
from discovery.domain.location import RegionField
from discovery.domain.requests import LocationRequest, LocationSearchRequest
from discovery.services.location_filter import (
    FilterKind,
    parse_region_field,
    require_location,
    require_text,
    resolve_from_request,
    resolve_location_filter,
)


class TestResolveLocationFilter:

    def test_village_beats_province(self):
        result = resolve_location_filter(village="Rukiri", province="Kigali", name="Shop")

        assert result.kind == FilterKind.VILLAGE
        assert result.region_field == RegionField.VILLAGE
        assert result.region_value == "Rukiri"
        assert result.name == "Shop"

    @pytest.mark.parametrize("kwargs, expected", [
        ({"cell": "C", "sector": "S", "district": "D", "province": "P"}, FilterKind.CELL),
        ({"sector": "S", "district": "D", "province": "P"}, FilterKind.SECTOR),
        ({"district": "D", "province": "P"}, FilterKind.DISTRICT),
        ({"province": "P"}, FilterKind.PROVINCE),
    ])
    def test_most_specific_region_wins(self, kwargs, expected):
        assert resolve_location_filter(**kwargs).kind == expected

    def test_blank_region_is_ignored(self):
        result = resolve_location_filter(village="   ", district="Gasabo")

        assert result.kind == FilterKind.DISTRICT
        assert result.region_value == "Gasabo"

    def test_name_only(self):
        result = resolve_location_filter(name="  Bakery ")

        assert result.kind == FilterKind.NAME_ONLY
        assert result.name == "Bakery"
        assert result.is_region is False
        assert result.region_field is None

    def test_nothing_given(self):
        result = resolve_location_filter(name="", province=None)

        assert result.kind == FilterKind.NONE
        assert result.name is None

    def test_from_request(self):
        request = LocationSearchRequest(latitude=-1.95, longitude=30.06, sector="Remera", business_name="Shop")

        result = resolve_from_request(request)

        assert result.kind == FilterKind.SECTOR
        assert result.name == "Shop"

    def test_search_request_has_no_radius_default(self):
        request = LocationSearchRequest(latitude=-1.95, longitude=30.06, province="Kigali")

        assert request.radius is None
        assert request.radius == LocationRequest(latitude=-1.95, longitude=30.06).radius


class TestParseRegionField:

    @pytest.mark.parametrize("value, expected", [
        ("village", RegionField.VILLAGE),
        ("District", RegionField.DISTRICT),
        (" PROVINCE ", RegionField.PROVINCE),
    ])
    def test_known(self, value, expected):
        assert parse_region_field(value) == expected

    @pytest.mark.parametrize("value", ["country", "name; DROP TABLE businesses", ""])
    def test_unknown(self, value):
        with pytest.raises(ValidationError):
            parse_region_field(value)


class TestRequireLocation:

    def test_returns_coordinates(self):
        assert require_location(LocationRequest(latitude=-1.95, longitude=30.06)) == (-1.95, 30.06)

    @pytest.mark.parametrize("kwargs", [{}, {"latitude": -1.95}, {"longitude": 30.06}])
    def test_missing(self, kwargs):
        with pytest.raises(ValidationError) as exc_info:
            require_location(LocationRequest(**kwargs))
        assert "Location access is required" in exc_info.value.message

    def test_out_of_range(self):
        with pytest.raises(ValidationError):
            require_location(LocationRequest(latitude=95.0, longitude=30.06))


class TestRequireText:

    def test_strips(self):
        assert require_text("  rice ", "Product name") == "rice"

    @pytest.mark.parametrize("value", [None, "", "   "])
    def test_blank(self, value):
        with pytest.raises(ValidationError) as exc_info:
            require_text(value, "Product name")
        assert exc_info.value.message == "Product name is required"

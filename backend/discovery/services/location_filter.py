"""
Location filter resolution

A search may carry several region labels and a business name. Exactly one
structured filter is applied, chosen by a fixed priority:

    village > cell > sector > district > province > name only > none

Finer regions win and coarser ones are ignored, so a query is never an
AND of two region levels.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from discovery.core.exceptions import ValidationError
from discovery.domain.location import REGION_PRIORITY, RegionField
from discovery.utils.geo import is_valid_coordinate


class FilterKind(str, Enum):
    VILLAGE = "village"
    CELL = "cell"
    SECTOR = "sector"
    DISTRICT = "district"
    PROVINCE = "province"
    NAME_ONLY = "name_only"
    NONE = "none"


@dataclass(frozen=True)
class LocationFilter:
    """
    The single predicate a search resolves to

    region_value is set for the region kinds, name whenever a business
    name was supplied (it is combined with the region predicate).
    """
    kind: FilterKind
    region_value: Optional[str] = None
    name: Optional[str] = None

    @property
    def region_field(self) -> Optional[RegionField]:
        if self.kind in (FilterKind.NAME_ONLY, FilterKind.NONE):
            return None
        return RegionField(self.kind.value)

    @property
    def is_region(self) -> bool:
        return self.region_field is not None


def _clean(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


def resolve_location_filter(
    village: Optional[str] = None,
    cell: Optional[str] = None,
    sector: Optional[str] = None,
    district: Optional[str] = None,
    province: Optional[str] = None,
    name: Optional[str] = None
) -> LocationFilter:
    """
    Pick the governing filter for a set of optional criteria

    Blank strings count as absent.
    """
    regions = {
        RegionField.VILLAGE: _clean(village),
        RegionField.CELL: _clean(cell),
        RegionField.SECTOR: _clean(sector),
        RegionField.DISTRICT: _clean(district),
        RegionField.PROVINCE: _clean(province),
    }
    name = _clean(name)

    for field in REGION_PRIORITY:
        if regions[field]:
            return LocationFilter(kind=FilterKind(field.value), region_value=regions[field], name=name)

    if name:
        return LocationFilter(kind=FilterKind.NAME_ONLY, name=name)

    return LocationFilter(kind=FilterKind.NONE)


def resolve_from_request(request) -> LocationFilter:
    """Resolve the filter carried by a LocationSearchRequest"""
    return resolve_location_filter(
        village=request.village,
        cell=request.cell,
        sector=request.sector,
        district=request.district,
        province=request.province,
        name=request.business_name,
    )


def parse_region_field(value: str) -> RegionField:
    """Region level from user text, e.g. a path segment"""
    try:
        return RegionField((value or "").strip().lower())
    except ValueError:
        allowed = ", ".join(field.value for field in REGION_PRIORITY)
        raise ValidationError(f"Unknown region filter '{value}'. Use one of: {allowed}")


def require_location(request) -> Tuple[float, float]:
    """
    Requester coordinates from a location request

    Raises:
        ValidationError: either coordinate missing or out of range
    """
    latitude = getattr(request, "latitude", None)
    longitude = getattr(request, "longitude", None)

    if latitude is None or longitude is None:
        raise ValidationError(
            "Location access is required. Please allow access to your location to continue."
        )
    if not is_valid_coordinate(latitude, longitude):
        raise ValidationError(
            "Latitude must be between -90 and 90 and longitude between -180 and 180"
        )
    return latitude, longitude


def require_text(value: Optional[str], label: str) -> str:
    """Stripped search text, rejecting blanks"""
    value = _clean(value)
    if not value:
        raise ValidationError(f"{label} is required")
    return value

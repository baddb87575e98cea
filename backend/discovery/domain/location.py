"""
Location Domain Model

Administrative region labels (province > district > sector > cell > village)
plus an optional coordinate. Owned by the business record; discovery only
reads it.
"""
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class RegionField(str, Enum):
    """Administrative region levels, coarsest last"""
    VILLAGE = "village"
    CELL = "cell"
    SECTOR = "sector"
    DISTRICT = "district"
    PROVINCE = "province"


# Most specific first; the first one set on a request wins
REGION_PRIORITY = (
    RegionField.VILLAGE,
    RegionField.CELL,
    RegionField.SECTOR,
    RegionField.DISTRICT,
    RegionField.PROVINCE,
)


class Location(BaseModel):
    """
    Business location

    Fields:
        province, district, sector, cell, village: free-text region labels
        latitude, longitude: decimal degrees, meaningful only when both are set
    """
    province: Optional[str] = Field(None, max_length=100)
    district: Optional[str] = Field(None, max_length=100)
    sector: Optional[str] = Field(None, max_length=100)
    cell: Optional[str] = Field(None, max_length=100)
    village: Optional[str] = Field(None, max_length=100)
    latitude: Optional[float] = Field(None, ge=-90, le=90)
    longitude: Optional[float] = Field(None, ge=-180, le=180)

    model_config = ConfigDict(frozen=True)

    @property
    def has_coordinates(self) -> bool:
        return self.latitude is not None and self.longitude is not None

    @property
    def coordinates(self) -> Optional[str]:
        """"lat, lon" or None when the location has no coordinate"""
        if self.has_coordinates:
            return f"{self.latitude}, {self.longitude}"
        return None

    @property
    def formatted_location(self) -> str:
        """Region labels from most to least specific, blanks skipped"""
        parts = [self.region_value(field) for field in REGION_PRIORITY]
        return ", ".join(part for part in parts if part)

    def region_value(self, field: RegionField) -> Optional[str]:
        return getattr(self, field.value)

    def to_dict(self) -> dict:
        data = self.model_dump()
        data['formatted_location'] = self.formatted_location
        return data

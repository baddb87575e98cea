"""
Business Domain Models

Business is the record read from the entity store. BusinessSummary and
BusinessDetails are the request-scoped results handed back to callers.
"""
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from discovery.domain.location import Location


class Business(BaseModel):
    """Business record as stored"""

    id: UUID = Field(..., description="Business ID")
    name: str = Field(..., description="Business name")
    about: Optional[str] = Field(None, description="Free-text description")
    website_link: Optional[str] = Field(None, description="Public website URL")
    is_open: bool = Field(False, description="Whether the business is currently open")
    location: Optional[Location] = Field(None, description="Region labels and coordinate")

    model_config = ConfigDict(from_attributes=True, frozen=True)

    @property
    def has_coordinates(self) -> bool:
        return self.location is not None and self.location.has_coordinates


class BusinessSummary(BaseModel):
    """
    Business discovery result

    distance_km and formatted_distance are set only when the business has
    coordinates; they are measured from the requester.
    """

    id: UUID
    name: str
    location: Optional[Location] = None
    about: Optional[str] = None
    website_link: Optional[str] = None
    product_count: int = 0
    distance_km: Optional[float] = None
    formatted_distance: Optional[str] = None

    model_config = ConfigDict(frozen=True)

    def to_dict(self) -> dict:
        data = self.model_dump(mode="json")
        data['location'] = self.location.to_dict() if self.location else None
        return data


class BusinessDetails(BaseModel):
    """Public business details, no requester location involved"""

    id: UUID
    name: str
    location: Optional[Location] = None
    about: Optional[str] = None
    website_link: Optional[str] = None
    product_count: int = 0
    is_open: bool = False

    model_config = ConfigDict(frozen=True)

    def to_dict(self) -> dict:
        data = self.model_dump(mode="json")
        data['location'] = self.location.to_dict() if self.location else None
        return data

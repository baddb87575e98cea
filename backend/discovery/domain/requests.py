"""
Discovery request objects

Ranges are not enforced here. The engines validate coordinates and
pagination themselves and raise ValidationError.
"""
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from discovery.core.config import settings


class LocationRequest(BaseModel):
    """Requester coordinates plus pagination"""

    latitude: Optional[float] = Field(None, description="Requester latitude")
    longitude: Optional[float] = Field(None, description="Requester longitude")
    radius: Optional[float] = Field(None, description="Search radius in km")
    skip: int = Field(0, description="Results to skip")
    limit: int = Field(settings.DISCOVERY_DEFAULT_LIMIT, description="Page size")

    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {
                "latitude": -1.9441,
                "longitude": 30.0619,
                "radius": 5,
                "skip": 0,
                "limit": 10
            }
        }
    )


class LocationSearchRequest(LocationRequest):
    """Location request with a business name and region filters"""

    business_name: Optional[str] = None
    province: Optional[str] = None
    district: Optional[str] = None
    sector: Optional[str] = None
    cell: Optional[str] = None
    village: Optional[str] = None


class ProductPageRequest(BaseModel):
    """Public product listing: pagination, sort and optional name search"""

    skip: int = Field(0, description="Results to skip")
    limit: int = Field(settings.DISCOVERY_DEFAULT_LIMIT, description="Page size")
    sort_by: Optional[str] = Field("name", description="name, price, quantity or itemsPerPacket")
    sort_direction: Optional[str] = Field("asc", description="asc or desc")
    search_term: Optional[str] = Field(None, description="Filter products by name")

    model_config = ConfigDict(frozen=True)

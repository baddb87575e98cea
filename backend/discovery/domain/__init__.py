"""
Domain Layer - Discovery Entities and DTOs

Pydantic models for the records read from the entity store (Business,
Product, Location) and for the request/response objects the discovery
engines exchange with callers.
"""
from discovery.domain.location import Location, RegionField, REGION_PRIORITY
from discovery.domain.business import Business, BusinessSummary, BusinessDetails
from discovery.domain.product import Product, ProductSummary
from discovery.domain.pagination import PageRequest, PageResult, ProductPageResult
from discovery.domain.requests import LocationRequest, LocationSearchRequest, ProductPageRequest

__all__ = [
    'Location', 'RegionField', 'REGION_PRIORITY',
    'Business', 'BusinessSummary', 'BusinessDetails',
    'Product', 'ProductSummary',
    'PageRequest', 'PageResult', 'ProductPageResult',
    'LocationRequest', 'LocationSearchRequest', 'ProductPageRequest',
]

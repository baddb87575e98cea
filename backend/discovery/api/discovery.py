"""
Discovery API Endpoints
Location-based business discovery and public product listings

Errors map as: ValidationError -> 400, NotFoundError -> 404,
anything else -> 500.
"""
import logging
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Path

from discovery.core.exceptions import DiscoveryError
from discovery.domain.requests import LocationRequest, LocationSearchRequest, ProductPageRequest
from discovery.services.business_discovery_service import BusinessDiscoveryService
from discovery.services.product_discovery_service import ProductDiscoveryService

logger = logging.getLogger(__name__)
router = APIRouter()


# Dependencies
def get_business_discovery_service() -> BusinessDiscoveryService:
    return BusinessDiscoveryService()


def get_product_discovery_service() -> ProductDiscoveryService:
    return ProductDiscoveryService()


def _success(payload: dict) -> dict:
    return {"status": "success", **payload}


def _http_error(e: Exception, action: str) -> HTTPException:
    if isinstance(e, DiscoveryError):
        if e.status_code >= 500:
            logger.error(f"Error {action}: {e.message}")
        return HTTPException(status_code=e.status_code, detail=e.message)
    logger.exception(f"Unexpected error {action}")
    return HTTPException(status_code=500, detail=f"Error {action}: {str(e)}")


# ============================================================================
# Proximity
# ============================================================================

@router.post("/nearest")
async def get_nearest_businesses(
    request: LocationRequest,
    service: BusinessDiscoveryService = Depends(get_business_discovery_service)
):
    """
    Businesses nearest to the requester

    Sorted by distance within the returned page only; use /within-radius
    for a globally ordered result.
    """
    try:
        return _success(service.nearest(request).to_dict())
    except Exception as e:
        raise _http_error(e, "getting nearest businesses")


@router.post("/within-radius")
async def get_businesses_within_radius(
    request: LocationRequest,
    service: BusinessDiscoveryService = Depends(get_business_discovery_service)
):
    """Businesses within `radius` km (default 10), nearest first"""
    try:
        return _success(service.within_radius(request).to_dict())
    except Exception as e:
        raise _http_error(e, "getting businesses within radius")


# ============================================================================
# Region and name filters
# ============================================================================

@router.post("/filter/{region_field}/{value}")
async def get_businesses_by_region(
    request: LocationRequest,
    region_field: str = Path(..., description="province, district, sector, cell or village"),
    value: str = Path(..., description="Region label, matched exactly ignoring case"),
    service: BusinessDiscoveryService = Depends(get_business_discovery_service)
):
    """Businesses in one administrative region, in name order"""
    try:
        return _success(service.by_region(region_field, value, request).to_dict())
    except Exception as e:
        raise _http_error(e, f"filtering businesses by {region_field}")


@router.post("/search/name/{business_name}")
async def search_businesses_by_name(
    business_name: str,
    request: LocationRequest,
    service: BusinessDiscoveryService = Depends(get_business_discovery_service)
):
    """Businesses whose name contains the given text"""
    try:
        return _success(service.search_by_name(business_name, request).to_dict())
    except Exception as e:
        raise _http_error(e, "searching businesses by name")


@router.post("/search/product/{product_name}")
async def search_businesses_by_product_name(
    product_name: str,
    request: LocationRequest,
    service: BusinessDiscoveryService = Depends(get_business_discovery_service)
):
    """Businesses selling a product whose name contains the given text, nearest first"""
    try:
        return _success(service.search_by_product_name(product_name, request).to_dict())
    except Exception as e:
        raise _http_error(e, "searching businesses by product name")


@router.post("/search/advanced")
async def search_businesses_by_name_and_location(
    request: LocationSearchRequest,
    service: BusinessDiscoveryService = Depends(get_business_discovery_service)
):
    """
    Search by business name and region

    Only the most specific region given is applied
    (village > cell > sector > district > province).
    """
    try:
        return _success(service.search_by_name_and_region(request).to_dict())
    except Exception as e:
        raise _http_error(e, "in advanced business search")


# ============================================================================
# Products
# ============================================================================

@router.post("/{business_id}/products")
async def get_products_for_business(
    business_id: UUID,
    request: LocationRequest,
    service: ProductDiscoveryService = Depends(get_product_discovery_service)
):
    """A business's products with the business's distance from the requester"""
    try:
        return _success(service.list_with_distance(business_id, request).to_dict())
    except Exception as e:
        raise _http_error(e, "getting products for business")


# ============================================================================
# Public (no requester location)
# ============================================================================

@router.get("/get-by-id/{business_id}")
async def get_business_by_id(
    business_id: UUID,
    service: BusinessDiscoveryService = Depends(get_business_discovery_service)
):
    """Public business details"""
    try:
        return _success({"data": service.public_details(business_id).to_dict()})
    except Exception as e:
        raise _http_error(e, "getting business details")


@router.post("/products/{business_id}")
async def get_products_for_business_paginated(
    business_id: UUID,
    request: Optional[ProductPageRequest] = None,
    service: ProductDiscoveryService = Depends(get_product_discovery_service)
):
    """
    Public product listing with sorting and name search

    sort_by accepts name, price, quantity or itemsPerPacket; anything else
    sorts by name.
    """
    try:
        page = service.list_for_business(business_id, request or ProductPageRequest())
        return _success(page.to_dict())
    except Exception as e:
        raise _http_error(e, "getting products for business")

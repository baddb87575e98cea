"""
Business Discovery Service

Finds businesses near a requester, by region, or by name, and returns
pages of BusinessSummary with distance and product count filled in.

Two proximity operations with different ordering guarantees:
- nearest(): the store pages businesses by name, then each page is sorted
  by distance. Proximity order holds within a page only.
- within_radius(): all candidates are loaded (bounded by
  DISCOVERY_MAX_SCAN_ROWS), filtered by radius and sorted globally before
  slicing. Proximity order holds across pages.
"""
import logging
from typing import List, Optional, Sequence, Tuple, Union
from uuid import UUID

from discovery.core.config import settings
from discovery.core.exceptions import CandidateLimitExceeded, NotFoundError, ValidationError
from discovery.domain.business import Business, BusinessDetails, BusinessSummary
from discovery.domain.location import RegionField
from discovery.domain.pagination import PageResult
from discovery.domain.requests import LocationRequest, LocationSearchRequest
from discovery.repositories.business_repository import BusinessRepository
from discovery.repositories.product_repository import ProductRepository
from discovery.services.location_filter import (
    FilterKind,
    parse_region_field,
    require_location,
    require_text,
    resolve_from_request,
)
from discovery.services.pagination import PaginationPolicy
from discovery.utils.geo import calculate_distance_km, format_distance

logger = logging.getLogger(__name__)


class BusinessDiscoveryService:
    """
    Location-based business discovery

    Every operation except public_details() requires requester
    coordinates. Businesses without coordinates never appear in a
    distance-sorted result.
    """

    def __init__(
        self,
        business_repository: Optional[BusinessRepository] = None,
        product_repository: Optional[ProductRepository] = None,
        pagination: Optional[PaginationPolicy] = None,
        default_radius_km: Optional[float] = None,
        max_scan_rows: Optional[int] = None
    ):
        self.businesses = business_repository or BusinessRepository()
        self.products = product_repository or ProductRepository()
        self.pagination = pagination or PaginationPolicy()
        self.default_radius_km = (
            settings.DISCOVERY_DEFAULT_RADIUS_KM if default_radius_km is None else default_radius_km
        )
        self.max_scan_rows = max_scan_rows or settings.DISCOVERY_MAX_SCAN_ROWS

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _distance_to(business: Business, latitude: float, longitude: float) -> Optional[float]:
        if not business.has_coordinates:
            return None
        return calculate_distance_km(
            latitude, longitude,
            business.location.latitude, business.location.longitude
        )

    def _summarize(
        self,
        businesses: Sequence[Business],
        latitude: float,
        longitude: float
    ) -> List[BusinessSummary]:
        """Map businesses to summaries, counting products at read time"""
        counts = self.products.count_for_businesses([business.id for business in businesses])

        summaries = []
        for business in businesses:
            distance_km = self._distance_to(business, latitude, longitude)
            summaries.append(BusinessSummary(
                id=business.id,
                name=business.name,
                location=business.location,
                about=business.about,
                website_link=business.website_link,
                product_count=counts.get(business.id, 0),
                distance_km=distance_km,
                formatted_distance=format_distance(distance_km) if distance_km is not None else None,
            ))
        return summaries

    def _rank_by_distance(
        self,
        businesses: Sequence[Business],
        latitude: float,
        longitude: float,
        radius_km: Optional[float] = None
    ) -> List[Business]:
        """
        Businesses with coordinates, nearest first

        Ties keep the incoming (name) order. When radius_km is given,
        businesses farther than it are dropped.
        """
        ranked: List[Tuple[float, Business]] = []
        for business in businesses:
            distance_km = self._distance_to(business, latitude, longitude)
            if distance_km is None:
                continue
            if radius_km is not None and distance_km > radius_km:
                continue
            ranked.append((distance_km, business))

        ranked.sort(key=lambda pair: pair[0])
        return [business for _, business in ranked]

    def _manual_page(self, ranked: List[Business], request: LocationRequest, latitude: float, longitude: float):
        page = self.pagination.page_request(request.skip, request.limit)
        result = self.pagination.manual_page(ranked, page)
        return result.model_copy(update={"items": self._summarize(result.items, latitude, longitude)})

    def _store_page(self, businesses: List[Business], total: int, page, latitude: float, longitude: float):
        return self.pagination.store_page(self._summarize(businesses, latitude, longitude), total, page)

    def _check_scan_size(self, size: int):
        if size > self.max_scan_rows:
            logger.warning(f"Candidate set exceeds {self.max_scan_rows} rows, refusing in-memory ranking")
            raise CandidateLimitExceeded(self.max_scan_rows)

    # ------------------------------------------------------------------
    # Proximity
    # ------------------------------------------------------------------

    def nearest(self, request: LocationRequest) -> PageResult[BusinessSummary]:
        """
        Page of businesses with coordinates, sorted by distance within the page

        The store cuts the page in name order first, so the nearest
        business overall is not guaranteed to be on page one.
        """
        latitude, longitude = require_location(request)
        page = self.pagination.page_request(request.skip, request.limit)

        businesses, total = self.businesses.find_with_coordinates(page.page_index, page.page_size)
        summaries = self._summarize(
            self._rank_by_distance(businesses, latitude, longitude), latitude, longitude
        )

        logger.info(f"Nearest businesses: page {page.page_index}, {len(summaries)} of {total}")
        return self.pagination.store_page(summaries, total, page)

    def within_radius(self, request: LocationRequest) -> PageResult[BusinessSummary]:
        """
        Businesses within request.radius km (default 10), nearest first across all pages

        Raises:
            CandidateLimitExceeded: more businesses with coordinates than
                DISCOVERY_MAX_SCAN_ROWS
        """
        latitude, longitude = require_location(request)
        radius_km = self.default_radius_km if request.radius is None else request.radius
        if radius_km < 0:
            raise ValidationError("Radius must not be negative")
        self.pagination.page_request(request.skip, request.limit)

        candidates = self.businesses.find_all_with_coordinates(self.max_scan_rows)
        self._check_scan_size(len(candidates))

        ranked = self._rank_by_distance(candidates, latitude, longitude, radius_km)
        logger.info(f"Within {radius_km} km: {len(ranked)} of {len(candidates)} candidates")
        return self._manual_page(ranked, request, latitude, longitude)

    # ------------------------------------------------------------------
    # Region and name filters
    # ------------------------------------------------------------------

    def by_region(
        self,
        region_field: Union[RegionField, str],
        value: str,
        request: LocationRequest
    ) -> PageResult[BusinessSummary]:
        """
        Businesses whose region label matches value exactly (case-insensitive)

        Results are in name order; distance is filled in where known.
        """
        latitude, longitude = require_location(request)
        field = region_field if isinstance(region_field, RegionField) else parse_region_field(region_field)
        value = require_text(value, field.value.capitalize())
        page = self.pagination.page_request(request.skip, request.limit)

        businesses, total = self.businesses.find_by_region_field(field, value, page.page_index, page.page_size)

        logger.info(f"Businesses in {field.value} '{value}': {len(businesses)} of {total}")
        return self._store_page(businesses, total, page, latitude, longitude)

    def search_by_name(self, business_name: str, request: LocationRequest) -> PageResult[BusinessSummary]:
        """Businesses whose name contains business_name (case-insensitive)"""
        latitude, longitude = require_location(request)
        business_name = require_text(business_name, "Business name")
        page = self.pagination.page_request(request.skip, request.limit)

        businesses, total = self.businesses.find_by_name_substring(business_name, page.page_index, page.page_size)

        logger.info(f"Business name search '{business_name}': {len(businesses)} of {total}")
        return self._store_page(businesses, total, page, latitude, longitude)

    def search_by_product_name(self, product_name: str, request: LocationRequest) -> PageResult[BusinessSummary]:
        """
        Businesses selling a product whose name contains product_name, nearest first

        No match is an empty page, not an error.
        """
        latitude, longitude = require_location(request)
        product_name = require_text(product_name, "Product name")
        page = self.pagination.page_request(request.skip, request.limit)

        business_ids = self.products.find_business_ids_by_name_substring(
            product_name, limit=self.max_scan_rows + 1
        )
        if not business_ids:
            logger.info(f"Product search '{product_name}': no matching businesses")
            return self.pagination.empty_page(page)
        self._check_scan_size(len(business_ids))

        ranked = self._rank_by_distance(self.businesses.find_by_ids(business_ids), latitude, longitude)
        logger.info(f"Product search '{product_name}': {len(ranked)} businesses with coordinates")
        return self._manual_page(ranked, request, latitude, longitude)

    def search_by_name_and_region(self, request: LocationSearchRequest) -> PageResult[BusinessSummary]:
        """
        Name and/or region search, one region level at most

        The most specific region set on the request wins; with no region
        the search is by name only.

        Raises:
            ValidationError: neither a name nor a region was given
        """
        latitude, longitude = require_location(request)
        page = self.pagination.page_request(request.skip, request.limit)
        location_filter = resolve_from_request(request)
        logger.debug(f"Advanced search resolved to {location_filter}")

        if location_filter.is_region and location_filter.name:
            businesses, total = self.businesses.find_by_name_substring_and_region(
                location_filter.name,
                location_filter.region_field,
                location_filter.region_value,
                page.page_index,
                page.page_size
            )
        elif location_filter.is_region:
            businesses, total = self.businesses.find_by_region_field(
                location_filter.region_field,
                location_filter.region_value,
                page.page_index,
                page.page_size
            )
        elif location_filter.kind == FilterKind.NAME_ONLY:
            businesses, total = self.businesses.find_by_name_substring(
                location_filter.name, page.page_index, page.page_size
            )
        else:
            raise ValidationError("Provide a business name or a region to search")

        logger.info(f"Advanced search ({location_filter.kind.value}): {len(businesses)} of {total}")
        return self._store_page(businesses, total, page, latitude, longitude)

    # ------------------------------------------------------------------
    # Public details
    # ------------------------------------------------------------------

    def public_details(self, business_id: UUID) -> BusinessDetails:
        """
        Single business, no requester location needed

        Raises:
            NotFoundError: unknown business_id
        """
        business = self.businesses.find_by_id(business_id)
        if not business:
            raise NotFoundError(f"Business not found with ID: {business_id}")

        return BusinessDetails(
            id=business.id,
            name=business.name,
            location=business.location,
            about=business.about,
            website_link=business.website_link,
            product_count=self.products.count_for_business(business.id),
            is_open=business.is_open,
        )

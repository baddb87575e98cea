"""
Product Discovery Service

Lists a business's products with their packet/pricing breakdown. Sorting
is restricted to a whitelist; anything else silently falls back to name.
"""
import logging
from typing import Optional, Tuple
from uuid import UUID

from discovery.core.exceptions import NotFoundError
from discovery.domain.business import Business
from discovery.domain.pagination import PageResult, ProductPageResult
from discovery.domain.product import ProductSummary
from discovery.domain.requests import LocationRequest, ProductPageRequest
from discovery.repositories.business_repository import BusinessRepository
from discovery.repositories.product_repository import ProductRepository
from discovery.services.location_filter import require_location
from discovery.services.pagination import PaginationPolicy
from discovery.utils.geo import calculate_distance_km, format_distance

logger = logging.getLogger(__name__)

DEFAULT_SORT_FIELD = "name"
DEFAULT_SORT_DIRECTION = "asc"

# Accepted spellings (lower-cased) -> product column
SORT_FIELDS = {
    "name": "name",
    "price": "price_per_item",
    "priceperitem": "price_per_item",
    "price_per_item": "price_per_item",
    "quantity": "packets",
    "packets": "packets",
    "itemsperpacket": "items_per_packet",
    "items_per_packet": "items_per_packet",
}


def resolve_sort_field(sort_by: Optional[str]) -> str:
    """Whitelisted sort column; unknown or empty input gives "name" """
    if not sort_by or not sort_by.strip():
        return DEFAULT_SORT_FIELD
    return SORT_FIELDS.get(sort_by.strip().lower(), DEFAULT_SORT_FIELD)


def resolve_sort_direction(sort_direction: Optional[str]) -> str:
    if sort_direction and sort_direction.strip().lower() == "desc":
        return "desc"
    return DEFAULT_SORT_DIRECTION


class ProductDiscoveryService:
    """Product listings for one business"""

    def __init__(
        self,
        business_repository: Optional[BusinessRepository] = None,
        product_repository: Optional[ProductRepository] = None,
        pagination: Optional[PaginationPolicy] = None
    ):
        self.businesses = business_repository or BusinessRepository()
        self.products = product_repository or ProductRepository()
        self.pagination = pagination or PaginationPolicy()

    def _get_business(self, business_id: UUID) -> Business:
        business = self.businesses.find_by_id(business_id)
        if not business:
            raise NotFoundError(f"Business not found with ID: {business_id}")
        return business

    @staticmethod
    def _business_distance(
        business: Business,
        latitude: float,
        longitude: float
    ) -> Tuple[Optional[float], Optional[str]]:
        if not business.has_coordinates:
            return None, None
        distance_km = calculate_distance_km(
            latitude, longitude,
            business.location.latitude, business.location.longitude
        )
        return distance_km, format_distance(distance_km)

    def list_for_business(self, business_id: UUID, request: ProductPageRequest) -> ProductPageResult:
        """
        Public, sortable product listing with optional name search

        Raises:
            ValidationError: bad pagination
            NotFoundError: unknown business_id
        """
        page = self.pagination.page_request(request.skip, request.limit)
        business = self._get_business(business_id)

        sort_field = resolve_sort_field(request.sort_by)
        sort_direction = resolve_sort_direction(request.sort_direction)
        search_term = request.search_term.strip() if request.search_term else ""

        if search_term:
            products, total = self.products.find_by_business_and_name(
                business.id, search_term, page.page_index, page.page_size, sort_field, sort_direction
            )
        else:
            products, total = self.products.find_by_business(
                business.id, page.page_index, page.page_size, sort_field, sort_direction
            )

        summaries = [ProductSummary.from_product(product, business.name) for product in products]
        logger.info(
            f"Products for business {business.id}: {len(summaries)} of {total} "
            f"(sort {sort_field} {sort_direction}, search '{search_term}')"
        )

        return ProductPageResult(
            items=summaries,
            total_count=total,
            skip=page.skip,
            limit=page.limit,
            has_more=self.pagination.has_more(page.skip, page.limit, total),
            sort_by=sort_field,
            sort_direction=sort_direction,
            business_name=business.name,
        )

    def list_with_distance(self, business_id: UUID, request: LocationRequest) -> PageResult[ProductSummary]:
        """
        Product listing tagged with the business's distance from the requester

        Every product carries the same distance, that of its business.
        """
        latitude, longitude = require_location(request)
        page = self.pagination.page_request(request.skip, request.limit)
        business = self._get_business(business_id)

        distance_km, formatted_distance = self._business_distance(business, latitude, longitude)
        products, total = self.products.find_by_business(business.id, page.page_index, page.page_size)

        summaries = [
            ProductSummary.from_product(product, business.name, distance_km, formatted_distance)
            for product in products
        ]
        logger.info(f"Products near requester for business {business.id}: {len(summaries)} of {total}")
        return self.pagination.store_page(summaries, total, page)

"""
Product Repository - Data Access Layer for Products

Queries on products and product_images, always scoped by business where
the caller lists products. Image URLs for a page are loaded in one query.
"""
import logging
from typing import Dict, List, Optional, Sequence, Tuple
from uuid import UUID

from discovery.domain.product import Product, to_decimal
from discovery.repositories.base import BaseRepository, contains_pattern

logger = logging.getLogger(__name__)

PRODUCT_COLUMNS = """
    id, business_id, name, description,
    packets, items_per_packet, price_per_item, fulfillment_cost
"""

# Columns a listing may be ordered by
SORTABLE_COLUMNS = ("name", "price_per_item", "packets", "items_per_packet")
SORT_DIRECTIONS = ("asc", "desc")


class ProductRepository(BaseRepository):
    """Repository for Product data access"""

    @staticmethod
    def _map_row_to_product(row: dict, image_urls: Optional[List[str]] = None) -> Product:
        return Product(
            id=row['id'],
            business_id=row['business_id'],
            name=row['name'],
            description=row.get('description'),
            packets=row.get('packets') or 0,
            items_per_packet=row.get('items_per_packet') or 0,
            price_per_item=to_decimal(row.get('price_per_item')),
            fulfillment_cost=to_decimal(row.get('fulfillment_cost')),
            image_urls=image_urls or [],
        )

    @staticmethod
    def _order_by(sort_column: str, direction: str) -> str:
        if sort_column not in SORTABLE_COLUMNS:
            raise ValueError(f"Unsupported sort column: {sort_column}")
        if direction not in SORT_DIRECTIONS:
            raise ValueError(f"Unsupported sort direction: {direction}")
        return f"{sort_column} {direction.upper()}, id ASC"

    def count_for_business(self, business_id: UUID) -> int:
        """Number of products owned by a business"""
        with self._cursor() as cursor:
            cursor.execute("""
                SELECT COUNT(*) as total
                FROM products
                WHERE business_id = %s
            """, (str(business_id),))

            return cursor.fetchone()['total']

    def count_for_businesses(self, business_ids: Sequence[UUID]) -> Dict[UUID, int]:
        """
        Product counts for several businesses in one query

        Returns:
            Dict of business ID -> count, 0 for businesses without products
        """
        counts = {UUID(str(business_id)): 0 for business_id in business_ids}
        if not counts:
            return counts

        with self._cursor() as cursor:
            cursor.execute("""
                SELECT business_id, COUNT(*) as total
                FROM products
                WHERE business_id = ANY(%s::uuid[])
                GROUP BY business_id
            """, ([str(business_id) for business_id in counts],))

            for row in cursor.fetchall():
                counts[UUID(str(row['business_id']))] = row['total']

        return counts

    def find_business_ids_by_name_substring(self, value: str, limit: Optional[int] = None) -> List[UUID]:
        """
        Distinct IDs of businesses owning a product whose name contains value

        Args:
            value: Case-insensitive substring
            limit: Optional cap on the number of IDs read
        """
        query = """
            SELECT DISTINCT business_id
            FROM products
            WHERE name ILIKE %s
            ORDER BY business_id
        """
        params = [contains_pattern(value)]
        if limit is not None:
            query += " LIMIT %s"
            params.append(limit)

        with self._cursor() as cursor:
            cursor.execute(query, params)
            return [UUID(str(row['business_id'])) for row in cursor.fetchall()]

    def find_image_urls(self, product_ids: Sequence[UUID]) -> Dict[UUID, List[str]]:
        """Image URLs per product in upload (product_images.id) order, one query for the whole page"""
        images = {UUID(str(product_id)): [] for product_id in product_ids}
        if not images:
            return images

        with self._cursor() as cursor:
            cursor.execute("""
                SELECT product_id, image_url
                FROM product_images
                WHERE product_id = ANY(%s::uuid[])
                ORDER BY product_id, id
            """, ([str(product_id) for product_id in images],))

            for row in cursor.fetchall():
                images[UUID(str(row['product_id']))].append(row['image_url'])

        return images

    def _find_page(
        self,
        where_clause: str,
        params: list,
        page_index: int,
        page_size: int,
        sort_column: str,
        direction: str
    ) -> Tuple[List[Product], int]:
        order_by = self._order_by(sort_column, direction)

        with self._cursor() as cursor:
            cursor.execute(f"""
                SELECT COUNT(*) as total
                FROM products
                WHERE {where_clause}
            """, params)
            total = cursor.fetchone()['total']

            cursor.execute(f"""
                SELECT {PRODUCT_COLUMNS}
                FROM products
                WHERE {where_clause}
                ORDER BY {order_by}
                LIMIT %s OFFSET %s
            """, params + [page_size, self._offset(page_index, page_size)])
            rows = cursor.fetchall()

        images = self.find_image_urls([row['id'] for row in rows])
        products = [
            self._map_row_to_product(row, images.get(UUID(str(row['id']))))
            for row in rows
        ]
        return products, total

    def find_by_business(
        self,
        business_id: UUID,
        page_index: int,
        page_size: int,
        sort_column: str = "name",
        direction: str = "asc"
    ) -> Tuple[List[Product], int]:
        """
        Page of a business's products

        Returns:
            Tuple of (products with image URLs, total count)
        """
        return self._find_page(
            "business_id = %s", [str(business_id)],
            page_index, page_size, sort_column, direction
        )

    def find_by_business_and_name(
        self,
        business_id: UUID,
        name: str,
        page_index: int,
        page_size: int,
        sort_column: str = "name",
        direction: str = "asc"
    ) -> Tuple[List[Product], int]:
        """Page of a business's products whose name contains name"""
        return self._find_page(
            "business_id = %s AND name ILIKE %s", [str(business_id), contains_pattern(name)],
            page_index, page_size, sort_column, direction
        )

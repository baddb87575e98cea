"""
Business Repository - Data Access Layer for Businesses

All SQL for the businesses table lives here. Paged finders return
(businesses, total_count) with rows ordered by name.
"""
import logging
from typing import List, Optional, Sequence, Tuple
from uuid import UUID

from discovery.domain.business import Business
from discovery.domain.location import Location, RegionField
from discovery.repositories.base import BaseRepository, contains_pattern

logger = logging.getLogger(__name__)

BUSINESS_COLUMNS = """
    id, name, about, website_link, is_open,
    province, district, sector, cell, village,
    latitude, longitude
"""

HAS_COORDINATES = "latitude IS NOT NULL AND longitude IS NOT NULL"


class BusinessRepository(BaseRepository):
    """
    Repository for Business data access

    Region columns are taken from RegionField, never from request text.
    """

    @staticmethod
    def _map_row_to_business(row: dict) -> Business:
        location = Location(
            province=row.get('province'),
            district=row.get('district'),
            sector=row.get('sector'),
            cell=row.get('cell'),
            village=row.get('village'),
            latitude=row.get('latitude'),
            longitude=row.get('longitude'),
        )
        return Business(
            id=row['id'],
            name=row['name'],
            about=row.get('about'),
            website_link=row.get('website_link'),
            is_open=bool(row.get('is_open')),
            location=location,
        )

    @staticmethod
    def _region_column(field: RegionField) -> str:
        return RegionField(field).value

    def _find_page(
        self,
        where_clause: str,
        params: list,
        page_index: int,
        page_size: int
    ) -> Tuple[List[Business], int]:
        with self._cursor() as cursor:
            cursor.execute(f"""
                SELECT COUNT(*) as total
                FROM businesses
                WHERE {where_clause}
            """, params)
            total = cursor.fetchone()['total']

            cursor.execute(f"""
                SELECT {BUSINESS_COLUMNS}
                FROM businesses
                WHERE {where_clause}
                ORDER BY name, id
                LIMIT %s OFFSET %s
            """, params + [page_size, self._offset(page_index, page_size)])

            rows = cursor.fetchall()
            logger.debug(f"Business page {page_index} ({page_size}): {len(rows)} of {total}")
            return [self._map_row_to_business(row) for row in rows], total

    def find_with_coordinates(self, page_index: int, page_size: int) -> Tuple[List[Business], int]:
        """
        Page of businesses that have both latitude and longitude

        Returns:
            Tuple of (businesses ordered by name, total count)
        """
        return self._find_page(HAS_COORDINATES, [], page_index, page_size)

    def find_all_with_coordinates(self, max_rows: int) -> List[Business]:
        """
        Every business with coordinates, for in-memory distance ranking

        Reads at most max_rows + 1 rows so callers can tell that the
        candidate set was larger than they allow.
        """
        with self._cursor() as cursor:
            cursor.execute(f"""
                SELECT {BUSINESS_COLUMNS}
                FROM businesses
                WHERE {HAS_COORDINATES}
                ORDER BY name, id
                LIMIT %s
            """, (max_rows + 1,))

            return [self._map_row_to_business(row) for row in cursor.fetchall()]

    def find_by_region_field(
        self,
        field: RegionField,
        value: str,
        page_index: int,
        page_size: int
    ) -> Tuple[List[Business], int]:
        """
        Businesses whose region label equals value (case-insensitive)

        Args:
            field: Which administrative level to compare
            value: Region label, exact match
        """
        column = self._region_column(field)
        return self._find_page(f"LOWER({column}) = LOWER(%s)", [value], page_index, page_size)

    def find_by_name_substring(
        self,
        value: str,
        page_index: int,
        page_size: int
    ) -> Tuple[List[Business], int]:
        """Businesses whose name contains value (case-insensitive)"""
        return self._find_page("name ILIKE %s", [contains_pattern(value)], page_index, page_size)

    def find_by_name_substring_and_region(
        self,
        name: str,
        field: RegionField,
        value: str,
        page_index: int,
        page_size: int
    ) -> Tuple[List[Business], int]:
        """Name substring match combined with one exact region match"""
        column = self._region_column(field)
        return self._find_page(
            f"name ILIKE %s AND LOWER({column}) = LOWER(%s)",
            [contains_pattern(name), value],
            page_index,
            page_size
        )

    def find_by_id(self, business_id: UUID) -> Optional[Business]:
        """
        Find business by ID

        Returns:
            Business or None if not found
        """
        with self._cursor() as cursor:
            cursor.execute(f"""
                SELECT {BUSINESS_COLUMNS}
                FROM businesses
                WHERE id = %s
            """, (str(business_id),))

            row = cursor.fetchone()
            if not row:
                return None

            return self._map_row_to_business(row)

    def find_by_ids(self, business_ids: Sequence[UUID]) -> List[Business]:
        """Businesses for the given IDs, unknown IDs skipped"""
        if not business_ids:
            return []

        with self._cursor() as cursor:
            cursor.execute(f"""
                SELECT {BUSINESS_COLUMNS}
                FROM businesses
                WHERE id = ANY(%s::uuid[])
                ORDER BY name, id
            """, ([str(business_id) for business_id in business_ids],))

            return [self._map_row_to_business(row) for row in cursor.fetchall()]

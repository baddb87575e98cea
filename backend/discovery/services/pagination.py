"""
Pagination policy shared by the discovery engines

Two modes:
- store: (skip, limit) becomes (page_index = skip // limit, page_size =
  limit) and the entity store supplies the total count.
- manual: the engine holds the full filtered, sorted list and slices
  [skip, skip + limit); the total is the post-filter length.

In both modes has_more = skip + limit < total_count and skip/limit are
echoed back unchanged.
"""
from typing import List, Optional, Sequence, TypeVar

from discovery.core.exceptions import ValidationError
from discovery.domain.pagination import PageRequest, PageResult

T = TypeVar("T")


class PaginationPolicy:

    def page_request(self, skip: Optional[int], limit: Optional[int]) -> PageRequest:
        """
        Validate a pagination window

        Raises:
            ValidationError: limit < 1 or skip < 0
        """
        skip = 0 if skip is None else skip
        if limit is None or limit <= 0:
            raise ValidationError("Limit must be at least 1")
        if skip < 0:
            raise ValidationError("Skip value must be non-negative")
        return PageRequest(skip=skip, limit=limit)

    @staticmethod
    def has_more(skip: int, limit: int, total_count: int) -> bool:
        return skip + limit < total_count

    def store_page(self, items: List[T], total_count: int, page: PageRequest) -> PageResult[T]:
        """Wrap a page the entity store already cut"""
        return PageResult(
            items=items,
            total_count=total_count,
            skip=page.skip,
            limit=page.limit,
            has_more=self.has_more(page.skip, page.limit, total_count),
        )

    def manual_page(self, items: Sequence[T], page: PageRequest) -> PageResult[T]:
        """Slice a fully filtered and sorted list in memory"""
        total_count = len(items)
        start = min(page.skip, total_count)
        end = min(start + page.limit, total_count)
        return PageResult(
            items=list(items[start:end]),
            total_count=total_count,
            skip=page.skip,
            limit=page.limit,
            has_more=self.has_more(page.skip, page.limit, total_count),
        )

    @staticmethod
    def empty_page(page: PageRequest) -> PageResult:
        return PageResult(items=[], total_count=0, skip=page.skip, limit=page.limit, has_more=False)

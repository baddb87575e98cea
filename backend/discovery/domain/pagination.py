"""
Pagination Models

PageRequest is the validated (skip, limit) pair. PageResult echoes skip
and limit back together with the authoritative total count.
"""
from typing import Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field

from discovery.domain.product import ProductSummary

T = TypeVar("T")


class PageRequest(BaseModel):
    """Validated pagination window, skip >= 0 and limit >= 1"""

    skip: int = Field(0, ge=0)
    limit: int = Field(..., ge=1)

    model_config = ConfigDict(frozen=True)

    @property
    def page_index(self) -> int:
        """Zero-based page number for store pagination"""
        return self.skip // self.limit

    @property
    def page_size(self) -> int:
        return self.limit


class PageResult(BaseModel, Generic[T]):
    """
    One page of discovery results

    Invariant: has_more == (skip + limit < total_count)
    """

    items: List[T] = Field(default_factory=list)
    total_count: int = 0
    skip: int = 0
    limit: int = 1
    has_more: bool = False

    model_config = ConfigDict(frozen=True)

    def to_dict(self) -> dict:
        return {
            "data": [item.to_dict() for item in self.items],
            "total_count": self.total_count,
            "skip": self.skip,
            "limit": self.limit,
            "count": len(self.items),
            "has_more": self.has_more,
        }


class ProductPageResult(PageResult[ProductSummary]):
    """Product page for one business, with the sort actually applied"""

    sort_by: str = "name"
    sort_direction: str = "asc"
    business_name: Optional[str] = None

    def to_dict(self) -> dict:
        data = super().to_dict()
        data.update({
            "sort_by": self.sort_by,
            "sort_direction": self.sort_direction,
            "business_name": self.business_name,
        })
        return data

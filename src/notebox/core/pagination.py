from math import ceil
from typing import Generic, TypeVar

from pydantic import BaseModel, Field, computed_field

T = TypeVar("T")


class PaginationResult(BaseModel, Generic[T]):
    """One page of a caller's records plus the totals needed to request the next one."""

    items: list[T] = Field(..., description="Records in the current page")
    total: int = Field(..., description="Number of records across all pages", ge=0)
    limit: int = Field(..., description="Maximum records per page", ge=1)
    offset: int = Field(..., description="Number of records skipped", ge=0)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def has_more(self) -> bool:
        return self.offset + len(self.items) < self.total

    @computed_field  # type: ignore[prop-decorator]
    @property
    def total_pages(self) -> int:
        return ceil(self.total / self.limit)

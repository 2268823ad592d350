"""Page request and page result for post listings."""

import math
from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict

from quill.domain.error import FieldError, ValidationError
from quill.domain.value.common import ValueObject

T = TypeVar("T")


class PageRequest(ValueObject):
    """Validated page number and page size."""

    page: int = 1
    limit: int = 10

    @classmethod
    def create(cls, page: int, limit: int, max_limit: int = 50) -> "PageRequest":
        """Build a page request, rejecting out-of-range values.

        Values are never clamped: ``limit=51`` is an error, not ``50``.

        Raises:
            ValidationError: If page < 1, limit < 1 or limit > max_limit
        """
        details = []
        if page < 1:
            details.append(FieldError("page", "Page must be a positive integer"))
        if limit < 1:
            details.append(FieldError("limit", "Limit must be a positive integer"))
        elif limit > max_limit:
            details.append(FieldError("limit", f"Limit must be {max_limit} or less"))
        if details:
            raise ValidationError("Validation failed", details)
        return cls(page=page, limit=limit)

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


class Pagination(ValueObject):
    """Pagination block returned with every page."""

    page: int
    limit: int
    total: int
    total_pages: int


class Page(BaseModel, Generic[T]):
    """One page of items plus its pagination block."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    items: list[T]
    pagination: Pagination

    @classmethod
    def of(cls, items: list[T], request: PageRequest, total: int) -> "Page[T]":
        return cls(
            items=items,
            pagination=Pagination(
                page=request.page,
                limit=request.limit,
                total=total,
                total_pages=math.ceil(total / request.limit),
            ),
        )

"""Shared schemas for API responses."""

import math
from typing import List, Optional, TypeVar, Generic
from pydantic import BaseModel, Field

from evalboard.core.config import settings

T = TypeVar('T')


class PaginationParams(BaseModel):
    """Base pagination parameters."""

    page: int = Field(default=1, ge=1, description="Page number")
    size: int = Field(default=settings.DEFAULT_PAGE_SIZE, ge=1, le=100, description="Items per page")

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.size


class BaseListResponse(BaseModel, Generic[T]):
    """Base list response with pagination."""

    items: List[T] = Field(..., description="List of items")
    total: int = Field(..., description="Total number of items")
    page: int = Field(..., description="Current page number")
    size: int = Field(..., description="Items per page")
    pages: int = Field(..., description="Total number of pages")

    @staticmethod
    def count_pages(total: int, size: int) -> int:
        return math.ceil(total / size) if size else 0


class MessageResponse(BaseModel):
    """Standard message response."""

    message: str = Field(..., description="Response message")
    success: bool = Field(default=True, description="Operation success status")
    data: Optional[dict] = Field(default=None, description="Additional response data")


class StatusResponse(BaseModel):
    """Status check response."""

    status: str = Field(..., description="Service status")
    version: Optional[str] = Field(default=None, description="API version")
    timestamp: Optional[str] = Field(default=None, description="Response timestamp")

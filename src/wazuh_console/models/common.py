"""Common response models."""

from __future__ import annotations

from typing import Generic, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


class AffectedItems(BaseModel, Generic[T]):
    """The ``data`` block of a manager list response."""

    affected_items: list[T] = Field(default_factory=list)
    total_affected_items: int = 0


class ItemsResponse(BaseModel, Generic[T]):
    """Manager list response wrapper.

    Format: ``{"data": {"affected_items": [...], "total_affected_items": n}}``
    """

    data: AffectedItems[T]

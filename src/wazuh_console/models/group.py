"""Agent group data models."""

from __future__ import annotations

from pydantic import BaseModel


class Group(BaseModel):
    """An agent group."""

    name: str
    count: int | None = None

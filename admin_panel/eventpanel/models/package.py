"""Pydantic models for packages."""
from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from eventpanel.models.enums import Category


class Package(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    category: Category
    description: str | None = None
    price: float | None = None
    created_at: datetime | None = Field(default=None, alias="createdAt")


class PackageCreate(BaseModel):
    name: str | None = None
    category: str | None = None
    description: str | None = None
    price: float | None = Field(default=None, ge=0)

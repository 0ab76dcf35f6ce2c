"""Catalog models — the storefront's product listing, read-only to the core.

Only the fields the matcher and the product cards need are modelled; any
other storefront fields (slug, stock, timestamps, ...) are ignored on
parsing.
"""

from __future__ import annotations

from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class CatalogCategory(BaseModel):
    """Product category as embedded in the listing response."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: Optional[str] = None
    name: Optional[str] = None


class CatalogProduct(BaseModel):
    """A product as returned by the storefront's "list products" call.

    ``price`` arrives as a decimal string (e.g. ``"24.50"``) and is parsed
    into a ``Decimal``.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: str
    name: str
    description: Optional[str] = None
    price: Decimal
    image: Optional[str] = None
    images: List[str] = Field(default_factory=list)
    featured: bool = False
    category: Optional[CatalogCategory] = None

    @field_validator("images", mode="before")
    @classmethod
    def _null_images(cls, v):
        return [] if v is None else v

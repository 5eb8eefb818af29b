from __future__ import annotations

from typing import Optional

from pydantic import Field

from ._base import CamelModel


class Product(CamelModel):
    """Catalog product as read from the document store."""
    id: str = Field(description="Unique product identifier")
    name: str = Field(description="Product name")
    price: float = Field(ge=0, description="Current unit price in CAD")
    store_id: Optional[str] = Field(default=None, description="Store selling this product")
    category: Optional[str] = Field(default=None, description="Product category")
    image_url: Optional[str] = Field(default=None, description="Primary product image URL")

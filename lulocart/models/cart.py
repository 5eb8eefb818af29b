from __future__ import annotations

from typing import List, Optional

from pydantic import Field

from ._base import CamelModel
from .product import Product


class CartLineItem(CamelModel):
    """A product/quantity/price triple held in the cart."""
    id: str = Field(description="Line identifier, unique within the cart")
    product: Product = Field(description="Product reference")
    quantity: int = Field(ge=1, description="Units of the product, at least one")
    price_at_time: float = Field(ge=0, description="Unit price when the item was added")
    special_instructions: Optional[str] = Field(default=None, description="Shopper notes for this line")


class CartSummary(CamelModel):
    """Priced summary derived from the cart lines. Never mutated on its own."""
    subtotal: float = Field(default=0.0, description="Sum of rounded line totals")
    gst: float = Field(default=0.0, description="Federal goods and services tax")
    pst: float = Field(default=0.0, description="Provincial sales tax")
    tax: float = Field(default=0.0, description="gst + pst")
    platform_fee: float = Field(default=0.0, description="Marketplace surcharge")
    delivery_fee: Optional[float] = Field(default=None, description="None until resolved at checkout")
    total: float = Field(default=0.0, description="subtotal + delivery fee + platform fee + tax")
    item_count: int = Field(default=0, description="Sum of line quantities")


class CartState(CamelModel):
    """Persisted cart snapshot."""
    items: List[CartLineItem] = Field(default_factory=list, description="Ordered cart lines")
    store_id: Optional[str] = Field(default=None, description="Store every line belongs to")
    store_name: Optional[str] = Field(default=None, description="Display name of the bound store")
    summary: CartSummary = Field(default_factory=CartSummary, description="Derived pricing summary")

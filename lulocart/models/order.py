from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import List, Literal, Optional

from pydantic import Field

from ._base import CamelModel


class OrderStatus(str, Enum):
    """Order lifecycle states, in lifecycle order."""
    PENDING = "pending"
    CONFIRMED = "confirmed"
    PREPARING = "preparing"
    READY = "ready"
    OUT_FOR_DELIVERY = "out_for_delivery"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


class OrderItem(CamelModel):
    """Cart line snapshot taken at purchase time."""
    id: str = Field(description="Line identifier")
    product_id: str = Field(description="Product identifier")
    product_name: str = Field(description="Product name at purchase time")
    product_image: Optional[str] = Field(default=None, description="Product image URL")
    price: float = Field(description="Unit price at purchase time")
    quantity: int = Field(ge=1, description="Units purchased")
    special_instructions: Optional[str] = Field(default=None, description="Shopper notes for this line")


class CustomerInfo(CamelModel):
    name: str = Field(default="", description="Customer full name")
    email: str = Field(default="", description="Contact email")
    phone: str = Field(default="", description="Contact phone")


class DeliveryAddress(CamelModel):
    street: str = Field(default="", description="Street address")
    city: str = Field(default="", description="City")
    province: str = Field(default="", description="Province code")
    postal_code: str = Field(default="", description="Postal code")
    country: str = Field(default="Canada", description="Country")
    delivery_instructions: Optional[str] = Field(default=None, description="Notes for the driver")


class OrderSummary(CamelModel):
    """Pricing snapshot of the cart at checkout."""
    subtotal: float = Field(default=0.0, description="Sum of rounded line totals")
    gst: float = Field(default=0.0, description="Federal goods and services tax")
    pst: float = Field(default=0.0, description="Provincial sales tax")
    tax: float = Field(default=0.0, description="gst + pst")
    platform_fee: float = Field(default=0.0, description="Marketplace surcharge")
    delivery_fee: float = Field(default=0.0, description="Delivery fee charged")
    total: float = Field(default=0.0, description="Amount charged to the customer")
    item_count: int = Field(default=0, description="Sum of line quantities")


class Order(CamelModel):
    """Order document.

    ``status`` is kept as the raw stored string; use
    ``lulocart.orders.lifecycle.parse_status`` to read it as an ``OrderStatus``.
    """
    id: str = Field(description="Unique order identifier")
    user_id: Optional[str] = Field(default=None, description="Customer who placed the order")
    store_id: str = Field(description="Store fulfilling the order")
    store_name: str = Field(default="", description="Store display name")
    status: str = Field(default=OrderStatus.PENDING.value, description="Raw lifecycle status")
    items: List[OrderItem] = Field(default_factory=list, description="Line snapshot at purchase time")
    summary: OrderSummary = Field(default_factory=OrderSummary, description="Pricing snapshot")
    customer_info: CustomerInfo = Field(default_factory=CustomerInfo, description="Customer contact details")
    delivery_address: DeliveryAddress = Field(default_factory=DeliveryAddress, description="Delivery destination")
    created_at: datetime = Field(description="Creation timestamp")
    updated_at: datetime = Field(description="Last update timestamp")
    estimated_delivery_time: Optional[datetime] = Field(default=None, description="Estimated delivery time")
    delivered_at: Optional[datetime] = Field(default=None, description="Delivery timestamp")
    receipt_url: Optional[str] = Field(default=None, description="Signed receipt URL")
    receipt_generated_at: Optional[datetime] = Field(default=None, description="When the signed URL was issued")
    receipt_expires_at: Optional[datetime] = Field(default=None, description="When the signed URL stops working")
    order_notes: Optional[str] = Field(default=None, description="Customer notes for the store")
    is_delivery: bool = Field(default=True, description="Delivery (True) or pickup (False)")
    language: Literal["en", "es"] = Field(default="en", description="Customer's preferred language")

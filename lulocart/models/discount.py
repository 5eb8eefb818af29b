from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field


class DiscountConfig(BaseModel):
    """Discount settings; unset values fall back to the configured defaults."""
    discount_percentage: Optional[float] = Field(default=None, description="Discount as a decimal (0.20 = 20%)")
    discount_eligible_orders: Optional[int] = Field(default=None, description="Number of orders eligible for the discount")


class DeliveryFeeDiscount(BaseModel):
    """New customer delivery discount, for display only."""
    is_eligible: bool = Field(description="Whether the discount applies")
    discount_percentage: float = Field(ge=0, le=1, description="Discount as a decimal actually applied, 0 when ineligible")
    configured_percentage: float = Field(default=0.0, description="Configured new customer discount, shown even when ineligible")
    original_fee: float = Field(description="Delivery fee before the discount")
    discounted_fee: float = Field(description="original_fee * (1 - discount_percentage)")
    discount_amount: float = Field(default=0.0, description="original_fee - discounted_fee")
    orders_remaining: int = Field(ge=0, description="Qualifying orders left for this customer")

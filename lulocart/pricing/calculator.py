"""Cart pricing.

Every amount is rounded to cents where it is produced: each line before
summation, each tax component, and the final total.
"""
from __future__ import annotations

from typing import Iterable, Optional

from pydantic import BaseModel, Field

from ..config import get_config
from ..models import CartLineItem, CartSummary
from .money import round_money


class TaxRates(BaseModel):
    """Sales tax rates for a jurisdiction, as decimals."""
    gst: float = Field(ge=0, description="Federal goods and services tax rate")
    pst: float = Field(ge=0, description="Provincial sales tax rate")

    @property
    def combined(self) -> float:
        return self.gst + self.pst

    @classmethod
    def from_config(cls) -> "TaxRates":
        config = get_config()
        return cls(gst=config.gst_rate, pst=config.pst_rate)


def line_total(item: CartLineItem) -> float:
    return round_money(item.price_at_time * item.quantity)


def calculate_summary(
    items: Iterable[CartLineItem],
    platform_fee: float,
    delivery_fee: Optional[float] = None,
    tax_rates: Optional[TaxRates] = None,
) -> CartSummary:
    """Price a list of cart lines.

    Args:
        items: Cart lines, each with a unit price and quantity.
        platform_fee: Marketplace surcharge; not charged on an empty cart.
        delivery_fee: Resolved delivery fee, or None while it is still unknown.
            None is preserved in the summary and contributes nothing to the total.
        tax_rates: Rates to apply. Defaults to the configured GST/PST rates.
    Returns:
        CartSummary: The priced summary. Pure function of its arguments.
    """
    items = list(items)
    rates = tax_rates or TaxRates.from_config()

    if not items:
        return CartSummary(delivery_fee=None if delivery_fee is None else 0.0)

    subtotal = round_money(sum(line_total(item) for item in items))
    gst = round_money(subtotal * rates.gst)
    tax = round_money(subtotal * rates.combined)
    # pst absorbs the rounding remainder so gst + pst == tax
    pst = round_money(tax - gst)
    fee = round_money(platform_fee)
    resolved_delivery = None if delivery_fee is None else round_money(delivery_fee)
    total = round_money(subtotal + (resolved_delivery or 0.0) + fee + tax)

    return CartSummary(
        subtotal=subtotal,
        gst=gst,
        pst=pst,
        tax=tax,
        platform_fee=fee,
        delivery_fee=resolved_delivery,
        total=total,
        item_count=sum(item.quantity for item in items),
    )


def with_delivery_fee(summary: CartSummary, delivery_fee: Optional[float]) -> CartSummary:
    """Return ``summary`` re-totalled once the delivery fee is resolved at checkout."""
    if summary.item_count == 0:
        return summary
    resolved = None if delivery_fee is None else round_money(delivery_fee)
    total = round_money(summary.subtotal + (resolved or 0.0) + summary.platform_fee + summary.tax)
    return summary.model_copy(update={"delivery_fee": resolved, "total": total})

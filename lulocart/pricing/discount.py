"""New customer delivery fee discount.

The result is a display hint. The payment backend recomputes the discount when
it charges the order.
"""
from __future__ import annotations

from typing import Any, Optional

from ..config import get_config
from ..logging import get_logger
from ..models import DeliveryFeeDiscount, DiscountConfig
from .money import is_finite_number, round_money


def _resolve_config(config: Optional[DiscountConfig]) -> tuple:
    defaults = get_config()
    pct = defaults.discount_percentage
    max_orders = defaults.discount_eligible_orders
    if config is not None:
        if config.discount_percentage is not None:
            pct = config.discount_percentage
        if config.discount_eligible_orders is not None:
            max_orders = config.discount_eligible_orders
    return pct, max_orders


def _ineligible(original_fee: float, max_orders: Any, total_orders: Any) -> DeliveryFeeDiscount:
    remaining = 0
    if is_finite_number(max_orders) and is_finite_number(total_orders):
        remaining = max(0, int(max_orders - total_orders))
    return DeliveryFeeDiscount(
        is_eligible=False,
        discount_percentage=0.0,
        original_fee=original_fee,
        discounted_fee=original_fee,
        discount_amount=0.0,
        orders_remaining=remaining,
    )


def calculate_delivery_discount(
    delivery_fee: Optional[float],
    total_orders: Any,
    is_logged_in: bool,
    config: Optional[DiscountConfig] = None,
) -> DeliveryFeeDiscount:
    """Evaluate the first-N-orders delivery discount for a customer.

    Args:
        delivery_fee: Delivery fee before the discount. None (unresolved) counts as 0.
        total_orders: The customer's paid order count, possibly from a stale cache.
        is_logged_in: Anonymous shoppers never get the discount.
        config: Discount overrides; unset values use AppConfig defaults.
    Returns:
        DeliveryFeeDiscount: Never contains NaN. Any non-finite input, or a
        percentage outside [0, 1], yields an ineligible result.
    """
    logger = get_logger(__name__)
    pct, max_orders = _resolve_config(config)
    fee = 0.0 if delivery_fee is None else delivery_fee

    if not is_finite_number(fee):
        logger.warning(f"Delivery fee {fee!r} is not a finite number, discount disabled")
        return _ineligible(0.0, max_orders, total_orders)

    fee = round_money(fee)
    checks = {
        "total_orders": total_orders,
        "discount_percentage": pct,
        "discount_eligible_orders": max_orders,
    }
    for name, value in checks.items():
        if not is_finite_number(value):
            logger.warning(f"{name}={value!r} is not a finite number, discount disabled")
            return _ineligible(fee, max_orders, total_orders)
    if not 0 <= pct <= 1:
        logger.warning(f"discount_percentage={pct!r} is outside [0, 1], discount disabled")
        return _ineligible(fee, max_orders, total_orders)

    is_eligible = bool(is_logged_in) and total_orders < max_orders and fee > 0
    orders_remaining = max(0, int(max_orders - total_orders))
    discount_amount = round_money(fee * pct) if is_eligible else 0.0
    discounted_fee = round_money(fee - discount_amount) if is_eligible else fee

    return DeliveryFeeDiscount(
        is_eligible=is_eligible,
        discount_percentage=pct if is_eligible else 0.0,
        configured_percentage=pct,
        original_fee=fee,
        discounted_fee=discounted_fee,
        discount_amount=discount_amount,
        orders_remaining=orders_remaining,
    )

from __future__ import annotations

import re
import uuid
from datetime import datetime, timezone
from typing import Dict, List, Literal, Optional

from ..cart import Cart
from ..errors import FieldError
from ..models import (
    CustomerInfo,
    DeliveryAddress,
    Order,
    OrderItem,
    OrderStatus,
    OrderSummary,
)

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
PHONE_RE = re.compile(r"^[+]?[1-9]\d{0,15}$")

REQUIRED = "validation.required"
INVALID_EMAIL = "validation.invalidEmail"
INVALID_PHONE = "validation.invalidPhone"


def validate_customer_info(info: CustomerInfo) -> List[FieldError]:
    """Field-level errors for the contact step. Each field is checked on its own."""
    errors = []
    if not info.name.strip():
        errors.append(FieldError("customerInfo.name", REQUIRED))
    if not info.email.strip():
        errors.append(FieldError("customerInfo.email", REQUIRED))
    elif not EMAIL_RE.match(info.email.strip()):
        errors.append(FieldError("customerInfo.email", INVALID_EMAIL))
    if not info.phone.strip():
        errors.append(FieldError("customerInfo.phone", REQUIRED))
    elif not PHONE_RE.match(re.sub(r"\D", "", info.phone)):
        errors.append(FieldError("customerInfo.phone", INVALID_PHONE))
    return errors


def validate_delivery_address(address: DeliveryAddress) -> List[FieldError]:
    errors = []
    for field, alias in (
        ("street", "street"),
        ("city", "city"),
        ("province", "province"),
        ("postal_code", "postalCode"),
    ):
        if not getattr(address, field).strip():
            errors.append(FieldError(f"deliveryAddress.{alias}", REQUIRED))
    return errors


def validate_checkout(info: CustomerInfo, address: Optional[DeliveryAddress], is_delivery: bool = True) -> Dict[str, str]:
    """All checkout errors keyed by field path, mapped to translation keys."""
    errors = validate_customer_info(info)
    if is_delivery and address is not None:
        errors += validate_delivery_address(address)
    elif is_delivery:
        errors.append(FieldError("deliveryAddress", REQUIRED))
    return {e.field: e.message_key for e in errors}


def build_order(
    cart: Cart,
    user_id: Optional[str],
    customer_info: CustomerInfo,
    delivery_address: DeliveryAddress,
    order_notes: Optional[str] = None,
    is_delivery: bool = True,
    language: Literal["en", "es"] = "en",
    order_id: Optional[str] = None,
    now: Optional[datetime] = None,
) -> Order:
    """Snapshot the cart into a new pending order.

    Raises:
        ValueError: If the cart is empty.
    """
    if cart.is_empty:
        raise ValueError("Cannot build an order from an empty cart")
    now = now or datetime.now(timezone.utc)
    summary = cart.summary

    items = [
        OrderItem(
            id=line.id,
            product_id=line.product.id,
            product_name=line.product.name,
            product_image=line.product.image_url,
            price=line.price_at_time,
            quantity=line.quantity,
            special_instructions=line.special_instructions,
        )
        for line in cart.items
    ]
    return Order(
        id=order_id or uuid.uuid4().hex,
        user_id=user_id,
        store_id=cart.store_id,
        store_name=cart.store_name or "",
        status=OrderStatus.PENDING.value,
        items=items,
        summary=OrderSummary(
            subtotal=summary.subtotal,
            gst=summary.gst,
            pst=summary.pst,
            tax=summary.tax,
            platform_fee=summary.platform_fee,
            delivery_fee=summary.delivery_fee or 0.0,
            total=summary.total,
            item_count=summary.item_count,
        ),
        customer_info=customer_info,
        delivery_address=delivery_address,
        created_at=now,
        updated_at=now,
        order_notes=order_notes or None,
        is_delivery=is_delivery,
        language=language,
    )


def complete_checkout(cart: Cart, order: Order) -> Order:
    """Clear the cart once ``order`` has been placed."""
    cart.clear()
    return order

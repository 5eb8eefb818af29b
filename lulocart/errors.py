from __future__ import annotations

from typing import Optional


class LuloCartError(Exception):
    """Base class for errors raised by the cart and order services."""


class StoreMismatchError(LuloCartError):
    """An item from one store was added to a cart bound to another store."""

    def __init__(self, cart_store_id: str, store_id: str) -> None:
        super().__init__(f"Cart is bound to store {cart_store_id!r}, cannot add items from {store_id!r}")
        self.cart_store_id = cart_store_id
        self.store_id = store_id


class ReceiptGenerationError(LuloCartError):
    """The receipt endpoint could not produce a usable signed URL."""

    def __init__(self, message: str, *, endpoint: str, order_id: str, status: Optional[int] = None) -> None:
        super().__init__(message)
        self.endpoint = endpoint
        self.order_id = order_id
        self.status = status


class OrderSourceError(LuloCartError):
    """The document store failed to return a user's orders."""


class FieldError(LuloCartError):
    """A single form field failed validation."""

    def __init__(self, field: str, message_key: str) -> None:
        super().__init__(f"{field}: {message_key}")
        self.field = field
        self.message_key = message_key

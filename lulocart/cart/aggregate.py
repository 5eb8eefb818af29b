from __future__ import annotations

import json
import time
from typing import List, Optional

from ..config import get_config
from ..errors import StoreMismatchError
from ..logging import get_logger
from ..models import CartLineItem, CartState, CartSummary, PlatformFeeConfig, Product
from ..pricing import TaxRates, calculate_summary, is_finite_number
from .storage import CartStorage, InMemoryCartStorage


class Cart:
    """Single-store shopping cart with write-through persistence.

    All lines belong to one store. Every mutation recomputes the summary and
    writes the snapshot to ``storage`` under the configured cart key. A failed
    write is logged and the cart keeps working in memory.
    """

    def __init__(
        self,
        storage: Optional[CartStorage] = None,
        platform_fee: Optional[PlatformFeeConfig] = None,
        tax_rates: Optional[TaxRates] = None,
        storage_key: Optional[str] = None,
    ) -> None:
        config = get_config()
        self.storage = storage if storage is not None else InMemoryCartStorage()
        self.storage_key = storage_key or config.cart_storage_key
        self.platform_fee = platform_fee or PlatformFeeConfig(
            enabled=config.platform_fee_enabled,
            fixed_amount=config.platform_fee_amount,
        )
        self.tax_rates = tax_rates or TaxRates.from_config()
        self.logger = get_logger(__name__)
        self._state = self._load()

    # ---------- persistence ----------

    def _load(self) -> CartState:
        raw = self.storage.load(self.storage_key)
        if raw is None:
            return CartState()
        try:
            state = CartState.model_validate(json.loads(raw))
        except (ValueError, TypeError) as e:
            self.logger.warning(f"Discarding corrupted cart snapshot {self.storage_key!r}: {e}")
            return CartState()

        if state.items and not state.store_id:
            self.logger.warning(f"Discarding cart snapshot {self.storage_key!r} with items but no store")
            return CartState()
        if not state.items:
            return CartState()
        # summary is derived, never trusted from storage
        summary = calculate_summary(
            state.items, self.platform_fee.fee, state.summary.delivery_fee, self.tax_rates
        )
        return state.model_copy(update={"summary": summary})

    def _commit(
        self,
        items: List[CartLineItem],
        store_id: Optional[str],
        store_name: Optional[str],
        delivery_fee: Optional[float],
    ) -> None:
        if not items:
            store_id = store_name = None
            delivery_fee = None
        summary = calculate_summary(items, self.platform_fee.fee, delivery_fee, self.tax_rates)
        self._state = CartState(items=items, store_id=store_id, store_name=store_name, summary=summary)
        self._persist()

    def _persist(self) -> None:
        payload = self._state.model_dump_json(by_alias=True)
        result = self.storage.save(self.storage_key, payload)
        if not result.ok:
            self.logger.error(f"Cart kept in memory only, persisting failed: {result.error}")

    # ---------- queries ----------

    @property
    def state(self) -> CartState:
        return self._state.model_copy(deep=True)

    @property
    def items(self) -> List[CartLineItem]:
        return list(self._state.items)

    @property
    def summary(self) -> CartSummary:
        return self._state.summary

    @property
    def store_id(self) -> Optional[str]:
        return self._state.store_id

    @property
    def store_name(self) -> Optional[str]:
        return self._state.store_name

    @property
    def is_empty(self) -> bool:
        return not self._state.items

    def can_add_to_cart(self, store_id: str) -> bool:
        """Whether items from ``store_id`` may be added without clearing the cart."""
        return not self._state.store_id or self._state.store_id == store_id

    def _check_store(self, store_id: str) -> None:
        if not self.can_add_to_cart(store_id):
            raise StoreMismatchError(self._state.store_id, store_id)

    # ---------- mutations ----------

    def add_item(
        self,
        product: Product,
        quantity: int = 1,
        store_id: Optional[str] = None,
        store_name: Optional[str] = None,
    ) -> bool:
        """Add ``quantity`` units of ``product``.

        Callers check ``can_add_to_cart`` first; a product from another store is
        not added and False is returned. An existing line for the same product
        has its quantity incremented.
        """
        target_store_id = store_id or product.store_id
        if not target_store_id:
            self.logger.error(f"Store ID is required to add product {product.id!r} to the cart")
            return False
        target_store_name = store_name or f"Store {target_store_id}"
        if quantity < 1:
            self.logger.warning(f"Ignoring add of product {product.id!r} with quantity {quantity}")
            return False

        try:
            self._check_store(target_store_id)
        except StoreMismatchError as e:
            self.logger.warning(str(e))
            return False

        items = list(self._state.items)
        for index, item in enumerate(items):
            if item.product.id == product.id:
                items[index] = item.model_copy(update={"quantity": item.quantity + quantity})
                break
        else:
            items.append(CartLineItem(
                id=f"{product.id}-{time.time_ns() // 1_000_000}",
                product=product,
                quantity=quantity,
                price_at_time=product.price,
            ))

        self._commit(items, target_store_id, target_store_name, self._state.summary.delivery_fee)
        return True

    def update_quantity(self, item_id: str, quantity: int) -> None:
        """Set a line's quantity; zero or less removes it. Unknown ids are ignored."""
        if quantity <= 0:
            self.remove_item(item_id)
            return
        if not any(item.id == item_id for item in self._state.items):
            return
        items = [
            item.model_copy(update={"quantity": quantity}) if item.id == item_id else item
            for item in self._state.items
        ]
        self._commit(items, self._state.store_id, self._state.store_name, self._state.summary.delivery_fee)

    def remove_item(self, item_id: str) -> None:
        """Remove a line. Removing the last line releases the store binding."""
        items = [item for item in self._state.items if item.id != item_id]
        if len(items) == len(self._state.items):
            return
        self._commit(items, self._state.store_id, self._state.store_name, self._state.summary.delivery_fee)

    def set_delivery_fee(self, delivery_fee: Optional[float]) -> None:
        """Record the delivery fee once checkout resolves it (None to unresolve)."""
        if self.is_empty:
            return
        if delivery_fee is not None and not is_finite_number(delivery_fee):
            self.logger.warning(f"Ignoring delivery fee {delivery_fee!r}, not a finite number")
            return
        self._commit(list(self._state.items), self._state.store_id, self._state.store_name, delivery_fee)

    def clear(self) -> None:
        self._commit([], None, None, None)

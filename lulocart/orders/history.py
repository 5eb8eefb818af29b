from __future__ import annotations

import random
from datetime import datetime, timedelta, timezone
from typing import Dict, List, Optional, Protocol

import pandas as pd
from pydantic import BaseModel, Field

from ..cancellation import CancellationToken, live_token
from ..config import get_config
from ..errors import OrderSourceError
from ..logging import get_logger
from ..models import (
    Order,
    OrderHistoryFilters,
    OrderItem,
    OrderStatus,
    OrderSummary,
)
from ..pricing import round_money
from .lifecycle import parse_status

LOAD_ERROR_MESSAGE = "We couldn't load your orders. Please try again."


class OrderSource(Protocol):
    """Read access to the order documents of the document store."""

    def get_orders_for_user(self, user_id: str) -> List[Order]:
        """Return every order placed by ``user_id``.

        Raises:
            OrderSourceError: If the store cannot be reached or returns bad data.
        """
        ...


class InMemoryOrderSource(OrderSource):
    def __init__(self, orders: Optional[List[Order]] = None) -> None:
        self._orders = list(orders or [])

    def add(self, order: Order) -> None:
        self._orders.append(order)

    def get_orders_for_user(self, user_id: str) -> List[Order]:
        return [o for o in self._orders if o.user_id == user_id]


class OrderHistoryResult(BaseModel):
    """What the order history view renders."""
    orders: List[Order] = Field(default_factory=list, description="Orders to show")
    error: Optional[str] = Field(default=None, description="User-facing error message")
    can_retry: bool = Field(default=False, description="Show a retry affordance")
    is_mock: bool = Field(default=False, description="Orders are development mock data")
    cancelled: bool = Field(default=False, description="The requesting view went away; render nothing")


class OrderHistoryLoader:
    """Loads a customer's orders, turning failures into a retryable error state."""

    def __init__(self, source: OrderSource) -> None:
        self.source = source
        self.config = get_config()
        self.logger = get_logger(__name__)

    def load(self, user_id: str, token: Optional[CancellationToken] = None) -> OrderHistoryResult:
        token = token or live_token()
        try:
            orders = self.source.get_orders_for_user(user_id)
        except (OrderSourceError, OSError, ValueError) as e:
            if token.cancelled:
                return OrderHistoryResult(cancelled=True)
            get_logger(__name__, user_id=user_id).error(f"Failed to fetch order history: {e}")
            if self.config.is_development:
                self.logger.info("Development mode: substituting mock orders")
                return OrderHistoryResult(
                    orders=mock_orders(user_id),
                    error=LOAD_ERROR_MESSAGE,
                    can_retry=True,
                    is_mock=True,
                )
            return OrderHistoryResult(error=LOAD_ERROR_MESSAGE, can_retry=True)

        if token.cancelled:
            return OrderHistoryResult(cancelled=True)
        return OrderHistoryResult(orders=sorted(orders, key=_created_utc, reverse=True))


def _created_utc(order: Order) -> datetime:
    """Creation time as an aware datetime; naive values are stored UTC."""
    created = order.created_at
    return created.replace(tzinfo=timezone.utc) if created.tzinfo is None else created


# -----------------------------
# Filtering / sorting
# -----------------------------

def _orders_frame(orders: List[Order]) -> pd.DataFrame:
    return pd.DataFrame({
        "id": [o.id for o in orders],
        "store_name": [o.store_name for o in orders],
        "status": [o.status for o in orders],
        "created_at": pd.to_datetime([o.created_at for o in orders], utc=True),
        "total": [o.summary.total for o in orders],
        "product_names": [" ".join(i.product_name for i in o.items) for o in orders],
    })


def filter_orders(orders: List[Order], filters: Optional[OrderHistoryFilters] = None) -> List[Order]:
    """Search, filter by status, and sort a customer's orders."""
    filters = filters or OrderHistoryFilters()
    if not orders:
        return []

    df = _orders_frame(orders)

    if filters.search and filters.search.strip():
        s = filters.search.strip().lower()
        mask = (
            df["store_name"].str.lower().str.contains(s, regex=False, na=False)
            | df["id"].str.lower().str.contains(s, regex=False, na=False)
            | df["product_names"].str.lower().str.contains(s, regex=False, na=False)
        )
        df = df.loc[mask]
    if filters.status and filters.status != "all":
        df = df[df["status"] == OrderStatus(filters.status).value]

    sort_column = {"date": "created_at", "amount": "total", "status": "status"}[filters.sort_by]
    df = df.sort_values(sort_column, ascending=filters.sort_order == "asc", kind="mergesort")

    return [orders[i] for i in df.index]


def available_statuses(orders: List[Order]) -> List[OrderStatus]:
    """Distinct statuses present in ``orders``, for the status filter."""
    if not orders:
        return []
    raw = _orders_frame(orders)["status"].dropna().unique().tolist()
    return sorted({parse_status(s) for s in raw}, key=lambda s: s.value)


# -----------------------------
# Development mock data
# -----------------------------

MOCK_STORES: Dict[str, List[str]] = {
    "La Cocina de Mamá": ["Tamales de pollo", "Pupusas revueltas", "Horchata"],
    "Arepas Express": ["Arepa reina pepiada", "Tequeños", "Papelón con limón"],
    "Mercado Latino": ["Plátanos maduros", "Queso fresco", "Tortillas de maíz"],
}


def mock_orders(user_id: str, n: int = 3, seed: int = 42) -> List[Order]:
    """Deterministic sample orders shown when the store is unreachable in development."""
    rng = random.Random(seed)
    now = datetime.now(timezone.utc)
    statuses = list(OrderStatus)
    config = get_config()
    orders = []
    for i in range(1, n + 1):
        store_name = rng.choice(list(MOCK_STORES))
        items = []
        for j, name in enumerate(rng.sample(MOCK_STORES[store_name], k=2), start=1):
            items.append(OrderItem(
                id=f"mock-{i}-{j}",
                product_id=f"mock-product-{j}",
                product_name=name,
                price=round_money(rng.uniform(3.0, 18.0)),
                quantity=rng.randint(1, 3),
            ))
        subtotal = round_money(sum(it.price * it.quantity for it in items))
        gst = round_money(subtotal * config.gst_rate)
        tax = round_money(subtotal * config.combined_tax_rate)
        created = now - timedelta(days=i, hours=rng.randint(0, 12))
        summary = OrderSummary(
            subtotal=subtotal,
            gst=gst,
            pst=round_money(tax - gst),
            tax=tax,
            platform_fee=config.platform_fee_amount,
            delivery_fee=config.delivery_base_fee,
            total=round_money(subtotal + tax + config.platform_fee_amount + config.delivery_base_fee),
            item_count=sum(it.quantity for it in items),
        )
        orders.append(Order(
            id=f"mock-order-{i:03d}",
            user_id=user_id,
            store_id=f"mock-store-{i}",
            store_name=store_name,
            status=rng.choice(statuses).value,
            items=items,
            summary=summary,
            created_at=created,
            updated_at=created,
        ))
    return orders

from datetime import datetime, timedelta, timezone

import pytest
from lulocart.cancellation import CancellationToken
from lulocart.config import set_config_for_test
from lulocart.errors import OrderSourceError
from lulocart.models import Order, OrderHistoryFilters, OrderItem, OrderStatus, OrderSummary
from lulocart.orders import (
    InMemoryOrderSource,
    OrderHistoryLoader,
    available_statuses,
    filter_orders,
    mock_orders,
)

NOW = datetime(2025, 3, 1, 12, 0, tzinfo=timezone.utc)

@pytest.fixture(autouse=True)
def clear_env(monkeypatch):
    monkeypatch.delenv("APP_ENV", raising=False)
    set_config_for_test(app_env="production")

def make_order(order_id, store_name, status, days_ago, total, products=("Tamal",)):
    created = NOW - timedelta(days=days_ago)
    return Order(
        id=order_id,
        user_id="user-1",
        store_id="store-1",
        store_name=store_name,
        status=status,
        items=[OrderItem(id=f"{order_id}-{i}", product_id=f"p{i}", product_name=name, price=5.0, quantity=1)
               for i, name in enumerate(products)],
        summary=OrderSummary(total=total),
        created_at=created,
        updated_at=created,
    )

@pytest.fixture
def orders():
    return [
        make_order("ord-a", "La Cocina", "delivered", 3, 25.00, ("Tamal", "Horchata")),
        make_order("ord-b", "Arepas Express", "pending", 1, 12.50, ("Arepa",)),
        make_order("ord-c", "La Cocina", "cancelled", 2, 40.10, ("Pupusa",)),
    ]

class BrokenSource:
    def __init__(self):
        self.calls = 0

    def get_orders_for_user(self, user_id):
        self.calls += 1
        raise OrderSourceError("firestore unavailable")

def test_load_sorts_newest_first(orders):
    result = OrderHistoryLoader(InMemoryOrderSource(orders)).load("user-1")
    assert result.error is None
    assert [o.id for o in result.orders] == ["ord-b", "ord-c", "ord-a"]

def test_load_only_returns_users_orders(orders):
    result = OrderHistoryLoader(InMemoryOrderSource(orders)).load("someone-else")
    assert result.orders == []
    assert not result.can_retry

def test_failure_offers_retry_without_mock_data():
    source = BrokenSource()
    loader = OrderHistoryLoader(source)
    result = loader.load("user-1")
    assert result.error
    assert result.can_retry
    assert result.orders == []
    assert not result.is_mock
    loader.load("user-1")
    assert source.calls == 2

def test_failure_in_development_substitutes_mock_orders():
    set_config_for_test(app_env="development")
    result = OrderHistoryLoader(BrokenSource()).load("user-1")
    assert result.can_retry
    assert result.is_mock
    assert result.orders
    assert all(o.user_id == "user-1" for o in result.orders)

def test_cancelled_token_drops_result(orders):
    token = CancellationToken()
    token.cancel()
    result = OrderHistoryLoader(InMemoryOrderSource(orders)).load("user-1", token)
    assert result.cancelled
    assert result.orders == []

def test_search_matches_store_id_and_products(orders):
    assert [o.id for o in filter_orders(orders, OrderHistoryFilters(search="cocina"))] == ["ord-c", "ord-a"]
    assert [o.id for o in filter_orders(orders, OrderHistoryFilters(search="ORD-B"))] == ["ord-b"]
    assert [o.id for o in filter_orders(orders, OrderHistoryFilters(search="horchata"))] == ["ord-a"]

def test_status_filter(orders):
    result = filter_orders(orders, OrderHistoryFilters(status=OrderStatus.CANCELLED))
    assert [o.id for o in result] == ["ord-c"]

def test_sort_by_amount_ascending(orders):
    result = filter_orders(orders, OrderHistoryFilters(sort_by="amount", sort_order="asc"))
    assert [o.id for o in result] == ["ord-b", "ord-a", "ord-c"]

def test_sort_by_status(orders):
    result = filter_orders(orders, OrderHistoryFilters(sort_by="status", sort_order="asc"))
    assert [o.status for o in result] == ["cancelled", "delivered", "pending"]

def test_filter_empty_list():
    assert filter_orders([], OrderHistoryFilters(search="x")) == []

def test_available_statuses(orders):
    assert available_statuses(orders) == [OrderStatus.CANCELLED, OrderStatus.DELIVERED, OrderStatus.PENDING]

def test_mock_orders_are_deterministic():
    first = [o.id for o in mock_orders("user-1")]
    second = [o.id for o in mock_orders("user-1")]
    assert first == second
    for order in mock_orders("user-1"):
        assert order.summary.item_count == sum(i.quantity for i in order.items)

class MalformedSource:
    def get_orders_for_user(self, user_id):
        return [Order.model_validate({"id": "ord-x"})]

def test_malformed_documents_offer_retry():
    result = OrderHistoryLoader(MalformedSource()).load("user-1")
    assert result.error
    assert result.can_retry
    assert result.orders == []

def test_load_sorts_mixed_naive_and_aware_timestamps(orders):
    naive = make_order("ord-n", "Mercado Latino", "pending", 0, 9.00)
    naive = naive.model_copy(update={"created_at": datetime(2025, 3, 2, 8, 0)})
    result = OrderHistoryLoader(InMemoryOrderSource(orders + [naive])).load("user-1")
    assert result.error is None
    assert [o.id for o in result.orders] == ["ord-n", "ord-b", "ord-c", "ord-a"]

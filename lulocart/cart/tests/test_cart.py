import json

import pytest
from lulocart.cart import Cart, InMemoryCartStorage, JsonFileCartStorage, StorageResult
from lulocart.config import set_config_for_test
from lulocart.models import PlatformFeeConfig, Product
from lulocart.pricing import TaxRates

CART_KEY = "lulo-cart"

@pytest.fixture(autouse=True)
def clear_env(monkeypatch):
    for var in ["APP_ENV", "CART_STORAGE_KEY", "PLATFORM_FEE_AMOUNT", "PLATFORM_FEE_ENABLED", "GST_RATE", "PST_RATE"]:
        monkeypatch.delenv(var, raising=False)
    set_config_for_test(platform_fee_enabled=True, platform_fee_amount=2.0, gst_rate=0.05, pst_rate=0.07)

@pytest.fixture
def storage():
    return InMemoryCartStorage()

@pytest.fixture
def cart(storage):
    return Cart(storage=storage)

@pytest.fixture
def empanada():
    return Product(id="prod-1", name="Empanada", price=15.99, store_id="store-123")

@pytest.fixture
def arepa():
    return Product(id="prod-2", name="Arepa", price=4.50, store_id="store-123")

class FailingStorage(InMemoryCartStorage):
    def save(self, key, value):
        return StorageResult(ok=False, error="quota exceeded")

def test_add_to_empty_cart_binds_store(cart, empanada):
    assert cart.can_add_to_cart("store-123")
    assert cart.add_item(empanada, 1, "store-123", "La Cocina")
    assert cart.store_id == "store-123"
    assert cart.store_name == "La Cocina"
    assert cart.summary.subtotal == 15.99
    assert cart.summary.tax == 1.92
    assert cart.summary.delivery_fee is None
    assert cart.summary.total == 19.91

def test_empty_cart_accepts_any_store(cart):
    assert cart.can_add_to_cart("store-123")
    assert cart.can_add_to_cart("store-999")

def test_other_store_is_rejected_before_mutation(cart, empanada):
    cart.add_item(empanada, 1, "store-123", "La Cocina")
    other = Product(id="prod-9", name="Taco", price=3.00, store_id="store-999")
    assert not cart.can_add_to_cart("store-999")
    assert not cart.add_item(other, 1)
    assert [i.product.id for i in cart.items] == ["prod-1"]
    assert cart.store_id == "store-123"

def test_same_product_increments_quantity(cart, empanada):
    cart.add_item(empanada, 1, "store-123", "La Cocina")
    cart.add_item(empanada, 2, "store-123", "La Cocina")
    assert len(cart.items) == 1
    assert cart.items[0].quantity == 3
    assert cart.summary.item_count == 3

def test_two_products_summary(cart, empanada, arepa):
    cart.add_item(empanada, 2, "store-123", "La Cocina")
    cart.add_item(arepa, 3, "store-123", "La Cocina")
    assert cart.summary.item_count == 5
    assert cart.summary.subtotal == 45.48

def test_store_falls_back_to_product(cart, arepa):
    assert cart.add_item(arepa)
    assert cart.store_id == "store-123"
    assert cart.store_name == "Store store-123"

def test_missing_store_is_ignored(cart):
    loose = Product(id="prod-x", name="Loose", price=1.00)
    assert not cart.add_item(loose)
    assert cart.is_empty

def test_update_quantity_to_zero_removes_item(cart, empanada, arepa):
    cart.add_item(empanada, 2, "store-123", "La Cocina")
    cart.add_item(arepa, 3, "store-123", "La Cocina")
    before = cart.summary.item_count
    item_id = cart.items[0].id
    cart.update_quantity(item_id, 0)
    assert item_id not in [i.id for i in cart.items]
    assert cart.summary.item_count == before - 2

def test_update_quantity_sets_value(cart, empanada):
    cart.add_item(empanada, 1, "store-123", "La Cocina")
    cart.update_quantity(cart.items[0].id, 4)
    assert cart.items[0].quantity == 4
    assert cart.summary.subtotal == 63.96

def test_update_unknown_item_is_noop(cart, empanada):
    cart.add_item(empanada, 1, "store-123", "La Cocina")
    before = cart.state
    cart.update_quantity("missing", 5)
    cart.remove_item("missing")
    assert cart.state == before

def test_removing_last_item_releases_store(cart, empanada):
    cart.add_item(empanada, 1, "store-123", "La Cocina")
    cart.remove_item(cart.items[0].id)
    assert cart.is_empty
    assert cart.store_id is None
    assert cart.can_add_to_cart("store-999")

def test_clear_resets_everything(cart, empanada):
    cart.add_item(empanada, 1, "store-123", "La Cocina")
    cart.set_delivery_fee(4.99)
    cart.clear()
    assert cart.items == []
    assert cart.store_id is None
    assert cart.store_name is None
    assert cart.summary.subtotal == 0
    assert cart.summary.tax == 0
    assert cart.summary.platform_fee == 0
    assert cart.summary.total == 0
    assert cart.summary.delivery_fee is None

def test_delivery_fee_enters_total_once_resolved(cart, empanada):
    cart.add_item(empanada, 1, "store-123", "La Cocina")
    without = cart.summary.total
    cart.set_delivery_fee(4.99)
    assert cart.summary.delivery_fee == 4.99
    assert cart.summary.total == pytest.approx(without + 4.99)

def test_disabled_platform_fee(storage, empanada):
    cart = Cart(storage=storage, platform_fee=PlatformFeeConfig(enabled=False, fixed_amount=2.0))
    cart.add_item(empanada, 1, "store-123", "La Cocina")
    assert cart.summary.platform_fee == 0

def test_every_mutation_writes_through(storage, cart, empanada):
    cart.add_item(empanada, 1, "store-123", "La Cocina")
    saved = json.loads(storage.load(CART_KEY))
    assert saved["storeId"] == "store-123"
    assert saved["storeName"] == "La Cocina"
    assert saved["items"][0]["priceAtTime"] == 15.99
    assert saved["summary"]["subtotal"] == 15.99

    cart.clear()
    saved = json.loads(storage.load(CART_KEY))
    assert saved["items"] == []
    assert saved["storeId"] is None

def test_restores_persisted_snapshot(storage, empanada):
    first = Cart(storage=storage)
    first.add_item(empanada, 2, "store-123", "La Cocina")
    restored = Cart(storage=storage)
    assert restored.store_id == "store-123"
    assert restored.items[0].quantity == 2
    assert restored.summary == first.summary

def test_summary_is_recomputed_on_load(empanada):
    storage = InMemoryCartStorage()
    Cart(storage=storage).add_item(empanada, 1, "store-123", "La Cocina")
    tampered = json.loads(storage.load(CART_KEY))
    tampered["summary"]["total"] = 0.01
    storage.save(CART_KEY, json.dumps(tampered))
    assert Cart(storage=storage).summary.total == 19.91

@pytest.mark.parametrize("raw", [
    "{not json",
    "[]",
    json.dumps({"items": [{"id": "x", "quantity": "many"}], "storeId": "s"}),
    json.dumps({"items": [{"id": "x", "product": {"id": "p", "name": "n", "price": 1}, "quantity": 1, "priceAtTime": 1}]}),
])
def test_corrupted_snapshot_yields_empty_cart(raw):
    cart = Cart(storage=InMemoryCartStorage({CART_KEY: raw}))
    assert cart.is_empty
    assert cart.store_id is None

def test_write_failure_keeps_cart_in_memory(empanada):
    cart = Cart(storage=FailingStorage())
    assert cart.add_item(empanada, 1, "store-123", "La Cocina")
    assert cart.summary.item_count == 1

def test_json_file_storage_round_trip(tmp_path, empanada):
    storage = JsonFileCartStorage(tmp_path / "carts")
    Cart(storage=storage).add_item(empanada, 1, "store-123", "La Cocina")
    assert (tmp_path / "carts" / f"{CART_KEY}.json").exists()
    assert Cart(storage=JsonFileCartStorage(tmp_path / "carts")).items[0].product.id == "prod-1"
    assert storage.delete(CART_KEY).ok
    assert storage.load(CART_KEY) is None

def test_custom_tax_rates(storage, empanada):
    cart = Cart(storage=storage, tax_rates=TaxRates(gst=0.05, pst=0.0))
    cart.add_item(empanada, 1, "store-123", "La Cocina")
    assert cart.summary.tax == 0.80

def test_undecodable_snapshot_file_yields_empty_cart(tmp_path):
    (tmp_path / f"{CART_KEY}.json").write_bytes(b"\xff\xfe{bad")
    cart = Cart(storage=JsonFileCartStorage(tmp_path))
    assert cart.is_empty
    assert cart.store_id is None

@pytest.mark.parametrize("fee", ["Infinity", "-Infinity", "NaN"])
def test_non_finite_snapshot_fee_yields_empty_cart(storage, empanada, fee):
    Cart(storage=storage).add_item(empanada, 1, "store-123", "La Cocina")
    raw = storage.load(CART_KEY).replace('"deliveryFee":null', f'"deliveryFee":{fee}')
    assert fee in raw
    storage.save(CART_KEY, raw)
    cart = Cart(storage=storage)
    assert cart.is_empty
    assert cart.summary.total == 0

@pytest.mark.parametrize("fee", [float("inf"), float("nan")])
def test_non_finite_delivery_fee_is_ignored(cart, empanada, fee):
    cart.add_item(empanada, 1, "store-123", "La Cocina")
    cart.set_delivery_fee(fee)
    assert cart.summary.delivery_fee is None
    assert cart.summary.total == 19.91
    cart.set_delivery_fee(3.99)
    assert cart.summary.delivery_fee == 3.99

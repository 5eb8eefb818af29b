from .aggregate import Cart
from .storage import CartStorage, InMemoryCartStorage, JsonFileCartStorage, StorageResult

__all__ = [
    "Cart",
    "CartStorage",
    "InMemoryCartStorage",
    "JsonFileCartStorage",
    "StorageResult",
]

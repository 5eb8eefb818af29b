from .product import Product
from .cart import CartLineItem, CartSummary, CartState
from .order import (
    OrderStatus,
    OrderItem,
    CustomerInfo,
    DeliveryAddress,
    OrderSummary,
    Order,
)
from .discount import DiscountConfig, DeliveryFeeDiscount
from .fees import (
    PlatformFeeConfig,
    DistanceTier,
    DeliveryFeeConfig,
    TierBreakdown,
    FeeCalculationResult,
    DeliveryDistanceCheck,
    Coordinates,
    DEFAULT_TIERS,
    UNLIMITED_DISTANCE,
)
from .receipt import ReceiptResponse, ReceiptState
from .filters import OrderHistoryFilters

__all__ = [
    # Catalog
    "Product",
    # Cart
    "CartLineItem",
    "CartSummary",
    "CartState",
    # Orders
    "OrderStatus",
    "OrderItem",
    "CustomerInfo",
    "DeliveryAddress",
    "OrderSummary",
    "Order",
    # Discounts and fees
    "DiscountConfig",
    "DeliveryFeeDiscount",
    "PlatformFeeConfig",
    "DistanceTier",
    "DeliveryFeeConfig",
    "TierBreakdown",
    "FeeCalculationResult",
    "DeliveryDistanceCheck",
    "Coordinates",
    "DEFAULT_TIERS",
    "UNLIMITED_DISTANCE",
    # Receipts
    "ReceiptResponse",
    "ReceiptState",
    # Filters
    "OrderHistoryFilters",
]

"""Composition root: builds the services a shopper session uses."""
from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict

from .cart import Cart, CartStorage, JsonFileCartStorage
from .config import get_config, get_environment_info, missing_production_settings
from .logging import get_logger
from .models import PlatformFeeConfig
from .orders import OrderHistoryLoader, OrderSource
from .receipts import ReceiptApiClient, ReceiptManager


class MarketplaceServices(BaseModel):
    """Services one shopper session works with."""
    model_config = ConfigDict(arbitrary_types_allowed=True)

    cart: Cart
    order_history: OrderHistoryLoader
    receipts: ReceiptManager


def create_services(
    order_source: OrderSource,
    cart_storage: Optional[CartStorage] = None,
    platform_fee: Optional[PlatformFeeConfig] = None,
    receipt_client: Optional[ReceiptApiClient] = None,
) -> MarketplaceServices:
    """Wire the cart, order history and receipt services for one session.

    Missing production endpoints are logged, never raised; the services fall
    back to the default endpoints.
    """
    config = get_config()
    logger = get_logger(__name__)
    logger.debug(f"API configuration: {get_environment_info(config)}")
    missing_production_settings(config)

    return MarketplaceServices(
        cart=Cart(storage=cart_storage if cart_storage is not None else JsonFileCartStorage(), platform_fee=platform_fee),
        order_history=OrderHistoryLoader(order_source),
        receipts=ReceiptManager(client=receipt_client or ReceiptApiClient()),
    )

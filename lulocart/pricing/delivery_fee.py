"""Distance-based delivery fees."""
from __future__ import annotations

import math
from typing import Optional

from ..config import get_config
from ..models import (
    Coordinates,
    DeliveryDistanceCheck,
    DeliveryFeeConfig,
    FeeCalculationResult,
    TierBreakdown,
    UNLIMITED_DISTANCE,
)

EARTH_RADIUS_KM = 6371


def default_delivery_fee_config() -> DeliveryFeeConfig:
    """Delivery fee config seeded from AppConfig, with the default tiers."""
    config = get_config()
    return DeliveryFeeConfig(
        base_fee=config.delivery_base_fee,
        min_fee=config.delivery_min_fee,
        max_fee=config.delivery_max_fee,
        max_delivery_distance=config.max_delivery_distance_km,
        discount_percentage=config.discount_percentage,
        discount_eligible_orders=config.discount_eligible_orders,
    )


def calculate_delivery_fee(distance: float, config: Optional[DeliveryFeeConfig] = None) -> FeeCalculationResult:
    """Fee for a delivery of ``distance`` km.

    Each tier charges its per-km rate for the part of the distance that falls
    inside it. The base fee is added and the sum is clamped to [min_fee, max_fee].
    """
    config = config or default_delivery_fee_config()
    distance_fee = 0.0
    breakdown = []

    for tier in sorted(config.tiers, key=lambda t: t.from_km):
        if distance <= tier.from_km:
            continue
        tier_end = distance if tier.to_km >= UNLIMITED_DISTANCE else min(tier.to_km, distance)
        km_in_tier = max(0.0, tier_end - tier.from_km)
        if km_in_tier > 0:
            fee = km_in_tier * tier.rate_per_km
            distance_fee += fee
            breakdown.append(TierBreakdown(tier=tier, km_in_tier=km_in_tier, fee=fee))

    total_fee = config.base_fee + distance_fee
    capped_at = None
    if total_fee < config.min_fee:
        total_fee = config.min_fee
        capped_at = "min"
    elif total_fee > config.max_fee:
        total_fee = config.max_fee
        capped_at = "max"

    return FeeCalculationResult(
        total_fee=total_fee,
        base_fee=config.base_fee,
        distance_fee=distance_fee,
        distance=distance,
        tier_breakdown=breakdown,
        capped_at=capped_at,
    )


def haversine_distance(a: Coordinates, b: Coordinates) -> float:
    """Great-circle distance in km."""
    d_lat = math.radians(b.lat - a.lat)
    d_lng = math.radians(b.lng - a.lng)
    h = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(a.lat)) * math.cos(math.radians(b.lat)) * math.sin(d_lng / 2) ** 2
    )
    return EARTH_RADIUS_KM * 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))


def check_delivery_distance(distance: float, max_distance: Optional[float] = None) -> DeliveryDistanceCheck:
    if max_distance is None:
        max_distance = get_config().max_delivery_distance_km
    is_supported = distance <= max_distance
    reason = None
    if not is_supported:
        reason = (
            f"Delivery is not available for distances over {max_distance:g} km. "
            f"Your location is {distance:.1f} km away."
        )
    return DeliveryDistanceCheck(
        is_supported=is_supported,
        distance=distance,
        max_distance=max_distance,
        reason=reason,
    )

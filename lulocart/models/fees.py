from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, Field

UNLIMITED_DISTANCE = 9999


class PlatformFeeConfig(BaseModel):
    """Platform fee configuration document."""
    enabled: bool = Field(default=True, description="Whether the platform fee is charged")
    fixed_amount: float = Field(default=2.00, ge=0, description="Fee charged per order in CAD")

    @property
    def fee(self) -> float:
        return self.fixed_amount if self.enabled else 0.0


class DistanceTier(BaseModel):
    """Per-km rate applied between two distances."""
    from_km: float = Field(ge=0, description="Tier start in km")
    to_km: float = Field(description=f"Tier end in km, {UNLIMITED_DISTANCE} for unlimited")
    rate_per_km: float = Field(ge=0, description="CAD charged per km within the tier")


DEFAULT_TIERS: List[DistanceTier] = [
    DistanceTier(from_km=0, to_km=15, rate_per_km=0.00),
    DistanceTier(from_km=15, to_km=25, rate_per_km=0.10),
    DistanceTier(from_km=25, to_km=30, rate_per_km=0.20),
    DistanceTier(from_km=30, to_km=35, rate_per_km=0.30),
    DistanceTier(from_km=35, to_km=40, rate_per_km=0.40),
    DistanceTier(from_km=40, to_km=45, rate_per_km=0.50),
    DistanceTier(from_km=45, to_km=50, rate_per_km=0.60),
    DistanceTier(from_km=50, to_km=55, rate_per_km=0.70),
    DistanceTier(from_km=55, to_km=70, rate_per_km=1.00),
]


class DeliveryFeeConfig(BaseModel):
    """Delivery fee configuration document."""
    enabled: bool = Field(default=True, description="Dynamic distance-based fees enabled")
    base_fee: float = Field(default=2.00, description="Fee charged before distance tiers")
    min_fee: float = Field(default=2.00, description="Lower clamp for the total fee")
    max_fee: float = Field(default=20.00, description="Upper clamp for the total fee")
    tiers: List[DistanceTier] = Field(default_factory=lambda: list(DEFAULT_TIERS), description="Distance tiers")
    max_delivery_distance: float = Field(default=60, description="Maximum supported delivery distance in km")
    discount_percentage: float = Field(default=0.20, description="New customer discount as a decimal")
    discount_eligible_orders: int = Field(default=3, description="Orders that receive the new customer discount")


class TierBreakdown(BaseModel):
    tier: DistanceTier
    km_in_tier: float
    fee: float


class FeeCalculationResult(BaseModel):
    """Breakdown of a calculated delivery fee."""
    total_fee: float = Field(description="Fee after min/max clamping")
    base_fee: float = Field(description="Base fee component")
    distance_fee: float = Field(description="Sum of tier fees")
    distance: float = Field(description="Distance in km")
    tier_breakdown: List[TierBreakdown] = Field(default_factory=list, description="Per-tier contribution")
    capped_at: Optional[Literal["min", "max"]] = Field(default=None, description="Which clamp applied, if any")


class DeliveryDistanceCheck(BaseModel):
    """Whether a delivery distance is supported."""
    is_supported: bool
    distance: float
    max_distance: float
    reason: Optional[str] = None


class Coordinates(BaseModel):
    lat: float
    lng: float

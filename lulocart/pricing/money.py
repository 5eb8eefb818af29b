from __future__ import annotations

import math
from decimal import Decimal, ROUND_HALF_UP
from typing import Any

CENT = Decimal("0.01")


def round_money(value: float) -> float:
    """Round to cents, half away from zero, as prices are shown to shoppers."""
    return float(Decimal(repr(float(value))).quantize(CENT, rounding=ROUND_HALF_UP))


def is_finite_number(value: Any) -> bool:
    """True for real, finite numbers. Booleans and numeric strings are rejected."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)


def format_price(amount: float) -> str:
    return f"CAD ${round_money(amount):.2f}"

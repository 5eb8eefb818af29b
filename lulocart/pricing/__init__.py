from .calculator import TaxRates, calculate_summary, line_total, with_delivery_fee
from .discount import calculate_delivery_discount
from .delivery_fee import (
    calculate_delivery_fee,
    check_delivery_distance,
    default_delivery_fee_config,
    haversine_distance,
)
from .money import format_price, is_finite_number, round_money

__all__ = [
    "TaxRates",
    "calculate_summary",
    "line_total",
    "with_delivery_fee",
    "calculate_delivery_discount",
    "calculate_delivery_fee",
    "check_delivery_distance",
    "default_delivery_fee_config",
    "haversine_distance",
    "format_price",
    "is_finite_number",
    "round_money",
]

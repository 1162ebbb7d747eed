"""Fixed-point conversions between raw token amounts and decimal strings."""

from swapquote.math.price_ratio import (
    PriceRatio,
    RatioPrecision,
    multiply_prices,
    price_ratio,
    price_ratio_exact,
)
from swapquote.math.units import format_amount, parse_amount

__all__ = [
    "PriceRatio",
    "RatioPrecision",
    "format_amount",
    "multiply_prices",
    "parse_amount",
    "price_ratio",
    "price_ratio_exact",
]

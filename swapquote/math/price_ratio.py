"""Price ratios between pool reserves.

A price is (numerator_reserve / denominator_reserve) scaled by the
difference in token decimals, truncated to six fractional digits.

The ratio is computed first on a 28-digit working decimal. Reserves near
the uint112 ceiling can push the scaled ratio past that precision; those
inputs are recomputed by exact integer long division instead. Both paths
truncate at the same digit, so they render identically wherever both apply.
The path taken is reported on the result.
"""

from __future__ import annotations

import decimal
from dataclasses import dataclass
from decimal import ROUND_DOWN, Decimal
from enum import Enum

import structlog

from swapquote.constants import PRICE_DECIMALS, PRICE_SCALE_DIGITS, WORKING_PRECISION_DIGITS

logger = structlog.get_logger()

# Working precision of the primary path
WORKING_CONTEXT = decimal.Context(
    prec=WORKING_PRECISION_DIGITS,
    traps=[decimal.InvalidOperation, decimal.Overflow, decimal.DivisionByZero],
)

# 78 digits of precision, enough for uint256 values (up to ~10^77)
DECIMAL_HIGH_PREC_CONTEXT = decimal.Context(prec=78)

_QUANTUM = Decimal(1).scaleb(-PRICE_DECIMALS)


class RatioPrecision(Enum):
    """Which computation produced a PriceRatio."""

    WORKING_PRECISION = "working_precision"
    INTEGER_FALLBACK = "integer_fallback"


@dataclass(frozen=True)
class PriceRatio:
    """A rendered price and the path that computed it."""

    value: str
    precision: RatioPrecision

    @property
    def used_fallback(self) -> bool:
        return self.precision is RatioPrecision.INTEGER_FALLBACK

    def __str__(self) -> str:
        return self.value


def _render(whole: int, frac: int) -> str:
    """Render with trailing zeros trimmed but at least one fractional digit."""
    digits = str(frac).zfill(PRICE_DECIMALS).rstrip("0") or "0"
    return f"{whole}.{digits}"


def price_ratio(
    numerator_reserve: int,
    denominator_reserve: int,
    numerator_decimals: int,
    denominator_decimals: int,
) -> PriceRatio:
    """Compute a price from two reserves.

    Args:
        numerator_reserve: Raw reserve of the quote side
        denominator_reserve: Raw reserve of the priced side
        numerator_decimals: Decimal count applied as 10^(num - den)
        denominator_decimals: See numerator_decimals

    Returns:
        PriceRatio tagged with the path that produced it. A zero
        denominator yields "0" rather than an error.

    Example:
        ETH priced in USDC from a USDC/WETH pool:
        price_ratio(usdc_reserve, weth_reserve, 18, 6)
    """
    if denominator_reserve == 0:
        return PriceRatio("0", RatioPrecision.WORKING_PRECISION)

    # A positive decimal shift moves fractional digits into the whole part,
    # so the scale must cover the shift plus the six rendered digits.
    scale_diff = numerator_decimals - denominator_decimals
    scale_digits = max(PRICE_SCALE_DIGITS, PRICE_DECIMALS + scale_diff)
    ratio_scaled = numerator_reserve * 10**scale_digits // denominator_reserve
    if len(str(ratio_scaled)) > WORKING_PRECISION_DIGITS:
        return _fallback(
            numerator_reserve, denominator_reserve, numerator_decimals, denominator_decimals
        )

    try:
        with decimal.localcontext(WORKING_CONTEXT):
            price = Decimal(ratio_scaled).scaleb(scale_diff - scale_digits)
            truncated = price.quantize(_QUANTUM, rounding=ROUND_DOWN)
    except decimal.InvalidOperation:
        return _fallback(
            numerator_reserve, denominator_reserve, numerator_decimals, denominator_decimals
        )

    whole = int(truncated)
    frac = int((truncated - whole).scaleb(PRICE_DECIMALS))
    return PriceRatio(_render(whole, frac), RatioPrecision.WORKING_PRECISION)


def _fallback(
    numerator_reserve: int,
    denominator_reserve: int,
    numerator_decimals: int,
    denominator_decimals: int,
) -> PriceRatio:
    logger.debug(
        "price_ratio_fallback",
        numerator_reserve=numerator_reserve,
        denominator_reserve=denominator_reserve,
    )
    value = price_ratio_exact(
        numerator_reserve, denominator_reserve, numerator_decimals, denominator_decimals
    )
    return PriceRatio(value, RatioPrecision.INTEGER_FALLBACK)


def price_ratio_exact(
    numerator_reserve: int,
    denominator_reserve: int,
    numerator_decimals: int,
    denominator_decimals: int,
) -> str:
    """Compute a price by integer long division to six fractional digits.

    Exact for any reserve size. Used directly when the working decimal
    cannot hold the ratio.
    """
    if denominator_reserve == 0:
        return "0"

    scale_diff = numerator_decimals - denominator_decimals
    num, den = numerator_reserve, denominator_reserve
    if scale_diff >= 0:
        num *= 10**scale_diff
    else:
        den *= 10**-scale_diff

    whole, remainder = divmod(num, den)
    frac = remainder * 10**PRICE_DECIMALS // den
    return _render(whole, frac)


def multiply_prices(price_a: str, price_b: str) -> str:
    """Multiply two decimal price strings.

    Returns:
        Product with exactly six fractional digits (truncated)

    Raises:
        ValueError: If either input is not a decimal number
    """
    try:
        with decimal.localcontext(DECIMAL_HIGH_PREC_CONTEXT):
            product = Decimal(price_a) * Decimal(price_b)
            return f"{product.quantize(_QUANTUM, rounding=ROUND_DOWN):f}"
    except decimal.InvalidOperation as e:
        raise ValueError(f"Cannot multiply prices {price_a!r} and {price_b!r}") from e


__all__ = [
    "DECIMAL_HIGH_PREC_CONTEXT",
    "PriceRatio",
    "RatioPrecision",
    "multiply_prices",
    "price_ratio",
    "price_ratio_exact",
]

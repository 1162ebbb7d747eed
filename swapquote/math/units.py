"""Conversion between raw token amounts and human decimal strings.

All arithmetic is on Python ints; nothing passes through float or a
fixed-precision decimal, so 78-digit uint256 values convert exactly.
"""

from __future__ import annotations

import re

from swapquote.errors import InvalidAmount, NegativeAmount, PrecisionExceeded
from swapquote.models.types import UINT256_MAX

_AMOUNT_RE = re.compile(r"^\+?(?P<whole>[0-9]*)(?:\.(?P<frac>[0-9]*))?$")


def format_amount(amount: int, decimals: int) -> str:
    """Format a raw amount in token units.

    Trailing fractional zeros are dropped, and the decimal point with
    them when the fraction is zero.

    Examples:
        format_amount(1_500_000_000_000_000_000, 18) == "1.5"
        format_amount(1_000_000, 6) == "1"
        format_amount(1, 18) == "0.000000000000000001"
    """
    if amount < 0:
        raise InvalidAmount(f"Cannot format negative amount: {amount}")
    if decimals == 0:
        return str(amount)

    whole, frac = divmod(amount, 10**decimals)
    if frac == 0:
        return str(whole)
    return f"{whole}.{str(frac).zfill(decimals).rstrip('0')}"


def parse_amount(text: str, decimals: int) -> int:
    """Parse a decimal string in token units into a raw amount.

    Args:
        text: Plain decimal notation, e.g. "1.5", "100", ".25"
        decimals: Token decimal count

    Returns:
        Raw integer amount (text * 10^decimals)

    Raises:
        NegativeAmount: If text is negative
        PrecisionExceeded: If text has more significant fractional digits
            than decimals
        InvalidAmount: If text is not a decimal number, or the result does
            not fit in uint256
    """
    stripped = text.strip()
    if stripped.startswith("-"):
        raise NegativeAmount(text)

    match = _AMOUNT_RE.match(stripped)
    if match is None or not (match["whole"] or match["frac"]):
        raise InvalidAmount(f"Cannot parse amount {text!r}")

    whole = match["whole"] or "0"
    frac = (match["frac"] or "").rstrip("0")
    if len(frac) > decimals:
        raise PrecisionExceeded(text, decimals)

    amount = int(whole + frac.ljust(decimals, "0"))
    if amount > UINT256_MAX:
        raise InvalidAmount(f"Amount {text!r} exceeds uint256 at {decimals} decimals")
    return amount


__all__ = ["format_amount", "parse_amount"]

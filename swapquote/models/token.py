"""Token descriptor model."""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

from swapquote.constants import ETH_DECIMALS, WETH
from swapquote.models.types import normalize_address

UNKNOWN_SYMBOL = "UNKNOWN"
UNKNOWN_NAME = "Unknown Token"
DEFAULT_DECIMALS = 18


class TokenDescriptor(BaseModel):
    """An ERC20 token as seen by the quoting engine.

    Addresses are stored lowercase. Decimals are limited to a single byte,
    the range an ERC20 `decimals()` call can return.
    """

    model_config = {"frozen": True}

    symbol: str
    name: str
    address: str = Field(pattern=r"^0x[a-f0-9]{40}$")
    decimals: int = Field(ge=0, le=255)

    @field_validator("address", mode="before")
    @classmethod
    def _lowercase_address(cls, value: object) -> object:
        if isinstance(value, str):
            return normalize_address(value)
        return value

    @property
    def is_unknown(self) -> bool:
        """True if metadata was never resolved for this token."""
        return self.symbol == UNKNOWN_SYMBOL

    @classmethod
    def unknown(cls, address: str) -> TokenDescriptor:
        """Placeholder descriptor for an address with no known metadata."""
        return cls(
            symbol=UNKNOWN_SYMBOL,
            name=UNKNOWN_NAME,
            address=address,
            decimals=DEFAULT_DECIMALS,
        )

    @classmethod
    def eth(cls) -> TokenDescriptor:
        """Native ether, priced and routed through WETH."""
        return cls(symbol="ETH", name="Ether", address=WETH, decimals=ETH_DECIMALS)


__all__ = ["DEFAULT_DECIMALS", "UNKNOWN_NAME", "UNKNOWN_SYMBOL", "TokenDescriptor"]

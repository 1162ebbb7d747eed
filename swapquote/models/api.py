"""Request and response models for the HTTP API.

Amounts cross the wire as strings: raw integer amounts as decimal strings,
human amounts as decimal notation in token units.
"""

from typing import Literal

from pydantic import BaseModel, Field, field_validator

from swapquote.models.token import TokenDescriptor
from swapquote.models.types import Address, Uint256


class BalanceRequest(BaseModel):
    """Balance lookup for a wallet, optionally for one ERC20 token."""

    address: Address
    token: str | None = Field(
        default=None,
        description="Token symbol or address; omit for the native ETH balance",
    )


class BalanceResponse(BaseModel):
    """Wallet balance in raw units and formatted token units."""

    address: str
    token: TokenDescriptor
    balance: Uint256
    decimals: int
    formatted_balance: str


class PriceRequest(BaseModel):
    """Spot price lookup for a token."""

    token: str
    quote_currency: Literal["USD", "ETH"] = "USD"

    @field_validator("quote_currency", mode="before")
    @classmethod
    def _uppercase_currency(cls, value: object) -> object:
        if isinstance(value, str):
            return value.upper()
        return value


class PriceResponse(BaseModel):
    """Spot price of a token derived from Uniswap V2 reserves."""

    token: TokenDescriptor
    price: str
    quote_currency: str
    source: str
    pool_address: str | None = None
    liquidity: str | None = None


class SwapRequest(BaseModel):
    """Swap simulation request.

    `amount` is in token units of `from_token` (e.g. "1.5").
    """

    from_token: str
    to_token: str
    amount: str
    slippage_bps: int | None = Field(default=None, ge=0)
    wallet_address: Address | None = None


class SwapRoute(BaseModel):
    """Route taken by a simulated swap."""

    protocol: str
    path: list[str]
    pools: list[str]


class SwapResponse(BaseModel):
    """Quote and eth_call simulation outcome for a swap."""

    from_token: TokenDescriptor
    to_token: TokenDescriptor
    input_amount: str
    estimated_output: str
    minimum_output: str
    price_impact: str
    route: SwapRoute
    simulation_success: bool
    gas_estimate: str | None = None
    revert_reason: str | None = None


__all__ = [
    "BalanceRequest",
    "BalanceResponse",
    "PriceRequest",
    "PriceResponse",
    "SwapRequest",
    "SwapResponse",
    "SwapRoute",
]

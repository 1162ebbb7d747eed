"""Value types shared by the reserve layer, the AMM math and the simulator."""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal

from swapquote.models.types import address_to_bytes


@dataclass(frozen=True)
class ReservePair:
    """Reserves of a pool as stored on chain.

    reserve0 belongs to the token with the lower address.
    """

    reserve0: int
    reserve1: int

    def oriented(self, token_in: str, token_out: str) -> tuple[int, int]:
        """Reserves ordered as (reserve_in, reserve_out) for a swap direction."""
        if address_to_bytes(token_in) < address_to_bytes(token_out):
            return self.reserve0, self.reserve1
        return self.reserve1, self.reserve0


@dataclass(frozen=True)
class HopReserves:
    """One hop of a swap path with reserves oriented for its direction."""

    pair_address: str
    token_in: str
    token_out: str
    reserve_in: int
    reserve_out: int


@dataclass
class SwapQuote:
    """Result of quoting a swap against live reserves."""

    path: list[str]
    # [amount_in, hop1_out, hop2_out, ...]
    amounts: list[int]
    hops: list[HopReserves]
    # Percent of the first hop's input reserve, two decimal places
    price_impact: Decimal

    @property
    def amount_in(self) -> int:
        return self.amounts[0]

    @property
    def amount_out(self) -> int:
        return self.amounts[-1]

    @property
    def pair_addresses(self) -> list[str]:
        return [hop.pair_address for hop in self.hops]


@dataclass
class SwapSimulation:
    """Outcome of dispatching a router swap through eth_call."""

    quote: SwapQuote
    simulation_success: bool
    gas_estimate: int | None = None
    revert_reason: str | None = None
    calldata: bytes = field(default=b"", repr=False)

"""UniswapV2 AMM implementation.

UniswapV2 uses the constant product formula: x * y = k
With a 0.3% fee on input amounts.

All arithmetic goes through SafeInt so that it truncates and overflows
exactly where the pair contract would.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import ClassVar

from swapquote.amm.base import HopReserves, ReservePair
from swapquote.codec import encode_dynamic_array_call
from swapquote.constants import (
    BPS_DENOMINATOR,
    DEADLINE_SENTINEL,
    SWAP_EXACT_TOKENS_SELECTOR,
    UNISWAP_V2_ROUTER,
    WETH,
)
from swapquote.errors import InsufficientLiquidity, InvalidAddress, InvalidAmount
from swapquote.models.types import is_valid_address, normalize_address
from swapquote.safe_int import S, SafeIntError


@dataclass
class UniswapV2Pool:
    """A UniswapV2 pair with its tokens in on-chain order."""

    address: str
    token0: str
    token1: str
    reserve0: int
    reserve1: int

    @classmethod
    def from_reserves(
        cls, address: str, token_a: str, token_b: str, reserves: ReservePair
    ) -> UniswapV2Pool:
        """Build a pool from two tokens in any order and its raw reserves."""
        # Lowercase hex sorts in the same order as the raw address bytes
        token0, token1 = sorted((normalize_address(token_a), normalize_address(token_b)))
        return cls(
            address=address,
            token0=token0,
            token1=token1,
            reserve0=reserves.reserve0,
            reserve1=reserves.reserve1,
        )

    def get_reserves(self, token_in: str) -> tuple[int, int]:
        """Get reserves ordered as (reserve_in, reserve_out)."""
        token_in_norm = normalize_address(token_in)
        if token_in_norm == self.token0:
            return self.reserve0, self.reserve1
        elif token_in_norm == self.token1:
            return self.reserve1, self.reserve0
        else:
            raise ValueError(f"Token {token_in} not in pool")


class UniswapV2:
    """UniswapV2 AMM math and router encoding.

    Formula: amount_out = (amount_in * 997 * reserve_out) / (reserve_in * 1000 + amount_in * 997)

    The 997/1000 factor accounts for the 0.3% fee.
    """

    # Mainnet deployment (lowercase for consistency)
    ROUTER_ADDRESS: ClassVar[str] = UNISWAP_V2_ROUTER

    FEE_NUMERATOR: ClassVar[int] = 997
    FEE_DENOMINATOR: ClassVar[int] = 1000

    def get_amount_out(self, amount_in: int, reserve_in: int, reserve_out: int) -> int:
        """Calculate output amount using the constant product formula.

        Operation order matches UniswapV2Library.getAmountOut, so results are
        identical to the on-chain value.

        Args:
            amount_in: Input token amount
            reserve_in: Reserve of input token in pool
            reserve_out: Reserve of output token in pool

        Returns:
            Output token amount

        Raises:
            InvalidAmount: If amount_in is zero or an intermediate overflows uint256
            InsufficientLiquidity: If either reserve is zero
        """
        if amount_in == 0:
            raise InvalidAmount("Swap amount must be greater than zero")
        if reserve_in == 0 or reserve_out == 0:
            raise InsufficientLiquidity()

        try:
            amount_in_with_fee = S(amount_in) * self.FEE_NUMERATOR
            numerator = amount_in_with_fee * S(reserve_out)
            denominator = S(reserve_in) * self.FEE_DENOMINATOR + amount_in_with_fee
            return (numerator // denominator).value
        except SafeIntError as e:
            raise InvalidAmount(f"Swap math overflow: {e}") from e

    def price_impact(self, amount_in: int, reserve_in: int) -> Decimal:
        """Price impact of a trade as a percentage of the input reserve.

        Computed as (amount_in * 10000) // reserve_in in basis points, then
        expressed as a percent with two decimals. Trades below one basis
        point report 0.

        Raises:
            InsufficientLiquidity: If reserve_in is zero
            InvalidAmount: If amount_in * 10000 overflows uint256
        """
        if reserve_in == 0:
            raise InsufficientLiquidity()
        try:
            impact_bps = (S(amount_in) * BPS_DENOMINATOR // S(reserve_in)).value
        except SafeIntError as e:
            raise InvalidAmount(f"Price impact overflow: {e}") from e
        return Decimal(impact_bps).scaleb(-2)

    def get_amounts_out(self, amount_in: int, hops: list[HopReserves]) -> list[int]:
        """Chain get_amount_out across hops.

        Returns:
            [amount_in, out_1, ..., out_n], one entry per token on the path
        """
        amounts = [amount_in]
        for hop in hops:
            amounts.append(self.get_amount_out(amounts[-1], hop.reserve_in, hop.reserve_out))
        return amounts

    def build_path(self, token_in: str, token_out: str, base_token: str = WETH) -> list[str]:
        """Choose the swap path between two tokens.

        Swaps touching the base token go direct; everything else routes
        through it. No other pools are searched.
        """
        token_in = normalize_address(token_in)
        token_out = normalize_address(token_out)
        base = normalize_address(base_token)
        if base in (token_in, token_out):
            return [token_in, token_out]
        return [token_in, base, token_out]

    def encode_swap(
        self,
        amount_in: int,
        amount_out_min: int,
        path: list[str],
        recipient: str,
        deadline: int = DEADLINE_SENTINEL,
    ) -> bytes:
        """Encode swapExactTokensForTokens calldata for the router.

        Uses swapExactTokensForTokens(uint256,uint256,address[],address,uint256)

        Args:
            amount_in: Amount of input token
            amount_out_min: Minimum output (slippage protection)
            path: Token path, input first
            recipient: Address to receive output tokens
            deadline: Unix deadline; defaults to the max uint256 sentinel

        Raises:
            InvalidAddress: If any address is invalid
        """
        for addr in [*path, recipient]:
            if not is_valid_address(addr):
                raise InvalidAddress(addr)

        return encode_dynamic_array_call(
            SWAP_EXACT_TOKENS_SELECTOR,
            [amount_in, amount_out_min, list(path), recipient, deadline],
        )


# Singleton instance
uniswap_v2 = UniswapV2()


__all__ = ["UniswapV2", "UniswapV2Pool", "uniswap_v2"]

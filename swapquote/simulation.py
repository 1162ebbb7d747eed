"""Swap quoting and router simulation.

A simulation quotes the swap against live reserves, encodes the router's
swapExactTokensForTokens call and dispatches it with eth_call. Nothing is
signed or broadcast.
"""

from __future__ import annotations

import structlog

from swapquote.amm.base import SwapQuote, SwapSimulation
from swapquote.amm.reserves import ReserveReader
from swapquote.amm.uniswap_v2 import UniswapV2, uniswap_v2
from swapquote.chain.client import ChainClient
from swapquote.constants import DEADLINE_SENTINEL, WETH
from swapquote.errors import InvalidAmount, MissingSimulationAddress, TransportFailure

logger = structlog.get_logger()

# (marker, reason) pairs checked in order; first match wins
REVERT_PATTERNS: tuple[tuple[str, str], ...] = (
    ("TRANSFER_FROM_FAILED", "Token transfer failed (check allowance)"),
    ("EXPIRED", "Transaction deadline expired"),
    ("insufficient", "Insufficient liquidity or balance"),
)


def classify_revert_reason(message: str) -> str:
    """Map a node error message to a readable revert reason.

    Known router failures get a fixed description. Any other message,
    including a generic "execution reverted: ...", is returned as is.
    """
    lowered = message.lower()
    for marker, reason in REVERT_PATTERNS:
        if marker.lower() in lowered:
            return reason
    return message


class SwapSimulator:
    """Quotes swaps and simulates them through the Uniswap V2 router."""

    def __init__(
        self,
        chain: ChainClient,
        reader: ReserveReader | None = None,
        amm: UniswapV2 = uniswap_v2,
        base_token: str = WETH,
    ):
        self.chain = chain
        self.reader = reader or ReserveReader(chain)
        self.amm = amm
        self.base_token = base_token

    async def quote(self, token_in: str, token_out: str, amount_in: int) -> SwapQuote:
        """Quote a swap along the default path.

        Every hop's pool is resolved and read once, in path order.

        Raises:
            InvalidAmount: If amount_in is zero (checked before any call)
            PairNotFound, InsufficientLiquidity: If any hop is unusable
            TransportFailure, MalformedReturn: On chain read failures
        """
        if amount_in <= 0:
            raise InvalidAmount("Swap amount must be greater than zero")

        path = self.amm.build_path(token_in, token_out, self.base_token)
        logger.debug("quote_path_resolved", path=path, amount_in=amount_in)

        hops = await self.reader.fetch_path_reserves(path)
        amounts = self.amm.get_amounts_out(amount_in, hops)
        impact = self.amm.price_impact(amount_in, hops[0].reserve_in)

        logger.info(
            "swap_quoted",
            token_in=path[0],
            token_out=path[-1],
            hops=len(hops),
            amount_in=amount_in,
            amount_out=amounts[-1],
            price_impact=str(impact),
        )
        return SwapQuote(path=path, amounts=amounts, hops=hops, price_impact=impact)

    async def simulate(
        self,
        token_in: str,
        token_out: str,
        amount_in: int,
        amount_out_min: int,
        from_address: str | None,
        quote: SwapQuote | None = None,
    ) -> SwapSimulation:
        """Simulate a router swap with eth_call.

        Args:
            token_in: Input token address
            token_out: Output token address
            amount_in: Raw input amount
            amount_out_min: Minimum output passed to the router
            from_address: Sender and recipient of the simulated swap
            quote: A quote for the same swap, to skip re-reading the pools

        Returns:
            SwapSimulation. A revert is a result, not an error:
            simulation_success is False and revert_reason is set.

        Raises:
            MissingSimulationAddress: If from_address is empty
            Any quote error (see quote)
        """
        if not from_address:
            raise MissingSimulationAddress()

        if quote is None:
            quote = await self.quote(token_in, token_out, amount_in)

        router = self.amm.ROUTER_ADDRESS
        calldata = self.amm.encode_swap(
            amount_in, amount_out_min, quote.path, from_address, DEADLINE_SENTINEL
        )

        try:
            await self.chain.call(router, calldata, from_address=from_address)
        except TransportFailure as e:
            reason = classify_revert_reason(e.message)
            logger.info("swap_simulation_reverted", path=quote.path, reason=reason)
            return SwapSimulation(
                quote=quote,
                simulation_success=False,
                revert_reason=reason,
                calldata=calldata,
            )

        gas_estimate: int | None
        try:
            gas_estimate = await self.chain.estimate_gas(
                router, calldata, from_address=from_address
            )
        except TransportFailure as e:
            logger.warning("gas_estimation_failed", path=quote.path, error=e.message)
            gas_estimate = None

        logger.info("swap_simulation_succeeded", path=quote.path, gas_estimate=gas_estimate)
        return SwapSimulation(
            quote=quote,
            simulation_success=True,
            gas_estimate=gas_estimate,
            calldata=calldata,
        )


__all__ = ["REVERT_PATTERNS", "SwapSimulator", "classify_revert_reason"]

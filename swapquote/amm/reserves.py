"""Pool discovery and reserve reads against the Uniswap V2 factory."""

from __future__ import annotations

import structlog

from swapquote.amm.base import HopReserves, ReservePair
from swapquote.chain.client import ChainClient
from swapquote.codec import decode_address, decode_words, encode_call
from swapquote.constants import GET_PAIR_SELECTOR, GET_RESERVES_SELECTOR, UNISWAP_V2_FACTORY
from swapquote.errors import InsufficientLiquidity, InvalidPath, PairNotFound
from swapquote.models.types import is_zero_address

logger = structlog.get_logger()


class ReserveReader:
    """Resolves pairs and reads their reserves.

    Every call goes to the node; pair addresses and reserves are never
    cached between calls.
    """

    def __init__(self, chain: ChainClient, factory_address: str = UNISWAP_V2_FACTORY):
        self.chain = chain
        self.factory_address = factory_address

    async def resolve_pair(self, token_a: str, token_b: str) -> str:
        """Look up the pair address for two tokens.

        Raises:
            PairNotFound: If the factory returns the zero address
            MalformedReturn: If the return is not a single 32-byte word
            TransportFailure: If the call fails
        """
        data = encode_call(GET_PAIR_SELECTOR, [token_a, token_b])
        result = await self.chain.call(self.factory_address, data)
        pair = decode_address(result, context="getPair")
        if is_zero_address(pair):
            raise PairNotFound(token_a, token_b)
        return pair

    async def fetch_reserves(self, pair: str) -> ReservePair:
        """Read (reserve0, reserve1) from a pair.

        The trailing blockTimestampLast word is ignored.

        Raises:
            InsufficientLiquidity: If either reserve is zero
            MalformedReturn: If fewer than 64 bytes are returned
            TransportFailure: If the call fails
        """
        result = await self.chain.call(pair, GET_RESERVES_SELECTOR)
        reserve0, reserve1 = decode_words(result, 2, context="getReserves")
        if reserve0 == 0 or reserve1 == 0:
            raise InsufficientLiquidity(pair)
        logger.debug("reserves_fetched", pair=pair, reserve0=reserve0, reserve1=reserve1)
        return ReservePair(reserve0, reserve1)

    async def fetch_path_reserves(self, path: list[str]) -> list[HopReserves]:
        """Resolve every hop of a path, one after another.

        Returns:
            One HopReserves per consecutive token pair, oriented for the
            swap direction

        Raises:
            InvalidPath: If the path has fewer than two tokens
            PairNotFound, InsufficientLiquidity: If any hop is unusable
        """
        if len(path) < 2:
            raise InvalidPath(path)

        hops = []
        for token_in, token_out in zip(path, path[1:]):
            pair = await self.resolve_pair(token_in, token_out)
            reserves = await self.fetch_reserves(pair)
            reserve_in, reserve_out = reserves.oriented(token_in, token_out)
            hops.append(
                HopReserves(
                    pair_address=pair,
                    token_in=token_in,
                    token_out=token_out,
                    reserve_in=reserve_in,
                    reserve_out=reserve_out,
                )
            )
        return hops


__all__ = ["ReserveReader"]

"""Tests for pair discovery and reserve reads."""

import pytest

from swapquote.amm.reserves import ReserveReader
from swapquote.codec import encode_call
from swapquote.constants import GET_PAIR_SELECTOR, GET_RESERVES_SELECTOR, ZERO_ADDRESS
from swapquote.errors import (
    InsufficientLiquidity,
    InvalidPath,
    MalformedReturn,
    PairNotFound,
    TransportFailure,
)
from tests.helpers import (
    DAI,
    DAI_WETH_PAIR,
    DAI_WETH_RESERVES,
    FACTORY,
    PEPE,
    USDC,
    USDC_WETH_PAIR,
    USDC_WETH_RESERVES,
    WETH,
    FakeChainClient,
    address_word,
    word,
)


class TestResolvePair:
    """Tests for factory getPair lookups."""

    @pytest.mark.asyncio
    async def test_resolves_pair(self, chain: FakeChainClient):
        reader = ReserveReader(chain)
        assert await reader.resolve_pair(USDC, WETH) == USDC_WETH_PAIR

    @pytest.mark.asyncio
    async def test_either_token_order(self, chain: FakeChainClient):
        reader = ReserveReader(chain)
        assert await reader.resolve_pair(WETH, USDC) == USDC_WETH_PAIR

    @pytest.mark.asyncio
    async def test_calls_factory_with_encoded_tokens(self, chain: FakeChainClient):
        reader = ReserveReader(chain)
        await reader.resolve_pair(DAI, WETH)

        [recorded] = chain.calls_to(FACTORY, GET_PAIR_SELECTOR)
        assert recorded.data == encode_call(GET_PAIR_SELECTOR, [DAI, WETH])

    @pytest.mark.asyncio
    async def test_zero_address_is_pair_not_found(self, chain: FakeChainClient):
        chain.script(
            FACTORY,
            encode_call(GET_PAIR_SELECTOR, [PEPE, WETH]),
            address_word(ZERO_ADDRESS),
        )
        reader = ReserveReader(chain)

        with pytest.raises(PairNotFound) as exc_info:
            await reader.resolve_pair(PEPE, WETH)
        assert exc_info.value.token_a == PEPE

    @pytest.mark.asyncio
    async def test_short_return_is_malformed(self, chain: FakeChainClient):
        chain.script(FACTORY, encode_call(GET_PAIR_SELECTOR, [PEPE, WETH]), b"\x00" * 20)
        reader = ReserveReader(chain)

        with pytest.raises(MalformedReturn):
            await reader.resolve_pair(PEPE, WETH)

    @pytest.mark.asyncio
    async def test_transport_failure_propagates(self, chain: FakeChainClient):
        reader = ReserveReader(chain)
        with pytest.raises(TransportFailure):
            await reader.resolve_pair(PEPE, USDC)


class TestFetchReserves:
    """Tests for getReserves reads."""

    @pytest.mark.asyncio
    async def test_reads_reserves(self, chain: FakeChainClient):
        reader = ReserveReader(chain)
        reserves = await reader.fetch_reserves(USDC_WETH_PAIR)

        assert (reserves.reserve0, reserves.reserve1) == USDC_WETH_RESERVES

    @pytest.mark.asyncio
    async def test_ignores_timestamp_word(self):
        chain = FakeChainClient()
        chain.script(USDC_WETH_PAIR, GET_RESERVES_SELECTOR, word(5) + word(7))
        reader = ReserveReader(chain)

        reserves = await reader.fetch_reserves(USDC_WETH_PAIR)
        assert (reserves.reserve0, reserves.reserve1) == (5, 7)

    @pytest.mark.asyncio
    async def test_short_return_is_malformed(self):
        chain = FakeChainClient()
        chain.script(USDC_WETH_PAIR, GET_RESERVES_SELECTOR, word(5))
        reader = ReserveReader(chain)

        with pytest.raises(MalformedReturn):
            await reader.fetch_reserves(USDC_WETH_PAIR)

    @pytest.mark.asyncio
    @pytest.mark.parametrize(("reserve0", "reserve1"), [(0, 10), (10, 0)])
    async def test_zero_reserve_is_insufficient_liquidity(self, reserve0, reserve1):
        chain = FakeChainClient()
        chain.script(USDC_WETH_PAIR, GET_RESERVES_SELECTOR, word(reserve0) + word(reserve1))
        reader = ReserveReader(chain)

        with pytest.raises(InsufficientLiquidity) as exc_info:
            await reader.fetch_reserves(USDC_WETH_PAIR)
        assert exc_info.value.pair == USDC_WETH_PAIR

    @pytest.mark.asyncio
    async def test_reads_every_time(self, chain: FakeChainClient):
        """Reserves are never cached between reads."""
        reader = ReserveReader(chain)
        await reader.fetch_reserves(USDC_WETH_PAIR)
        await reader.fetch_reserves(USDC_WETH_PAIR)

        assert len(chain.calls_to(USDC_WETH_PAIR, GET_RESERVES_SELECTOR)) == 2


class TestFetchPathReserves:
    """Tests for resolving a whole swap path."""

    @pytest.mark.asyncio
    async def test_single_hop_oriented(self, chain: FakeChainClient):
        reader = ReserveReader(chain)
        [hop] = await reader.fetch_path_reserves([WETH, USDC])

        # WETH is token1 of the USDC/WETH pair
        assert hop.pair_address == USDC_WETH_PAIR
        assert hop.reserve_in == USDC_WETH_RESERVES[1]
        assert hop.reserve_out == USDC_WETH_RESERVES[0]

    @pytest.mark.asyncio
    async def test_two_hops_in_order(self, chain: FakeChainClient):
        reader = ReserveReader(chain)
        hops = await reader.fetch_path_reserves([DAI, WETH, USDC])

        assert [h.pair_address for h in hops] == [DAI_WETH_PAIR, USDC_WETH_PAIR]
        assert (hops[0].reserve_in, hops[0].reserve_out) == DAI_WETH_RESERVES
        assert (hops[1].reserve_in, hops[1].reserve_out) == (
            USDC_WETH_RESERVES[1],
            USDC_WETH_RESERVES[0],
        )
        assert [c.to for c in chain.calls] == [
            FACTORY,
            DAI_WETH_PAIR,
            FACTORY,
            USDC_WETH_PAIR,
        ]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("path", [[], [WETH]])
    async def test_short_path(self, chain: FakeChainClient, path):
        reader = ReserveReader(chain)
        with pytest.raises(InvalidPath):
            await reader.fetch_path_reserves(path)
        assert chain.calls == []

    @pytest.mark.asyncio
    async def test_missing_second_hop(self, chain: FakeChainClient):
        chain.script(
            FACTORY,
            encode_call(GET_PAIR_SELECTOR, [WETH, PEPE]),
            address_word(ZERO_ADDRESS),
        )
        reader = ReserveReader(chain)

        with pytest.raises(PairNotFound):
            await reader.fetch_path_reserves([DAI, WETH, PEPE])

"""Tests for the web3-backed chain client."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from eth_utils import to_checksum_address

from swapquote.chain.client import Web3ChainClient, check_chain_id
from swapquote.errors import TransportFailure
from tests.helpers import USDC_WETH_PAIR, WALLET, FakeChainClient


async def _resolved(value):
    return value


def make_client() -> tuple[Web3ChainClient, MagicMock]:
    client = Web3ChainClient("http://localhost:8545")
    eth = MagicMock()
    client.w3 = MagicMock(eth=eth)
    return client, eth


class TestWeb3ChainClient:
    """Tests for request shaping and error mapping."""

    @pytest.mark.asyncio
    async def test_call_returns_bytes(self):
        client, eth = make_client()
        eth.call = AsyncMock(return_value=b"\x00" * 31 + b"\x01")

        result = await client.call(USDC_WETH_PAIR, bytes.fromhex("0902f1ac"))

        assert result == b"\x00" * 31 + b"\x01"
        [tx] = eth.call.await_args.args
        assert tx["to"] == to_checksum_address(USDC_WETH_PAIR)
        assert tx["data"] == "0x0902f1ac"
        assert "from" not in tx

    @pytest.mark.asyncio
    async def test_call_sets_sender(self):
        client, eth = make_client()
        eth.call = AsyncMock(return_value=b"")

        await client.call(USDC_WETH_PAIR, b"\x01\x02\x03\x04", from_address=WALLET)

        [tx] = eth.call.await_args.args
        assert tx["from"] == to_checksum_address(WALLET)

    @pytest.mark.asyncio
    async def test_call_error_is_transport_failure(self):
        client, eth = make_client()
        eth.call = AsyncMock(side_effect=ValueError("execution reverted: UniswapV2: EXPIRED"))

        with pytest.raises(TransportFailure) as exc_info:
            await client.call(USDC_WETH_PAIR, b"\x01\x02\x03\x04")

        assert exc_info.value.operation == "eth_call"
        assert exc_info.value.target == USDC_WETH_PAIR
        assert "EXPIRED" in exc_info.value.message

    @pytest.mark.asyncio
    async def test_estimate_gas(self):
        client, eth = make_client()
        eth.estimate_gas = AsyncMock(return_value=123_456)

        assert await client.estimate_gas(USDC_WETH_PAIR, b"\x01\x02\x03\x04", WALLET) == 123_456

    @pytest.mark.asyncio
    async def test_estimate_gas_error(self):
        client, eth = make_client()
        eth.estimate_gas = AsyncMock(side_effect=ConnectionError("connection refused"))

        with pytest.raises(TransportFailure) as exc_info:
            await client.estimate_gas(USDC_WETH_PAIR, b"\x01\x02\x03\x04", WALLET)
        assert exc_info.value.operation == "eth_estimateGas"

    @pytest.mark.asyncio
    async def test_get_balance(self):
        client, eth = make_client()
        eth.get_balance = AsyncMock(return_value=5 * 10**18)

        assert await client.get_balance(WALLET) == 5 * 10**18
        eth.get_balance.assert_awaited_once_with(to_checksum_address(WALLET))

    @pytest.mark.asyncio
    async def test_get_balance_error(self):
        client, eth = make_client()
        eth.get_balance = AsyncMock(side_effect=TimeoutError())

        with pytest.raises(TransportFailure) as exc_info:
            await client.get_balance(WALLET)
        assert exc_info.value.operation == "eth_getBalance"

    @pytest.mark.asyncio
    async def test_chain_id(self):
        client, eth = make_client()
        eth.chain_id = _resolved(1)

        assert await client.chain_id() == 1


class TestCheckChainId:
    """Tests for the startup chain id check."""

    @pytest.mark.asyncio
    async def test_match(self):
        assert await check_chain_id(FakeChainClient(chain_id_value=1), 1) == 1

    @pytest.mark.asyncio
    async def test_mismatch_is_not_fatal(self):
        assert await check_chain_id(FakeChainClient(chain_id_value=5), 1) == 5

    @pytest.mark.asyncio
    async def test_unreachable_node(self):
        chain = FakeChainClient()
        chain.chain_id = AsyncMock(side_effect=TransportFailure("eth_chainId", "timeout"))

        assert await check_chain_id(chain, 1) is None

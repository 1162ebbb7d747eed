"""Pytest configuration and fixtures."""

import pytest

from swapquote.config import Settings
from swapquote.registry import TokenRegistry
from swapquote.service import TradingService
from tests.helpers import (
    DAI,
    DAI_WETH_PAIR,
    DAI_WETH_RESERVES,
    UNI,
    UNI_WETH_PAIR,
    UNI_WETH_RESERVES,
    USDC,
    USDC_WETH_PAIR,
    USDC_WETH_RESERVES,
    WETH,
    FakeChainClient,
)


@pytest.fixture
def chain() -> FakeChainClient:
    """Fake chain with USDC/WETH, DAI/WETH and UNI/WETH pools."""
    fake = FakeChainClient()
    fake.add_pair(USDC, WETH, USDC_WETH_PAIR, *USDC_WETH_RESERVES)
    fake.add_pair(DAI, WETH, DAI_WETH_PAIR, *DAI_WETH_RESERVES)
    fake.add_pair(UNI, WETH, UNI_WETH_PAIR, *UNI_WETH_RESERVES)
    return fake


@pytest.fixture
def settings() -> Settings:
    """Settings for a live (non test-mode) service."""
    return Settings(rpc_url="http://localhost:8545")


@pytest.fixture
def service(settings: Settings, chain: FakeChainClient) -> TradingService:
    """Trading service backed by the fake chain."""
    return TradingService(settings, chain=chain, registry=TokenRegistry())


@pytest.fixture
def offline_service() -> TradingService:
    """Trading service in test mode, with no chain client."""
    return TradingService(Settings(test_mode=True))

"""Test helpers module for shared test utilities.

- constants: Token, pair and wallet addresses
- fake_chain: Scripted chain client and return-data builders
"""

from tests.helpers.constants import (
    DAI,
    DAI_WETH_PAIR,
    DAI_WETH_RESERVES,
    FACTORY,
    PEPE,
    ROUTER,
    TOKEN_DECIMALS,
    UNI,
    UNI_WETH_PAIR,
    UNI_WETH_RESERVES,
    USDC,
    USDC_WETH_PAIR,
    USDC_WETH_RESERVES,
    USDT,
    WALLET,
    WBTC,
    WETH,
)
from tests.helpers.fake_chain import FakeChainClient, address_word, string_return, word

__all__ = [
    # Constants
    "WETH",
    "USDC",
    "DAI",
    "USDT",
    "WBTC",
    "UNI",
    "PEPE",
    "USDC_WETH_PAIR",
    "DAI_WETH_PAIR",
    "UNI_WETH_PAIR",
    "USDC_WETH_RESERVES",
    "DAI_WETH_RESERVES",
    "UNI_WETH_RESERVES",
    "FACTORY",
    "ROUTER",
    "WALLET",
    "TOKEN_DECIMALS",
    # Fake chain
    "FakeChainClient",
    "address_word",
    "string_return",
    "word",
]

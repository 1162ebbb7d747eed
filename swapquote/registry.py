"""Token registry: resolves symbols and addresses to token descriptors."""

from __future__ import annotations

from typing import Protocol

import structlog

from swapquote.constants import DAI, UNI, USDC, USDT, WBTC, WETH
from swapquote.models.token import TokenDescriptor
from swapquote.models.types import is_valid_address, normalize_address

logger = structlog.get_logger()


class TokenResolver(Protocol):
    """Protocol for symbol/address resolution.

    Resolution is synchronous and in-memory; metadata backfill from the
    chain is the caller's job.
    """

    def resolve(self, symbol_or_address: str) -> TokenDescriptor | None:
        """Find a token by symbol (case-insensitive) or address.

        Returns:
            The descriptor; an UNKNOWN placeholder for a well-formed address
            that is not registered; None for an unknown symbol
        """
        ...

    def register(self, token: TokenDescriptor) -> None:
        """Add or replace a token, keyed by its symbol and its address."""
        ...

    def remember(self, token: TokenDescriptor) -> None:
        """Cache a token discovered on chain.

        Always keyed by address. The symbol key is added only when no other
        token holds it, so a contract cannot claim a well-known symbol.
        """
        ...


def default_mainnet_tokens() -> list[TokenDescriptor]:
    """Well-known mainnet tokens, in registration order."""
    return [
        TokenDescriptor(symbol="WETH", name="Wrapped Ether", address=WETH, decimals=18),
        TokenDescriptor.eth(),
        TokenDescriptor(symbol="USDC", name="USD Coin", address=USDC, decimals=6),
        TokenDescriptor(symbol="USDT", name="Tether USD", address=USDT, decimals=6),
        TokenDescriptor(symbol="DAI", name="Dai Stablecoin", address=DAI, decimals=18),
        TokenDescriptor(symbol="WBTC", name="Wrapped BTC", address=WBTC, decimals=8),
        TokenDescriptor(symbol="UNI", name="Uniswap", address=UNI, decimals=18),
    ]


class TokenRegistry:
    """In-memory token registry.

    Symbols are matched case-insensitively. When two symbols share an
    address (ETH and WETH), lookups by address return the first one
    registered unless a later register() call replaces it.
    """

    def __init__(self, tokens: list[TokenDescriptor] | None = None):
        self._by_symbol: dict[str, TokenDescriptor] = {}
        self._by_address: dict[str, TokenDescriptor] = {}
        for token in default_mainnet_tokens() if tokens is None else tokens:
            self._by_symbol[token.symbol.upper()] = token
            self._by_address.setdefault(token.address, token)

    def resolve(self, symbol_or_address: str) -> TokenDescriptor | None:
        query = symbol_or_address.strip()
        if is_valid_address(query):
            address = normalize_address(query)
            token = self._by_address.get(address)
            return token if token is not None else TokenDescriptor.unknown(address)
        return self._by_symbol.get(query.upper())

    def register(self, token: TokenDescriptor) -> None:
        self._by_symbol[token.symbol.upper()] = token
        self._by_address[token.address] = token
        logger.debug("token_registered", symbol=token.symbol, address=token.address)

    def remember(self, token: TokenDescriptor) -> None:
        self._by_address[token.address] = token
        if token.is_unknown:
            return
        claimed = self._by_symbol.setdefault(token.symbol.upper(), token)
        if claimed.address != token.address:
            logger.warning(
                "token_symbol_taken",
                symbol=token.symbol,
                address=token.address,
                registered_address=claimed.address,
            )

    def contains(self, symbol: str) -> bool:
        return symbol.strip().upper() in self._by_symbol

    def all_tokens(self) -> list[TokenDescriptor]:
        return list(self._by_symbol.values())


__all__ = ["TokenRegistry", "TokenResolver", "default_mainnet_tokens"]

"""ERC20 metadata and balance reads."""

from __future__ import annotations

import asyncio

import structlog

from swapquote.chain.client import ChainClient
from swapquote.codec import decode_scalar, decode_small_uint, decode_string, encode_call
from swapquote.constants import (
    BALANCE_OF_SELECTOR,
    DECIMALS_SELECTOR,
    NAME_SELECTOR,
    SYMBOL_SELECTOR,
)
from swapquote.errors import SwapQuoteError
from swapquote.models.token import DEFAULT_DECIMALS, UNKNOWN_NAME, UNKNOWN_SYMBOL, TokenDescriptor
from swapquote.models.types import normalize_address

logger = structlog.get_logger()


class TokenReader:
    """Reads ERC20 state through a ChainClient."""

    def __init__(self, chain: ChainClient):
        self.chain = chain

    async def balance_of(self, token: str, owner: str) -> int:
        data = encode_call(BALANCE_OF_SELECTOR, [owner])
        return decode_scalar(await self.chain.call(token, data), context="balanceOf")

    async def symbol(self, token: str) -> str:
        return decode_string(await self.chain.call(token, SYMBOL_SELECTOR), context="symbol")

    async def name(self, token: str) -> str:
        return decode_string(await self.chain.call(token, NAME_SELECTOR), context="name")

    async def decimals(self, token: str) -> int:
        return decode_small_uint(await self.chain.call(token, DECIMALS_SELECTOR), context="decimals")

    async def token_info(self, token: str) -> TokenDescriptor:
        """Fetch symbol, name and decimals concurrently.

        Each field that fails to read or decode falls back to its default
        (UNKNOWN, "Unknown Token", 18). Errors outside the engine's own
        hierarchy propagate.
        """
        address = normalize_address(token, validate=True)
        symbol, name, decimals = await asyncio.gather(
            self.symbol(address),
            self.name(address),
            self.decimals(address),
            return_exceptions=True,
        )

        fields: dict[str, object] = {}
        for field, value, default in (
            ("symbol", symbol, UNKNOWN_SYMBOL),
            ("name", name, UNKNOWN_NAME),
            ("decimals", decimals, DEFAULT_DECIMALS),
        ):
            if isinstance(value, SwapQuoteError):
                logger.warning("token_metadata_default", token=address, field=field, error=str(value))
                value = default
            elif isinstance(value, BaseException):
                raise value
            fields[field] = value

        return TokenDescriptor(address=address, **fields)  # type: ignore[arg-type]


__all__ = ["TokenReader"]

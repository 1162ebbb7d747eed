"""Chain clients for eth_call, gas estimation and balance queries."""

from __future__ import annotations

from typing import Any, Protocol

import structlog
from web3 import AsyncWeb3

from swapquote.errors import TransportFailure

logger = structlog.get_logger()


class ChainClient(Protocol):
    """Protocol for read-only chain access.

    This allows swapping between the RPC-backed client and scripted
    clients in tests. Every method raises TransportFailure when the node
    call fails; for `call` and `estimate_gas` that includes reverts.
    """

    async def call(self, to: str, data: bytes, from_address: str | None = None) -> bytes:
        """Execute eth_call against the latest block and return the raw result."""
        ...

    async def estimate_gas(self, to: str, data: bytes, from_address: str | None = None) -> int:
        """Estimate gas for a transaction."""
        ...

    async def get_balance(self, address: str) -> int:
        """Native balance in wei."""
        ...

    async def chain_id(self) -> int:
        """Chain id reported by the node."""
        ...


class Web3ChainClient:
    """Chain client over an HTTP JSON-RPC endpoint.

    Uses web3's async provider; the node is the only source of truth and
    nothing is cached.
    """

    def __init__(self, rpc_url: str):
        """Initialize client with an RPC endpoint.

        Args:
            rpc_url: HTTP RPC URL (e.g., "https://eth.llamarpc.com")
        """
        self.rpc_url = rpc_url
        self.w3 = AsyncWeb3(AsyncWeb3.AsyncHTTPProvider(rpc_url))

    def _tx(self, to: str, data: bytes, from_address: str | None) -> dict[str, Any]:
        tx: dict[str, Any] = {
            "to": AsyncWeb3.to_checksum_address(to),
            "data": AsyncWeb3.to_hex(data),
        }
        if from_address is not None:
            tx["from"] = AsyncWeb3.to_checksum_address(from_address)
        return tx

    async def call(self, to: str, data: bytes, from_address: str | None = None) -> bytes:
        try:
            tx = self._tx(to, data, from_address)
            result = await self.w3.eth.call(tx)  # type: ignore[arg-type]
        except Exception as e:
            logger.debug("eth_call_failed", to=to, selector=data[:4].hex(), error=str(e))
            raise TransportFailure("eth_call", str(e), target=to) from e
        return bytes(result)

    async def estimate_gas(self, to: str, data: bytes, from_address: str | None = None) -> int:
        try:
            return int(await self.w3.eth.estimate_gas(self._tx(to, data, from_address)))  # type: ignore[arg-type]
        except Exception as e:
            raise TransportFailure("eth_estimateGas", str(e), target=to) from e

    async def get_balance(self, address: str) -> int:
        try:
            return int(await self.w3.eth.get_balance(AsyncWeb3.to_checksum_address(address)))
        except Exception as e:
            raise TransportFailure("eth_getBalance", str(e), target=address) from e

    async def chain_id(self) -> int:
        try:
            return int(await self.w3.eth.chain_id)
        except Exception as e:
            raise TransportFailure("eth_chainId", str(e)) from e


async def check_chain_id(client: ChainClient, expected: int) -> int | None:
    """Compare the node's chain id with the configured one.

    A mismatch or an unreachable node is logged, never raised: the
    service still starts and individual requests surface the failure.

    Returns:
        The node's chain id, or None if it could not be read
    """
    try:
        actual = await client.chain_id()
    except TransportFailure as e:
        logger.warning("chain_id_check_failed", expected=expected, error=str(e))
        return None

    if actual != expected:
        logger.warning("chain_id_mismatch", expected=expected, actual=actual)
    else:
        logger.info("chain_connected", chain_id=actual)
    return actual


__all__ = ["ChainClient", "Web3ChainClient", "check_chain_id"]

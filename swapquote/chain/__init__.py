"""Read-only access to an Ethereum JSON-RPC node."""

from swapquote.chain.client import ChainClient, Web3ChainClient
from swapquote.chain.erc20 import TokenReader

__all__ = ["ChainClient", "TokenReader", "Web3ChainClient"]

"""On-chain Uniswap V2 quoting and swap simulation."""

__version__ = "0.1.0"

from swapquote.amm.base import SwapQuote, SwapSimulation
from swapquote.simulation import SwapSimulator

__all__ = ["SwapQuote", "SwapSimulation", "SwapSimulator", "__version__"]

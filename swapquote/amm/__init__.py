"""Uniswap V2 reserve reads and constant-product math."""

from swapquote.amm.base import HopReserves, ReservePair, SwapQuote, SwapSimulation
from swapquote.amm.reserves import ReserveReader
from swapquote.amm.uniswap_v2 import UniswapV2, UniswapV2Pool, uniswap_v2

__all__ = [
    "HopReserves",
    "ReservePair",
    "ReserveReader",
    "SwapQuote",
    "SwapSimulation",
    "UniswapV2",
    "UniswapV2Pool",
    "uniswap_v2",
]

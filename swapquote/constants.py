"""Chain constants for the quoting engine.

Centralizes well-known mainnet addresses and function selectors.
"""

from swapquote.models.types import UINT256_MAX, is_valid_address


def _validate_address(name: str, address: str) -> str:
    """Validate and return a lowercase address.

    Raises:
        ValueError: If the address is invalid
    """
    if not is_valid_address(address):
        raise ValueError(f"Invalid {name} address: {address} (must be 0x + 40 hex chars)")
    return address.lower()


# Uniswap V2 core contracts (mainnet)
UNISWAP_V2_FACTORY = _validate_address("factory", "0x5C69bEe701ef814a2B6a3EDD4B1652CB9cc5aA6f")
UNISWAP_V2_ROUTER = _validate_address("router", "0x7a250d5630B4cF539739dF2C5dAcb4c659F2488D")

# Well-known token addresses on mainnet (lowercase for consistency)
WETH = _validate_address("WETH", "0xC02aaA39b223FE8D0A0e5C4F27eAD9083C756Cc2")
USDC = _validate_address("USDC", "0xA0b86991c6218b36c1d19D4a2e9Eb0cE3606eB48")
USDT = _validate_address("USDT", "0xdAC17F958D2ee523a2206206994597C13D831ec7")
DAI = _validate_address("DAI", "0x6B175474E89094C44Da98b954EedeAC495271d0F")
WBTC = _validate_address("WBTC", "0x2260FAC5E5542a773Aa44fBCfeDf7C193bc2C599")
UNI = _validate_address("UNI", "0x1f9840a85d5aF5bf1D1762F925BDADdC4201F984")

ZERO_ADDRESS = "0x" + "00" * 20

# Sender used for eth_call simulations when the caller gives no wallet
DEFAULT_SIMULATION_ADDRESS = _validate_address(
    "simulation", "0xd8dA6BF26964aF9D7eEd9e03E53415D37aA96045"
)

# Function selectors (first 4 bytes of keccak256 of the signature)
GET_PAIR_SELECTOR = bytes.fromhex("e6a43905")  # getPair(address,address)
GET_RESERVES_SELECTOR = bytes.fromhex("0902f1ac")  # getReserves()
SWAP_EXACT_TOKENS_SELECTOR = bytes.fromhex("38ed1739")  # swapExactTokensForTokens
BALANCE_OF_SELECTOR = bytes.fromhex("70a08231")  # balanceOf(address)
SYMBOL_SELECTOR = bytes.fromhex("95d89b41")  # symbol()
NAME_SELECTOR = bytes.fromhex("06fdde03")  # name()
DECIMALS_SELECTOR = bytes.fromhex("313ce567")  # decimals()

# Router deadline for simulations: 32 bytes of 0xff
DEADLINE_SENTINEL = UINT256_MAX

# Minimum fractional digits carried by a scaled price ratio
PRICE_SCALE_DIGITS = 18

# Digits carried by the working decimal type
WORKING_PRECISION_DIGITS = 28

# Fractional digits in price strings
PRICE_DECIMALS = 6

# Basis point denominator for slippage and price impact
BPS_DENOMINATOR = 10_000

ETH_DECIMALS = 18
USDC_DECIMALS = 6

# Chain ids the service is known to work against
KNOWN_CHAIN_IDS = frozenset({1, 5, 11155111})

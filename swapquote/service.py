"""Trading operations: balance lookup, spot price, swap simulation.

TradingService ties the registry, the token reader, the reserve reader and
the simulator together and shapes their results into API responses.
"""

from __future__ import annotations

import structlog

from swapquote.amm.reserves import ReserveReader
from swapquote.amm.uniswap_v2 import UniswapV2Pool
from swapquote.chain.client import ChainClient, Web3ChainClient
from swapquote.chain.erc20 import TokenReader
from swapquote.config import Settings
from swapquote.constants import (
    BPS_DENOMINATOR,
    ETH_DECIMALS,
    USDC,
    USDC_DECIMALS,
    WETH,
    ZERO_ADDRESS,
)
from swapquote.errors import InvalidAddress, InvalidAmount, ProviderUnavailable, UnknownToken
from swapquote.math.price_ratio import multiply_prices, price_ratio
from swapquote.math.units import format_amount, parse_amount
from swapquote.models.api import (
    BalanceResponse,
    PriceResponse,
    SwapRequest,
    SwapResponse,
    SwapRoute,
)
from swapquote.models.token import TokenDescriptor
from swapquote.models.types import is_valid_address, normalize_address
from swapquote.registry import TokenRegistry, TokenResolver
from swapquote.simulation import SwapSimulator

logger = structlog.get_logger()

PROTOCOL_NAME = "Uniswap V2"


class TradingService:
    """Entry point for the three trading operations.

    In test mode every operation returns a fixed response and the chain is
    never touched.
    """

    def __init__(
        self,
        settings: Settings,
        chain: ChainClient | None = None,
        registry: TokenResolver | None = None,
    ):
        self.settings = settings
        self.chain = chain
        self.registry = registry if registry is not None else TokenRegistry()
        self.tokens: TokenReader | None = None
        self.reserves: ReserveReader | None = None
        self.simulator: SwapSimulator | None = None
        if chain is not None:
            self.tokens = TokenReader(chain)
            self.reserves = ReserveReader(chain)
            self.simulator = SwapSimulator(chain, reader=self.reserves)

    @classmethod
    def from_settings(cls, settings: Settings) -> TradingService:
        """Build a service with an RPC-backed chain client (none in test mode)."""
        if settings.test_mode:
            logger.info("test_mode_enabled")
            return cls(settings)
        logger.info("using_rpc", rpc_url=settings.masked_rpc_url, chain_id=settings.chain_id)
        return cls(settings, chain=Web3ChainClient(settings.rpc_url))

    def _require_chain(self) -> ChainClient:
        if self.chain is None:
            raise ProviderUnavailable("No chain client configured; set ETHEREUM_RPC_URL")
        return self.chain

    def _readers(self) -> tuple[TokenReader, ReserveReader, SwapSimulator]:
        if self.tokens is None or self.reserves is None or self.simulator is None:
            raise ProviderUnavailable("No chain client configured; set ETHEREUM_RPC_URL")
        return self.tokens, self.reserves, self.simulator

    async def resolve_token(self, query: str) -> TokenDescriptor:
        """Resolve a symbol or address, backfilling unknown addresses from chain.

        Raises:
            UnknownToken: If a symbol is not registered
        """
        token = self.registry.resolve(query)
        if token is None:
            raise UnknownToken(query)
        if token.is_unknown and self.tokens is not None:
            token = await self.tokens.token_info(token.address)
            self.registry.remember(token)
            logger.info("token_metadata_backfilled", symbol=token.symbol, address=token.address)
        return token

    def _canned_token(self, query: str, symbol: str, name: str) -> TokenDescriptor:
        if is_valid_address(query):
            address = normalize_address(query)
        else:
            known = self.registry.resolve(query)
            address = known.address if known is not None else ZERO_ADDRESS
        return TokenDescriptor(symbol=symbol, name=name, address=address, decimals=18)

    # --- Balance ---

    async def get_balance(self, address: str, token: str | None = None) -> BalanceResponse:
        """Native ETH balance, or an ERC20 balance when token is given."""
        if not is_valid_address(address.strip()):
            raise InvalidAddress(address)
        wallet = normalize_address(address)
        logger.info("balance_requested", address=wallet, token=token)

        if self.settings.test_mode:
            descriptor = (
                self._canned_token(token, "TEST", "Test Token") if token else TokenDescriptor.eth()
            )
            return BalanceResponse(
                address=wallet,
                token=descriptor,
                balance=str(100 * 10**18),
                decimals=18,
                formatted_balance="100",
            )

        chain = self._require_chain()
        if token is None:
            descriptor = TokenDescriptor.eth()
            balance = await chain.get_balance(wallet)
        else:
            descriptor = await self.resolve_token(token)
            tokens, _, _ = self._readers()
            balance = await tokens.balance_of(descriptor.address, wallet)

        return BalanceResponse(
            address=wallet,
            token=descriptor,
            balance=str(balance),
            decimals=descriptor.decimals,
            formatted_balance=format_amount(balance, descriptor.decimals),
        )

    # --- Price ---

    async def _pool(self, token_a: str, token_b: str) -> UniswapV2Pool:
        _, reader, _ = self._readers()
        pair = await reader.resolve_pair(token_a, token_b)
        reserves = await reader.fetch_reserves(pair)
        return UniswapV2Pool.from_reserves(pair, token_a, token_b, reserves)

    async def get_token_price(self, token: str, quote_currency: str = "USD") -> PriceResponse:
        """Spot price of a token from its WETH pool, in ETH or USD.

        USD prices multiply the token's ETH price by the WETH/USDC pool price.
        Liquidity is reported as twice the pool's WETH reserve.
        """
        currency = "ETH" if quote_currency.upper() == "ETH" else "USD"
        logger.info("price_requested", token=token, quote_currency=currency)

        if self.settings.test_mode:
            return PriceResponse(
                token=self._canned_token(token, "TEST", "Test Token"),
                price="2000.0",
                quote_currency=currency,
                source="Test Mode",
                liquidity="1000000.0",
            )

        self._require_chain()
        descriptor = await self.resolve_token(token)

        if descriptor.address == WETH:
            # WETH has no pool against itself; price it off WETH/USDC
            pool = await self._pool(WETH, USDC)
            price_in_eth = "1.0"
        else:
            pool = await self._pool(descriptor.address, WETH)
            token_reserve, token_weth_reserve = pool.get_reserves(descriptor.address)
            ratio = price_ratio(
                token_weth_reserve, token_reserve, descriptor.decimals, ETH_DECIMALS
            )
            price_in_eth = ratio.value

        if currency == "ETH":
            price = price_in_eth
            usdc_pool = None
        else:
            usdc_pool = pool if descriptor.address == WETH else await self._pool(WETH, USDC)
            weth_reserve_usd, usdc_reserve = usdc_pool.get_reserves(WETH)
            eth_usd = price_ratio(usdc_reserve, weth_reserve_usd, ETH_DECIMALS, USDC_DECIMALS)
            price = multiply_prices(price_in_eth, eth_usd.value)

        weth_reserve = pool.get_reserves(WETH)[0]
        logger.info(
            "price_computed",
            token=descriptor.symbol,
            price=price,
            quote_currency=currency,
            pair=pool.address,
            usd_pair=usdc_pool.address if usdc_pool is not None else None,
        )
        return PriceResponse(
            token=descriptor,
            price=price,
            quote_currency=currency,
            source=f"{PROTOCOL_NAME} (Pair: {pool.address})",
            pool_address=pool.address,
            liquidity=f"{format_amount(weth_reserve * 2, ETH_DECIMALS)} ETH",
        )

    # --- Swap ---

    async def swap_tokens(self, request: SwapRequest) -> SwapResponse:
        """Quote a swap and simulate it through the router.

        The quote is taken once; the simulation reuses it so each pool is
        read once per request.

        Raises:
            InvalidAmount: If slippage exceeds 100% or the amount is zero
            UnknownToken: If either token cannot be resolved
        """
        slippage_bps = (
            request.slippage_bps
            if request.slippage_bps is not None
            else self.settings.default_slippage_bps
        )
        if slippage_bps > BPS_DENOMINATOR:
            raise InvalidAmount(
                f"Slippage must be at most {BPS_DENOMINATOR} bps, got {slippage_bps}"
            )
        logger.info(
            "swap_requested",
            from_token=request.from_token,
            to_token=request.to_token,
            amount=request.amount,
            slippage_bps=slippage_bps,
        )

        if self.settings.test_mode:
            return SwapResponse(
                from_token=self._canned_token(request.from_token, "FROM", "From Token"),
                to_token=self._canned_token(request.to_token, "TO", "To Token"),
                input_amount=request.amount,
                estimated_output="100.0",
                minimum_output="99.5",
                price_impact="0.5%",
                route=SwapRoute(
                    protocol=PROTOCOL_NAME,
                    path=[request.from_token, request.to_token],
                    pools=["0xtest"],
                ),
                simulation_success=True,
                gas_estimate="150000",
            )

        _, _, simulator = self._readers()
        from_token = await self.resolve_token(request.from_token)
        to_token = await self.resolve_token(request.to_token)
        amount_in = parse_amount(request.amount, from_token.decimals)
        wallet = request.wallet_address or self.settings.simulation_sender

        quote = await simulator.quote(from_token.address, to_token.address, amount_in)
        minimum_output = quote.amount_out * (BPS_DENOMINATOR - slippage_bps) // BPS_DENOMINATOR
        simulation = await simulator.simulate(
            from_token.address,
            to_token.address,
            amount_in,
            minimum_output,
            from_address=wallet,
            quote=quote,
        )

        return SwapResponse(
            from_token=from_token,
            to_token=to_token,
            input_amount=request.amount,
            estimated_output=format_amount(quote.amount_out, to_token.decimals),
            minimum_output=format_amount(minimum_output, to_token.decimals),
            price_impact=f"{quote.price_impact:.2f}%",
            route=SwapRoute(protocol=PROTOCOL_NAME, path=quote.path, pools=quote.pair_addresses),
            simulation_success=simulation.simulation_success,
            gas_estimate=(
                str(simulation.gas_estimate) if simulation.gas_estimate is not None else None
            ),
            revert_reason=simulation.revert_reason,
        )


__all__ = ["PROTOCOL_NAME", "TradingService"]

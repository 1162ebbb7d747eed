"""API endpoints for the quoting service."""

import structlog
from fastapi import APIRouter, Depends

from swapquote.config import Settings
from swapquote.models.api import (
    BalanceRequest,
    BalanceResponse,
    PriceRequest,
    PriceResponse,
    SwapRequest,
    SwapResponse,
)
from swapquote.service import TradingService

logger = structlog.get_logger()

router = APIRouter()

_default_service: TradingService | None = None


def get_default_service() -> TradingService:
    """Return the process-wide service, creating it from the environment."""
    global _default_service
    if _default_service is None:
        _default_service = TradingService.from_settings(Settings.from_env())
    return _default_service


def get_service() -> TradingService:
    """Dependency provider for the service instance.

    Override this in tests to inject a service with a scripted chain:
        app.dependency_overrides[get_service] = lambda: service

    Returns:
        The service used to answer requests.
    """
    return get_default_service()


@router.post("/balance", response_model_exclude_none=True)
async def get_balance(
    request: BalanceRequest,
    service: TradingService = Depends(get_service),
) -> BalanceResponse:
    """Native ETH balance, or an ERC20 balance when `token` is given."""
    return await service.get_balance(request.address, request.token)


@router.post("/price", response_model_exclude_none=True)
async def get_token_price(
    request: PriceRequest,
    service: TradingService = Depends(get_service),
) -> PriceResponse:
    """Spot price of a token from Uniswap V2 reserves, in USD or ETH."""
    return await service.get_token_price(request.token, request.quote_currency)


@router.post("/swap", response_model_exclude_none=True)
async def swap_tokens(
    request: SwapRequest,
    service: TradingService = Depends(get_service),
) -> SwapResponse:
    """Quote a swap and simulate it through the Uniswap V2 router.

    A reverted simulation is still a 200 response with
    `simulation_success: false` and a `revert_reason`.
    """
    return await service.swap_tokens(request)

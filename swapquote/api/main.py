"""FastAPI application for the quoting service.

Settings are read from the environment once at import. Engine errors are
turned into JSON error bodies by a single exception handler.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import structlog
import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from swapquote import __version__
from swapquote.api.endpoints import get_default_service, router
from swapquote.chain.client import check_chain_id
from swapquote.config import Settings
from swapquote.errors import (
    InsufficientLiquidity,
    MalformedReturn,
    PairNotFound,
    ProviderUnavailable,
    SwapQuoteError,
    TransportFailure,
    UnknownToken,
)
from swapquote.logging_setup import configure_logging

logger = structlog.get_logger()

# Read once per process; see swapquote.config for the variables
SETTINGS = Settings.from_env()

# HTTP status per error type; anything else in the hierarchy is a 400
ERROR_STATUS: dict[type[SwapQuoteError], int] = {
    TransportFailure: 502,
    MalformedReturn: 502,
    ProviderUnavailable: 502,
    PairNotFound: 404,
    UnknownToken: 404,
    InsufficientLiquidity: 422,
}


def error_status(exc: SwapQuoteError) -> int:
    for error_type, status in ERROR_STATUS.items():
        if isinstance(exc, error_type):
            return status
    return 400


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    configure_logging(SETTINGS.log_level, SETTINGS.log_json_format)
    SETTINGS.validate()
    service = get_default_service()
    if service.chain is not None:
        await check_chain_id(service.chain, SETTINGS.chain_id)
    logger.info("service_started", name=SETTINGS.server_name, test_mode=SETTINGS.test_mode)
    yield


app = FastAPI(
    title="swapquote",
    description="Uniswap V2 quoting and swap simulation over JSON-RPC",
    version=__version__,
    lifespan=lifespan,
)


@app.exception_handler(SwapQuoteError)
async def handle_swapquote_error(request: Request, exc: SwapQuoteError) -> JSONResponse:
    """Map engine errors to HTTP responses."""
    status = error_status(exc)
    logger.warning(
        "request_failed",
        path=request.url.path,
        error=exc.kind,
        detail=str(exc),
        status=status,
    )
    return JSONResponse(status_code=status, content={"error": exc.kind, "detail": str(exc)})


app.include_router(router)


@app.get("/health")
async def health() -> dict[str, object]:
    """Health check endpoint."""
    return {"status": "ok", "test_mode": SETTINGS.test_mode}


def run() -> None:
    """Run the API server.

    Configuration via environment variables:
    - SWAPQUOTE_HOST: Host to bind to (default: 0.0.0.0)
    - SWAPQUOTE_PORT: Port to bind to (default: 8000)
    - SWAPQUOTE_DEBUG: Enable debug/reload mode (default: false)
    """
    uvicorn.run(
        "swapquote.api.main:app",
        host=SETTINGS.host,
        port=SETTINGS.port,
        reload=SETTINGS.debug,
    )


if __name__ == "__main__":
    run()

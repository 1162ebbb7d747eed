"""Service configuration loaded from environment variables."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from urllib.parse import urlsplit, urlunsplit

import structlog

from swapquote.constants import BPS_DENOMINATOR, DEFAULT_SIMULATION_ADDRESS, KNOWN_CHAIN_IDS
from swapquote.models.types import is_valid_address, normalize_address

logger = structlog.get_logger()

DEFAULT_RPC_URL = "https://eth.llamarpc.com"


class ConfigError(ValueError):
    """Configuration is invalid."""

    pass


def _env_bool(environ: Mapping[str, str], key: str, default: bool = False) -> bool:
    value = environ.get(key)
    if value is None:
        return default
    return value.strip().lower() in ("true", "1", "yes")


def _env_int(environ: Mapping[str, str], key: str, default: int) -> int:
    value = environ.get(key)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        logger.warning("invalid_env_int", key=key, value=value, using=default)
        return default


@dataclass(frozen=True)
class Settings:
    """Runtime settings for the quoting service.

    Attributes:
        rpc_url: Ethereum JSON-RPC endpoint
        chain_id: Expected chain id; a mismatch with the node is logged
        default_slippage_bps: Slippage used when a swap request gives none
        simulation_address: Sender for swap simulations without a wallet
        test_mode: Serve canned responses without touching the chain
        log_level: trace, debug, info, warn or error
        log_json_format: Render logs as JSON lines
        server_name: Reported by the health endpoint
        host, port, debug: uvicorn bind settings
    """

    rpc_url: str = DEFAULT_RPC_URL
    chain_id: int = 1
    default_slippage_bps: int = 50
    simulation_address: str = DEFAULT_SIMULATION_ADDRESS
    test_mode: bool = False
    log_level: str = "info"
    log_json_format: bool = False
    server_name: str = "swapquote"
    host: str = "0.0.0.0"
    port: int = 8000
    debug: bool = False

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Settings:
        """Load settings from environment variables.

        Unset or unparseable values fall back to the defaults. An empty
        ETHEREUM_RPC_URL counts as unset.
        """
        env = os.environ if environ is None else environ
        return cls(
            rpc_url=env.get("ETHEREUM_RPC_URL") or DEFAULT_RPC_URL,
            chain_id=_env_int(env, "CHAIN_ID", 1),
            default_slippage_bps=_env_int(env, "DEFAULT_SLIPPAGE_BPS", 50),
            simulation_address=env.get("SIMULATION_ADDRESS") or DEFAULT_SIMULATION_ADDRESS,
            test_mode=_env_bool(env, "TEST_MODE"),
            log_level=env.get("LOG_LEVEL", "info"),
            log_json_format=_env_bool(env, "LOG_JSON_FORMAT"),
            server_name=env.get("SERVER_NAME", "swapquote"),
            host=env.get("SWAPQUOTE_HOST", "0.0.0.0"),
            port=_env_int(env, "SWAPQUOTE_PORT", 8000),
            debug=_env_bool(env, "SWAPQUOTE_DEBUG"),
        )

    def validate(self) -> None:
        """Check settings before the service starts.

        Raises:
            ConfigError: If the RPC URL is missing outside test mode, the
                default slippage exceeds 100%, or the simulation address
                is malformed
        """
        if not self.test_mode and not self.rpc_url:
            raise ConfigError("ETHEREUM_RPC_URL is required unless TEST_MODE is enabled")
        if not 0 <= self.default_slippage_bps <= BPS_DENOMINATOR:
            raise ConfigError(
                f"DEFAULT_SLIPPAGE_BPS must be between 0 and {BPS_DENOMINATOR}, "
                f"got {self.default_slippage_bps}"
            )
        if not is_valid_address(self.simulation_address):
            raise ConfigError(f"Invalid SIMULATION_ADDRESS: {self.simulation_address}")
        if self.chain_id not in KNOWN_CHAIN_IDS:
            logger.warning(
                "unknown_chain_id",
                chain_id=self.chain_id,
                known_chain_ids=sorted(KNOWN_CHAIN_IDS),
            )

    @property
    def simulation_sender(self) -> str:
        return normalize_address(self.simulation_address)

    @property
    def masked_rpc_url(self) -> str:
        """RPC URL without path, query or credentials, for logging.

        Hosted providers embed API keys in the path or query string.
        """
        parts = urlsplit(self.rpc_url)
        host = parts.hostname or ""
        if parts.port:
            host = f"{host}:{parts.port}"
        masked = urlunsplit((parts.scheme, host, "", "", ""))
        if parts.path not in ("", "/") or parts.query:
            masked += "/***"
        return masked


__all__ = ["DEFAULT_RPC_URL", "ConfigError", "Settings"]

"""Error hierarchy for the quoting engine.

Errors are raised where they are detected and propagate to the caller.
Nothing here is retried.
"""

from __future__ import annotations


class SwapQuoteError(Exception):
    """Base class for all quoting engine errors."""

    kind = "error"


class TransportFailure(SwapQuoteError):
    """The chain RPC call failed or the node rejected it.

    For eth_call this includes contract reverts; `message` carries the
    node's error text.
    """

    kind = "transport_failure"

    def __init__(self, operation: str, message: str, target: str | None = None):
        self.operation = operation
        self.message = message
        self.target = target
        where = f" ({target})" if target else ""
        super().__init__(f"{operation}{where} failed: {message}")


class MalformedReturn(SwapQuoteError):
    """A call returned bytes that do not match the expected encoding."""

    kind = "malformed_return"

    def __init__(self, context: str, expected: str | int, actual: int):
        self.context = context
        self.expected = expected
        self.actual = actual
        super().__init__(f"Malformed {context} return: expected {expected} bytes, got {actual}")


class PairNotFound(SwapQuoteError):
    """The factory has no pool for the token pair."""

    kind = "pair_not_found"

    def __init__(self, token_a: str, token_b: str):
        self.token_a = token_a
        self.token_b = token_b
        super().__init__(f"No Uniswap V2 pair for {token_a} / {token_b}")


class InsufficientLiquidity(SwapQuoteError):
    """A pool has a zero reserve."""

    kind = "insufficient_liquidity"

    def __init__(self, pair: str | None = None):
        self.pair = pair
        where = f" in pair {pair}" if pair else ""
        super().__init__(f"Insufficient liquidity{where}")


class InvalidAmount(SwapQuoteError):
    """An amount is zero, unparseable, or overflows uint256."""

    kind = "invalid_amount"


class PrecisionExceeded(SwapQuoteError):
    """A decimal string has more fractional digits than the token allows."""

    kind = "precision_exceeded"

    def __init__(self, text: str, decimals: int):
        self.text = text
        self.decimals = decimals
        super().__init__(f"Amount {text!r} has more than {decimals} decimal places")


class NegativeAmount(SwapQuoteError):
    """A decimal string is negative."""

    kind = "negative_amount"

    def __init__(self, text: str):
        self.text = text
        super().__init__(f"Amount cannot be negative: {text!r}")


class MissingSimulationAddress(SwapQuoteError):
    """A simulation was requested without a sender address."""

    kind = "missing_simulation_address"

    def __init__(self) -> None:
        super().__init__("Simulation requires a from address")


class InvalidPath(SwapQuoteError):
    """A swap path has fewer than two tokens."""

    kind = "invalid_path"

    def __init__(self, path: list[str]):
        self.path = path
        super().__init__(f"Swap path needs at least 2 tokens, got {len(path)}")


class InvalidAddress(SwapQuoteError):
    """A string is not a 20-byte hex address."""

    kind = "invalid_address"

    def __init__(self, value: str):
        self.value = value
        super().__init__(f"Invalid address: {value!r}")


class UnknownToken(SwapQuoteError):
    """A token symbol is not in the registry."""

    kind = "unknown_token"

    def __init__(self, query: str):
        self.query = query
        super().__init__(f"Unknown token: {query!r}")


class ProviderUnavailable(SwapQuoteError):
    """No chain client is configured."""

    kind = "provider_unavailable"


__all__ = [
    "InsufficientLiquidity",
    "InvalidAddress",
    "InvalidAmount",
    "InvalidPath",
    "MalformedReturn",
    "MissingSimulationAddress",
    "NegativeAmount",
    "PairNotFound",
    "PrecisionExceeded",
    "ProviderUnavailable",
    "SwapQuoteError",
    "TransportFailure",
    "UnknownToken",
]

"""Call data encoding.

Layout follows the Solidity ABI: a 4-byte selector, then one 32-byte head
slot per argument. Static arguments sit in their head slot. A dynamic
array's head slot holds the byte offset of its tail, measured from the
start of the arguments; the tail is the element count followed by the
elements.
"""

from __future__ import annotations

from collections.abc import Sequence

from swapquote.models.types import UINT256_MAX, address_to_bytes

WORD_SIZE = 32

Scalar = int | str | bytes
Argument = Scalar | Sequence[Scalar]


def encode_uint256(value: int) -> bytes:
    """Encode an integer as a big-endian 32-byte word.

    Raises:
        ValueError: If value is outside [0, 2^256 - 1]
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"uint256 argument must be int, got {type(value).__name__}")
    if value < 0 or value > UINT256_MAX:
        raise ValueError(f"uint256 argument out of range: {value}")
    return value.to_bytes(WORD_SIZE, "big")


def encode_address(address: str | bytes) -> bytes:
    """Encode an address right-aligned in a 32-byte word.

    Raises:
        ValueError: If address is not a valid 20-byte address
    """
    if isinstance(address, bytes):
        if len(address) != 20:
            raise ValueError(f"Address must be 20 bytes, got {len(address)}")
        raw = address
    else:
        raw = address_to_bytes(address)
    return raw.rjust(WORD_SIZE, b"\x00")


def _encode_scalar(arg: Scalar) -> bytes:
    if isinstance(arg, str | bytes):
        return encode_address(arg)
    return encode_uint256(arg)


def _check_selector(selector: bytes) -> None:
    if len(selector) != 4:
        raise ValueError(f"Selector must be 4 bytes, got {len(selector)}")


def encode_call(selector: bytes, args: Sequence[Scalar] = ()) -> bytes:
    """Encode a call with static arguments only.

    Args:
        selector: 4-byte function selector
        args: ints are encoded as uint256, strings and 20-byte bytes as addresses

    Returns:
        Selector followed by one 32-byte word per argument
    """
    _check_selector(selector)
    return selector + b"".join(_encode_scalar(arg) for arg in args)


def encode_dynamic_array_call(selector: bytes, args: Sequence[Argument]) -> bytes:
    """Encode a call whose arguments may include dynamic arrays.

    Lists and tuples are encoded as dynamic arrays of scalars; everything
    else as in encode_call. Tails are appended in argument order.

    Example:
        swapExactTokensForTokens(amountIn, amountOutMin, path, to, deadline)
        puts offset 0xa0 (5 head slots) in the path slot.
    """
    _check_selector(selector)

    head: list[bytes] = []
    tail: list[bytes] = []
    tail_offset = len(args) * WORD_SIZE

    for arg in args:
        if isinstance(arg, list | tuple):
            encoded = encode_uint256(len(arg)) + b"".join(_encode_scalar(item) for item in arg)
            head.append(encode_uint256(tail_offset))
            tail.append(encoded)
            tail_offset += len(encoded)
        else:
            head.append(_encode_scalar(arg))

    return selector + b"".join(head) + b"".join(tail)


__all__ = [
    "WORD_SIZE",
    "encode_address",
    "encode_call",
    "encode_dynamic_array_call",
    "encode_uint256",
]

"""Return data decoding.

Every decoder validates lengths before reading and raises MalformedReturn
with the expected and actual byte counts.
"""

from __future__ import annotations

from swapquote.errors import MalformedReturn
from swapquote.models.types import normalize_address

WORD_SIZE = 32


def decode_scalar(data: bytes, context: str = "uint256") -> int:
    """Decode a single uint256 return value.

    Raises:
        MalformedReturn: If data is not exactly 32 bytes
    """
    if len(data) != WORD_SIZE:
        raise MalformedReturn(context, WORD_SIZE, len(data))
    return int.from_bytes(data, "big")


def decode_address(data: bytes, context: str = "address") -> str:
    """Decode a single address return value (low-order 20 bytes of a word).

    Returns:
        Lowercase 0x-prefixed address
    """
    if len(data) != WORD_SIZE:
        raise MalformedReturn(context, WORD_SIZE, len(data))
    return normalize_address(data[12:].hex())


def decode_words(data: bytes, count: int, context: str = "words") -> list[int]:
    """Decode the first `count` uint256 words of a return value.

    Trailing words beyond `count` are ignored.

    Raises:
        MalformedReturn: If data holds fewer than `count` words
    """
    needed = count * WORD_SIZE
    if len(data) < needed:
        raise MalformedReturn(context, f"at least {needed}", len(data))
    return [
        int.from_bytes(data[i * WORD_SIZE : (i + 1) * WORD_SIZE], "big") for i in range(count)
    ]


def decode_string(data: bytes, context: str = "string") -> str:
    """Decode a dynamic string return value.

    The first word is the offset of the string, the word at that offset is
    its byte length, and the UTF-8 bytes follow.

    Raises:
        MalformedReturn: If the buffer is short, the offset or length point
            past the end, or the bytes are not valid UTF-8
    """
    if len(data) < 2 * WORD_SIZE:
        raise MalformedReturn(context, f"at least {2 * WORD_SIZE}", len(data))

    offset = int.from_bytes(data[:WORD_SIZE], "big")
    length_end = offset + WORD_SIZE
    if length_end > len(data):
        raise MalformedReturn(f"{context} offset", f"at least {length_end}", len(data))

    length = int.from_bytes(data[offset:length_end], "big")
    end = length_end + length
    if end > len(data):
        raise MalformedReturn(f"{context} body", f"at least {end}", len(data))

    try:
        return data[length_end:end].decode("utf-8")
    except UnicodeDecodeError as e:
        raise MalformedReturn(f"{context} utf-8", length, len(data)) from e


def decode_small_uint(data: bytes, max_value: int = 255, context: str = "uint8") -> int:
    """Decode a small unsigned integer such as ERC20 `decimals()`.

    Accepts the standard 32-byte word and the 1-byte return some
    non-standard tokens produce.

    Raises:
        MalformedReturn: On any other length, or a value above max_value
    """
    if len(data) not in (1, WORD_SIZE):
        raise MalformedReturn(context, f"1 or {WORD_SIZE}", len(data))
    value = int.from_bytes(data, "big")
    if value > max_value:
        raise MalformedReturn(f"{context} value {value} > {max_value}", len(data), len(data))
    return value


__all__ = [
    "decode_address",
    "decode_scalar",
    "decode_small_uint",
    "decode_string",
    "decode_words",
]

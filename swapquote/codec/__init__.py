"""Manual ABI encoding of call data and decoding of return data.

Only the shapes the engine needs: uint256 and address scalars, dynamic
address arrays in arguments, and dynamic strings in return values.
"""

from swapquote.codec.decoding import (
    decode_address,
    decode_scalar,
    decode_small_uint,
    decode_string,
    decode_words,
)
from swapquote.codec.encoding import (
    encode_address,
    encode_call,
    encode_dynamic_array_call,
    encode_uint256,
)

__all__ = [
    "decode_address",
    "decode_scalar",
    "decode_small_uint",
    "decode_string",
    "decode_words",
    "encode_address",
    "encode_call",
    "encode_dynamic_array_call",
    "encode_uint256",
]

"""Tests for call data encoding."""

import pytest
from eth_abi import encode
from eth_utils import function_signature_to_4byte_selector

from swapquote.codec import encode_address, encode_call, encode_dynamic_array_call, encode_uint256
from swapquote.constants import (
    BALANCE_OF_SELECTOR,
    DECIMALS_SELECTOR,
    GET_PAIR_SELECTOR,
    GET_RESERVES_SELECTOR,
    NAME_SELECTOR,
    SWAP_EXACT_TOKENS_SELECTOR,
    SYMBOL_SELECTOR,
)
from tests.helpers import DAI, USDC, WALLET, WETH


class TestSelectors:
    """Selectors match keccak256 of their signatures."""

    @pytest.mark.parametrize(
        ("selector", "signature"),
        [
            (GET_PAIR_SELECTOR, "getPair(address,address)"),
            (GET_RESERVES_SELECTOR, "getReserves()"),
            (
                SWAP_EXACT_TOKENS_SELECTOR,
                "swapExactTokensForTokens(uint256,uint256,address[],address,uint256)",
            ),
            (BALANCE_OF_SELECTOR, "balanceOf(address)"),
            (SYMBOL_SELECTOR, "symbol()"),
            (NAME_SELECTOR, "name()"),
            (DECIMALS_SELECTOR, "decimals()"),
        ],
    )
    def test_selector(self, selector, signature):
        assert selector == function_signature_to_4byte_selector(signature)


class TestScalarEncoding:
    """Tests for uint256 and address words."""

    def test_uint256_is_big_endian_word(self):
        assert encode_uint256(1) == b"\x00" * 31 + b"\x01"
        assert encode_uint256(2**256 - 1) == b"\xff" * 32

    def test_uint256_rejects_out_of_range(self):
        with pytest.raises(ValueError):
            encode_uint256(-1)
        with pytest.raises(ValueError):
            encode_uint256(2**256)

    def test_uint256_rejects_bool(self):
        with pytest.raises(ValueError):
            encode_uint256(True)  # type: ignore[arg-type]

    def test_address_right_aligned(self):
        word = encode_address(WETH)
        assert len(word) == 32
        assert word[:12] == b"\x00" * 12
        assert word[12:].hex() == WETH[2:]

    def test_address_accepts_checksummed(self):
        assert encode_address("0xC02aaA39b223FE8D0A0e5C4F27eAD9083C756Cc2") == encode_address(WETH)

    def test_address_accepts_raw_bytes(self):
        assert encode_address(bytes.fromhex(WETH[2:])) == encode_address(WETH)

    def test_invalid_address_raises(self):
        with pytest.raises(ValueError):
            encode_address("0x1234")
        with pytest.raises(ValueError):
            encode_address(b"\x01" * 19)


class TestEncodeCall:
    """Tests for static-argument calls."""

    def test_no_arguments_is_selector(self):
        assert encode_call(GET_RESERVES_SELECTOR) == GET_RESERVES_SELECTOR

    def test_get_pair_matches_eth_abi(self):
        data = encode_call(GET_PAIR_SELECTOR, [USDC, WETH])
        assert data == GET_PAIR_SELECTOR + encode(["address", "address"], [USDC, WETH])

    def test_argument_order_preserved(self):
        """getPair arguments are encoded in the order given, not sorted."""
        forward = encode_call(GET_PAIR_SELECTOR, [WETH, USDC])
        backward = encode_call(GET_PAIR_SELECTOR, [USDC, WETH])
        assert forward != backward
        assert forward[4:36] == encode_address(WETH)

    def test_bad_selector_length(self):
        with pytest.raises(ValueError):
            encode_call(b"\x01\x02\x03", [])


class TestDynamicArrayCall:
    """Tests for calls with an address[] argument."""

    def test_router_swap_matches_eth_abi(self):
        """swapExactTokensForTokens calldata is byte-identical to eth_abi's."""
        path = [USDC, WETH, DAI]
        args = [10**9, 123, path, WALLET, 2**256 - 1]

        data = encode_dynamic_array_call(SWAP_EXACT_TOKENS_SELECTOR, args)

        expected = SWAP_EXACT_TOKENS_SELECTOR + encode(
            ["uint256", "uint256", "address[]", "address", "uint256"], args
        )
        assert data == expected

    def test_path_offset_is_0xa0(self):
        data = encode_dynamic_array_call(
            SWAP_EXACT_TOKENS_SELECTOR, [1, 0, [USDC, WETH], WALLET, 0]
        )
        assert int.from_bytes(data[4 + 64 : 4 + 96], "big") == 0xA0
        # Tail: length word then elements
        assert int.from_bytes(data[4 + 160 : 4 + 192], "big") == 2
        assert data[4 + 192 : 4 + 224] == encode_address(USDC)

    def test_length(self):
        data = encode_dynamic_array_call(
            SWAP_EXACT_TOKENS_SELECTOR, [1, 0, [USDC, WETH, DAI], WALLET, 0]
        )
        # selector + 5 head words + length word + 3 elements
        assert len(data) == 4 + 32 * (5 + 1 + 3)

    def test_static_only_matches_encode_call(self):
        assert encode_dynamic_array_call(GET_PAIR_SELECTOR, [USDC, WETH]) == encode_call(
            GET_PAIR_SELECTOR, [USDC, WETH]
        )

# pos_sdk/utils/uint256.py
"""
u256 values travel as two 128-bit words: low first, then high
"""

from typing import Tuple, Union

from .felts import parse_word

UINT128_BOUND = 1 << 128
UINT256_BOUND = 1 << 256


def to_uint256(value: Union[str, int]) -> Tuple[int, int]:
    """Split a value into (low, high)"""
    number = parse_word(value)
    if number < 0 or number >= UINT256_BOUND:
        raise ValueError(f"Value out of u256 range: {value!r}")
    return number % UINT128_BOUND, number // UINT128_BOUND


def from_uint256(low: Union[str, int], high: Union[str, int] = 0) -> int:
    return parse_word(low) + parse_word(high) * UINT128_BOUND


def uint256_calldata(value: Union[str, int]) -> list:
    low, high = to_uint256(value)
    return [hex(low), hex(high)]

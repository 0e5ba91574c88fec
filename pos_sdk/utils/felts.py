# pos_sdk/utils/felts.py
"""
Utility functions for handling Starknet field elements (felts)
"""

from typing import Union

from eth_utils import keccak

MASK_250 = (1 << 250) - 1
FELT_PRIME = (1 << 251) + 17 * (1 << 192) + 1


def parse_word(word: Union[str, int]) -> int:
    """Parse a hex ('0x..') or decimal word into an int, raising ValueError when malformed"""
    if isinstance(word, bool):
        raise ValueError(f"Not a numeric word: {word!r}")
    if isinstance(word, int):
        return word
    if not isinstance(word, str):
        raise ValueError(f"Not a numeric word: {word!r}")

    text = word.strip()
    if text.lower().startswith("0x"):
        return int(text, 16)
    return int(text, 10)


def to_felt(value: Union[str, int, bool]) -> str:
    """Encode a calldata argument as a hex felt"""
    if isinstance(value, bool):
        return "0x1" if value else "0x0"

    number = parse_word(value)
    if number < 0 or number >= FELT_PRIME:
        raise ValueError(f"Value out of felt range: {value!r}")
    return hex(number)


def starknet_keccak(data: bytes) -> int:
    return int.from_bytes(keccak(data), "big") & MASK_250


def get_selector_from_name(name: str) -> int:
    """Event/entrypoint selector: keccak of the short name truncated to 250 bits"""
    return starknet_keccak(name.encode("ascii"))

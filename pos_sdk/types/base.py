# pos_sdk/types/base.py

from typing import NewType, Union

ContractAddress = NewType('ContractAddress', str)
TxHash = NewType('TxHash', str)
Felt = NewType('Felt', str)  # hex encoded field element

BlockID = Union[int, str]  # block number or tag ('latest', 'pending')

NAMESPACE_SEPARATOR = "::"


def normalize_address(address: str) -> str:
    """Addresses compare case-insensitively"""
    return address.strip().lower()


def addresses_equal(left: str, right: str) -> bool:
    return normalize_address(left) == normalize_address(right)

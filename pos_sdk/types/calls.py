# pos_sdk/types/calls.py

from msgspec import Struct

from .base import ContractAddress, Felt


class Call(Struct, frozen=True):
    contract_address: ContractAddress
    entrypoint: str
    calldata: list[Felt] = []

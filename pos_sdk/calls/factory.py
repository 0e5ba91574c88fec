# pos_sdk/calls/factory.py

from typing import List, Optional, Union

from ..contracts.abi_loader import AbiSource
from ..contracts.registry import ContractRegistry
from ..clients.starknet_rpc import StarknetRpcClient
from ..core.errors import ConfigurationError, RpcError
from ..core.logging import LoggingMixin
from ..types import Call, ContractAddress, Felt
from ..utils.felts import parse_word, to_felt
from ..utils.uint256 import from_uint256, uint256_calldata


class FactoryCalls(LoggingMixin):
    """
    Builds call descriptors for the POS factory contract.

    The factory ABI comes from the contract registry so that every
    entrypoint is checked against the deployed interface before the
    call is assembled. The get_* and is_* queries read factory state
    through `client` and need one.
    """

    def __init__(self, registry: ContractRegistry, factory_address: str,
                 abi_source: Optional[AbiSource] = None,
                 client: Optional[StarknetRpcClient] = None):
        self.factory_address = ContractAddress(factory_address)
        self.contract = registry.get_or_load(factory_address, abi_source)
        self.client = client

    def _build(self, entrypoint: str, *calldata) -> Call:
        if not self.contract.has_function(entrypoint):
            raise ConfigurationError(f"Factory ABI has no entrypoint '{entrypoint}'")

        call = Call(contract_address=self.factory_address, entrypoint=entrypoint, calldata=list(calldata))
        self.log_debug("Call built", contract_address=self.factory_address, entrypoint=entrypoint)
        return call

    def build_initialize(self, treasury: str, fee_percent: Union[int, str],
                         tax_percent: Union[int, str], timeout: int) -> Call:
        """fee/tax in basis points, e.g. 500 for 5%"""
        return self._build(
            "initialize",
            to_felt(treasury),
            *uint256_calldata(fee_percent),
            *uint256_calldata(tax_percent),
            to_felt(timeout),
        )

    def build_create_pos(self, owner: str, pos_class_hash: str) -> Call:
        return self._build("create_pos", to_felt(owner), to_felt(pos_class_hash))

    def build_add_supported_token(self, token: str) -> Call:
        return self._build("add_supported_token", to_felt(token))

    def build_remove_supported_token(self, token: str) -> Call:
        return self._build("remove_supported_token", to_felt(token))

    def build_update_treasury(self, new_treasury: str) -> Call:
        return self._build("update_treasury", to_felt(new_treasury))

    def build_update_fee_percent(self, new_fee_percent: Union[int, str]) -> Call:
        return self._build("update_fee_percent", *uint256_calldata(new_fee_percent))

    def build_update_tax_percent(self, new_tax_percent: Union[int, str]) -> Call:
        return self._build("update_tax_percent", *uint256_calldata(new_tax_percent))

    def build_update_timeout(self, new_timeout: int) -> Call:
        return self._build("update_timeout", to_felt(new_timeout))

    def build_set_paused(self, paused: bool) -> Call:
        return self._build("set_paused", to_felt(bool(paused)))

    async def _query(self, entrypoint: str, *calldata) -> List[Felt]:
        if self.client is None:
            raise ConfigurationError("Factory queries need a chain client")

        result = await self.client.call_contract(self._build(entrypoint, *calldata))
        if not result:
            raise RpcError("starknet_call", f"{entrypoint} returned no values")
        return result

    async def get_treasury(self) -> str:
        return (await self._query("get_treasury"))[0]

    async def get_fee_percent(self) -> int:
        return _u256_result(await self._query("get_fee_percent"))

    async def get_tax_percent(self) -> int:
        return _u256_result(await self._query("get_tax_percent"))

    async def get_timeout(self) -> int:
        return parse_word((await self._query("get_timeout"))[0])

    async def is_supported_token(self, token: str) -> bool:
        return parse_word((await self._query("is_supported_token", to_felt(token)))[0]) != 0


def _u256_result(words: List[Felt]) -> int:
    return from_uint256(words[0], words[1] if len(words) > 1 else 0)

# pos_sdk/clients/starknet_rpc.py

from typing import Any, List, Optional

import msgspec
from web3 import AsyncHTTPProvider
from web3.types import RPCEndpoint

from .interfaces import ChainReaderInterface
from ..core.errors import RpcError, InvalidChainError
from ..core.logging import LoggingMixin
from ..types import BlockID, BlockWithTxHashes, Call, Felt, TxReceipt
from ..utils.felts import get_selector_from_name, parse_word

BLOCK_TAGS = ("latest", "pending")


class StarknetRpcClient(ChainReaderInterface, LoggingMixin):
    """
    A client for reading Starknet blocks and receipts over JSON-RPC.

    Transport is web3's async HTTP provider; requests are issued as raw
    JSON-RPC calls since the starknet_* namespace has no web3 bindings.
    There is no per-call deadline beyond the transport's own timeout.
    """

    def __init__(self, endpoint_url: str, provider: Optional[AsyncHTTPProvider] = None):
        self.endpoint_url = endpoint_url
        self.provider = provider or AsyncHTTPProvider(endpoint_url)

    async def make_request(self, method: str, params: List[Any]) -> Any:
        """
        Make a raw RPC request and return its result.

        Raises:
            RpcError: the node answered with an error object or no result
        """
        response = await self.provider.make_request(RPCEndpoint(method), params)

        error = response.get("error")
        if error:
            if isinstance(error, dict):
                raise RpcError(method, error.get("message", "unknown error"),
                               code=error.get("code"), data=error.get("data"))
            raise RpcError(method, str(error))

        if "result" not in response:
            raise RpcError(method, f"Malformed response: {response}")

        return response["result"]

    async def get_block(self, block_id: BlockID) -> BlockWithTxHashes:
        result = await self.make_request("starknet_getBlockWithTxHashes", [self._block_id_param(block_id)])
        return self._convert(result, BlockWithTxHashes, "starknet_getBlockWithTxHashes")

    async def get_transaction_receipt(self, tx_hash: str) -> TxReceipt:
        result = await self.make_request("starknet_getTransactionReceipt", [tx_hash])
        return self._convert(result, TxReceipt, "starknet_getTransactionReceipt")

    async def get_latest_block_number(self) -> int:
        result = await self.make_request("starknet_blockNumber", [])
        return int(result)

    async def call_contract(self, call: Call, block_id: BlockID = "latest") -> List[Felt]:
        """Execute a view entrypoint without a transaction and return the raw result words"""
        request = {
            "contract_address": call.contract_address,
            "entry_point_selector": hex(get_selector_from_name(call.entrypoint)),
            "calldata": list(call.calldata),
        }
        result = await self.make_request("starknet_call", [request, self._block_id_param(block_id)])
        return self._convert(result, List[Felt], "starknet_call")

    async def get_chain_id(self) -> str:
        return await self.make_request("starknet_chainId", [])

    async def verify_chain(self, expected_chain_id: str) -> None:
        """
        Check the node serves the expected chain.

        Args:
            expected_chain_id: hex chain id or its short-string name (e.g. 'SN_SEPOLIA')
        """
        actual = await self.get_chain_id()
        if _chain_id_to_int(actual) != _chain_id_to_int(expected_chain_id):
            self.log_error("Chain id mismatch", expected=expected_chain_id, actual=actual)
            raise InvalidChainError(expected_chain_id, actual)

        self.log_debug("Chain id verified", chain_id=actual)

    async def close(self) -> None:
        await self.provider.disconnect()

    @staticmethod
    def _block_id_param(block_id: BlockID) -> Any:
        if isinstance(block_id, int):
            return {"block_number": block_id}
        if block_id in BLOCK_TAGS:
            return block_id
        if block_id.lower().startswith("0x"):
            return {"block_hash": block_id}
        return {"block_number": int(block_id)}

    @staticmethod
    def _convert(result: Any, response_type, method: str):
        try:
            return msgspec.convert(result, response_type)
        except msgspec.ValidationError as e:
            raise RpcError(method, f"Unexpected response shape: {e}") from e


def _chain_id_to_int(chain_id: str) -> int:
    if chain_id.lower().startswith("0x"):
        return parse_word(chain_id)
    return int.from_bytes(chain_id.encode("ascii"), "big")

# tests/helpers.py

"""
In-memory chain reader and builders for monitor tests
"""

import asyncio
from typing import Dict, List, Optional

from pos_sdk.clients.interfaces import ChainReaderInterface
from pos_sdk.types import BlockWithTxHashes, StarknetEvent, TxReceipt
from pos_sdk.utils.felts import get_selector_from_name

FACTORY_ADDRESS = "0x04AbC0000000000000000000000000000000000000000000000000000000fac"
OTHER_ADDRESS = "0x0123000000000000000000000000000000000000000000000000000000000bad"
BASE_TIMESTAMP = 1_700_000_000


def make_event(address: str, name: str, data: List[str], qualified_name: Optional[str] = None) -> StarknetEvent:
    return StarknetEvent(
        from_address=address,
        keys=[hex(get_selector_from_name(name))],
        data=data,
        name=qualified_name,
    )


def make_receipt(tx_hash: str, events: List[StarknetEvent], block_number: Optional[int] = None) -> TxReceipt:
    return TxReceipt(transaction_hash=tx_hash, block_number=block_number, events=events)


class FakeChainReader(ChainReaderInterface):
    """Scripted chain: blocks, receipts, failures and response delays"""

    def __init__(self, head: int = 0):
        self.head = head
        self.blocks: Dict[int, BlockWithTxHashes] = {}
        self.receipts: Dict[str, TxReceipt] = {}
        self.receipt_delays: Dict[str, float] = {}
        self.failures: Dict[object, int] = {}
        self.calls: List[tuple] = []

    def add_block(self, number: int, receipts: List[TxReceipt], timestamp: Optional[int] = None) -> None:
        self.blocks[number] = BlockWithTxHashes(
            block_number=number,
            timestamp=timestamp if timestamp is not None else BASE_TIMESTAMP + number,
            transactions=[receipt.transaction_hash for receipt in receipts],
        )
        for receipt in receipts:
            self.receipts[receipt.transaction_hash] = receipt

    def fail(self, key, times: int = 1) -> None:
        self.failures[key] = times

    def _maybe_fail(self, key) -> None:
        remaining = self.failures.get(key, 0)
        if remaining > 0:
            self.failures[key] = remaining - 1
            raise ConnectionError(f"provider unavailable for {key}")

    async def get_block(self, block_id) -> BlockWithTxHashes:
        self.calls.append(("get_block", block_id))
        if block_id == "latest":
            self._maybe_fail("latest")
            return BlockWithTxHashes(block_number=self.head, timestamp=BASE_TIMESTAMP + self.head)

        self._maybe_fail(block_id)
        block = self.blocks.get(block_id)
        if block is None:
            block = BlockWithTxHashes(block_number=block_id, timestamp=BASE_TIMESTAMP + block_id)
        return block

    async def get_transaction_receipt(self, tx_hash: str) -> TxReceipt:
        self.calls.append(("get_transaction_receipt", tx_hash))
        delay = self.receipt_delays.get(tx_hash)
        if delay:
            await asyncio.sleep(delay)
        self._maybe_fail(tx_hash)
        return self.receipts[tx_hash]


class Recorder:
    """Async callback that records deliveries"""

    def __init__(self, fail_on: Optional[int] = None):
        self.events = []
        self.fail_on = fail_on

    async def __call__(self, event, metadata):
        if self.fail_on is not None and len(self.events) == self.fail_on:
            self.fail_on = None
            raise RuntimeError("callback failed")
        self.events.append((event, metadata))

    @property
    def keys(self):
        return [(metadata.block_number, metadata.event_index, event.type) for event, metadata in self.events]


class FakeProvider:
    """Stands in for web3's AsyncHTTPProvider: canned JSON-RPC responses per method"""

    def __init__(self, responses):
        self.responses = responses
        self.requests = []
        self.disconnected = False

    async def make_request(self, method, params):
        self.requests.append((method, params))
        return self.responses[method]

    async def disconnect(self):
        self.disconnected = True

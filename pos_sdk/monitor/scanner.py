# pos_sdk/monitor/scanner.py

import asyncio
from typing import AsyncIterator, Tuple

from ..clients.interfaces import ChainReaderInterface
from ..core.logging import LoggingMixin
from ..types import EventMetadata, RawEvent, normalize_address


class BlockScanner(LoggingMixin):
    """
    Walks an inclusive block range and yields the raw events one contract emitted.

    Blocks are processed strictly in ascending order. The receipts of one
    block are fetched concurrently and then walked in the block's transaction
    order, so output order is (block number, receipt order, event index).
    Any failed fetch propagates and aborts the scan.
    """

    def __init__(self, client: ChainReaderInterface):
        self.client = client

    async def scan(self, from_block: int, to_block: int,
                   contract_address: str) -> AsyncIterator[Tuple[RawEvent, EventMetadata]]:
        target = normalize_address(contract_address)

        for block_number in range(from_block, to_block + 1):
            block = await self.client.get_block(block_number)
            receipts = await asyncio.gather(
                *(self.client.get_transaction_receipt(tx_hash) for tx_hash in block.transactions)
            )

            self.log_debug("Block fetched",
                           block_number=block_number,
                           transaction_count=len(block.transactions))

            for receipt in receipts:
                if not receipt.events:
                    continue

                for event_index, event in enumerate(receipt.events):
                    if normalize_address(event.from_address) != target:
                        continue

                    raw = RawEvent(
                        origin_address=event.from_address,
                        data_words=list(event.data),
                        keys=list(event.keys),
                        qualified_name=event.name,
                    )
                    metadata = EventMetadata(
                        transaction_hash=receipt.transaction_hash,
                        block_number=block_number,
                        block_timestamp=block.timestamp,
                        event_index=event_index,
                    )
                    yield raw, metadata

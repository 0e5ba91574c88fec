"""
Interfaces for chain-read providers.

The monitor only ever reads from the chain: blocks by number or tag,
and transaction receipts by hash.
"""
from abc import ABC, abstractmethod

from ..types import BlockID, BlockWithTxHashes, TxReceipt


class ChainReaderInterface(ABC):
    """Interface for chain-read provider implementations."""

    @abstractmethod
    async def get_block(self, block_id: BlockID) -> BlockWithTxHashes:
        """
        Get a block by number or tag.

        Args:
            block_id: Block number, or a tag such as 'latest'

        Returns:
            Block with its ordered transaction hashes and timestamp
        """
        pass

    @abstractmethod
    async def get_transaction_receipt(self, tx_hash: str) -> TxReceipt:
        """
        Get a transaction receipt.

        Args:
            tx_hash: Transaction hash

        Returns:
            Receipt with the events emitted by the transaction
        """
        pass

    async def get_latest_block_number(self) -> int:
        """
        Get the current chain head.

        Returns:
            Latest block number
        """
        block = await self.get_block("latest")
        return block.block_number

    async def close(self) -> None:
        """Release transport resources; readers without any keep this default"""
        pass

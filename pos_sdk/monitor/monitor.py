# pos_sdk/monitor/monitor.py

import asyncio
import inspect
from typing import Any, Awaitable, Callable, Dict, Iterable, Optional, Tuple, Union

from ..clients.interfaces import ChainReaderInterface
from ..contracts.abi_loader import AbiSource
from ..contracts.registry import ContractRegistry
from ..core.errors import EventDecodeError
from ..core.logging import LoggingMixin
from ..decode.event_decoder import EventDecoder
from ..types import DecodedEvent, EventMetadata
from .scanner import BlockScanner

EventCallback = Callable[[DecodedEvent, EventMetadata], Union[Awaitable[None], None]]
CancelPredicate = Callable[[], bool]

DEFAULT_POLL_INTERVAL_MS = 5000


class MonitorCursor:
    """Last fully processed block. Process-local, never persisted."""

    def __init__(self, last_processed_block: Optional[int] = None):
        self.last_processed_block = last_processed_block

    @property
    def is_set(self) -> bool:
        return self.last_processed_block is not None

    def seed(self, head: int) -> None:
        # first scan then covers the newest block only, never the chain history
        self.last_processed_block = head - 1

    def pending_range(self, head: int) -> Optional[Tuple[int, int]]:
        if self.last_processed_block is None or head <= self.last_processed_block:
            return None
        return self.last_processed_block + 1, head

    def advance(self, head: int) -> None:
        if self.last_processed_block is not None and head < self.last_processed_block:
            raise ValueError(f"Cursor cannot move back from {self.last_processed_block} to {head}")
        self.last_processed_block = head


class EventMonitor(LoggingMixin):
    """
    Polls the chain for new blocks and delivers one contract's events to a callback.

    Each tick checks for cancellation, reads the chain head, scans every block
    after the cursor up to the head, decodes the requested events and awaits
    the callback for each one in chain order. The cursor only moves once the
    whole range has been delivered, so a failed tick is retried in full on the
    next one and the callback may see the same event more than once.

    Tick failures are logged and never leave run(); configuration errors
    (unknown contract, missing ABI, unknown event names) are raised by the
    constructor.
    """

    def __init__(self,
                 client: ChainReaderInterface,
                 registry: ContractRegistry,
                 contract_address: str,
                 event_names: Iterable[str],
                 callback: EventCallback,
                 poll_interval_ms: int = DEFAULT_POLL_INTERVAL_MS,
                 abi_source: Optional[AbiSource] = None,
                 cancel: Optional[CancelPredicate] = None,
                 decoder: Optional[EventDecoder] = None,
                 isolate_decode_errors: bool = True):
        if poll_interval_ms <= 0:
            raise ValueError("poll_interval_ms must be positive")

        self.client = client
        self.contract_address = contract_address
        self.callback = callback
        self.poll_interval_ms = poll_interval_ms
        self.cancel = cancel
        self.isolate_decode_errors = isolate_decode_errors

        self.contract = registry.get_or_load(contract_address, abi_source)
        self.index = self.contract.event_index(event_names)
        self.decoder = decoder or EventDecoder()
        self.scanner = BlockScanner(client)
        self.cursor = MonitorCursor()

        self.ticks = 0
        self.failed_ticks = 0
        self.events_delivered = 0
        self.events_skipped = 0

        self._running = False
        self._stop_requested = False
        self._wakeup: Optional[asyncio.Event] = None
        self._task: Optional[asyncio.Task] = None

    @property
    def is_running(self) -> bool:
        return self._running

    def is_cancelled(self) -> bool:
        return self._stop_requested or (self.cancel is not None and bool(self.cancel()))

    async def tick(self) -> int:
        """Run one poll iteration. Returns the number of events delivered."""
        head = await self.client.get_latest_block_number()

        if not self.cursor.is_set:
            self.cursor.seed(head)
            self.log_info("Monitor cursor seeded at chain head",
                          contract_address=self.contract_address,
                          block_number=head)
            return 0

        pending = self.cursor.pending_range(head)
        if pending is None:
            return 0

        from_block, to_block = pending
        self.log_debug("Scanning block range",
                       contract_address=self.contract_address,
                       from_block=from_block,
                       to_block=to_block)

        delivered = 0
        async for raw, metadata in self.scanner.scan(from_block, to_block, self.contract_address):
            schema = self.index.match(raw)
            if schema is None:
                continue

            try:
                event = self.decoder.decode(raw, schema)
            except EventDecodeError as e:
                if not self.isolate_decode_errors:
                    raise
                self.events_skipped += 1
                self.log_error("Skipping undecodable event",
                               **self.event_context(metadata.transaction_hash,
                                                    block_number=metadata.block_number,
                                                    event_index=metadata.event_index,
                                                    event_name=schema.name,
                                                    error=str(e)))
                continue

            result = self.callback(event, metadata)
            if inspect.isawaitable(result):
                await result

            delivered += 1
            self.events_delivered += 1
            self.log_debug("Event delivered",
                           **self.event_context(metadata.transaction_hash,
                                                block_number=metadata.block_number,
                                                event_index=metadata.event_index,
                                                event_name=event.type))

        self.cursor.advance(to_block)
        return delivered

    async def run(self) -> None:
        """Poll until cancelled. Resolves with None once the cancellation is observed."""
        self._running = True
        self._wakeup = asyncio.Event()
        self.log_info("Event monitoring started",
                      contract_address=self.contract_address,
                      event_name=",".join(self.index.event_names))

        try:
            while True:
                if self.is_cancelled():
                    self.log_info("Event monitoring cancelled", contract_address=self.contract_address)
                    break

                try:
                    await self.tick()
                except Exception as e:
                    self.failed_ticks += 1
                    self.log_error("Error monitoring events",
                                   contract_address=self.contract_address,
                                   block_number=self.cursor.last_processed_block,
                                   error=str(e),
                                   exception_type=type(e).__name__)
                finally:
                    self.ticks += 1

                await self._sleep()
        finally:
            self._running = False

    async def _sleep(self) -> None:
        try:
            await asyncio.wait_for(self._wakeup.wait(), timeout=self.poll_interval_ms / 1000)
        except asyncio.TimeoutError:
            pass

    def start(self) -> asyncio.Task:
        """Schedule run() on the running event loop and return its task"""
        if self._task is not None and not self._task.done():
            self.log_warning("Monitor already running", contract_address=self.contract_address)
            return self._task

        self._stop_requested = False
        self._task = asyncio.get_running_loop().create_task(self.run())
        return self._task

    def stop(self) -> None:
        """Request a cooperative stop, observed at the next tick boundary"""
        self._stop_requested = True
        if self._wakeup is not None:
            self._wakeup.set()

    async def wait(self) -> None:
        if self._task is not None:
            await self._task

    def get_status(self) -> Dict[str, Any]:
        return {
            "contract_address": self.contract_address,
            "event_names": list(self.index.event_names),
            "is_running": self._running,
            "last_processed_block": self.cursor.last_processed_block,
            "poll_interval_ms": self.poll_interval_ms,
            "ticks": self.ticks,
            "failed_ticks": self.failed_ticks,
            "events_delivered": self.events_delivered,
            "events_skipped": self.events_skipped,
        }


async def monitor_events(client: ChainReaderInterface,
                         registry: ContractRegistry,
                         contract_address: str,
                         event_names: Iterable[str],
                         callback: EventCallback,
                         poll_interval_ms: int = DEFAULT_POLL_INTERVAL_MS,
                         abi_source: Optional[AbiSource] = None,
                         cancel: Optional[CancelPredicate] = None,
                         **kwargs) -> None:
    """Monitor a contract until `cancel` returns True."""
    monitor = EventMonitor(
        client,
        registry,
        contract_address,
        event_names,
        callback,
        poll_interval_ms=poll_interval_ms,
        abi_source=abi_source,
        cancel=cancel,
        **kwargs,
    )
    await monitor.run()

# pos_sdk/__init__.py

from pathlib import Path
from typing import Iterable, Optional

from .core.config import SdkConfig
from .core.logging import SdkLogger, log_with_context, INFO
from .clients.interfaces import ChainReaderInterface
from .clients.starknet_rpc import StarknetRpcClient
from .contracts.abi_loader import ABILoader, AbiSource
from .contracts.registry import ContractRegistry, ContractHandle
from .decode.event_decoder import EventDecoder
from .decode.event_index import EventIndex
from .monitor.monitor import EventMonitor, EventCallback, CancelPredicate, monitor_events
from .monitor.scanner import BlockScanner
from .calls.factory import FactoryCalls
from .calls.pos import PosCalls

__version__ = "0.1.0"


class PosSdk:
    """
    Wires one configuration to a chain client and a single contract registry.

    The registry is shared by every monitor and call builder created here,
    so each contract ABI is loaded once per SDK instance.
    """

    def __init__(self, config: SdkConfig, client: Optional[ChainReaderInterface] = None,
                 registry: Optional[ContractRegistry] = None):
        self.config = config
        self.client = client or StarknetRpcClient(config.rpc.endpoint_url)
        self.registry = registry or ContractRegistry(ABILoader(Path(config.paths.contracts_path)))

    def monitor(self, contract_address: str, event_names: Iterable[str], callback: EventCallback,
                abi_source: Optional[AbiSource] = None, cancel: Optional[CancelPredicate] = None,
                poll_interval_ms: Optional[int] = None) -> EventMonitor:
        return EventMonitor(
            self.client,
            self.registry,
            contract_address,
            event_names,
            callback,
            poll_interval_ms=poll_interval_ms or self.config.monitor.poll_interval_ms,
            abi_source=abi_source,
            cancel=cancel,
            decoder=EventDecoder(legacy_wide_integer=self.config.monitor.legacy_wide_integer),
            isolate_decode_errors=self.config.monitor.isolate_decode_errors,
        )

    def factory(self, factory_address: str, abi_source: Optional[AbiSource] = None) -> FactoryCalls:
        client = self.client if isinstance(self.client, StarknetRpcClient) else None
        return FactoryCalls(self.registry, factory_address, abi_source, client=client)

    def pos(self, pos_address: str) -> PosCalls:
        return PosCalls(pos_address)

    async def verify_chain(self) -> None:
        if self.config.rpc.chain_id and isinstance(self.client, StarknetRpcClient):
            await self.client.verify_chain(self.config.rpc.chain_id)


def create_sdk(env_vars: dict = None, client: Optional[ChainReaderInterface] = None, **overrides) -> PosSdk:
    config = SdkConfig.from_env(env_vars, **overrides)
    config.configure_logging()

    logger = SdkLogger.get_logger('core.init')
    log_with_context(logger, INFO, "SDK created",
                     contracts_path=config.paths.contracts_path,
                     poll_interval_ms=config.monitor.poll_interval_ms)

    return PosSdk(config, client=client)


__all__ = [
    "PosSdk",
    "create_sdk",
    "SdkConfig",
    "SdkLogger",
    "ChainReaderInterface",
    "StarknetRpcClient",
    "ABILoader",
    "ContractRegistry",
    "ContractHandle",
    "EventIndex",
    "EventDecoder",
    "BlockScanner",
    "EventMonitor",
    "monitor_events",
    "FactoryCalls",
    "PosCalls",
]

# pos_sdk/contracts/registry.py

import threading
from typing import Optional, Dict, List, Any, Iterable, Tuple

from ..core.errors import ContractNotRegisteredError
from ..core.logging import LoggingMixin
from ..decode.event_index import EventIndex
from ..types import ContractAddress, normalize_address
from .abi_loader import ABILoader, AbiSource


class ContractHandle:
    """A parsed ABI bound to an address. Owned by the ContractRegistry."""

    def __init__(self, address: ContractAddress, abi: List[Dict[str, Any]]):
        self.address = address
        self.abi = abi
        self._event_indexes: Dict[Tuple[str, ...], EventIndex] = {}
        self._lock = threading.Lock()

    def event_index(self, event_names: Iterable[str]) -> EventIndex:
        """Event index for the requested names, built once and reused"""
        key = tuple(dict.fromkeys(event_names))
        with self._lock:
            index = self._event_indexes.get(key)
            if index is None:
                index = EventIndex(self.abi, key)
                self._event_indexes[key] = index
            return index

    def function_names(self) -> List[str]:
        """Callable entrypoints, including those declared inside interface blocks"""
        names = []
        for entry in self.abi:
            if entry.get("type") == "function":
                names.append(entry["name"])
            elif entry.get("type") == "interface":
                names.extend(item["name"] for item in entry.get("items", [])
                             if item.get("type") == "function")
        return names

    def has_function(self, name: str) -> bool:
        return name in self.function_names()

    def event_names(self) -> List[str]:
        return [entry["name"] for entry in self.abi
                if entry.get("type") == "event" and entry.get("name")]

    def __repr__(self) -> str:
        return f"ContractHandle(address={self.address!r}, abi_entries={len(self.abi)})"


class ContractRegistry(LoggingMixin):
    """
    Process-wide cache of contract handles keyed by address.

    A handle is created on first use and returned unchanged afterwards;
    the ABI is never reloaded for a known address. There is no eviction.
    """

    def __init__(self, abi_loader: Optional[ABILoader] = None):
        self.abi_loader = abi_loader or ABILoader()
        self.contracts: Dict[str, ContractHandle] = {}
        self._lock = threading.Lock()

    def get_or_load(self, address: str, abi_source: Optional[AbiSource] = None) -> ContractHandle:
        key = normalize_address(address)

        with self._lock:
            handle = self.contracts.get(key)
            if handle is not None:
                return handle

            if abi_source is None:
                raise ContractNotRegisteredError(address)

            abi = self.abi_loader.load(abi_source)
            handle = ContractHandle(ContractAddress(address), abi)
            self.contracts[key] = handle

        self.log_debug("Contract registered",
                       contract_address=address,
                       abi_entries=len(abi))
        return handle

    def get_contract(self, address: str) -> Optional[ContractHandle]:
        return self.contracts.get(normalize_address(address))

    def has_contract(self, address: str) -> bool:
        return normalize_address(address) in self.contracts

    def get_contract_count(self) -> int:
        return len(self.contracts)

    def get_cache_stats(self) -> Dict[str, Any]:
        return {
            "contracts_cached": len(self.contracts),
            "abi_loader_stats": self.abi_loader.get_cache_stats(),
        }

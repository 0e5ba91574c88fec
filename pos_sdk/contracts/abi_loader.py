# pos_sdk/contracts/abi_loader.py

import json
from pathlib import Path
from typing import Optional, List, Dict, Any, Union

from ..core.errors import AbiLoadError
from ..core.logging import LoggingMixin

AbiSource = Union[str, Path, List[Dict[str, Any]], Dict[str, Any]]


class ABILoader(LoggingMixin):
    """Loads contract ABIs from compiled artifacts, ABI files or inline structures, with caching"""

    def __init__(self, abi_base_path: Optional[Path] = None):
        self.abi_base_path = Path(abi_base_path) if abi_base_path else Path.cwd()
        self._abi_cache: Dict[str, List[Dict[str, Any]]] = {}

        self.log_debug("ABI loader initialized", abi_base_path=str(self.abi_base_path))

    def load(self, source: AbiSource) -> List[Dict[str, Any]]:
        """Load an ABI from a path, an artifact dict or an inline ABI list"""
        if isinstance(source, (str, Path)):
            return self.load_file(source)
        if isinstance(source, (list, dict)):
            return self.extract_abi(source, origin="<inline>")

        raise AbiLoadError(f"Unsupported ABI source type {type(source).__name__}")

    def load_file(self, abi_path: Union[str, Path]) -> List[Dict[str, Any]]:
        path = self.resolve_path(abi_path)
        cache_key = str(path)

        if cache_key in self._abi_cache:
            return self._abi_cache[cache_key]

        if not path.is_file():
            self.log_error("ABI file not found", abi_path=cache_key)
            raise AbiLoadError("ABI file not found", cache_key)

        try:
            with open(path, 'r', encoding='utf-8') as f:
                abi_data = json.load(f)
        except json.JSONDecodeError as e:
            self.log_error("Invalid JSON in ABI file", abi_path=cache_key, error=str(e))
            raise AbiLoadError(f"Invalid JSON ({e})", cache_key) from e
        except OSError as e:
            self.log_error("Failed to read ABI file", abi_path=cache_key, error=str(e))
            raise AbiLoadError(f"Unreadable file ({e})", cache_key) from e

        abi = self.extract_abi(abi_data, origin=cache_key)
        self._abi_cache[cache_key] = abi

        self.log_debug("ABI loaded successfully",
                       abi_path=cache_key,
                       abi_functions=len([item for item in abi if item.get('type') == 'function']),
                       abi_events=len([item for item in abi if item.get('type') == 'event']))

        return abi

    def resolve_path(self, abi_path: Union[str, Path]) -> Path:
        path = Path(abi_path)
        if path.is_absolute() or path.exists():
            return path
        return self.abi_base_path / path

    def extract_abi(self, abi_data: Any, origin: str) -> List[Dict[str, Any]]:
        """Handle the different artifact formats"""
        if isinstance(abi_data, dict):
            if 'abi' not in abi_data:
                raise AbiLoadError("Artifact has no 'abi' entry", origin)
            abi = abi_data['abi']
        else:
            abi = abi_data

        # Some compilers store the ABI as an embedded JSON string
        if isinstance(abi, str):
            try:
                abi = json.loads(abi)
            except json.JSONDecodeError as e:
                raise AbiLoadError(f"Embedded ABI is not valid JSON ({e})", origin) from e

        if not isinstance(abi, list) or not all(isinstance(item, dict) for item in abi):
            self.log_error("ABI is not a list of entries", abi_path=origin, abi_type=type(abi).__name__)
            raise AbiLoadError("ABI is not a list of entries", origin)

        return abi

    def clear_cache(self):
        self._abi_cache.clear()
        self.log_debug("ABI cache cleared")

    def get_cache_stats(self) -> Dict[str, Any]:
        return {"cached_files": len(self._abi_cache)}

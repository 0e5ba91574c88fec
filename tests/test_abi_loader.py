# tests/test_abi_loader.py

import json

import pytest

from pos_sdk.contracts.abi_loader import ABILoader
from pos_sdk.core.errors import AbiLoadError, ConfigurationError

EVENT_ENTRY = {"type": "event", "name": "pos::Paused", "kind": "struct", "members": []}


def write_json(path, payload):
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


def test_loads_compiled_artifact(factory_artifact_path):
    abi = ABILoader().load(factory_artifact_path)

    assert any(entry.get("type") == "interface" for entry in abi)


def test_loads_plain_abi_list(tmp_path):
    path = write_json(tmp_path / "pos.abi.json", [EVENT_ENTRY])

    assert ABILoader().load(str(path)) == [EVENT_ENTRY]


def test_loads_embedded_string_abi(tmp_path):
    path = write_json(tmp_path / "legacy.json", {"abi": json.dumps([EVENT_ENTRY])})

    assert ABILoader().load(path) == [EVENT_ENTRY]


def test_relative_path_resolved_against_base(tmp_path):
    write_json(tmp_path / "pos.abi.json", [EVENT_ENTRY])

    assert ABILoader(tmp_path).load("pos.abi.json") == [EVENT_ENTRY]


def test_inline_sources():
    loader = ABILoader()

    assert loader.load([EVENT_ENTRY]) == [EVENT_ENTRY]
    assert loader.load({"abi": [EVENT_ENTRY]}) == [EVENT_ENTRY]


def test_missing_file(tmp_path):
    with pytest.raises(AbiLoadError) as exc_info:
        ABILoader(tmp_path).load("missing.json")

    assert exc_info.value.source == str(tmp_path / "missing.json")
    assert isinstance(exc_info.value, ConfigurationError)


def test_invalid_json(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("{not json", encoding="utf-8")

    with pytest.raises(AbiLoadError):
        ABILoader().load(path)


@pytest.mark.parametrize("payload", [
    {"bytecode": []},
    {"abi": {"type": "event"}},
    {"abi": "not json"},
    ["event"],
])
def test_rejects_malformed_abi(tmp_path, payload):
    path = write_json(tmp_path / "bad.json", payload)

    with pytest.raises(AbiLoadError):
        ABILoader().load(path)


def test_unsupported_source_type():
    with pytest.raises(AbiLoadError):
        ABILoader().load(42)


def test_file_cache(tmp_path):
    path = write_json(tmp_path / "pos.abi.json", [EVENT_ENTRY])
    loader = ABILoader()

    first = loader.load(path)
    path.unlink()

    assert loader.load(path) is first
    assert loader.get_cache_stats() == {"cached_files": 1}

    loader.clear_cache()
    assert loader.get_cache_stats() == {"cached_files": 0}
    with pytest.raises(AbiLoadError):
        loader.load(path)

# tests/conftest.py
"""
pytest configuration and fixtures for the POS SDK tests
"""

import json
from pathlib import Path

import pytest

from pos_sdk.contracts.abi_loader import ABILoader
from pos_sdk.contracts.registry import ContractRegistry

FIXTURES_DIR = Path(__file__).parent / "fixtures"
FACTORY_ARTIFACT = FIXTURES_DIR / "factory.contract_class.json"


@pytest.fixture
def fixtures_dir():
    return FIXTURES_DIR


@pytest.fixture
def factory_artifact_path():
    return FACTORY_ARTIFACT


@pytest.fixture
def factory_abi():
    with open(FACTORY_ARTIFACT, "r", encoding="utf-8") as f:
        return json.load(f)["abi"]


@pytest.fixture
def registry():
    return ContractRegistry(ABILoader(FIXTURES_DIR))

"""
Pytest configuration and global fixtures.

This module provides shared fixtures used across all tests.
"""

from collections.abc import Generator

import pytest

from openpankki.banking.bank_info import FinnishBankInfo
from openpankki.banking.registry import FinnishBankRegistry
from openpankki.utils.config import Settings, reload_settings

SETTINGS_ENV_VARS = (
    "OPENPANKKI_IBAN_PATTERN_VALIDATION",
    "OPENPANKKI_LOG_LEVEL",
    "OPENPANKKI_JSON_LOGS",
    "OPENPANKKI_DEV_MODE",
)


@pytest.fixture(autouse=True)
def fresh_settings(monkeypatch) -> Generator[Settings, None, None]:
    """Run every test against default settings and restore them afterwards."""
    for var in SETTINGS_ENV_VARS:
        monkeypatch.delenv(var, raising=False)

    yield reload_settings()

    monkeypatch.undo()
    reload_settings()


@pytest.fixture
def other_bank() -> FinnishBankInfo:
    """Bank that only exists in the custom registry."""
    return FinnishBankInfo("TESTFIHH", "Testipankki", bban_offset=7)


@pytest.fixture
def custom_registry(other_bank) -> FinnishBankRegistry:
    """Registry with a single bank under prefix "9"."""
    return FinnishBankRegistry({"9": other_bank})

"""Tests for structured logging setup and identifier masking."""

import logging
import subprocess
import sys

import pytest
import structlog

from openpankki import __version__
from openpankki.utils.config import reload_settings
from openpankki.utils.logging import (
    add_app_context,
    configure_from_settings,
    configure_logging,
    get_logger,
    mask_account_data,
    mask_identifier,
)

pytestmark = pytest.mark.unit


class TestMaskIdentifier:
    @pytest.mark.parametrize(
        "value,expected",
        [
            ("FI2112345600000785", "FI2112...0785"),
            ("421123456000007850000105000000000000000001234561241231", "421123...1231"),
            ("1234561", "*******"),
            ("1234567890", "**********"),
            ("", ""),
        ],
    )
    def test_mask(self, value, expected):
        assert mask_identifier(value) == expected


class TestProcessors:
    def test_masks_identifier_keys(self):
        event = {
            "event": "bban_converted",
            "iban": "FI2112345600000785",
            "bban": "123456-785",
            "machine_bban": "12345600000785",
            "reference": "00000000000001234561",
        }

        result = mask_account_data(None, "debug", event)

        assert result["iban"] == "FI2112...0785"
        assert result["bban"] == "**********"
        assert result["machine_bban"] == "123456...0785"
        assert result["reference"] == "000000...4561"
        assert result["event"] == "bban_converted"

    def test_leaves_other_keys_and_non_strings(self):
        event = {"event": "iban_rejected", "country": "FI", "iban": None, "length": 17}

        result = mask_account_data(None, "debug", event)

        assert result == {"event": "iban_rejected", "country": "FI", "iban": None, "length": 17}

    def test_app_context(self):
        result = add_app_context(None, "info", {"event": "test"})

        assert result["app"] == "openpankki"
        assert result["version"] == __version__


@pytest.fixture
def restore_logging():
    """Undo configure_logging: structlog defaults and the original root handlers."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level

    yield

    structlog.reset_defaults()
    root.handlers[:] = handlers
    root.setLevel(level)


class TestConfigureLogging:
    @pytest.mark.parametrize(
        "json_logs,dev_mode,renderer",
        [
            (False, True, structlog.dev.ConsoleRenderer),
            (True, False, structlog.processors.JSONRenderer),
            (False, False, structlog.processors.KeyValueRenderer),
        ],
    )
    def test_renderer_selection(self, restore_logging, json_logs, dev_mode, renderer):
        configure_logging("DEBUG", json_logs=json_logs, dev_mode=dev_mode)
        processors = structlog.get_config()["processors"]

        assert isinstance(processors[-1], renderer)
        assert processors.index(mask_account_data) < len(processors) - 1

    def test_configure_from_settings(self, restore_logging, monkeypatch):
        monkeypatch.setenv("OPENPANKKI_DEV_MODE", "false")
        monkeypatch.setenv("OPENPANKKI_JSON_LOGS", "true")
        reload_settings()

        configure_from_settings()

        renderer = structlog.get_config()["processors"][-1]
        assert isinstance(renderer, structlog.processors.JSONRenderer)

    def test_get_logger_uses_stdlib_logger(self):
        logger = get_logger("openpankki.test")

        assert hasattr(logger, "debug")
        assert hasattr(logger, "warning")
        assert logging.getLogger("openpankki").handlers
        assert any(
            isinstance(h, logging.NullHandler) for h in logging.getLogger("openpankki").handlers
        )


HOST_APPLICATION = """
import logging
import structlog

structlog.configure(processors=[structlog.processors.JSONRenderer()])
root_handlers = list(logging.getLogger().handlers)

import openpankki
from openpankki.exceptions import InvalidBarcodeError

try:
    openpankki.FinnishInvoiceBarcode.parse("123")
except InvalidBarcodeError:
    pass
openpankki.is_valid_iban("FI2112345600000786")

assert logging.getLogger().handlers == root_handlers, logging.getLogger().handlers
assert [type(p) for p in structlog.get_config()["processors"]] == [
    structlog.processors.JSONRenderer
]
print("host logging untouched")
"""


class TestImportSideEffects:
    def test_import_leaves_host_logging_alone(self):
        result = subprocess.run(
            [sys.executable, "-c", HOST_APPLICATION],
            capture_output=True,
            text=True,
            check=False,
        )

        assert result.returncode == 0, result.stderr
        assert result.stdout == "host logging untouched\n"
        assert result.stderr == ""

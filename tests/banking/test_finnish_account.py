"""Tests for Finnish BBAN/IBAN account conversion."""

import dataclasses

import pytest

from openpankki.banking.account import (
    BankAccountNumber,
    FinnishBankAccountNumber,
    machine_bban_to_human,
    pad_bban,
)
from openpankki.banking.bank_info import BankInfo, FinnishBankInfo
from openpankki.exceptions import (
    InvalidFormatError,
    InvalidInputError,
    UnknownBankError,
    WrongCountryError,
)

pytestmark = pytest.mark.unit

# (human BBAN, machine BBAN, IBAN, BIC)
KNOWN_ACCOUNTS = [
    ("123456-785", "12345600000785", "FI2112345600000785", "NDEAFIHH"),
    ("159030-776", "15903000000776", "FI3715903000000776", "NDEAFIHH"),
    ("200000-14", "20000000000014", "FI7920000000000014", "NDEAFIHH"),
    ("313130-349", "31313000000349", "FI2631313000000349", "HANDFIHH"),
    ("340000-125", "34000000000125", "FI0734000000000125", "DABAFIHX"),
    ("360000-784", "36000000000784", "FI7836000000000784", "TAPIFI22"),
    ("380000-915", "38000000000915", "FI4938000000000915", "SWEDFIHH"),
    ("393900-125", "39390000000125", "FI5439390000000125", "SBANFIHH"),
    ("4234567-8", "42345670000008", "FI8642345670000008", "HELSFIHH"),
    ("5000012-4", "50000120000004", "FI2150000120000004", "OKOYFIHH"),
    ("660100-18", "66010000000018", "FI8366010000000018", "AABAFI22"),
    ("711000-1232", "71100000001232", "FI5871100000001232", "BSUIFIHH"),
    ("800010-126", "80001000000126", "FI1280001000000126", "DABAFIHH"),
]

NORDEA = FinnishBankInfo("NDEAFIHH", "Nordea Pankki", bban_offset=6)
OP = FinnishBankInfo("OKOYFIHH", "OP-Pohjola (Osuuspankki)", bban_offset=7)


class TestBankAccountNumber:
    def test_valid_iban(self):
        account = BankAccountNumber(iban="DE89370400440532013000", bank=BankInfo("COBADEFF"))

        assert account.is_valid is True
        assert account.country_code == "DE"

    def test_invalid_iban(self):
        assert BankAccountNumber(iban="DE88370400440532013000").is_valid is False

    def test_empty_account(self):
        account = BankAccountNumber()

        assert account.is_valid is False
        assert account.country_code is None
        assert account.bank is None


class TestBBANHelpers:
    def test_machine_bban_to_human(self):
        assert machine_bban_to_human("12345600000785", NORDEA) == "123456-785"
        assert machine_bban_to_human("50000120000004", OP) == "5000012-4"

    def test_machine_bban_to_human_requires_values(self):
        with pytest.raises(InvalidInputError):
            machine_bban_to_human(None, NORDEA)
        with pytest.raises(InvalidInputError):
            machine_bban_to_human("12345600000785", None)

    @pytest.mark.parametrize(
        "digits,bank,expected",
        [
            ("123456785", NORDEA, "12345600000785"),
            ("50000124", OP, "50000120000004"),
            ("12345600000785", NORDEA, "12345600000785"),
        ],
    )
    def test_pad_bban(self, digits, bank, expected):
        assert pad_bban(digits, bank) == expected


class TestFromBBAN:
    @pytest.mark.parametrize("human,machine,iban,bic", KNOWN_ACCOUNTS)
    def test_known_accounts(self, human, machine, iban, bic):
        account = FinnishBankAccountNumber.from_bban(human)

        assert account.iban == iban
        assert account.machine_bban == machine
        assert account.bban == human
        assert account.bank.bic == bic
        assert account.is_valid is True
        assert account.is_valid_machine_bban is True

    @pytest.mark.parametrize("bban", ["123456-785", "123456 785", "123456785", " 1234-56/785 "])
    def test_separators_ignored(self, bban):
        account = FinnishBankAccountNumber.from_bban(bban)

        assert account.iban == "FI2112345600000785"
        assert account.bban == "123456-785"

    def test_machine_format_input(self):
        account = FinnishBankAccountNumber.from_bban("12345600000785")

        assert account.machine_bban == "12345600000785"
        assert account.bban == "123456-785"

    @pytest.mark.parametrize("bban", ["1234567", "123456-", "123456789012345", ""])
    def test_wrong_digit_count(self, bban):
        with pytest.raises(InvalidFormatError):
            FinnishBankAccountNumber.from_bban(bban)

    def test_checksum_failure(self):
        with pytest.raises(InvalidFormatError) as exc_info:
            FinnishBankAccountNumber.from_bban("123456-786")

        assert exc_info.value.context["constraint"] == "checksum"

    def test_unknown_bank(self):
        with pytest.raises(UnknownBankError):
            FinnishBankAccountNumber.from_bban("300000-123")

    def test_none_raises(self):
        with pytest.raises(InvalidInputError):
            FinnishBankAccountNumber.from_bban(None)

    def test_custom_registry(self, custom_registry, other_bank):
        account = FinnishBankAccountNumber.from_bban("9000001-124", registry=custom_registry)

        assert account.bank is other_bank
        assert account.machine_bban == "90000010000124"
        assert account.bban == "9000001-124"
        assert account.is_valid is True

    def test_custom_registry_replaces_default(self, custom_registry):
        with pytest.raises(UnknownBankError):
            FinnishBankAccountNumber.from_bban("123456-785", registry=custom_registry)

    def test_frozen(self):
        account = FinnishBankAccountNumber.from_bban("123456-785")

        with pytest.raises(dataclasses.FrozenInstanceError):
            account.iban = "FI0000000000000000"


class TestFromIBAN:
    @pytest.mark.parametrize("human,machine,iban,bic", KNOWN_ACCOUNTS)
    def test_known_accounts(self, human, machine, iban, bic):
        account = FinnishBankAccountNumber.from_iban(iban)

        assert account.iban == iban
        assert account.machine_bban == machine
        assert account.bban == human
        assert account.bank.bic == bic

    def test_whitespace_ignored(self):
        account = FinnishBankAccountNumber.from_iban("FI21 1234 5600 0007 85")

        assert account.iban == "FI2112345600000785"
        assert account.bank.name == "Nordea Pankki"

    def test_checksum_not_enforced(self):
        account = FinnishBankAccountNumber.from_iban("FI2212345600000785")

        assert account.machine_bban == "12345600000785"
        assert account.is_valid is False

    def test_wrong_country(self):
        with pytest.raises(WrongCountryError) as exc_info:
            FinnishBankAccountNumber.from_iban("DE89370400440532013000")

        assert exc_info.value.context["expected"] == "FI"
        assert exc_info.value.context["actual"] == "DE"

    @pytest.mark.parametrize("iban", ["", "   "])
    def test_empty(self, iban):
        with pytest.raises(InvalidInputError):
            FinnishBankAccountNumber.from_iban(iban)

    def test_none_raises(self):
        with pytest.raises(InvalidInputError):
            FinnishBankAccountNumber.from_iban(None)

    def test_unknown_bank(self):
        with pytest.raises(UnknownBankError):
            FinnishBankAccountNumber.from_iban("FI0030000000000000")

    def test_round_trip_with_bban(self):
        original = FinnishBankAccountNumber.from_bban("5000012-4")
        restored = FinnishBankAccountNumber.from_iban(original.iban)

        assert restored == original

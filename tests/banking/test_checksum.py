"""Tests for the MOD 97-10 and machine BBAN checksums."""

import pytest

from openpankki.banking.checksum import checksum97, is_valid_machine_bban
from openpankki.exceptions import InvalidCharacterError, InvalidInputError, ValidationError

pytestmark = pytest.mark.unit


class TestChecksum97:
    """Test ISO 7064 MOD 97-10 checksum."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("0", 0),
            ("7", 7),
            ("96", 96),
            ("97", 0),
            ("100", 3),
            ("A", 10),
            ("Z", 35),
            ("FI00", 151800 % 97),
        ],
    )
    def test_known_values(self, value, expected):
        assert checksum97(value) == expected

    def test_rearranged_finnish_iban_gives_one(self):
        """BBAN + "FI" + check digits of a valid IBAN leaves remainder 1."""
        assert checksum97("12345600000785151821") == 1

    def test_rearranged_german_iban_gives_one(self):
        assert checksum97("370400440532013000DE89") == 1

    def test_long_input_matches_integer_arithmetic(self):
        """Inputs far beyond 64-bit range are folded digit by digit."""
        value = "9" * 1000
        assert checksum97(value) == int(value) % 97

    def test_letters_expand_to_two_digits(self):
        assert checksum97("AB") == 1011 % 97

    def test_none_raises(self):
        with pytest.raises(InvalidInputError):
            checksum97(None)

    def test_empty_raises(self):
        with pytest.raises(InvalidInputError):
            checksum97("")

    @pytest.mark.parametrize(
        "value,position",
        [("12a4", 2), ("-1", 0), ("12 34", 2), ("Ä", 0)],
    )
    def test_invalid_character_raises(self, value, position):
        with pytest.raises(InvalidCharacterError) as exc_info:
            checksum97(value)

        assert exc_info.value.context["position"] == position
        assert isinstance(exc_info.value, ValidationError)


class TestMachineBBAN:
    """Test Luhn-style check of 14-digit Finnish BBANs."""

    @pytest.mark.parametrize(
        "bban",
        [
            "12345600000785",
            "15903000000776",
            "50000120000004",
            "42345670000008",
            "80001000000126",
            "66010000000018",
            "34000000000125",
            "71100000001232",
        ],
    )
    def test_valid(self, bban):
        assert is_valid_machine_bban(bban) is True

    @pytest.mark.parametrize(
        "bban",
        ["12345600000786", "50000120000007", "15903000000106", "42345670000007"],
    )
    def test_invalid_checksum(self, bban):
        assert is_valid_machine_bban(bban) is False

    def test_short_input_is_invalid(self):
        assert is_valid_machine_bban("1234560000078") is False
        assert is_valid_machine_bban("") is False

    def test_only_first_fourteen_characters_checked(self):
        assert is_valid_machine_bban("12345600000785999") is True

    def test_none_raises(self):
        with pytest.raises(InvalidInputError):
            is_valid_machine_bban(None)

    def test_non_digit_raises(self):
        with pytest.raises(InvalidCharacterError) as exc_info:
            is_valid_machine_bban("1234560000078X")

        assert exc_info.value.context["position"] == 13

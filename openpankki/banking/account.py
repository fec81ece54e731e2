"""Bank account number value objects and Finnish BBAN/IBAN conversion.

Finnish account numbers before 2012 were written as ``nnnnnn-nn[nnnnnn]``
(the "human" BBAN). The 14-digit machine BBAN pads the free account digits
with zeros at a bank-specific offset, and the Finnish IBAN is
``"FI" + check digits + machine BBAN``.
"""

import re
from dataclasses import dataclass
from typing import Self

from openpankki.exceptions import (
    InvalidFormatError,
    InvalidInputError,
    WrongCountryError,
)
from openpankki.utils.logging import get_logger

from .bank_info import BankInfo, FinnishBankInfo
from .checksum import MACHINE_BBAN_LENGTH, is_valid_machine_bban
from .iban import compute_check_digits, is_valid_iban, normalize_iban
from .registry import DEFAULT_REGISTRY, FinnishBankRegistry

logger = get_logger(__name__)

FINLAND = "FI"

# A human BBAN is at least "123456-12" and at most "123456-12345678"
MIN_BBAN_DIGITS = 8
MAX_BBAN_DIGITS = MACHINE_BBAN_LENGTH

_NOT_A_DIGIT = re.compile(r"[^0-9]")


@dataclass(frozen=True)
class BankAccountNumber:
    """Account number identified by its IBAN.

    Attributes:
        iban: Normalized IBAN (no whitespace)
        bank: Bank holding the account, if known
    """

    iban: str | None = None
    bank: BankInfo | None = None

    @property
    def is_valid(self) -> bool:
        """True if the IBAN passes checksum, length and pattern validation."""
        if self.iban is None:
            return False
        return is_valid_iban(self.iban)

    @property
    def country_code(self) -> str | None:
        """Country code of the IBAN."""
        if not self.iban:
            return None
        return self.iban[:2]


def machine_bban_to_human(machine_bban: str, bank: FinnishBankInfo) -> str:
    """Convert a 14-digit machine BBAN to the ``nnnnnn-nn[nnnnnn]`` format.

    A hyphen is inserted at the bank's offset and the zero padding of the
    free account digits is removed.

    Example:
        >>> nordea = FinnishBankRegistry.default().lookup("1")
        >>> machine_bban_to_human("12345600000785", nordea)
        '123456-785'
    """
    if machine_bban is None:
        raise InvalidInputError("Machine BBAN is required", field="machine_bban")
    if bank is None:
        raise InvalidInputError("Bank is required", field="bank")

    offset = bank.bban_offset
    return f"{machine_bban[:offset]}-{machine_bban[offset:].lstrip('0')}"


def pad_bban(digits: str, bank: FinnishBankInfo) -> str:
    """Zero-pad a short BBAN to 14 digits at the bank's offset."""
    missing = MACHINE_BBAN_LENGTH - len(digits)
    if missing <= 0:
        return digits
    offset = bank.bban_offset
    return digits[:offset] + "0" * missing + digits[offset:]


@dataclass(frozen=True)
class FinnishBankAccountNumber(BankAccountNumber):
    """Finnish bank account number.

    Attributes:
        bban: Pre-2012 BBAN in the ``nnnnnn-nn[nnnnnn]`` format
        machine_bban: Pre-2012 BBAN in the 14-digit format

    Example:
        >>> account = FinnishBankAccountNumber.from_bban("123456-785")
        >>> account.iban
        'FI2112345600000785'
        >>> account.bank.name
        'Nordea Pankki'
    """

    bban: str | None = None
    machine_bban: str | None = None

    @property
    def is_valid_machine_bban(self) -> bool:
        """True if the machine BBAN passes the Luhn-style check."""
        if self.machine_bban is None:
            return False
        return is_valid_machine_bban(self.machine_bban)

    @classmethod
    def from_bban(cls, bban: str, registry: FinnishBankRegistry | None = None) -> Self:
        """Parse a pre-2012 BBAN and convert it to IBAN.

        All non-digit characters are ignored, so ``"123456-785"``,
        ``"123456 785"`` and ``"123456785"`` are equivalent.

        Args:
            bban: BBAN in the ``nnnnnn-nn[nnnnnn]`` format
            registry: Bank registry (defaults to the built-in table)

        Returns:
            Account with IBAN, both BBAN forms and the bank

        Raises:
            InvalidInputError: If ``bban`` is None
            InvalidFormatError: If the digit count is not 8-14 or the
                Luhn-style checksum fails
            UnknownBankError: If no bank matches the prefix
        """
        if bban is None:
            raise InvalidInputError("BBAN is required", field="bban")

        if registry is None:
            registry = DEFAULT_REGISTRY
        digits = _NOT_A_DIGIT.sub("", bban)

        if not MIN_BBAN_DIGITS <= len(digits) <= MAX_BBAN_DIGITS:
            raise InvalidFormatError(
                "Not a valid BBAN account",
                field="bban",
                value=bban,
                constraint=f"{MIN_BBAN_DIGITS}-{MAX_BBAN_DIGITS} digits",
            )

        bank = registry.lookup(digits)
        machine_bban = pad_bban(digits, bank)

        if not is_valid_machine_bban(machine_bban):
            logger.debug("bban_rejected", reason="checksum", bban=bban)
            raise InvalidFormatError(
                "Not a valid BBAN account", field="bban", value=bban, constraint="checksum"
            )

        iban = f"{FINLAND}{compute_check_digits(machine_bban, FINLAND)}{machine_bban}"
        logger.debug("bban_converted", bank=bank.bic, iban=iban)

        return cls(
            iban=iban,
            bank=bank,
            bban=machine_bban_to_human(machine_bban, bank),
            machine_bban=machine_bban,
        )

    @classmethod
    def from_iban(cls, iban: str, registry: FinnishBankRegistry | None = None) -> Self:
        """Create the account from a Finnish IBAN. Whitespace is ignored.

        The IBAN checksum is not verified here; use :attr:`is_valid`.

        Raises:
            InvalidInputError: If ``iban`` is None or empty
            WrongCountryError: If the IBAN is not Finnish
            UnknownBankError: If no bank matches the prefix
        """
        clean = normalize_iban(iban)
        if not clean:
            raise InvalidInputError("IBAN cannot be empty", field="iban")

        if not clean.startswith(FINLAND):
            raise WrongCountryError(
                f"Not a Finnish IBAN, country code is '{clean[:2]}'",
                expected=FINLAND,
                actual=clean[:2],
            )

        if registry is None:
            registry = DEFAULT_REGISTRY
        machine_bban = clean[4:]
        bank = registry.lookup(machine_bban)

        return cls(
            iban=clean,
            bank=bank,
            bban=machine_bban_to_human(machine_bban, bank),
            machine_bban=machine_bban,
        )

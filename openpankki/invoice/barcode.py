"""Finnish bank barcode (pankkiviivakoodi), version 4.

The barcode is a 54-digit string with fixed-position fields:

    ======  =====  ======  ========================================
    start   len    field   content
    ======  =====  ======  ========================================
    0       1      version "4" (IBAN + national reference)
    1       16     iban    IBAN without the "FI" prefix
    17      6      euro    whole euros
    23      2      cent    cents
    25      3      zero    reserved, always "000"
    28      20     ref     reference number, zero padded on the left
    48      6      date    due date as yyMMdd, "000000" if none
    ======  =====  ======  ========================================

Reference: Finanssiala, "Pankkiviivakoodi-opas"
"""

import re
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import NamedTuple, Self

from openpankki.banking.account import FINLAND, FinnishBankAccountNumber
from openpankki.banking.checksum import DIGITS
from openpankki.banking.iban import normalize_iban
from openpankki.exceptions import (
    InvalidBarcodeError,
    InvalidFormatError,
    InvalidInputError,
    OpenPankkiError,
    WrongCountryError,
    wrap_exception,
)
from openpankki.utils.logging import get_logger

from .reference import FinnishReferenceNumber

logger = get_logger(__name__)

BARCODE_LENGTH = 54
BARCODE_VERSION = "4"
DATE_FORMAT = "%y%m%d"
NO_DUE_DATE = "000000"
RESERVED = "000"
MAX_AMOUNT = Decimal("999999.99")
CENT = Decimal("0.01")

_WHITESPACE = re.compile(r"\s+")


class BarcodeField(NamedTuple):
    """Position of one field in the barcode."""

    name: str
    start: int
    length: int

    @property
    def end(self) -> int:
        return self.start + self.length

    def extract(self, barcode: str) -> str:
        return barcode[self.start : self.end]


FIELDS: tuple[BarcodeField, ...] = (
    BarcodeField("version", 0, 1),
    BarcodeField("iban", 1, 16),
    BarcodeField("euro", 17, 6),
    BarcodeField("cent", 23, 2),
    BarcodeField("zero", 25, 3),
    BarcodeField("reference", 28, 20),
    BarcodeField("date", 48, 6),
)


def split_fields(barcode: str) -> dict[str, str]:
    """Slice a 54-character barcode into its raw fields."""
    return {field.name: field.extract(barcode) for field in FIELDS}


def _parse_due_date(value: str) -> date | None:
    """Parse a yyMMdd due date; anything unparseable means no due date."""
    if any(char not in DIGITS for char in value):
        return None
    try:
        return datetime.strptime(value, DATE_FORMAT).date()
    except ValueError:
        return None


@dataclass(frozen=True)
class FinnishInvoiceBarcode:
    """Decoded Finnish invoice barcode.

    Attributes:
        version: Barcode version digit
        iban: Full Finnish IBAN ("FI" + 16 digits)
        euro: Raw whole-euro field
        cent: Raw cent field
        zero: Raw reserved field
        reference_string: Raw 20-digit reference field
        date_string: Raw yyMMdd due date field
        amount: Amount in euros with two decimals
        due_date: Due date, None when the field is zeros or malformed
        account: Account decoded from the IBAN
        reference: Reference decoded from the reference field

    Example:
        >>> barcode = FinnishInvoiceBarcode.parse(
        ...     "421123456000007850000105000000000000000001234561241231"
        ... )
        >>> barcode.amount
        Decimal('10.50')
        >>> barcode.due_date
        datetime.date(2024, 12, 31)
    """

    version: str
    iban: str
    euro: str
    cent: str
    zero: str
    reference_string: str
    date_string: str
    amount: Decimal
    due_date: date | None
    account: FinnishBankAccountNumber
    reference: FinnishReferenceNumber

    @classmethod
    def parse(cls, barcode: str) -> Self:
        """Decode a 54-character barcode. Whitespace is ignored.

        Args:
            barcode: Barcode in plain "486...516" digit format

        Returns:
            Decoded barcode

        Raises:
            InvalidBarcodeError: If the barcode is missing, not 54
                characters long, or a field cannot be decoded; the
                underlying error is chained as ``__cause__``
        """
        try:
            return cls._decode(barcode)
        except (OpenPankkiError, InvalidOperation) as e:
            logger.warning("barcode_decode_failed", error=str(e), error_type=type(e).__name__)
            raise wrap_exception(
                e, "Invalid barcode", exception_class=InvalidBarcodeError
            ) from e

    from_string = parse

    @classmethod
    def _decode(cls, barcode: str) -> Self:
        if barcode is None:
            raise InvalidInputError("Barcode can not be None", field="barcode")

        clean = _WHITESPACE.sub("", barcode)
        if len(clean) != BARCODE_LENGTH:
            raise InvalidBarcodeError(
                f"Barcode length should be {BARCODE_LENGTH}, is {len(clean)}",
                length=len(clean),
            )

        fields = split_fields(clean)
        iban = FINLAND + fields["iban"]

        account = FinnishBankAccountNumber.from_iban(iban)
        reference = FinnishReferenceNumber(fields["reference"])

        if any(char not in DIGITS for char in fields["euro"] + fields["cent"]):
            raise InvalidFormatError(
                "Amount must contain only digits",
                field="amount",
                value=fields["euro"] + fields["cent"],
            )
        amount = (Decimal(fields["euro"]) + Decimal(fields["cent"]) / 100).quantize(CENT)

        return cls(
            version=fields["version"],
            iban=iban,
            euro=fields["euro"],
            cent=fields["cent"],
            zero=fields["zero"],
            reference_string=fields["reference"],
            date_string=fields["date"],
            amount=amount,
            due_date=_parse_due_date(fields["date"]),
            account=account,
            reference=reference,
        )


def compose_barcode(
    iban: str,
    reference: str,
    amount: Decimal | int | str,
    due_date: date | None = None,
    *,
    version: str = BARCODE_VERSION,
) -> str:
    """Build a version 4 barcode string.

    Amounts above 999999.99 are encoded as zero, meaning the payer enters
    the amount manually.

    Args:
        iban: Finnish IBAN (whitespace ignored)
        reference: Valid Finnish reference number (whitespace ignored)
        amount: Amount in euros, at most two decimals
        due_date: Due date, None for "000000"
        version: Barcode version digit

    Returns:
        54-character barcode

    Raises:
        InvalidFormatError: If any field cannot be encoded, including a
            version that is not a single digit
        WrongCountryError: If the IBAN is not Finnish
    """
    if version is None or len(version) != 1 or version not in DIGITS:
        raise InvalidFormatError(
            "Barcode version must be one digit", field="version", value=version
        )

    clean_iban = normalize_iban(iban)
    if not clean_iban.startswith(FINLAND):
        raise WrongCountryError(
            "Barcode requires a Finnish IBAN", expected=FINLAND, actual=clean_iban[:2]
        )
    account_digits = clean_iban[2:]
    if len(account_digits) != 16 or any(char not in DIGITS for char in account_digits):
        raise InvalidFormatError("IBAN format is invalid", field="iban", value=clean_iban)

    ref = FinnishReferenceNumber(_WHITESPACE.sub("", reference or ""))
    if (
        not ref.value
        or len(ref.value) > 20
        or any(char not in DIGITS for char in ref.value)
        or not ref.is_valid
    ):
        raise InvalidFormatError("Reference number is invalid", field="reference", value=reference)

    try:
        value = Decimal(amount)
    except InvalidOperation as e:
        raise InvalidFormatError("Amount is invalid", field="amount", value=amount) from e
    if not value.is_finite() or value < 0:
        raise InvalidFormatError("Amount is invalid", field="amount", value=amount)
    if value > MAX_AMOUNT:
        value = Decimal(0)
    if value != value.quantize(CENT):
        raise InvalidFormatError("Amount is invalid", field="amount", value=amount)
    cents = int(value * 100)

    date_string = due_date.strftime(DATE_FORMAT) if due_date is not None else NO_DUE_DATE

    return "".join(
        (
            version,
            account_digits,
            f"{cents // 100:06d}",
            f"{cents % 100:02d}",
            RESERVED,
            ref.value.zfill(20),
            date_string,
        )
    )

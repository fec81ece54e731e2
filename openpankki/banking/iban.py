"""IBAN validation.

Validation runs the cheap checks first and stops at the first failure:

1. ISO 7064 MOD 97-10 checksum of the rearranged IBAN must equal 1
2. Total length must match the country registry
3. Whole IBAN must match the country pattern (optional, see
   ``Settings.iban_pattern_validation``)
"""

import re

from openpankki.exceptions import InvalidFormatError, InvalidInputError, OpenPankkiError
from openpankki.utils.config import get_settings
from openpankki.utils.logging import get_logger

from .checksum import LETTERS, checksum97
from .iban_formats import IBANFormats

logger = get_logger(__name__)

_WHITESPACE = re.compile(r"\s+")


def normalize_iban(iban: str) -> str:
    """Remove all whitespace from an IBAN.

    Raises:
        InvalidInputError: If ``iban`` is None
    """
    if iban is None:
        raise InvalidInputError("IBAN is required", field="iban")

    return _WHITESPACE.sub("", iban)


def compute_check_digits(bban: str, country_code: str) -> str:
    """Compute the two IBAN check digits for a BBAN.

    The check digits are ``98 - checksum97(bban + country + "00")``, with
    the country code letters expanded to digits (e.g. "FI00" -> "151800").

    Args:
        bban: Domestic account number in machine format
        country_code: ISO 3166-1 alpha-2 country code

    Returns:
        Check digits as a two-character, zero-padded string

    Example:
        >>> compute_check_digits("12345600000785", "FI")
        '21'
    """
    if not country_code or len(country_code) != 2 or any(c not in LETTERS for c in country_code):
        raise InvalidFormatError(
            "Country code must be two uppercase letters",
            field="country_code",
            value=country_code,
        )

    check = 98 - checksum97(f"{bban}{country_code}00")
    return f"{check:02d}"


def is_valid_iban(iban: str, *, check_pattern: bool | None = None) -> bool:
    """Return True if the IBAN is valid. Whitespace is ignored.

    Args:
        iban: IBAN to validate
        check_pattern: Match the country pattern; defaults to the
            process-wide ``Settings.iban_pattern_validation`` flag

    Returns:
        True if checksum, length and (optionally) pattern are all valid.
        Invalid data never raises, it returns False.

    Raises:
        InvalidInputError: If ``iban`` is None

    Example:
        >>> is_valid_iban("FI21 1234 5600 0007 85")
        True
        >>> is_valid_iban("FI21 1234 5600 0007 86")
        False
    """
    clean = normalize_iban(iban)

    if check_pattern is None:
        check_pattern = get_settings().iban_pattern_validation

    try:
        if checksum97(clean[4:] + clean[:4]) != 1:
            logger.debug("iban_rejected", reason="checksum", iban=clean)
            return False

        iban_format = IBANFormats.get_format(clean[:2])
        if iban_format is None:
            logger.debug("iban_rejected", reason="unknown_country", country=clean[:2])
            return False

        if len(clean) != iban_format.length:
            logger.debug(
                "iban_rejected",
                reason="length",
                expected=iban_format.length,
                actual=len(clean),
            )
            return False

        if check_pattern and not iban_format.matches(clean):
            logger.debug("iban_rejected", reason="pattern", country=iban_format.country_code)
            return False

    except OpenPankkiError as e:
        logger.debug("iban_rejected", reason="malformed", error=str(e))
        return False

    return True

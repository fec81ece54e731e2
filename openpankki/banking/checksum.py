"""Checksum algorithms for bank account numbers.

- ISO 7064 MOD 97-10, used by every IBAN.
- The Luhn-style check of pre-2012 Finnish machine-format BBANs.

Both work digit by digit on the string, so arbitrarily long inputs never
need a big-integer parse.
"""

from collections.abc import Iterator

from openpankki.exceptions import InvalidCharacterError, InvalidInputError

DIGITS = "0123456789"
LETTERS = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"

MACHINE_BBAN_LENGTH = 14


def _expand(value: str) -> Iterator[int]:
    """Yield the decimal digits of ``value`` with letters expanded (A=10 ... Z=35)."""
    for position, char in enumerate(value):
        if char in DIGITS:
            yield int(char)
        elif char in LETTERS:
            number = LETTERS.index(char) + 10
            yield number // 10
            yield number % 10
        else:
            raise InvalidCharacterError(
                "Only digits and uppercase letters A-Z are allowed",
                character=char,
                position=position,
            )


def checksum97(value: str) -> int:
    """Compute the ISO 7064 MOD 97-10 checksum of ``value``.

    Each letter A-Z is replaced by its two-digit value 10-35 and the
    resulting digit string is folded left to right as
    ``acc = (acc * 10 + digit) % 97``, seeded with the first digit.

    Args:
        value: Digits and/or uppercase letters

    Returns:
        Checksum in the range 0-96

    Raises:
        InvalidInputError: If ``value`` is None or empty
        InvalidCharacterError: If ``value`` contains anything but 0-9 and A-Z

    Example:
        >>> checksum97("12345600000785151821")
        1
    """
    if value is None:
        raise InvalidInputError("Checksum input is required", field="value")
    if not value:
        raise InvalidInputError("Checksum input cannot be empty", field="value")

    digits = _expand(value)
    checksum = next(digits)
    for digit in digits:
        checksum = (checksum * 10 + digit) % 97

    return checksum


def is_valid_machine_bban(bban: str) -> bool:
    """Luhn-style validation of a 14-digit Finnish machine BBAN.

    Digits at even indexes (0, 2, ..., 12) are doubled, subtracting 9 when
    the result exceeds 9; the BBAN is valid when the digit sum is divisible
    by 10. Only the first 14 characters are inspected.

    Args:
        bban: Machine-format BBAN (14 digits, no separators)

    Returns:
        True if the checksum holds, False if it fails or the input is
        shorter than 14 characters

    Raises:
        InvalidInputError: If ``bban`` is None
        InvalidCharacterError: If one of the 14 checked characters is not a digit
    """
    if bban is None:
        raise InvalidInputError("BBAN is required", field="bban")

    if len(bban) < MACHINE_BBAN_LENGTH:
        return False

    total = 0
    for index, char in enumerate(bban[:MACHINE_BBAN_LENGTH]):
        if char not in DIGITS:
            raise InvalidCharacterError(
                "BBAN must contain only digits", character=char, position=index
            )
        digit = int(char)
        if index % 2 == 0:
            digit *= 2
            if digit > 9:
                digit -= 9
        total += digit

    return total % 10 == 0

"""Finnish creditor reference numbers (viitenumero).

The check digit is computed with the 7-3-1 method:

1. The base digits are multiplied right to left by the weights 7, 3, 1, ...
2. The products are summed
3. The check digit is ``10 - (sum % 10)``

A sum divisible by 10 yields 10, which no single trailing digit can equal,
so such references are always rejected.
"""

import itertools
import re
from dataclasses import dataclass
from typing import Self

from openpankki.banking.checksum import DIGITS
from openpankki.exceptions import InvalidCharacterError, InvalidFormatError, InvalidInputError
from openpankki.utils.logging import get_logger

logger = get_logger(__name__)

WEIGHTS = (7, 3, 1)
PRINT_GROUP_SIZE = 5

_WHITESPACE = re.compile(r"\s+")


def reference_check_value(base: str) -> int:
    """Compute ``10 - (weighted sum % 10)`` for the base digits of a reference.

    Args:
        base: Reference digits without the check digit

    Returns:
        Check value in the range 1-10

    Raises:
        InvalidCharacterError: If ``base`` contains a non-digit
    """
    total = 0
    weights = itertools.cycle(WEIGHTS)
    for index, char in enumerate(reversed(base)):
        if char not in DIGITS:
            raise InvalidCharacterError(
                "Reference number must contain only digits",
                character=char,
                position=len(base) - 1 - index,
            )
        total += next(weights) * int(char)

    return 10 - (total % 10)


def is_valid_reference(reference: str) -> bool:
    """Validate a Finnish invoice reference number. Whitespace is ignored.

    Args:
        reference: Reference number including the check digit

    Returns:
        True if the last digit matches the 7-3-1 check digit

    Raises:
        InvalidInputError: If ``reference`` is None
        InvalidCharacterError: If the base digits contain a non-digit

    Example:
        >>> is_valid_reference("1234561")
        True
        >>> is_valid_reference("1234562")
        False
    """
    if reference is None:
        raise InvalidInputError("Reference number is required", field="reference")

    clean = _WHITESPACE.sub("", reference)
    if not clean:
        return False

    check = reference_check_value(clean[:-1])
    return clean[-1] == str(check)


def group_right(number: str, group_size: int = PRINT_GROUP_SIZE) -> str:
    """Split ``number`` into space separated groups counted from the right."""
    groups: list[str] = []
    while number:
        groups.insert(0, number[-group_size:])
        number = number[:-group_size]
    return " ".join(groups)


@dataclass(frozen=True)
class ReferenceNumber:
    """Payment reference as printed on an invoice.

    Attributes:
        value: Reference exactly as given
    """

    value: str

    def __post_init__(self) -> None:
        if self.value is None:
            raise InvalidInputError("Reference number is required", field="reference")

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class FinnishReferenceNumber(ReferenceNumber):
    """Finnish national reference number.

    Validity is derived on access, never stored.

    Example:
        >>> ref = FinnishReferenceNumber("00000000000001234561")
        >>> ref.is_valid
        True
        >>> ref.for_print
        '12 34561'
    """

    @property
    def is_valid(self) -> bool:
        """True if the check digit is correct."""
        return is_valid_reference(self.value)

    @property
    def for_print(self) -> str:
        """Reference in print format: no leading zeros, groups of five from the right."""
        clean = _WHITESPACE.sub("", self.value)
        return group_right(clean.lstrip("0"))

    @classmethod
    def with_check_digit(cls, base: str) -> Self:
        """Create a reference by appending the check digit to ``base``.

        Raises:
            InvalidInputError: If ``base`` is None or empty
            InvalidCharacterError: If ``base`` contains a non-digit
            InvalidFormatError: If the base has no single-digit check digit
        """
        if base is None:
            raise InvalidInputError("Reference base is required", field="base")

        clean = _WHITESPACE.sub("", base)
        if not clean:
            raise InvalidInputError("Reference base cannot be empty", field="base")

        check = reference_check_value(clean)
        if check == 10:
            logger.debug("reference_base_rejected", reference=clean)
            raise InvalidFormatError(
                "Reference base has no valid check digit",
                field="base",
                value=clean,
                constraint="weighted sum not divisible by 10",
            )

        return cls(f"{clean}{check}")

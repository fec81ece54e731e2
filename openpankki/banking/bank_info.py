"""Bank identity value objects.

Banks are frozen dataclasses compared by value; one instance is shared by
every account number the registry resolves to it.
"""

from dataclasses import dataclass

from openpankki.exceptions import InvalidFormatError, InvalidInputError

BIC_LENGTHS = (8, 11)
PRIMARY_OFFICE_BRANCH = "XXX"
FINNISH_BBAN_OFFSETS = (6, 7)


@dataclass(frozen=True)
class BankInfo:
    """Bank identified by its ISO 9362 Business Identifier Code (SWIFT code).

    Attributes:
        bic: 8 or 11 character BIC, stored uppercase
        name: Display name of the bank
    """

    bic: str
    name: str | None = None

    def __post_init__(self) -> None:
        """Validate and normalize the BIC."""
        if self.bic is None:
            raise InvalidInputError("BIC is required", field="bic")

        if len(self.bic) not in BIC_LENGTHS:
            raise InvalidFormatError(
                "Length of BIC is 8 or 11 as per ISO 9362",
                field="bic",
                value=self.bic,
                constraint="len in (8, 11)",
            )

        object.__setattr__(self, "bic", self.bic.upper())

    @property
    def bank_code(self) -> str:
        """Four-letter bank code."""
        return self.bic[:4]

    @property
    def country(self) -> str:
        """ISO 3166-1 alpha-2 country code."""
        return self.bic[4:6]

    @property
    def location_code(self) -> str:
        """Two-character location code."""
        return self.bic[6:8]

    @property
    def branch_code(self) -> str:
        """Branch code, "XXX" for a primary office BIC."""
        if len(self.bic) == 8:
            return PRIMARY_OFFICE_BRANCH
        return self.bic[8:11]

    @property
    def is_primary_office(self) -> bool:
        """True if the BIC identifies the primary office of the bank."""
        return len(self.bic) == 8

    def __str__(self) -> str:
        return self.bic


@dataclass(frozen=True)
class FinnishBankInfo(BankInfo):
    """Finnish bank with the layout of its pre-2012 domestic account numbers.

    Attributes:
        bban_offset: Position in the 14-digit machine BBAN where the free
            account digits begin (6 for most banks, 7 for the savings and
            cooperative bank groups)
    """

    bban_offset: int = 6

    def __post_init__(self) -> None:
        super().__post_init__()
        if self.bban_offset not in FINNISH_BBAN_OFFSETS:
            raise InvalidFormatError(
                "BBAN offset must be 6 or 7",
                field="bban_offset",
                value=self.bban_offset,
            )

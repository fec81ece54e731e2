"""Finnish bank registry keyed by account number prefix.

Finnish domestic account numbers start with a 1-3 digit bank prefix. The
lookup tries the 1-digit prefix first, then 2 and 3 digits; the shortest
match wins, so a 1-digit entry takes priority over any longer prefix that
shares its leading digit.
"""

from collections.abc import Mapping
from types import MappingProxyType

from openpankki.exceptions import ConfigurationError, InvalidInputError, UnknownBankError
from openpankki.utils.logging import get_logger

from .bank_info import FinnishBankInfo
from .checksum import DIGITS

logger = get_logger(__name__)

PREFIX_LENGTHS = (1, 2, 3)


class FinnishBankRegistry:
    """Read-only mapping from account prefix to :class:`FinnishBankInfo`.

    Example:
        >>> registry = FinnishBankRegistry.default()
        >>> registry.lookup("12345600000785").bic
        'NDEAFIHH'
    """

    def __init__(self, banks: Mapping[str, FinnishBankInfo]) -> None:
        """Initialize registry.

        Args:
            banks: Prefix (1-3 digit string) to bank mapping
        """
        for prefix in banks:
            if len(prefix) not in PREFIX_LENGTHS or any(c not in DIGITS for c in prefix):
                raise ConfigurationError(
                    "Bank prefix must be 1-3 digits", setting="banks", expected=repr(prefix)
                )
        self._banks: Mapping[str, FinnishBankInfo] = MappingProxyType(dict(banks))

    @classmethod
    def default(cls) -> "FinnishBankRegistry":
        """Registry with the built-in Finnish bank table."""
        return DEFAULT_REGISTRY

    @property
    def banks(self) -> Mapping[str, FinnishBankInfo]:
        """Prefix to bank mapping (read-only)."""
        return self._banks

    def find(self, account_number: str) -> FinnishBankInfo | None:
        """Find the bank for an account number, None if no prefix matches."""
        for length in PREFIX_LENGTHS:
            if len(account_number) < length:
                break
            bank = self._banks.get(account_number[:length])
            if bank is not None:
                return bank
        return None

    def lookup(self, account_number: str) -> FinnishBankInfo:
        """Find the bank for an account number.

        Args:
            account_number: Machine BBAN or any digit string starting with
                the bank prefix

        Returns:
            Matching bank

        Raises:
            InvalidInputError: If ``account_number`` is None
            UnknownBankError: If none of the 1, 2 or 3 digit prefixes match
        """
        if account_number is None:
            raise InvalidInputError("Account number is required", field="account_number")

        bank = self.find(account_number)
        if bank is None:
            logger.debug("bank_not_found", prefix=account_number[:3])
            raise UnknownBankError(
                "Could not find a corresponding bank", prefix=account_number[:3]
            )

        return bank

    def __contains__(self, prefix: object) -> bool:
        return prefix in self._banks

    def __len__(self) -> int:
        return len(self._banks)

    def __repr__(self) -> str:
        return f"<FinnishBankRegistry(banks={len(self._banks)})>"


# Source: Finanssiala, "Suomalaiset rahalaitostunnukset ja BIC-koodit"
DEFAULT_FINNISH_BANKS: Mapping[str, FinnishBankInfo] = MappingProxyType(
    {
        "1": FinnishBankInfo("NDEAFIHH", "Nordea Pankki", bban_offset=6),
        "2": FinnishBankInfo("NDEAFIHH", "Nordea Pankki", bban_offset=6),
        "31": FinnishBankInfo("HANDFIHH", "Handelsbanken", bban_offset=6),
        "33": FinnishBankInfo("ESSEFIHX", "Skandinaviska Enskilda Banken", bban_offset=6),
        "34": FinnishBankInfo("DABAFIHX", "Danske Bank", bban_offset=6),
        "36": FinnishBankInfo("TAPIFI22", "Tapiola Pankki", bban_offset=6),
        "37": FinnishBankInfo("DNBAFIHX", "DNB Bank ASA, Finland Branch", bban_offset=6),
        "38": FinnishBankInfo("SWEDFIHH", "Swedbank", bban_offset=6),
        "39": FinnishBankInfo("SBANFIHH", "S-Pankki", bban_offset=6),
        "4": FinnishBankInfo(
            "HELSFIHH", "Aktia Pankki, Säästöpankit (Sp) ja POP", bban_offset=7
        ),
        "5": FinnishBankInfo("OKOYFIHH", "OP-Pohjola (Osuuspankki)", bban_offset=7),
        "6": FinnishBankInfo("AABAFI22", "Ålandsbanken", bban_offset=6),
        # IBAN only
        "711": FinnishBankInfo("BSUIFIHH", "Calyon", bban_offset=6),
        "713": FinnishBankInfo("CITIFIHX", "Citibank", bban_offset=6),
        "715": FinnishBankInfo("ITELFIHH", "Itella Pankki", bban_offset=6),
        "8": FinnishBankInfo("DABAFIHH", "Sampo Pankki", bban_offset=6),
    }
)

DEFAULT_REGISTRY = FinnishBankRegistry(DEFAULT_FINNISH_BANKS)

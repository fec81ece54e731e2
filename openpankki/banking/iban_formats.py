"""IBAN formats for every country in the SWIFT IBAN registry used by OpenPankki.

Each entry gives the total IBAN length and the structural pattern of the
country's IBAN: two check digits followed by fixed-width numeric (``\\d``),
alphabetic (``[A-Z]``) or alphanumeric (``[A-Z0-9]``) groups.

Source: SWIFT IBAN Registry
Reference: https://www.swift.com/standards/data-standards/iban-international-bank-account-number
"""

import re
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import ClassVar


@dataclass(frozen=True)
class IBANFormat:
    """IBAN format specification for a specific country.

    Attributes:
        country_code: ISO 3166-1 alpha-2 code (e.g., "FI", "DE")
        country_name: Full country name in English
        length: Total IBAN length including country code and check digits
        pattern: Regex pattern (excluding country code), None if the country
            has no registered structure
    """

    country_code: str
    country_name: str
    length: int
    pattern: str | None = None
    _regex: re.Pattern[str] | None = field(
        default=None, init=False, repr=False, compare=False, hash=False
    )

    def __post_init__(self) -> None:
        if self.pattern is not None:
            object.__setattr__(self, "_regex", re.compile(self.full_pattern))

    @property
    def full_pattern(self) -> str | None:
        """Get complete regex pattern including country code.

        Returns:
            Full regex pattern like "FI\\d{2}\\d{6}\\d{7}\\d{1}"
        """
        if self.pattern is None:
            return None
        return f"{self.country_code}{self.pattern}"

    def matches(self, iban: str) -> bool:
        """Check that the whole (normalized) IBAN matches the country pattern.

        Countries without a registered pattern accept any string.
        """
        if self._regex is None:
            return True
        return self._regex.fullmatch(iban) is not None


class IBANFormats:
    """Registry of IBAN formats with lookup utilities.

    The registry is read-only: ``FORMATS`` is a mapping proxy built once at
    import time.

    Usage:
        >>> IBANFormats.detect_country("FI2112345600000785")
        'FI'
        >>> IBANFormats.validate_length("DE89370400440532013000")
        True
    """

    FORMATS: ClassVar[MappingProxyType[str, IBANFormat]] = MappingProxyType(
        {
            fmt.country_code: fmt
            for fmt in (
                # Nordic countries
                IBANFormat("FI", "Finland", 18, r"\d{2}\d{6}\d{7}\d{1}"),
                IBANFormat("SE", "Sweden", 24, r"\d{2}\d{3}\d{16}\d{1}"),
                IBANFormat("NO", "Norway", 15, r"\d{2}\d{4}\d{6}\d{1}"),
                IBANFormat("DK", "Denmark", 18, r"\d{2}\d{4}\d{9}\d{1}"),
                IBANFormat("IS", "Iceland", 26, r"\d{2}\d{4}\d{2}\d{6}\d{10}"),
                IBANFormat("FO", "Faroe Islands", 18, r"\d{2}\d{4}\d{9}\d{1}"),
                IBANFormat("GL", "Greenland", 18, r"\d{2}\d{4}\d{9}\d{1}"),
                # Baltic states
                IBANFormat("EE", "Estonia", 20, r"\d{2}\d{2}\d{2}\d{11}\d{1}"),
                IBANFormat("LV", "Latvia", 21, r"\d{2}[A-Z]{4}[A-Z0-9]{13}"),
                IBANFormat("LT", "Lithuania", 20, r"\d{2}\d{5}\d{11}"),
                # Western Europe
                IBANFormat("DE", "Germany", 22, r"\d{2}\d{8}\d{10}"),
                IBANFormat("FR", "France", 27, r"\d{2}\d{5}\d{5}[A-Z0-9]{11}\d{2}"),
                IBANFormat("NL", "Netherlands", 18, r"\d{2}[A-Z]{4}\d{10}"),
                IBANFormat("BE", "Belgium", 16, r"\d{2}\d{3}\d{7}\d{2}"),
                IBANFormat("LU", "Luxembourg", 20, r"\d{2}\d{3}[A-Z0-9]{13}"),
                IBANFormat("AT", "Austria", 20, r"\d{2}\d{5}\d{11}"),
                IBANFormat("CH", "Switzerland", 21, r"\d{2}\d{5}[A-Z0-9]{12}"),
                IBANFormat("LI", "Liechtenstein", 21, r"\d{2}\d{5}[A-Z0-9]{12}"),
                IBANFormat("MC", "Monaco", 27, r"\d{2}\d{5}\d{5}[A-Z0-9]{11}\d{2}"),
                IBANFormat("GB", "United Kingdom", 22, r"\d{2}[A-Z]{4}\d{6}\d{8}"),
                IBANFormat("IE", "Ireland", 22, r"\d{2}[A-Z]{4}\d{6}\d{8}"),
                IBANFormat("GI", "Gibraltar", 23, r"\d{2}[A-Z]{4}[A-Z0-9]{15}"),
                # Southern Europe
                IBANFormat("IT", "Italy", 27, r"\d{2}[A-Z]{1}\d{5}\d{5}[A-Z0-9]{12}"),
                IBANFormat("SM", "San Marino", 27, r"\d{2}[A-Z]{1}\d{5}\d{5}[A-Z0-9]{12}"),
                IBANFormat("ES", "Spain", 24, r"\d{2}\d{4}\d{4}\d{1}\d{1}\d{10}"),
                IBANFormat("PT", "Portugal", 25, r"\d{2}\d{4}\d{4}\d{11}\d{2}"),
                IBANFormat("AD", "Andorra", 24, r"\d{2}\d{4}\d{4}[A-Z0-9]{12}"),
                IBANFormat("GR", "Greece", 27, r"\d{2}\d{3}\d{4}[A-Z0-9]{16}"),
                IBANFormat("MT", "Malta", 31, r"\d{2}[A-Z]{4}\d{5}[A-Z0-9]{18}"),
                IBANFormat("CY", "Cyprus", 28, r"\d{2}\d{3}\d{5}[A-Z0-9]{16}"),
                # Central and Eastern Europe
                IBANFormat("PL", "Poland", 28, r"\d{2}\d{8}\d{16}"),
                IBANFormat("CZ", "Czech Republic", 24, r"\d{2}\d{4}\d{6}\d{10}"),
                IBANFormat("SK", "Slovakia", 24, r"\d{2}\d{4}\d{6}\d{10}"),
                IBANFormat("HU", "Hungary", 28, r"\d{2}\d{3}\d{4}\d{1}\d{15}\d{1}"),
                IBANFormat("SI", "Slovenia", 19, r"\d{2}\d{5}\d{8}\d{2}"),
                IBANFormat("HR", "Croatia", 21, r"\d{2}\d{7}\d{10}"),
                IBANFormat("RO", "Romania", 24, r"\d{2}[A-Z]{4}[A-Z0-9]{16}"),
                IBANFormat("BG", "Bulgaria", 22, r"\d{2}[A-Z]{4}\d{4}\d{2}[A-Z0-9]{8}"),
                IBANFormat("RS", "Serbia", 22, r"\d{2}\d{3}\d{13}\d{2}"),
                IBANFormat("ME", "Montenegro", 22, r"\d{2}\d{3}\d{13}\d{2}"),
                IBANFormat("BA", "Bosnia and Herzegovina", 20, r"\d{2}\d{3}\d{3}\d{8}\d{2}"),
                IBANFormat("MK", "North Macedonia", 19, r"\d{2}\d{3}[A-Z0-9]{10}\d{2}"),
                IBANFormat("AL", "Albania", 28, r"\d{2}\d{8}[A-Z0-9]{16}"),
                IBANFormat("MD", "Moldova", 24, r"\d{2}[A-Z0-9]{20}"),
                IBANFormat("TR", "Turkey", 26, r"\d{2}\d{5}[A-Z0-9]{1}[A-Z0-9]{16}"),
                # Caucasus and Central Asia
                IBANFormat("GE", "Georgia", 22, r"\d{2}[A-Z]{2}\d{16}"),
                IBANFormat("AZ", "Azerbaijan", 28, r"\d{2}[A-Z]{4}[A-Z0-9]{20}"),
                IBANFormat("KZ", "Kazakhstan", 20, r"\d{2}\d{3}[A-Z0-9]{13}"),
                # Middle East
                IBANFormat("IL", "Israel", 23, r"\d{2}\d{3}\d{3}\d{13}"),
                IBANFormat("LB", "Lebanon", 28, r"\d{2}\d{4}[A-Z0-9]{20}"),
                IBANFormat("PS", "Palestine", 29, r"\d{2}[A-Z]{4}[A-Z0-9]{21}"),
                IBANFormat("SA", "Saudi Arabia", 24, r"\d{2}\d{2}[A-Z0-9]{18}"),
                IBANFormat("AE", "United Arab Emirates", 23, r"\d{2}\d{3}\d{16}"),
                IBANFormat("BH", "Bahrain", 22, r"\d{2}[A-Z]{4}[A-Z0-9]{14}"),
                IBANFormat("KW", "Kuwait", 30, r"\d{2}[A-Z]{4}[A-Z0-9]{22}"),
                IBANFormat("QA", "Qatar", 29, r"\d{2}[A-Z]{4}[A-Z0-9]{21}"),
                IBANFormat("PK", "Pakistan", 24, r"\d{2}[A-Z]{4}[A-Z0-9]{16}"),
                # Africa
                IBANFormat("TN", "Tunisia", 24, r"\d{2}\d{2}\d{3}\d{13}\d{2}"),
                IBANFormat("MR", "Mauritania", 27, r"\d{2}\d{5}\d{5}\d{11}\d{2}"),
                IBANFormat(
                    "MU",
                    "Mauritius",
                    30,
                    r"\d{2}[A-Z]{4}\d{2}\d{2}\d{12}\d{3}[A-Z]{3}",
                ),
                # Americas
                IBANFormat(
                    "BR",
                    "Brazil",
                    29,
                    r"\d{2}\d{8}\d{5}\d{10}[A-Z]{1}[A-Z0-9]{1}",
                ),
                IBANFormat("CR", "Costa Rica", 21, r"\d{2}\d{3}\d{14}"),
                IBANFormat("DO", "Dominican Republic", 28, r"\d{2}[A-Z0-9]{4}\d{20}"),
                IBANFormat("GT", "Guatemala", 28, r"\d{2}[A-Z0-9]{4}[A-Z0-9]{20}"),
                IBANFormat("VG", "British Virgin Islands", 24, r"\d{2}[A-Z]{4}\d{16}"),
            )
        }
    )

    @classmethod
    def get_format(cls, country_code: str) -> IBANFormat | None:
        """Get the format for a country code, None if not registered."""
        return cls.FORMATS.get(country_code.upper())

    @classmethod
    def detect_country(cls, iban: str) -> str | None:
        """Detect country code from IBAN string.

        Args:
            iban: IBAN string (normalized, case-insensitive)

        Returns:
            ISO 3166-1 alpha-2 country code if registered,
            None if IBAN is too short or country unknown

        Example:
            >>> IBANFormats.detect_country("FI2112345600000785")
            'FI'
            >>> IBANFormats.detect_country("XX1234567890") is None
            True
        """
        if not iban or len(iban) < 2:
            return None

        country_code = iban[:2].upper()
        return country_code if country_code in cls.FORMATS else None

    @classmethod
    def validate_length(cls, iban: str) -> bool:
        """Validate IBAN length matches country-specific format.

        IBAN lengths vary from 15 (Norway) to 31 (Malta) characters.

        Args:
            iban: IBAN string (normalized: no whitespace)

        Returns:
            True if length matches expected format for detected country,
            False if country not recognized or length mismatch
        """
        country_code = cls.detect_country(iban)
        if not country_code:
            return False

        return len(iban) == cls.FORMATS[country_code].length

    @classmethod
    def validate_pattern(cls, iban: str) -> bool:
        """Validate IBAN structure against the country pattern.

        Returns:
            True if the country has no pattern or the IBAN matches it,
            False if country not recognized or the IBAN does not match
        """
        country_code = cls.detect_country(iban)
        if not country_code:
            return False

        return cls.FORMATS[country_code].matches(iban)

    @classmethod
    def get_country_name(cls, iban: str) -> str | None:
        """Get full country name from IBAN.

        Example:
            >>> IBANFormats.get_country_name("FI2112345600000785")
            'Finland'
        """
        country_code = cls.detect_country(iban)
        if not country_code:
            return None

        return cls.FORMATS[country_code].country_name

    @classmethod
    def list_supported_countries(cls) -> list[str]:
        """Get sorted list of all supported country codes."""
        return sorted(cls.FORMATS.keys())

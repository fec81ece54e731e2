"""Standardized exception hierarchy for OpenPankki.

Two families of failures exist side by side:

- Contract violations (missing input, wrong country, unknown bank) are raised
  as exceptions from this module.
- Data that merely fails a checksum is reported by the boolean validators
  (``is_valid_iban``, ``is_valid_reference``) returning ``False``.

Usage:
    from openpankki.exceptions import InvalidFormatError, UnknownBankError

    try:
        account = FinnishBankAccountNumber.from_bban(raw)
    except UnknownBankError as e:
        logger.warning("unknown_bank", error=str(e), context=e.context)
"""

from __future__ import annotations

from typing import Any


class OpenPankkiError(Exception):
    """Base exception for all OpenPankki errors.

    Attributes:
        message: Human-readable error message
        context: Additional context for debugging (dict)
        original_error: Original exception if wrapped
    """

    def __init__(
        self,
        message: str,
        *,
        context: dict[str, Any] | None = None,
        original_error: Exception | None = None,
    ) -> None:
        """Initialize exception with rich context.

        Args:
            message: Human-readable error description
            context: Additional structured data for debugging
            original_error: Original exception if this wraps another error
        """
        super().__init__(message)
        self.message = message
        self.context = context or {}
        self.original_error = original_error

    def __str__(self) -> str:
        """Format exception with context for logging."""
        base = self.message
        if self.context:
            ctx_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            base = f"{base} ({ctx_str})"
        if self.original_error:
            base = f"{base} [caused by: {type(self.original_error).__name__}]"
        return base

    def __repr__(self) -> str:
        """Developer-friendly representation."""
        return f"{self.__class__.__name__}(message={self.message!r}, context={self.context!r})"


# =============================================================================
# Validation & Input Errors
# =============================================================================


class ValidationError(OpenPankkiError):
    """Raised when an identifier cannot be parsed or converted."""

    def __init__(
        self,
        message: str,
        *,
        field: str | None = None,
        value: Any = None,
        constraint: str | None = None,
        **kwargs: Any,
    ) -> None:
        """Initialize validation error.

        Args:
            message: Error description
            field: Name of the invalid field
            value: The invalid value (truncated in context)
            constraint: Validation constraint that was violated
            **kwargs: Additional context
        """
        context = kwargs.get("context", {})
        if field:
            context["field"] = field
        if value is not None:
            context["value"] = str(value)[:100]
        if constraint:
            context["constraint"] = constraint
        kwargs["context"] = context
        super().__init__(message, **kwargs)


class InvalidInputError(ValidationError):
    """Raised when a required value is missing or empty."""


class InvalidFormatError(ValidationError):
    """Raised when a value has the wrong length, digit count or checksum."""


class UnknownBankError(InvalidFormatError):
    """Raised when no bank registry prefix matches an account number."""

    def __init__(self, message: str, *, prefix: str | None = None, **kwargs: Any) -> None:
        context = kwargs.get("context", {})
        if prefix:
            context["prefix"] = prefix
        kwargs["context"] = context
        super().__init__(message, **kwargs)


class WrongCountryError(ValidationError):
    """Raised when an IBAN belongs to a different country than expected."""

    def __init__(
        self,
        message: str,
        *,
        expected: str | None = None,
        actual: str | None = None,
        **kwargs: Any,
    ) -> None:
        context = kwargs.get("context", {})
        if expected:
            context["expected"] = expected
        if actual is not None:
            context["actual"] = actual
        kwargs["context"] = context
        super().__init__(message, **kwargs)


class InvalidCharacterError(ValidationError):
    """Raised when a non-digit (or non-alphanumeric) character is found."""

    def __init__(
        self,
        message: str,
        *,
        character: str | None = None,
        position: int | None = None,
        **kwargs: Any,
    ) -> None:
        context = kwargs.get("context", {})
        if character is not None:
            context["character"] = repr(character)
        if position is not None:
            context["position"] = position
        kwargs["context"] = context
        super().__init__(message, **kwargs)


class InvalidBarcodeError(OpenPankkiError):
    """Raised when an invoice barcode cannot be decoded.

    The underlying failure (wrong length, bad account, bad amount) is kept
    in ``original_error`` and chained as ``__cause__``.
    """

    def __init__(self, message: str, *, length: int | None = None, **kwargs: Any) -> None:
        context = kwargs.get("context", {})
        if length is not None:
            context["length"] = length
        kwargs["context"] = context
        super().__init__(message, **kwargs)


class ConfigurationError(OpenPankkiError):
    """Raised when application configuration is invalid."""

    def __init__(
        self,
        message: str,
        *,
        setting: str | None = None,
        expected: str | None = None,
        **kwargs: Any,
    ) -> None:
        context = kwargs.get("context", {})
        if setting:
            context["setting"] = setting
        if expected:
            context["expected"] = expected
        kwargs["context"] = context
        super().__init__(message, **kwargs)


# =============================================================================
# Utility Functions
# =============================================================================


def wrap_exception(
    error: Exception,
    message: str,
    *,
    exception_class: type[OpenPankkiError] = OpenPankkiError,
    **context: Any,
) -> OpenPankkiError:
    """Wrap an exception in the OpenPankki hierarchy.

    Args:
        error: Original exception to wrap
        message: Human-readable description
        exception_class: Which OpenPankki exception to use
        **context: Additional context to attach

    Returns:
        Wrapped exception with original error preserved

    Example:
        try:
            amount = Decimal(euro)
        except InvalidOperation as e:
            raise wrap_exception(
                e, "Invalid barcode.", exception_class=InvalidBarcodeError
            ) from e
    """
    return exception_class(
        message,
        context=context,
        original_error=error,
    )


__all__ = [
    "OpenPankkiError",
    "ValidationError",
    "InvalidInputError",
    "InvalidFormatError",
    "UnknownBankError",
    "WrongCountryError",
    "InvalidCharacterError",
    "InvalidBarcodeError",
    "ConfigurationError",
    "wrap_exception",
]

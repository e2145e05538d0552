"""Custom exceptions for invoice-records."""

from typing import Any


class InvoiceRecordsError(Exception):
    """Base exception for all invoice-records errors."""

    pass


# ============================================================================
# Record errors
# ============================================================================


class RecordError(InvoiceRecordsError):
    """Raised when a delimited string cannot be parsed into a record."""

    def __init__(
        self,
        message: str,
        record_name: str | None = None,
        text: str | None = None,
    ) -> None:
        super().__init__(message)
        self.record_name = record_name
        self.text = text


class MalformedPairError(RecordError):
    """Raised when a key:value segment does not split into exactly two parts."""

    def __init__(
        self,
        message: str,
        record_name: str | None = None,
        text: str | None = None,
        accepted_aliases: dict[str, list[str]] | None = None,
    ) -> None:
        super().__init__(message, record_name=record_name, text=text)
        self.accepted_aliases = accepted_aliases or {}


class UnknownKeyError(RecordError):
    """Raised when a key matches none of the record's declared aliases."""

    def __init__(
        self,
        message: str,
        key: str,
        record_name: str | None = None,
        text: str | None = None,
        accepted_aliases: dict[str, list[str]] | None = None,
    ) -> None:
        super().__init__(message, record_name=record_name, text=text)
        self.key = key
        self.accepted_aliases = accepted_aliases or {}


class DuplicateFieldError(RecordError):
    """Raised when the same field is assigned twice within one record."""

    def __init__(
        self,
        message: str,
        field_name: str,
        record_name: str | None = None,
        text: str | None = None,
    ) -> None:
        super().__init__(message, record_name=record_name, text=text)
        self.field_name = field_name


class MissingFieldsError(RecordError):
    """Raised when required fields are left empty after defaulting."""

    def __init__(
        self,
        message: str,
        missing: list[str],
        declared: list[str],
        record_name: str | None = None,
        text: str | None = None,
    ) -> None:
        super().__init__(message, record_name=record_name, text=text)
        self.missing = missing
        self.declared = declared


class InvalidEmailError(RecordError):
    """Raised when an email field does not look like an email address."""

    pass


class InvalidBankFieldError(RecordError):
    """Raised when an account number or sort code breaks its format rules."""

    def __init__(
        self,
        message: str,
        field_name: str,
        violations: list[str],
        record_name: str | None = None,
        text: str | None = None,
    ) -> None:
        super().__init__(message, record_name=record_name, text=text)
        self.field_name = field_name
        self.violations = violations


class NotANumberError(RecordError):
    """Raised when an unsigned integer field holds something else."""

    pass


# ============================================================================
# Money errors
# ============================================================================


class MoneyError(InvoiceRecordsError):
    """Base class for money parsing and arithmetic errors."""

    def __init__(self, message: str, text: str | None = None) -> None:
        super().__init__(message)
        self.text = text


class NotMoneyError(MoneyError):
    """Raised when text does not have the shape of a money amount."""

    pass


class UnknownCurrencyError(MoneyError):
    """Raised when a currency marker resolves to nothing in the registry."""

    def __init__(self, message: str, marker: str, text: str | None = None) -> None:
        super().__init__(message, text=text)
        self.marker = marker


class UnsupportedCurrencyError(MoneyError):
    """Raised when money arithmetic is attempted in a currency outside the registry."""

    def __init__(self, message: str, currency: Any = None) -> None:
        super().__init__(message)
        self.currency = currency


# ============================================================================
# Invoice errors
# ============================================================================


class InvalidDateError(InvoiceRecordsError):
    """Raised when a date is not in D/M/YYYY format."""

    def __init__(self, message: str, text: str | None = None) -> None:
        super().__init__(message)
        self.text = text


class RequiredFieldsError(InvoiceRecordsError):
    """Raised when an invoice is assembled without From, To or Items."""

    def __init__(self, message: str, missing: list[str]) -> None:
        super().__init__(message)
        self.missing = missing

"""Core parsing functionality: configuration, errors and the delimiter grammar."""

from invoice_records.core.config import ParserConfig
from invoice_records.core.exceptions import (
    DuplicateFieldError,
    InvalidBankFieldError,
    InvalidDateError,
    InvalidEmailError,
    InvoiceRecordsError,
    MalformedPairError,
    MissingFieldsError,
    MoneyError,
    NotANumberError,
    NotMoneyError,
    RecordError,
    RequiredFieldsError,
    UnknownCurrencyError,
    UnknownKeyError,
    UnsupportedCurrencyError,
)

__all__ = [
    "ParserConfig",
    "InvoiceRecordsError",
    "RecordError",
    "MalformedPairError",
    "UnknownKeyError",
    "DuplicateFieldError",
    "MissingFieldsError",
    "InvalidEmailError",
    "InvalidBankFieldError",
    "NotANumberError",
    "MoneyError",
    "NotMoneyError",
    "UnknownCurrencyError",
    "UnsupportedCurrencyError",
    "InvalidDateError",
    "RequiredFieldsError",
]

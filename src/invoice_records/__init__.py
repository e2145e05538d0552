"""
invoice-records: Parse human-typed delimited text into validated invoice records.
"""

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
from invoice_records.core.grammar import (
    FIELD_SEPARATOR,
    KEY_VALUE_SEPARATOR,
    LIST_VALUE_SEPARATOR,
    RECORD_SEPARATOR,
)

# Money
from invoice_records.money import (
    DEFAULT_REGISTRY,
    GREAT_BRITISH_POUND,
    UNITED_STATES_DOLLAR,
    ZERO_CURRENCY,
    Currency,
    CurrencyRegistry,
    Money,
    parse_money,
    to_money,
)

# Records
from invoice_records.records import (
    AliasTable,
    BankDetails,
    Contact,
    FieldKind,
    FieldSpec,
    ItemList,
    LineItem,
    Record,
    RecordParser,
    parse_list,
    parse_record,
    resolve_and_coerce,
)

# Invoice
from invoice_records.schemas import Invoice, format_date, parse_date

__version__ = "0.1.0"

__all__ = [
    # Core
    "ParserConfig",
    "RecordParser",
    "parse_record",
    "parse_list",
    # Grammar
    "RECORD_SEPARATOR",
    "FIELD_SEPARATOR",
    "LIST_VALUE_SEPARATOR",
    "KEY_VALUE_SEPARATOR",
    # Errors
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
    # Money
    "Currency",
    "CurrencyRegistry",
    "DEFAULT_REGISTRY",
    "GREAT_BRITISH_POUND",
    "UNITED_STATES_DOLLAR",
    "ZERO_CURRENCY",
    "Money",
    "parse_money",
    "to_money",
    # Records
    "Record",
    "Contact",
    "BankDetails",
    "LineItem",
    "ItemList",
    "AliasTable",
    "FieldKind",
    "FieldSpec",
    "resolve_and_coerce",
    # Invoice
    "Invoice",
    "parse_date",
    "format_date",
]

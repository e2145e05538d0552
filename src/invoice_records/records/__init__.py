"""Records parsed from delimited key:value text.

This module provides the record types (contacts, bank details, line items),
the alias tables that map user-typed keys onto their fields, and the parser
that fills them in.
"""

from invoice_records.records.base import Record
from invoice_records.records.fields import (
    AliasTable,
    FieldKind,
    FieldSpec,
    resolve_and_coerce,
)
from invoice_records.records.parser import RecordParser, parse_list, parse_record
from invoice_records.records.types import BankDetails, Contact, ItemList, LineItem

__all__ = [
    # Records
    "Record",
    "Contact",
    "BankDetails",
    "LineItem",
    "ItemList",
    # Alias tables
    "AliasTable",
    "FieldKind",
    "FieldSpec",
    "resolve_and_coerce",
    # Parsing
    "RecordParser",
    "parse_record",
    "parse_list",
]

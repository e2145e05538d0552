"""Record and list parsing."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TypeVar

from invoice_records.core.config import ParserConfig
from invoice_records.core.exceptions import (
    DuplicateFieldError,
    InvoiceRecordsError,
    MalformedPairError,
    MissingFieldsError,
)
from invoice_records.core.grammar import LEVELS, split_at_level, split_key_value, split_records
from invoice_records.money.amount import Money, parse_money
from invoice_records.records.base import Record
from invoice_records.records.fields import resolve_and_coerce
from invoice_records.records.messages import (
    duplicate_field_message,
    malformed_pair_message,
    missing_fields_message,
)

R = TypeVar("R", bound=Record)

logger = logging.getLogger(__name__)


class RecordParser:
    """Parses delimited key:value text into records.

    Example:
        ```python
        from invoice_records import Contact, LineItem, RecordParser

        parser = RecordParser()
        contact = parser.parse_record(
            "f: John, l: Smith, e: john@example.com, p: 0123, a: 1 Street; Town",
            Contact(),
        )
        items = parser.parse_list("d: Work; r: $10, d: Travel; h: 2; r: £5", LineItem)
        ```
    """

    def __init__(self, config: ParserConfig | None = None) -> None:
        """Initialize the parser.

        Args:
            config: Parser configuration. Defaults to the built-in currency
                registry with email and bank validation enabled.
        """
        self.config = config or ParserConfig()

    def parse_money(self, text: str) -> Money:
        """Parse money text using this parser's currency registry."""
        return parse_money(text, self.config.registry)

    def parse_record(self, text: str, record: R, depth: int | None = None) -> R:
        """Parse one group of key:value pairs into a record, in place.

        The pairs are read first, then optional fields are defaulted, then
        present values are format-checked. Any required field still blank
        after defaulting is reported, whether its key was left out or given
        an empty value.

        Args:
            text: Pairs separated by the field separator of ``depth``.
            record: Record to fill in.
            depth: Grammar level the record sits at. Defaults to the record
                type's own level (0 for a contact, 1 for a line item).

        Returns:
            The same record, filled in.

        Raises:
            MalformedPairError: If a segment is not exactly ``key:value``.
            UnknownKeyError: If a key matches no alias.
            DuplicateFieldError: If a field is given twice.
            NotANumberError: If an unsigned integer field holds something else.
            MoneyError: If a money field cannot be parsed.
            InvalidEmailError: If an email field is not an email address.
            InvalidBankFieldError: If an account number or sort code is malformed.
            MissingFieldsError: If required fields are blank after defaulting.
        """
        level = type(record).default_depth if depth is None else depth
        if not 0 <= level < len(LEVELS) - 1:
            raise ValueError(f"Records cannot be parsed at nesting level {level}")

        table = record.alias_table
        assigned: set[str] = set()
        record.bind_registry(self.config.registry)

        for segment in split_at_level(text, level):
            parts = split_key_value(segment)
            if len(parts) != 2:
                raise MalformedPairError(
                    malformed_pair_message(table, segment),
                    record_name=table.record_name,
                    text=segment,
                    accepted_aliases=table.aliases_by_label(),
                )
            key, value = parts
            spec, coerced = resolve_and_coerce(
                key,
                value,
                table,
                list_level=level + 1,
                registry=self.config.registry,
                text=segment,
            )
            if spec.name in assigned:
                raise DuplicateFieldError(
                    duplicate_field_message(table, spec.label, segment),
                    field_name=spec.name,
                    record_name=table.record_name,
                    text=text,
                )
            setattr(record, spec.name, coerced)
            assigned.add(spec.name)
            logger.debug("%s: set %s from key %r", table.record_name, spec.name, key)

        defaulted = record.apply_defaults(assigned)
        if defaulted:
            logger.debug("%s: defaulted %s", table.record_name, ", ".join(defaulted))

        record.check_values(self.config)

        missing = record.missing_required()
        if missing:
            raise MissingFieldsError(
                missing_fields_message(table, missing),
                missing=missing,
                declared=[spec.label for spec in table],
                record_name=table.record_name,
                text=text,
            )
        return record

    def parse_list(self, text: str, factory: Callable[[], R]) -> list[R]:
        """Parse a list of records separated by the record separator.

        Parsing stops at the first record that fails; its error is re-raised
        with the record's 1-based position prepended.

        Args:
            text: Records separated by ``,``, pairs by ``;``.
            factory: Builds an empty record for each segment.

        Returns:
            The records in input order.
        """
        records: list[R] = []
        for position, segment in enumerate(split_records(text), start=1):
            record = factory()
            try:
                self.parse_record(segment, record, depth=1)
            except InvoiceRecordsError as e:
                logger.debug("Record %d of list failed to parse: %s", position, e)
                _prefix_message(e, f"record {position}: ")
                raise
            records.append(record)
        return records


def _prefix_message(error: InvoiceRecordsError, prefix: str) -> None:
    if error.args and isinstance(error.args[0], str):
        error.args = (prefix + error.args[0], *error.args[1:])


_default_parser = RecordParser()


def parse_record(text: str, record: R, depth: int | None = None) -> R:
    """Parse a record with the default parser. See :meth:`RecordParser.parse_record`."""
    return _default_parser.parse_record(text, record, depth=depth)


def parse_list(text: str, factory: Callable[[], R]) -> list[R]:
    """Parse a list with the default parser. See :meth:`RecordParser.parse_list`."""
    return _default_parser.parse_list(text, factory)


def default_parser() -> RecordParser:
    """The parser used when none is given explicitly."""
    return _default_parser

"""Invoice assembly.

Glues parsed contacts, items and bank details into one invoice, checks that
the parts an invoice cannot do without are there, and produces the item
table cells and text a renderer consumes. Layout and rendering live
elsewhere.
"""

from __future__ import annotations

import json
import re
from collections.abc import Mapping
from datetime import date, datetime
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field

from invoice_records.core.exceptions import InvalidDateError, NotANumberError, RequiredFieldsError
from invoice_records.money.amount import Money
from invoice_records.records.parser import RecordParser, default_parser
from invoice_records.records.types import BankDetails, Contact, ItemList, LineItem

DATE_FORMAT = "%d/%m/%Y"


def parse_date(text: str) -> date:
    """Parse a ``D/M/YYYY`` date, e.g. ``1/12/2000`` for 1 December 2000.

    Raises:
        InvalidDateError: If the text is not a valid date in that format.
    """
    try:
        return datetime.strptime(text.strip(), DATE_FORMAT).date()
    except ValueError as e:
        raise InvalidDateError(
            f"{text!r} is not a valid date, expected D/M/YYYY (e.g. 1/12/2000)",
            text=text,
        ) from e


def _ordinal(n: int) -> str:
    if 10 <= n % 100 <= 20:
        suffix = "th"
    else:
        suffix = {1: "st", 2: "nd", 3: "rd"}.get(n % 10, "th")
    return f"{n}{suffix}"


def format_date(value: date) -> str:
    """Format a date the way it is printed on an invoice: ``December 1st, 2000``."""
    return f"{value.strftime('%B')} {_ordinal(value.day)}, {value.year}"


def _column_title(label: str) -> str:
    # "HoursQuantity" -> "Hours/Quantity"
    return "/".join(re.findall(r"[A-Z][a-z0-9]*|[a-z0-9]+", label))


class Invoice(BaseModel):
    """An invoice assembled from parsed records.

    Example:
        ```python
        invoice = Invoice.from_mapping({
            "number": 7,
            "from": "f: Ada, l: Lovelace, e: ada@example.com, p: 01, a: 1 Road; London",
            "to": "c: Engines Ltd, f: Charles, l: Babbage, e: cb@example.com, p: 02, a: 2 Street",
            "items": "d: Analysis; h: 10; r: GBP 40, d: Notes; r: £25",
            "date": "1/12/2000",
            "due": "31/12/2000",
        })
        invoice.total().abbreviated_form()   # "GBP 425.00"
        ```
    """

    number: int = Field(default=1, ge=0, description="Invoice number")
    from_contact: Contact = Field(description="Contact who issued the invoice")
    to_contact: Contact = Field(description="Contact who needs to pay the invoice")
    items: ItemList = Field(description="Billed line items")
    bank: BankDetails | None = Field(default=None, description="Where to pay, if given")
    invoice_date: date = Field(default_factory=date.today, description="Date of issue")
    due_date: date = Field(default_factory=date.today, description="Payment due date")

    @classmethod
    def assemble(
        cls,
        from_contact: Contact | None,
        to_contact: Contact | None,
        items: ItemList | None,
        bank: BankDetails | None = None,
        number: int = 1,
        invoice_date: date | None = None,
        due_date: date | None = None,
    ) -> Invoice:
        """Build an invoice, checking From, To and Items were supplied.

        Bank details that were left completely empty are treated as not
        supplied.

        Raises:
            RequiredFieldsError: Naming every missing part.
        """
        needed: list[str] = []
        if from_contact is None or from_contact.is_empty():
            needed.append("From")
        if to_contact is None or to_contact.is_empty():
            needed.append("To")
        if items is None or len(items) == 0:
            needed.append("Items")
        if needed:
            raise RequiredFieldsError(
                f"The following are required: {', '.join(needed)}",
                missing=needed,
            )

        today = date.today()
        return cls(
            number=number,
            from_contact=from_contact,
            to_contact=to_contact,
            items=items,
            bank=None if bank is None or bank.is_empty() else bank,
            invoice_date=invoice_date or today,
            due_date=due_date or today,
        )

    @classmethod
    def from_mapping(
        cls,
        data: Mapping[str, Any],
        parser: RecordParser | None = None,
    ) -> Invoice:
        """Build an invoice from raw per-field strings.

        Recognised keys: ``number``, ``from``, ``to``, ``items``, ``bank``,
        ``date`` and ``due``. Each text value is parsed with the record
        grammar; dates are ``D/M/YYYY`` and default to today.

        Raises:
            InvoiceRecordsError: If any part fails to parse or a required
                part is missing.
        """
        parser = parser or default_parser()

        def text(key: str) -> str | None:
            value = data.get(key)
            if value is None:
                return None
            return str(value).strip() or None

        from_text, to_text, items_text, bank_text = (
            text("from"),
            text("to"),
            text("items"),
            text("bank"),
        )
        from_contact = parser.parse_record(from_text, Contact()) if from_text else None
        to_contact = parser.parse_record(to_text, Contact()) if to_text else None
        items = ItemList.parse(items_text, parser) if items_text else None
        bank = parser.parse_record(bank_text, BankDetails()) if bank_text else None

        return cls.assemble(
            from_contact=from_contact,
            to_contact=to_contact,
            items=items,
            bank=bank,
            number=_invoice_number(data.get("number", 1)),
            invoice_date=_coerce_date(data.get("date")),
            due_date=_coerce_date(data.get("due")),
        )

    @classmethod
    def from_json(cls, source: str | Path, parser: RecordParser | None = None) -> Invoice:
        """Load an invoice from a JSON object given as a string or file path."""
        return cls.from_mapping(_load_mapping(json.loads(_read_source(source))), parser)

    @classmethod
    def from_yaml(cls, source: str | Path, parser: RecordParser | None = None) -> Invoice:
        """Load an invoice from a YAML mapping given as a string or file path."""
        return cls.from_mapping(_load_mapping(yaml.safe_load(_read_source(source))), parser)

    def total(self) -> Money:
        """Sum of every item's subtotal."""
        return self.items.total()

    @staticmethod
    def table_header() -> list[str]:
        """Column titles of the item table."""
        return [_column_title(spec.label) for spec in LineItem.alias_table] + ["Subtotal"]

    def table_rows(self) -> list[list[str]]:
        """One row of cell text per item, matching :meth:`table_header`."""
        rows: list[list[str]] = []
        for item in self.items.items:
            rate = item.rate.abbreviated_form() if item.rate is not None else ""
            tax = item.tax.abbreviated_form() if item.tax is not None else ""
            rows.append(
                [
                    item.description,
                    str(item.hours_quantity),
                    rate,
                    tax,
                    item.subtotal().abbreviated_form(),
                ]
            )
        return rows

    @property
    def number_text(self) -> str:
        """Invoice number padded to three digits, e.g. ``007``."""
        return f"{self.number:03d}"

    def summary(self) -> str:
        """Plain-text dump of everything parsed."""
        parts = [
            f"Invoice Number: {self.number}",
            "",
            f"From contact: {self.from_contact.summary()}",
            f"To contact: {self.to_contact.summary()}",
        ]
        if self.bank is not None:
            parts.append(self.bank.summary())
        parts.extend(
            [
                f"Invoice date: {format_date(self.invoice_date)}",
                f"Due date: {format_date(self.due_date)}",
                "",
                f"Items: {self.items.summary()}",
                f"Total: {self.total().abbreviated_form()}",
            ]
        )
        return "\n".join(parts)


def _read_source(source: str | Path) -> str:
    if isinstance(source, Path) or (isinstance(source, str) and _is_existing_file(source)):
        return Path(source).read_text(encoding="utf-8")
    return source


def _is_existing_file(source: str) -> bool:
    if "\n" in source or len(source) > 4096:
        return False
    try:
        return Path(source).is_file()
    except OSError:
        return False


def _load_mapping(data: Any) -> Mapping[str, Any]:
    if not isinstance(data, Mapping):
        raise ValueError(f"Invoice data must be a mapping, got {type(data).__name__}")
    return data


def _invoice_number(value: Any) -> int:
    if isinstance(value, int) and not isinstance(value, bool) and value >= 0:
        return value
    digits = str(value).strip()
    if not (digits.isascii() and digits.isdigit()):
        raise NotANumberError(
            f"Invoice number must be a whole, non-negative number, got {value!r}",
            record_name="Invoice",
            text=str(value),
        )
    return int(digits)


def _coerce_date(value: Any) -> date | None:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return parse_date(str(value))

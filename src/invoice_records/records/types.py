"""Record types parsed from delimited key:value text.

Each record declares its accepted keys in an explicit :class:`AliasTable`;
keys are matched case-insensitively.
"""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING, ClassVar

from pydantic import BaseModel, Field, PrivateAttr

from invoice_records.core.exceptions import InvalidBankFieldError, InvalidEmailError
from invoice_records.money.amount import Money, to_money
from invoice_records.money.currency import (
    DEFAULT_REGISTRY,
    ZERO_CURRENCY,
    Currency,
    CurrencyRegistry,
)
from invoice_records.records.base import Record, is_blank
from invoice_records.records.fields import AliasTable, FieldKind, FieldSpec
from invoice_records.records.messages import bank_field_message, invalid_email_message
from invoice_records.records.parser import RecordParser, default_parser

if TYPE_CHECKING:
    from invoice_records.core.config import ParserConfig

logger = logging.getLogger(__name__)

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s.]+$")
ACCOUNT_NUMBER_LENGTH = 8
SORT_CODE_LENGTH = 6


def _aliases(*names: str) -> frozenset[str]:
    return frozenset(names)


# ============================================================================
# Contact
# ============================================================================


class Contact(Record):
    """A business contact: who issues or pays an invoice.

    Keys (case insensitive): company/comp/c, firstname/first/f,
    lastname/last/l, email/e, phoneno/phonenumber/phone/p, address/addr/a.
    Address lines are separated by ``;``. Company defaults to
    ``"<first name> <last name>"``.

    Example:
        ```python
        contact = Contact.parse(
            "f: John, l: Smith, e: john@example.com, p: 0123, a: 1 Street; Town; UK"
        )
        contact.company   # "John Smith"
        contact.address   # ["1 Street", "Town", "UK"]
        ```
    """

    alias_table: ClassVar[AliasTable] = AliasTable(
        "Contact",
        [
            FieldSpec(
                "company",
                "Company",
                FieldKind.TEXT,
                _aliases("company", "comp", "c"),
                required=False,
            ),
            FieldSpec(
                "first_name", "FirstName", FieldKind.TEXT, _aliases("firstname", "first", "f")
            ),
            FieldSpec("last_name", "LastName", FieldKind.TEXT, _aliases("lastname", "last", "l")),
            FieldSpec("email", "Email", FieldKind.TEXT, _aliases("email", "e")),
            FieldSpec(
                "phone_number",
                "PhoneNo",
                FieldKind.TEXT,
                _aliases("phoneno", "phonenumber", "phone", "p"),
            ),
            FieldSpec("address", "Address", FieldKind.TEXT_LIST, _aliases("address", "addr", "a")),
        ],
    )
    default_depth: ClassVar[int] = 0

    company: str = Field(default="", description="Company name")
    first_name: str = Field(default="", description="First name")
    last_name: str = Field(default="", description="Last name")
    email: str = Field(default="", description="Email address")
    phone_number: str = Field(default="", description="Phone number")
    address: list[str] = Field(default_factory=list, description="Address lines in mailing order")

    @classmethod
    def parse(cls, text: str, parser: RecordParser | None = None) -> Contact:
        """Parse a contact from ``key: value`` pairs separated by ``,``."""
        return (parser or default_parser()).parse_record(text, cls())

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    def apply_defaults(self, assigned: set[str]) -> list[str]:
        if is_blank(self.company):
            self.company = self.full_name
            return ["company"]
        return []

    def check_values(self, config: ParserConfig) -> None:
        if not config.validate_email or is_blank(self.email):
            return
        if not EMAIL_PATTERN.match(self.email):
            raise InvalidEmailError(
                invalid_email_message(self.email),
                record_name=self.alias_table.record_name,
                text=self.email,
            )

    def is_empty(self) -> bool:
        """Whether no field at all was filled in."""
        return self == Contact()

    def summary(self) -> str:
        """Plain-text block as printed on an invoice."""
        address = "\n".join(self.address)
        return f"{self.company}\n{self.full_name}\n{address}\n\n{self.email}\n{self.phone_number}\n"


# ============================================================================
# Bank details
# ============================================================================


def _digit_violations(value: str, length: int) -> list[str]:
    violations: list[str] = []
    if len(value) != length:
        violations.append(f"{length} digits")
    if not (value.isascii() and value.isdigit()):
        violations.append("not numeric")
    return violations


class BankDetails(Record):
    """Bank account the invoice should be paid into.

    Keys (case insensitive): bank/b; accountno/account/a/c no./a/c/a/no/acc;
    sortcode/sort/code/s. Account numbers are 8 digits, sort codes 6.
    """

    alias_table: ClassVar[AliasTable] = AliasTable(
        "Bank",
        [
            FieldSpec("bank_name", "Bank", FieldKind.TEXT, _aliases("bank", "b")),
            FieldSpec(
                "account_number",
                "AccountNo",
                FieldKind.TEXT,
                _aliases("accountno", "account", "a/c no.", "a/c", "a", "no", "acc"),
            ),
            FieldSpec(
                "sort_code", "SortCode", FieldKind.TEXT, _aliases("sortcode", "sort", "code", "s")
            ),
        ],
    )
    default_depth: ClassVar[int] = 0

    bank_name: str = Field(default="", description="Name of the bank")
    account_number: str = Field(default="", description="8 digit account number")
    sort_code: str = Field(default="", description="6 digit sort code")

    @classmethod
    def parse(cls, text: str, parser: RecordParser | None = None) -> BankDetails:
        """Parse bank details from ``key: value`` pairs separated by ``,``."""
        return (parser or default_parser()).parse_record(text, cls())

    def check_values(self, config: ParserConfig) -> None:
        if not config.validate_bank_fields:
            return
        checks = (
            ("account_number", "account number", ACCOUNT_NUMBER_LENGTH),
            ("sort_code", "sort code", SORT_CODE_LENGTH),
        )
        for name, description, length in checks:
            value: str = getattr(self, name)
            if is_blank(value):
                continue
            violations = _digit_violations(value, length)
            if violations:
                raise InvalidBankFieldError(
                    bank_field_message(value, description, violations),
                    field_name=name,
                    violations=violations,
                    record_name=self.alias_table.record_name,
                    text=value,
                )

    def is_empty(self) -> bool:
        """Whether the bank details were not supplied at all."""
        return self == BankDetails()

    def summary(self) -> str:
        return (
            f"Bank details:\n{self.bank_name}\n"
            f"A/c No.    {self.account_number}\n"
            f"Sort code: {self.sort_code}\n"
        )


# ============================================================================
# Line items
# ============================================================================


class LineItem(Record):
    """A billable line on an invoice.

    Keys (case insensitive): description/desc/d,
    hoursquantity/hours/hrs/h/quantity/qty/q, rate/r, tax/t. Hours/quantity
    defaults to 1 and tax to nothing.
    """

    alias_table: ClassVar[AliasTable] = AliasTable(
        "Item",
        [
            FieldSpec(
                "description", "Description", FieldKind.TEXT, _aliases("description", "desc", "d")
            ),
            FieldSpec(
                "hours_quantity",
                "HoursQuantity",
                FieldKind.UINT,
                _aliases("hoursquantity", "hours", "hrs", "h", "quantity", "qty", "q"),
                required=False,
            ),
            FieldSpec("rate", "Rate", FieldKind.MONEY, _aliases("rate", "r")),
            FieldSpec("tax", "Tax", FieldKind.MONEY, _aliases("tax", "t"), required=False),
        ],
    )
    default_depth: ClassVar[int] = 1

    description: str = Field(default="", description="Description of the work or goods")
    hours_quantity: int = Field(default=0, ge=0, description="Hours worked or quantity supplied")
    rate: Money | None = Field(default=None, description="Price per hour or unit")
    tax: Money | None = Field(default=None, description="Tax added on top of the line")

    @classmethod
    def parse(cls, text: str, parser: RecordParser | None = None) -> LineItem:
        """Parse one item from ``key: value`` pairs separated by ``;``."""
        return (parser or default_parser()).parse_record(text, cls())

    def apply_defaults(self, assigned: set[str]) -> list[str]:
        defaulted: list[str] = []
        if "hours_quantity" not in assigned:
            self.hours_quantity = 1
            defaulted.append("hours_quantity")
        if "tax" not in assigned:
            self.tax = Money.zero()
            defaulted.append("tax")
        return defaulted

    def subtotal(self, registry: CurrencyRegistry | None = None) -> Money:
        """Rate times hours/quantity, plus tax.

        Args:
            registry: Currencies to compute in. Defaults to the registry the
                item was parsed with.
        """
        if registry is None:
            registry = self.registry
        rate = self.rate or Money.zero()
        tax = self.tax or Money.zero()
        if not tax.currency.is_zero and tax.currency != rate.currency:
            logger.warning(
                "Tax on %r is in %s but the rate is in %s; adding the amount as is",
                self.description,
                tax.currency.abbreviation,
                rate.currency.abbreviation,
            )
        return rate.multiply(self.hours_quantity, registry).add(tax.as_decimal(registry), registry)

    def summary(self) -> str:
        rate = self.rate or Money.zero()
        tax = self.tax or Money.zero()
        return (
            f"HRS/QTY: {self.hours_quantity}, RATE: {rate}, TAX: {tax}, "
            f"Subtotal: {self.subtotal()}"
        )


class ItemList(BaseModel):
    """Ordered line items of an invoice.

    Example:
        ```python
        items = ItemList.parse("d: Design; h: 3; r: USD 50, d: Hosting; r: $20; t: $4")
        items.total().full()   # "USD $174.00"
        ```
    """

    items: list[LineItem] = Field(default_factory=list, description="Line items in invoice order")

    _registry: CurrencyRegistry | None = PrivateAttr(default=None)

    @classmethod
    def parse(cls, text: str, parser: RecordParser | None = None) -> ItemList:
        """Parse items separated by ``,`` whose pairs are separated by ``;``."""
        parser = parser or default_parser()
        items = cls(items=parser.parse_list(text, LineItem))
        items._registry = parser.config.registry
        return items

    def __len__(self) -> int:
        return len(self.items)

    def __getitem__(self, index: int) -> LineItem:
        return self.items[index]

    @property
    def registry(self) -> CurrencyRegistry:
        """Registry the list was parsed with, else that of its first item."""
        if self._registry is not None:
            return self._registry
        if self.items:
            return self.items[0].registry
        return DEFAULT_REGISTRY

    @property
    def currency(self) -> Currency:
        """Currency of the first item's rate, or the zero currency."""
        if self.items and self.items[0].rate is not None:
            return self.items[0].rate.currency
        return ZERO_CURRENCY

    def total(self, registry: CurrencyRegistry | None = None) -> Money:
        """Sum of every item's subtotal, in the currency of the first item."""
        if registry is None:
            registry = self.registry
        total = to_money(0, self.currency, registry)
        for item in self.items:
            total = total.add(item.subtotal(registry).as_decimal(registry), registry)
        return total

    def summary(self) -> str:
        return "\n".join(
            f"Item {position}: {item.summary()}" for position, item in enumerate(self.items, start=1)
        )

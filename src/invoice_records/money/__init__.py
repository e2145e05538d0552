"""Currency registry and fixed-point money values."""

from invoice_records.money.amount import (
    MAX_MINOR_UNITS,
    Money,
    parse_money,
    to_money,
)
from invoice_records.money.currency import (
    DEFAULT_REGISTRY,
    GREAT_BRITISH_POUND,
    UNITED_STATES_DOLLAR,
    ZERO_CURRENCY,
    Currency,
    CurrencyRegistry,
)

__all__ = [
    "Currency",
    "CurrencyRegistry",
    "DEFAULT_REGISTRY",
    "GREAT_BRITISH_POUND",
    "UNITED_STATES_DOLLAR",
    "ZERO_CURRENCY",
    "MAX_MINOR_UNITS",
    "Money",
    "parse_money",
    "to_money",
]

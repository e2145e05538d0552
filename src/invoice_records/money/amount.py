"""Fixed-point money values.

Money is stored as a whole number of minor units (pence, cents) tagged with a
currency. Decimal amounts only appear transiently while parsing, multiplying
or adding, and are quantized back to minor units straight away using
round-half-up, so totals over many line items never drift.
"""

from __future__ import annotations

import re
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from pydantic import BaseModel, ConfigDict, Field

from invoice_records.core.exceptions import (
    MoneyError,
    NotMoneyError,
    UnsupportedCurrencyError,
)
from invoice_records.money.currency import (
    DEFAULT_REGISTRY,
    ZERO_CURRENCY,
    Currency,
    CurrencyRegistry,
)

MINOR_UNITS_PER_MAJOR = 100
MAX_MINOR_UNITS = 2**64 - 1

# A 3-letter code or one non-word symbol, then digits with an optional decimal part
_MONEY_PATTERN = re.compile(
    r"^\s*(?P<marker>[A-Za-z]{3}|[^\w\s])\s*(?P<amount>\d+(?:\.\d*)?)\s*$"
)

Amount = Decimal | float | int


def _as_decimal(value: Amount) -> Decimal:
    """Convert a number to Decimal without picking up binary float noise."""
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, float):
        # repr() gives the shortest string that round-trips, so 1.005 stays 1.005
        result = Decimal(repr(value))
    else:
        result = Decimal(value)
    if not result.is_finite():
        raise MoneyError(f"Cannot use non-finite amount {value!r} as money")
    return result


def _check_supported(currency: Currency, registry: CurrencyRegistry) -> None:
    if not registry.supports(currency):
        raise UnsupportedCurrencyError(
            f"Unsupported currency: {currency.abbreviation or currency.symbol!r}",
            currency=currency,
        )


def _quantize(minor_units: Decimal) -> int:
    rounded = int(minor_units.to_integral_value(rounding=ROUND_HALF_UP))
    if rounded < 0:
        raise MoneyError(f"Money cannot be negative ({rounded} minor units)")
    if rounded > MAX_MINOR_UNITS:
        raise MoneyError(f"Money overflows {MAX_MINOR_UNITS} minor units")
    return rounded


class Money(BaseModel):
    """An immutable amount of money in whole minor units.

    Example:
        ```python
        price = parse_money("USD 10.00")
        price.full()                    # "USD $10.00"
        price.multiply(3).add(1.5)      # USD 31.50
        ```
    """

    model_config = ConfigDict(frozen=True)

    minor_units: int = Field(
        default=0,
        ge=0,
        le=MAX_MINOR_UNITS,
        description="Amount in the smallest currency subdivision (e.g. cents)",
    )
    currency: Currency = Field(
        default=ZERO_CURRENCY,
        description="Currency of the amount; the zero currency means unset",
    )

    @classmethod
    def zero(cls, currency: Currency = ZERO_CURRENCY) -> Money:
        """A zero amount, by default in the unset currency."""
        return cls(minor_units=0, currency=currency)

    def as_decimal(self, registry: CurrencyRegistry = DEFAULT_REGISTRY) -> Decimal:
        """Return the amount in major units (e.g. 1050 cents -> 10.50).

        Raises:
            UnsupportedCurrencyError: If the currency is not in the registry.
        """
        _check_supported(self.currency, registry)
        return Decimal(self.minor_units).scaleb(-2)

    def multiply(self, factor: Amount, registry: CurrencyRegistry = DEFAULT_REGISTRY) -> Money:
        """Multiply by a factor, rounding half-up to the nearest minor unit.

        Raises:
            UnsupportedCurrencyError: If the currency is not in the registry.
        """
        _check_supported(self.currency, registry)
        product = Decimal(self.minor_units) * _as_decimal(factor)
        return Money(minor_units=_quantize(product), currency=self.currency)

    def add(self, amount: Amount, registry: CurrencyRegistry = DEFAULT_REGISTRY) -> Money:
        """Add a decimal amount in major units, keeping this currency."""
        return to_money(self.as_decimal(registry) + _as_decimal(amount), self.currency, registry)

    def amount_text(self) -> str:
        """The amount alone, to 2 decimal places (e.g. "10.50")."""
        major, minor = divmod(self.minor_units, MINOR_UNITS_PER_MAJOR)
        return f"{major}.{minor:02d}"

    def full(self) -> str:
        """Format as ``"<ABBR> <SYMBOL><amount>"``, or ``""`` when unset."""
        if self.currency.is_zero:
            return ""
        return f"{self.currency.abbreviation} {self.symbol_form()}"

    def symbol_form(self) -> str:
        """Format as ``"<SYMBOL><amount>"``, or ``""`` when unset."""
        if self.currency.is_zero:
            return ""
        return f"{self.currency.symbol}{self.amount_text()}"

    def abbreviated_form(self) -> str:
        """Format as ``"<ABBR> <amount>"``, or ``""`` when unset."""
        if self.currency.is_zero:
            return ""
        return f"{self.currency.abbreviation} {self.amount_text()}"

    def __str__(self) -> str:
        return self.full()


def to_money(
    amount: Amount,
    currency: Currency,
    registry: CurrencyRegistry = DEFAULT_REGISTRY,
) -> Money:
    """Convert a major-unit amount to Money, rounding half-up to minor units.

    Args:
        amount: Amount in major units, e.g. ``10.5`` for ten pounds fifty.
        currency: Currency of the amount.
        registry: Registry the currency must belong to.

    Returns:
        The quantized Money value.

    Raises:
        UnsupportedCurrencyError: If the currency is not in the registry.
        MoneyError: If the amount is negative, non-finite or too large.
    """
    _check_supported(currency, registry)
    minor_units = _as_decimal(amount) * MINOR_UNITS_PER_MAJOR
    return Money(minor_units=_quantize(minor_units), currency=currency)


def parse_money(text: str, registry: CurrencyRegistry = DEFAULT_REGISTRY) -> Money:
    """Parse money text such as ``"GBP 10.00"``, ``"USD10.00"`` or ``"£10.00"``.

    The currency marker is either a 3-letter abbreviation (any case) or a
    single leading symbol, optionally followed by whitespace, then the
    amount.

    Raises:
        NotMoneyError: If the text does not have the shape of money.
        UnknownCurrencyError: If the marker is not in the registry.
    """
    match = _MONEY_PATTERN.match(text)
    if match is None:
        raise NotMoneyError(
            f"{text!r} is not a money amount (expected e.g. 'GBP 10.00', 'USD10.00' or '£10.00')",
            text=text,
        )
    currency = registry.resolve(match.group("marker").upper(), text=text)
    try:
        amount = Decimal(match.group("amount"))
    except InvalidOperation as e:
        raise NotMoneyError(f"{text!r} does not contain a valid amount", text=text) from e
    return to_money(amount, currency, registry)

"""Currencies and the closed registry they are looked up in."""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from pydantic import BaseModel, ConfigDict, Field

from invoice_records.core.exceptions import UnknownCurrencyError


class Currency(BaseModel):
    """A currency identified by its ISO abbreviation and display symbol."""

    model_config = ConfigDict(frozen=True)

    abbreviation: str = Field(default="", description="3-letter ISO 4217 code, e.g. GBP")
    symbol: str = Field(default="", description="Display glyph, e.g. £")

    @property
    def is_zero(self) -> bool:
        """Whether this is the "no currency chosen" sentinel."""
        return self == ZERO_CURRENCY


ZERO_CURRENCY = Currency()
GREAT_BRITISH_POUND = Currency(abbreviation="GBP", symbol="£")
UNITED_STATES_DOLLAR = Currency(abbreviation="USD", symbol="$")


class CurrencyRegistry:
    """Immutable lookup table of the currencies money may be expressed in.

    The registry is built once and never changes afterwards, so a single
    instance can be shared between parsers and threads.

    Example:
        ```python
        registry = CurrencyRegistry([GREAT_BRITISH_POUND, ZERO_CURRENCY])
        registry.by_symbol("£")         # GREAT_BRITISH_POUND
        registry.by_abbreviation("gbp")  # GREAT_BRITISH_POUND
        registry.by_symbol("$")         # None
        ```
    """

    __slots__ = ("_currencies",)

    def __init__(self, currencies: Iterable[Currency]) -> None:
        """Build the registry.

        Args:
            currencies: Currencies to register. The zero currency may be
                included to allow unset money values.

        Raises:
            ValueError: If two currencies share an abbreviation or symbol.
        """
        registered: tuple[Currency, ...] = tuple(dict.fromkeys(currencies))
        abbreviations = [c.abbreviation.upper() for c in registered if not c.is_zero]
        symbols = [c.symbol for c in registered if not c.is_zero]
        if len(set(abbreviations)) != len(abbreviations):
            raise ValueError("Currency abbreviations must be unique within a registry")
        if len(set(symbols)) != len(symbols):
            raise ValueError("Currency symbols must be unique within a registry")
        self._currencies = registered

    def __iter__(self) -> Iterator[Currency]:
        return iter(self._currencies)

    def __len__(self) -> int:
        return len(self._currencies)

    def __contains__(self, currency: object) -> bool:
        return currency in self._currencies

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CurrencyRegistry):
            return NotImplemented
        return self._currencies == other._currencies

    def __hash__(self) -> int:
        return hash(self._currencies)

    def __repr__(self) -> str:
        codes = ", ".join(c.abbreviation or "<zero>" for c in self._currencies)
        return f"CurrencyRegistry([{codes}])"

    def supports(self, currency: Currency) -> bool:
        """Whether money in this currency may be created and operated on."""
        return currency in self._currencies

    def by_symbol(self, symbol: str) -> Currency | None:
        """Find a currency by its exact symbol."""
        if not symbol:
            return None
        for currency in self._currencies:
            if currency.symbol == symbol:
                return currency
        return None

    def by_abbreviation(self, abbreviation: str) -> Currency | None:
        """Find a currency by its abbreviation, ignoring case."""
        if not abbreviation:
            return None
        wanted = abbreviation.upper()
        for currency in self._currencies:
            if currency.abbreviation.upper() == wanted:
                return currency
        return None

    def resolve(self, marker: str, text: str | None = None) -> Currency:
        """Resolve a currency marker, trying the symbol first.

        Args:
            marker: Symbol or abbreviation taken from money text.
            text: The full money text, kept on the error for context.

        Returns:
            The matching currency.

        Raises:
            UnknownCurrencyError: If the marker matches nothing.
        """
        currency = self.by_symbol(marker) or self.by_abbreviation(marker)
        if currency is None:
            raise UnknownCurrencyError(
                f"No currency with symbol/abbreviation: {marker!r}",
                marker=marker,
                text=text,
            )
        return currency


DEFAULT_REGISTRY = CurrencyRegistry(
    [GREAT_BRITISH_POUND, UNITED_STATES_DOLLAR, ZERO_CURRENCY]
)

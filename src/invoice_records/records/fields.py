"""Alias tables: which keys set which record field, and how values are coerced.

Every record type declares an :class:`AliasTable` by hand. The table lists
its fields in a fixed order, each with the lower-case aliases a user may type
for it and the :class:`FieldKind` that decides how the raw value is coerced.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from invoice_records.core.exceptions import NotANumberError, UnknownKeyError
from invoice_records.core.grammar import split_at_level
from invoice_records.money.amount import parse_money
from invoice_records.money.currency import DEFAULT_REGISTRY, CurrencyRegistry
from invoice_records.records.messages import unknown_key_message


class FieldKind(str, Enum):
    """Semantic type of a record field."""

    TEXT = "text"
    TEXT_LIST = "text_list"
    UINT = "uint"
    MONEY = "money"


@dataclass(frozen=True)
class FieldSpec:
    """Declaration of one addressable field of a record.

    Attributes:
        name: Attribute name on the record model.
        label: Display name used in help and error text.
        kind: How the raw value is coerced.
        aliases: Lower-case keys accepted for this field.
        required: Whether the record is incomplete without it.
    """

    name: str
    label: str
    kind: FieldKind
    aliases: frozenset[str] = field(default_factory=frozenset)
    required: bool = True

    def __post_init__(self) -> None:
        if not self.aliases:
            raise ValueError(f"Field '{self.name}' must declare at least one alias")
        for alias in self.aliases:
            if alias != alias.lower() or alias != alias.strip():
                raise ValueError(
                    f"Alias {alias!r} of field '{self.name}' must be lower-case and unpadded"
                )


class AliasTable:
    """Ordered, hand-written mapping from field to accepted aliases.

    Example:
        ```python
        table = AliasTable(
            "Bank",
            [
                FieldSpec("bank_name", "Bank", FieldKind.TEXT, frozenset({"bank", "b"})),
                FieldSpec("sort_code", "SortCode", FieldKind.TEXT, frozenset({"sort", "s"})),
            ],
        )
        table.resolve("B").name   # "bank_name"
        ```
    """

    def __init__(self, record_name: str, fields: Iterable[FieldSpec]) -> None:
        """Build the table.

        Args:
            record_name: Name of the record type, used in error text.
            fields: Field declarations in display order.

        Raises:
            ValueError: If two fields share a name or an alias.
        """
        self.record_name = record_name
        self._fields: tuple[FieldSpec, ...] = tuple(fields)
        self._by_alias: dict[str, FieldSpec] = {}
        names: set[str] = set()
        for spec in self._fields:
            if spec.name in names:
                raise ValueError(f"{record_name} declares field '{spec.name}' twice")
            names.add(spec.name)
            for alias in spec.aliases:
                if alias in self._by_alias:
                    raise ValueError(
                        f"{record_name} alias {alias!r} is used by both "
                        f"'{self._by_alias[alias].name}' and '{spec.name}'"
                    )
                self._by_alias[alias] = spec

    def __iter__(self) -> Iterator[FieldSpec]:
        return iter(self._fields)

    def __len__(self) -> int:
        return len(self._fields)

    def get(self, name: str) -> FieldSpec:
        """Look up a field declaration by attribute name."""
        for spec in self._fields:
            if spec.name == name:
                return spec
        raise KeyError(f"{self.record_name} has no field '{name}'")

    def aliases_by_label(self) -> dict[str, list[str]]:
        """Accepted aliases per field label, sorted, in declaration order."""
        return {spec.label: sorted(spec.aliases) for spec in self._fields}

    def resolve(self, key: str, text: str | None = None) -> FieldSpec:
        """Find the field a key refers to, ignoring case.

        Raises:
            UnknownKeyError: If the key matches no alias.
        """
        spec = self._by_alias.get(key.strip().lower())
        if spec is None:
            raise UnknownKeyError(
                unknown_key_message(self, key, text),
                key=key,
                record_name=self.record_name,
                text=text,
                accepted_aliases=self.aliases_by_label(),
            )
        return spec


# ============================================================================
# Coercion
# ============================================================================


@dataclass(frozen=True)
class CoercionContext:
    """What a coercion function needs besides the raw value."""

    record_name: str
    list_level: int = 2
    registry: CurrencyRegistry = DEFAULT_REGISTRY


def _coerce_text(value: str, spec: FieldSpec, context: CoercionContext) -> str:
    return value


def _coerce_text_list(value: str, spec: FieldSpec, context: CoercionContext) -> list[str]:
    return split_at_level(value, context.list_level)


def _coerce_uint(value: str, spec: FieldSpec, context: CoercionContext) -> int:
    digits = value.strip()
    if not (digits.isascii() and digits.isdigit()):
        raise NotANumberError(
            f"{context.record_name} details: {spec.label} must be a whole, "
            f"non-negative number, got {value!r}",
            record_name=context.record_name,
            text=value,
        )
    return int(digits)


def _coerce_money(value: str, spec: FieldSpec, context: CoercionContext) -> Any:
    return parse_money(value, context.registry)


_COERCERS: dict[FieldKind, Callable[[str, FieldSpec, CoercionContext], Any]] = {
    FieldKind.TEXT: _coerce_text,
    FieldKind.TEXT_LIST: _coerce_text_list,
    FieldKind.UINT: _coerce_uint,
    FieldKind.MONEY: _coerce_money,
}


def coerce(value: str, spec: FieldSpec, context: CoercionContext) -> Any:
    """Coerce a raw value according to the field's kind."""
    return _COERCERS[spec.kind](value, spec, context)


def resolve_and_coerce(
    key: str,
    value: str,
    table: AliasTable,
    list_level: int = 2,
    registry: CurrencyRegistry = DEFAULT_REGISTRY,
    text: str | None = None,
) -> tuple[FieldSpec, Any]:
    """Resolve a key against the alias table and coerce its value.

    Args:
        key: Key as typed by the user.
        value: Raw value text.
        table: Alias table of the target record.
        list_level: Grammar level list-valued fields are split on.
        registry: Currencies money fields may use.
        text: The whole pair, for error context.

    Returns:
        The field declaration and the coerced value.

    Raises:
        UnknownKeyError: If the key matches no alias.
        NotANumberError: If an unsigned integer field holds something else.
        MoneyError: If a money field cannot be parsed.
    """
    spec = table.resolve(key, text=text)
    context = CoercionContext(
        record_name=table.record_name,
        list_level=list_level,
        registry=registry,
    )
    return spec, coerce(value, spec, context)

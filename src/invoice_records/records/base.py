"""Base class shared by every parseable record."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, ClassVar

from pydantic import BaseModel, PrivateAttr

from invoice_records.money.currency import DEFAULT_REGISTRY, CurrencyRegistry
from invoice_records.records.fields import AliasTable

if TYPE_CHECKING:
    from invoice_records.core.config import ParserConfig


def is_blank(value: Any) -> bool:
    """Whether a field value counts as not filled in."""
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, list):
        return not any(isinstance(item, str) and item.strip() for item in value)
    return False


class Record(BaseModel):
    """A record parsed from one group of key:value pairs.

    Subclasses declare their :class:`AliasTable` and the grammar level they
    are parsed at, and may override the defaulting and value-check hooks the
    parser calls once every pair has been read.
    """

    alias_table: ClassVar[AliasTable]
    default_depth: ClassVar[int] = 0

    _registry: CurrencyRegistry = PrivateAttr(default_factory=lambda: DEFAULT_REGISTRY)

    @property
    def registry(self) -> CurrencyRegistry:
        """Currencies this record's money was parsed against."""
        return self._registry

    def bind_registry(self, registry: CurrencyRegistry) -> None:
        self._registry = registry

    def apply_defaults(self, assigned: set[str]) -> list[str]:
        """Fill optional fields left unset. Returns the names defaulted."""
        return []

    def check_values(self, config: ParserConfig) -> None:
        """Validate the format of fields that were given a value."""
        return None

    def missing_required(self) -> list[str]:
        """Labels of required fields that are still blank."""
        return [
            spec.label
            for spec in self.alias_table
            if spec.required and is_blank(getattr(self, spec.name))
        ]

"""Human-readable error text for record parsing.

Every message names the record, quotes the offending text, and where the
user picked the wrong key, lists every accepted alias so the message alone
is enough to fix the input.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from invoice_records.core.grammar import KEY_VALUE_SEPARATOR

if TYPE_CHECKING:
    from invoice_records.records.fields import AliasTable


def describe_aliases(table: AliasTable) -> str:
    """List every field of a record with the keys accepted for it."""
    lines: list[str] = []
    for label, aliases in table.aliases_by_label().items():
        lines.append(f'\t- The following are all possible keys for "{label}"')
        lines.extend(f"\t\t- {alias}" for alias in aliases)
    return "\n".join(lines) + "\n"


def describe_fields(table: AliasTable) -> str:
    """List every declared field label, one per line."""
    return "".join(f"\t- {spec.label}\n" for spec in table)


def malformed_pair_message(table: AliasTable, segment: str) -> str:
    return (
        f'{table.record_name} details: cannot find key in text: "{segment}", '
        f"keys must be one or more character long followed by a "
        f"'{KEY_VALUE_SEPARATOR}' then an optional whitespace\n"
        f"any one of the following keys are valid (case insensitive):\n"
        f"{describe_aliases(table)}"
    )


def unknown_key_message(table: AliasTable, key: str, segment: str | None = None) -> str:
    where = f' in "{segment}"' if segment is not None else ""
    return (
        f'{table.record_name} details: unknown key "{key}"{where}\n'
        f"any one of the following keys are valid (case insensitive):\n"
        f"{describe_aliases(table)}"
    )


def duplicate_field_message(table: AliasTable, label: str, segment: str) -> str:
    return (
        f"{table.record_name} details: specified the same {table.record_name} "
        f'field "{label}" multiple times in list of key-value pairs (at "{segment}")'
    )


def missing_fields_message(table: AliasTable, missing: list[str]) -> str:
    """Explain which fields a record needs, highlighting the missing ones."""
    return (
        f"{table.record_name} details: you need to give {len(table)} key-value pairs "
        f"each of which representing one of the following fields:\n"
        f"{describe_fields(table)}"
        f"missing required fields: {', '.join(missing)}"
    )


def invalid_email_message(value: str) -> str:
    return f'"{value}" is not a valid email'


def bank_field_message(value: str, description: str, violations: list[str]) -> str:
    """Describe every rule an account number or sort code breaks.

    Example:
        ``"abab1" is not a valid sort code (6 digits) (not numeric)``
    """
    reasons = " ".join(f"({violation})" for violation in violations)
    return f'"{value}" is not a valid {description} {reasons}'

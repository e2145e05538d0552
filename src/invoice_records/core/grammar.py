"""Delimiter grammar shared by every record type.

Three list separators nest from outermost to innermost, and a fourth splits a
key from its value:

- ``,`` separates records in a list (line items)
- ``;`` separates key:value pairs inside one record
- ``|`` separates values inside a list-valued field
- ``:`` separates a key from its value

A record parsed on its own (a contact, bank details) starts one level up, so
its pairs are split on ``,`` and its list values on ``;``. A record inside a
list starts at level 1. Every separator swallows one optional trailing space.
"""

import re

RECORD_SEPARATOR = ","
FIELD_SEPARATOR = ";"
LIST_VALUE_SEPARATOR = "|"
KEY_VALUE_SEPARATOR = ":"

LEVELS: tuple[str, ...] = (RECORD_SEPARATOR, FIELD_SEPARATOR, LIST_VALUE_SEPARATOR)

_SPLIT_FORMAT = "{} ?"


def _compile(separator: str) -> re.Pattern[str]:
    return re.compile(_SPLIT_FORMAT.format(re.escape(separator)))


_LEVEL_PATTERNS: tuple[re.Pattern[str], ...] = tuple(_compile(sep) for sep in LEVELS)
_KEY_VALUE_PATTERN = _compile(KEY_VALUE_SEPARATOR)


def split_at_level(text: str, level: int) -> list[str]:
    """Split text on the separator of the given nesting level.

    Args:
        text: Raw text to split.
        level: 0 for records, 1 for fields, 2 for list values.

    Returns:
        The segments in input order.

    Raises:
        ValueError: If level is outside the grammar.
    """
    if not 0 <= level < len(_LEVEL_PATTERNS):
        raise ValueError(
            f"Nesting level {level} is outside the grammar (0-{len(LEVELS) - 1})"
        )
    return _LEVEL_PATTERNS[level].split(text)


def split_records(text: str) -> list[str]:
    """Split a list of records on ``,``."""
    return split_at_level(text, 0)


def split_fields(text: str) -> list[str]:
    """Split a record's key:value pairs on ``;``."""
    return split_at_level(text, 1)


def split_list_values(text: str) -> list[str]:
    """Split a list-valued field on ``|``."""
    return split_at_level(text, 2)


def split_key_value(text: str) -> list[str]:
    """Split one pair on ``:``. A well-formed pair yields exactly two parts."""
    return _KEY_VALUE_PATTERN.split(text)

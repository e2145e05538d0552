"""Configuration classes for record parsing."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from invoice_records.money.currency import DEFAULT_REGISTRY, CurrencyRegistry


class ParserConfig(BaseModel):
    """Configuration for the record parser."""

    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    # Money settings
    registry: CurrencyRegistry = Field(
        default=DEFAULT_REGISTRY,
        description="Currencies money fields may be expressed in",
    )

    # Validation settings
    validate_email: bool = Field(
        default=True,
        description="Reject email fields that do not look like an email address",
    )
    validate_bank_fields: bool = Field(
        default=True,
        description="Check account number and sort code lengths and digits",
    )

"""Invoice assembly from parsed records.

This module glues contacts, line items and bank details parsed from
delimited text into an invoice, and parses the invoice's dates.
"""

from invoice_records.schemas.invoice import Invoice, format_date, parse_date

__all__ = [
    "Invoice",
    "format_date",
    "parse_date",
]

# Path: mica_ixbrl/engine/checks/field_values.py
"""
Field Value Helpers for Whitepaper Checks

Presence tests and normalization shared by the rule engines:
- Absent values (None, blank strings, empty lists)
- "Not applicable" placeholders entered instead of an identifier
- Numeric coercion of numbers and numeric strings
- Strict YYYY-MM-DD date parsing
"""

import re
from datetime import date
from decimal import Decimal
from typing import Any, Optional

from ..generator.numeric_grammar import parse_numeric_value


# Placeholders meaning "no separate entity", compared after normalization
# (lowercase, letters and digits only): "N/A", "n.a.", "Not applicable." ...
NOT_APPLICABLE_PHRASES = frozenset({
    'na',
    'nil',
    'none',
    'notapplicable',
    'notavailable',
    'notrelevant',
    'nolei',
})

_NON_ALNUM = re.compile(r'[^a-z0-9]')
ISO_DATE_PATTERN = re.compile(r'^[0-9]{4}-[0-9]{2}-[0-9]{2}$')


def is_present(value: Any) -> bool:
    """
    Check whether a field carries a value.

    None, whitespace-only strings and empty lists count as absent.
    False and 0 are present.

    Args:
        value: Field value

    Returns:
        True if present
    """
    if value is None:
        return False
    if isinstance(value, str):
        return bool(value.strip())
    if isinstance(value, (list, tuple)):
        return len(value) > 0
    return True


def normalize_phrase(value: str) -> str:
    """Lowercase and drop everything but letters and digits."""
    return _NON_ALNUM.sub('', value.lower())


def is_not_applicable(value: Any) -> bool:
    """
    Check whether a value is a "not applicable" placeholder.

    Matching is case- and punctuation-insensitive.

    Args:
        value: Field value

    Returns:
        True for placeholders such as 'N/A' or 'Not applicable'
    """
    if not isinstance(value, str):
        return False
    normalized = normalize_phrase(value)
    return bool(normalized) and normalized in NOT_APPLICABLE_PHRASES


def as_number(value: Any) -> Optional[Decimal]:
    """
    Coerce a field value to Decimal.

    Args:
        value: Number or numeric string

    Returns:
        Decimal, or None for prose and non-numeric types
    """
    return parse_numeric_value(value)


def parse_iso_date(value: Any) -> Optional[date]:
    """
    Parse a strict YYYY-MM-DD date.

    Compact (20250630) and week (2025-W26-1) forms are rejected.

    Args:
        value: date instance or string

    Returns:
        date, or None if the value is not a valid YYYY-MM-DD date
    """
    if isinstance(value, date):
        return value
    text = str(value).strip()
    if not ISO_DATE_PATTERN.match(text):
        return None
    try:
        return date.fromisoformat(text)
    except ValueError:
        return None


__all__ = [
    'ISO_DATE_PATTERN',
    'NOT_APPLICABLE_PHRASES',
    'is_present',
    'normalize_phrase',
    'is_not_applicable',
    'as_number',
    'parse_iso_date',
]

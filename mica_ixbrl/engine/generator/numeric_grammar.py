# Path: mica_ixbrl/engine/generator/numeric_grammar.py
"""
Numeric Value Grammar

Decides whether a serialized value can be tagged as an ix:nonFraction.

Accepted shape: optional sign, optional currency symbol, digits (plain or
comma-grouped in threes), optional decimal part or trailing point,
optional percent suffix. Whitespace around the sign, symbol and suffix is
tolerated. Anything else (e.g. "Not applicable", "1,00", "10 tokens") is
prose and must be tagged as text.
"""

import re
from decimal import Decimal, InvalidOperation
from typing import Optional


NUMERIC_VALUE_PATTERN = re.compile(
    r'^\s*'
    r'[+-]?\s*'
    r'[$€£¥]?\s*'
    r'(?:[0-9]{1,3}(?:,[0-9]{3})+|[0-9]+)'
    r'(?:\.[0-9]*)?'
    r'\s*%?'
    r'\s*$'
)

_STRIP_PATTERN = re.compile(r'[\s,$€£¥%]')


def is_value_numeric(value: str) -> bool:
    """
    Check a serialized value against the numeric grammar.

    Args:
        value: Serialized fact value

    Returns:
        True if the value can be rendered as a numeric inline element
    """
    if value is None:
        return False
    return NUMERIC_VALUE_PATTERN.match(str(value)) is not None


def parse_numeric_value(value) -> Optional[Decimal]:
    """
    Convert a number or numeric string to Decimal.

    Booleans are not numbers here. Strings must satisfy the numeric
    grammar; symbols, grouping commas and the percent sign are dropped.

    Args:
        value: int, float, Decimal or str

    Returns:
        Decimal, or None if the value is not numeric
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, Decimal):
        return value if value.is_finite() else None
    if isinstance(value, (int, float)):
        try:
            number = Decimal(str(value))
        except InvalidOperation:
            return None
        return number if number.is_finite() else None
    if isinstance(value, str) and is_value_numeric(value):
        cleaned = _STRIP_PATTERN.sub('', value)
        if cleaned.endswith('.'):
            cleaned = cleaned[:-1]
        try:
            return Decimal(cleaned)
        except InvalidOperation:
            return None
    return None


__all__ = ['NUMERIC_VALUE_PATTERN', 'is_value_numeric', 'parse_numeric_value']

# Path: mica_ixbrl/engine/checks/duplicate_detector.py
"""
Duplicate Fact Detector

Finds facts reported more than once for the same element, context and
unit. Any such group is an error in the generated instance, regardless
of whether the values agree.

A fact without a unit is keyed with an empty unit, so two unitless facts
collide while a unitless fact never collides with a unit-bearing one.
"""

from dataclasses import dataclass, field
from typing import Iterable, Optional

from ...constants import (
    SEVERITY_ERROR,
    DUPLICATE_VALUE_DISPLAY_LENGTH,
    DUPLICATE_VALUES_SHOWN,
    LOG_PROCESS,
)
from ...core.logger import get_process_logger
from ...models.validation import ValidationIssue
from ...models.xbrl import Fact


RULE_DUPLICATE_FACT = 'DUP-001'

logger = get_process_logger('duplicate_detector')


@dataclass
class DuplicateGroup:
    """Facts sharing one (element, context, unit) key."""
    element_name: str
    context_ref: str
    unit_ref: Optional[str]
    count: int
    values: list[str] = field(default_factory=list)


@dataclass
class DuplicateFactResult:
    """Outcome of duplicate detection over a fact list."""
    has_duplicates: bool
    duplicates: list[DuplicateGroup] = field(default_factory=list)
    total_facts: int = 0


def detect_duplicate_facts(facts: Iterable[Fact]) -> DuplicateFactResult:
    """
    Group facts by (name, context_ref, unit_ref) and report collisions.

    Args:
        facts: Facts (anything with name, context_ref, unit_ref, value)

    Returns:
        DuplicateFactResult with one group per colliding key, groups in
        order of first appearance and values in encounter order
    """
    groups: dict[tuple[str, str, str], list] = {}
    total = 0

    for fact in facts:
        total += 1
        key = (fact.name, fact.context_ref, fact.unit_ref or '')
        groups.setdefault(key, []).append(fact)

    duplicates = [
        DuplicateGroup(
            element_name=name,
            context_ref=context_ref,
            unit_ref=unit_ref or None,
            count=len(members),
            values=[str(member.value) for member in members],
        )
        for (name, context_ref, unit_ref), members in groups.items()
        if len(members) > 1
    ]

    if duplicates:
        logger.warning(f"{LOG_PROCESS} Found {len(duplicates)} duplicate fact groups in {total} facts")

    return DuplicateFactResult(
        has_duplicates=bool(duplicates),
        duplicates=duplicates,
        total_facts=total,
    )


def _truncate(value: str, length: int = DUPLICATE_VALUE_DISPLAY_LENGTH) -> str:
    if len(value) <= length:
        return value
    return value[:length] + '...'


def format_duplicate_message(group: DuplicateGroup) -> str:
    """
    Describe a duplicate group for display.

    Shows at most three values, each truncated to 50 characters.
    """
    unit_part = f' with unit "{group.unit_ref}"' if group.unit_ref else ''
    shown = ', '.join(f'"{_truncate(v)}"' for v in group.values[:DUPLICATE_VALUES_SHOWN])
    hidden = len(group.values) - DUPLICATE_VALUES_SHOWN
    more = f' ... and {hidden} more' if hidden > 0 else ''
    return (
        f'Duplicate fact: element "{group.element_name}" with context '
        f'"{group.context_ref}"{unit_part} appears {group.count} times. '
        f'Values: {shown}{more}'
    )


def duplicates_to_issues(result: DuplicateFactResult) -> list[ValidationIssue]:
    """
    Convert duplicate groups to validation errors, one per group.

    Args:
        result: Detection result

    Returns:
        List of DUP-001 errors
    """
    return [
        ValidationIssue(
            rule_id=RULE_DUPLICATE_FACT,
            severity=SEVERITY_ERROR,
            message=format_duplicate_message(group),
            element=group.element_name,
        )
        for group in result.duplicates
    ]


__all__ = [
    'RULE_DUPLICATE_FACT',
    'DuplicateGroup',
    'DuplicateFactResult',
    'detect_duplicate_facts',
    'format_duplicate_message',
    'duplicates_to_issues',
]

# Path: mica_ixbrl/models/validation.py
"""
Validation Result Data Structures

Issues, per-engine results and the aggregate validation report.
Every structure converts to a plain dictionary for client serialization.
"""

from dataclasses import dataclass, field, asdict
from typing import Optional

from ..constants import (
    SEVERITY_ERROR,
    SEVERITY_WARNING,
    RULE_CATEGORIES,
)


@dataclass(frozen=True)
class ValidationIssue:
    """
    A single failed assertion.

    Attributes:
        rule_id: Stable rule identifier (e.g. 'EXS-A-001', 'LEI-002')
        severity: 'ERROR' or 'WARNING'
        message: Human-readable description
        field_path: Record path the issue relates to (e.g. 'partA.lei')
        element: Taxonomy element name, when the rule targets one
    """
    rule_id: str
    severity: str
    message: str
    field_path: Optional[str] = None
    element: Optional[str] = None

    @property
    def is_error(self) -> bool:
        return self.severity == SEVERITY_ERROR

    def to_dict(self) -> dict:
        return {
            'rule_id': self.rule_id,
            'severity': self.severity,
            'message': self.message,
            'field_path': self.field_path,
            'element': self.element,
        }


@dataclass
class RuleEngineResult:
    """Errors and warnings produced by one rule engine."""
    errors: list[ValidationIssue] = field(default_factory=list)
    warnings: list[ValidationIssue] = field(default_factory=list)

    def add(self, issue: ValidationIssue) -> None:
        """Route issue to errors or warnings by its severity."""
        if issue.severity == SEVERITY_WARNING:
            self.warnings.append(issue)
        else:
            self.errors.append(issue)

    def extend(self, other: 'RuleEngineResult') -> None:
        self.errors.extend(other.errors)
        self.warnings.extend(other.warnings)

    def filtered(self, keep) -> 'RuleEngineResult':
        """Return a copy holding only issues for which keep(issue) is true."""
        return RuleEngineResult(
            errors=[i for i in self.errors if keep(i)],
            warnings=[i for i in self.warnings if keep(i)],
        )

    @property
    def passed(self) -> bool:
        return not self.errors


@dataclass
class RuleSummary:
    """Assertion counts of a rule engine for one token type."""
    total: int = 0
    required: int = 0
    recommended: int = 0
    by_section: dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class AssertionCount:
    """How many assertions of a category ran, and how many failed."""
    total: int = 0
    failed: int = 0

    @property
    def passed(self) -> int:
        return max(self.total - self.failed, 0)

    def to_dict(self) -> dict:
        return {'total': self.total, 'passed': self.passed, 'failed': self.failed}


@dataclass
class ValidationOptions:
    """
    Options for a validation run.

    Attributes:
        check_registry: Cross-check the offeror LEI against GLEIF
            (async validation only)
        skip_rules: Rule IDs whose issues are dropped from the report
    """
    check_registry: bool = False
    skip_rules: frozenset[str] = frozenset()


@dataclass
class ValidationReport:
    """
    Aggregate result of a full validation.

    Attributes:
        valid: True when there are no errors; warnings never affect it
        token_type: Token type the record was validated as
        errors: All errors across categories
        warnings: All warnings across categories
        by_category: Per-category engine results (lei, existence, value,
            duplicate)
        assertion_counts: Per-category assertion counts
        registry_status: Outcome of the optional GLEIF lookup
    """
    valid: bool
    token_type: str
    errors: list[ValidationIssue] = field(default_factory=list)
    warnings: list[ValidationIssue] = field(default_factory=list)
    by_category: dict[str, RuleEngineResult] = field(default_factory=dict)
    assertion_counts: dict[str, AssertionCount] = field(default_factory=dict)
    registry_status: Optional[str] = None

    @property
    def total_assertions(self) -> int:
        return sum(count.total for count in self.assertion_counts.values())

    @property
    def passed_assertions(self) -> int:
        return sum(count.passed for count in self.assertion_counts.values())

    def to_dict(self) -> dict:
        """Convert to a JSON-serializable dictionary."""
        return {
            'valid': self.valid,
            'token_type': self.token_type,
            'errors': [issue.to_dict() for issue in self.errors],
            'warnings': [issue.to_dict() for issue in self.warnings],
            'summary': {
                'total_assertions': self.total_assertions,
                'passed': self.passed_assertions,
                'errors': len(self.errors),
                'warnings': len(self.warnings),
            },
            'by_category': {
                category: {
                    'errors': [i.to_dict() for i in result.errors],
                    'warnings': [i.to_dict() for i in result.warnings],
                }
                for category, result in self.by_category.items()
                if category in RULE_CATEGORIES
            },
            'assertion_counts': {
                category: count.to_dict()
                for category, count in self.assertion_counts.items()
            },
            'registry_status': self.registry_status,
        }


@dataclass
class QuickValidationResult:
    """Result of existence plus LEI checks only."""
    valid: bool
    error_count: int
    errors: list[ValidationIssue] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            'valid': self.valid,
            'error_count': self.error_count,
            'errors': [issue.to_dict() for issue in self.errors],
        }


__all__ = [
    'ValidationIssue',
    'RuleEngineResult',
    'RuleSummary',
    'AssertionCount',
    'ValidationOptions',
    'ValidationReport',
    'QuickValidationResult',
]

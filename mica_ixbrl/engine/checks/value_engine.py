# Path: mica_ixbrl/engine/checks/value_engine.py
"""
Value Rule Engine

Single-field and cross-field value checks for whitepaper records:
- Date ordering of the offer period
- Positivity and non-negativity of quantities and amounts
- Percentage bounds
- Country, date, language, URL, email and symbol formats
- Completeness hints for public offers
- ART/EMT issuer identity

A check only runs when the fields it reads are present; absence is the
existence engine's concern.
"""

import re
from collections import Counter
from dataclasses import dataclass
from typing import Callable
from urllib.parse import urlparse

from ...constants import (
    SEVERITY_ERROR,
    SEVERITY_WARNING,
    SUPPORTED_LANGUAGES,
    TOKEN_TYPES,
    LOG_PROCESS,
)
from ...core.logger import get_process_logger
from ...models.validation import RuleEngineResult, RuleSummary, ValidationIssue
from ...models.whitepaper import WhitepaperRecord
from .field_values import as_number, is_present, parse_iso_date


COUNTRY_CODE_PATTERN = re.compile(r'^[A-Z]{2}$')
EMAIL_PATTERN = re.compile(r'^[^\s@]+@[^\s@]+\.[^\s@]+$')
LANGUAGE_CODE_PATTERN = re.compile(r'^[a-z]{2}$')

ALL_TOKEN_TYPES = tuple(TOKEN_TYPES)


# ==============================================================================
# CHECKS
# Each check returns (field_path, message) pairs for the violations it finds.
# ==============================================================================

def check_offer_period(record: WhitepaperRecord) -> list[tuple[str, str]]:
    start = record.get_field('partE.publicOfferingStartDate')
    end = record.get_field('partE.publicOfferingEndDate')
    if not (is_present(start) and is_present(end)):
        return []

    start_date = parse_iso_date(start)
    end_date = parse_iso_date(end)
    if start_date is None or end_date is None:
        return []

    if end_date < start_date:
        return [(
            'partE.publicOfferingEndDate',
            f"Public offering end date ({end_date.isoformat()}) precedes "
            f"start date ({start_date.isoformat()})",
        )]
    return []


def _numeric_check(path: str, label: str, violates: Callable, requirement: str) -> Callable:
    def check(record: WhitepaperRecord) -> list[tuple[str, str]]:
        number = as_number(record.get_field(path))
        if number is None or not violates(number):
            return []
        return [(path, f"{label} {requirement}, got {number}")]
    return check


check_total_supply = _numeric_check(
    'partD.totalSupply', 'Total supply', lambda n: n <= 0, 'must be greater than zero'
)
check_token_price = _numeric_check(
    'partE.tokenPrice', 'Token price', lambda n: n < 0, 'must not be negative'
)
check_subscription_goal = _numeric_check(
    'partE.maxSubscriptionGoal', 'Maximum subscription goal', lambda n: n < 0,
    'must not be negative'
)
check_renewable_percentage = _numeric_check(
    'partJ.renewableEnergyPercentage', 'Renewable energy percentage',
    lambda n: n < 0 or n > 100, 'must be between 0 and 100'
)
check_energy_consumption = _numeric_check(
    'partJ.energyConsumption', 'Energy consumption', lambda n: n < 0, 'must not be negative'
)


def check_country_codes(record: WhitepaperRecord) -> list[tuple[str, str]]:
    violations = []
    for path in ('partA.country', 'partB.country', 'partC.country'):
        country = record.get_field(path)
        if not is_present(country):
            continue
        if not isinstance(country, str) or not COUNTRY_CODE_PATTERN.match(country.strip()):
            violations.append((
                path,
                f"Country code must be two uppercase letters (ISO 3166-1 alpha-2), got '{country}'",
            ))
    return violations


def check_website(record: WhitepaperRecord) -> list[tuple[str, str]]:
    website = record.get_field('partA.website')
    if not is_present(website):
        return []
    parsed = urlparse(str(website).strip())
    if parsed.scheme in ('http', 'https') and parsed.netloc:
        return []
    return [('partA.website', f"Website is not a valid absolute URL: '{website}'")]


def check_contact_email(record: WhitepaperRecord) -> list[tuple[str, str]]:
    email = record.get_field('partA.contactEmail')
    if not is_present(email) or EMAIL_PATTERN.match(str(email).strip()):
        return []
    return [('partA.contactEmail', f"Contact email is not a valid email address: '{email}'")]


def check_document_date(record: WhitepaperRecord) -> list[tuple[str, str]]:
    document_date = record.get_field('documentDate')
    if not is_present(document_date) or parse_iso_date(document_date) is not None:
        return []
    return [('documentDate', f"Document date must be a valid YYYY-MM-DD date, got '{document_date}'")]


def _language_format_ok(language) -> bool:
    return isinstance(language, str) and LANGUAGE_CODE_PATTERN.match(language) is not None


def check_language_format(record: WhitepaperRecord) -> list[tuple[str, str]]:
    language = record.get_field('language')
    if not is_present(language) or _language_format_ok(language):
        return []
    return [('language', f"Language must be a two-letter lowercase ISO 639-1 code, got '{language}'")]


def check_language_supported(record: WhitepaperRecord) -> list[tuple[str, str]]:
    language = record.get_field('language')
    # Malformed codes are reported by the format check only
    if not is_present(language) or not _language_format_ok(language):
        return []
    if language in SUPPORTED_LANGUAGES:
        return []
    return [('language', f"Language '{language}' is not an official EU language")]


def check_offering_terms(record: WhitepaperRecord) -> list[tuple[str, str]]:
    if record.get_field('partE.isPublicOffering') is not True:
        return []
    if is_present(record.get_field('partE.tokenPrice')):
        return []
    if is_present(record.get_field('partE.maxSubscriptionGoal')):
        return []
    return [('partE', 'Public offering should state a token price or a maximum subscription goal')]


def check_symbol_case(record: WhitepaperRecord) -> list[tuple[str, str]]:
    symbol = record.get_field('partD.cryptoAssetSymbol')
    if not is_present(symbol) or not isinstance(symbol, str) or symbol == symbol.upper():
        return []
    return [('partD.cryptoAssetSymbol', f"Crypto-asset symbol should be uppercase, got '{symbol}'")]


def check_issuer_distinct(record: WhitepaperRecord) -> list[tuple[str, str]]:
    offeror_lei = record.get_field('partA.lei')
    issuer_lei = record.get_field('partB.lei')
    if not (is_present(offeror_lei) and is_present(issuer_lei)):
        return []
    if str(offeror_lei).strip().upper() != str(issuer_lei).strip().upper():
        return []
    return [('partB.lei', 'Issuer LEI is identical to offeror LEI; Part B applies only to a different issuer')]


@dataclass(frozen=True)
class ValueAssertion:
    """Declaration of one value assertion and the check implementing it."""
    id: str
    description: str
    field_path: str
    check: Callable[[WhitepaperRecord], list[tuple[str, str]]]
    token_types: tuple[str, ...] = ALL_TOKEN_TYPES
    severity: str = SEVERITY_ERROR

    @property
    def section(self) -> str:
        return self.field_path.split('.', 1)[0]

    @property
    def is_required(self) -> bool:
        return self.severity == SEVERITY_ERROR

    def applies_to(self, token_type: str) -> bool:
        return token_type in self.token_types


VALUE_ASSERTIONS = (
    ValueAssertion('VAL-001', 'Offer end date not before start date',
                   'partE.publicOfferingEndDate', check_offer_period),
    ValueAssertion('VAL-002', 'Total supply greater than zero',
                   'partD.totalSupply', check_total_supply),
    ValueAssertion('VAL-003', 'Token price not negative',
                   'partE.tokenPrice', check_token_price),
    ValueAssertion('VAL-004', 'Maximum subscription goal not negative',
                   'partE.maxSubscriptionGoal', check_subscription_goal),
    ValueAssertion('VAL-005', 'Renewable energy percentage within 0-100',
                   'partJ.renewableEnergyPercentage', check_renewable_percentage),
    ValueAssertion('VAL-006', 'Country code format',
                   'partA.country', check_country_codes),
    ValueAssertion('VAL-007', 'Website URL format',
                   'partA.website', check_website, severity=SEVERITY_WARNING),
    ValueAssertion('VAL-008', 'Contact email format',
                   'partA.contactEmail', check_contact_email, severity=SEVERITY_WARNING),
    ValueAssertion('VAL-009', 'Document date format',
                   'documentDate', check_document_date),
    ValueAssertion('VAL-010', 'Language code format',
                   'language', check_language_format),
    ValueAssertion('VAL-011', 'Public offering price or goal stated',
                   'partE', check_offering_terms, severity=SEVERITY_WARNING),
    ValueAssertion('VAL-012', 'Crypto-asset symbol uppercase',
                   'partD.cryptoAssetSymbol', check_symbol_case, severity=SEVERITY_WARNING),
    ValueAssertion('VAL-013', 'Energy consumption not negative',
                   'partJ.energyConsumption', check_energy_consumption),
    ValueAssertion('VAL-014', 'Language is an official EU language',
                   'language', check_language_supported, severity=SEVERITY_WARNING),
    ValueAssertion('VAL-ART-001', 'ART issuer differs from offeror',
                   'partB.lei', check_issuer_distinct, ('ART',), SEVERITY_WARNING),
    ValueAssertion('VAL-EMT-001', 'EMT issuer differs from offeror',
                   'partB.lei', check_issuer_distinct, ('EMT',), SEVERITY_WARNING),
)


class ValueRuleEngine:
    """
    Evaluates value assertions against a whitepaper record.

    Example:
        engine = ValueRuleEngine()
        result = engine.evaluate(record, 'ART')
    """

    def __init__(self, assertions: tuple[ValueAssertion, ...] = VALUE_ASSERTIONS):
        self.assertions = assertions
        self.logger = get_process_logger('value_engine')

    def get_assertions(self, token_type: str) -> list[ValueAssertion]:
        return [a for a in self.assertions if a.applies_to(token_type)]

    def evaluate(self, record: WhitepaperRecord, token_type: str) -> RuleEngineResult:
        """
        Run all applicable value checks.

        Args:
            record: Whitepaper record
            token_type: 'OTHR', 'ART' or 'EMT'

        Returns:
            RuleEngineResult
        """
        result = RuleEngineResult()

        for assertion in self.get_assertions(token_type):
            for field_path, message in assertion.check(record):
                result.add(ValidationIssue(
                    rule_id=assertion.id,
                    severity=assertion.severity,
                    message=message,
                    field_path=field_path,
                ))

        self.logger.debug(
            f"{LOG_PROCESS} Value checks for {token_type}: "
            f"{len(result.errors)} errors, {len(result.warnings)} warnings"
        )
        return result

    def summary(self, token_type: str) -> RuleSummary:
        assertions = self.get_assertions(token_type)
        required = sum(1 for a in assertions if a.is_required)
        return RuleSummary(
            total=len(assertions),
            required=required,
            recommended=len(assertions) - required,
            by_section=dict(Counter(a.section for a in assertions)),
        )


def evaluate_values(record: WhitepaperRecord, token_type: str) -> RuleEngineResult:
    return ValueRuleEngine().evaluate(record, token_type)


def get_value_summary(token_type: str) -> RuleSummary:
    return ValueRuleEngine().summary(token_type)


__all__ = [
    'ValueAssertion',
    'VALUE_ASSERTIONS',
    'ValueRuleEngine',
    'evaluate_values',
    'get_value_summary',
]

# Path: mica_ixbrl/engine/checks/existence_engine.py
"""
Existence Rule Engine

Checks that the fields a MiCA white paper must (or should) disclose are
filled in.

Each assertion targets one field path. Mandatory assertions produce
errors, recommended ones produce warnings. An assertion may be gated by
a condition on another field; when the condition does not hold the
assertion is skipped without any finding.
"""

from collections import Counter
from dataclasses import dataclass
from typing import Any, Optional

from ...constants import (
    SEVERITY_ERROR,
    SEVERITY_WARNING,
    TOKEN_TYPES,
    LOG_PROCESS,
)
from ...core.logger import get_process_logger
from ...models.validation import RuleEngineResult, RuleSummary, ValidationIssue
from ...models.whitepaper import WhitepaperRecord
from .field_values import is_present


ALL_TOKEN_TYPES = tuple(TOKEN_TYPES)


@dataclass(frozen=True)
class AssertionCondition:
    """
    Gate for an assertion.

    With a value the referenced field must equal it; without one the
    referenced field must merely be present.
    """
    field_path: str
    value: Any = None

    def holds(self, record: WhitepaperRecord) -> bool:
        actual = record.get_field(self.field_path)
        if self.value is None:
            return is_present(actual)
        return actual == self.value


@dataclass(frozen=True)
class ExistenceAssertion:
    """Declaration of one existence assertion."""
    id: str
    description: str
    field_path: str
    element_name: str
    token_types: tuple[str, ...]
    severity: str = SEVERITY_ERROR
    condition: Optional[AssertionCondition] = None

    @property
    def section(self) -> str:
        return self.field_path.split('.', 1)[0]

    @property
    def is_required(self) -> bool:
        return self.severity == SEVERITY_ERROR

    def applies_to(self, token_type: str) -> bool:
        return token_type in self.token_types


# ==============================================================================
# ASSERTION CATALOG
# ==============================================================================

COMMON_ASSERTIONS = (
    # Part A - offeror
    ExistenceAssertion('EXS-A-001', 'Offeror legal name', 'partA.legalName',
                       'mica:OfferorLegalName', ALL_TOKEN_TYPES),
    ExistenceAssertion('EXS-A-002', 'Offeror LEI', 'partA.lei',
                       'mica:OfferorLEI', ALL_TOKEN_TYPES),
    ExistenceAssertion('EXS-A-003', 'Offeror registered address', 'partA.registeredAddress',
                       'mica:OfferorRegisteredAddress', ALL_TOKEN_TYPES),
    ExistenceAssertion('EXS-A-004', 'Offeror country', 'partA.country',
                       'mica:OfferorCountry', ALL_TOKEN_TYPES),
    ExistenceAssertion('EXS-A-005', 'Offeror website', 'partA.website',
                       'mica:OfferorWebsite', ALL_TOKEN_TYPES, SEVERITY_WARNING),
    ExistenceAssertion('EXS-A-006', 'Offeror contact email', 'partA.contactEmail',
                       'mica:OfferorContactEmail', ALL_TOKEN_TYPES, SEVERITY_WARNING),

    # Part C - operator named by LEI must also be named by legal name
    ExistenceAssertion('EXS-C-001', 'Trading platform operator legal name', 'partC.legalName',
                       'mica:OperatorLegalName', ALL_TOKEN_TYPES,
                       condition=AssertionCondition('partC.lei')),

    # Part D - project
    ExistenceAssertion('EXS-D-001', 'Crypto-asset name', 'partD.cryptoAssetName',
                       'mica:CryptoAssetName', ALL_TOKEN_TYPES),
    ExistenceAssertion('EXS-D-002', 'Crypto-asset symbol', 'partD.cryptoAssetSymbol',
                       'mica:CryptoAssetSymbol', ALL_TOKEN_TYPES),
    ExistenceAssertion('EXS-D-003', 'Total supply', 'partD.totalSupply',
                       'mica:TotalSupply', ALL_TOKEN_TYPES, SEVERITY_WARNING),
    ExistenceAssertion('EXS-D-004', 'Project description', 'partD.projectDescription',
                       'mica:ProjectDescription', ALL_TOKEN_TYPES),

    # Part E - offering
    ExistenceAssertion('EXS-E-001', 'Public offering indicator', 'partE.isPublicOffering',
                       'mica:IsPublicOffering', ALL_TOKEN_TYPES),
    ExistenceAssertion('EXS-E-002', 'Public offering start date', 'partE.publicOfferingStartDate',
                       'mica:PublicOfferingStartDate', ALL_TOKEN_TYPES,
                       condition=AssertionCondition('partE.isPublicOffering', True)),

    # Part F - characteristics
    ExistenceAssertion('EXS-F-001', 'Crypto-asset classification', 'partF.classification',
                       'mica:CryptoAssetClassification', ALL_TOKEN_TYPES, SEVERITY_WARNING),

    # Part H - technology
    ExistenceAssertion('EXS-H-001', 'Blockchain description', 'partH.blockchainDescription',
                       'mica:BlockchainDescription', ALL_TOKEN_TYPES),

    # Part I - risks
    ExistenceAssertion('EXS-I-001', 'Offer-related risks', 'partI.offerRisks',
                       'mica:OfferRisks', ALL_TOKEN_TYPES, SEVERITY_WARNING),
    ExistenceAssertion('EXS-I-002', 'Issuer-related risks', 'partI.issuerRisks',
                       'mica:IssuerRisks', ALL_TOKEN_TYPES, SEVERITY_WARNING),
    ExistenceAssertion('EXS-I-003', 'Crypto-asset-related risks', 'partI.marketRisks',
                       'mica:MarketRisks', ALL_TOKEN_TYPES, SEVERITY_WARNING),
    ExistenceAssertion('EXS-I-004', 'Technology-related risks', 'partI.technologyRisks',
                       'mica:TechnologyRisks', ALL_TOKEN_TYPES, SEVERITY_WARNING),
    ExistenceAssertion('EXS-I-005', 'Regulatory risks', 'partI.regulatoryRisks',
                       'mica:RegulatoryRisks', ALL_TOKEN_TYPES, SEVERITY_WARNING),

    # Part J - sustainability
    ExistenceAssertion('EXS-J-001', 'Energy consumption', 'partJ.energyConsumption',
                       'mica:EnergyConsumption', ALL_TOKEN_TYPES, SEVERITY_WARNING),
    ExistenceAssertion('EXS-J-002', 'Consensus mechanism type', 'partJ.consensusMechanismType',
                       'mica:ConsensusMechanismType', ALL_TOKEN_TYPES, SEVERITY_WARNING),
)

OTHR_ASSERTIONS = (
    ExistenceAssertion('EXS-OTHR-001', 'Token standard', 'partD.tokenStandard',
                       'mica:TokenStandard', ('OTHR',), SEVERITY_WARNING),
    ExistenceAssertion('EXS-OTHR-002', 'Blockchain network', 'partD.blockchainNetwork',
                       'mica:BlockchainNetwork', ('OTHR',), SEVERITY_WARNING),
    ExistenceAssertion('EXS-OTHR-003', 'Consensus mechanism', 'partD.consensusMechanism',
                       'mica:ConsensusMechanism', ('OTHR',), SEVERITY_WARNING),
)

ART_ASSERTIONS = (
    ExistenceAssertion('EXS-ART-001', 'Issuer legal name', 'partB.legalName',
                       'mica:IssuerLegalName', ('ART',)),
    ExistenceAssertion('EXS-ART-002', 'Issuer LEI', 'partB.lei',
                       'mica:IssuerLEI', ('ART',)),
    ExistenceAssertion('EXS-ART-003', 'Reserve of assets and ownership rights',
                       'partG.ownershipRights', 'mica:OwnershipRights', ('ART',)),
)

EMT_ASSERTIONS = (
    ExistenceAssertion('EXS-EMT-001', 'Issuer legal name', 'partB.legalName',
                       'mica:IssuerLegalName', ('EMT',)),
    ExistenceAssertion('EXS-EMT-002', 'Issuer LEI', 'partB.lei',
                       'mica:IssuerLEI', ('EMT',)),
)

EXISTENCE_ASSERTIONS = COMMON_ASSERTIONS + OTHR_ASSERTIONS + ART_ASSERTIONS + EMT_ASSERTIONS


class ExistenceRuleEngine:
    """
    Evaluates existence assertions against a whitepaper record.

    Example:
        engine = ExistenceRuleEngine()
        result = engine.evaluate(record, 'OTHR')
        for issue in result.errors:
            print(issue.rule_id, issue.field_path)
    """

    def __init__(self, assertions: tuple[ExistenceAssertion, ...] = EXISTENCE_ASSERTIONS):
        self.assertions = assertions
        self.logger = get_process_logger('existence_engine')

    def get_assertions(self, token_type: str) -> list[ExistenceAssertion]:
        """Get the applicable assertions in declaration order."""
        return [a for a in self.assertions if a.applies_to(token_type)]

    def evaluate(self, record: WhitepaperRecord, token_type: str) -> RuleEngineResult:
        """
        Evaluate all applicable existence assertions.

        Args:
            record: Whitepaper record
            token_type: 'OTHR', 'ART' or 'EMT'

        Returns:
            RuleEngineResult with errors for missing mandatory fields and
            warnings for missing recommended fields
        """
        result = RuleEngineResult()
        skipped = 0

        for assertion in self.get_assertions(token_type):
            if assertion.condition is not None and not assertion.condition.holds(record):
                skipped += 1
                continue

            if is_present(record.get_field(assertion.field_path)):
                continue

            if assertion.is_required:
                message = f"Missing required field: {assertion.description}"
            else:
                message = f"Recommended field missing: {assertion.description}"

            result.add(ValidationIssue(
                rule_id=assertion.id,
                severity=assertion.severity,
                message=message,
                field_path=assertion.field_path,
                element=assertion.element_name,
            ))

        self.logger.debug(
            f"{LOG_PROCESS} Existence checks for {token_type}: "
            f"{len(result.errors)} errors, {len(result.warnings)} warnings, "
            f"{skipped} skipped by condition"
        )
        return result

    def summary(self, token_type: str) -> RuleSummary:
        """
        Count applicable assertions for display.

        Args:
            token_type: Token type

        Returns:
            RuleSummary with total, required, recommended and per-section counts
        """
        assertions = self.get_assertions(token_type)
        required = sum(1 for a in assertions if a.is_required)
        return RuleSummary(
            total=len(assertions),
            required=required,
            recommended=len(assertions) - required,
            by_section=dict(Counter(a.section for a in assertions)),
        )


def get_existence_assertions(token_type: str) -> list[ExistenceAssertion]:
    return ExistenceRuleEngine().get_assertions(token_type)


def evaluate_existence(record: WhitepaperRecord, token_type: str) -> RuleEngineResult:
    return ExistenceRuleEngine().evaluate(record, token_type)


def get_existence_summary(token_type: str) -> RuleSummary:
    return ExistenceRuleEngine().summary(token_type)


__all__ = [
    'AssertionCondition',
    'ExistenceAssertion',
    'EXISTENCE_ASSERTIONS',
    'ExistenceRuleEngine',
    'get_existence_assertions',
    'evaluate_existence',
    'get_existence_summary',
]

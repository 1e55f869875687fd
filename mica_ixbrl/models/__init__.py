# Path: mica_ixbrl/models/__init__.py
"""
MiCA iXBRL Models

Whitepaper record, taxonomy element, XBRL instance and validation
data structures.
"""

from .whitepaper import (
    WhitepaperRecord,
    OfferorInformation,
    EntityInformation,
    ProjectInformation,
    OfferingInformation,
    AssetCharacteristics,
    RightsInformation,
    TechnologyInformation,
    RiskInformation,
    SustainabilityInformation,
    ManagementBodyMember,
    ProjectPerson,
    FIELD_PATHS,
)
from .taxonomy import TaxonomyElement
from .xbrl import EscapeMode, Fact, TypedMember, Context, Unit, IXBRLDocument
from .validation import (
    ValidationIssue,
    RuleEngineResult,
    RuleSummary,
    AssertionCount,
    ValidationOptions,
    ValidationReport,
    QuickValidationResult,
)

__all__ = [
    'WhitepaperRecord',
    'OfferorInformation',
    'EntityInformation',
    'ProjectInformation',
    'OfferingInformation',
    'AssetCharacteristics',
    'RightsInformation',
    'TechnologyInformation',
    'RiskInformation',
    'SustainabilityInformation',
    'ManagementBodyMember',
    'ProjectPerson',
    'FIELD_PATHS',
    'TaxonomyElement',
    'EscapeMode',
    'Fact',
    'TypedMember',
    'Context',
    'Unit',
    'IXBRLDocument',
    'ValidationIssue',
    'RuleEngineResult',
    'RuleSummary',
    'AssertionCount',
    'ValidationOptions',
    'ValidationReport',
    'QuickValidationResult',
]

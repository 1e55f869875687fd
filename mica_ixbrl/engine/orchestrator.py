# Path: mica_ixbrl/engine/orchestrator.py
"""
Validation Orchestrator

Runs every rule category against a whitepaper record and aggregates the
results into one ValidationReport:

- lei: offeror, issuer and operator identifiers
- existence: mandatory and recommended fields per token type
- value: formats, ranges and cross-field consistency
- duplicate: facts colliding on (element, context, unit) in the instance
  that would be generated from the record

The registry lookup is the only optional, asynchronous part.
"""

from typing import Optional, Union

from ..constants import (
    CATEGORY_LEI,
    CATEGORY_EXISTENCE,
    CATEGORY_VALUE,
    CATEGORY_DUPLICATE,
    LEI_ASSERTION_COUNT,
    DUPLICATE_ASSERTION_COUNT,
    LOG_PROCESS,
)
from ..core.logger import get_process_logger
from ..models.validation import (
    AssertionCount,
    QuickValidationResult,
    RuleEngineResult,
    ValidationOptions,
    ValidationReport,
)
from ..models.whitepaper import WhitepaperRecord, resolve_token_type
from .checks.duplicate_detector import detect_duplicate_facts, duplicates_to_issues
from .checks.existence_engine import ExistenceRuleEngine
from .checks.lei_validator import (
    LEI_RULES,
    LEIRegistryClient,
    validate_all_leis,
    validate_lei_with_registry,
)
from .checks.value_engine import ValueRuleEngine
from .generator.fact_builder import FactBuilder
from .taxonomy_index import TaxonomyIndex


LEI_FIELD_PATHS = ('partA.lei', 'partB.lei', 'partC.lei')

logger = get_process_logger('orchestrator')


def _as_record(record: Union[WhitepaperRecord, dict]) -> WhitepaperRecord:
    if isinstance(record, WhitepaperRecord):
        return record
    return WhitepaperRecord.from_dict(record)


def _failed_assertions(result: RuleEngineResult) -> int:
    """Distinct rule IDs with at least one issue."""
    return len({issue.rule_id for issue in result.errors + result.warnings})


class WhitepaperValidator:
    """
    Runs all rule categories and builds the validation report.

    Example:
        validator = WhitepaperValidator()
        report = validator.validate(record, 'ART')
        if not report.valid:
            for issue in report.errors:
                print(issue.rule_id, issue.message)
    """

    def __init__(self, index: TaxonomyIndex = None):
        if index is None:
            from ..loaders.taxonomy_loader import default_index
            index = default_index()
        self.index = index
        self.existence_engine = ExistenceRuleEngine()
        self.value_engine = ValueRuleEngine()
        self.logger = get_process_logger('whitepaper_validator')

    def check_leis(self, record: WhitepaperRecord) -> RuleEngineResult:
        return validate_all_leis(
            record.get_field('partA.lei'),
            record.get_field('partB.lei'),
            record.get_field('partC.lei'),
        )

    def check_duplicates(self, record: WhitepaperRecord, token_type: str) -> RuleEngineResult:
        """Build the record's facts and report colliding ones."""
        facts = FactBuilder(self.index).build_all_facts(record, token_type)
        result = RuleEngineResult()
        for issue in duplicates_to_issues(detect_duplicate_facts(facts)):
            result.add(issue)
        return result

    def validate(
        self,
        record: Union[WhitepaperRecord, dict],
        token_type: Optional[str] = None,
        options: Optional[ValidationOptions] = None
    ) -> ValidationReport:
        """
        Validate a whitepaper record.

        Args:
            record: Whitepaper record (or its JSON dictionary)
            token_type: 'OTHR', 'ART' or 'EMT' (defaults to the record's)
            options: Validation options

        Returns:
            ValidationReport; valid is True when there are no errors
        """
        record = _as_record(record)
        token_type = resolve_token_type(record, token_type)
        options = options or ValidationOptions()

        by_category = {
            CATEGORY_LEI: self.check_leis(record),
            CATEGORY_EXISTENCE: self.existence_engine.evaluate(record, token_type),
            CATEGORY_VALUE: self.value_engine.evaluate(record, token_type),
            CATEGORY_DUPLICATE: self.check_duplicates(record, token_type),
        }

        if options.skip_rules:
            by_category = {
                category: result.filtered(lambda issue: issue.rule_id not in options.skip_rules)
                for category, result in by_category.items()
            }

        totals = {
            CATEGORY_LEI: LEI_ASSERTION_COUNT,
            CATEGORY_EXISTENCE: len(self.existence_engine.get_assertions(token_type)),
            CATEGORY_VALUE: len(self.value_engine.get_assertions(token_type)),
            CATEGORY_DUPLICATE: DUPLICATE_ASSERTION_COUNT,
        }
        counts = {
            category: AssertionCount(
                total=totals[category],
                failed=min(_failed_assertions(result), totals[category]),
            )
            for category, result in by_category.items()
        }

        errors = [issue for result in by_category.values() for issue in result.errors]
        warnings = [issue for result in by_category.values() for issue in result.warnings]

        report = ValidationReport(
            valid=not errors,
            token_type=token_type,
            errors=errors,
            warnings=warnings,
            by_category=by_category,
            assertion_counts=counts,
        )

        self.logger.info(
            f"{LOG_PROCESS} Validated {token_type} whitepaper: "
            f"{len(errors)} errors, {len(warnings)} warnings, "
            f"{report.passed_assertions}/{report.total_assertions} assertions passed"
        )
        return report

    async def validate_async(
        self,
        record: Union[WhitepaperRecord, dict],
        token_type: Optional[str] = None,
        options: Optional[ValidationOptions] = None,
        client: Optional[LEIRegistryClient] = None
    ) -> ValidationReport:
        """
        Validate a record, optionally confirming the offeror LEI with GLEIF.

        Registry findings are warnings; an unreachable registry adds
        nothing and leaves the status 'unconfirmed'.

        Args:
            record: Whitepaper record (or its JSON dictionary)
            token_type: Token type
            options: Validation options (check_registry enables the lookup)
            client: Registry client (a temporary one is created if omitted)

        Returns:
            ValidationReport with registry_status set when a lookup ran
        """
        record = _as_record(record)
        options = options or ValidationOptions()
        report = self.validate(record, token_type, options)

        if not options.check_registry:
            return report

        lei_result = await validate_lei_with_registry(
            record.get_field('partA.lei'), client=client
        )
        if lei_result.registry_status is None:
            return report

        report.registry_status = lei_result.registry_status
        warnings = [w for w in lei_result.warnings if w.rule_id not in options.skip_rules]
        report.warnings.extend(warnings)
        report.by_category[CATEGORY_LEI].warnings.extend(warnings)
        return report

    def quick_validate(self, record: Union[WhitepaperRecord, dict],
                       token_type: Optional[str] = None) -> QuickValidationResult:
        """
        Existence and LEI checks only, for fast feedback while editing.

        Args:
            record: Whitepaper record (or its JSON dictionary)
            token_type: Token type

        Returns:
            QuickValidationResult
        """
        record = _as_record(record)
        token_type = resolve_token_type(record, token_type)
        errors = (
            self.check_leis(record).errors
            + self.existence_engine.evaluate(record, token_type).errors
        )
        return QuickValidationResult(valid=not errors, error_count=len(errors), errors=errors)

    def validate_field(self, record: Union[WhitepaperRecord, dict], field_path: str,
                       token_type: Optional[str] = None) -> RuleEngineResult:
        """
        Issues concerning one field only.

        Args:
            record: Whitepaper record (or its JSON dictionary)
            field_path: e.g. 'partA.legalName' or 'partA.lei'
            token_type: Token type

        Returns:
            RuleEngineResult restricted to the field
        """
        record = _as_record(record)
        token_type = resolve_token_type(record, token_type)

        def on_field(issue) -> bool:
            return issue.field_path == field_path

        result = RuleEngineResult()
        result.extend(self.existence_engine.evaluate(record, token_type).filtered(on_field))
        result.extend(self.value_engine.evaluate(record, token_type).filtered(on_field))
        if field_path in LEI_FIELD_PATHS:
            result.extend(self.check_leis(record).filtered(on_field))
        return result

    def get_requirements(self, token_type: str) -> dict:
        """
        Describe everything a record of this token type is checked against.

        Args:
            token_type: Token type

        Returns:
            Dictionary with existence and value assertions, LEI rules and
            per-engine summaries
        """
        token_type = str(token_type).upper()
        existence = self.existence_engine.get_assertions(token_type)
        values = self.value_engine.get_assertions(token_type)
        return {
            'token_type': token_type,
            'existence': [
                {
                    'id': a.id,
                    'description': a.description,
                    'field_path': a.field_path,
                    'element': a.element_name,
                    'severity': a.severity,
                    'conditional': a.condition is not None,
                }
                for a in existence
            ],
            'value': [
                {
                    'id': a.id,
                    'description': a.description,
                    'field_path': a.field_path,
                    'severity': a.severity,
                }
                for a in values
            ],
            'lei': [{'id': rule_id, 'description': text} for rule_id, text in LEI_RULES.items()],
            'summary': {
                'existence': self.existence_engine.summary(token_type).to_dict(),
                'value': self.value_engine.summary(token_type).to_dict(),
            },
        }


# ==============================================================================
# MODULE FUNCTIONS
# ==============================================================================

def validate_whitepaper(record, token_type: Optional[str] = None,
                        options: Optional[ValidationOptions] = None,
                        index: TaxonomyIndex = None) -> ValidationReport:
    return WhitepaperValidator(index).validate(record, token_type, options)


async def validate_whitepaper_async(record, token_type: Optional[str] = None,
                                    options: Optional[ValidationOptions] = None,
                                    index: TaxonomyIndex = None,
                                    client: Optional[LEIRegistryClient] = None) -> ValidationReport:
    return await WhitepaperValidator(index).validate_async(record, token_type, options, client)


def quick_validate(record, token_type: Optional[str] = None,
                   index: TaxonomyIndex = None) -> QuickValidationResult:
    return WhitepaperValidator(index).quick_validate(record, token_type)


def validate_field(record, field_path: str, token_type: Optional[str] = None,
                   index: TaxonomyIndex = None) -> RuleEngineResult:
    return WhitepaperValidator(index).validate_field(record, field_path, token_type)


def get_validation_requirements(token_type: str, index: TaxonomyIndex = None) -> dict:
    return WhitepaperValidator(index).get_requirements(token_type)


__all__ = [
    'LEI_FIELD_PATHS',
    'resolve_token_type',
    'WhitepaperValidator',
    'validate_whitepaper',
    'validate_whitepaper_async',
    'quick_validate',
    'validate_field',
    'get_validation_requirements',
]

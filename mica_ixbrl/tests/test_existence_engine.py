# Path: mica_ixbrl/tests/test_existence_engine.py
"""
Unit tests for the existence rule engine.

Tests:
- Assertion catalog per token type
- Missing mandatory fields are errors, missing recommended ones warnings
- Conditional assertions
"""

from mica_ixbrl.engine.checks.existence_engine import (
    ExistenceRuleEngine,
    EXISTENCE_ASSERTIONS,
    evaluate_existence,
    get_existence_assertions,
    get_existence_summary,
)
from mica_ixbrl.models.whitepaper import WhitepaperRecord


def _rule_ids(issues):
    return {issue.rule_id for issue in issues}


def test_assertion_ids_are_unique():
    ids = [a.id for a in EXISTENCE_ASSERTIONS]
    assert len(ids) == len(set(ids))


def test_assertions_per_token_type():
    othr = {a.id for a in get_existence_assertions('OTHR')}
    art = {a.id for a in get_existence_assertions('ART')}
    emt = {a.id for a in get_existence_assertions('EMT')}

    assert 'EXS-A-001' in othr and 'EXS-A-001' in art and 'EXS-A-001' in emt
    assert 'EXS-OTHR-001' in othr and 'EXS-OTHR-001' not in art
    assert 'EXS-ART-003' in art and 'EXS-ART-003' not in emt
    assert 'EXS-EMT-002' in emt and 'EXS-EMT-002' not in othr


def test_summary_counts():
    summary = get_existence_summary('OTHR')
    assert summary.total == 25
    assert summary.required == 11
    assert summary.recommended == 14
    assert summary.by_section['partA'] == 6

    assert get_existence_summary('ART').total == 25
    assert get_existence_summary('EMT').total == 24


def test_complete_record_passes(sample_record):
    result = evaluate_existence(sample_record, 'OTHR')
    assert result.passed
    assert result.errors == []
    assert result.warnings == []


def test_empty_record_reports_all_mandatory_fields():
    result = evaluate_existence(WhitepaperRecord(), 'OTHR')

    # EXS-C-001 and EXS-E-002 are conditional and skipped
    assert len(result.errors) == 9
    assert 'EXS-C-001' not in _rule_ids(result.errors)
    assert 'EXS-E-002' not in _rule_ids(result.errors)
    assert len(result.warnings) == 14


def test_missing_field_message_and_path(make_record):
    record = make_record(partA={'legalName': '   '})
    result = evaluate_existence(record, 'OTHR')

    assert len(result.errors) == 1
    issue = result.errors[0]
    assert issue.rule_id == 'EXS-A-001'
    assert issue.field_path == 'partA.legalName'
    assert issue.element == 'mica:OfferorLegalName'
    assert issue.message == 'Missing required field: Offeror legal name'


def test_recommended_field_is_warning(make_record):
    record = make_record(partA={'website': None})
    result = evaluate_existence(record, 'OTHR')

    assert result.passed
    assert _rule_ids(result.warnings) == {'EXS-A-005'}
    assert result.warnings[0].message.startswith('Recommended field missing:')


def test_empty_list_counts_as_missing(make_record):
    record = make_record(partI={'offerRisks': []})
    result = evaluate_existence(record, 'OTHR')
    assert 'EXS-I-001' in _rule_ids(result.warnings)


def test_operator_name_required_only_with_operator_lei(make_record):
    without_lei = make_record(partC={'registeredAddress': 'Somewhere'})
    assert 'EXS-C-001' not in _rule_ids(evaluate_existence(without_lei, 'OTHR').errors)

    with_lei = make_record(partC={'lei': '5493001KJTIIGC8Y1R12'})
    assert 'EXS-C-001' in _rule_ids(evaluate_existence(with_lei, 'OTHR').errors)


def test_start_date_required_only_for_public_offer(make_record):
    not_public = make_record(partE={'isPublicOffering': False, 'publicOfferingStartDate': None})
    assert 'EXS-E-002' not in _rule_ids(evaluate_existence(not_public, 'OTHR').errors)

    public = make_record(partE={'isPublicOffering': True, 'publicOfferingStartDate': None})
    assert 'EXS-E-002' in _rule_ids(evaluate_existence(public, 'OTHR').errors)


def test_false_is_a_present_value(make_record):
    record = make_record(partE={'isPublicOffering': False})
    assert 'EXS-E-001' not in _rule_ids(evaluate_existence(record, 'OTHR').errors)


def test_art_requires_issuer(sample_record):
    result = ExistenceRuleEngine().evaluate(sample_record, 'ART')
    assert {'EXS-ART-001', 'EXS-ART-002', 'EXS-ART-003'} <= _rule_ids(result.errors)
    # OTHR-only recommendations do not apply
    assert 'EXS-OTHR-001' not in _rule_ids(result.warnings)


def test_emt_requires_issuer(sample_record):
    result = ExistenceRuleEngine().evaluate(sample_record, 'EMT')
    assert _rule_ids(result.errors) == {'EXS-EMT-001', 'EXS-EMT-002'}

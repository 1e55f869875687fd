# Path: mica_ixbrl/tests/test_orchestrator.py
"""
Unit tests for the validation orchestrator.

Tests:
- Full validation of a complete record
- Assertion counts per category
- Token type resolution
- Skipped rules
- Quick validation and single-field validation
- Requirements listing
- Registry-backed validation with a fake session
"""

import asyncio

import pytest

from mica_ixbrl.engine.checks.registry_client import LEIRegistryClient
from mica_ixbrl.engine.orchestrator import (
    WhitepaperValidator,
    get_validation_requirements,
    quick_validate,
    resolve_token_type,
    validate_field,
    validate_whitepaper,
    validate_whitepaper_async,
)
from mica_ixbrl.models.validation import ValidationOptions
from mica_ixbrl.models.whitepaper import WhitepaperRecord
from mica_ixbrl.tests.conftest import VALID_LEI
from mica_ixbrl.tests.test_registry_client import FakeResponse, FakeSession, GLEIF_RECORD


BAD_CHECKSUM_LEI = '529900T8BM49AURSDO00'


def _rule_ids(issues):
    return {issue.rule_id for issue in issues}


@pytest.fixture
def validator(taxonomy_index):
    return WhitepaperValidator(taxonomy_index)


def test_complete_record_is_valid(validator, sample_record):
    report = validator.validate(sample_record)

    assert report.valid
    assert report.token_type == 'OTHR'
    assert report.errors == []
    assert report.warnings == []
    assert report.registry_status is None


def test_assertion_counts(validator, sample_record):
    report = validator.validate(sample_record)
    counts = {category: (c.total, c.failed) for category, c in report.assertion_counts.items()}

    assert counts == {
        'lei': (6, 0),
        'existence': (25, 0),
        'value': (14, 0),
        'duplicate': (1, 0),
    }
    assert report.total_assertions == 46
    assert report.passed_assertions == 46


def test_dict_input(sample_data, taxonomy_index):
    assert validate_whitepaper(sample_data, index=taxonomy_index).valid


def test_missing_offeror_lei(validator, make_record):
    report = validator.validate(make_record(partA={'lei': None}))

    assert not report.valid
    assert {'LEI-000', 'EXS-A-002'} <= _rule_ids(report.errors)
    assert report.assertion_counts['lei'].failed == 1
    assert _rule_ids(report.by_category['lei'].errors) == {'LEI-000'}


def test_bad_checksum(validator, make_record):
    report = validator.validate(make_record(partA={'lei': BAD_CHECKSUM_LEI}))
    assert _rule_ids(report.errors) == {'LEI-002'}


def test_issuer_lei_checked_when_distinct(validator, make_record):
    same = validator.validate(make_record(partB={'legalName': 'Issuer AG', 'lei': VALID_LEI}))
    assert 'LEI-002-ISSUER' not in _rule_ids(same.errors)

    bad = validator.validate(make_record(partB={'legalName': 'Issuer AG', 'lei': '5493001KJTIIGC8Y1R00'}))
    assert 'LEI-002-ISSUER' in _rule_ids(bad.errors)


def test_value_errors_make_report_invalid(validator, make_record):
    report = validator.validate(make_record(partJ={'renewableEnergyPercentage': 150}))

    assert not report.valid
    assert _rule_ids(report.by_category['value'].errors) == {'VAL-005'}
    assert report.assertion_counts['value'].failed == 1


def test_warnings_do_not_affect_validity(validator, make_record):
    report = validator.validate(make_record(partD={'cryptoAssetSymbol': 'ext'}))

    assert report.valid
    assert _rule_ids(report.warnings) == {'VAL-012'}


def test_token_type_resolution(sample_record):
    assert resolve_token_type(sample_record) == 'OTHR'
    assert resolve_token_type(sample_record, 'art') == 'ART'
    assert resolve_token_type(WhitepaperRecord(token_type='emt')) == 'EMT'
    assert resolve_token_type(WhitepaperRecord(token_type='XYZ')) == 'OTHR'
    assert resolve_token_type(WhitepaperRecord()) == 'OTHR'


def test_art_validation_requires_issuer(validator, sample_record):
    report = validator.validate(sample_record, 'ART')

    assert report.token_type == 'ART'
    assert not report.valid
    assert 'EXS-ART-001' in _rule_ids(report.errors)
    assert report.assertion_counts['existence'].total == 25
    assert report.assertion_counts['value'].total == 15


def test_skip_rules(validator, make_record):
    record = make_record(partA={'lei': BAD_CHECKSUM_LEI})
    options = ValidationOptions(skip_rules=frozenset({'LEI-002'}))

    report = validator.validate(record, options=options)
    assert report.valid
    assert report.assertion_counts['lei'].failed == 0


def test_quick_validate(make_record, taxonomy_index):
    assert quick_validate(make_record(), index=taxonomy_index).valid

    # value rules are not part of quick validation
    out_of_range = make_record(partJ={'renewableEnergyPercentage': 150})
    assert quick_validate(out_of_range, index=taxonomy_index).valid

    result = quick_validate(make_record(partA={'lei': None}), index=taxonomy_index)
    assert not result.valid
    assert result.error_count == len(result.errors)
    assert {'LEI-000', 'EXS-A-002'} <= _rule_ids(result.errors)


def test_validate_field(make_record, taxonomy_index):
    record = make_record(partA={'lei': BAD_CHECKSUM_LEI, 'legalName': None})

    lei = validate_field(record, 'partA.lei', index=taxonomy_index)
    assert _rule_ids(lei.errors) == {'LEI-002'}

    name = validate_field(record, 'partA.legalName', index=taxonomy_index)
    assert _rule_ids(name.errors) == {'EXS-A-001'}

    assert validate_field(record, 'partD.cryptoAssetName', index=taxonomy_index).passed


def test_requirements(taxonomy_index):
    requirements = get_validation_requirements('othr', index=taxonomy_index)

    assert requirements['token_type'] == 'OTHR'
    assert len(requirements['existence']) == 25
    assert len(requirements['value']) == 14
    assert [rule['id'] for rule in requirements['lei']] == ['LEI-000', 'LEI-001', 'LEI-002', 'LEI-003', 'LEI-004']
    assert requirements['summary']['existence']['required'] == 11
    assert requirements['summary']['existence']['recommended'] == 14

    first = requirements['existence'][0]
    assert first['id'] == 'EXS-A-001'
    assert first['field_path'] == 'partA.legalName'


def test_async_without_registry_does_not_call(sample_record, taxonomy_index):
    session = FakeSession(FakeResponse(404))
    client = LEIRegistryClient(session=session)

    report = asyncio.run(validate_whitepaper_async(sample_record, index=taxonomy_index, client=client))
    assert report.valid
    assert report.registry_status is None
    assert session.requests == []


def test_async_registry_not_found(sample_record, taxonomy_index):
    client = LEIRegistryClient(session=FakeSession(FakeResponse(404)))
    options = ValidationOptions(check_registry=True)

    report = asyncio.run(validate_whitepaper_async(
        sample_record, options=options, index=taxonomy_index, client=client
    ))
    assert report.valid
    assert report.registry_status == 'not_found'
    assert _rule_ids(report.warnings) == {'LEI-003'}
    assert _rule_ids(report.by_category['lei'].warnings) == {'LEI-003'}


def test_async_registry_confirmed(sample_record, taxonomy_index):
    client = LEIRegistryClient(session=FakeSession(FakeResponse(200, GLEIF_RECORD)))
    options = ValidationOptions(check_registry=True)

    report = asyncio.run(validate_whitepaper_async(
        sample_record, options=options, index=taxonomy_index, client=client
    ))
    assert report.registry_status == 'confirmed'
    assert report.warnings == []


def test_async_registry_unreachable(sample_record, taxonomy_index):
    client = LEIRegistryClient(session=FakeSession(FakeResponse(503)))
    options = ValidationOptions(check_registry=True)

    report = asyncio.run(validate_whitepaper_async(
        sample_record, options=options, index=taxonomy_index, client=client
    ))
    assert report.valid
    assert report.registry_status == 'unconfirmed'
    assert report.warnings == []


def test_async_registry_warning_can_be_skipped(sample_record, taxonomy_index):
    client = LEIRegistryClient(session=FakeSession(FakeResponse(404)))
    options = ValidationOptions(check_registry=True, skip_rules=frozenset({'LEI-003'}))

    report = asyncio.run(validate_whitepaper_async(
        sample_record, options=options, index=taxonomy_index, client=client
    ))
    assert report.registry_status == 'not_found'
    assert report.warnings == []


def test_report_to_dict(validator, sample_record):
    data = validator.validate(sample_record).to_dict()

    assert data['valid'] is True
    assert data['summary']['total_assertions'] == 46
    assert set(data['by_category']) == {'lei', 'existence', 'value', 'duplicate'}
    assert data['assertion_counts']['lei'] == {'total': 6, 'passed': 6, 'failed': 0}

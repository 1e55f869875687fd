# Path: mica_ixbrl/tests/test_report_writer.py
"""
Unit tests for record reading and report writing.

Tests:
- Reading records from JSON files
- Rejected inputs (missing file, bad JSON, wrong shape)
- JSON report payload and files
- Document files and output directory resolution
"""

import json

import pytest

from mica_ixbrl.engine.orchestrator import validate_whitepaper
from mica_ixbrl.errors import RecordFormatError
from mica_ixbrl.loaders.record_reader import load_record, read_record
from mica_ixbrl.output.report_writer import ReportWriter, build_report_payload


def test_read_record(tmp_path, sample_data):
    path = tmp_path / 'record.json'
    path.write_text(json.dumps(sample_data), encoding='utf-8')

    record = read_record(path)
    assert record.token_type == 'OTHR'
    assert record.get_field('partA.lei') == sample_data['partA']['lei']
    assert len(record.management_body_members['offeror']) == 2


def test_partial_record_is_accepted():
    record = load_record({'partD': {'cryptoAssetName': 'Partial'}})
    assert record.get_field('partD.cryptoAssetName') == 'Partial'
    assert record.get_field('partA.lei') is None


def test_read_record_missing_file(tmp_path):
    with pytest.raises(RecordFormatError, match='not found'):
        read_record(tmp_path / 'absent.json')


def test_read_record_bad_json(tmp_path):
    path = tmp_path / 'bad.json'
    path.write_text('{not json', encoding='utf-8')
    with pytest.raises(RecordFormatError, match='not valid JSON'):
        read_record(path)


@pytest.mark.parametrize('data', [
    [],
    'text',
    {'partA': 'not an object'},
    {'managementBodyMembers': [{'identity': 'Jane Doe'}]},
    {'managementBodyMembers': {'offeror': {'identity': 'Jane Doe'}}},
    {'managementBodyMembers': {'offeror': ['Jane Doe']}},
    {'projectPersons': {'identity': 'Jane Doe'}},
])
def test_load_record_rejects_wrong_shape(data):
    with pytest.raises(RecordFormatError):
        load_record(data)


def test_report_payload(sample_record, taxonomy_index):
    report = validate_whitepaper(sample_record, index=taxonomy_index)
    payload = build_report_payload(report)

    assert payload['valid'] is True
    assert payload['metadata']['taxonomy_version'] == '2025-03-31'
    assert 'generated_at' in payload['metadata']


def test_write_report(tmp_path, make_record, taxonomy_index):
    report = validate_whitepaper(make_record(partA={'legalName': 'Zürich Token AG', 'lei': None}),
                                 index=taxonomy_index)
    path = ReportWriter(output_dir=tmp_path).write_report(report, 'nested/report.json')

    assert path == tmp_path / 'nested' / 'report.json'
    text = path.read_text(encoding='utf-8')
    payload = json.loads(text)
    assert payload['valid'] is False
    assert payload['errors'][0]['rule_id'] == 'LEI-000'


def test_write_document(tmp_path):
    writer = ReportWriter(output_dir=tmp_path)
    path = writer.write_document('<html/>')

    assert path == tmp_path / 'whitepaper.xhtml'
    assert path.read_text(encoding='utf-8') == '<html/>'


def test_absolute_path_ignores_output_dir(tmp_path):
    target = tmp_path / 'elsewhere' / 'doc.xhtml'
    path = ReportWriter(output_dir=tmp_path / 'unused').write_document('<html/>', target)
    assert path == target


def test_output_dir_from_environment(monkeypatch, tmp_path):
    from mica_ixbrl.core.config_loader import ConfigLoader

    monkeypatch.setenv('MICA_OUTPUT_DIR', str(tmp_path / 'configured'))
    ConfigLoader.reset()

    path = ReportWriter().write_document('<html/>', 'doc.xhtml')
    assert path == tmp_path / 'configured' / 'doc.xhtml'

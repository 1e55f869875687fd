# Path: mica_ixbrl/tests/test_cli.py
"""
Unit tests for the command-line interface.

Tests:
- validate: exit codes, JSON output, report file, quick mode
- generate: document file and self-check
- requirements listing
- Input errors
"""

import json

import pytest

from mica_ixbrl.cli import EXIT_FAILED, EXIT_INPUT_ERROR, EXIT_OK, build_parser, main


@pytest.fixture
def record_file(tmp_path, sample_data):
    def _write(data=None, name='whitepaper.json'):
        path = tmp_path / name
        path.write_text(json.dumps(sample_data if data is None else data), encoding='utf-8')
        return path
    return _write


def test_no_command_prints_help(capsys):
    assert main([]) == EXIT_OK
    assert 'usage: mica-ixbrl' in capsys.readouterr().out


def test_version():
    with pytest.raises(SystemExit) as excinfo:
        main(['--version'])
    assert excinfo.value.code == 0


def test_parser_skip_rule_is_repeatable():
    args = build_parser().parse_args(['validate', 'r.json', '--skip-rule', 'VAL-001', '--skip-rule', 'LEI-003'])
    assert args.skip_rule == ['VAL-001', 'LEI-003']
    assert args.token_type is None


def test_validate_valid_record(record_file):
    assert main(['validate', str(record_file())]) == EXIT_OK


def test_validate_invalid_record(record_file, sample_data):
    sample_data['partA']['lei'] = '529900T8BM49AURSDO00'
    assert main(['validate', str(record_file(sample_data))]) == EXIT_FAILED


def test_validate_json_output(record_file, capsys):
    assert main(['validate', str(record_file()), '--json', '-t', 'ART']) == EXIT_FAILED

    payload = json.loads(capsys.readouterr().out)
    assert payload['token_type'] == 'ART'
    assert payload['valid'] is False
    assert payload['metadata']['taxonomy_version'] == '2025-03-31'


def test_validate_writes_report(record_file, tmp_path):
    report_path = tmp_path / 'out' / 'report.json'
    assert main(['validate', str(record_file()), '-o', str(report_path)]) == EXIT_OK

    payload = json.loads(report_path.read_text(encoding='utf-8'))
    assert payload['valid'] is True
    assert payload['summary']['total_assertions'] == 46


def test_validate_skip_rule(record_file, sample_data):
    sample_data['partJ']['renewableEnergyPercentage'] = 150
    path = record_file(sample_data)

    assert main(['validate', str(path)]) == EXIT_FAILED
    assert main(['validate', str(path), '--skip-rule', 'VAL-005']) == EXIT_OK


def test_quick_validate(record_file, sample_data, capsys):
    assert main(['validate', str(record_file()), '--quick']) == EXIT_OK

    del sample_data['partA']['lei']
    path = record_file(sample_data, 'missing_lei.json')
    capsys.readouterr()
    assert main(['validate', str(path), '--quick', '--json']) == EXIT_FAILED
    assert json.loads(capsys.readouterr().out)['valid'] is False


def test_missing_record_file(tmp_path):
    assert main(['validate', str(tmp_path / 'absent.json')]) == EXIT_INPUT_ERROR


def test_malformed_record_file(tmp_path):
    path = tmp_path / 'broken.json'
    path.write_text('{"partA": ', encoding='utf-8')
    assert main(['validate', str(path)]) == EXIT_INPUT_ERROR


def test_generate(record_file, tmp_path):
    output = tmp_path / 'whitepaper.xhtml'
    assert main(['generate', str(record_file()), '-o', str(output), '--check']) == EXIT_OK

    content = output.read_text(encoding='utf-8')
    assert content.startswith('<?xml version="1.0" encoding="utf-8"?>')
    assert 'ix:nonFraction' in content


def test_generate_without_lei_is_input_error(record_file, sample_data, tmp_path):
    del sample_data['partA']['lei']
    output = tmp_path / 'whitepaper.xhtml'

    assert main(['generate', str(record_file(sample_data)), '-o', str(output)]) == EXIT_INPUT_ERROR
    assert not output.exists()


def test_requirements(capsys):
    assert main(['requirements', '-t', 'EMT']) == EXIT_OK
    assert 'Existence: 24 (13 required, 11 recommended) | Value: 15' in capsys.readouterr().out


def test_requirements_needs_token_type():
    with pytest.raises(SystemExit) as excinfo:
        main(['requirements'])
    assert excinfo.value.code == 2

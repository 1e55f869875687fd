# Path: mica_ixbrl/tests/test_config_loader.py
"""
Unit tests for the configuration loader.

Tests:
- Defaults with an empty environment
- Environment overrides and type conversion
- Singleton behaviour and reset
"""

from pathlib import Path

from mica_ixbrl.constants import DEFAULT_GLEIF_API_URL, TEXT_BLOCK_CONTINUATION_THRESHOLD
from mica_ixbrl.core.config_loader import ConfigLoader


CONFIG_VARIABLES = (
    'MICA_ENVIRONMENT', 'MICA_DEBUG', 'MICA_TAXONOMY_CATALOG', 'MICA_OUTPUT_DIR',
    'MICA_LOG_DIR', 'MICA_LOG_LEVEL', 'GLEIF_API_URL', 'LEI_API_KEY',
    'MICA_REGISTRY_TIMEOUT', 'MICA_DEFAULT_CURRENCY', 'MICA_DEFAULT_DECIMALS',
    'MICA_CONTINUATION_THRESHOLD',
)


def _clean_environment(monkeypatch):
    for name in CONFIG_VARIABLES:
        monkeypatch.delenv(name, raising=False)
    ConfigLoader.reset()


def test_defaults(monkeypatch):
    _clean_environment(monkeypatch)
    config = ConfigLoader()

    assert config.get('gleif_api_url') == DEFAULT_GLEIF_API_URL
    assert config.get('lei_api_key') is None
    assert config.get('registry_timeout') == 5.0
    assert config.get('default_currency') == 'EUR'
    assert config.get('default_decimals') == 2
    assert config.get('continuation_threshold') == TEXT_BLOCK_CONTINUATION_THRESHOLD
    assert config.get('log_level') == 'INFO'
    assert config.get('log_dir') is None
    assert config.get('debug') is False


def test_environment_overrides(monkeypatch):
    _clean_environment(monkeypatch)
    monkeypatch.setenv('MICA_DEBUG', 'yes')
    monkeypatch.setenv('MICA_OUTPUT_DIR', '/tmp/mica-out')
    monkeypatch.setenv('MICA_DEFAULT_CURRENCY', ' chf ')
    monkeypatch.setenv('MICA_CONTINUATION_THRESHOLD', '1200')
    monkeypatch.setenv('MICA_REGISTRY_TIMEOUT', '12.5')

    config = ConfigLoader()
    assert config.get('debug') is True
    assert config.get('output_dir') == Path('/tmp/mica-out')
    assert config.get('default_currency') == 'CHF'
    assert config['continuation_threshold'] == 1200
    assert config['registry_timeout'] == 12.5


def test_invalid_numbers_fall_back_to_defaults(monkeypatch):
    _clean_environment(monkeypatch)
    monkeypatch.setenv('MICA_DEFAULT_DECIMALS', 'two')
    monkeypatch.setenv('MICA_REGISTRY_TIMEOUT', 'soon')

    config = ConfigLoader()
    assert config.get('default_decimals') == 2
    assert config.get('registry_timeout') == 5.0


def test_get_default_for_unset_value(monkeypatch):
    _clean_environment(monkeypatch)
    config = ConfigLoader()

    assert config.get('output_dir', Path('fallback')) == Path('fallback')
    assert config.get('unknown_key', 'x') == 'x'
    assert 'gleif_api_url' in config
    assert 'unknown_key' not in config


def test_singleton_and_reset(monkeypatch):
    _clean_environment(monkeypatch)
    first = ConfigLoader()
    assert ConfigLoader() is first

    monkeypatch.setenv('MICA_DEFAULT_CURRENCY', 'USD')
    assert ConfigLoader().get('default_currency') == 'EUR'

    ConfigLoader.reset()
    assert ConfigLoader() is not first
    assert ConfigLoader().get('default_currency') == 'USD'


def test_non_positive_threshold_falls_back_to_default(monkeypatch):
    _clean_environment(monkeypatch)
    monkeypatch.setenv('MICA_CONTINUATION_THRESHOLD', '0')
    assert ConfigLoader().get('continuation_threshold') == TEXT_BLOCK_CONTINUATION_THRESHOLD

    ConfigLoader.reset()
    monkeypatch.setenv('MICA_CONTINUATION_THRESHOLD', '-50')
    assert ConfigLoader().get('continuation_threshold') == TEXT_BLOCK_CONTINUATION_THRESHOLD

    ConfigLoader.reset()
    monkeypatch.setenv('MICA_CONTINUATION_THRESHOLD', '1')
    assert ConfigLoader().get('continuation_threshold') == 1

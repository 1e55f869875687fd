# Path: mica_ixbrl/engine/checks/__init__.py
"""
Validation Rule Engines

Each engine turns a whitepaper record into errors and warnings;
findings are data, never exceptions.
"""

from .existence_engine import ExistenceRuleEngine, EXISTENCE_ASSERTIONS
from .value_engine import ValueRuleEngine, VALUE_ASSERTIONS
from .lei_validator import validate_lei, validate_all_leis, validate_lei_with_registry
from .duplicate_detector import detect_duplicate_facts
from .registry_client import LEIRegistryClient, RegistryLookupResult

__all__ = [
    'ExistenceRuleEngine',
    'EXISTENCE_ASSERTIONS',
    'ValueRuleEngine',
    'VALUE_ASSERTIONS',
    'validate_lei',
    'validate_all_leis',
    'validate_lei_with_registry',
    'detect_duplicate_facts',
    'LEIRegistryClient',
    'RegistryLookupResult',
]

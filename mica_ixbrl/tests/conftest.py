# Path: mica_ixbrl/tests/conftest.py
"""
Shared fixtures for the MiCA iXBRL test suite.

The sample record is a complete OTHR white paper that passes every
existence and value assertion.
"""

import copy

import pytest

from mica_ixbrl.core.config_loader import ConfigLoader
from mica_ixbrl.loaders.taxonomy_loader import load_taxonomy_index
from mica_ixbrl.models.whitepaper import WhitepaperRecord


VALID_LEI = '529900T8BM49AURSDO55'
VALID_LEI_2 = '5493001KJTIIGC8Y1R12'
VALID_LEI_3 = '7LTWFZYICNSX8D621K86'

SAMPLE_RECORD = {
    'tokenType': 'OTHR',
    'documentDate': '2025-06-30',
    'language': 'en',
    'partA': {
        'legalName': 'Example Tokens AG',
        'lei': VALID_LEI,
        'registeredAddress': 'Hauptstrasse 1, 10115 Berlin',
        'country': 'DE',
        'website': 'https://example-tokens.eu',
        'contactEmail': 'info@example-tokens.eu',
        'contactPhone': '+49 30 1234567',
    },
    'partD': {
        'cryptoAssetName': 'Example Token',
        'cryptoAssetSymbol': 'EXT',
        'totalSupply': 1000000,
        'tokenStandard': 'ERC-20',
        'blockchainNetwork': 'Ethereum',
        'consensusMechanism': 'Proof of Stake',
        'projectDescription': 'A utility token granting access to the Example platform.',
    },
    'partE': {
        'isPublicOffering': True,
        'publicOfferingStartDate': '2025-07-01',
        'publicOfferingEndDate': '2025-09-30',
        'tokenPrice': '0.10',
        'tokenPriceCurrency': 'EUR',
        'maxSubscriptionGoal': 5000000,
        'paymentMethods': ['SEPA transfer', 'USDC'],
    },
    'partF': {
        'classification': 'utility token',
    },
    'partG': {
        'purchaseRights': 'Holders may purchase platform services.',
    },
    'partH': {
        'blockchainDescription': 'The token is issued on Ethereum mainnet.',
        'securityAudits': ['Audit by Example Security GmbH, May 2025'],
    },
    'partI': {
        'offerRisks': ['The offer may be withdrawn.'],
        'issuerRisks': ['The offeror may become insolvent.'],
        'marketRisks': ['The token price may be volatile.'],
        'technologyRisks': ['Smart contracts may contain bugs.'],
        'regulatoryRisks': ['Regulation may change.'],
    },
    'partJ': {
        'energyConsumption': 1250.5,
        'consensusMechanismType': 'Proof of Stake',
        'renewableEnergyPercentage': 45,
    },
    'managementBodyMembers': {
        'offeror': [
            {'identity': 'Jane Doe', 'businessAddress': 'Hauptstrasse 1, Berlin', 'function': 'CEO'},
            {'identity': 'Max Mustermann', 'function': 'CFO'},
        ],
    },
    'projectPersons': [
        {'identity': 'John Roe', 'role': 'Lead developer'},
    ],
}


@pytest.fixture(autouse=True)
def reset_config():
    """Give every test a freshly loaded configuration."""
    ConfigLoader.reset()
    yield
    ConfigLoader.reset()


@pytest.fixture(scope='session')
def taxonomy_index():
    return load_taxonomy_index()


@pytest.fixture
def sample_data():
    """Mutable deep copy of the sample record dictionary."""
    return copy.deepcopy(SAMPLE_RECORD)


@pytest.fixture
def sample_record(sample_data):
    return WhitepaperRecord.from_dict(sample_data)


@pytest.fixture
def make_record(sample_data):
    """Build a record from the sample with section-level overrides."""
    def _make(**sections):
        data = copy.deepcopy(sample_data)
        for key, value in sections.items():
            if isinstance(value, dict) and isinstance(data.get(key), dict):
                data[key].update(value)
            else:
                data[key] = value
        return WhitepaperRecord.from_dict(data)
    return _make

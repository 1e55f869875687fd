# Path: mica_ixbrl/constants.py
"""
MiCA iXBRL Constants

Module-wide constants for the whitepaper validation and iXBRL generation
engine. Taxonomy identifiers, namespaces, rule categories and thresholds
live here.
"""

# ==============================================================================
# TAXONOMY
# ==============================================================================
TAXONOMY_VERSION = '2025-03-31'
MICA_NAMESPACE = 'https://www.esma.europa.eu/taxonomy/2025-03-31/mica/'
MICA_PREFIX = 'mica'

TAXONOMY_BASE_URL = 'https://www.esma.europa.eu/taxonomy/2025-03-31/mica/'

# Entry point schema per token type (Tables 2, 3 and 4 of the MiCA RTS)
ENTRY_POINTS = {
    'OTHR': TAXONOMY_BASE_URL + 'mica_entry_table_2.xsd',
    'ART': TAXONOMY_BASE_URL + 'mica_entry_table_3.xsd',
    'EMT': TAXONOMY_BASE_URL + 'mica_entry_table_4.xsd',
}

# ==============================================================================
# TOKEN TYPES
# ==============================================================================
TOKEN_TYPE_OTHR = 'OTHR'
TOKEN_TYPE_ART = 'ART'
TOKEN_TYPE_EMT = 'EMT'

TOKEN_TYPES = [
    TOKEN_TYPE_OTHR,
    TOKEN_TYPE_ART,
    TOKEN_TYPE_EMT,
]

TOKEN_TYPE_LABELS = {
    TOKEN_TYPE_OTHR: 'Crypto-assets other than ART and EMT',
    TOKEN_TYPE_ART: 'Asset-Referenced Token',
    TOKEN_TYPE_EMT: 'E-Money Token',
}

# ==============================================================================
# ENUMERATIONS
# Enumeration facts carry a taxonomy member URI and sit in ix:hidden; the
# visible label points at them through -ix-hidden.
# ==============================================================================
TOKEN_TYPE_MEMBERS = {
    TOKEN_TYPE_OTHR: 'CryptoAssetsOtherThanARTAndEMT',
    TOKEN_TYPE_ART: 'AssetReferencedToken',
    TOKEN_TYPE_EMT: 'ElectronicMoneyToken',
}

# element name -> {record value: (member URI, display label)}
ENUMERATION_MEMBERS = {
    'mica:TokenType': {
        token_type: (f'{MICA_NAMESPACE}#{member}', TOKEN_TYPE_LABELS[token_type])
        for token_type, member in TOKEN_TYPE_MEMBERS.items()
    },
}

HIDDEN_FACT_STYLE = '-ix-hidden'

# ==============================================================================
# WHITEPAPER SECTIONS
# ==============================================================================
SECTIONS = ['A', 'B', 'C', 'D', 'E', 'F', 'G', 'H', 'I', 'J']

SECTION_KEYS = {section: 'part' + section for section in SECTIONS}

# ==============================================================================
# SEVERITY LEVELS
# ==============================================================================
SEVERITY_ERROR = 'ERROR'
SEVERITY_WARNING = 'WARNING'

SEVERITY_LEVELS = [
    SEVERITY_ERROR,
    SEVERITY_WARNING,
]

# ==============================================================================
# RULE CATEGORIES
# ==============================================================================
CATEGORY_LEI = 'lei'
CATEGORY_EXISTENCE = 'existence'
CATEGORY_VALUE = 'value'
CATEGORY_DUPLICATE = 'duplicate'

RULE_CATEGORIES = [
    CATEGORY_LEI,
    CATEGORY_EXISTENCE,
    CATEGORY_VALUE,
    CATEGORY_DUPLICATE,
]

# Fixed assertion counts for the categories without a declared rule table
LEI_ASSERTION_COUNT = 6
DUPLICATE_ASSERTION_COUNT = 1

# ==============================================================================
# IPO LOGGING PREFIXES
# ==============================================================================
LOG_INPUT = '[INPUT]'
LOG_PROCESS = '[PROCESS]'
LOG_OUTPUT = '[OUTPUT]'

# ==============================================================================
# XBRL NAMESPACES
# ==============================================================================
XHTML_NAMESPACE = 'http://www.w3.org/1999/xhtml'

NAMESPACES = {
    'xbrli': 'http://www.xbrl.org/2003/instance',
    'ix': 'http://www.xbrl.org/2013/inlineXBRL',
    'ixt': 'http://www.xbrl.org/inlineXBRL/transformation/2020-02-12',
    'link': 'http://www.xbrl.org/2003/linkbase',
    'xlink': 'http://www.w3.org/1999/xlink',
    'xbrldi': 'http://xbrl.org/2006/xbrldi',
    'mica': MICA_NAMESPACE,
    'iso4217': 'http://www.xbrl.org/2003/iso4217',
    'utr': 'http://www.xbrl.org/2009/utr',
}

LEI_SCHEME = 'http://standards.iso.org/iso/17442'

# ==============================================================================
# CONTEXTS AND UNITS
# ==============================================================================
CONTEXT_INSTANT = 'ctx_instant'
CONTEXT_DURATION = 'ctx_duration'

PERIOD_TYPE_INSTANT = 'instant'
PERIOD_TYPE_DURATION = 'duration'

UNIT_PURE = 'unit_pure'
DEFAULT_CURRENCY = 'EUR'
SUPPORTED_CURRENCIES = ['EUR', 'USD', 'GBP', 'CHF']

FACT_ID_PREFIX = 'f_'
CONTINUATION_ID_PREFIX = 'cont_'

# Dimension used for management body member and project person contexts
MEMBER_DIMENSION = 'mica:PersonAxis'
MEMBER_TYPED_DOMAIN = 'mica:PersonDomain'

# ==============================================================================
# DATA TYPES
# ==============================================================================
DATA_TYPE_STRING = 'stringItemType'
DATA_TYPE_TEXT_BLOCK = 'textBlockItemType'
DATA_TYPE_BOOLEAN = 'booleanItemType'
DATA_TYPE_DATE = 'dateItemType'
DATA_TYPE_MONETARY = 'monetaryItemType'
DATA_TYPE_DECIMAL = 'decimalItemType'
DATA_TYPE_INTEGER = 'integerItemType'
DATA_TYPE_PERCENT = 'percentItemType'
DATA_TYPE_LEI = 'leiItemType'
DATA_TYPE_ENUMERATION = 'enumerationItemType'

NUMERIC_DATA_TYPES = [
    DATA_TYPE_MONETARY,
    DATA_TYPE_DECIMAL,
    DATA_TYPE_INTEGER,
    DATA_TYPE_PERCENT,
]

# ==============================================================================
# RENDERING THRESHOLDS
# ==============================================================================
TEXT_BLOCK_CONTINUATION_THRESHOLD = 5000

# A soft break is only used when it falls past this share of the threshold
FRAGMENT_MIN_BREAK_RATIO = 0.3

DUPLICATE_VALUE_DISPLAY_LENGTH = 50
DUPLICATE_VALUES_SHOWN = 3

# ==============================================================================
# LANGUAGES
# ==============================================================================
# Official EU languages accepted for MiCA white papers
SUPPORTED_LANGUAGES = [
    'bg', 'cs', 'da', 'de', 'el', 'en', 'es', 'et', 'fi', 'fr', 'ga', 'hr',
    'hu', 'it', 'lt', 'lv', 'mt', 'nl', 'pl', 'pt', 'ro', 'sk', 'sl', 'sv',
]

DEFAULT_LANGUAGE = 'en'

# ==============================================================================
# REGISTRY (GLEIF)
# ==============================================================================
DEFAULT_GLEIF_API_URL = 'https://api.gleif.org/api/v1'
DEFAULT_REGISTRY_TIMEOUT = 5.0

HTTP_OK = 200
HTTP_NOT_FOUND = 404

LEI_STATUS_ISSUED = 'ISSUED'
LEI_ENTITY_STATUS_ACTIVE = 'ACTIVE'


__all__ = [
    # Taxonomy
    'TAXONOMY_VERSION',
    'MICA_NAMESPACE',
    'MICA_PREFIX',
    'TAXONOMY_BASE_URL',
    'ENTRY_POINTS',
    # Token types
    'TOKEN_TYPE_OTHR',
    'TOKEN_TYPE_ART',
    'TOKEN_TYPE_EMT',
    'TOKEN_TYPES',
    'TOKEN_TYPE_LABELS',
    # Enumerations
    'TOKEN_TYPE_MEMBERS',
    'ENUMERATION_MEMBERS',
    'HIDDEN_FACT_STYLE',
    # Sections
    'SECTIONS',
    'SECTION_KEYS',
    # Severity
    'SEVERITY_ERROR',
    'SEVERITY_WARNING',
    'SEVERITY_LEVELS',
    # Categories
    'CATEGORY_LEI',
    'CATEGORY_EXISTENCE',
    'CATEGORY_VALUE',
    'CATEGORY_DUPLICATE',
    'RULE_CATEGORIES',
    'LEI_ASSERTION_COUNT',
    'DUPLICATE_ASSERTION_COUNT',
    # Logging
    'LOG_INPUT',
    'LOG_PROCESS',
    'LOG_OUTPUT',
    # Namespaces
    'XHTML_NAMESPACE',
    'NAMESPACES',
    'LEI_SCHEME',
    # Contexts and units
    'CONTEXT_INSTANT',
    'CONTEXT_DURATION',
    'PERIOD_TYPE_INSTANT',
    'PERIOD_TYPE_DURATION',
    'UNIT_PURE',
    'DEFAULT_CURRENCY',
    'SUPPORTED_CURRENCIES',
    'FACT_ID_PREFIX',
    'CONTINUATION_ID_PREFIX',
    'MEMBER_DIMENSION',
    'MEMBER_TYPED_DOMAIN',
    # Data types
    'DATA_TYPE_STRING',
    'DATA_TYPE_TEXT_BLOCK',
    'DATA_TYPE_BOOLEAN',
    'DATA_TYPE_DATE',
    'DATA_TYPE_MONETARY',
    'DATA_TYPE_DECIMAL',
    'DATA_TYPE_INTEGER',
    'DATA_TYPE_PERCENT',
    'DATA_TYPE_LEI',
    'DATA_TYPE_ENUMERATION',
    'NUMERIC_DATA_TYPES',
    # Thresholds
    'TEXT_BLOCK_CONTINUATION_THRESHOLD',
    'FRAGMENT_MIN_BREAK_RATIO',
    'DUPLICATE_VALUE_DISPLAY_LENGTH',
    'DUPLICATE_VALUES_SHOWN',
    # Languages
    'SUPPORTED_LANGUAGES',
    'DEFAULT_LANGUAGE',
    # Registry
    'DEFAULT_GLEIF_API_URL',
    'DEFAULT_REGISTRY_TIMEOUT',
    'HTTP_OK',
    'HTTP_NOT_FOUND',
    'LEI_STATUS_ISSUED',
    'LEI_ENTITY_STATUS_ACTIVE',
]

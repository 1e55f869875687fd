# Path: mica_ixbrl/engine/generator/language_support.py
"""
Language Support

MiCA white papers are drawn up in an official language of the home or
host Member State, or in a language customary in international finance.
Section titles are currently provided in English only.
"""

from ...constants import SUPPORTED_LANGUAGES, DEFAULT_LANGUAGE


LANGUAGE_NAMES = {
    'bg': 'Bulgarian', 'cs': 'Czech', 'da': 'Danish', 'de': 'German',
    'el': 'Greek', 'en': 'English', 'es': 'Spanish', 'et': 'Estonian',
    'fi': 'Finnish', 'fr': 'French', 'ga': 'Irish', 'hr': 'Croatian',
    'hu': 'Hungarian', 'it': 'Italian', 'lt': 'Lithuanian', 'lv': 'Latvian',
    'mt': 'Maltese', 'nl': 'Dutch', 'pl': 'Polish', 'pt': 'Portuguese',
    'ro': 'Romanian', 'sk': 'Slovak', 'sl': 'Slovenian', 'sv': 'Swedish',
}

SECTION_TITLES = {
    'A': 'Part A: Information about the Offeror',
    'B': 'Part B: Information about the Issuer',
    'C': 'Part C: Information about the Operator of the Trading Platform',
    'D': 'Part D: Information about the Crypto-Asset Project',
    'E': 'Part E: Information about the Offer to the Public or Admission to Trading',
    'F': 'Part F: Information about the Crypto-Asset',
    'G': 'Part G: Rights and Obligations',
    'H': 'Part H: Information on the Underlying Technology',
    'I': 'Part I: Risk Disclosure',
    'J': 'Part J: Information on Sustainability',
}


def is_supported_language(language: str) -> bool:
    return language in SUPPORTED_LANGUAGES


def get_language_name(language: str) -> str:
    """Human-readable name, or the code itself if unknown."""
    return LANGUAGE_NAMES.get(language, language)


def resolve_document_language(language) -> str:
    """Language for xml:lang; falls back to English when missing."""
    if isinstance(language, str) and language.strip():
        return language.strip()
    return DEFAULT_LANGUAGE


def get_section_title(section: str, language: str = DEFAULT_LANGUAGE) -> str:
    """English section title; the same titles are used for every document language."""
    return SECTION_TITLES.get(section, f'Section {section}')


__all__ = [
    'LANGUAGE_NAMES',
    'SECTION_TITLES',
    'is_supported_language',
    'get_language_name',
    'resolve_document_language',
    'get_section_title',
]

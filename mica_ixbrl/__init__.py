# Path: mica_ixbrl/__init__.py
"""
MiCA iXBRL
==========
Validation of MiCA crypto-asset white papers and generation of their
inline XBRL documents.
"""

from .engine.orchestrator import (
    validate_whitepaper,
    validate_whitepaper_async,
    quick_validate,
    validate_field,
    get_validation_requirements,
)
from .engine.document_generator import generate_document, build_document
from .errors import (
    MicaEngineError,
    TaxonomyLoadError,
    RecordFormatError,
    DocumentGenerationError,
)
from .models import WhitepaperRecord, ValidationOptions, ValidationReport

__all__ = [
    'validate_whitepaper',
    'validate_whitepaper_async',
    'quick_validate',
    'validate_field',
    'get_validation_requirements',
    'generate_document',
    'build_document',
    'MicaEngineError',
    'TaxonomyLoadError',
    'RecordFormatError',
    'DocumentGenerationError',
    'WhitepaperRecord',
    'ValidationOptions',
    'ValidationReport',
]

__version__ = '1.0.0'

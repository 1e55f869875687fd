# Path: mica_ixbrl/errors.py
"""
Engine Exceptions

Rule findings are reported as ValidationIssue data, not exceptions.
These exceptions cover the few conditions that stop a call outright.
"""


class MicaEngineError(Exception):
    """Base class for all engine exceptions."""
    pass


class TaxonomyLoadError(MicaEngineError):
    """Taxonomy catalog could not be read or parsed."""
    pass


class RecordFormatError(MicaEngineError):
    """Input is not shaped like a whitepaper record."""
    pass


class DocumentGenerationError(MicaEngineError):
    """Record lacks data the iXBRL document cannot be built without."""
    pass


__all__ = [
    'MicaEngineError',
    'TaxonomyLoadError',
    'RecordFormatError',
    'DocumentGenerationError',
]

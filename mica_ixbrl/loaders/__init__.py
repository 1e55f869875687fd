# Path: mica_ixbrl/loaders/__init__.py
"""
Loaders

Taxonomy catalog and whitepaper record input.
"""

from .taxonomy_loader import load_taxonomy_index, default_index
from .record_reader import read_record, load_record

__all__ = [
    'load_taxonomy_index',
    'default_index',
    'read_record',
    'load_record',
]

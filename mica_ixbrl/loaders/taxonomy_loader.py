# Path: mica_ixbrl/loaders/taxonomy_loader.py
"""
Taxonomy Catalog Loader

Reads the versioned MiCA element catalog (JSON) into a TaxonomyIndex.

The bundled catalog ships with the package under loaders/data/. A
different catalog can be configured with MICA_TAXONOMY_CATALOG.
"""

import json
from functools import lru_cache
from pathlib import Path
from typing import Optional

from ..constants import LOG_INPUT, SECTIONS, TAXONOMY_VERSION
from ..core.config_loader import ConfigLoader
from ..core.logger import get_input_logger
from ..engine.taxonomy_index import TaxonomyIndex
from ..errors import TaxonomyLoadError
from ..models.taxonomy import TaxonomyElement


BUNDLED_CATALOG = Path(__file__).resolve().parent / 'data' / 'mica_catalog.json'

logger = get_input_logger('taxonomy_loader')


def load_taxonomy_index(path: Optional[Path] = None) -> TaxonomyIndex:
    """
    Load a taxonomy catalog and build its index.

    Args:
        path: Catalog file (defaults to the bundled catalog)

    Returns:
        TaxonomyIndex

    Raises:
        TaxonomyLoadError: If the file is missing or malformed, or an element
            names a section outside A to J
    """
    catalog_path = Path(path) if path else BUNDLED_CATALOG
    logger.info(f"{LOG_INPUT} Loading taxonomy catalog: {catalog_path}")

    try:
        with open(catalog_path, 'r', encoding='utf-8') as f:
            catalog = json.load(f)
    except FileNotFoundError as e:
        raise TaxonomyLoadError(f"Taxonomy catalog not found: {catalog_path}") from e
    except json.JSONDecodeError as e:
        raise TaxonomyLoadError(f"Taxonomy catalog is not valid JSON: {e}") from e

    if not isinstance(catalog, dict) or not isinstance(catalog.get('elements'), list):
        raise TaxonomyLoadError(f"Taxonomy catalog has no element list: {catalog_path}")

    try:
        elements = [TaxonomyElement.from_dict(entry) for entry in catalog['elements']]
    except (KeyError, TypeError, ValueError) as e:
        raise TaxonomyLoadError(f"Invalid element entry in {catalog_path}: {e}") from e

    for element in elements:
        if element.section is not None and element.section not in SECTIONS:
            raise TaxonomyLoadError(
                f"Element {element.name} in {catalog_path} has unknown section '{element.section}'"
            )

    index = TaxonomyIndex(elements, version=catalog.get('version', TAXONOMY_VERSION))
    logger.info(
        f"{LOG_INPUT} Loaded {index.element_count} taxonomy elements "
        f"(version {index.version})"
    )
    return index


@lru_cache(maxsize=1)
def default_index() -> TaxonomyIndex:
    """
    Shared index for the configured catalog, loaded on first use.

    Returns:
        TaxonomyIndex (the same instance on every call)
    """
    return load_taxonomy_index(ConfigLoader().get('taxonomy_catalog'))


__all__ = ['BUNDLED_CATALOG', 'load_taxonomy_index', 'default_index']

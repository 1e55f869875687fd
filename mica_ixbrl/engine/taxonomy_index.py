# Path: mica_ixbrl/engine/taxonomy_index.py
"""
Taxonomy Index

Read-only lookup structure over the MiCA taxonomy elements.

The index is built once from a list of elements and never modified
afterward, so a single instance can be shared by concurrent validation
and generation calls without locking. Engines receive the index as an
argument; see loaders.taxonomy_loader.default_index() for the shared
process-wide instance.
"""

from collections import defaultdict
from types import MappingProxyType
from typing import Iterable, Optional

from ..constants import TAXONOMY_VERSION
from ..models.taxonomy import TaxonomyElement


def _freeze(groups: dict[str, list[TaxonomyElement]]) -> MappingProxyType:
    return MappingProxyType({key: tuple(items) for key, items in groups.items()})


class TaxonomyIndex:
    """
    Immutable index over taxonomy elements.

    Lookup by name and local name is O(1); label search and data type
    filters scan all elements.

    Example:
        index = TaxonomyIndex(elements)
        element = index.by_name('mica:OfferorLEI')
        part_a = index.by_token_type_and_section('OTHR', 'A')
    """

    def __init__(self, elements: Iterable[TaxonomyElement], version: str = TAXONOMY_VERSION):
        self.version = version
        self._elements = tuple(elements)

        by_name = {}
        by_local_name = {}
        by_section = defaultdict(list)
        by_token_type = defaultdict(list)

        for element in self._elements:
            by_name[element.name] = element
            by_local_name[element.local_name] = element
            if element.section:
                by_section[element.section].append(element)
            for token_type in element.token_types:
                by_token_type[token_type].append(element)

        self._by_name = MappingProxyType(by_name)
        self._by_local_name = MappingProxyType(by_local_name)
        self._by_section = _freeze(by_section)
        self._by_token_type = _freeze(by_token_type)

    @property
    def elements(self) -> tuple[TaxonomyElement, ...]:
        return self._elements

    @property
    def element_count(self) -> int:
        return len(self._elements)

    def by_name(self, name: str) -> Optional[TaxonomyElement]:
        """Get element by qualified name (e.g. 'mica:OfferorLEI')."""
        return self._by_name.get(name)

    def by_local_name(self, local_name: str) -> Optional[TaxonomyElement]:
        """Get element by name without prefix."""
        return self._by_local_name.get(local_name)

    def has_element(self, name: str) -> bool:
        return name in self._by_name

    def by_section(self, section: str) -> list[TaxonomyElement]:
        """Get all elements of a whitepaper section ('A'..'J')."""
        return list(self._by_section.get(section, ()))

    def by_token_type(self, token_type: str) -> list[TaxonomyElement]:
        """Get all elements applicable to a token type."""
        return list(self._by_token_type.get(token_type, ()))

    def by_token_type_and_section(self, token_type: str, section: str) -> list[TaxonomyElement]:
        """
        Get elements of one section applicable to a token type.

        Args:
            token_type: 'OTHR', 'ART' or 'EMT'
            section: Section letter

        Returns:
            Elements sorted by declaration order
        """
        matches = [
            element for element in self._by_section.get(section, ())
            if element.applies_to(token_type)
        ]
        return sorted(matches, key=lambda element: element.order)

    def search_by_label(self, query: str) -> list[TaxonomyElement]:
        """
        Case-insensitive substring search over labels and documentation.

        Args:
            query: Text to look for

        Returns:
            Matching elements in catalog order
        """
        needle = query.lower()
        return [
            element for element in self._elements
            if needle in element.label.lower() or needle in element.documentation.lower()
        ]

    def reportable_elements(self) -> list[TaxonomyElement]:
        """Get all non-abstract elements."""
        return [element for element in self._elements if not element.abstract]

    def by_data_type(self, data_type: str) -> list[TaxonomyElement]:
        return [element for element in self._elements if element.data_type == data_type]

    def __len__(self) -> int:
        return len(self._elements)

    def __contains__(self, name: str) -> bool:
        return name in self._by_name


__all__ = ['TaxonomyIndex']

# Path: mica_ixbrl/models/taxonomy.py
"""
Taxonomy Element Model

Immutable descriptor of one MiCA taxonomy element.
"""

from dataclasses import dataclass
from typing import Optional

from ..constants import (
    MICA_PREFIX,
    NUMERIC_DATA_TYPES,
    DATA_TYPE_TEXT_BLOCK,
    PERIOD_TYPE_DURATION,
)


@dataclass(frozen=True)
class TaxonomyElement:
    """
    One reportable (or abstract) element of the MiCA taxonomy.

    Attributes:
        name: Qualified name (e.g., 'mica:OfferorLegalName')
        local_name: Name without prefix
        prefix: Namespace prefix
        label: Standard label
        documentation: Documentation label
        data_type: Data kind (e.g., 'monetaryItemType')
        period_type: 'instant' or 'duration'
        abstract: Abstract elements are headings, never reported
        nillable: Whether xsi:nil is permitted
        section: Owning whitepaper section letter ('A'..'J'), None for
            document-level elements
        token_types: Token types the element applies to
        order: Declaration order within its section
        required: Whether the element is mandatory in the entry point
    """
    name: str
    local_name: str
    prefix: str = MICA_PREFIX
    label: str = ''
    documentation: str = ''
    data_type: str = 'stringItemType'
    period_type: str = PERIOD_TYPE_DURATION
    abstract: bool = False
    nillable: bool = True
    section: Optional[str] = None
    token_types: tuple[str, ...] = ()
    order: int = 0
    required: bool = False

    @property
    def is_numeric(self) -> bool:
        return self.data_type in NUMERIC_DATA_TYPES

    @property
    def is_text_block(self) -> bool:
        return self.data_type == DATA_TYPE_TEXT_BLOCK

    def applies_to(self, token_type: str) -> bool:
        """Check if element is part of the given token type's entry point."""
        return token_type in self.token_types

    @classmethod
    def from_dict(cls, data: dict) -> 'TaxonomyElement':
        """
        Build element from a catalog entry.

        Args:
            data: Catalog entry with camelCase keys

        Returns:
            TaxonomyElement
        """
        name = data['name']
        prefix, _, local_name = name.rpartition(':')
        return cls(
            name=name,
            local_name=data.get('localName', local_name),
            prefix=prefix or MICA_PREFIX,
            label=data.get('label', ''),
            documentation=data.get('documentation', ''),
            data_type=data.get('dataType', 'stringItemType'),
            period_type=data.get('periodType', PERIOD_TYPE_DURATION),
            abstract=bool(data.get('abstract', False)),
            nillable=bool(data.get('nillable', True)),
            section=data.get('section'),
            token_types=tuple(data.get('tokenTypes', ())),
            order=int(data.get('order', 0)),
            required=bool(data.get('required', False)),
        )


__all__ = ['TaxonomyElement']

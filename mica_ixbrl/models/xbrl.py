# Path: mica_ixbrl/models/xbrl.py
"""
XBRL Instance Models

Fact, context and unit value objects emitted by the generator.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from ..constants import NUMERIC_DATA_TYPES, DATA_TYPE_STRING


class EscapeMode(str, Enum):
    """How a fact's value is to be rendered."""
    RAW = 'raw'
    ESCAPED = 'escaped'
    TEXT_BLOCK = 'text_block'
    HIDDEN = 'hidden'


@dataclass(frozen=True)
class Fact:
    """
    One reportable datum.

    Attributes:
        id: Sequential fact ID ('f_1', 'f_2', ...)
        name: Qualified element name
        value: Serialized value
        context_ref: Context reference ID
        unit_ref: Unit reference ID (numeric facts only)
        decimals: Fixed decimal precision (numeric facts only)
        escape: Rendering mode
        data_type: Taxonomy data kind the fact was built from
        display_value: Visible text for hidden facts (enumeration label)
    """
    id: str
    name: str
    value: str
    context_ref: str
    unit_ref: Optional[str] = None
    decimals: Optional[int] = None
    escape: EscapeMode = EscapeMode.ESCAPED
    data_type: str = DATA_TYPE_STRING
    display_value: Optional[str] = None

    def is_hidden(self) -> bool:
        """Check if fact is rendered in ix:hidden."""
        return self.escape == EscapeMode.HIDDEN

    def is_numeric(self) -> bool:
        """Check if fact is declared with a numeric data kind."""
        return self.data_type in NUMERIC_DATA_TYPES


@dataclass(frozen=True)
class TypedMember:
    """Typed dimension member placed in a context scenario."""
    dimension: str
    domain: str
    value: str


@dataclass(frozen=True)
class Context:
    """
    XBRL context: entity plus reporting period.

    Instant contexts set instant; duration contexts set start_date
    and end_date.
    """
    id: str
    entity_identifier: str
    entity_scheme: str
    instant: Optional[str] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    scenario: tuple[TypedMember, ...] = ()

    @property
    def is_instant(self) -> bool:
        return self.instant is not None


@dataclass(frozen=True)
class Unit:
    """XBRL unit with a single measure (e.g. 'iso4217:EUR')."""
    id: str
    measure: str


@dataclass
class IXBRLDocument:
    """Everything needed to serialize one inline XBRL document."""
    token_type: str
    language: str
    document_date: str
    title: str
    schema_ref: str
    contexts: list[Context] = field(default_factory=list)
    units: list[Unit] = field(default_factory=list)
    facts: list[Fact] = field(default_factory=list)


__all__ = [
    'EscapeMode',
    'Fact',
    'TypedMember',
    'Context',
    'Unit',
    'IXBRLDocument',
]

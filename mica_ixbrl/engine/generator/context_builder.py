# Path: mica_ixbrl/engine/generator/context_builder.py
"""
Context Builder

Builds the XBRL contexts of a whitepaper instance.

Every document has exactly one instant context (the document date) and
one duration context (the calendar year of the document date), both
identifying the offeror by LEI. Management body members and project
persons get one dimensional context each, distinguished by a typed
member in the scenario.
"""

from datetime import date
from typing import Optional

from ...constants import (
    CONTEXT_INSTANT,
    CONTEXT_DURATION,
    LEI_SCHEME,
    MEMBER_DIMENSION,
    MEMBER_TYPED_DOMAIN,
)
from ...errors import DocumentGenerationError
from ...models.whitepaper import MANAGEMENT_BODY_ROLES, WhitepaperRecord
from ...models.xbrl import Context, TypedMember


def member_context_id(role: str, index: int) -> str:
    """Context ID for the index-th (0-based) management body member of a role."""
    return f"ctx_mgmt_{role}_{index}"


def person_context_id(index: int) -> str:
    """Context ID for the index-th (0-based) person involved in the project."""
    return f"ctx_person_{index}"


def reporting_year(document_date: str) -> tuple[str, str]:
    """
    Calendar year containing the document date.

    Args:
        document_date: YYYY-MM-DD

    Returns:
        (start_date, end_date) as YYYY-MM-DD strings
    """
    year = date.fromisoformat(document_date).year
    return f"{year:04d}-01-01", f"{year:04d}-12-31"


class ContextBuilder:
    """
    Builds contexts for one entity and document date.

    Example:
        builder = ContextBuilder(lei='529900T8BM49AURSDO55', document_date='2025-06-30')
        contexts = builder.build_contexts(record)
    """

    def __init__(self, lei: Optional[str], document_date: str):
        """
        Args:
            lei: Offeror LEI used as entity identifier
            document_date: YYYY-MM-DD

        Raises:
            DocumentGenerationError: If the LEI is missing
        """
        if not lei or not str(lei).strip():
            raise DocumentGenerationError(
                "Offeror LEI is required to build XBRL contexts"
            )
        self.lei = str(lei).strip().upper()
        self.document_date = document_date
        self.start_date, self.end_date = reporting_year(document_date)

    def instant_context(self) -> Context:
        return Context(
            id=CONTEXT_INSTANT,
            entity_identifier=self.lei,
            entity_scheme=LEI_SCHEME,
            instant=self.document_date,
        )

    def duration_context(self) -> Context:
        return Context(
            id=CONTEXT_DURATION,
            entity_identifier=self.lei,
            entity_scheme=LEI_SCHEME,
            start_date=self.start_date,
            end_date=self.end_date,
        )

    def dimensional_context(self, context_id: str, member_value: str) -> Context:
        """Duration context qualified by a typed person member."""
        return Context(
            id=context_id,
            entity_identifier=self.lei,
            entity_scheme=LEI_SCHEME,
            start_date=self.start_date,
            end_date=self.end_date,
            scenario=(TypedMember(MEMBER_DIMENSION, MEMBER_TYPED_DOMAIN, member_value),),
        )

    def build_contexts(self, record: WhitepaperRecord) -> list[Context]:
        """
        Build all contexts for a record.

        Args:
            record: Whitepaper record

        Returns:
            Instant, duration, then one context per management body
            member and project person
        """
        contexts = [self.instant_context(), self.duration_context()]

        for role in MANAGEMENT_BODY_ROLES:
            for index, _ in enumerate(record.management_body_members.get(role, [])):
                contexts.append(self.dimensional_context(
                    member_context_id(role, index), f"{role}_{index + 1}"
                ))

        for index, _ in enumerate(record.project_persons):
            contexts.append(self.dimensional_context(
                person_context_id(index), f"person_{index + 1}"
            ))

        return contexts


__all__ = [
    'member_context_id',
    'person_context_id',
    'reporting_year',
    'ContextBuilder',
]

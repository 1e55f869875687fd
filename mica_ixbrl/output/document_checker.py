# Path: mica_ixbrl/output/document_checker.py
"""
Generated Document Self-Check

Parses a generated iXBRL document with lxml and checks the structure
the generator guarantees:

1. Well-formedness (strict parser, no recovery)
2. Required namespace declarations on the root
3. Exactly one instant and one duration context
4. Every contextRef and unitRef resolves
5. Every continuedAt resolves to an ix:continuation
6. Every -ix-hidden reference resolves to a fact in ix:hidden
7. No external stylesheet or script
"""

import re
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Optional, Union

from lxml import etree
from lxml.etree import XMLSyntaxError

from ..constants import (
    NAMESPACES,
    XHTML_NAMESPACE,
    CONTEXT_INSTANT,
    CONTEXT_DURATION,
    HIDDEN_FACT_STYLE,
    LOG_OUTPUT,
)
from ..core.logger import get_output_logger


# ==============================================================================
# ENUMS
# ==============================================================================

class CheckLevel(str, Enum):
    """Stage a document issue was found in."""
    WELLFORMEDNESS = "wellformedness"
    STRUCTURE = "structure"


class ValidationStatus(str, Enum):
    """Document check status."""
    PASSED = "passed"
    FAILED = "failed"


# ==============================================================================
# DATA MODELS
# ==============================================================================

@dataclass
class DocumentIssue:
    """A single problem found in a generated document."""
    level: CheckLevel
    message: str
    error_type: str
    line: Optional[int] = None
    column: Optional[int] = None

    def __str__(self) -> str:
        location = f"Line {self.line}, Column {self.column}" if self.line else "Document"
        return f"[{self.level.value.upper()}] {location}: {self.message}"


@dataclass
class DocumentCheckResult:
    """Outcome of checking one document."""
    status: ValidationStatus = ValidationStatus.PASSED
    issues: list[DocumentIssue] = field(default_factory=list)
    fact_count: int = 0
    context_count: int = 0
    unit_count: int = 0

    @property
    def is_valid(self) -> bool:
        return self.status == ValidationStatus.PASSED

    def add_issue(self, issue: DocumentIssue) -> None:
        self.issues.append(issue)
        self.status = ValidationStatus.FAILED

    def to_dict(self) -> dict:
        return {
            'status': self.status.value,
            'is_valid': self.is_valid,
            'fact_count': self.fact_count,
            'context_count': self.context_count,
            'unit_count': self.unit_count,
            'issues': [str(issue) for issue in self.issues],
        }


# ==============================================================================
# CHECKER
# ==============================================================================

REQUIRED_PREFIXES = ('ix', 'ixt', 'xbrli', 'link', 'xlink', 'xbrldi', 'iso4217', 'mica')
HIDDEN_REFERENCE_PATTERN = re.compile(re.escape(HIDDEN_FACT_STYLE) + r'\s*:\s*([^;\s]+)')


class DocumentChecker:
    """
    Structural self-check for generated iXBRL documents.

    Example:
        checker = DocumentChecker()
        result = checker.check(xhtml)
        if not result.is_valid:
            for issue in result.issues:
                print(issue)
    """

    def __init__(self):
        self.logger = get_output_logger('document_checker')

    def _parse(self, content: Union[str, bytes, Path], result: DocumentCheckResult):
        parser = etree.XMLParser(recover=False)
        try:
            if isinstance(content, Path):
                return etree.parse(str(content), parser).getroot()
            if isinstance(content, str):
                content = content.encode('utf-8')
            return etree.fromstring(content, parser)
        except XMLSyntaxError as e:
            self.logger.error(f"{LOG_OUTPUT} Document is not well-formed: {e}")
            result.add_issue(DocumentIssue(
                level=CheckLevel.WELLFORMEDNESS,
                message=str(e),
                error_type='XMLSyntaxError',
                line=e.lineno,
                column=e.position[1] if e.position else None,
            ))
            return None

    def _structure_issue(self, result: DocumentCheckResult, message: str, error_type: str) -> None:
        result.add_issue(DocumentIssue(
            level=CheckLevel.STRUCTURE, message=message, error_type=error_type
        ))

    def _check_namespaces(self, root, result: DocumentCheckResult) -> None:
        if root.tag != f'{{{XHTML_NAMESPACE}}}html':
            self._structure_issue(result, f"Root element is not XHTML html: {root.tag}", 'RootElement')
        declared = root.nsmap
        for prefix in REQUIRED_PREFIXES:
            if declared.get(prefix) != NAMESPACES[prefix]:
                self._structure_issue(
                    result, f"Namespace prefix '{prefix}' is not declared on the root", 'MissingNamespace'
                )

    def _check_contexts(self, root, result: DocumentCheckResult) -> set[str]:
        context_ids = root.xpath('//xbrli:context/@id', namespaces=NAMESPACES)
        for required in (CONTEXT_INSTANT, CONTEXT_DURATION):
            occurrences = context_ids.count(required)
            if occurrences != 1:
                self._structure_issue(
                    result, f"Expected exactly one context '{required}', found {occurrences}",
                    'ContextCount',
                )
        result.context_count = len(context_ids)
        return set(context_ids)

    def _check_references(self, root, result: DocumentCheckResult, context_ids: set[str]) -> None:
        unit_ids = set(root.xpath('//xbrli:unit/@id', namespaces=NAMESPACES))
        result.unit_count = len(unit_ids)

        facts = root.xpath('//ix:nonNumeric | //ix:nonFraction', namespaces=NAMESPACES)
        result.fact_count = len(facts)

        for fact in facts:
            name = fact.get('name')
            context_ref = fact.get('contextRef')
            if context_ref not in context_ids:
                self._structure_issue(
                    result, f"Fact {name} references unknown context '{context_ref}'", 'UnresolvedContext'
                )
            unit_ref = fact.get('unitRef')
            if unit_ref is not None and unit_ref not in unit_ids:
                self._structure_issue(
                    result, f"Fact {name} references unknown unit '{unit_ref}'", 'UnresolvedUnit'
                )

        continuation_ids = set(root.xpath('//ix:continuation/@id', namespaces=NAMESPACES))
        for target in root.xpath('//*[@continuedAt]/@continuedAt'):
            if target not in continuation_ids:
                self._structure_issue(
                    result, f"continuedAt '{target}' has no matching ix:continuation", 'UnresolvedContinuation'
                )

    def _check_hidden_references(self, root, result: DocumentCheckResult) -> None:
        hidden_ids = set(root.xpath('//ix:hidden/*/@id', namespaces=NAMESPACES))
        for style in root.xpath(f'//*[contains(@style, "{HIDDEN_FACT_STYLE}")]/@style'):
            for target in HIDDEN_REFERENCE_PATTERN.findall(style):
                if target not in hidden_ids:
                    self._structure_issue(
                        result, f"{HIDDEN_FACT_STYLE} '{target}' has no matching fact in ix:hidden",
                        'UnresolvedHiddenFact',
                    )

    def _check_self_contained(self, root, result: DocumentCheckResult) -> None:
        xhtml = {'h': XHTML_NAMESPACE}
        if root.xpath('//h:script', namespaces=xhtml):
            self._structure_issue(result, "Document contains a script element", 'ExternalResource')
        for link in root.xpath('//h:link', namespaces=xhtml):
            self._structure_issue(
                result, f"Document references an external resource: {link.get('href')}", 'ExternalResource'
            )

    def check(self, content: Union[str, bytes, Path]) -> DocumentCheckResult:
        """
        Check a generated document.

        Args:
            content: Document as string, bytes or file path

        Returns:
            DocumentCheckResult
        """
        result = DocumentCheckResult()
        root = self._parse(content, result)
        if root is None:
            return result

        self._check_namespaces(root, result)
        context_ids = self._check_contexts(root, result)
        self._check_references(root, result, context_ids)
        self._check_hidden_references(root, result)
        self._check_self_contained(root, result)

        if result.is_valid:
            self.logger.info(
                f"{LOG_OUTPUT} Document check passed: {result.fact_count} facts, "
                f"{result.context_count} contexts, {result.unit_count} units"
            )
        else:
            self.logger.warning(f"{LOG_OUTPUT} Document check failed with {len(result.issues)} issues")
        return result


def check_document(content: Union[str, bytes, Path]) -> DocumentCheckResult:
    return DocumentChecker().check(content)


__all__ = [
    'CheckLevel',
    'ValidationStatus',
    'DocumentIssue',
    'DocumentCheckResult',
    'DocumentChecker',
    'check_document',
]

# Path: mica_ixbrl/output/__init__.py
"""
Output

Generated document self-check and report/document writing.
"""

from .document_checker import DocumentChecker, DocumentCheckResult, check_document
from .report_writer import ReportWriter, build_report_payload

__all__ = [
    'DocumentChecker',
    'DocumentCheckResult',
    'check_document',
    'ReportWriter',
    'build_report_payload',
]

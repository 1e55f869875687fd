# Path: mica_ixbrl/output/report_writer.py
"""
Report Writer

Writes validation reports (JSON) and generated iXBRL documents to disk.
"""

import json
from datetime import datetime
from pathlib import Path
from typing import Optional, Union

from ..constants import TAXONOMY_VERSION, LOG_OUTPUT
from ..core.config_loader import ConfigLoader
from ..core.logger import get_output_logger
from ..models.validation import ValidationReport


DEFAULT_REPORT_NAME = 'validation_report.json'
DEFAULT_DOCUMENT_NAME = 'whitepaper.xhtml'


def build_report_payload(report: ValidationReport, taxonomy_version: str = TAXONOMY_VERSION) -> dict:
    """
    JSON payload of a validation report with a metadata block.

    Args:
        report: Validation report
        taxonomy_version: Taxonomy version the record was checked against

    Returns:
        Dictionary ready for json.dump
    """
    payload = report.to_dict()
    payload['metadata'] = {
        'generated_at': datetime.now().isoformat(),
        'taxonomy_version': taxonomy_version,
    }
    return payload


class ReportWriter:
    """
    Writes reports and documents.

    Relative file names are resolved against the configured output
    directory (MICA_OUTPUT_DIR), else the current directory.

    Example:
        writer = ReportWriter()
        path = writer.write_report(report, 'report.json')
    """

    def __init__(self, output_dir: Optional[Path] = None, config: ConfigLoader = None):
        config = config if config else ConfigLoader()
        self.output_dir = Path(output_dir) if output_dir else config.get('output_dir', Path.cwd())
        self.logger = get_output_logger('report_writer')

    def _resolve(self, path: Union[str, Path]) -> Path:
        path = Path(path)
        if not path.is_absolute():
            path = Path(self.output_dir) / path
        path.parent.mkdir(parents=True, exist_ok=True)
        return path

    def write_report(self, report: ValidationReport,
                     path: Union[str, Path] = DEFAULT_REPORT_NAME,
                     pretty: bool = True) -> Path:
        """
        Write a validation report as JSON.

        Args:
            report: Validation report
            path: Output file
            pretty: Indent the JSON

        Returns:
            Path to the written file
        """
        output_path = self._resolve(path)
        with open(output_path, 'w', encoding='utf-8') as f:
            json.dump(build_report_payload(report), f, indent=2 if pretty else None, ensure_ascii=False)

        self.logger.info(f"{LOG_OUTPUT} Wrote validation report: {output_path}")
        return output_path

    def write_document(self, xhtml: str, path: Union[str, Path] = DEFAULT_DOCUMENT_NAME) -> Path:
        """
        Write a generated iXBRL document as UTF-8.

        Args:
            xhtml: Document markup
            path: Output file

        Returns:
            Path to the written file
        """
        output_path = self._resolve(path)
        with open(output_path, 'w', encoding='utf-8') as f:
            f.write(xhtml)

        self.logger.info(f"{LOG_OUTPUT} Wrote iXBRL document: {output_path} ({len(xhtml)} characters)")
        return output_path


__all__ = [
    'DEFAULT_REPORT_NAME',
    'DEFAULT_DOCUMENT_NAME',
    'build_report_payload',
    'ReportWriter',
]

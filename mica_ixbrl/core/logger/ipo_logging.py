# Path: mica_ixbrl/core/logger/ipo_logging.py
"""
IPO-Aware Logging for MiCA iXBRL Engine

Input-Process-Output separated logging.

This module sets up logging with separate files for:
- INPUT layer (record reader, taxonomy loader, CLI)
- PROCESS layer (rule engines, fact builder, tagger)
- OUTPUT layer (document writer, report writer)
- Full activity (everything combined)
"""

import logging
import sys
from pathlib import Path
from typing import Optional


LOG_FORMAT = '[%(levelname)s] %(name)s - %(message)s'


class IPOFilter(logging.Filter):
    """Filter logs by IPO layer prefix."""

    def __init__(self, layer: str):
        """
        Initialize filter for specific IPO layer.

        Args:
            layer: 'input', 'process', or 'output'
        """
        super().__init__()
        self.layer = layer

    def filter(self, record: logging.LogRecord) -> bool:
        """Filter records by logger name prefix."""
        return record.name.startswith(self.layer)


def _file_handler(path: Path, formatter: logging.Formatter, layer: Optional[str] = None) -> logging.FileHandler:
    handler = logging.FileHandler(path, encoding='utf-8')
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(formatter)
    if layer:
        handler.addFilter(IPOFilter(layer))
    return handler


def setup_ipo_logging(
    log_dir: Optional[Path],
    log_level: str = 'INFO',
    console_output: bool = True,
    console_handler: Optional[logging.Handler] = None
) -> None:
    """
    Set up IPO-aware logging.

    Creates separate log files for:
    - input_activity.log (INPUT layer)
    - process_activity.log (PROCESS layer)
    - output_activity.log (OUTPUT layer)
    - full_activity.log (all activities combined)

    When log_dir is None only the console handler is installed.

    Args:
        log_dir: Directory for log files, or None for console-only logging
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        console_output: Whether to also output to console
        console_handler: Handler to use for console output (defaults to a
            stdout StreamHandler; the CLI passes a RichHandler)

    Example:
        setup_ipo_logging(
            log_dir=Path('/var/log/mica_ixbrl'),
            log_level='INFO',
            console_output=True
        )
    """
    level = getattr(logging, log_level.upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    formatter = logging.Formatter(LOG_FORMAT)

    if log_dir is not None:
        log_dir.mkdir(parents=True, exist_ok=True)
        root_logger.addHandler(_file_handler(log_dir / 'full_activity.log', formatter))
        root_logger.addHandler(_file_handler(log_dir / 'input_activity.log', formatter, 'input'))
        root_logger.addHandler(_file_handler(log_dir / 'process_activity.log', formatter, 'process'))
        root_logger.addHandler(_file_handler(log_dir / 'output_activity.log', formatter, 'output'))

    if console_output:
        if console_handler is None:
            console_handler = logging.StreamHandler(sys.stdout)
            console_handler.setFormatter(formatter)
        console_handler.setLevel(level)
        root_logger.addHandler(console_handler)


def get_input_logger(name: str) -> logging.Logger:
    """
    Get logger for INPUT layer.

    Args:
        name: Logger name (e.g., 'record_reader', 'taxonomy_loader')

    Returns:
        Logger configured for INPUT layer

    Example:
        logger = get_input_logger('record_reader')
        logger.info("Loading whitepaper record")
    """
    return logging.getLogger(f'input.{name}')


def get_process_logger(name: str) -> logging.Logger:
    """
    Get logger for PROCESS layer (rule engines and generator).

    Args:
        name: Logger name (e.g., 'orchestrator', 'fact_builder')

    Returns:
        Logger configured for PROCESS layer
    """
    return logging.getLogger(f'process.{name}')


def get_output_logger(name: str) -> logging.Logger:
    """
    Get logger for OUTPUT layer.

    Args:
        name: Logger name (e.g., 'report_writer', 'document_checker')

    Returns:
        Logger configured for OUTPUT layer
    """
    return logging.getLogger(f'output.{name}')


__all__ = [
    'IPOFilter',
    'setup_ipo_logging',
    'get_input_logger',
    'get_process_logger',
    'get_output_logger',
]

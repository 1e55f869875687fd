# Path: mica_ixbrl/core/logger/__init__.py
"""
MiCA iXBRL Logger Package

IPO-aware logging for the validation and generation engine.
"""

from .ipo_logging import (
    IPOFilter,
    setup_ipo_logging,
    get_input_logger,
    get_process_logger,
    get_output_logger,
)

__all__ = [
    'IPOFilter',
    'setup_ipo_logging',
    'get_input_logger',
    'get_process_logger',
    'get_output_logger',
]

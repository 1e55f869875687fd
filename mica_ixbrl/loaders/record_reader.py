# Path: mica_ixbrl/loaders/record_reader.py
"""
Whitepaper Record Reader

Reads whitepaper records from JSON files or already-parsed dictionaries.
Partial records are accepted; missing data is reported by validation.
"""

import json
from pathlib import Path
from typing import Union

from ..constants import LOG_INPUT
from ..core.logger import get_input_logger
from ..errors import RecordFormatError
from ..models.whitepaper import WhitepaperRecord


logger = get_input_logger('record_reader')


def load_record(data: dict) -> WhitepaperRecord:
    """
    Build a record from a parsed JSON object.

    Raises:
        RecordFormatError: If data is not shaped like a record
    """
    return WhitepaperRecord.from_dict(data)


def read_record(path: Union[str, Path]) -> WhitepaperRecord:
    """
    Read a whitepaper record from a JSON file.

    Args:
        path: JSON file path

    Returns:
        WhitepaperRecord

    Raises:
        RecordFormatError: If the file is missing, unreadable or not a
            JSON object
    """
    record_path = Path(path)
    logger.info(f"{LOG_INPUT} Reading whitepaper record: {record_path}")

    if not record_path.is_file():
        raise RecordFormatError(f"Record file not found: {record_path}")

    try:
        with open(record_path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise RecordFormatError(f"Record file is not valid JSON: {e}") from e
    except (OSError, UnicodeDecodeError) as e:
        raise RecordFormatError(f"Cannot read record file {record_path}: {e}") from e

    record = load_record(data)
    logger.info(
        f"{LOG_INPUT} Loaded record: token type {record.token_type or 'unspecified'}"
    )
    return record


__all__ = ['load_record', 'read_record']

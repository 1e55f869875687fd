# Path: mica_ixbrl/__main__.py
"""Entry point for python -m mica_ixbrl."""

import sys

from .cli import main


sys.exit(main())

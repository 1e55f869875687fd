# Path: mica_ixbrl/core/__init__.py
"""
MiCA iXBRL Core

Configuration and logging shared by every layer.
"""

from .config_loader import ConfigLoader

__all__ = ['ConfigLoader']

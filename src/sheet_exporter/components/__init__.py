#!/usr/bin/env python3
"""
Components Package - Loading and Layout
"""

from .config_loader import ConfigLoader
from .data_parser import DataParser
from .layout_builder import SheetLayoutBuilder

__all__ = [
    'ConfigLoader',
    'DataParser',
    'SheetLayoutBuilder'
]

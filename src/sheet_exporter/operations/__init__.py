#!/usr/bin/env python3
"""
Operations Package - Clean Excel Operations
Organized by concern, not by random utility growth
"""

from .data_operations import DataOperations
from .header_operations import HeaderOperations
from .merge_operations import MergeOperations
from .style_operations import StyleOperations
from .layout_operations import LayoutOperations

__all__ = [
    'DataOperations',
    'HeaderOperations',
    'MergeOperations',
    'StyleOperations',
    'LayoutOperations'
]

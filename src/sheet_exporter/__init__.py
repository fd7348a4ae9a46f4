#!/usr/bin/env python3
"""
Sheet Exporter Package
Exports a list of records to a styled .xlsx sheet with multi-level headers
and merged cells
"""

__version__ = "1.4.0"

from .exceptions import (
    SheetExportError, InvalidInputError, ConfigError, ConfigNotFound, DataParsingError, RenderingError
)
from .models import Alignment, ExportOptions, HeaderNode, MergeRegion, MergeRule, SheetLayout
from .service import ExportService, build_workbook, export_json_to_excel

__all__ = [
    # API
    'export_json_to_excel',
    'build_workbook',
    'ExportService',

    # Models
    'Alignment',
    'ExportOptions',
    'HeaderNode',
    'MergeRegion',
    'MergeRule',
    'SheetLayout',

    # Exceptions
    'SheetExportError',
    'InvalidInputError',
    'ConfigError',
    'ConfigNotFound',
    'DataParsingError',
    'RenderingError'
]

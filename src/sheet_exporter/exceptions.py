#!/usr/bin/env python3
"""
Sheet Exporter
Custom exceptions for better error handling
"""

class SheetExportError(Exception):
    """Base exception for the sheet exporter."""
    pass

class InvalidInputError(SheetExportError):
    """Raised when the record collection is missing, empty or not a list."""
    pass

class ConfigError(SheetExportError):
    """Exception raised for errors in export options."""
    pass

class ConfigNotFound(ConfigError):
    """Raised when an options file is not found or cannot be read"""
    pass

class DataParsingError(SheetExportError):
    """Exception raised for errors when parsing input data."""
    pass

class RenderingError(SheetExportError):
    """Exception raised when the workbook cannot be written."""
    pass

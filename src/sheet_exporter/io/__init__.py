#!/usr/bin/env python3
"""
Sheet Exporter IO Package
"""

from .excel_writer import ExcelWriter

__all__ = ['ExcelWriter']

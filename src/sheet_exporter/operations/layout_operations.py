#!/usr/bin/env python3
"""
Layout Operations - Grid Writing and Sizing
Single responsibility: Cell values, column widths and row heights
"""

import datetime
import logging
import math
import unicodedata
from typing import Any, List, Optional

from openpyxl.utils import get_column_letter
from openpyxl.worksheet.worksheet import Worksheet

from ..models import LeafHeader

CELL_PADDING = 2
DEFAULT_COLUMN_WIDTH = 10
MULTI_VALUE_WIDTH_FACTOR = 1.5
NOTE_LINE_HEIGHT_PX = 15
PX_TO_POINTS = 0.75
FALLBACK_CONTENT_WIDTH = 100


class LayoutOperations:
    """Clean, focused layout operations without scattered utility functions"""

    def __init__(self, verbose: bool = False):
        self.verbose = verbose

    @staticmethod
    def get_string_width(text: str) -> int:
        """Display width of one line: wide East Asian characters count twice, plus padding."""
        if not text:
            return 0
        width = sum(2 if unicodedata.east_asian_width(ch) in ("W", "F") else 1 for ch in text)
        return width + CELL_PADDING

    def get_cell_width(self, value: Any) -> int:
        """Width of the widest line in a cell value."""
        if value is None:
            return 0
        return max(self.get_string_width(line) for line in str(value).split('\n'))

    def calculate_column_widths(self, rows: List[List[Any]], column_count: int) -> List[int]:
        """Widest cell per column over the given rows."""
        widths = [0] * column_count
        for row in rows:
            for col, value in enumerate(row[:column_count]):
                widths[col] = max(widths[col], self.get_cell_width(value))
        return widths

    def resolve_column_widths(
        self,
        rows: List[List[Any]],
        leaf_headers: List[LeafHeader],
        auto_width: bool,
        width_multiplier: float
    ) -> Optional[List[int]]:
        """
        Final column widths, or None when no widths should be set

        Args:
            rows: Header and data rows used for estimation
            leaf_headers: Leaves in column order, for explicit widths
            auto_width: Whether to estimate widths from content
            width_multiplier: Factor on estimated widths of single-field columns

        Returns:
            One integer width per column
        """
        if not auto_width and not any(leaf.width is not None for leaf in leaf_headers):
            return None

        column_count = len(leaf_headers)
        calculated = self.calculate_column_widths(rows, column_count) if auto_width else []
        widths = []
        for col, leaf in enumerate(leaf_headers):
            if leaf.width is not None:
                width = leaf.width
            elif auto_width:
                factor = MULTI_VALUE_WIDTH_FACTOR if leaf.property_keys else width_multiplier
                width = calculated[col] * factor
            else:
                width = DEFAULT_COLUMN_WIDTH
            widths.append(math.ceil(width))
        return widths

    def calculate_note_height(self, note_content: str, column_widths: Optional[List[int]]) -> float:
        """Row height in points for the note block, wrapping lines at half the sheet width."""
        content_width = sum(column_widths) if column_widths else 0
        content_width = content_width or FALLBACK_CONTENT_WIDTH
        chars_per_line = max(1, content_width // 2)

        line_count = 0
        for line in note_content.split('\n'):
            line_count += max(1, math.ceil(len(line) / chars_per_line))
        return line_count * NOTE_LINE_HEIGHT_PX * PX_TO_POINTS

    def write_grid(self, worksheet: Worksheet, grid: List[List[Any]]) -> None:
        """Write grid values starting at A1."""
        for row_index, row in enumerate(grid, start=1):
            for col_index, value in enumerate(row, start=1):
                worksheet.cell(row=row_index, column=col_index).value = self._normalize_value(value)
        logging.debug(f"Wrote {len(grid)} grid rows to sheet '{worksheet.title}'")

    def set_column_widths(self, worksheet: Worksheet, widths: List[int]) -> None:
        for col, width in enumerate(widths, start=1):
            worksheet.column_dimensions[get_column_letter(col)].width = width

    def set_row_height(self, worksheet: Worksheet, row_num: int, height: float) -> None:
        """Set height for a specific row"""
        worksheet.row_dimensions[row_num].height = height

    def _normalize_value(self, value: Any) -> Any:
        """Normalize values for Excel cells"""
        if value is None:
            return None
        elif isinstance(value, str):
            return value if value != '' else None
        elif isinstance(value, (int, float)):
            return value
        elif isinstance(value, (datetime.date, datetime.time)):
            return value
        else:
            return str(value)

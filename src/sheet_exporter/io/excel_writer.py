#!/usr/bin/env python3
"""
Sheet Exporter IO - Excel Writer
Workbook creation and saving
"""

import logging
from pathlib import Path
from typing import Optional

from openpyxl import Workbook
from openpyxl.worksheet.worksheet import Worksheet

from ..exceptions import RenderingError


class ExcelWriter:
    """Owns a fresh single-sheet workbook and writes it to disk"""

    def __init__(self, sheet_name: str = "Sheet1"):
        self.workbook: Optional[Workbook] = Workbook()
        self.worksheet: Worksheet = self.workbook.active
        self.worksheet.title = sheet_name

    def save(self, output_file: Path) -> Path:
        """Save the workbook, creating the parent directory if needed"""
        if not self.workbook:
            raise RuntimeError("No workbook loaded")

        output_file = Path(output_file)
        try:
            output_file.parent.mkdir(parents=True, exist_ok=True)
            self.workbook.save(output_file)
        except OSError as e:
            raise RenderingError(f"Failed to save workbook to {output_file}: {e}") from e

        logging.debug(f"Workbook saved to {output_file}")
        return output_file

    def close(self):
        """Close the workbook"""
        if self.workbook:
            self.workbook.close()
            self.workbook = None

    def __enter__(self):
        """Context manager entry"""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit"""
        self.close()

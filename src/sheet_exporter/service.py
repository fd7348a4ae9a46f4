#!/usr/bin/env python3
"""
Sheet Exporter
Main ExportService Class - records in, styled workbook out
"""

import logging
from pathlib import Path
from typing import Any, List, Optional, Tuple

from openpyxl import Workbook

from .components.config_loader import ConfigLoader
from .components.layout_builder import SheetLayoutBuilder
from .exceptions import InvalidInputError
from .io.excel_writer import ExcelWriter
from .models import ExportOptions, SheetLayout


class ExportService:
    """
    Validates the records, runs the layout builder and hands the result to
    the Excel writer.
    """

    def __init__(self, options: Optional[ExportOptions] = None):
        self.options = options or ExportOptions()

    @staticmethod
    def validate_records(records: Any) -> List[Any]:
        """The one checked precondition: records must be a non-empty list or tuple."""
        if not isinstance(records, (list, tuple)) or len(records) == 0:
            raise InvalidInputError("Export data must be a non-empty list of records")
        return list(records)

    def build_layout(self, records: Any) -> Tuple[SheetLayoutBuilder, SheetLayout]:
        records = self.validate_records(records)
        builder = SheetLayoutBuilder.build_complete_layout(records, self.options)
        return builder, builder.build()

    def build_workbook(self, records: Any) -> Tuple[Workbook, SheetLayout]:
        """
        Lay out and render the records into a new in-memory workbook.

        Returns:
            The workbook and the layout that was rendered into it
        """
        builder, layout = self.build_layout(records)
        writer = ExcelWriter(sheet_name=self.options.sheet_name)
        builder.render(writer.worksheet, layout)
        return writer.workbook, layout

    def export(self, records: Any, output_dir: str | Path = ".") -> Path:
        """
        Export the records to <output_dir>/<filename>.xlsx.

        Returns:
            Path of the written file
        """
        logging.info(f"ExportService: Exporting to '{self.options.filename}.xlsx'")
        builder, layout = self.build_layout(records)

        with ExcelWriter(sheet_name=self.options.sheet_name) as writer:
            builder.render(writer.worksheet, layout)
            output_path = writer.save(Path(output_dir) / f"{self.options.filename}.xlsx")

        logging.info(f"ExportService: Export complete. File at: {output_path}")
        return output_path


def _options_from_kwargs(options: Optional[ExportOptions], kwargs: dict) -> ExportOptions:
    if options is not None and kwargs:
        return ConfigLoader().from_dict({**options.model_dump(by_alias=True), **kwargs})
    if options is not None:
        return options
    return ConfigLoader().from_dict(kwargs)


def build_workbook(records: Any, options: Optional[ExportOptions] = None, **kwargs) -> Tuple[Workbook, SheetLayout]:
    """Render records into an in-memory workbook without writing it."""
    return ExportService(_options_from_kwargs(options, kwargs)).build_workbook(records)


def export_json_to_excel(
    records: Any,
    output_dir: str | Path = ".",
    options: Optional[ExportOptions] = None,
    **kwargs
) -> Path:
    """
    Simple function for exporting a list of records to an .xlsx file

    Args:
        records: Non-empty list of records
        output_dir: Directory the file is written to
        options: Prebuilt ExportOptions
        **kwargs: Individual ExportOptions fields, applied over `options`

    Returns:
        Path of the written file
    """
    return ExportService(_options_from_kwargs(options, kwargs)).export(records, output_dir)

#!/usr/bin/env python3
"""
Sheet Exporter
Builder Pattern: Sheet Layout Builder
"""

import logging
from typing import Any, Dict, List, Optional

from openpyxl.worksheet.worksheet import Worksheet

from ..models import Alignment, ExportOptions, LeafHeader, MergeRegion, SheetLayout
from ..operations import (
    DataOperations, HeaderOperations, LayoutOperations, MergeOperations, StyleOperations
)
from ..operations.style_operations import merge_styles

MERGE_ALIGNMENT_OVERRIDES = {'vertical': 'center', 'wrap_text': True}
CENTERED_ALIGNMENT = {'horizontal': 'center', **MERGE_ALIGNMENT_OVERRIDES}


class SheetLayoutBuilder:
    """
    Builder for the sheet layout: title band, header band, data rows and note
    block, plus every merge region and alignment the sheet needs.
    Provides a fluent interface; `build()` returns the finished SheetLayout and
    `render()` writes it to a worksheet.
    """

    def __init__(self, records: List[Any], options: ExportOptions):
        """
        Initialize the builder with the core components.

        Args:
            records: Non-empty list of source records
            options: Validated export options
        """
        self.records = records
        self.options = options

        # Initialize operation handlers
        self.data_ops = DataOperations()
        self.header_ops = HeaderOperations()
        self.merge_ops = MergeOperations()
        self.style_ops = StyleOperations()
        self.layout_ops = LayoutOperations()

        self.main_title_style = options.main_title_style or self.style_ops.default_main_title_style()
        self.header_style = options.header_style or self.style_ops.default_header_style()
        self.cell_style = options.cell_style or self.style_ops.default_cell_style()
        self.notes_style = options.notes_style or self.style_ops.default_notes_style()
        self.border_style = options.border_style or self.style_ops.default_border_style()
        self.default_alignment = Alignment(**(self.header_style.get('alignment') or {}))

        # Builder state
        self.has_header_tree = bool(options.headers)
        self.header_rows: List[List[Any]] = []
        self.leaf_headers: List[LeafHeader] = []
        self.column_alignments: List[Optional[Alignment]] = []
        self.column_count = 0
        self.data_rows: List[List[Any]] = []
        self.note_content = ""
        self.merges: List[MergeRegion] = []
        self.merge_alignments: Dict[str, Optional[Alignment]] = {}
        self.column_widths: Optional[List[int]] = None
        self._built = False

    @property
    def header_row_count(self) -> int:
        return len(self.header_rows)

    @property
    def data_start_row(self) -> int:
        return 1 + self.header_row_count

    @property
    def note_start_row(self) -> Optional[int]:
        if not self.note_content:
            return None
        return self.data_start_row + len(self.data_rows) + 1

    def add_headers(self):
        """Flatten the header tree, or derive a flat header from the first record."""
        if self.has_header_tree:
            logging.debug("Builder: Flattening header tree")
            flattened = self.header_ops.flatten_headers(self.options.headers, self.default_alignment)
        else:
            flattened = self.header_ops.flatten_headers(
                self.data_ops.derive_flat_headers(self.records), self.default_alignment
            )
        self.header_rows = flattened.header_rows
        self.leaf_headers = flattened.leaf_headers
        self.column_count = flattened.column_count
        self.column_alignments = flattened.column_alignments
        return self

    def add_data_rows(self):
        """Materialise one grid row per record."""
        if self.has_header_tree:
            self.data_rows = self.data_ops.build_data_rows(self.records, self.leaf_headers)
        else:
            keys = [leaf.key for leaf in self.leaf_headers]
            self.data_rows = self.data_ops.build_flat_rows(self.records, keys)
        return self

    def add_notes(self):
        """Join the non-empty notes into the note block content."""
        notes = self.options.notes
        raw_notes = notes if isinstance(notes, list) else [notes]
        valid_notes = [note for note in raw_notes if note is not None and note != '']
        self.note_content = self.options.notes_separator.join(valid_notes)
        if self.note_content:
            logging.debug(f"Builder: Note block with {len(valid_notes)} notes")
        return self

    def add_merges(self):
        """Collect every merge source and reconcile them into one list."""
        logging.debug("Builder: Generating merges")
        last_col = self.column_count - 1
        title_merge = [MergeRegion(0, 0, 0, last_col)]

        header_merges: List[MergeRegion] = []
        empty_row_merges: List[MergeRegion] = []
        if self.has_header_tree:
            header_result = self.header_ops.generate_header_merges(self.options.headers, self.default_alignment)
            header_merges = header_result.merges
            self.merge_alignments = header_result.alignments
            empty_row_merges = self.merge_ops.detect_empty_row_merges(
                self.header_rows, self.column_count, 1, self.header_row_count
            )

        row_merges = self.merge_ops.generate_row_merges(
            data_rows=self.data_rows,
            records=self.records,
            row_merge_rules=self.options.row_merge_rules,
            leaf_headers=self.leaf_headers,
            data_start_row=self.data_start_row
        )

        note_merges: List[MergeRegion] = []
        if self.note_start_row is not None and self.options.notes_merge and self.column_count > 0:
            note_merges.append(MergeRegion(self.note_start_row, 0, self.note_start_row, last_col))

        self.merges = self.merge_ops.reconcile_merges(
            title_merge,
            header_merges,
            empty_row_merges,
            self.options.merge_cells,
            row_merges,
            note_merges
        )
        return self

    def add_column_widths(self):
        """Estimate column widths from header and data rows."""
        self.column_widths = self.layout_ops.resolve_column_widths(
            rows=self.header_rows + self.data_rows,
            leaf_headers=self.leaf_headers,
            auto_width=self.options.auto_width,
            width_multiplier=self.options.width_multiplier
        )
        return self

    def _build_grid(self) -> List[List[Any]]:
        padding = [''] * max(self.column_count - 1, 0)
        grid = [[self.options.main_title] + padding]
        grid.extend(list(row) for row in self.header_rows)
        grid.extend(self.data_rows)
        if self.note_content:
            grid.append([''] * self.column_count)
            grid.append([self.note_content] + padding)
        return grid

    def build(self) -> SheetLayout:
        """
        Finalize the layout construction and return it.

        Returns:
            The completed SheetLayout
        """
        if self._built:
            raise RuntimeError("Builder has already been used. Create a new builder instance.")

        self._built = True
        layout = SheetLayout(
            grid=self._build_grid(),
            merges=self.merges,
            column_count=self.column_count,
            header_row_count=self.header_row_count,
            data_row_count=len(self.data_rows),
            leaf_headers=self.leaf_headers,
            column_alignments=self.column_alignments,
            merge_alignments=self.merge_alignments,
            column_widths=self.column_widths,
            note_start_row=self.note_start_row,
            note_content=self.note_content,
        )
        logging.info(
            f"Builder: Layout ready with {layout.column_count} columns, "
            f"{layout.header_row_count} header rows, {layout.data_row_count} data rows "
            f"and {len(layout.merges)} merges"
        )
        return layout

    def render(self, worksheet: Worksheet, layout: SheetLayout) -> Worksheet:
        """Write values, styles, merges and sizes of a built layout to the worksheet."""
        self.layout_ops.write_grid(worksheet, layout.grid)
        self._style_title(worksheet)
        self._style_header_band(worksheet, layout)
        self._style_data_rows(worksheet, layout)
        self.merge_ops.apply_merges(worksheet, layout.merges)
        self._style_merges(worksheet, layout)

        if layout.has_notes:
            self.style_ops.apply_cell_style(
                worksheet.cell(row=layout.note_start_row + 1, column=1),
                merge_styles(self.notes_style, {'border': None})
            )

        if layout.column_widths:
            self.layout_ops.set_column_widths(worksheet, layout.column_widths)

        if layout.has_notes:
            self.layout_ops.set_row_height(
                worksheet,
                layout.note_start_row + 1,
                self.layout_ops.calculate_note_height(layout.note_content, layout.column_widths)
            )
        return worksheet

    def _style_title(self, worksheet: Worksheet) -> None:
        self.style_ops.apply_cell_style(worksheet.cell(row=1, column=1), self.main_title_style)

    def _style_header_band(self, worksheet: Worksheet, layout: SheetLayout) -> None:
        for row in range(1, layout.header_row_count + 1):
            for col in range(layout.column_count):
                alignment = layout.column_alignments[col] or self.default_alignment
                style = merge_styles(self.header_style, self.border_style, {'alignment': alignment.to_style()})
                self.style_ops.apply_cell_style(worksheet.cell(row=row + 1, column=col + 1), style)

    def _style_data_rows(self, worksheet: Worksheet, layout: SheetLayout) -> None:
        base_style = merge_styles(
            self.cell_style,
            self.border_style,
            {'alignment': {**(self.cell_style.get('alignment') or {}), 'wrap_text': True}}
        )
        get_cell_style = self.options.get_cell_style

        for row_index in range(layout.data_row_count):
            row = layout.data_start_row + row_index
            for col in range(layout.column_count):
                custom_style = get_cell_style(row_index, col, self.records[row_index]) if get_cell_style else None
                style = merge_styles(base_style, custom_style) if custom_style else base_style
                self.style_ops.apply_cell_style(worksheet.cell(row=row + 1, column=col + 1), style)

    def _style_merges(self, worksheet: Worksheet, layout: SheetLayout) -> None:
        for merge in layout.merges:
            merge_key = f"{merge.start_row}-{merge.start_col}"
            if merge_key in layout.merge_alignments:
                alignment = layout.merge_alignments[merge_key]
                style = {**(alignment.to_style() if alignment else {}), **MERGE_ALIGNMENT_OVERRIDES}
            elif 1 <= merge.start_row <= layout.header_row_count and merge.start_col < layout.column_count:
                alignment = layout.column_alignments[merge.start_col] or self.default_alignment
                style = {**alignment.to_style(), **MERGE_ALIGNMENT_OVERRIDES}
            else:
                style = dict(CENTERED_ALIGNMENT)
            cell = worksheet.cell(row=merge.start_row + 1, column=merge.start_col + 1)
            self.style_ops.apply_cell_style(cell, {'alignment': style})

    @classmethod
    def build_complete_layout(cls, records: List[Any], options: ExportOptions) -> "SheetLayoutBuilder":
        """
        Convenience method to run every builder step in the standard order.
        Returns the builder so the caller can build() and render().
        """
        return (cls(records, options)
                .add_headers()
                .add_data_rows()
                .add_notes()
                .add_merges()
                .add_column_widths())

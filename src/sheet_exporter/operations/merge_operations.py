#!/usr/bin/env python3
"""
Merge Operations - Clean Cell Merging Logic
Single responsibility: Computing, reconciling and applying merge regions
"""

import logging
from typing import Any, Iterable, List, Optional

from openpyxl.worksheet.worksheet import Worksheet

from ..models import LeafHeader, MergeRegion, MergeRule, RowMergeRules
from .data_operations import DataOperations


class MergeOperations:
    """Clean, focused merge operations without scattered utility functions"""

    def __init__(self, verbose: bool = False):
        self.verbose = verbose

    @staticmethod
    def _is_empty(value: Any) -> bool:
        return value is None or value == ''

    def detect_empty_row_merges(
        self,
        header_rows: List[List[Any]],
        column_count: int,
        header_start_row: int,
        header_total_rows: int
    ) -> List[MergeRegion]:
        """
        Vertical merges joining each header title with the empty cells around it

        Args:
            header_rows: Title grid, one row per header level
            column_count: Number of columns in the grid
            header_start_row: Document row of header level 0
            header_total_rows: Number of header levels

        Returns:
            One merge per title that has an empty run above or below it
        """
        merges = []

        for col in range(column_count):
            column_cells = [row[col] for row in header_rows]
            filled_levels = [level for level, value in enumerate(column_cells) if not self._is_empty(value)]
            claimed = set()

            def is_free(level: int) -> bool:
                return self._is_empty(column_cells[level]) and level not in claimed

            # Deepest title first so it claims the gap directly around it
            for level in reversed(filled_levels):
                start_level = level
                for above in range(level - 1, -1, -1):
                    if not is_free(above):
                        break
                    start_level = above

                end_level = level
                for below in range(level + 1, header_total_rows):
                    if not is_free(below):
                        break
                    end_level = below

                if start_level < end_level:
                    claimed.update(range(start_level, end_level + 1))
                    merges.append(MergeRegion(
                        header_start_row + start_level, col,
                        header_start_row + end_level, col
                    ))

        logging.debug(f"Detected {len(merges)} vertical header merges")
        return merges

    def generate_row_merges(
        self,
        data_rows: List[List[Any]],
        records: List[Any],
        row_merge_rules: Optional[RowMergeRules],
        leaf_headers: List[LeafHeader],
        data_start_row: int
    ) -> List[MergeRegion]:
        """
        Vertical merges in the data area.

        A callable rule is asked for a span at every cell; a list of MergeRule
        merges runs of equal values in the column the rule names.
        """
        if callable(row_merge_rules):
            return self._generate_function_merges(data_rows, records, row_merge_rules, data_start_row)
        if row_merge_rules:
            return self._generate_rule_merges(records, row_merge_rules, leaf_headers, data_start_row)
        return []

    def _generate_function_merges(self, data_rows, records, rule_fn, data_start_row) -> List[MergeRegion]:
        merges = []
        total_rows = len(data_rows)

        for row_index, row in enumerate(data_rows):
            for col_index in range(len(row)):
                span = rule_fn(row_index, col_index, records[row_index])
                if span and span > 1 and row_index + span <= total_rows:
                    merges.append(MergeRegion(
                        data_start_row + row_index, col_index,
                        data_start_row + row_index + span - 1, col_index
                    ))

        logging.debug(f"Row merge function produced {len(merges)} merges")
        return merges

    def find_rule_column(self, rule_key: str, leaf_headers: List[LeafHeader]) -> int:
        """Column whose key is rule_key or whose property list contains it, else -1."""
        for index, leaf in enumerate(leaf_headers):
            if leaf.key == rule_key or rule_key in leaf.property_keys:
                return index
        return -1

    def _generate_rule_merges(
        self,
        records: List[Any],
        rules: Iterable[MergeRule],
        leaf_headers: List[LeafHeader],
        data_start_row: int
    ) -> List[MergeRegion]:
        merges = []

        for rule in rules:
            if isinstance(rule, dict):
                rule = MergeRule(**rule)
            if not rule.key or not rule.merge:
                continue

            col_index = self.find_rule_column(rule.key, leaf_headers)
            if col_index == -1:
                logging.warning(f"Row merge rule key '{rule.key}' matches no column, skipping")
                continue

            property_keys = leaf_headers[col_index].property_keys
            target_key = rule.key or (property_keys[0] if property_keys else None)
            for start, end in self.find_equal_runs(records, target_key):
                merges.append(MergeRegion(data_start_row + start, col_index, data_start_row + end, col_index))

        logging.debug(f"Row merge rules produced {len(merges)} merges")
        return merges

    @staticmethod
    def find_equal_runs(records: List[Any], target_key: Optional[str]) -> List[tuple]:
        """(start, end) record indices, inclusive, of every run of two or more equal values."""
        if not records:
            return []

        def value_at(record):
            return DataOperations.get_nested_value(record, target_key) if target_key else ''

        # 1, 1.0 and True are different values here
        def same(a, b):
            return type(a) is type(b) and a == b

        runs = []
        last_index = len(records) - 1
        start_row = 0
        current_value = value_at(records[0])

        for row_index in range(1, len(records)):
            value = value_at(records[row_index])
            if not same(value, current_value) or row_index == last_index:
                if row_index == last_index and same(value, current_value):
                    end_row = row_index
                else:
                    end_row = row_index - 1
                if end_row - start_row >= 1:
                    runs.append((start_row, end_row))
                start_row = row_index
                current_value = value

        return runs

    @staticmethod
    def reconcile_merges(*sources: Iterable[MergeRegion]) -> List[MergeRegion]:
        """Concatenate merge sources in order, dropping single-cell and inverted regions."""
        merges = [merge for source in sources for merge in source]
        valid = [merge for merge in merges if merge.is_valid]
        if len(valid) != len(merges):
            logging.debug(f"Dropped {len(merges) - len(valid)} single-cell or inverted merges")
        return valid

    def apply_merges(self, worksheet: Worksheet, merges: List[MergeRegion]) -> None:
        """
        Merge each region on the worksheet

        Args:
            worksheet: Target worksheet
            merges: Zero-based inclusive regions
        """
        for merge in merges:
            worksheet.merge_cells(**merge.to_range_kwargs())
        logging.debug(f"Applied {len(merges)} merges to sheet '{worksheet.title}'")

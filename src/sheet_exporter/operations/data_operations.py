#!/usr/bin/env python3
"""
Data Operations - Record Field Access and Row Materialisation
Single responsibility: Turning source records into grid rows
"""

import logging
from collections.abc import Mapping, Sequence
from typing import Any, Dict, List, Optional

from ..models import HeaderNode, LeafHeader


class DataOperations:
    """Resolves record fields and builds the data rows of the grid"""

    MULTI_VALUE_SEPARATOR = "\n"

    def __init__(self, verbose: bool = False):
        self.verbose = verbose

    @staticmethod
    def get_nested_value(record: Any, path: str) -> Any:
        """
        Resolve a dotted path ("a.b.c") against a record.

        Any missing segment, or a segment whose value is None, yields '' so
        the caller never has to guard the lookup.
        """
        current = record
        for segment in path.split('.'):
            if isinstance(current, Mapping):
                current = current.get(segment)
            elif isinstance(current, Sequence) and not isinstance(current, str) and segment.isdigit():
                index = int(segment)
                current = current[index] if index < len(current) else None
            else:
                current = None
            if current is None:
                return ''
        return current

    def resolve_leaf_value(self, record: Any, leaf: LeafHeader) -> Any:
        """Value of one leaf column for one record."""
        keys = leaf.property_keys
        if keys:
            values = [self.get_nested_value(record, key) for key in keys]
            return self.MULTI_VALUE_SEPARATOR.join(
                str(value) for value in values if value != '' and value is not None
            )
        if leaf.key:
            return self.get_nested_value(record, leaf.key)
        return ''

    def build_data_rows(self, records: List[Any], leaf_headers: List[LeafHeader]) -> List[List[Any]]:
        """One row per record, one cell per leaf header."""
        logging.debug(f"Materialising {len(records)} records across {len(leaf_headers)} columns")
        return [
            [self.resolve_leaf_value(record, leaf) for leaf in leaf_headers]
            for record in records
        ]

    def derive_flat_headers(self, records: List[Dict[str, Any]]) -> List[HeaderNode]:
        """Single-level header taken from the first record's own field names."""
        first = records[0]
        keys = list(first.keys()) if isinstance(first, Mapping) else []
        logging.debug(f"No header tree given, deriving {len(keys)} columns from first record")
        return [HeaderNode(key=str(key), title=str(key)) for key in keys]

    @staticmethod
    def build_flat_rows(records: List[Any], keys: List[Optional[str]]) -> List[List[Any]]:
        """Rows for a derived flat header: direct key lookup, no path resolution."""
        return [
            [record.get(key) if isinstance(record, Mapping) else None for key in keys]
            for record in records
        ]

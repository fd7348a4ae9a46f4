#!/usr/bin/env python3
"""
Header Operations - Header Tree Flattening and Spans
"""

import logging
from typing import Dict, List, Optional

from ..models import Alignment, FlattenedHeaders, HeaderMerges, HeaderNode, LeafHeader, MergeRegion


class HeaderOperations:
    """Flattens a nested header tree into row bands and computes its horizontal merges."""

    def __init__(self, verbose: bool = False):
        self.verbose = verbose

    @staticmethod
    def resolve_alignment(node: HeaderNode, default: Optional[Alignment]) -> Optional[Alignment]:
        """Node alignment keys win, anything the node leaves unset comes from default."""
        if node.alignment is None:
            return default
        return node.alignment.merged_over(default)

    def calculate_span(self, node: HeaderNode) -> int:
        """Number of leaf columns under a node; 1 for a leaf."""
        if node.is_leaf:
            return 1
        return sum(self.calculate_span(child) for child in node.children)

    def flatten_headers(
        self,
        headers: List[HeaderNode],
        default_alignment: Optional[Alignment] = None
    ) -> FlattenedHeaders:
        """
        Walk the header tree depth first and lay it out as one row per tree level.

        Args:
            headers: Top-level header nodes (tree level 1)
            default_alignment: Alignment every node inherits unset keys from

        Returns:
            FlattenedHeaders with the title rows, the leaves in column order,
            the column count and one resolved alignment per column.
        """
        leaf_headers: List[LeafHeader] = []
        max_level = 0

        def collect(nodes: List[HeaderNode], parent_path: List[HeaderNode], level: int) -> None:
            nonlocal max_level
            max_level = max(max_level, level)
            for node in nodes:
                path = parent_path + [node]
                if node.is_leaf:
                    leaf_headers.append(LeafHeader(
                        node=node,
                        alignment=self.resolve_alignment(node, default_alignment),
                        path=path,
                        column_index=len(leaf_headers),
                    ))
                else:
                    collect(node.children, path, level + 1)

        collect(headers, [], 1)

        header_rows = [[''] * len(leaf_headers) for _ in range(max_level)]
        # Each leaf column repeats the titles of all its ancestors
        for leaf_index, leaf in enumerate(leaf_headers):
            for level_index, ancestor in enumerate(leaf.path):
                if header_rows[level_index][leaf_index] == '':
                    header_rows[level_index][leaf_index] = ancestor.title

        logging.debug(f"Flattened header tree into {max_level} rows and {len(leaf_headers)} columns")
        return FlattenedHeaders(
            header_rows=header_rows,
            leaf_headers=leaf_headers,
            column_count=len(leaf_headers),
            column_alignments=[leaf.alignment for leaf in leaf_headers],
        )

    def generate_header_merges(
        self,
        headers: List[HeaderNode],
        default_alignment: Optional[Alignment] = None,
        start_row: int = 1
    ) -> HeaderMerges:
        """
        Horizontal merges for every node spanning more than one column.

        Row 0 of the document is the title band, so tree level 1 lands on
        `start_row`. Alignments are keyed "row-col" by the merge's top-left cell.
        """
        merges: List[MergeRegion] = []
        alignments: Dict[str, Optional[Alignment]] = {}

        def process_level(nodes: List[HeaderNode], row: int, start_col: int) -> None:
            current_col = start_col
            for node in nodes:
                span = self.calculate_span(node)
                if span > 1:
                    alignments[f"{row}-{current_col}"] = self.resolve_alignment(node, default_alignment)
                    merges.append(MergeRegion(row, current_col, row, current_col + span - 1))
                if not node.is_leaf:
                    process_level(node.children, row + 1, current_col)
                current_col += span

        process_level(headers, start_row, 0)
        logging.debug(f"Generated {len(merges)} horizontal header merges")
        return HeaderMerges(merges=merges, alignments=alignments)

#!/usr/bin/env python3
"""
Sheet Exporter
Pydantic models and layout dataclasses for standardized data structures
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Union

from pydantic import BaseModel, Field, field_validator


def _as_text(value: Any) -> Any:
    """Render non-string values as text; None passes through."""
    if value is None or isinstance(value, str):
        return value
    return str(value)


class Alignment(BaseModel):
    """Partial cell alignment. Unset fields inherit from a default when merged."""
    horizontal: Optional[str] = None
    vertical: Optional[str] = None
    wrap_text: Optional[bool] = Field(default=None, alias="wrapText")

    class Config:
        populate_by_name = True
        frozen = True

    def merged_over(self, default: Optional["Alignment"]) -> "Alignment":
        """Return a copy where every field this alignment leaves unset comes from default."""
        if default is None:
            return self
        return Alignment(
            horizontal=self.horizontal if self.horizontal is not None else default.horizontal,
            vertical=self.vertical if self.vertical is not None else default.vertical,
            wrap_text=self.wrap_text if self.wrap_text is not None else default.wrap_text,
        )

    def to_style(self) -> Dict[str, Any]:
        """Alignment section of a style dict, set fields only."""
        style = {}
        if self.horizontal is not None:
            style['horizontal'] = self.horizontal
        if self.vertical is not None:
            style['vertical'] = self.vertical
        if self.wrap_text is not None:
            style['wrap_text'] = self.wrap_text
        return style


class HeaderNode(BaseModel):
    """
    One node of the header tree.

    Only leaves (nodes without children) produce a data column. A leaf reads its
    value from `property` (comma-joined field list, values joined by newlines)
    or, failing that, from the single-field `key`.
    """
    property_path: Optional[str] = Field(default=None, alias="property")
    key: Optional[str] = None
    title: str = ""
    alignment: Optional[Alignment] = None
    width: Optional[float] = None
    children: List["HeaderNode"] = Field(default_factory=list)

    class Config:
        populate_by_name = True

    @field_validator('property_path', 'key')
    @classmethod
    def _strip(cls, value: Optional[str]) -> Optional[str]:
        return value.strip() if isinstance(value, str) else value

    @field_validator('title', mode='before')
    @classmethod
    def _title_as_text(cls, value: Any) -> str:
        value = _as_text(value)
        return "" if value is None else value

    @property
    def is_leaf(self) -> bool:
        return not self.children

    @property
    def property_keys(self) -> List[str]:
        if not self.property_path:
            return []
        return [part.strip() for part in self.property_path.split(',') if part.strip()]


HeaderNode.model_rebuild()


class MergeRule(BaseModel):
    """Declarative row-merge rule: merge equal consecutive values of `key`."""
    key: Optional[str] = None
    merge: bool = False


@dataclass(frozen=True)
class MergeRegion:
    """Zero-based, inclusive cell range in the document grid."""
    start_row: int
    start_col: int
    end_row: int
    end_col: int

    @property
    def is_degenerate(self) -> bool:
        return self.start_row == self.end_row and self.start_col == self.end_col

    @property
    def is_inverted(self) -> bool:
        return self.start_row > self.end_row or self.start_col > self.end_col

    @property
    def is_valid(self) -> bool:
        return not (self.is_degenerate or self.is_inverted)

    def to_range_kwargs(self) -> Dict[str, int]:
        """Keyword arguments for openpyxl's 1-based Worksheet.merge_cells."""
        return {
            'start_row': self.start_row + 1,
            'start_column': self.start_col + 1,
            'end_row': self.end_row + 1,
            'end_column': self.end_col + 1,
        }


@dataclass
class LeafHeader:
    """A leaf of the header tree with its resolved alignment and ancestor path."""
    node: HeaderNode
    alignment: Optional[Alignment]
    path: List[HeaderNode]
    column_index: int

    @property
    def key(self) -> Optional[str]:
        return self.node.key

    @property
    def property_keys(self) -> List[str]:
        return self.node.property_keys

    @property
    def width(self) -> Optional[float]:
        return self.node.width


@dataclass
class FlattenedHeaders:
    header_rows: List[List[str]]
    leaf_headers: List[LeafHeader]
    column_count: int
    column_alignments: List[Optional[Alignment]]


@dataclass
class HeaderMerges:
    merges: List[MergeRegion]
    alignments: Dict[str, Optional[Alignment]]


@dataclass
class SheetLayout:
    """Everything the workbook writer needs: grid values, merges and style resolution."""
    grid: List[List[Any]]
    merges: List[MergeRegion]
    column_count: int
    header_row_count: int
    data_row_count: int
    leaf_headers: List[LeafHeader]
    column_alignments: List[Optional[Alignment]]
    merge_alignments: Dict[str, Optional[Alignment]] = field(default_factory=dict)
    column_widths: Optional[List[int]] = None
    note_start_row: Optional[int] = None
    note_content: str = ""

    @property
    def data_start_row(self) -> int:
        return 1 + self.header_row_count

    @property
    def has_notes(self) -> bool:
        return self.note_start_row is not None


RowMergeRules = Union[Callable[[int, int, Any], int], List[MergeRule]]


class ExportOptions(BaseModel):
    """
    Export configuration. Every recognised option has a default; unknown
    options are ignored. Style dicts left as None fall back to the defaults
    built by StyleOperations.
    """
    headers: Optional[List[HeaderNode]] = None
    row_merge_rules: RowMergeRules = Field(default_factory=list)
    merge_cells: List[MergeRegion] = Field(default_factory=list)

    filename: str = "export"
    sheet_name: str = "Sheet1"
    main_title: str = ""

    notes: Union[str, List[Optional[str]], None] = Field(default_factory=list)
    notes_merge: bool = True
    notes_separator: str = "\n"

    main_title_style: Optional[Dict[str, Any]] = None
    header_style: Optional[Dict[str, Any]] = None
    cell_style: Optional[Dict[str, Any]] = None
    notes_style: Optional[Dict[str, Any]] = None
    border_style: Optional[Dict[str, Any]] = None
    get_cell_style: Optional[Callable[[int, int, Any], Optional[Dict[str, Any]]]] = None

    auto_width: bool = True
    width_multiplier: float = 1.1

    class Config:
        extra = "ignore"

    @field_validator('main_title', mode='before')
    @classmethod
    def _main_title_as_text(cls, value: Any) -> str:
        value = _as_text(value)
        return "" if value is None else value

    @field_validator('notes', mode='before')
    @classmethod
    def _notes_as_text(cls, value: Any) -> Any:
        if isinstance(value, (list, tuple)):
            return [_as_text(note) for note in value]
        return _as_text(value)

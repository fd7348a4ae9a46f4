#!/usr/bin/env python3
"""
Style Operations - Clean Cell Styling Logic
Single responsibility: Default styles, style merging and cell styling
"""

import copy
import logging
from typing import Any, Dict, Optional

from openpyxl.cell import Cell
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side

THIN_BLACK_BORDER = {
    'top': {'style': 'thin', 'color': '000000'},
    'bottom': {'style': 'thin', 'color': '000000'},
    'left': {'style': 'thin', 'color': '000000'},
    'right': {'style': 'thin', 'color': '000000'},
}


def create_default_style(custom_style: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """
    Base style with font, alignment and border sections filled in.

    The font, alignment, border and fill sections of custom_style are merged
    key by key over the base; any other section replaces it outright.
    """
    custom_style = custom_style or {}
    style = {
        'font': {'name': 'Microsoft YaHei', 'size': 11, 'color': '000000'},
        'alignment': {'horizontal': 'left', 'vertical': 'top', 'wrap_text': False},
        'fill': {},
        'border': {side: {'style': 'thin'} for side in ('top', 'bottom', 'left', 'right')},
    }
    for section, value in custom_style.items():
        if section in style and isinstance(value, dict):
            style[section] = {**style[section], **value}
        else:
            style[section] = value
    return style


def merge_styles(*styles: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """Shallow merge: later styles replace whole sections of earlier ones."""
    merged: Dict[str, Any] = {}
    for style in styles:
        if style:
            merged.update(style)
    return merged


class StyleOperations:
    """Clean, focused styling operations without scattered utility functions"""

    def __init__(self, verbose: bool = False):
        self.verbose = verbose

    def default_main_title_style(self) -> Dict[str, Any]:
        return create_default_style({
            'font': {'name': 'SimSun', 'size': 16, 'color': '000080', 'bold': True},
            'alignment': {'horizontal': 'center', 'vertical': 'center'},
            'fill': {'pattern_type': 'solid', 'color': 'FFFFFF'},
        })

    def default_header_style(self) -> Dict[str, Any]:
        return create_default_style({
            'font': {'name': 'SimSun', 'size': 13, 'color': '000000', 'bold': True},
            'alignment': {'horizontal': 'center', 'vertical': 'center'},
            'fill': {'pattern_type': 'solid', 'color': '90C3EA'},
        })

    def default_cell_style(self) -> Dict[str, Any]:
        return create_default_style({
            'font': {'name': 'SimSun', 'size': 12, 'color': '333333'},
            'alignment': {'horizontal': 'center', 'vertical': 'center', 'wrap_text': True},
            'fill': {'pattern_type': 'solid', 'color': 'FFFFFF'},
        })

    def default_notes_style(self) -> Dict[str, Any]:
        style = create_default_style({
            'font': {'name': 'Microsoft YaHei', 'size': 10, 'color': '666666'},
            'alignment': {'horizontal': 'left', 'vertical': 'top', 'wrap_text': True},
            'fill': {'pattern_type': 'solid', 'color': 'FFFFFF'},
        })
        style['border'] = None
        return style

    def default_border_style(self) -> Dict[str, Any]:
        return {'border': copy.deepcopy(THIN_BLACK_BORDER)}

    def apply_cell_style(self, cell: Cell, style_config: Dict[str, Any]) -> None:
        """
        Apply styling to a single cell

        Sections missing from style_config leave the cell's current value alone;
        a section set to None resets it.

        Args:
            cell: Target cell
            style_config: Style configuration dictionary
        """
        if 'font' in style_config:
            cell.font = self._build_font(style_config['font'])
        if 'alignment' in style_config:
            cell.alignment = self._build_alignment(style_config['alignment'])
        if 'border' in style_config:
            cell.border = self._build_border(style_config['border'])
        if 'fill' in style_config:
            cell.fill = self._build_fill(style_config['fill'])
        if 'number_format' in style_config:
            cell.number_format = style_config['number_format']

    def _build_font(self, font_config: Optional[Dict[str, Any]]) -> Font:
        font_config = font_config or {}
        font_kwargs = {}
        for name in ('name', 'size', 'bold', 'italic', 'underline', 'color'):
            if font_config.get(name) is not None:
                font_kwargs[name] = font_config[name]
        return Font(**font_kwargs)

    def _build_alignment(self, alignment_config: Optional[Dict[str, Any]]) -> Alignment:
        alignment_config = alignment_config or {}
        alignment_kwargs = {}
        for name in ('horizontal', 'vertical', 'wrap_text'):
            if alignment_config.get(name) is not None:
                alignment_kwargs[name] = alignment_config[name]
        return Alignment(**alignment_kwargs)

    def _build_border(self, border_config: Optional[Dict[str, Any]]) -> Border:
        border_kwargs = {}

        for side in ('left', 'right', 'top', 'bottom'):
            side_config = (border_config or {}).get(side)
            if isinstance(side_config, dict):
                border_kwargs[side] = Side(
                    style=side_config.get('style', 'thin'),
                    color=side_config.get('color', '000000')
                )
            elif isinstance(side_config, str):
                border_kwargs[side] = Side(style=side_config)

        return Border(**border_kwargs)

    def _build_fill(self, fill_config: Optional[Dict[str, Any]]) -> PatternFill:
        if fill_config and 'color' in fill_config:
            return PatternFill(
                patternType=fill_config.get('pattern_type', 'solid'),
                fgColor=fill_config['color']
            )
        if self.verbose and fill_config:
            logging.debug(f"Fill config without color ignored: {fill_config}")
        return PatternFill()

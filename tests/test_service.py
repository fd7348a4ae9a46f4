"""
End-to-end tests: records in, workbook out.
"""

import json

import pytest
from openpyxl import load_workbook

from sheet_exporter import (
    ExportOptions, ExportService, InvalidInputError, MergeRegion, build_workbook, export_json_to_excel
)
from sheet_exporter.exceptions import ConfigError
from sheet_exporter.main import main


def merged(worksheet):
    return {str(cell_range) for cell_range in worksheet.merged_cells.ranges}


class TestInvalidInput:
    """The record collection is the one validated precondition."""

    @pytest.mark.parametrize("records", [[], (), None, "abc", {"a": 1}, 42])
    def test_rejects_missing_empty_or_non_list(self, records):
        with pytest.raises(InvalidInputError):
            build_workbook(records)

    def test_invalid_options_raise_config_error(self):
        with pytest.raises(ConfigError):
            build_workbook([{"a": 1}], width_multiplier="wide")

    def test_tuple_of_records_accepted(self):
        workbook, layout = build_workbook(({"a": 1}, {"a": 2}))
        assert layout.data_row_count == 2


class TestOrgScenario:
    """Two-level header over nine leaves with an equal-run merge on orgName."""

    def test_layout(self, org_records, org_headers):
        _, layout = build_workbook(
            org_records, headers=org_headers, row_merge_rules=[{"key": "orgName", "merge": True}]
        )
        assert layout.column_count == 9
        assert layout.header_row_count == 2
        assert layout.data_row_count == 4
        assert layout.merges == [
            MergeRegion(0, 0, 0, 8),
            MergeRegion(1, 0, 1, 8),
            MergeRegion(3, 0, 6, 0),
        ]
        assert layout.grid[3][8] == "x1\ny1"
        assert layout.grid[5][8] == "x3"

    def test_worksheet(self, org_records, org_headers):
        workbook, _ = build_workbook(
            org_records,
            headers=org_headers,
            row_merge_rules=[{"key": "orgName", "merge": True}],
            main_title="Staff",
            sheet_name="Staff",
        )
        ws = workbook["Staff"]

        assert merged(ws) == {"A1:I1", "A2:I2", "A4:A7"}
        assert ws["A1"].value == "Staff"
        assert ws["A2"].value == "Staff Report"
        assert ws["B3"].value == "Name"
        assert ws["A4"].value == "Acme"
        assert ws["C4"].value == 31
        assert ws["I4"].value == "x1\ny1"
        assert ws.column_dimensions["E"].width == 30

    def test_styles(self, org_records, org_headers):
        workbook, _ = build_workbook(
            org_records,
            headers=org_headers,
            row_merge_rules=[{"key": "orgName", "merge": True}],
            get_cell_style=lambda row, col, record: {"font": {"bold": True}} if record["age"] > 40 else None,
        )
        ws = workbook.active

        assert ws["A1"].font.bold
        assert ws["A1"].font.size == 16
        assert ws["B3"].font.bold
        assert ws["B3"].fill.fgColor.rgb.endswith("90C3EA")
        assert ws["B3"].alignment.horizontal == "center"
        assert ws["B3"].border.left.style == "thin"
        assert ws["B5"].alignment.wrap_text
        assert ws["B6"].font.bold
        assert not ws["B5"].font.bold
        assert ws["A4"].alignment.horizontal == "center"
        assert ws["A4"].alignment.vertical == "center"


class TestHeaderShapes:
    """Header trees of uneven depth."""

    def test_shallow_leaf_merges_down(self):
        headers = [
            {"title": "A", "key": "a"},
            {"title": "Group", "children": [{"title": "B", "key": "b"}]},
        ]
        workbook, layout = build_workbook([{"a": 1, "b": 2}], headers=headers)
        assert layout.header_row_count == 2
        assert "A2:A3" in merged(workbook.active)
        assert "B2:B3" not in merged(workbook.active)

    def test_custom_alignment_applied_to_header_and_merge(self):
        headers = [
            {"title": "Left", "key": "a", "alignment": {"horizontal": "left"}},
            {"title": "Group", "alignment": {"horizontal": "right"}, "children": [
                {"title": "B", "key": "b"}, {"title": "C", "key": "c"},
            ]},
        ]
        ws = build_workbook([{"a": 1, "b": 2, "c": 3}], headers=headers)[0].active

        assert ws["A2"].alignment.horizontal == "left"
        assert ws["A2"].alignment.vertical == "center"
        assert ws["A2"].alignment.wrap_text
        assert ws["B2"].alignment.horizontal == "right"
        assert ws["C3"].alignment.horizontal == "center"

    def test_flat_header_from_first_record(self):
        records = [{"id": 1, "name": "x"}, {"id": 2}]
        workbook, layout = build_workbook(records, main_title="Flat")
        ws = workbook.active

        assert layout.header_row_count == 1
        assert merged(ws) == {"A1:B1"}
        assert (ws["A2"].value, ws["B2"].value) == ("id", "name")
        assert (ws["A3"].value, ws["B4"].value) == (1, None)


class TestMergeSources:
    """Function rules, extra merges and the note block."""

    def test_function_rule_and_extra_merges(self):
        records = [{"k": i, "v": i * 10} for i in range(4)]
        workbook, _ = build_workbook(
            records,
            row_merge_rules=lambda row, col, record: 2 if (row, col) == (1, 1) else 1,
            merge_cells=[{"start_row": 5, "start_col": 0, "end_row": 5, "end_col": 1},
                         {"start_row": 2, "start_col": 0, "end_row": 2, "end_col": 0}],
        )
        assert merged(workbook.active) == {"A1:B1", "B4:B5", "A6:B6"}

    def test_notes_block(self, org_records, org_headers):
        workbook, layout = build_workbook(
            org_records, headers=org_headers, notes=["Note one", None, "", "Note two"]
        )
        ws = workbook.active

        assert layout.note_start_row == 8
        assert ws["A9"].value == "Note one\nNote two"
        assert "A9:I9" in merged(ws)
        assert ws["A8"].value is None
        assert ws.row_dimensions[9].height > 0
        assert ws["A9"].border.left.style is None

    def test_single_note_string_without_merge(self):
        workbook, layout = build_workbook([{"a": 1, "b": 2}], notes="Only note", notes_merge=False)
        assert layout.note_content == "Only note"
        assert "A5:B5" not in merged(workbook.active)
        assert workbook.active["A5"].value == "Only note"

    def test_numeric_title_and_note_rendered(self):
        workbook, layout = build_workbook(
            [{"y": 1}], headers=[{"title": 2024, "key": "y"}], notes=["Total", 42]
        )
        ws = workbook.active
        assert ws["A2"].value == "2024"
        assert layout.note_content == "Total\n42"
        assert ws["A5"].value == "Total\n42"

    def test_empty_notes_add_no_rows(self):
        _, layout = build_workbook([{"a": 1}], notes=[None, ""])
        assert not layout.has_notes
        assert len(layout.grid) == 3


class TestExportToFile:
    """Workbooks written to disk."""

    def test_export_json_to_excel(self, tmp_path, org_records, org_headers):
        path = export_json_to_excel(
            org_records,
            output_dir=tmp_path,
            filename="staff",
            sheet_name="People",
            headers=org_headers,
            row_merge_rules=[{"key": "orgName", "merge": True}],
        )
        assert path == tmp_path / "staff.xlsx"

        ws = load_workbook(path)["People"]
        assert merged(ws) == {"A1:I1", "A2:I2", "A4:A7"}
        assert ws["I5"].value == "x2\ny2"

    def test_options_and_keyword_overrides(self, tmp_path):
        path = export_json_to_excel(
            [{"a": 1}], tmp_path, options=ExportOptions(filename="base", sheet_name="One"), sheet_name="Two"
        )
        assert path.name == "base.xlsx"
        assert load_workbook(path).sheetnames == ["Two"]

    def test_service_export(self, tmp_path):
        path = ExportService(ExportOptions(filename="svc")).export([{"a": 1}], tmp_path / "nested")
        assert path.exists()


class TestCli:
    """Command-line entry point."""

    def test_cli_exports(self, tmp_path, org_records, org_headers):
        input_file = tmp_path / "records.json"
        config_file = tmp_path / "options.json"
        input_file.write_text(json.dumps(org_records), encoding="utf-8")
        config_file.write_text(json.dumps({
            "headers": org_headers,
            "row_merge_rules": [{"key": "orgName", "merge": True}],
            "filename": "from_config",
        }), encoding="utf-8")

        exit_code = main([
            str(input_file), "--config", str(config_file),
            "--output-dir", str(tmp_path), "--filename", "cli", "--title", "CLI Export",
        ])

        assert exit_code == 0
        ws = load_workbook(tmp_path / "cli.xlsx").active
        assert ws["A1"].value == "CLI Export"
        assert "A4:A7" in merged(ws)

    def test_cli_reports_bad_input(self, tmp_path):
        input_file = tmp_path / "records.json"
        input_file.write_text("[]", encoding="utf-8")
        assert main([str(input_file), "--output-dir", str(tmp_path)]) == 1

    def test_cli_missing_file(self, tmp_path):
        assert main([str(tmp_path / "missing.json")]) == 1

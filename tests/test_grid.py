"""
Tests for the grid builder: layout, styles, comments and per-cell fallback.
"""

import pytest
from openpyxl import Workbook
from structlog.testing import capture_logs

from json_excel import grid
from json_excel.config import OverflowSettings
from json_excel.grid import attach_annotation, build_sheet, set_cell_value
from json_excel.errors import AnnotationAttachError
from json_excel.styles import HEADER_STYLE, HIGHLIGHT_FILL


@pytest.fixture
def worksheet():
	wb = Workbook()
	yield wb.active
	wb.close()


def row_values(ws, row):
	return [cell.value for cell in ws[row]]


class TestLayout:
	def test_header_and_rows(self, worksheet, overflow_settings):
		records = [{"name": "Alice", "age": 30}, {"name": "Bob", "city": "Paris"}]
		fields = ["name", "age", "city"]

		stats = build_sheet(worksheet, records, fields, overflow_settings)

		assert worksheet.max_row == len(records) + 1
		assert worksheet.max_column == 3
		assert row_values(worksheet, 1) == ["name", "age", "city"]
		assert row_values(worksheet, 2) == ["Alice", 30.0, ""]
		assert row_values(worksheet, 3) == ["Bob", "", "Paris"]
		assert stats.rows == 2
		assert stats.columns == 3
		assert stats.overflow_cells == 0

	def test_null_renders_empty(self, worksheet, overflow_settings):
		build_sheet(worksheet, [{"a": None}], ["a"], overflow_settings)
		assert worksheet.cell(row=2, column=1).value == ""
		assert worksheet.cell(row=2, column=1).comment is None

	def test_booleans_kept(self, worksheet, overflow_settings):
		build_sheet(worksheet, [{"flag": True}], ["flag"], overflow_settings)
		assert worksheet.cell(row=2, column=1).value is True

	def test_header_style_applied_to_every_header(self, worksheet, overflow_settings):
		build_sheet(worksheet, [{"a": 1, "b": 2}], ["a", "b"], overflow_settings)
		for cell in worksheet[1]:
			assert cell.font.b
			assert cell.font.color.rgb == "00FFFFFF"
			assert cell.fill.fgColor.rgb == HEADER_STYLE.fill.fgColor.rgb
			assert cell.alignment.horizontal == "center"
			assert cell.border.top.style == "thin"

	def test_data_style(self, worksheet, overflow_settings):
		build_sheet(worksheet, [{"a": "x"}], ["a"], overflow_settings)
		cell = worksheet.cell(row=2, column=1)
		assert cell.alignment.wrap_text
		assert cell.alignment.vertical == "top"
		assert cell.border.left.style == "thin"
		assert cell.fill.fill_type is None


class TestTextCells:
	def test_leading_equals_is_not_a_formula(self, worksheet):
		cell = worksheet.cell(row=1, column=1)
		set_cell_value(cell, "=SUM(A1:A3)")
		assert cell.value == "=SUM(A1:A3)"
		assert cell.data_type == "s"

	def test_illegal_characters_stripped(self, worksheet):
		cell = worksheet.cell(row=1, column=1)
		set_cell_value(cell, "bell\x07here")
		assert cell.value == "bellhere"


class TestOverflowCells:
	def test_comment_attached_and_highlighted(self, worksheet, overflow_settings):
		build_sheet(worksheet, [{"blob": "x" * 40000}], ["blob"], overflow_settings)

		cell = worksheet.cell(row=2, column=1)
		assert cell.value == "📝 [blob: 40000字符] " + "x" * 100 + "..."
		assert cell.comment is not None
		assert cell.comment.author == "数据导出系统"
		assert "x" * 1000 in cell.comment.text
		assert "剩余 39000 字符未显示" in cell.comment.text
		assert cell.fill.fill_type == "solid"
		assert cell.fill.fgColor.rgb == HIGHLIGHT_FILL.fgColor.rgb

	def test_stats_count_overflow(self, worksheet, overflow_settings):
		records = [{"a": "y" * 33000}, {"a": "short"}, {"a": "z" * 33000}]
		stats = build_sheet(worksheet, records, ["a"], overflow_settings)
		assert stats.overflow_cells == 2
		assert stats.fallback_cells == 0
		assert worksheet.cell(row=3, column=1).comment is None

	def test_attach_failure_falls_back(self, worksheet, overflow_settings, monkeypatch):
		def broken_comment(*args, **kwargs):
			raise RuntimeError("drawing layer unavailable")

		monkeypatch.setattr(grid, "Comment", broken_comment)
		records = [{"blob": "x" * 40000, "name": "ok"}, {"blob": "fine", "name": "next"}]

		with capture_logs() as logs:
			stats = build_sheet(worksheet, records, ["blob", "name"], overflow_settings)

		cell = worksheet.cell(row=2, column=1)
		assert cell.value == "[内容过长: 40000字符]"
		assert cell.comment is None
		assert cell.fill.fill_type is None
		# processing continued past the failed cell
		assert worksheet.cell(row=2, column=2).value == "ok"
		assert row_values(worksheet, 3) == ["fine", "next"]
		assert stats.fallback_cells == 1
		assert stats.overflow_cells == 0

		warnings = [entry for entry in logs if entry["log_level"] == "warning"]
		assert len(warnings) == 1
		assert warnings[0]["event"] == "annotation_attach_failed"
		assert warnings[0]["cell"] == "A2"
		assert warnings[0]["field"] == "blob"

	def test_attach_annotation_sets_author_and_size(self, worksheet):
		settings = OverflowSettings(comment_author="exporter", comment_width=300, comment_height=150)
		cell = worksheet.cell(row=4, column=2)

		attach_annotation(cell, "full text", "memo", settings)

		assert cell.comment.text == "full text"
		assert cell.comment.author == "exporter"
		assert cell.comment.width == 300
		assert cell.comment.height == 150

	def test_attach_annotation_strips_illegal_characters(self, worksheet, overflow_settings):
		cell = worksheet.cell(row=2, column=1)

		attach_annotation(cell, "bell\x07and\x01start", "memo", overflow_settings)

		assert cell.comment.text == "bellandstart"

	def test_attach_annotation_wraps_errors(self, worksheet, overflow_settings, monkeypatch):
		def broken_comment(*args, **kwargs):
			raise ValueError("bad anchor")

		monkeypatch.setattr(grid, "Comment", broken_comment)
		cell = worksheet.cell(row=3, column=2)

		with pytest.raises(AnnotationAttachError) as excinfo:
			attach_annotation(cell, "text", "memo", overflow_settings)

		assert excinfo.value.coordinate == "B3"
		assert excinfo.value.field_name == "memo"
		assert isinstance(excinfo.value.__cause__, ValueError)

#!/usr/bin/env python3
"""
Grid builder: header row plus one row per record on a single worksheet.

Per-cell value decisions come from the overflow policy; this module only puts
payloads into openpyxl cells, attaches comments and applies styles.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Sequence

from openpyxl.cell.cell import ILLEGAL_CHARACTERS_RE, Cell
from openpyxl.comments import Comment
from openpyxl.worksheet.worksheet import Worksheet

from .config import OverflowSettings
from .errors import AnnotationAttachError
from .logging_config import get_logger
from .models import Record
from .overflow import CellPayload, fallback_text, format_cell_value
from .styles import DATA_STYLE, HEADER_STYLE, OVERFLOW_STYLE

logger = get_logger(__name__)


@dataclass
class GridStats:
	rows: int = 0
	columns: int = 0
	overflow_cells: int = 0
	fallback_cells: int = 0


def set_cell_value(cell: Cell, value: Any) -> None:
	"""Store a value, keeping strings as literal text (never formulas)."""
	if isinstance(value, str):
		cell.value = ILLEGAL_CHARACTERS_RE.sub("", value)
		# openpyxl treats a leading '=' as a formula
		cell.data_type = "s"
	else:
		cell.value = value


def attach_annotation(cell: Cell, text: str, field_name: str, settings: OverflowSettings) -> None:
	"""
	Attach the overflow comment to a cell

	Args:
		cell: Target cell
		text: Comment body built by the overflow policy
		field_name: Column name, for error reporting
		settings: Author and comment box size

	Raises:
		AnnotationAttachError: the comment could not be created or bound
	"""
	try:
		# comment XML rejects the same control characters as cell text
		comment = Comment(
			ILLEGAL_CHARACTERS_RE.sub("", text),
			settings.comment_author,
			width=settings.comment_width,
			height=settings.comment_height,
		)
		cell.comment = comment
	except Exception as e:
		raise AnnotationAttachError(
			f"Failed to attach comment to {cell.coordinate}: {e}", cell.coordinate, field_name
		) from e


def write_header_row(ws: Worksheet, fields: Sequence[str]) -> None:
	for col_index, field_name in enumerate(fields, start=1):
		cell = ws.cell(row=1, column=col_index)
		set_cell_value(cell, field_name)
		HEADER_STYLE.apply(cell)


def write_data_cell(cell: Cell, field_name: str, value: Any, settings: OverflowSettings, stats: GridStats) -> CellPayload:
	payload = format_cell_value(field_name, value, settings)
	DATA_STYLE.apply(cell)
	set_cell_value(cell, payload.value)
	if not payload.overflow:
		return payload

	try:
		attach_annotation(cell, payload.annotation, field_name, settings)
	except AnnotationAttachError as e:
		logger.warning(
			"annotation_attach_failed",
			cell=e.coordinate,
			field=e.field_name,
			length=payload.full_length,
			error=str(e),
		)
		set_cell_value(cell, fallback_text(payload.full_length))
		stats.fallback_cells += 1
		return payload

	OVERFLOW_STYLE.apply(cell)
	stats.overflow_cells += 1
	logger.debug(
		"long_value_annotated",
		cell=cell.coordinate,
		field=field_name,
		length=payload.full_length,
		content_type=payload.content_type.value,
	)
	return payload


def build_sheet(ws: Worksheet, records: Sequence[Record], fields: List[str], settings: OverflowSettings) -> GridStats:
	"""
	Render the header row and one row per record

	Args:
		ws: Empty worksheet to fill
		records: Records in output order
		fields: Column order shared by the header and every row
		settings: Overflow limits

	Returns:
		GridStats with row/column counts and overflow outcomes
	"""
	stats = GridStats(columns=len(fields))
	write_header_row(ws, fields)

	for row_index, record in enumerate(records, start=2):
		for col_index, field_name in enumerate(fields, start=1):
			cell = ws.cell(row=row_index, column=col_index)
			write_data_cell(cell, field_name, record.get(field_name), settings, stats)
		stats.rows += 1

	return stats

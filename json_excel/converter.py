#!/usr/bin/env python3
"""
JSON response to Excel conversion routine.

load → discover columns → build grid → write → release. Each call owns its own
workbook, so the routine can be called repeatedly (e.g. over many files).
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Union

from .config import ConverterSettings, get_settings
from .grid import build_sheet
from .loader import load_response, require_records
from .logging_config import get_logger
from .schema import discover_fields
from .writer import ExcelWorkbookWriter

logger = get_logger(__name__)


@dataclass(frozen=True)
class ConversionResult:
	json_file: str
	excel_file: str
	record_count: int
	column_count: int
	overflow_cells: int
	fallback_cells: int

	def to_dict(self) -> Dict[str, Any]:
		return asdict(self)


def default_excel_path(json_file_path: str) -> str:
	"""Replace the first 'json' in the input path with 'xlsx'; append '.xlsx' if there is none."""
	derived = json_file_path.replace("json", "xlsx", 1)
	if derived == json_file_path:
		derived = f"{json_file_path}.xlsx"
	return derived


def convert_json_to_excel(
	json_file_path: Union[str, Path],
	excel_file_path: Optional[Union[str, Path]] = None,
	settings: Optional[ConverterSettings] = None,
) -> ConversionResult:
	"""
	Read a JSON response file and write its records to a single-sheet workbook

	Args:
		json_file_path: Input response document
		excel_file_path: Output .xlsx path; derived from the input path when omitted
		settings: Limits and labels; defaults (plus environment) when omitted

	Returns:
		ConversionResult describing what was written

	Raises:
		LoadError: input unreadable or malformed; nothing written
		EmptyDataError: no records; nothing written
		WriteError: output could not be saved
	"""
	settings = settings or get_settings()
	json_path = str(json_file_path)
	excel_path = str(excel_file_path) if excel_file_path else default_excel_path(json_path)

	response = load_response(json_path)
	records = require_records(response)
	fields = discover_fields(records)
	logger.info("conversion_started", json_file=json_path, records=len(records), columns=len(fields))

	with ExcelWorkbookWriter(settings.sheet_name) as writer:
		stats = build_sheet(writer.worksheet, records, fields, settings.overflow)
		writer.save(excel_path)

	result = ConversionResult(
		json_file=json_path,
		excel_file=excel_path,
		record_count=stats.rows,
		column_count=stats.columns,
		overflow_cells=stats.overflow_cells,
		fallback_cells=stats.fallback_cells,
	)
	logger.info("conversion_finished", **result.to_dict())
	return result

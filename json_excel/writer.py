#!/usr/bin/env python3
"""
Workbook ownership and serialisation.

The workbook is created on entry and closed on exit, whatever happened in between.
"""

from __future__ import annotations

import os
import tempfile
from pathlib import Path
from typing import Optional, Union

from openpyxl import Workbook
from openpyxl.worksheet.worksheet import Worksheet

from .errors import WriteError
from .logging_config import get_logger

logger = get_logger(__name__)


class ExcelWorkbookWriter:
	"""Own a single-sheet openpyxl workbook for one conversion."""

	def __init__(self, sheet_name: str):
		self.sheet_name = sheet_name
		self.workbook: Optional[Workbook] = None
		self.worksheet: Optional[Worksheet] = None

	def __enter__(self):
		self.open_workbook()
		return self

	def __exit__(self, exc_type, exc_val, exc_tb):
		self.close_workbook()

	def open_workbook(self) -> Worksheet:
		self.workbook = Workbook()
		self.worksheet = self.workbook.active
		self.worksheet.title = self.sheet_name
		return self.worksheet

	def close_workbook(self) -> None:
		if self.workbook is None:
			return
		try:
			self.workbook.close()
		except Exception as e:
			logger.error("workbook_close_failed", error=str(e))
		finally:
			self.workbook = None
			self.worksheet = None

	def save(self, excel_file_path: Union[str, Path]) -> Path:
		"""
		Write the workbook to disk, replacing any existing file

		Args:
			excel_file_path: Target .xlsx path

		Returns:
			The path written

		Raises:
			WriteError: the workbook is not open or the file could not be written
		"""
		if self.workbook is None:
			raise WriteError("Workbook is not open")
		path = Path(excel_file_path)
		try:
			fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=str(path.parent))
		except OSError as e:
			raise WriteError(f"Cannot write Excel file {path}: {e}") from e
		os.close(fd)
		# the target is only replaced once the whole workbook has been written
		try:
			self.workbook.save(tmp_name)
			os.replace(tmp_name, str(path))
		except Exception as e:
			try:
				os.remove(tmp_name)
			except FileNotFoundError:
				pass
			raise WriteError(f"Cannot write Excel file {path}: {e}") from e
		logger.info("workbook_saved", path=str(path))
		return path

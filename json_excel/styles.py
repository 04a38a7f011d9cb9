#!/usr/bin/env python3
"""Cell style records for the export sheet."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Optional

from openpyxl.cell.cell import Cell
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side

_THIN = Side(style="thin")
THIN_BORDER = Border(left=_THIN, right=_THIN, top=_THIN, bottom=_THIN)

# Light yellow fill marking cells whose full content sits in the comment
HIGHLIGHT_FILL = PatternFill("solid", fgColor="FFFF99")


@dataclass(frozen=True)
class CellStyle:
	"""Immutable bundle of openpyxl style objects applied to one cell."""

	font: Font = field(default_factory=Font)
	fill: Optional[PatternFill] = None
	alignment: Alignment = field(default_factory=Alignment)
	border: Border = field(default_factory=Border)

	def apply(self, cell: Cell) -> None:
		cell.font = self.font
		cell.alignment = self.alignment
		cell.border = self.border
		if self.fill is not None:
			cell.fill = self.fill

	def with_fill(self, fill: PatternFill) -> "CellStyle":
		return replace(self, fill=fill)


HEADER_STYLE = CellStyle(
	font=Font(bold=True, color="FFFFFF", size=12),
	fill=PatternFill("solid", fgColor="000080"),
	alignment=Alignment(horizontal="center", vertical="center"),
	border=THIN_BORDER,
)

DATA_STYLE = CellStyle(
	alignment=Alignment(horizontal="left", vertical="top", wrap_text=True),
	border=THIN_BORDER,
)

OVERFLOW_STYLE = DATA_STYLE.with_fill(HIGHLIGHT_FILL)

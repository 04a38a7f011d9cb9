#!/usr/bin/env python3
"""
Long-text overflow policy.

Excel caps cell text at 32767 characters. Values longer than the configured
limit are replaced in the cell by a short marker string and the leading part of
the full value is carried in a cell comment instead. Everything here is pure:
the grid builder decides how the resulting payload reaches the worksheet.
"""

from __future__ import annotations

import json
import math
import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Union

from .config import OverflowSettings

CellValue = Union[str, float, bool]

SEPARATOR = "-" * 40

_BASE64_RE = re.compile(r"[A-Za-z0-9+/]*={0,2}")


class ContentType(str, Enum):
	"""Detected shape of an overflowing string."""

	JSON = "json"
	XML = "xml"
	BASE64 = "base64"
	TEXT = "text"


# Label used in the comment's trailing content-type line
CONTENT_TYPE_LABELS = {
	ContentType.JSON: "JSON 数据",
	ContentType.XML: "XML 数据",
	ContentType.BASE64: "Base64 编码数据",
	ContentType.TEXT: "文本数据",
}


@dataclass(frozen=True)
class CellPayload:
	"""What the grid builder writes into one cell."""

	value: CellValue
	annotation: Optional[str] = None
	content_type: Optional[ContentType] = None
	full_length: int = 0

	@property
	def overflow(self) -> bool:
		return self.annotation is not None


def is_json_like(text: str) -> bool:
	trimmed = text.strip()
	if not trimmed:
		return False
	return (trimmed.startswith("{") and trimmed.endswith("}")) or (
		trimmed.startswith("[") and trimmed.endswith("]")
	)


def is_xml_like(text: str) -> bool:
	trimmed = text.strip()
	if not trimmed:
		return False
	return trimmed.startswith("<?xml") or (trimmed.startswith("<") and trimmed.endswith(">"))


def is_base64_like(text: str) -> bool:
	if len(text) < 20 or len(text) % 4 != 0:
		return False
	if not _BASE64_RE.fullmatch(text):
		return False
	# a single repeated character is filler, not encoded data
	return len(set(text.rstrip("="))) > 1


def classify_content(text: str) -> ContentType:
	"""First match wins: JSON, XML, Base64, then plain text."""
	if is_json_like(text):
		return ContentType.JSON
	if is_xml_like(text):
		return ContentType.XML
	if is_base64_like(text):
		return ContentType.BASE64
	return ContentType.TEXT


def build_display_text(
	full_text: str, field_name: str, content_type: ContentType, settings: OverflowSettings
) -> str:
	"""
	Build the truncated string shown in the cell itself

	Args:
		full_text: The overflowing value
		field_name: Column the value belongs to
		content_type: Result of classify_content
		settings: Preview lengths

	Returns:
		Marker, total length and (except for Base64) a short preview
	"""
	total_length = len(full_text)
	if content_type == ContentType.JSON:
		preview = full_text[: settings.json_preview_length]
		return f"📊 [JSON数据: {total_length}字符] {preview}..."
	if content_type == ContentType.XML:
		preview = full_text[: settings.xml_preview_length]
		return f"📋 [XML数据: {total_length}字符] {preview}..."
	if content_type == ContentType.BASE64:
		return f"🔒 [Base64数据: {total_length}字符]"
	preview = full_text[: settings.text_preview_length]
	return f"📝 [{field_name}: {total_length}字符] {preview}..."


def build_annotation_text(
	full_text: str, field_name: str, content_type: ContentType, settings: OverflowSettings
) -> str:
	"""Comment body: header lines, framed preview, omitted-count note, content type."""
	total_length = len(full_text)
	preview_length = settings.comment_preview_length
	lines = [
		f"字段: {field_name}",
		f"总长度: {total_length} 字符",
		"预览内容:",
		SEPARATOR,
		full_text[:preview_length],
		SEPARATOR,
	]
	if total_length > preview_length:
		lines.append(f"... [剩余 {total_length - preview_length} 字符未显示]")
	lines.append("")
	lines.append(f"📌 内容类型: {CONTENT_TYPE_LABELS[content_type]}")
	return "\n".join(lines)


def fallback_text(full_length: int) -> str:
	"""Cell text used when the comment could not be attached."""
	return f"[内容过长: {full_length}字符]"


def stringify(value: Any) -> str:
	if isinstance(value, (dict, list)):
		return json.dumps(value, ensure_ascii=False)
	return str(value)


def format_cell_value(field_name: str, value: Any, settings: OverflowSettings) -> CellPayload:
	"""
	Decide what a raw record value becomes in the worksheet

	Args:
		field_name: Column name, used in plain-text markers and comments
		value: Raw JSON value (None, str, int, float, bool, dict or list)
		settings: Length limits and preview sizes

	Returns:
		CellPayload with the literal cell value and, on overflow, the comment text
	"""
	if value is None:
		return CellPayload("")
	# bool before numbers: True is an int in Python
	if isinstance(value, bool):
		return CellPayload(value)
	if isinstance(value, float) and not math.isfinite(value):
		# NaN/Infinity have no xlsx number form; keep their JSON spelling
		return CellPayload(json.dumps(value))
	if isinstance(value, (int, float)):
		try:
			return CellPayload(float(value))
		except OverflowError:
			# integer beyond double range; keep its digits as text
			pass

	text = value if isinstance(value, str) else stringify(value)
	total_length = len(text)
	if total_length <= settings.max_cell_length:
		return CellPayload(text, full_length=total_length)

	content_type = classify_content(text)
	return CellPayload(
		build_display_text(text, field_name, content_type, settings),
		annotation=build_annotation_text(text, field_name, content_type, settings),
		content_type=content_type,
		full_length=total_length,
	)

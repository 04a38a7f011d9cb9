#!/usr/bin/env python3
"""
Converter settings using Pydantic Settings.

Every value can be overridden from the environment with the ``JSON_EXCEL_``
prefix (nested groups use ``__``, e.g. ``JSON_EXCEL_OVERFLOW__MAX_CELL_LENGTH``)
and again from the command line.
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Excel refuses cell text longer than 32767 characters
EXCEL_CELL_CHAR_LIMIT = 32767


class LogLevel(str, Enum):
	"""Logging level enumeration."""

	DEBUG = "DEBUG"
	INFO = "INFO"
	WARNING = "WARNING"
	ERROR = "ERROR"


class LogFormat(str, Enum):
	"""Log output format enumeration."""

	JSON = "json"
	CONSOLE = "console"


class OverflowSettings(BaseSettings):
	"""Limits used when a value is too long for a single cell."""

	model_config = SettingsConfigDict(
		env_prefix="JSON_EXCEL_OVERFLOW_",
		extra="ignore",
	)

	max_cell_length: Annotated[int, Field(ge=1, le=EXCEL_CELL_CHAR_LIMIT)] = Field(
		default=32700,
		description="Longest string stored verbatim in a cell",
	)
	comment_preview_length: Annotated[int, Field(ge=1, le=30000)] = Field(
		default=1000,
		description="Characters of the full value copied into the cell comment",
	)
	json_preview_length: Annotated[int, Field(ge=0, le=30000)] = Field(
		default=200,
		description="Characters shown in the cell for JSON-like values",
	)
	xml_preview_length: Annotated[int, Field(ge=0, le=30000)] = Field(
		default=200,
		description="Characters shown in the cell for XML-like values",
	)
	text_preview_length: Annotated[int, Field(ge=0, le=30000)] = Field(
		default=100,
		description="Characters shown in the cell for plain text values",
	)
	comment_author: str = Field(
		default="数据导出系统",
		description="Author recorded on every cell comment",
	)
	comment_width: Annotated[int, Field(ge=20, le=2000)] = Field(
		default=216,
		description="Comment box width in points (about three columns)",
	)
	comment_height: Annotated[int, Field(ge=20, le=2000)] = Field(
		default=100,
		description="Comment box height in points (about five rows)",
	)


class LoggingSettings(BaseSettings):
	"""Logging configuration settings."""

	model_config = SettingsConfigDict(
		env_prefix="JSON_EXCEL_LOG_",
		extra="ignore",
	)

	level: LogLevel = Field(default=LogLevel.INFO, description="Minimum log level")
	format: LogFormat = Field(default=LogFormat.CONSOLE, description="Log renderer")


class ConverterSettings(BaseSettings):
	"""Top-level settings for a conversion run."""

	model_config = SettingsConfigDict(
		env_prefix="JSON_EXCEL_",
		env_nested_delimiter="__",
		extra="ignore",
	)

	sheet_name: Annotated[str, Field(min_length=1, max_length=31)] = Field(
		default="数据导出",
		description="Title of the single output worksheet",
	)
	overflow: OverflowSettings = Field(default_factory=OverflowSettings)
	logging: LoggingSettings = Field(default_factory=LoggingSettings)


def get_settings(**overrides) -> ConverterSettings:
	"""
	Build a fresh settings instance.

	Args:
		**overrides: Top-level field values taking precedence over the environment.

	Returns:
		ConverterSettings: A new instance; nothing is cached between calls.
	"""
	return ConverterSettings(**overrides)

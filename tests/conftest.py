"""
Pytest configuration and shared fixtures.
"""

import json
import logging
import os
from pathlib import Path
from typing import Any, Callable, Dict, List

import pytest
import structlog

from json_excel.config import ConverterSettings, OverflowSettings


def make_response(records: Any) -> Dict[str, Any]:
	"""Wrap records in the paginated envelope the API returns."""
	return {
		"code": 0,
		"msg": "ok",
		"requestId": "r1",
		"data": {
			"page": 1,
			"limit": 10,
			"order": "",
			"field": "",
			"total": len(records) if isinstance(records, list) else 0,
			"data": records,
		},
	}


@pytest.fixture
def write_json(tmp_path) -> Callable[[Any, str], Path]:
	"""Write a JSON document into tmp_path and return its path."""

	def _write(document: Any, name: str = "records.json") -> Path:
		path = tmp_path / name
		path.write_text(json.dumps(document, ensure_ascii=False), encoding="utf-8")
		return path

	return _write


@pytest.fixture
def write_records(write_json) -> Callable[[List[Dict[str, Any]], str], Path]:
	def _write(records: List[Dict[str, Any]], name: str = "records.json") -> Path:
		return write_json(make_response(records), name)

	return _write


@pytest.fixture
def overflow_settings() -> OverflowSettings:
	return OverflowSettings()


@pytest.fixture
def settings() -> ConverterSettings:
	return ConverterSettings()


@pytest.fixture(autouse=True)
def isolate_environment(monkeypatch):
	"""Keep JSON_EXCEL_* variables from the host out of every test."""
	for key in list(os.environ):
		if key.startswith("JSON_EXCEL_"):
			monkeypatch.delenv(key, raising=False)


@pytest.fixture(autouse=True)
def reset_logging():
	"""Undo configure_logging() calls made by CLI tests."""
	root_logger = logging.getLogger()
	handlers = root_logger.handlers[:]
	level = root_logger.level
	yield
	structlog.reset_defaults()
	for handler in root_logger.handlers[:]:
		root_logger.removeHandler(handler)
	for handler in handlers:
		root_logger.addHandler(handler)
	root_logger.setLevel(level)

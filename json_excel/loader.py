#!/usr/bin/env python3
import json
from pathlib import Path
from typing import Any, List, Union

from pydantic import ValidationError

from .errors import EmptyDataError, LoadError
from .logging_config import get_logger
from .models import ApiResponse, Record

logger = get_logger(__name__)


def load_json(path: Path) -> Any:
	try:
		with path.open("r", encoding="utf-8") as f:
			return json.load(f)
	except FileNotFoundError as e:
		raise LoadError(f"JSON file not found: {path}") from e
	except (OSError, UnicodeDecodeError) as e:
		raise LoadError(f"Cannot read JSON file {path}: {e}") from e
	except json.JSONDecodeError as e:
		raise LoadError(f"Malformed JSON in {path}: {e}") from e


def load_response(json_file_path: Union[str, Path]) -> ApiResponse:
	"""
	Read a JSON file and validate it into an ApiResponse

	Args:
		json_file_path: Path to the response document

	Returns:
		The parsed response

	Raises:
		LoadError: file unreadable, malformed JSON, or wrong shape
	"""
	path = Path(json_file_path)
	raw = load_json(path)
	try:
		response = ApiResponse.model_validate(raw)
	except ValidationError as e:
		raise LoadError(f"Unexpected response shape in {path}: {e.error_count()} problem(s)\n{e}") from e
	logger.debug("response_loaded", path=str(path), code=response.code, request_id=response.request_id)
	return response


def require_records(response: ApiResponse) -> List[Record]:
	"""Return the record list, or raise EmptyDataError when there is nothing to export."""
	if response.data is None:
		raise EmptyDataError("JSON data is malformed or empty: missing 'data' object")
	records = response.records
	if records is None:
		raise EmptyDataError("JSON data is malformed or empty: missing record list")
	if not records:
		raise EmptyDataError("Record list is empty")
	return records

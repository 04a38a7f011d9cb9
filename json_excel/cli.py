#!/usr/bin/env python3
"""
Command-line interface for the json_excel package.
Usage:
  json-excel convert <json_file> [excel_file] [options]
  python -m json_excel.cli convert <json_file> [excel_file] [options]
"""

import argparse
import json
import sys
from typing import Any, Dict, List, Optional

from .config import ConverterSettings, LogFormat, LogLevel, get_settings
from .converter import convert_json_to_excel
from .errors import ConversionError
from .logging_config import configure_logging, get_logger

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
	parser = argparse.ArgumentParser(prog='json-excel', description='Convert a paginated JSON API response into an Excel workbook')
	subparsers = parser.add_subparsers(dest='command', required=True)

	convert = subparsers.add_parser('convert', help='Convert a JSON response file to .xlsx')
	convert.add_argument('json_file', help='Path to the JSON response file')
	convert.add_argument('excel_file', nargs='?', help="Output .xlsx path (default: input path with 'json' replaced by 'xlsx')")
	convert.add_argument('--sheet-name', help='Worksheet title')
	convert.add_argument('--max-cell-length', type=int, help='Longest string stored verbatim in a cell')
	convert.add_argument('--comment-preview-length', type=int, help='Characters of an overflowing value copied into its comment')
	convert.add_argument('--log-level', choices=[level.value for level in LogLevel], help='Minimum log level')
	convert.add_argument('--log-format', choices=[fmt.value for fmt in LogFormat], help='Log output format')
	convert.add_argument('--report', help='Also write a JSON summary of the conversion to this path')
	return parser


def settings_from_args(args: argparse.Namespace) -> ConverterSettings:
	"""Environment-derived settings with command-line flags layered on top."""
	settings = get_settings()
	overflow: Dict[str, Any] = {}
	if args.max_cell_length is not None:
		overflow['max_cell_length'] = args.max_cell_length
	if args.comment_preview_length is not None:
		overflow['comment_preview_length'] = args.comment_preview_length
	log: Dict[str, Any] = {}
	if args.log_level:
		log['level'] = LogLevel(args.log_level)
	if args.log_format:
		log['format'] = LogFormat(args.log_format)

	# round-trip through validation so flag values get the same bounds as env values
	data = settings.model_dump()
	data['overflow'].update(overflow)
	data['logging'].update(log)
	if args.sheet_name:
		data['sheet_name'] = args.sheet_name
	return ConverterSettings.model_validate(data)


def export_to_json(data: Dict[str, Any], output_file: str) -> bool:
	try:
		with open(output_file, 'w', encoding='utf-8') as f:
			json.dump(data, f, indent=2, ensure_ascii=False, default=str)
		return True
	except OSError as e:
		print(f"Error writing report: {e}", file=sys.stderr)
		return False


def main(argv: Optional[List[str]] = None) -> int:
	parser = build_parser()
	args = parser.parse_args(argv)

	try:
		settings = settings_from_args(args)
	except ValueError as e:
		print(f"Invalid settings: {e}", file=sys.stderr)
		return 2
	configure_logging(settings.logging)

	try:
		result = convert_json_to_excel(args.json_file, args.excel_file, settings)
	except ConversionError as e:
		logger.error("conversion_failed", json_file=args.json_file, error_type=type(e).__name__)
		print(f"Conversion failed: {e}", file=sys.stderr)
		return e.exit_code

	print(f"Excel file generated: {result.excel_file}")
	print(f"Records processed: {result.record_count}")
	if result.overflow_cells or result.fallback_cells:
		print(f"Long values moved to comments: {result.overflow_cells}, placeholders: {result.fallback_cells}")

	if args.report and not export_to_json(result.to_dict(), args.report):
		return 1
	return 0


if __name__ == "__main__":
	sys.exit(main())

#!/usr/bin/env python3
"""
Structured logging configuration using structlog.

Log events go to stderr so that stdout stays free for the conversion summary.
"""

from __future__ import annotations

import logging
import sys
from typing import List, Optional

import structlog
from structlog.types import Processor

from .config import LogFormat, LoggingSettings


def get_processors(log_format: LogFormat) -> List[Processor]:
	"""
	Get the structlog processor chain for the given output format.

	Args:
		log_format: Console or JSON rendering.

	Returns:
		List of structlog processors ending with a renderer.
	"""
	processors: List[Processor] = [
		structlog.contextvars.merge_contextvars,
		structlog.processors.add_log_level,
		structlog.processors.TimeStamper(fmt="iso", utc=True),
		structlog.processors.StackInfoRenderer(),
		structlog.processors.format_exc_info,
	]
	if log_format == LogFormat.JSON:
		processors.append(structlog.processors.JSONRenderer(ensure_ascii=False))
	else:
		processors.append(structlog.dev.ConsoleRenderer(colors=False))
	return processors


def configure_logging(settings: Optional[LoggingSettings] = None) -> None:
	"""Configure structlog and the stdlib root logger from settings."""
	settings = settings or LoggingSettings()
	log_level = getattr(logging, settings.level.value)

	structlog.configure(
		processors=get_processors(settings.format),
		wrapper_class=structlog.make_filtering_bound_logger(log_level),
		context_class=dict,
		logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
		cache_logger_on_first_use=False,
	)

	# openpyxl and friends log through the stdlib
	root_logger = logging.getLogger()
	root_logger.setLevel(log_level)
	for handler in root_logger.handlers[:]:
		root_logger.removeHandler(handler)
	handler = logging.StreamHandler(sys.stderr)
	handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
	root_logger.addHandler(handler)


def get_logger(name: str):
	return structlog.get_logger(name)

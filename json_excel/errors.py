#!/usr/bin/env python3
"""Errors raised while converting a JSON response into a workbook."""


class ConversionError(Exception):
	"""Base class for conversion failures reported to the user."""

	exit_code = 1


class LoadError(ConversionError):
	"""Input file could not be read or parsed into the expected shape."""

	exit_code = 1


class EmptyDataError(ConversionError):
	"""Response parsed but carries no records to export."""

	exit_code = 3


class AnnotationAttachError(ConversionError):
	"""A comment could not be attached to a cell. Recovered per cell."""

	def __init__(self, message: str, coordinate: str, field_name: str):
		super().__init__(message)
		self.coordinate = coordinate
		self.field_name = field_name


class WriteError(ConversionError):
	"""Workbook could not be saved to the target path."""

	exit_code = 4

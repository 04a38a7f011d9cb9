#!/usr/bin/env python3
from typing import Dict, Iterable, List

from .models import Record


def discover_fields(records: Iterable[Record]) -> List[str]:
	"""Union of field names across records, in first-seen order."""
	seen: Dict[str, None] = {}
	for record in records:
		for name in record:
			seen.setdefault(name, None)
	return list(seen)

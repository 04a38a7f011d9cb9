#!/usr/bin/env python3
"""
Typed view over the paginated API response.

Wire shape::

	{"code": 0, "msg": "ok", "requestId": "...",
	 "data": {"page": 1, "limit": 10, "order": "", "field": "", "total": 1,
			  "data": [{...}, ...]}}

Unknown keys are ignored and every scalar is optional so that loosely produced
responses still load.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

# One JSON object from the record list; becomes one worksheet row
Record = Dict[str, Any]


class ResponseData(BaseModel):
	"""Pagination metadata plus the record list (wire key ``data``)."""

	model_config = ConfigDict(extra="ignore", populate_by_name=True, frozen=True)

	page: Optional[int] = None
	limit: Optional[int] = None
	total: Optional[int] = None
	order: Optional[str] = None
	field: Optional[str] = None
	records: Optional[List[Record]] = Field(default=None, alias="data")


class ApiResponse(BaseModel):
	"""Envelope returned by the list endpoint."""

	model_config = ConfigDict(extra="ignore", populate_by_name=True, frozen=True)

	code: Optional[int] = None
	message: Optional[str] = Field(default=None, alias="msg")
	request_id: Optional[str] = Field(default=None, alias="requestId")
	data: Optional[ResponseData] = None

	@property
	def records(self) -> Optional[List[Record]]:
		if self.data is None:
			return None
		return self.data.records

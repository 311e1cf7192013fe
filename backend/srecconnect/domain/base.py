"""Helpers shared by domain models and wire schemas."""

from __future__ import annotations

from datetime import datetime, timezone
from uuid import uuid4

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


def utcnow() -> datetime:
	return datetime.now(timezone.utc)


def new_id() -> str:
	return str(uuid4())


class CamelModel(BaseModel):
	"""Wire model: snake_case in Python, camelCase on the wire."""

	model_config = ConfigDict(
		alias_generator=to_camel,
		populate_by_name=True,
		from_attributes=True,
	)

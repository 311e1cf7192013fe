"""Domain models for users and roles."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum
from typing import Optional

from srecconnect.domain.base import utcnow


class Role(str, Enum):
	STUDENT = "Student"
	FACULTY = "Faculty"
	ORGANIZER = "Organizer"

	@property
	def can_create_events(self) -> bool:
		return self in (Role.FACULTY, Role.ORGANIZER)


@dataclass
class User:
	id: str
	name: str
	email: str
	password_hash: str
	role: Role = Role.STUDENT
	clubs: list[str] = field(default_factory=list)
	avatar: Optional[str] = None
	is_verified: bool = False
	created_at: datetime = field(default_factory=utcnow)

	def copy(self) -> "User":
		return replace(self, clubs=list(self.clubs))

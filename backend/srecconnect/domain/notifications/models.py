"""Domain models for user notifications."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum
from typing import Optional

from srecconnect.domain.base import utcnow


class NotificationType(str, Enum):
	EVENT = "event"
	CLUB = "club"
	GENERAL = "general"


@dataclass
class Notification:
	id: str
	# None marks a broadcast placeholder row.
	user_id: Optional[str]
	title: str
	message: str
	type: NotificationType
	read: bool = False
	event_id: Optional[str] = None
	created_at: datetime = field(default_factory=utcnow)

	def copy(self) -> "Notification":
		return replace(self)


@dataclass(frozen=True)
class NotificationDraft:
	"""What a domain event wants to tell a recipient, before it is persisted."""

	title: str
	message: str
	type: NotificationType = NotificationType.GENERAL
	event_id: Optional[str] = None

"""Pydantic schemas for notifications."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Optional

from srecconnect.domain.base import CamelModel
from srecconnect.domain.notifications.models import Notification, NotificationType


class NotificationOut(CamelModel):
	id: str
	user_id: Optional[str] = None
	title: str
	message: str
	type: NotificationType
	read: bool
	event_id: Optional[str] = None
	created_at: datetime


class UnreadCount(CamelModel):
	count: int


def push_payload(notification: Notification) -> Dict[str, Any]:
	"""Wire frame pushed over the live connection."""
	data = NotificationOut.model_validate(notification).model_dump(by_alias=True, mode="json")
	return {"type": "notification", "data": data}

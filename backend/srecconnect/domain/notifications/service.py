"""Read-side operations on a user's notifications."""

from __future__ import annotations

from typing import List, Optional

from srecconnect.domain.notifications.models import Notification
from srecconnect.domain.store import EntityStore


class NotificationService:
	def __init__(self, store: EntityStore, *, history_limit: Optional[int] = None) -> None:
		self._store = store
		self._history_limit = history_limit

	def list_for_user(self, user_id: str) -> List[Notification]:
		return self._store.list_notifications(user_id, limit=self._history_limit)

	def mark_read(self, user_id: str, notification_id: str) -> Notification:
		return self._store.mark_read(notification_id, user_id=user_id)

	def mark_all_read(self, user_id: str) -> int:
		return self._store.mark_all_read(user_id)

	def unread_count(self, user_id: str) -> int:
		return self._store.unread_count(user_id)

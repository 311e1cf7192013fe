"""Turns domain events into persisted, pushed notifications.

Ordering per notification is fixed: the row is written first, then a push is
attempted. A failed write aborts with PersistenceFailed; a failed push is
logged and otherwise ignored.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional

from srecconnect.domain.clubs.models import Club
from srecconnect.domain.errors import DomainError, PersistenceFailed
from srecconnect.domain.events.models import Event, EventType, RSVPKind
from srecconnect.domain.identity.models import User
from srecconnect.domain.notifications.models import Notification, NotificationDraft, NotificationType
from srecconnect.domain.notifications.registry import LiveConnectionRegistry
from srecconnect.domain.notifications.schemas import push_payload
from srecconnect.domain.store import EntityStore
from srecconnect.obs import metrics as obs_metrics

logger = logging.getLogger(__name__)


class NotificationDispatcher:
	def __init__(self, store: EntityStore, registry: LiveConnectionRegistry) -> None:
		self._store = store
		self._registry = registry

	async def notify(self, recipient_id: Optional[str], draft: NotificationDraft) -> Notification:
		try:
			notification = self._store.create_notification(
				user_id=recipient_id,
				title=draft.title,
				message=draft.message,
				type=draft.type,
				event_id=draft.event_id,
			)
		except DomainError:
			raise
		except Exception as exc:
			logger.exception("notification_persist_failed", extra={"recipient": recipient_id})
			raise PersistenceFailed() from exc
		obs_metrics.notification_persisted(notification.type.value)
		await self._registry.send_to(recipient_id, push_payload(notification))
		return notification

	async def notify_many(self, recipient_ids: Iterable[str], draft: NotificationDraft) -> List[Notification]:
		sent: List[Notification] = []
		seen: set[str] = set()
		for recipient_id in recipient_ids:
			if recipient_id in seen:
				continue
			seen.add(recipient_id)
			sent.append(await self.notify(recipient_id, draft))
		return sent

	# -- triggers ------------------------------------------------------------

	def event_audience(self, event: Event) -> List[str]:
		"""Everyone who should hear about a new event, organizer excluded."""
		if event.type is EventType.CLUB and event.club:
			members = self._store.club_members(event.club)
		else:
			members = [u.id for u in self._store.list_users(verified_only=True)]
		return [uid for uid in members if uid != event.organizer_id]

	async def event_created(self, event: Event) -> List[Notification]:
		sent = [
			await self.notify(
				event.organizer_id,
				NotificationDraft(
					title="Event Created",
					message=f"{event.title} has been scheduled",
					type=NotificationType.EVENT,
					event_id=event.id,
				),
			)
		]
		if event.type is EventType.CLUB:
			title = f"New event in {event.club}"
		else:
			title = "New college event"
		audience = self.event_audience(event)
		sent.extend(
			await self.notify_many(
				audience,
				NotificationDraft(
					title=title,
					message=f"{event.title} at {event.venue} by {event.organizer_name}",
					type=NotificationType.EVENT,
					event_id=event.id,
				),
			)
		)
		logger.info("event_fanout", extra={"event_id": event.id, "recipients": len(sent)})
		return sent

	async def club_joined(self, user: User, club: Club) -> Optional[Notification]:
		if not club.admin_id or club.admin_id == user.id:
			return None
		return await self.notify(
			club.admin_id,
			NotificationDraft(
				title=f"New member in {club.name}",
				message=f"{user.name} joined {club.name}",
				type=NotificationType.CLUB,
			),
		)

	async def rsvp_changed(self, user: User, event: Event, kind: RSVPKind) -> Optional[Notification]:
		if kind is not RSVPKind.ATTENDING or event.organizer_id == user.id:
			return None
		return await self.notify(
			event.organizer_id,
			NotificationDraft(
				title="New attendee",
				message=f"{user.name} is attending {event.title}",
				type=NotificationType.EVENT,
				event_id=event.id,
			),
		)

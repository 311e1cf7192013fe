"""Service for events and RSVPs."""

from __future__ import annotations

import logging
from typing import List, Optional

from srecconnect.domain.errors import Forbidden, NotFound
from srecconnect.domain.events.models import Event, EventSummary, RSVPKind
from srecconnect.domain.events.schemas import EventCreateRequest
from srecconnect.domain.identity.models import User
from srecconnect.domain.notifications.dispatcher import NotificationDispatcher
from srecconnect.domain.store import EntityStore
from srecconnect.obs import metrics as obs_metrics

logger = logging.getLogger(__name__)


class EventService:
	def __init__(self, store: EntityStore, dispatcher: NotificationDispatcher) -> None:
		self._store = store
		self._dispatcher = dispatcher

	def list_events(self) -> List[EventSummary]:
		return self._store.list_events_with_counts()

	def get_event(self, event_id: str) -> EventSummary:
		return self._store.get_event_with_counts(event_id)

	async def create_event(self, organizer: User, payload: EventCreateRequest) -> Event:
		"""Create an event as ``organizer`` and fan the news out."""
		if not organizer.role.can_create_events:
			raise Forbidden("Not authorized to create events", reason="insufficient_role")
		event = self._store.create_event(
			title=payload.title,
			description=payload.description,
			date=payload.date,
			venue=payload.venue,
			club=payload.club or None,
			type=payload.type,
			image=payload.image,
			organizer_id=organizer.id,
			organizer_name=organizer.name,
		)
		obs_metrics.inc_event_created(event.type.value)
		logger.info("event_created", extra={"event_id": event.id, "event_type": event.type.value})
		await self._dispatcher.event_created(event)
		return event

	async def rsvp(self, user: User, event_id: str, kind: RSVPKind) -> EventSummary:
		previous = self._store.rsvp(user.id, event_id, kind)
		obs_metrics.inc_rsvp(kind.value)
		summary = self._store.get_event_with_counts(event_id)
		if kind is RSVPKind.ATTENDING and previous is not RSVPKind.ATTENDING:
			await self._dispatcher.rsvp_changed(user, summary.event, kind)
		return summary

	def unrsvp(self, user_id: str, event_id: str) -> Optional[RSVPKind]:
		previous = self._store.unrsvp(user_id, event_id)
		obs_metrics.inc_rsvp("cleared")
		return previous

	def events_by_club(self, club_name: str) -> List[Event]:
		if self._store.get_club_by_name(club_name) is None:
			raise NotFound("Club not found")
		return self._store.list_events_by_club(club_name)

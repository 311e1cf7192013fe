"""Domain models for events and RSVPs."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum
from typing import Optional

from srecconnect.domain.base import utcnow


class EventType(str, Enum):
	CLUB = "club"
	COLLEGE = "college"


class RSVPKind(str, Enum):
	ATTENDING = "attending"
	INTERESTED = "interested"


@dataclass
class Event:
	id: str
	title: str
	description: str
	date: datetime
	venue: str
	organizer_id: str
	# Captured at creation time, not kept in sync with the organizer's profile.
	organizer_name: str
	type: EventType = EventType.COLLEGE
	club: Optional[str] = None
	image: Optional[str] = None
	attendees: list[str] = field(default_factory=list)
	interested: list[str] = field(default_factory=list)
	created_at: datetime = field(default_factory=utcnow)

	def copy(self) -> "Event":
		return replace(self, attendees=list(self.attendees), interested=list(self.interested))

	def rsvp_of(self, user_id: str) -> Optional[RSVPKind]:
		if user_id in self.attendees:
			return RSVPKind.ATTENDING
		if user_id in self.interested:
			return RSVPKind.INTERESTED
		return None


@dataclass
class EventSummary:
	"""An event snapshot with counts derived from its RSVP sets at read time."""

	event: Event
	attendee_count: int
	interested_count: int

	@classmethod
	def of(cls, event: Event) -> "EventSummary":
		return cls(
			event=event,
			attendee_count=len(event.attendees),
			interested_count=len(event.interested),
		)

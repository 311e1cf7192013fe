"""Pydantic schemas for events and RSVPs."""

from __future__ import annotations

from datetime import datetime
from typing import Annotated, List, Optional

from pydantic import Field

from srecconnect.domain.base import CamelModel
from srecconnect.domain.events.models import EventSummary, EventType, RSVPKind


class EventCreateRequest(CamelModel):
	title: Annotated[str, Field(min_length=1, max_length=200)]
	description: Annotated[str, Field(min_length=1, max_length=5000)]
	date: datetime
	venue: Annotated[str, Field(min_length=1, max_length=200)]
	club: Optional[str] = None
	type: EventType = EventType.COLLEGE
	image: Optional[str] = None


class RSVPRequest(CamelModel):
	type: RSVPKind


class EventOut(CamelModel):
	id: str
	title: str
	description: str
	date: datetime
	venue: str
	club: Optional[str] = None
	type: EventType
	organizer_id: str
	organizer_name: str
	image: Optional[str] = None
	attendees: List[str]
	interested: List[str]
	created_at: datetime


class EventWithDetails(EventOut):
	attendee_count: int
	interested_count: int
	is_attending: bool = False
	is_interested: bool = False

	@classmethod
	def for_viewer(cls, summary: EventSummary, viewer_id: str) -> "EventWithDetails":
		event = summary.event
		base = EventOut.model_validate(event).model_dump()
		return cls(
			**base,
			attendee_count=summary.attendee_count,
			interested_count=summary.interested_count,
			is_attending=viewer_id in event.attendees,
			is_interested=viewer_id in event.interested,
		)


class RSVPResponse(CamelModel):
	message: str
	event: EventWithDetails

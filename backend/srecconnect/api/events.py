"""FastAPI routes for events and RSVPs."""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, status

from srecconnect.domain.container import Container
from srecconnect.domain.events import schemas
from srecconnect.domain.identity.models import User
from srecconnect.domain.identity.schemas import MessageResponse
from srecconnect.infra.auth import get_container, get_current_user, require_event_creator

router = APIRouter(prefix="/events", tags=["events"])


@router.get("", response_model=List[schemas.EventWithDetails])
async def list_events(
	user: User = Depends(get_current_user),
	container: Container = Depends(get_container),
) -> List[schemas.EventWithDetails]:
	return [schemas.EventWithDetails.for_viewer(s, user.id) for s in container.events.list_events()]


@router.post("", response_model=schemas.EventOut, status_code=status.HTTP_201_CREATED)
async def create_event(
	payload: schemas.EventCreateRequest,
	user: User = Depends(require_event_creator),
	container: Container = Depends(get_container),
) -> schemas.EventOut:
	event = await container.events.create_event(user, payload)
	return schemas.EventOut.model_validate(event)


@router.get("/{event_id}", response_model=schemas.EventWithDetails)
async def get_event(
	event_id: str,
	user: User = Depends(get_current_user),
	container: Container = Depends(get_container),
) -> schemas.EventWithDetails:
	return schemas.EventWithDetails.for_viewer(container.events.get_event(event_id), user.id)


@router.post("/{event_id}/rsvp", response_model=schemas.RSVPResponse)
async def rsvp(
	event_id: str,
	payload: schemas.RSVPRequest,
	user: User = Depends(get_current_user),
	container: Container = Depends(get_container),
) -> schemas.RSVPResponse:
	summary = await container.events.rsvp(user, event_id, payload.type)
	return schemas.RSVPResponse(
		message="RSVP updated successfully",
		event=schemas.EventWithDetails.for_viewer(summary, user.id),
	)


@router.delete("/{event_id}/rsvp", response_model=MessageResponse)
async def remove_rsvp(
	event_id: str,
	user: User = Depends(get_current_user),
	container: Container = Depends(get_container),
) -> MessageResponse:
	container.events.unrsvp(user.id, event_id)
	return MessageResponse(message="RSVP removed successfully")

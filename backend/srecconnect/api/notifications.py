"""FastAPI routes for a user's notifications."""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends

from srecconnect.domain.container import Container
from srecconnect.domain.identity.models import User
from srecconnect.domain.identity.schemas import MessageResponse
from srecconnect.domain.notifications import schemas
from srecconnect.infra.auth import get_container, get_current_user

router = APIRouter(prefix="/notifications", tags=["notifications"])


@router.get("", response_model=List[schemas.NotificationOut])
async def list_notifications(
	user: User = Depends(get_current_user),
	container: Container = Depends(get_container),
) -> List[schemas.NotificationOut]:
	return [schemas.NotificationOut.model_validate(n) for n in container.notifications.list_for_user(user.id)]


@router.get("/unread-count", response_model=schemas.UnreadCount)
async def unread_count(
	user: User = Depends(get_current_user),
	container: Container = Depends(get_container),
) -> schemas.UnreadCount:
	return schemas.UnreadCount(count=container.notifications.unread_count(user.id))


@router.post("/read-all", response_model=MessageResponse)
async def mark_all_read(
	user: User = Depends(get_current_user),
	container: Container = Depends(get_container),
) -> MessageResponse:
	container.notifications.mark_all_read(user.id)
	return MessageResponse(message="All notifications marked as read")


@router.post("/{notification_id}/read", response_model=MessageResponse)
async def mark_read(
	notification_id: str,
	user: User = Depends(get_current_user),
	container: Container = Depends(get_container),
) -> MessageResponse:
	container.notifications.mark_read(user.id, notification_id)
	return MessageResponse(message="Notification marked as read")

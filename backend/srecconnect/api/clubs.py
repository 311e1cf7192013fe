"""FastAPI routes for clubs."""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, status

from srecconnect.domain.clubs import schemas
from srecconnect.domain.container import Container
from srecconnect.domain.events.schemas import EventOut
from srecconnect.domain.identity.models import User
from srecconnect.domain.identity.schemas import MessageResponse
from srecconnect.infra.auth import get_container, get_current_user, require_club_creator

router = APIRouter(prefix="/clubs", tags=["clubs"])


@router.get("", response_model=List[schemas.ClubResponse])
async def list_clubs_endpoint(
    user: User = Depends(get_current_user),
    container: Container = Depends(get_container),
) -> List[schemas.ClubResponse]:
    return [schemas.ClubResponse.model_validate(c) for c in container.clubs.list_clubs()]


@router.post("", response_model=schemas.ClubResponse, status_code=status.HTTP_201_CREATED)
async def create_club_endpoint(
    payload: schemas.ClubCreateRequest,
    user: User = Depends(require_club_creator),
    container: Container = Depends(get_container),
) -> schemas.ClubResponse:
    return schemas.ClubResponse.model_validate(container.clubs.create_club(user, payload))


@router.get("/{name}", response_model=schemas.ClubResponse)
async def get_club_endpoint(
    name: str,
    user: User = Depends(get_current_user),
    container: Container = Depends(get_container),
) -> schemas.ClubResponse:
    return schemas.ClubResponse.model_validate(container.clubs.get_club(name))


@router.get("/{name}/events", response_model=List[EventOut])
async def club_events_endpoint(
    name: str,
    user: User = Depends(get_current_user),
    container: Container = Depends(get_container),
) -> List[EventOut]:
    return [EventOut.model_validate(e) for e in container.events.events_by_club(name)]


@router.post("/{name}/join", response_model=MessageResponse)
async def join_club_endpoint(
    name: str,
    user: User = Depends(get_current_user),
    container: Container = Depends(get_container),
) -> MessageResponse:
    await container.clubs.join_club(user, name)
    return MessageResponse(message="Successfully joined club")


@router.post("/{name}/leave", response_model=MessageResponse)
async def leave_club_endpoint(
    name: str,
    user: User = Depends(get_current_user),
    container: Container = Depends(get_container),
) -> MessageResponse:
    container.clubs.leave_club(user, name)
    return MessageResponse(message="Successfully left club")

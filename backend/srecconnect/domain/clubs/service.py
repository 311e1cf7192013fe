"""Service for Clubs."""

from __future__ import annotations

import logging
from typing import List

from srecconnect.domain.clubs.models import Club
from srecconnect.domain.clubs.schemas import ClubCreateRequest
from srecconnect.domain.errors import Forbidden, NotFound
from srecconnect.domain.identity.models import User
from srecconnect.domain.notifications.dispatcher import NotificationDispatcher
from srecconnect.domain.store import EntityStore
from srecconnect.obs import metrics as obs_metrics

logger = logging.getLogger(__name__)


class ClubService:
    def __init__(self, store: EntityStore, dispatcher: NotificationDispatcher) -> None:
        self._store = store
        self._dispatcher = dispatcher

    def list_clubs(self) -> List[Club]:
        return self._store.list_clubs()

    def get_club(self, name: str) -> Club:
        club = self._store.get_club_by_name(name)
        if club is None:
            raise NotFound("Club not found")
        return club

    def create_club(self, user: User, data: ClubCreateRequest) -> Club:
        """Create a club administered by ``user`` (Faculty or Organizer only)."""
        if not user.role.can_create_events:
            raise Forbidden("Not authorized to create clubs", reason="insufficient_role")
        club = self._store.create_club(
            name=data.name.strip(),
            description=data.description,
            category=data.category,
            admin_id=user.id,
        )
        logger.info("club_created", extra={"club_id": club.id})
        return club

    async def join_club(self, user: User, name: str) -> bool:
        """Join a club. Joining a club twice is a no-op; returns True on a new join."""
        joined = self._store.join_club(user.id, name)
        if joined:
            obs_metrics.inc_club_membership("join")
            logger.info("club_join", extra={"user_id": user.id, "club": name})
            await self._dispatcher.club_joined(user, self.get_club(name))
        return joined

    def leave_club(self, user: User, name: str) -> bool:
        left = self._store.leave_club(user.id, name)
        if left:
            obs_metrics.inc_club_membership("leave")
            logger.info("club_leave", extra={"user_id": user.id, "club": name})
        return left

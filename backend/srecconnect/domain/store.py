"""In-memory entity store for users, clubs, events and notifications.

The store is the only writer of entity state. Every public method runs as a
single critical section: it never awaits, and it holds the store lock for the
whole read-modify-write, so relationship updates (club membership mirroring,
RSVP exclusivity) are never visible half-applied. Callers receive copies of
entities; mutating a returned object has no effect on the store.
"""

from __future__ import annotations

import itertools
import threading
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Iterable, Mapping, Optional

from srecconnect.domain.base import new_id, utcnow
from srecconnect.domain.clubs.models import Club
from srecconnect.domain.errors import Conflict, DuplicateEmail, NotFound, ValidationError
from srecconnect.domain.events.models import Event, EventSummary, EventType, RSVPKind
from srecconnect.domain.identity.models import Role, User
from srecconnect.domain.notifications.models import Notification, NotificationType

_USER_MUTABLE_FIELDS = frozenset({"name", "avatar", "role", "password_hash", "is_verified"})
_EVENT_MUTABLE_FIELDS = frozenset({"title", "description", "date", "venue", "image"})


@dataclass(frozen=True)
class ClubSeed:
	name: str
	description: Optional[str]
	category: str


DEFAULT_CLUBS: tuple[ClubSeed, ...] = (
	ClubSeed("Coding Club", "Programming and software development", "Technical"),
	ClubSeed("Robotics Club", "Robotics and automation projects", "Technical"),
	ClubSeed("Cultural Society", "Arts, music, and cultural activities", "Cultural"),
	ClubSeed("Sports Club", "Athletic and sports activities", "Sports"),
	ClubSeed("Photography Club", "Photography and visual arts", "Creative"),
)


def normalise_email(email: str) -> str:
	return email.strip().lower()


class EntityStore:
	def __init__(self, *, seed_clubs: Iterable[ClubSeed] = ()) -> None:
		self._lock = threading.RLock()
		self._users: dict[str, User] = {}
		self._user_ids_by_email: dict[str, str] = {}
		self._clubs: dict[str, Club] = {}
		self._club_ids_by_name: dict[str, str] = {}
		self._events: dict[str, Event] = {}
		self._notifications: dict[str, Notification] = {}
		# Tie-breaker for notifications created within the same clock tick.
		self._notification_seq: dict[str, int] = {}
		self._seq = itertools.count()
		for seed in seed_clubs:
			self.create_club(name=seed.name, description=seed.description, category=seed.category)

	# -- users ---------------------------------------------------------------

	def create_user(
		self,
		*,
		name: str,
		email: str,
		password_hash: str,
		role: Role = Role.STUDENT,
		is_verified: bool = False,
	) -> User:
		key = normalise_email(email)
		with self._lock:
			if key in self._user_ids_by_email:
				raise DuplicateEmail()
			user = User(
				id=new_id(),
				name=name,
				email=key,
				password_hash=password_hash,
				role=Role(role),
				is_verified=is_verified,
			)
			self._users[user.id] = user
			self._user_ids_by_email[key] = user.id
			return user.copy()

	def get_user(self, user_id: str) -> Optional[User]:
		with self._lock:
			user = self._users.get(user_id)
			return user.copy() if user else None

	def get_user_by_email(self, email: str) -> Optional[User]:
		with self._lock:
			user_id = self._user_ids_by_email.get(normalise_email(email))
			return self._users[user_id].copy() if user_id else None

	def list_users(self, *, verified_only: bool = False) -> list[User]:
		with self._lock:
			return [u.copy() for u in self._users.values() if u.is_verified or not verified_only]

	def update_user(self, user_id: str, changes: Mapping[str, Any]) -> User:
		"""Merge ``changes`` into the user.

		Identity fields (id, email, created_at) and the club list are not
		updatable here; club membership only changes through join/leave.
		"""
		illegal = set(changes) - _USER_MUTABLE_FIELDS
		if illegal:
			raise ValidationError(f"Cannot update field(s): {', '.join(sorted(illegal))}")
		with self._lock:
			user = self._require_user(user_id)
			for key, value in changes.items():
				if key == "role":
					value = Role(value)
				setattr(user, key, value)
			return user.copy()

	def set_verified(self, user_id: str) -> tuple[User, bool]:
		"""Mark the user verified; the flag is True if this call changed it."""
		with self._lock:
			user = self._require_user(user_id)
			changed = not user.is_verified
			user.is_verified = True
			return user.copy(), changed

	# -- clubs ---------------------------------------------------------------

	def create_club(
		self,
		*,
		name: str,
		category: str,
		description: Optional[str] = None,
		admin_id: Optional[str] = None,
	) -> Club:
		with self._lock:
			if name in self._club_ids_by_name:
				raise Conflict("Club already exists", reason="club_exists")
			if admin_id is not None:
				self._require_user(admin_id)
			club = Club(id=new_id(), name=name, category=category, description=description, admin_id=admin_id)
			self._clubs[club.id] = club
			self._club_ids_by_name[name] = club.id
			return club.copy()

	def get_club_by_name(self, name: str) -> Optional[Club]:
		with self._lock:
			club_id = self._club_ids_by_name.get(name)
			return self._clubs[club_id].copy() if club_id else None

	def list_clubs(self) -> list[Club]:
		with self._lock:
			return [c.copy() for c in self._clubs.values()]

	def club_members(self, club_name: str) -> list[str]:
		with self._lock:
			return list(self._require_club(club_name).members)

	def join_club(self, user_id: str, club_name: str) -> bool:
		"""Add the user to the club on both sides. Returns False if already a member."""
		with self._lock:
			user = self._require_user(user_id)
			club = self._require_club(club_name)
			in_user = club.name in user.clubs
			in_club = user.id in club.members
			if in_user and in_club:
				return False
			if not in_user:
				user.clubs.append(club.name)
			if not in_club:
				club.members.append(user.id)
			return True

	def leave_club(self, user_id: str, club_name: str) -> bool:
		"""Remove the user from the club on both sides. Returns False if not a member."""
		with self._lock:
			user = self._require_user(user_id)
			club = self._require_club(club_name)
			was_member = club.name in user.clubs or user.id in club.members
			user.clubs = [name for name in user.clubs if name != club.name]
			club.members = [uid for uid in club.members if uid != user.id]
			return was_member

	# -- events --------------------------------------------------------------

	def create_event(
		self,
		*,
		title: str,
		description: str,
		date: datetime,
		venue: str,
		organizer_id: str,
		organizer_name: str,
		type: EventType = EventType.COLLEGE,
		club: Optional[str] = None,
		image: Optional[str] = None,
	) -> Event:
		kind = EventType(type)
		if kind is EventType.CLUB and not club:
			raise ValidationError("Club events must name a club")
		if kind is EventType.COLLEGE and club:
			raise ValidationError("College-wide events cannot belong to a club")
		with self._lock:
			self._require_user(organizer_id)
			if club is not None:
				self._require_club(club)
			event = Event(
				id=new_id(),
				title=title,
				description=description,
				date=date,
				venue=venue,
				organizer_id=organizer_id,
				organizer_name=organizer_name,
				type=kind,
				club=club,
				image=image,
			)
			self._events[event.id] = event
			return event.copy()

	def get_event(self, event_id: str) -> Optional[Event]:
		with self._lock:
			event = self._events.get(event_id)
			return event.copy() if event else None

	def update_event(self, event_id: str, changes: Mapping[str, Any]) -> Event:
		illegal = set(changes) - _EVENT_MUTABLE_FIELDS
		if illegal:
			raise ValidationError(f"Cannot update field(s): {', '.join(sorted(illegal))}")
		with self._lock:
			event = self._require_event(event_id)
			for key, value in changes.items():
				setattr(event, key, value)
			return event.copy()

	def delete_event(self, event_id: str) -> bool:
		with self._lock:
			return self._events.pop(event_id, None) is not None

	def list_events_by_organizer(self, user_id: str) -> list[Event]:
		with self._lock:
			return [e.copy() for e in self._events.values() if e.organizer_id == user_id]

	def list_events_by_club(self, club_name: str) -> list[Event]:
		with self._lock:
			return [e.copy() for e in self._events.values() if e.club == club_name]

	def list_events_with_counts(self) -> list[EventSummary]:
		with self._lock:
			return [EventSummary.of(e.copy()) for e in self._events.values()]

	def get_event_with_counts(self, event_id: str) -> EventSummary:
		with self._lock:
			return EventSummary.of(self._require_event(event_id).copy())

	def rsvp(self, user_id: str, event_id: str, kind: RSVPKind) -> Optional[RSVPKind]:
		"""Set the user's RSVP to ``kind``, clearing any other RSVP first.

		Returns the RSVP the user held before this call.
		"""
		kind = RSVPKind(kind)
		with self._lock:
			event = self._require_event(event_id)
			previous = event.rsvp_of(user_id)
			event.attendees = [uid for uid in event.attendees if uid != user_id]
			event.interested = [uid for uid in event.interested if uid != user_id]
			if kind is RSVPKind.ATTENDING:
				event.attendees.append(user_id)
			else:
				event.interested.append(user_id)
			return previous

	def unrsvp(self, user_id: str, event_id: str) -> Optional[RSVPKind]:
		with self._lock:
			event = self._require_event(event_id)
			previous = event.rsvp_of(user_id)
			event.attendees = [uid for uid in event.attendees if uid != user_id]
			event.interested = [uid for uid in event.interested if uid != user_id]
			return previous

	# -- notifications -------------------------------------------------------

	def create_notification(
		self,
		*,
		user_id: Optional[str],
		title: str,
		message: str,
		type: NotificationType = NotificationType.GENERAL,
		event_id: Optional[str] = None,
	) -> Notification:
		with self._lock:
			notification = Notification(
				id=new_id(),
				user_id=user_id,
				title=title,
				message=message,
				type=NotificationType(type),
				event_id=event_id,
				created_at=utcnow(),
			)
			self._notifications[notification.id] = notification
			self._notification_seq[notification.id] = next(self._seq)
			return notification.copy()

	def get_notification(self, notification_id: str) -> Optional[Notification]:
		with self._lock:
			notification = self._notifications.get(notification_id)
			return notification.copy() if notification else None

	def list_notifications(self, user_id: str, *, limit: Optional[int] = None) -> list[Notification]:
		"""Notifications addressed to ``user_id``, newest first."""
		with self._lock:
			rows = [n for n in self._notifications.values() if n.user_id == user_id]
			rows.sort(key=lambda n: (n.created_at, self._notification_seq[n.id]), reverse=True)
			if limit is not None:
				rows = rows[:limit]
			return [n.copy() for n in rows]

	def mark_read(self, notification_id: str, *, user_id: Optional[str] = None) -> Notification:
		"""Mark one notification read. When ``user_id`` is given it must own the row."""
		with self._lock:
			notification = self._notifications.get(notification_id)
			if notification is None or (user_id is not None and notification.user_id != user_id):
				raise NotFound("Notification not found")
			notification.read = True
			return notification.copy()

	def mark_all_read(self, user_id: str) -> int:
		"""Mark every notification of ``user_id`` read; returns how many changed."""
		changed = 0
		with self._lock:
			for notification in self._notifications.values():
				if notification.user_id == user_id and not notification.read:
					notification.read = True
					changed += 1
		return changed

	def unread_count(self, user_id: str) -> int:
		with self._lock:
			return sum(1 for n in self._notifications.values() if n.user_id == user_id and not n.read)

	# -- misc ----------------------------------------------------------------

	def stats(self) -> dict[str, int]:
		with self._lock:
			return {
				"users": len(self._users),
				"clubs": len(self._clubs),
				"events": len(self._events),
				"notifications": len(self._notifications),
			}

	def _require_user(self, user_id: str) -> User:
		user = self._users.get(user_id)
		if user is None:
			raise NotFound("User not found")
		return user

	def _require_club(self, club_name: str) -> Club:
		club_id = self._club_ids_by_name.get(club_name)
		if club_id is None:
			raise NotFound("Club not found")
		return self._clubs[club_id]

	def _require_event(self, event_id: str) -> Event:
		event = self._events.get(event_id)
		if event is None:
			raise NotFound("Event not found")
		return event

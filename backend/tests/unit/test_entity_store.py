from datetime import datetime, timedelta, timezone

import pytest

from srecconnect.domain.errors import Conflict, DuplicateEmail, NotFound, ValidationError
from srecconnect.domain.events.models import EventType, RSVPKind
from srecconnect.domain.identity.models import Role
from srecconnect.domain.notifications.models import NotificationType
from srecconnect.domain.store import DEFAULT_CLUBS, EntityStore


@pytest.fixture
def store():
	return EntityStore(seed_clubs=DEFAULT_CLUBS)


def _user(store, email="a@srec.ac.in", role=Role.STUDENT):
	return store.create_user(name="A", email=email, password_hash="x", role=role)


def _event(store, organizer, **overrides):
	fields = dict(
		title="Hackathon",
		description="24h build",
		date=datetime(2026, 11, 1, 9, tzinfo=timezone.utc),
		venue="Main Hall",
		organizer_id=organizer.id,
		organizer_name=organizer.name,
	)
	fields.update(overrides)
	return store.create_event(**fields)


def test_seeds_default_clubs(store):
	names = {c.name for c in store.list_clubs()}
	assert names == {"Coding Club", "Robotics Club", "Cultural Society", "Sports Club", "Photography Club"}
	assert all(c.members == [] for c in store.list_clubs())


def test_create_user_defaults_and_duplicate_email(store):
	user = _user(store, email="Mixed@SREC.ac.in")
	assert user.email == "mixed@srec.ac.in"
	assert user.clubs == []
	assert user.avatar is None
	assert user.is_verified is False
	with pytest.raises(DuplicateEmail):
		_user(store, email="mixed@srec.ac.in")


def test_update_user_rejects_identity_fields(store):
	user = _user(store)
	with pytest.raises(ValidationError):
		store.update_user(user.id, {"id": "other"})
	with pytest.raises(ValidationError):
		store.update_user(user.id, {"created_at": datetime.now(timezone.utc)})
	with pytest.raises(ValidationError):
		store.update_user(user.id, {"clubs": ["Coding Club"]})
	updated = store.update_user(user.id, {"name": "Renamed", "avatar": "a.png"})
	assert updated.name == "Renamed"
	assert updated.id == user.id
	assert updated.created_at == user.created_at


def test_update_unknown_user_is_not_found(store):
	with pytest.raises(NotFound):
		store.update_user("missing", {"name": "x"})


def test_returned_entities_are_snapshots(store):
	user = _user(store)
	user.clubs.append("Coding Club")
	assert store.get_user(user.id).clubs == []
	assert store.club_members("Coding Club") == []


def test_join_club_mirrors_both_sides_and_is_idempotent(store):
	user = _user(store)
	assert store.join_club(user.id, "Coding Club") is True
	assert store.join_club(user.id, "Coding Club") is False
	assert store.get_user(user.id).clubs == ["Coding Club"]
	assert store.club_members("Coding Club") == [user.id]


def test_leave_club_clears_both_sides(store):
	user = _user(store)
	store.join_club(user.id, "Coding Club")
	store.join_club(user.id, "Sports Club")
	assert store.leave_club(user.id, "Coding Club") is True
	assert store.get_user(user.id).clubs == ["Sports Club"]
	assert user.id not in store.club_members("Coding Club")
	assert store.leave_club(user.id, "Coding Club") is False


def test_join_unknown_user_or_club_changes_nothing(store):
	user = _user(store)
	with pytest.raises(NotFound):
		store.join_club(user.id, "Chess Club")
	with pytest.raises(NotFound):
		store.join_club("missing", "Coding Club")
	assert store.get_user(user.id).clubs == []
	assert store.club_members("Coding Club") == []


def test_create_club_rejects_duplicate_name(store):
	with pytest.raises(Conflict):
		store.create_club(name="Coding Club", category="Technical")


def test_rsvp_is_exclusive(store):
	organizer = _user(store, email="o@srec.ac.in", role=Role.ORGANIZER)
	user = _user(store)
	event = _event(store, organizer)

	assert store.rsvp(user.id, event.id, RSVPKind.ATTENDING) is None
	snapshot = store.get_event(event.id)
	assert user.id in snapshot.attendees and user.id not in snapshot.interested

	assert store.rsvp(user.id, event.id, RSVPKind.INTERESTED) is RSVPKind.ATTENDING
	snapshot = store.get_event(event.id)
	assert user.id not in snapshot.attendees and snapshot.interested == [user.id]

	assert store.unrsvp(user.id, event.id) is RSVPKind.INTERESTED
	snapshot = store.get_event(event.id)
	assert user.id not in snapshot.attendees and user.id not in snapshot.interested


def test_rsvp_same_kind_twice_keeps_one_entry(store):
	organizer = _user(store, email="o@srec.ac.in", role=Role.ORGANIZER)
	event = _event(store, organizer)
	store.rsvp("u1", event.id, "attending")
	store.rsvp("u1", event.id, "attending")
	assert store.get_event(event.id).attendees == ["u1"]


def test_unrsvp_without_rsvp_succeeds(store):
	organizer = _user(store, email="o@srec.ac.in", role=Role.ORGANIZER)
	event = _event(store, organizer)
	assert store.unrsvp("nobody", event.id) is None


def test_rsvp_unknown_event(store):
	with pytest.raises(NotFound):
		store.rsvp("u1", "missing", RSVPKind.ATTENDING)
	with pytest.raises(NotFound):
		store.unrsvp("u1", "missing")


def test_counts_are_derived_from_sets(store):
	organizer = _user(store, email="o@srec.ac.in", role=Role.ORGANIZER)
	event = _event(store, organizer)
	store.rsvp("u1", event.id, RSVPKind.ATTENDING)
	store.rsvp("u2", event.id, RSVPKind.ATTENDING)
	store.rsvp("u3", event.id, RSVPKind.INTERESTED)
	store.rsvp("u2", event.id, RSVPKind.INTERESTED)

	[summary] = store.list_events_with_counts()
	assert summary.attendee_count == len(summary.event.attendees) == 1
	assert summary.interested_count == len(summary.event.interested) == 2


def test_event_type_must_agree_with_club(store):
	organizer = _user(store, email="o@srec.ac.in", role=Role.ORGANIZER)
	with pytest.raises(ValidationError):
		_event(store, organizer, type=EventType.CLUB)
	with pytest.raises(ValidationError):
		_event(store, organizer, type=EventType.COLLEGE, club="Coding Club")
	with pytest.raises(NotFound):
		_event(store, organizer, type=EventType.CLUB, club="Chess Club")
	event = _event(store, organizer, type=EventType.CLUB, club="Coding Club")
	assert event.attendees == [] and event.interested == []
	assert store.list_events_by_club("Coding Club")[0].id == event.id
	assert store.list_events_by_organizer(organizer.id)[0].id == event.id


def test_update_and_delete_event(store):
	organizer = _user(store, email="o@srec.ac.in", role=Role.ORGANIZER)
	event = _event(store, organizer)
	later = event.date + timedelta(days=1)
	assert store.update_event(event.id, {"date": later, "venue": "Lab 2"}).venue == "Lab 2"
	with pytest.raises(ValidationError):
		store.update_event(event.id, {"attendees": ["u1"]})
	assert store.delete_event(event.id) is True
	assert store.delete_event(event.id) is False
	assert store.get_event(event.id) is None


def test_notifications_newest_first_and_read_state(store):
	first = store.create_notification(user_id="u1", title="one", message="m", type=NotificationType.EVENT)
	second = store.create_notification(user_id="u1", title="two", message="m", type=NotificationType.CLUB)
	other = store.create_notification(user_id="u2", title="three", message="m")

	assert first.read is False
	assert [n.id for n in store.list_notifications("u1")] == [second.id, first.id]
	assert [n.id for n in store.list_notifications("u1", limit=1)] == [second.id]

	store.mark_read(first.id)
	store.mark_read(first.id)
	assert store.get_notification(first.id).read is True

	assert store.mark_all_read("u1") == 1
	assert store.mark_all_read("u1") == 0
	assert store.unread_count("u1") == 0
	assert store.get_notification(other.id).read is False


def test_mark_read_checks_owner(store):
	row = store.create_notification(user_id="u1", title="t", message="m")
	with pytest.raises(NotFound):
		store.mark_read(row.id, user_id="u2")
	with pytest.raises(NotFound):
		store.mark_read("missing")
	assert store.get_notification(row.id).read is False

from datetime import datetime, timedelta, timezone

import pytest

from srecconnect.domain.identity.models import Role


def _event_body(**overrides):
	body = {
		"title": "Hack Night",
		"description": "Build something in one evening",
		"date": (datetime.now(timezone.utc) + timedelta(days=7)).isoformat(),
		"venue": "Main Lab",
	}
	body.update(overrides)
	return body


@pytest.mark.asyncio
async def test_student_cannot_create_event(api_client, make_user, store):
	_, headers = make_user(Role.STUDENT)
	resp = await api_client.post("/api/events", json=_event_body(), headers=headers)
	assert resp.status_code == 403
	assert store.stats()["events"] == 0


@pytest.mark.asyncio
async def test_organizer_creates_event(api_client, make_user, store):
	organizer, headers = make_user(Role.ORGANIZER, name="Olu")
	resp = await api_client.post("/api/events", json=_event_body(), headers=headers)
	assert resp.status_code == 201
	body = resp.json()
	assert body["organizerId"] == organizer.id
	assert body["organizerName"] == "Olu"
	assert body["type"] == "college"
	assert body["attendees"] == []
	assert body["interested"] == []

	rows = store.list_notifications(organizer.id)
	assert [n.title for n in rows] == ["Event Created"]
	assert rows[0].event_id == body["id"]


@pytest.mark.asyncio
async def test_college_event_notifies_other_verified_users(api_client, make_user, store):
	_, headers = make_user(Role.FACULTY)
	student, _ = make_user()
	pending, _ = make_user(verified=False)
	resp = await api_client.post("/api/events", json=_event_body(), headers=headers)
	assert resp.status_code == 201
	assert store.unread_count(student.id) == 1
	assert store.unread_count(pending.id) == 0


@pytest.mark.asyncio
async def test_club_event_validation(api_client, make_user):
	_, headers = make_user(Role.FACULTY)
	resp = await api_client.post("/api/events", json=_event_body(type="club"), headers=headers)
	assert resp.status_code == 400
	resp = await api_client.post("/api/events", json=_event_body(type="club", club="No Such Club"), headers=headers)
	assert resp.status_code == 404
	resp = await api_client.post("/api/events", json=_event_body(type="party"), headers=headers)
	assert resp.status_code == 400
	resp = await api_client.post("/api/events", json=_event_body(type="club", club="Coding Club"), headers=headers)
	assert resp.status_code == 201
	assert resp.json()["club"] == "Coding Club"


@pytest.mark.asyncio
async def test_rsvp_switches_and_counts(api_client, make_user, store):
	organizer, org_headers = make_user(Role.ORGANIZER)
	_, headers = make_user()
	event_id = (await api_client.post("/api/events", json=_event_body(), headers=org_headers)).json()["id"]
	before = store.unread_count(organizer.id)

	resp = await api_client.post(f"/api/events/{event_id}/rsvp", json={"type": "interested"}, headers=headers)
	assert resp.status_code == 200
	event = resp.json()["event"]
	assert (event["attendeeCount"], event["interestedCount"]) == (0, 1)
	assert event["isInterested"] is True
	assert store.unread_count(organizer.id) == before

	resp = await api_client.post(f"/api/events/{event_id}/rsvp", json={"type": "attending"}, headers=headers)
	event = resp.json()["event"]
	assert (event["attendeeCount"], event["interestedCount"]) == (1, 0)
	assert event["isAttending"] is True and event["isInterested"] is False
	assert store.unread_count(organizer.id) == before + 1

	resp = await api_client.post(f"/api/events/{event_id}/rsvp", json={"type": "attending"}, headers=headers)
	assert resp.json()["event"]["attendeeCount"] == 1
	assert store.unread_count(organizer.id) == before + 1

	resp = await api_client.delete(f"/api/events/{event_id}/rsvp", headers=headers)
	assert resp.status_code == 200
	resp = await api_client.delete(f"/api/events/{event_id}/rsvp", headers=headers)
	assert resp.status_code == 200

	resp = await api_client.get(f"/api/events/{event_id}", headers=headers)
	detail = resp.json()
	assert (detail["attendeeCount"], detail["interestedCount"]) == (0, 0)
	assert detail["isAttending"] is False


@pytest.mark.asyncio
async def test_rsvp_bad_kind_and_unknown_event(api_client, make_user):
	organizer, org_headers = make_user(Role.ORGANIZER)
	_, headers = make_user()
	event_id = (await api_client.post("/api/events", json=_event_body(), headers=org_headers)).json()["id"]
	resp = await api_client.post(f"/api/events/{event_id}/rsvp", json={"type": "maybe"}, headers=headers)
	assert resp.status_code == 400
	resp = await api_client.post("/api/events/missing/rsvp", json={"type": "attending"}, headers=headers)
	assert resp.status_code == 404
	resp = await api_client.delete("/api/events/missing/rsvp", headers=headers)
	assert resp.status_code == 404
	resp = await api_client.get("/api/events/missing", headers=headers)
	assert resp.status_code == 404


@pytest.mark.asyncio
async def test_list_events_requires_auth_and_reports_viewer_flags(api_client, make_user):
	assert (await api_client.get("/api/events")).status_code == 401
	_, org_headers = make_user(Role.ORGANIZER)
	_, headers = make_user()
	event_id = (await api_client.post("/api/events", json=_event_body(), headers=org_headers)).json()["id"]
	await api_client.post(f"/api/events/{event_id}/rsvp", json={"type": "attending"}, headers=headers)

	mine = (await api_client.get("/api/events", headers=headers)).json()
	theirs = (await api_client.get("/api/events", headers=org_headers)).json()
	assert mine[0]["isAttending"] is True
	assert theirs[0]["isAttending"] is False
	assert theirs[0]["attendeeCount"] == 1


@pytest.mark.asyncio
async def test_student_gets_403_even_with_malformed_body(api_client, make_user, store):
	_, headers = make_user(Role.STUDENT)
	resp = await api_client.post("/api/events", json={"title": "x"}, headers=headers)
	assert resp.status_code == 403
	assert resp.json()["detail"] == "insufficient_role"
	assert store.stats()["events"] == 0

	resp = await api_client.post("/api/events", json={"title": "x"})
	assert resp.status_code == 401

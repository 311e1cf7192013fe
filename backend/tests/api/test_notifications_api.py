import pytest

from srecconnect.domain.notifications.models import NotificationType


@pytest.mark.asyncio
async def test_list_newest_first_and_scoped_to_user(api_client, make_user, store):
	user, headers = make_user()
	other, _ = make_user()
	for i in range(3):
		store.create_notification(user_id=user.id, title=f"n{i}", message="m", type=NotificationType.GENERAL)
	store.create_notification(user_id=other.id, title="theirs", message="m", type=NotificationType.GENERAL)

	resp = await api_client.get("/api/notifications", headers=headers)
	assert resp.status_code == 200
	body = resp.json()
	assert [n["title"] for n in body] == ["n2", "n1", "n0"]
	assert all(n["userId"] == user.id and n["read"] is False for n in body)


@pytest.mark.asyncio
async def test_listing_is_capped(api_client, make_user, store, test_settings):
	user, headers = make_user()
	for i in range(test_settings.notification_history_limit + 5):
		store.create_notification(user_id=user.id, title=f"n{i}", message="m")
	body = (await api_client.get("/api/notifications", headers=headers)).json()
	assert len(body) == test_settings.notification_history_limit
	assert store.unread_count(user.id) == test_settings.notification_history_limit + 5


@pytest.mark.asyncio
async def test_mark_read_and_unread_count(api_client, make_user, store):
	user, headers = make_user()
	first = store.create_notification(user_id=user.id, title="a", message="m")
	store.create_notification(user_id=user.id, title="b", message="m")

	assert (await api_client.get("/api/notifications/unread-count", headers=headers)).json() == {"count": 2}
	resp = await api_client.post(f"/api/notifications/{first.id}/read", headers=headers)
	assert resp.status_code == 200
	resp = await api_client.post(f"/api/notifications/{first.id}/read", headers=headers)
	assert resp.status_code == 200
	assert (await api_client.get("/api/notifications/unread-count", headers=headers)).json() == {"count": 1}

	resp = await api_client.post("/api/notifications/read-all", headers=headers)
	assert resp.status_code == 200
	assert (await api_client.get("/api/notifications/unread-count", headers=headers)).json() == {"count": 0}


@pytest.mark.asyncio
async def test_cannot_touch_someone_elses_notification(api_client, make_user, store):
	owner, _ = make_user()
	_, headers = make_user()
	row = store.create_notification(user_id=owner.id, title="private", message="m")
	resp = await api_client.post(f"/api/notifications/{row.id}/read", headers=headers)
	assert resp.status_code == 404
	assert store.get_notification(row.id).read is False
	resp = await api_client.post("/api/notifications/missing/read", headers=headers)
	assert resp.status_code == 404


@pytest.mark.asyncio
async def test_notifications_require_auth(api_client):
	assert (await api_client.get("/api/notifications")).status_code == 401
	assert (await api_client.post("/api/notifications/read-all")).status_code == 401

"""Prometheus metrics used across the backend."""

from __future__ import annotations

from prometheus_client import Counter, Gauge, Histogram

REQUEST_COUNTER = Counter(
	"srec_http_requests_total",
	"Total HTTP requests processed",
	["route", "method", "status"],
)

REQUEST_LATENCY = Histogram(
	"srec_http_request_duration_seconds",
	"HTTP request latency in seconds",
	["route", "method"],
	buckets=(0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.0, 5.0),
)

SOCKET_CLIENTS = Gauge(
	"srec_socketio_clients",
	"Active Socket.IO clients per namespace",
	["namespace"],
)

SOCKET_AUTHENTICATED = Gauge(
	"srec_socketio_authenticated_users",
	"Users with a registered live connection",
)

SOCKET_EVENTS = Counter(
	"srec_socketio_events_total",
	"Socket.IO events emitted or received per namespace",
	["namespace", "event"],
)

NOTIFICATIONS_PERSISTED = Counter(
	"srec_notifications_persisted_total",
	"Notifications persisted",
	["type"],
)

NOTIFICATIONS_PUSHED = Counter(
	"srec_notifications_push_total",
	"Live notification pushes by result",
	["result"],
)

RSVP_UPDATES = Counter(
	"srec_event_rsvp_updates_total",
	"RSVP changes",
	["action"],
)

CLUB_MEMBERSHIP = Counter(
	"srec_club_membership_changes_total",
	"Club join/leave operations",
	["action"],
)

EVENTS_CREATED = Counter(
	"srec_events_created_total",
	"Events created",
	["type"],
)

IDENTITY_REJECTS = Counter(
	"srec_identity_rejects_total",
	"Identity flow rejections by reason",
	["reason"],
)


def observe_request(route: str, method: str, status: int, elapsed_seconds: float) -> None:
	REQUEST_COUNTER.labels(route=route, method=method, status=str(status)).inc()
	REQUEST_LATENCY.labels(route=route, method=method).observe(elapsed_seconds)


def socket_connected(namespace: str) -> None:
	SOCKET_CLIENTS.labels(namespace=namespace).inc()


def socket_disconnected(namespace: str) -> None:
	SOCKET_CLIENTS.labels(namespace=namespace).dec()


def socket_event(namespace: str, event: str) -> None:
	SOCKET_EVENTS.labels(namespace=namespace, event=event).inc()


def set_live_users(count: int) -> None:
	SOCKET_AUTHENTICATED.set(count)


def notification_persisted(kind: str) -> None:
	NOTIFICATIONS_PERSISTED.labels(type=kind).inc()


def notification_pushed(result: str) -> None:
	NOTIFICATIONS_PUSHED.labels(result=result).inc()


def inc_rsvp(action: str) -> None:
	RSVP_UPDATES.labels(action=action).inc()


def inc_club_membership(action: str) -> None:
	CLUB_MEMBERSHIP.labels(action=action).inc()


def inc_event_created(kind: str) -> None:
	EVENTS_CREATED.labels(type=kind).inc()


def inc_identity_reject(reason: str) -> None:
	IDENTITY_REJECTS.labels(reason=reason).inc()

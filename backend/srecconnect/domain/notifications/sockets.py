"""Socket.IO namespace for live notification delivery.

Clients connect anonymously, then emit ``auth`` with ``{"token": ...}``
carrying a session credential. Until that succeeds the socket receives
nothing. Any malformed frame or failed auth disconnects the socket without an
error frame.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, Optional

import socketio

from srecconnect.domain.errors import DomainError
from srecconnect.domain.identity.sessions import CredentialService
from srecconnect.domain.notifications.registry import LiveConnectionRegistry
from srecconnect.obs import metrics as obs_metrics

logger = logging.getLogger(__name__)

NAMESPACE = "/ws"
NOTIFICATION_EVENT = "notification"


class SocketConnection:
	"""A live connection handle for one Socket.IO sid."""

	def __init__(self, namespace: "NotificationsNamespace", sid: str) -> None:
		self.namespace = namespace
		self.sid = sid

	@property
	def is_open(self) -> bool:
		return self.namespace.is_connected(self.sid)

	async def send(self, payload: Dict[str, Any]) -> None:
		obs_metrics.socket_event(self.namespace.namespace, NOTIFICATION_EVENT)
		await self.namespace.emit(NOTIFICATION_EVENT, payload, to=self.sid)

	def __repr__(self) -> str:
		return f"SocketConnection(sid={self.sid!r})"


class NotificationsNamespace(socketio.AsyncNamespace):
	def __init__(self, registry: LiveConnectionRegistry, credentials: CredentialService) -> None:
		super().__init__(NAMESPACE)
		self._registry = registry
		self._credentials = credentials
		self._connections: Dict[str, SocketConnection] = {}
		self._users: Dict[str, str] = {}

	def is_connected(self, sid: str) -> bool:
		return sid in self._connections

	def user_for(self, sid: str) -> Optional[str]:
		return self._users.get(sid)

	async def on_connect(self, sid: str, environ: dict, auth: Optional[dict] = None) -> None:
		obs_metrics.socket_connected(self.namespace)
		self._connections[sid] = SocketConnection(self, sid)

	async def on_disconnect(self, sid: str, reason: Any = None) -> None:
		obs_metrics.socket_disconnected(self.namespace)
		connection = self._connections.pop(sid, None)
		user_id = self._users.pop(sid, None)
		if connection is not None:
			self._registry.unregister(connection)
		if user_id:
			logger.info("live_connection_closed", extra={"user_id": user_id, "sid": sid})

	async def on_auth(self, sid: str, data: Any = None) -> None:
		obs_metrics.socket_event(self.namespace, "auth")
		token = data.get("token") if isinstance(data, dict) else None
		await self._authenticate(sid, token)

	async def on_message(self, sid: str, data: Any = None) -> None:
		"""Accept the plain ``{"type": "auth", "token": ...}`` frame as well."""
		frame = data
		if isinstance(frame, (str, bytes)):
			try:
				frame = json.loads(frame)
			except ValueError:
				frame = None
		if not isinstance(frame, dict) or frame.get("type") != "auth":
			logger.info("live_frame_rejected", extra={"sid": sid})
			await self._close(sid)
			return
		await self._authenticate(sid, frame.get("token"))

	async def _authenticate(self, sid: str, token: Any) -> None:
		connection = self._connections.get(sid)
		if connection is None:
			return
		if not isinstance(token, str) or not token:
			await self._close(sid)
			return
		try:
			user = await self._credentials.resolve_session(token)
		except DomainError as exc:
			logger.info("live_auth_rejected", extra={"sid": sid, "reason": exc.reason})
			await self._close(sid)
			return
		# The socket may have gone away while the credential was being checked.
		if self._connections.get(sid) is not connection:
			return
		self._users[sid] = user.id
		self._registry.register(user.id, connection)
		await self.emit("auth_ok", {"userId": user.id}, to=sid)
		logger.info("live_connection_registered", extra={"user_id": user.id, "sid": sid})

	async def _close(self, sid: str) -> None:
		connection = self._connections.pop(sid, None)
		self._users.pop(sid, None)
		if connection is not None:
			self._registry.unregister(connection)
		await self.disconnect(sid)

"""Registry of live connections, keyed by authenticated user.

At most one connection is tracked per user. Registering a newer connection
supersedes the older registration without closing the older socket. Delivery
through the registry is best-effort: the persisted notification row is the
durable record, the push is a courtesy.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Protocol

from srecconnect.obs import metrics as obs_metrics

logger = logging.getLogger(__name__)


class LiveConnection(Protocol):
	@property
	def is_open(self) -> bool: ...

	async def send(self, payload: Dict[str, Any]) -> None: ...


class LiveConnectionRegistry:
	def __init__(self) -> None:
		self._by_user: Dict[str, LiveConnection] = {}

	def register(self, user_id: str, connection: LiveConnection) -> Optional[LiveConnection]:
		"""Point ``user_id`` at ``connection``; returns the superseded connection, if any."""
		# A connection belongs to one user; drop it from any previous owner.
		for owner, existing in list(self._by_user.items()):
			if existing is connection and owner != user_id:
				del self._by_user[owner]
		previous = self._by_user.get(user_id)
		self._by_user[user_id] = connection
		obs_metrics.set_live_users(len(self._by_user))
		if previous is not None and previous is not connection:
			logger.info("live_connection_superseded", extra={"user_id": user_id})
			return previous
		return None

	def unregister(self, connection: LiveConnection) -> Optional[str]:
		"""Remove whichever user currently maps to this exact connection.

		A connection that was already superseded or removed is a no-op.
		"""
		for user_id, existing in list(self._by_user.items()):
			if existing is connection:
				del self._by_user[user_id]
				obs_metrics.set_live_users(len(self._by_user))
				return user_id
		return None

	def connection_for(self, user_id: str) -> Optional[LiveConnection]:
		return self._by_user.get(user_id)

	def is_online(self, user_id: str) -> bool:
		connection = self._by_user.get(user_id)
		return connection is not None and connection.is_open

	async def send_to(self, user_id: Optional[str], payload: Dict[str, Any]) -> bool:
		"""Deliver ``payload`` to the user's connection; returns False if dropped."""
		if user_id is None:
			return False
		connection = self._by_user.get(user_id)
		if connection is None:
			obs_metrics.notification_pushed("offline")
			return False
		if not connection.is_open:
			obs_metrics.notification_pushed("closed")
			return False
		try:
			await connection.send(payload)
		except Exception:
			obs_metrics.notification_pushed("error")
			logger.warning("live_push_failed", extra={"user_id": user_id}, exc_info=True)
			return False
		obs_metrics.notification_pushed("delivered")
		return True

	def __len__(self) -> int:
		return len(self._by_user)

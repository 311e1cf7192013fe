"""Authentication dependencies for FastAPI endpoints."""

from __future__ import annotations

from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from srecconnect.domain.container import Container
from srecconnect.domain.errors import AuthError, Forbidden
from srecconnect.domain.identity.models import Role, User
from srecconnect.obs import logging as obs_logging

_bearer_scheme = HTTPBearer(auto_error=False)


def get_container(request: Request) -> Container:
	return request.app.state.container


async def get_current_user(
	container: Container = Depends(get_container),
	credentials: Optional[HTTPAuthorizationCredentials] = Depends(_bearer_scheme),
) -> User:
	"""Resolve the bearer session credential to a user record."""
	if credentials is None or credentials.scheme.lower() != "bearer" or not credentials.credentials:
		raise AuthError()
	user = await container.credentials.resolve_session(credentials.credentials)
	obs_logging.bind_user(user.id)
	return user


def require_roles(*allowed: Role, message: str = "Not authorized"):
	"""Dependency admitting only users whose role is in ``allowed``.

	It resolves before the request body is validated, so a caller without the
	role gets 403 whatever they sent.
	"""
	allowed_roles = frozenset(allowed)

	async def _dep(user: User = Depends(get_current_user)) -> User:
		if user.role not in allowed_roles:
			raise Forbidden(message, reason="insufficient_role")
		return user

	return _dep


require_event_creator = require_roles(Role.FACULTY, Role.ORGANIZER, message="Not authorized to create events")
require_club_creator = require_roles(Role.FACULTY, Role.ORGANIZER, message="Not authorized to create clubs")

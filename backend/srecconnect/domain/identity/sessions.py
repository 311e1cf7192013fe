"""Session and verification credentials.

Two credential classes share the signing key and nothing else:

* session credentials (audience ``srec-connect:session``) carry ``sub`` = the
  user id and authenticate HTTP requests and live connections;
* verification credentials (audience ``srec-connect:verify-email``) carry the
  ``email`` being confirmed and are only accepted by the verify-email flow.

Each class also stamps a ``typ`` claim and requires its own subject claim, so
even a token forged with the wrong audience would fail the claim shape check.
"""

from __future__ import annotations

import asyncio
from datetime import timedelta

from jwt import InvalidTokenError

from srecconnect.domain.errors import InvalidCredential, UnknownSubject
from srecconnect.domain.identity.models import User
from srecconnect.domain.store import EntityStore
from srecconnect.infra import jwt as jwt_helper

SESSION_AUDIENCE = "srec-connect:session"
VERIFY_AUDIENCE = "srec-connect:verify-email"
SESSION_TYPE = "session"
VERIFY_TYPE = "email_verify"

DEFAULT_SESSION_TTL = timedelta(days=7)
DEFAULT_VERIFICATION_TTL = timedelta(hours=24)


class CredentialService:
	def __init__(
		self,
		store: EntityStore,
		*,
		secret: str,
		session_ttl: timedelta = DEFAULT_SESSION_TTL,
		verification_ttl: timedelta = DEFAULT_VERIFICATION_TTL,
	) -> None:
		self._store = store
		self._secret = secret
		self._session_ttl = int(session_ttl.total_seconds())
		self._verification_ttl = int(verification_ttl.total_seconds())

	@property
	def session_ttl_seconds(self) -> int:
		return self._session_ttl

	def issue_session(self, user_id: str) -> str:
		return jwt_helper.encode(
			{"sub": user_id, "typ": SESSION_TYPE},
			secret=self._secret,
			audience=SESSION_AUDIENCE,
			ttl_seconds=self._session_ttl,
		)

	def issue_verification(self, email: str) -> str:
		return jwt_helper.encode(
			{"email": email, "typ": VERIFY_TYPE},
			secret=self._secret,
			audience=VERIFY_AUDIENCE,
			ttl_seconds=self._verification_ttl,
		)

	def session_subject(self, token: str) -> str:
		payload = self._decode(token, audience=SESSION_AUDIENCE, typ=SESSION_TYPE, claim="sub")
		if "email" in payload:
			raise InvalidCredential()
		return str(payload["sub"])

	def verification_subject(self, token: str) -> str:
		payload = self._decode(token, audience=VERIFY_AUDIENCE, typ=VERIFY_TYPE, claim="email")
		if "sub" in payload:
			raise InvalidCredential()
		return str(payload["email"])

	async def resolve_session(self, token: str) -> User:
		"""Verify a session credential and load the user it names."""
		user_id = await asyncio.to_thread(self.session_subject, token)
		user = self._store.get_user(user_id)
		if user is None:
			raise UnknownSubject()
		return user

	async def resolve_verification(self, token: str) -> User:
		"""Verify a verification credential and load the user owning the email."""
		email = await asyncio.to_thread(self.verification_subject, token)
		user = self._store.get_user_by_email(email)
		if user is None:
			raise UnknownSubject()
		return user

	def _decode(self, token: str, *, audience: str, typ: str, claim: str) -> dict:
		if not token or not isinstance(token, str):
			raise InvalidCredential()
		try:
			payload = jwt_helper.decode(token, secret=self._secret, audience=audience, required=(claim, "typ"))
		except InvalidTokenError as exc:
			raise InvalidCredential() from exc
		if payload.get("typ") != typ:
			raise InvalidCredential()
		return payload

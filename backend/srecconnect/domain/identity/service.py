"""Service layer for registration, email verification and login."""

from __future__ import annotations

import logging

from argon2 import PasswordHasher

from srecconnect.domain.errors import EmailNotVerified, InvalidLogin, NotFound
from srecconnect.domain.identity import policy
from srecconnect.domain.identity.models import User
from srecconnect.domain.identity.schemas import LoginRequest, ProfileUpdateRequest, RegisterRequest
from srecconnect.domain.identity.sessions import CredentialService
from srecconnect.domain.store import EntityStore
from srecconnect.infra.mailer import Mailer, mask_email
from srecconnect.infra.password import PASSWORD_HASHER, hash_password_async, verify_password_async
from srecconnect.obs import metrics as obs_metrics

logger = logging.getLogger(__name__)


class IdentityService:
	def __init__(
		self,
		store: EntityStore,
		credentials: CredentialService,
		mailer: Mailer,
		*,
		email_domain: str,
		password_min_length: int = 6,
		hasher: PasswordHasher = PASSWORD_HASHER,
	) -> None:
		self._store = store
		self._credentials = credentials
		self._mailer = mailer
		self._email_domain = email_domain
		self._password_min_length = password_min_length
		self._hasher = hasher

	async def register(self, payload: RegisterRequest) -> User:
		"""Create an unverified account and send the verification link.

		The account is not logged in; the caller must verify first.
		"""
		email = policy.ensure_campus_email(payload.email, self._email_domain)
		policy.ensure_password_strength(payload.password, self._password_min_length)
		name = policy.ensure_display_name(payload.name)
		password_hash = await hash_password_async(payload.password, hasher=self._hasher)
		# The store re-checks uniqueness after the hashing suspension point.
		user = self._store.create_user(
			name=name,
			email=email,
			password_hash=password_hash,
			role=payload.role,
		)
		logger.info("user_registered", extra={"user_id": user.id, "role": user.role.value})
		await self._send_verification(user.email)
		return user

	async def resend_verification(self, email: str) -> bool:
		"""Send a fresh link. Returns False if the account is already verified."""
		user = self._store.get_user_by_email(email)
		if user is None:
			raise NotFound("User not found")
		if user.is_verified:
			return False
		await self._send_verification(user.email)
		return True

	async def verify_email(self, token: str) -> bool:
		"""Flip the verification flag. Returns False if it was already set."""
		user = await self._credentials.resolve_verification(token)
		_, changed = self._store.set_verified(user.id)
		if changed:
			logger.info("email_verified", extra={"user_id": user.id})
		return changed

	async def login(self, payload: LoginRequest) -> tuple[User, str]:
		user = self._store.get_user_by_email(payload.email)
		if user is None:
			obs_metrics.inc_identity_reject("invalid_credentials")
			raise InvalidLogin()
		if not await verify_password_async(user.password_hash, payload.password, hasher=self._hasher):
			obs_metrics.inc_identity_reject("invalid_credentials")
			raise InvalidLogin()
		# Only reported once the password has matched.
		if not user.is_verified:
			obs_metrics.inc_identity_reject("email_not_verified")
			raise EmailNotVerified()
		token = self._credentials.issue_session(user.id)
		logger.info("user_login", extra={"user_id": user.id})
		return user, token

	def update_profile(self, user_id: str, payload: ProfileUpdateRequest) -> User:
		changes = payload.model_dump(exclude_unset=True)
		if "name" in changes and changes["name"] is not None:
			changes["name"] = policy.ensure_display_name(changes["name"])
		elif "name" in changes:
			del changes["name"]
		return self._store.update_user(user_id, changes)

	async def _send_verification(self, email: str) -> None:
		token = self._credentials.issue_verification(email)
		try:
			await self._mailer.send_verification(email, token)
		except Exception:
			# Registration stands; the user can ask for another link.
			logger.exception("verification_email_failed", extra={"recipient_hash": mask_email(email)})

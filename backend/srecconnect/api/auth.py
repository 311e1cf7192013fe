"""Authentication and profile endpoints."""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends

from srecconnect.domain.container import Container
from srecconnect.domain.errors import AuthError, ValidationError
from srecconnect.domain.identity import schemas
from srecconnect.domain.identity.models import User
from srecconnect.infra.auth import get_container, get_current_user

router = APIRouter(prefix="/auth", tags=["identity"])


@router.post("/register", response_model=schemas.MessageResponse)
async def register(
	payload: schemas.RegisterRequest,
	container: Container = Depends(get_container),
) -> schemas.MessageResponse:
	await container.identity.register(payload)
	domain = container.settings.allowed_email_domain
	return schemas.MessageResponse(
		message=f"Registration successful. Check your @{domain} inbox to verify your email."
	)


@router.get("/verify", response_model=schemas.MessageResponse)
async def verify_email(
	token: Optional[str] = None,
	container: Container = Depends(get_container),
) -> schemas.MessageResponse:
	if not token:
		raise ValidationError("Missing token", reason="token_missing")
	try:
		changed = await container.identity.verify_email(token)
	except AuthError as exc:
		raise ValidationError("Invalid or expired token", reason="invalid_token") from exc
	if not changed:
		return schemas.MessageResponse(message="Account already verified")
	return schemas.MessageResponse(message="Email verified successfully. You can now log in.")


@router.post("/resend-verification", response_model=schemas.MessageResponse)
async def resend_verification(
	payload: schemas.ResendRequest,
	container: Container = Depends(get_container),
) -> schemas.MessageResponse:
	sent = await container.identity.resend_verification(payload.email)
	if not sent:
		return schemas.MessageResponse(message="Account already verified")
	return schemas.MessageResponse(message="Verification email sent")


@router.post("/login", response_model=schemas.AuthResponse)
async def login(
	payload: schemas.LoginRequest,
	container: Container = Depends(get_container),
) -> schemas.AuthResponse:
	user, token = await container.identity.login(payload)
	return schemas.AuthResponse(
		user=schemas.UserOut.model_validate(user),
		token=token,
		expires_in=container.credentials.session_ttl_seconds,
	)


@router.get("/me", response_model=schemas.UserOut)
async def me(user: User = Depends(get_current_user)) -> schemas.UserOut:
	return schemas.UserOut.model_validate(user)


@router.patch("/profile", response_model=schemas.UserOut)
async def update_profile(
	payload: schemas.ProfileUpdateRequest,
	user: User = Depends(get_current_user),
	container: Container = Depends(get_container),
) -> schemas.UserOut:
	updated = container.identity.update_profile(user.id, payload)
	return schemas.UserOut.model_validate(updated)

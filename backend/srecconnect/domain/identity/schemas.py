"""Pydantic schemas for identity and profile flows."""

from __future__ import annotations

from datetime import datetime
from typing import Annotated, List, Optional

from pydantic import ConfigDict, EmailStr, Field

from srecconnect.domain.base import CamelModel
from srecconnect.domain.identity.models import Role


class RegisterRequest(CamelModel):
	name: Annotated[str, Field(min_length=1, max_length=80)]
	email: EmailStr
	password: str
	role: Role = Role.STUDENT


class LoginRequest(CamelModel):
	email: EmailStr
	password: Annotated[str, Field(min_length=1)]


class ResendRequest(CamelModel):
	email: EmailStr


class ProfileUpdateRequest(CamelModel):
	"""The only profile fields a user may change about themselves."""

	model_config = ConfigDict(extra="forbid")

	name: Optional[Annotated[str, Field(min_length=1, max_length=80)]] = None
	avatar: Optional[Annotated[str, Field(max_length=2048)]] = None


class UserOut(CamelModel):
	id: str
	name: str
	email: str
	role: Role
	clubs: List[str]
	avatar: Optional[str] = None
	is_verified: bool
	created_at: datetime


class AuthResponse(CamelModel):
	user: UserOut
	token: str
	token_type: str = "bearer"
	expires_in: int


class MessageResponse(CamelModel):
	message: str

"""Domain-level exceptions shared by every service.

Each error carries a machine ``reason`` and the HTTP status the API boundary
maps it to. Human-readable text lives in ``message`` and is safe to show to
clients; anything else stays in the server logs.
"""

from __future__ import annotations

from typing import Optional


class DomainError(Exception):
	"""Base class for errors surfaced through the API."""

	reason: str = "error"
	status_code: int = 400
	default_message: str = "Request failed"

	def __init__(self, message: Optional[str] = None, *, reason: Optional[str] = None) -> None:
		self.message = message or self.default_message
		if reason:
			self.reason = reason
		super().__init__(self.message)


class ValidationError(DomainError):
	reason = "validation_error"
	status_code = 400
	default_message = "Invalid input"


class AuthError(DomainError):
	reason = "unauthorized"
	status_code = 401
	default_message = "Access token required"


class InvalidCredential(AuthError):
	reason = "invalid_token"
	status_code = 403
	default_message = "Invalid or expired token"


class UnknownSubject(AuthError):
	reason = "unknown_subject"
	default_message = "Invalid token"


class InvalidLogin(AuthError):
	reason = "invalid_credentials"
	default_message = "Invalid credentials"


class Forbidden(AuthError):
	reason = "forbidden"
	status_code = 403
	default_message = "Not authorized"


class EmailNotVerified(Forbidden):
	reason = "email_not_verified"
	default_message = "Please verify your email before logging in."


class NotFound(DomainError):
	reason = "not_found"
	status_code = 404
	default_message = "Not found"


class Conflict(DomainError):
	reason = "conflict"
	status_code = 400
	default_message = "Already exists"


class DuplicateEmail(Conflict):
	reason = "email_taken"
	default_message = "User already exists"


class PersistenceFailed(DomainError):
	reason = "persistence_failed"
	status_code = 500
	default_message = "Internal server error"

"""Validation rules for registration and profile input."""

from __future__ import annotations

from srecconnect.domain.errors import ValidationError

NAME_MAX_LEN = 80


def ensure_campus_email(email: str, domain: str) -> str:
	"""Return the normalised email if it belongs to the institution's domain."""
	normalised = email.strip().lower()
	suffix = "@" + domain.lower().lstrip("@")
	if not normalised.endswith(suffix) or normalised == suffix:
		raise ValidationError(f"Only {suffix} emails are allowed", reason="email_domain_not_allowed")
	return normalised


def ensure_password_strength(password: str, min_length: int) -> None:
	if len(password) < min_length:
		raise ValidationError(
			f"Password must be at least {min_length} characters",
			reason="password_too_weak",
		)


def ensure_display_name(name: str) -> str:
	cleaned = name.strip()
	if not cleaned:
		raise ValidationError("Name is required", reason="name_required")
	if len(cleaned) > NAME_MAX_LEN:
		raise ValidationError(f"Name must be at most {NAME_MAX_LEN} characters", reason="name_too_long")
	return cleaned

"""Settings for the SREC Connect backend."""

from __future__ import annotations

import json
from typing import Any, Optional, Tuple

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def _env_field(default, *env_names: str):
	if env_names:
		alias = AliasChoices(*env_names) if len(env_names) > 1 else env_names[0]
		return Field(default=default, validation_alias=alias)
	return Field(default=default)


class Settings(BaseSettings):
	secret_key: str = _env_field("dev-secret-change-me", "SECRET_KEY", "JWT_SECRET")
	environment: str = _env_field("production", "ENV", "APP_ENV", "ENVIRONMENT")
	service_name: str = _env_field("srec-connect-api", "SERVICE_NAME")
	git_commit: str = _env_field("unknown", "GIT_COMMIT", "COMMIT_SHA")

	# Registration policy
	allowed_email_domain: str = _env_field("srec.ac.in", "ALLOWED_EMAIL_DOMAIN")
	password_min_length: int = _env_field(6, "PASSWORD_MIN_LENGTH")

	# Credential lifetimes
	session_ttl_days: int = _env_field(7, "SESSION_TTL_DAYS")
	verification_ttl_hours: int = _env_field(24, "VERIFICATION_TTL_HOURS")

	public_app_url: str = _env_field("http://localhost:5000", "APP_URL", "PUBLIC_APP_URL")

	# Email Settings
	smtp_host: str = _env_field("localhost", "EMAIL_HOST", "SMTP_HOST")
	smtp_port: int = _env_field(587, "EMAIL_PORT", "SMTP_PORT")
	smtp_user: Optional[str] = _env_field(None, "EMAIL_USER", "SMTP_USER")
	smtp_password: Optional[str] = _env_field(None, "EMAIL_PASS", "SMTP_PASSWORD")
	smtp_from_email: str = _env_field("noreply@srec.ac.in", "EMAIL_FROM", "SMTP_FROM_EMAIL")
	smtp_tls: bool = _env_field(False, "SMTP_TLS")

	cors_allow_origins: Any = _env_field((), "CORS_ALLOW_ORIGINS")

	obs_enabled: bool = _env_field(True, "OBS_ENABLED")
	obs_log_level: str = _env_field("INFO", "LOG_LEVEL")
	obs_log_sampling_rate_info: float = _env_field(1.0, "LOG_SAMPLING_RATE_INFO")

	seed_default_clubs: bool = _env_field(True, "SEED_DEFAULT_CLUBS")
	notification_history_limit: int = _env_field(50, "NOTIFICATION_HISTORY_LIMIT")

	# Live connections
	socket_ping_interval_seconds: float = _env_field(25.0, "SOCKET_PING_INTERVAL")
	socket_ping_timeout_seconds: float = _env_field(20.0, "SOCKET_PING_TIMEOUT")

	model_config = SettingsConfigDict(
		env_prefix="",
		env_file=".env",
		case_sensitive=False,
		populate_by_name=True,
		extra="ignore",
	)

	# Environment helpers
	def is_dev(self) -> bool:
		return self.environment.lower() in ("dev", "development")

	@field_validator("cors_allow_origins", mode="before")
	@classmethod
	def _split_origins(cls, value: Any) -> Tuple[str, ...]:
		"""Accept a comma-separated string, a JSON list, or a sequence."""
		if value in (None, ""):
			return ()
		if isinstance(value, (list, tuple, set)):
			return tuple(str(item).strip() for item in value if str(item).strip())
		text = str(value).strip()
		if text.startswith("["):
			try:
				data = json.loads(text)
			except ValueError:
				data = None
			if isinstance(data, list):
				return tuple(str(item).strip() for item in data if str(item).strip())
		return tuple(part.strip() for part in text.split(",") if part.strip())


settings = Settings()

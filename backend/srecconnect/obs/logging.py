"""JSON log lines carrying the request, route and user they belong to.

Context is kept in a single ContextVar holding an immutable mapping, so a
request task and the tasks it spawns see the same fields without sharing
mutable state. Extra fields whose name looks like a credential or an email
address are replaced before the line is written.
"""

from __future__ import annotations

import json
import logging
import random
from contextvars import ContextVar, Token
from datetime import datetime, timezone
from types import MappingProxyType
from typing import Any, Mapping, Optional

from srecconnect.settings import Settings

_CONTEXT: ContextVar[Mapping[str, str]] = ContextVar("srec_log_context", default=MappingProxyType({}))

ROOT_LOGGER = "srecconnect"

_REDACT_MARKERS = ("token", "secret", "authorization", "password", "email")
_REDACTED = "[redacted]"
_MAX_TEXT = 256

# LogRecord attributes that are never copied into the payload.
_RECORD_FIELDS = frozenset(vars(logging.LogRecord("", 0, "", 0, "", (), None))) | {"message", "taskName"}


def bind_context(**fields: Optional[str]) -> Token:
	"""Add request-scoped fields; hand the token back to :func:`reset_context`."""
	merged = dict(_CONTEXT.get())
	merged.update({key: value for key, value in fields.items() if value is not None})
	return _CONTEXT.set(MappingProxyType(merged))


def bind_user(user_id: str) -> None:
	bind_context(user_id=user_id)


def reset_context(token: Token) -> None:
	_CONTEXT.reset(token)


def current_request_id() -> Optional[str]:
	return _CONTEXT.get().get("request_id")


def _scrub(key: str, value: Any) -> Any:
	if any(marker in key.lower() for marker in _REDACT_MARKERS):
		return _REDACTED
	if isinstance(value, str) and len(value) > _MAX_TEXT:
		return value[:_MAX_TEXT] + "..."
	if isinstance(value, Mapping):
		return {str(k): _scrub(str(k), v) for k, v in value.items()}
	return value


class JSONLogFormatter(logging.Formatter):
	def __init__(self, *, service: str, environment: str, commit: str) -> None:
		super().__init__()
		self._static = {"service": service, "env": environment, "commit": commit}

	def format(self, record: logging.LogRecord) -> str:  # noqa: A003
		payload: dict[str, Any] = {
			"ts": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
			"level": record.levelname.lower(),
			"logger": record.name,
			"msg": record.getMessage(),
			**self._static,
			**_CONTEXT.get(),
		}
		if record.exc_info:
			payload["exc_info"] = self.formatException(record.exc_info)
		for key, value in vars(record).items():
			if key not in _RECORD_FIELDS and key not in payload:
				payload[key] = _scrub(key, value)
		return json.dumps(payload, separators=(",", ":"), default=str)


class InfoSamplingFilter(logging.Filter):
	"""Keep a fraction of INFO lines; every other level always passes."""

	def __init__(self, rate: float) -> None:
		super().__init__()
		self.rate = max(0.0, min(1.0, rate))

	def filter(self, record: logging.LogRecord) -> bool:  # noqa: A003
		if record.levelno != logging.INFO or self.rate >= 1.0:
			return True
		return random.random() < self.rate


def configure_logging(settings: Settings) -> logging.Logger:
	handler = logging.StreamHandler()
	handler.setFormatter(
		JSONLogFormatter(
			service=settings.service_name,
			environment=settings.environment,
			commit=settings.git_commit,
		)
	)
	handler.addFilter(InfoSamplingFilter(settings.obs_log_sampling_rate_info))
	root = logging.getLogger()
	root.handlers.clear()
	root.addHandler(handler)
	root.setLevel(settings.obs_log_level)
	return logging.getLogger(ROOT_LOGGER)


def get_logger(name: Optional[str] = None) -> logging.Logger:
	return logging.getLogger(name or ROOT_LOGGER)

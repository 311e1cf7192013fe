"""Outbound email for account verification."""

from __future__ import annotations

import hashlib
import logging
from email.message import EmailMessage
from typing import Protocol
from urllib.parse import quote

import aiosmtplib

from srecconnect.settings import Settings

logger = logging.getLogger(__name__)


def mask_email(email: str) -> str:
	return hashlib.sha256(email.lower().encode("utf-8")).hexdigest()[:12]


class Mailer(Protocol):
	async def send_verification(self, email: str, token: str) -> None: ...


def verification_link(base_url: str, token: str) -> str:
	return f"{base_url.rstrip('/')}/api/auth/verify?token={quote(token, safe='')}"


def _verification_body(link: str) -> tuple[str, str]:
	text = (
		"Welcome to SREC Connect!\n\n"
		f"Please verify your email by clicking the link below:\n{link}\n\n"
		"This link expires in 24 hours."
	)
	html = f"""
	<html>
		<body>
			<p>Welcome to <strong>SREC Connect</strong>!</p>
			<p>Please verify your email by clicking the link below:</p>
			<p><a href="{link}">Verify Email</a></p>
			<p>Or open this link:<br>{link}</p>
			<p>This link expires in 24 hours.</p>
		</body>
	</html>
	"""
	return text, html


class SMTPMailer:
	"""Send mail through the configured SMTP relay."""

	def __init__(self, settings: Settings) -> None:
		self._settings = settings

	async def send_verification(self, email: str, token: str) -> None:
		link = verification_link(self._settings.public_app_url, token)
		text, html = _verification_body(link)
		msg = EmailMessage()
		msg["From"] = self._settings.smtp_from_email
		msg["To"] = email
		msg["Subject"] = "Verify your SREC Connect account"
		msg.set_content(text)
		msg.add_alternative(html, subtype="html")
		await self._send(msg)
		logger.info("verification_email_sent", extra={"recipient_hash": mask_email(email)})

	async def _send(self, msg: EmailMessage) -> None:
		s = self._settings
		# Port 587 upgrades with STARTTLS, port 465 is implicit TLS.
		start_tls = bool(s.smtp_tls) and int(s.smtp_port) == 587
		use_tls = bool(s.smtp_tls) and int(s.smtp_port) == 465
		await aiosmtplib.send(
			msg,
			hostname=s.smtp_host,
			port=s.smtp_port,
			username=s.smtp_user,
			password=s.smtp_password,
			start_tls=start_tls,
			use_tls=use_tls,
		)


class LoggingMailer:
	"""Dev mailer: logs the verification link instead of sending it.

	The full link, token included, is deliberately written to the log. Only
	built for dev environments pointing at a localhost relay.
	"""

	def __init__(self, settings: Settings) -> None:
		self._settings = settings

	async def send_verification(self, email: str, token: str) -> None:
		link = verification_link(self._settings.public_app_url, token)
		logger.info("verification_link", extra={"recipient_hash": mask_email(email), "link": link})


def build_mailer(settings: Settings) -> Mailer:
	if settings.is_dev() and settings.smtp_host == "localhost":
		return LoggingMailer(settings)
	return SMTPMailer(settings)

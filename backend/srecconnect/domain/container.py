"""Explicitly wired services shared by the HTTP and socket layers.

One container is built per application instance; tests build a fresh one per
test so no state leaks between them.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta
from typing import Optional

from argon2 import PasswordHasher

from srecconnect.domain.clubs.service import ClubService
from srecconnect.domain.events.service import EventService
from srecconnect.domain.identity.service import IdentityService
from srecconnect.domain.identity.sessions import CredentialService
from srecconnect.domain.notifications.dispatcher import NotificationDispatcher
from srecconnect.domain.notifications.registry import LiveConnectionRegistry
from srecconnect.domain.notifications.service import NotificationService
from srecconnect.domain.store import DEFAULT_CLUBS, EntityStore
from srecconnect.infra.mailer import Mailer, build_mailer
from srecconnect.infra.password import PASSWORD_HASHER
from srecconnect.settings import Settings


@dataclass
class Container:
	settings: Settings
	store: EntityStore
	registry: LiveConnectionRegistry
	credentials: CredentialService
	mailer: Mailer
	dispatcher: NotificationDispatcher
	identity: IdentityService
	events: EventService
	clubs: ClubService
	notifications: NotificationService


def build_container(
	settings: Settings,
	*,
	store: Optional[EntityStore] = None,
	mailer: Optional[Mailer] = None,
	hasher: Optional[PasswordHasher] = None,
) -> Container:
	if store is None:
		store = EntityStore(seed_clubs=DEFAULT_CLUBS if settings.seed_default_clubs else ())
	registry = LiveConnectionRegistry()
	credentials = CredentialService(
		store,
		secret=settings.secret_key,
		session_ttl=timedelta(days=settings.session_ttl_days),
		verification_ttl=timedelta(hours=settings.verification_ttl_hours),
	)
	mailer = mailer or build_mailer(settings)
	dispatcher = NotificationDispatcher(store, registry)
	return Container(
		settings=settings,
		store=store,
		registry=registry,
		credentials=credentials,
		mailer=mailer,
		dispatcher=dispatcher,
		identity=IdentityService(
			store,
			credentials,
			mailer,
			email_domain=settings.allowed_email_domain,
			password_min_length=settings.password_min_length,
			hasher=hasher or PASSWORD_HASHER,
		),
		events=EventService(store, dispatcher),
		clubs=ClubService(store, dispatcher),
		notifications=NotificationService(store, history_limit=settings.notification_history_limit),
	)

"""FastAPI application entrypoint.

``socket_app`` is the ASGI callable to serve: it routes Socket.IO traffic to
the live notification namespace and everything else to the FastAPI app.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Optional

import socketio
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from srecconnect import obs
from srecconnect.api import auth, clubs, events, health, notifications
from srecconnect.api.errors import install_error_handlers
from srecconnect.api.middleware_request_id import RequestIdMiddleware
from srecconnect.domain.container import Container, build_container
from srecconnect.domain.notifications.sockets import NotificationsNamespace
from srecconnect.settings import Settings, settings as default_settings

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
	container: Container = app.state.container
	logger.info("startup", extra={"clubs": container.store.stats()["clubs"]})
	yield
	logger.info("shutdown")


def _allowed_origins(settings: Settings) -> list[str]:
	origins = list(settings.cors_allow_origins)
	if not origins:
		origins = ["http://localhost:5000", "http://localhost:5173"] if settings.is_dev() else []
	return origins


def create_app(container: Optional[Container] = None) -> FastAPI:
	container = container or build_container(default_settings)
	settings = container.settings

	app = FastAPI(title="SREC Connect", lifespan=lifespan)
	app.state.container = container
	install_error_handlers(app)

	allow_origins = _allowed_origins(settings)
	app.add_middleware(
		CORSMiddleware,
		allow_origins=allow_origins,
		allow_credentials=True,
		allow_methods=["*"],
		allow_headers=["*"],
	)
	obs.init(app, settings)
	# Added last so it runs first and the id is bound before anything logs.
	app.add_middleware(RequestIdMiddleware)

	app.include_router(auth.router, prefix="/api")
	app.include_router(events.router, prefix="/api")
	app.include_router(clubs.router, prefix="/api")
	app.include_router(notifications.router, prefix="/api")
	app.include_router(health.router)

	sio = socketio.AsyncServer(
		async_mode="asgi",
		cors_allowed_origins=allow_origins,
		ping_interval=settings.socket_ping_interval_seconds,
		ping_timeout=settings.socket_ping_timeout_seconds,
	)
	sio.register_namespace(NotificationsNamespace(container.registry, container.credentials))
	app.state.sio = sio
	return app


def create_asgi_app(app: FastAPI) -> socketio.ASGIApp:
	return socketio.ASGIApp(app.state.sio, other_asgi_app=app)


app = create_app()
socket_app = create_asgi_app(app)

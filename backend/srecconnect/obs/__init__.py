"""Logging and metrics wiring for the HTTP app."""

from __future__ import annotations

from fastapi import FastAPI

from srecconnect.obs import logging as obs_logging
from srecconnect.obs import middleware
from srecconnect.settings import Settings


def init(app: FastAPI, settings: Settings) -> None:
	"""Configure JSON logging and install request instrumentation, once per app."""
	if not settings.obs_enabled or getattr(app.state, "obs_initialised", False):
		return
	obs_logging.configure_logging(settings)
	middleware.install(app)
	app.state.obs_initialised = True


__all__ = ["init"]

"""Assigns every request an id, echoed back as ``X-Request-Id``."""

from __future__ import annotations

import uuid

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response

from srecconnect.api.request_id import HEADER, REQUEST_ID_ATTR
from srecconnect.obs import logging as obs_logging


class RequestIdMiddleware(BaseHTTPMiddleware):
	async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
		rid = request.headers.get(HEADER) or uuid.uuid4().hex
		setattr(request.state, REQUEST_ID_ATTR, rid)
		token = obs_logging.bind_context(request_id=rid)
		try:
			response = await call_next(request)
		finally:
			obs_logging.reset_context(token)
		response.headers.setdefault(HEADER, rid)
		return response
